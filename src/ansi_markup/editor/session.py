"""
Editing session: owns the document and runs user actions against it.

Each action runs to completion before the next one. The only asynchronous
step is the clipboard write at the end of an export.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..converters.ansi import BACKGROUND_SWATCHES, FOREGROUND_SWATCHES, DocumentToANSIConverter, resolve_color
from ..core.selection import Range, apply_style_to_range
from ..core.style_tree import PLACEHOLDER_TEXT, Document, StyleKind, reset
from .clipboard import ClipboardError, ClipboardWriter


@dataclass
class SessionConfig:
    """Configuration for editing sessions."""

    placeholder_text: str = PLACEHOLDER_TEXT
    fence_language: str = "ansi"


@dataclass
class SessionState:
    """Current state of the editing session."""

    document: Document = field(default_factory=reset)
    styles_applied: int = 0
    exports: int = 0
    last_export: Optional[str] = None


@dataclass
class ExportResult:
    """Outcome of an export, reported back to the user."""

    success: bool
    message: str
    text: str = ""
    issues: List[str] = field(default_factory=list)


class EditingSession:
    """
    Holds the single document of an editing session.

    Style actions replace ``state.document`` with a new value; the
    serializer only ever reads it.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        document: Optional[Document] = None,
    ):
        self.config = config or SessionConfig()
        self.converter = DocumentToANSIConverter(self.config.fence_language)
        self.state = SessionState(
            document=document if document is not None else reset(self.config.placeholder_text)
        )
        self.logger = logging.getLogger(__name__)

    @property
    def document(self) -> Document:
        return self.state.document

    @property
    def is_placeholder(self) -> bool:
        return self.state.document.is_placeholder(self.config.placeholder_text)

    def set_text(self, text: str) -> Document:
        """Replace the document with unstyled text."""
        self.state.document = Document.from_text(text)
        return self.state.document

    def apply_style(self, selection: Optional[Range], kind: StyleKind, value: str = "") -> Document:
        """
        Apply a style to the selected range.

        Without a selection, or with a collapsed one, nothing happens.
        Color values may be swatch names.
        """
        if selection is None:
            self.logger.debug("No selection; ignoring %s", kind)
            return self.state.document

        kind = StyleKind(kind)
        if kind is StyleKind.FOREGROUND:
            value = resolve_color(value, FOREGROUND_SWATCHES)
        elif kind is StyleKind.BACKGROUND:
            value = resolve_color(value, BACKGROUND_SWATCHES)

        updated = apply_style_to_range(self.state.document, selection, kind, value)
        if updated is not self.state.document:
            self.state.document = updated
            self.state.styles_applied += 1
        return self.state.document

    def reset(self) -> Document:
        """Discard all styling and restore the placeholder document."""
        self.state.document = reset(self.config.placeholder_text)
        self.logger.info("Document reset to placeholder")
        return self.state.document

    def render(self, fenced: bool = True) -> str:
        """Serialize the current document."""
        if fenced:
            return self.converter.convert(self.state.document)
        return self.converter.serialize(self.state.document)

    async def export(self, clipboard: ClipboardWriter) -> ExportResult:
        """
        Serialize the document and hand it to the clipboard.

        Failures are reported in the result, never raised, and the document
        is left as it was either way.
        """
        text = self.render(fenced=True)
        issues = self.converter.validate_output(self.state.document)["issues"]

        try:
            await clipboard.write(text)
        except ClipboardError as e:
            self.logger.error("Failed to copy: %s", e, exc_info=True)
            return ExportResult(success=False, message=f"Copy failed: {e}", text=text, issues=issues)

        self.state.exports += 1
        self.state.last_export = text
        self.logger.info("Exported %d characters to %s", len(text), clipboard.name)
        return ExportResult(success=True, message="Copied ANSI text to clipboard!", text=text, issues=issues)

    def get_stats(self) -> Dict[str, Any]:
        """Get session and document statistics."""
        stats = self.state.document.get_stats()
        stats.update({
            "is_placeholder": self.is_placeholder,
            "styles_applied": self.state.styles_applied,
            "exports": self.state.exports,
        })
        return stats
