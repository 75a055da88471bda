"""
Converter from the style tree to ANSI SGR escape sequences.

Every styled node becomes its own ``ESC[<codes>m ... ESC[0m`` pair, so
nested styles produce nested, independently closed pairs. The result is
fenced in an ``ansi`` code block, which chat clients such as Discord render
with colors.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

from ..core.style_tree import Document, Leaf, LineBreak, StyleKind, StyleNode, Styled


ESC = "\x1b"
RESET_SEQUENCE = f"{ESC}[0m"

BOLD_CODE = 1
UNDERLINE_CODE = 4
DEFAULT_FOREGROUND_CODE = 37
DEFAULT_BACKGROUND_CODE = 43


@dataclass(frozen=True)
class Swatch:
    """A named palette entry."""

    name: str
    hex: str
    code: int


FOREGROUND_SWATCHES: Tuple[Swatch, ...] = (
    Swatch("gray", "#4f545c", 30),
    Swatch("red", "#dc322f", 31),
    Swatch("green", "#859900", 32),
    Swatch("yellow", "#b58900", 33),
    Swatch("blue", "#268bd2", 34),
    Swatch("pink", "#d33682", 35),
    Swatch("cyan", "#2aa198", 36),
    Swatch("white", "#ffffff", 37),
)

BACKGROUND_SWATCHES: Tuple[Swatch, ...] = (
    Swatch("firefly-dark-blue", "#002b36", 40),
    Swatch("orange", "#cb4b16", 41),
    Swatch("marble-blue", "#586e75", 42),
    Swatch("greyish-turquoise", "#657b83", 43),
    Swatch("gray", "#839496", 44),
    Swatch("indigo", "#6c71c4", 45),
    Swatch("light-gray", "#93a1a1", 46),
    Swatch("white", "#fdf6e3", 47),
)

FOREGROUND_CODES: Mapping[str, int] = MappingProxyType(
    {swatch.hex: swatch.code for swatch in FOREGROUND_SWATCHES}
)
BACKGROUND_CODES: Mapping[str, int] = MappingProxyType(
    {swatch.hex: swatch.code for swatch in BACKGROUND_SWATCHES}
)


def resolve_color(name_or_hex: str, swatches: Sequence[Swatch]) -> str:
    """Map a swatch name to its hex value; anything else passes through."""
    key = name_or_hex.strip().lower()
    for swatch in swatches:
        if key == swatch.name:
            return swatch.hex
    return name_or_hex.strip()


def resolve_codes(kind: StyleKind, value: str = "") -> Tuple[int, ...]:
    """Resolve a ``(kind, value)`` pair to its SGR codes."""
    kind = StyleKind(kind)
    if kind is StyleKind.BOLD:
        return (BOLD_CODE,)
    if kind is StyleKind.UNDERLINE:
        return (UNDERLINE_CODE,)
    if kind is StyleKind.FOREGROUND:
        return (FOREGROUND_CODES.get((value or "").lower(), DEFAULT_FOREGROUND_CODE),)
    return (BACKGROUND_CODES.get((value or "").lower(), DEFAULT_BACKGROUND_CODE),)


def is_mapped(kind: StyleKind, value: str) -> bool:
    """Whether a color value has its own entry in the code tables."""
    kind = StyleKind(kind)
    if kind is StyleKind.FOREGROUND:
        return (value or "").lower() in FOREGROUND_CODES
    if kind is StyleKind.BACKGROUND:
        return (value or "").lower() in BACKGROUND_CODES
    return True


def serialize(node: StyleNode) -> str:
    """Serialize one node, and everything below it, to ANSI text."""
    if isinstance(node, Leaf):
        return node.text
    if isinstance(node, LineBreak):
        return "\n"

    inner = "".join(serialize(child) for child in node.children)
    codes = ";".join(str(code) for code in resolve_codes(node.kind, node.value))
    return f"{ESC}[{codes}m{inner}{RESET_SEQUENCE}"


def serialize_document(document: Union[Document, Sequence[StyleNode]]) -> str:
    """Serialize a whole document by concatenating its top-level nodes."""
    nodes = document.nodes if isinstance(document, Document) else document
    return "".join(serialize(node) for node in nodes)


def to_fenced_block(text: str, language: str = "ansi") -> str:
    """Wrap serialized text in a fenced code block."""
    return f"```{language}\n{text}\n```"


class DocumentToANSIConverter:
    """
    Converts a style tree document into a fenced ANSI block.

    The conversion itself never fails; ``validate_output`` reports colors
    that silently fell back to a default code.
    """

    def __init__(self, fence_language: str = "ansi"):
        self.fence_language = fence_language

    def serialize(self, document: Document) -> str:
        """Unfenced ANSI text for the document."""
        return serialize_document(document)

    def convert(self, document: Document) -> str:
        """Fenced ANSI block, ready to paste into a chat message."""
        return to_fenced_block(self.serialize(document), self.fence_language)

    def validate_output(self, document: Document) -> Dict[str, Any]:
        """Describe the escape sequences the conversion produces."""
        unmapped: List[Dict[str, str]] = []
        codes: Counter = Counter()

        def visit(nodes: Sequence[StyleNode]) -> None:
            for node in nodes:
                if not isinstance(node, Styled):
                    continue
                codes.update(resolve_codes(node.kind, node.value))
                if not is_mapped(node.kind, node.value):
                    unmapped.append({"kind": node.kind.value, "value": node.value})
                visit(node.children)

        visit(document.nodes)

        return {
            "escape_pairs": sum(codes.values()),
            "codes_used": dict(sorted(codes.items())),
            "unmapped_colors": unmapped,
            "issues": [
                f"{entry['kind']} color {entry['value'] or '(empty)'} is not in the "
                f"palette and falls back to code {resolve_codes(StyleKind(entry['kind']), entry['value'])[0]}"
                for entry in unmapped
            ],
        }
