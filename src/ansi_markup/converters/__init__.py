"""
Document format conversion modules.
"""

from .ansi import (
    BACKGROUND_CODES,
    BACKGROUND_SWATCHES,
    FOREGROUND_CODES,
    FOREGROUND_SWATCHES,
    DocumentToANSIConverter,
    Swatch,
    resolve_codes,
    resolve_color,
    serialize,
    serialize_document,
    to_fenced_block,
)

__all__ = [
    "BACKGROUND_CODES",
    "BACKGROUND_SWATCHES",
    "FOREGROUND_CODES",
    "FOREGROUND_SWATCHES",
    "DocumentToANSIConverter",
    "Swatch",
    "resolve_codes",
    "resolve_color",
    "serialize",
    "serialize_document",
    "to_fenced_block",
]
