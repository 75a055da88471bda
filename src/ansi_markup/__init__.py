"""
ansi-markup: style text with nested ANSI escape sequences for chat messages.
"""

from .core import Document, Leaf, LineBreak, Range, StyleKind, Styled, apply_style, apply_style_to_range, reset
from .converters import DocumentToANSIConverter, serialize, serialize_document, to_fenced_block

__version__ = "0.1.0"

__all__ = [
    "Document",
    "Leaf",
    "LineBreak",
    "Range",
    "StyleKind",
    "Styled",
    "apply_style",
    "apply_style_to_range",
    "reset",
    "DocumentToANSIConverter",
    "serialize",
    "serialize_document",
    "to_fenced_block",
]
