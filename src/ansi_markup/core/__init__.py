"""
Core style tree representation and range handling.
"""

from .style_tree import (
    PLACEHOLDER_TEXT,
    Document,
    Leaf,
    LineBreak,
    StyleKind,
    StyleNode,
    Styled,
    apply_style,
    flatten,
    reset,
    wrap,
)
from .selection import Range, SelectionError, apply_style_to_range, extract_range, splice_range

__all__ = [
    "PLACEHOLDER_TEXT",
    "Document",
    "Leaf",
    "LineBreak",
    "StyleKind",
    "StyleNode",
    "Styled",
    "apply_style",
    "flatten",
    "reset",
    "wrap",
    "Range",
    "SelectionError",
    "apply_style_to_range",
    "extract_range",
    "splice_range",
]
