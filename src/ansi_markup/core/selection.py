"""
Range extraction for the style tree.

Turns a selection, expressed as character offsets over the document's plain
text, into the sub-tree it covers, and splices a replacement back in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .style_tree import (
    Document,
    Leaf,
    LineBreak,
    StyleKind,
    StyleNode,
    Styled,
    apply_style,
    node_length,
)


logger = logging.getLogger(__name__)


class SelectionError(ValueError):
    """Raised when a range does not fit inside the document."""


@dataclass(frozen=True)
class Range:
    """Half-open range of character offsets; a line break counts as one."""

    start: int
    end: int

    def __str__(self) -> str:
        return f"{self.start}:{self.end}"

    @property
    def is_collapsed(self) -> bool:
        return self.start == self.end

    def __len__(self) -> int:
        return max(self.end - self.start, 0)

    def validate(self, length: int) -> None:
        if self.start < 0 or self.end > length or self.start > self.end:
            raise SelectionError(
                f"Range {self} is outside the document (length {length})"
            )


def split_nodes(
    nodes: Sequence[StyleNode], offset: int
) -> Tuple[Tuple[StyleNode, ...], Tuple[StyleNode, ...]]:
    """
    Split a node sequence at a character offset.

    Leaves are cut in two. A styled node straddling the offset is split into
    two copies carrying the same style, so both halves keep their styling.
    """
    left: List[StyleNode] = []
    right: List[StyleNode] = []
    position = 0

    for node in nodes:
        length = node_length(node)
        if position + length <= offset:
            left.append(node)
        elif position >= offset:
            right.append(node)
        else:
            cut = offset - position
            if isinstance(node, Leaf):
                left.append(Leaf(text=node.text[:cut]))
                right.append(Leaf(text=node.text[cut:]))
            elif isinstance(node, Styled):
                inner_left, inner_right = split_nodes(node.children, cut)
                left.append(node.with_children(inner_left))
                right.append(node.with_children(inner_right))
            else:
                # zero-width cut through a line break cannot happen
                right.append(node)
        position += length

    return tuple(left), tuple(right)


def extract_range(
    document: Document, selection: Range
) -> Tuple[Tuple[StyleNode, ...], Tuple[StyleNode, ...], Tuple[StyleNode, ...]]:
    """Return ``(before, selected, after)`` node sequences for a range."""
    selection.validate(document.length())
    before, rest = split_nodes(document.nodes, selection.start)
    selected, after = split_nodes(rest, selection.end - selection.start)
    return before, selected, after


def splice_range(
    before: Sequence[StyleNode],
    replacement: Sequence[StyleNode],
    after: Sequence[StyleNode],
) -> Document:
    """Rebuild a document around a replacement for the selected nodes."""
    nodes = [
        node for node in (*before, *replacement, *after)
        if not _is_empty(node)
    ]
    return Document(nodes=tuple(nodes))


def _is_empty(node: StyleNode) -> bool:
    if isinstance(node, LineBreak):
        return False
    return node_length(node) == 0


def apply_style_to_range(
    document: Document,
    selection: Range,
    kind: StyleKind,
    value: str = "",
) -> Document:
    """
    Apply a style to the selected range of a document.

    A collapsed selection is a no-op and returns the document unchanged.
    """
    if selection.is_collapsed:
        selection.validate(document.length())
        logger.debug("Ignoring %s on collapsed selection %s", kind, selection)
        return document

    before, selected, after = extract_range(document, selection)
    styled = apply_style(selected, kind, value)
    logger.info("Applied %s%s to %s", StyleKind(kind).value,
                f"={value}" if value else "", selection)
    return splice_range(before, (styled,), after)
