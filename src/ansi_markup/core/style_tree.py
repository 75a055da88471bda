"""
Style tree model for ANSI-marked text.

A document is an ordered sequence of nodes. Leaves carry plain text (or a
line break), and styled nodes wrap their children in exactly one
``(kind, value)`` pair. All nodes are frozen: every operation returns new
values and leaves its inputs untouched.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Iterator, Literal, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


PLACEHOLDER_TEXT = "Enter your text here..."


class StyleKind(str, Enum):
    """The fixed set of styles a range of text can carry."""
    BOLD = "bold"
    UNDERLINE = "underline"
    FOREGROUND = "foreground"
    BACKGROUND = "background"

    @property
    def takes_value(self) -> bool:
        """Whether the style carries a color value."""
        return self in (StyleKind.FOREGROUND, StyleKind.BACKGROUND)


class Leaf(BaseModel):
    """An immutable run of plain text."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str = ""


class LineBreak(BaseModel):
    """Line break marker. Counts as a single ``\\n`` character."""

    model_config = ConfigDict(frozen=True)

    type: Literal["break"] = "break"


class Styled(BaseModel):
    """A node carrying one style and wrapping an ordered run of children."""

    model_config = ConfigDict(frozen=True)

    type: Literal["styled"] = "styled"
    kind: StyleKind
    value: str = ""
    children: Tuple[StyleNode, ...] = ()

    def with_children(self, children: Sequence[StyleNode]) -> Styled:
        """Copy of this node, same style, different content."""
        return Styled(kind=self.kind, value=self.value, children=tuple(children))


StyleNode = Annotated[Union[Leaf, LineBreak, Styled], Field(discriminator="type")]

Styled.model_rebuild()


class Document(BaseModel):
    """The full editable content: an ordered sequence of style nodes."""

    model_config = ConfigDict(frozen=True)

    nodes: Tuple[StyleNode, ...] = ()

    @classmethod
    def from_text(cls, text: str) -> Document:
        """Create an unstyled document, one LineBreak per newline."""
        nodes: list = []
        for index, line in enumerate(text.split("\n")):
            if index > 0:
                nodes.append(LineBreak())
            if line:
                nodes.append(Leaf(text=line))
        return cls(nodes=tuple(nodes))

    def plain_text(self) -> str:
        """Text content with all styling dropped."""
        return "".join(node_text(node) for node in self.nodes)

    def length(self) -> int:
        return sum(node_length(node) for node in self.nodes)

    def is_placeholder(self, placeholder: str = PLACEHOLDER_TEXT) -> bool:
        """True while the document is still in its post-reset state."""
        return self.nodes == (Leaf(text=placeholder),)

    def get_stats(self) -> dict:
        """Get document statistics."""
        text = self.plain_text()
        styles = list(iter_styles(self.nodes))
        return {
            "character_count": len(text),
            "word_count": len(text.split()),
            "line_count": text.count("\n") + 1 if text else 0,
            "styled_node_count": len(styles),
            "style_kinds": sorted({kind.value for kind, _ in styles}),
        }


def node_text(node: StyleNode) -> str:
    """Plain text of a node and its descendants."""
    if isinstance(node, Leaf):
        return node.text
    if isinstance(node, LineBreak):
        return "\n"
    return "".join(node_text(child) for child in node.children)


def node_length(node: StyleNode) -> int:
    """Number of characters a node contributes to the plain text."""
    if isinstance(node, Leaf):
        return len(node.text)
    if isinstance(node, LineBreak):
        return 1
    return sum(node_length(child) for child in node.children)


def iter_styles(nodes: Sequence[StyleNode]) -> Iterator[Tuple[StyleKind, str]]:
    """Yield the ``(kind, value)`` of every styled node, depth first."""
    for node in nodes:
        if isinstance(node, Styled):
            yield node.kind, node.value
            yield from iter_styles(node.children)


def _as_nodes(target: Union[StyleNode, Sequence[StyleNode]]) -> Tuple[StyleNode, ...]:
    if isinstance(target, (Leaf, LineBreak, Styled)):
        return (target,)
    return tuple(target)


def flatten(target: Union[StyleNode, Sequence[StyleNode]]) -> Tuple[StyleNode, ...]:
    """
    Strip every styled wrapper found in ``target``.

    Each styled node is replaced by its (recursively flattened) children,
    spliced in place, so only leaves remain and their order is preserved.
    """
    flat: list = []
    for node in _as_nodes(target):
        if isinstance(node, Styled):
            flat.extend(flatten(node.children))
        else:
            flat.append(node)
    return tuple(flat)


def wrap(nodes: Sequence[StyleNode], kind: StyleKind, value: str = "") -> Styled:
    """Wrap ``nodes`` in a single new styled node."""
    kind = StyleKind(kind)
    if not kind.takes_value:
        value = ""
    return Styled(kind=kind, value=value, children=tuple(nodes))


def apply_style(
    target: Union[StyleNode, Sequence[StyleNode]],
    kind: StyleKind,
    value: str = "",
) -> Styled:
    """
    Restyle a selection.

    Any existing styling inside ``target`` is removed, whatever its kind,
    and the flattened content is wrapped in exactly one new node of
    ``(kind, value)``. The returned node replaces the whole selection.

    Callers must not pass an empty selection; see
    :func:`ansi_markup.core.selection.apply_style_to_range`.
    """
    return wrap(flatten(target), kind, value)


def reset(placeholder: str = PLACEHOLDER_TEXT) -> Document:
    """Return the initial document: one leaf holding the placeholder text."""
    return Document(nodes=(Leaf(text=placeholder),))
