"""
Parsing of style requests typed on the command line.

A style spec reads ``KIND[=VALUE]@START:END``, for example ``bold@0:5`` or
``fg=red@6:11``.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from rich.markup import escape
from rich.text import Text
from rich.tree import Tree

from ..core.selection import Range
from ..core.style_tree import Document, Leaf, LineBreak, StyleKind, StyleNode
from ..converters.ansi import resolve_codes


KIND_ALIASES = {
    "bold": StyleKind.BOLD,
    "b": StyleKind.BOLD,
    "underline": StyleKind.UNDERLINE,
    "u": StyleKind.UNDERLINE,
    "fg": StyleKind.FOREGROUND,
    "foreground": StyleKind.FOREGROUND,
    "color": StyleKind.FOREGROUND,
    "bg": StyleKind.BACKGROUND,
    "background": StyleKind.BACKGROUND,
    "highlight": StyleKind.BACKGROUND,
}


class StyleSpecError(ValueError):
    """A style spec could not be parsed."""


def parse_kind(name: str) -> StyleKind:
    try:
        return KIND_ALIASES[name.strip().lower()]
    except KeyError:
        choices = ", ".join(sorted(KIND_ALIASES))
        raise StyleSpecError(f"Unknown style {name!r} (choose from {choices})") from None


def parse_range(start: str, end: str) -> Range:
    try:
        return Range(int(start), int(end))
    except ValueError:
        raise StyleSpecError(f"Range bounds must be integers, got {start!r}:{end!r}") from None


def parse_style_spec(spec: str) -> Tuple[StyleKind, str, Range]:
    """Parse ``KIND[=VALUE]@START:END``."""
    style, sep, bounds = spec.rpartition("@")
    if not sep or ":" not in bounds:
        raise StyleSpecError(f"Expected KIND[=VALUE]@START:END, got {spec!r}")

    name, _, value = style.partition("=")
    kind = parse_kind(name)
    if kind.takes_value and not value:
        raise StyleSpecError(f"{kind.value} needs a color, e.g. {name}=red@{bounds}")

    start, _, end = bounds.partition(":")
    return kind, value, parse_range(start, end)


def build_tree(document: Document, label: str = "Document") -> Tree:
    """Rich tree view of a document's style nodes."""
    tree = Tree(f"[bold]{label}[/bold]")

    def add(branch: Tree, nodes: Sequence[StyleNode]) -> None:
        for node in nodes:
            if isinstance(node, Leaf):
                branch.add(Text(repr(node.text), style="green"))
            elif isinstance(node, LineBreak):
                branch.add(Text("⏎ line break", style="dim"))
            else:
                codes = ";".join(str(code) for code in resolve_codes(node.kind, node.value))
                title = f"[cyan]{node.kind.value}[/cyan]"
                if node.value:
                    title += f" {escape(node.value)}"
                add(branch.add(f"{title} [dim](SGR {codes})[/dim]"), node.children)

    add(tree, document.nodes)
    return tree
