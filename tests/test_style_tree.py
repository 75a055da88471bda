"""Tests for the style tree model."""

from __future__ import annotations

from ansi_markup.converters.ansi import serialize, serialize_document
from ansi_markup.core.style_tree import (
    PLACEHOLDER_TEXT,
    Document,
    Leaf,
    LineBreak,
    StyleKind,
    Styled,
    apply_style,
    flatten,
    iter_styles,
    node_length,
    reset,
    wrap,
)


def test_flatten_strips_every_wrapper_in_order():
    target = (
        Leaf(text="a"),
        Styled(kind=StyleKind.BOLD, children=(
            Leaf(text="b"),
            Styled(kind=StyleKind.FOREGROUND, value="#dc322f", children=(Leaf(text="c"),)),
        )),
        LineBreak(),
        Styled(kind=StyleKind.UNDERLINE, children=(Leaf(text="d"),)),
    )

    assert flatten(target) == (
        Leaf(text="a"), Leaf(text="b"), Leaf(text="c"), LineBreak(), Leaf(text="d"),
    )


def test_flatten_accepts_a_single_node():
    node = Styled(kind=StyleKind.BOLD, children=(Leaf(text="x"),))
    assert flatten(node) == (Leaf(text="x"),)


def test_wrap_drops_value_for_bold_and_underline():
    assert wrap([Leaf(text="x")], StyleKind.BOLD, "#dc322f").value == ""
    assert wrap([Leaf(text="x")], StyleKind.UNDERLINE, "ignored").value == ""
    assert wrap([Leaf(text="x")], StyleKind.BACKGROUND, "#6c71c4").value == "#6c71c4"


def test_apply_style_replaces_all_existing_styling():
    target = Styled(kind=StyleKind.BOLD, children=(
        Styled(kind=StyleKind.BACKGROUND, value="#002b36", children=(Leaf(text="hi"),)),
    ))

    result = apply_style(target, StyleKind.UNDERLINE)

    assert result == Styled(kind=StyleKind.UNDERLINE, children=(Leaf(text="hi"),))
    assert list(iter_styles(result.children)) == []


def test_apply_style_does_not_double_wrap_same_kind():
    once = apply_style([Leaf(text="text")], StyleKind.FOREGROUND, "#dc322f")
    twice = apply_style(once, StyleKind.FOREGROUND, "#dc322f")

    assert twice == once
    assert serialize(twice) == serialize(once)


def test_nested_composition_collapses_to_single_wrapper():
    bolded = apply_style([Leaf(text="text")], StyleKind.BOLD)
    # underline applied later over the whole bold run, nested as a separate edit
    underlined = Styled(kind=StyleKind.UNDERLINE, children=(bolded,))

    colored = apply_style(underlined, StyleKind.FOREGROUND, "#268bd2")

    assert colored == Styled(kind=StyleKind.FOREGROUND, value="#268bd2", children=(Leaf(text="text"),))
    assert serialize(colored) == "\x1b[34mtext\x1b[0m"


def test_apply_style_leaves_input_untouched():
    original = Styled(kind=StyleKind.BOLD, children=(Leaf(text="keep"),))
    apply_style(original, StyleKind.UNDERLINE)
    assert original.kind is StyleKind.BOLD
    assert original.children == (Leaf(text="keep"),)


def test_reset_returns_placeholder_document():
    styled = Document(nodes=(
        Styled(kind=StyleKind.BOLD, children=(
            Styled(kind=StyleKind.UNDERLINE, children=(Leaf(text="deep"),)),
        )),
    ))
    assert not styled.is_placeholder()

    document = reset()

    assert document.nodes == (Leaf(text=PLACEHOLDER_TEXT),)
    assert document.is_placeholder()
    assert serialize_document(document) == PLACEHOLDER_TEXT


def test_reset_with_custom_placeholder():
    document = reset("Type here")
    assert document.is_placeholder("Type here")
    assert document.plain_text() == "Type here"


def test_from_text_turns_newlines_into_line_breaks():
    document = Document.from_text("ab\n\ncd")
    assert document.nodes == (Leaf(text="ab"), LineBreak(), LineBreak(), Leaf(text="cd"))
    assert document.plain_text() == "ab\n\ncd"
    assert document.length() == 6


def test_from_text_empty():
    assert Document.from_text("").nodes == ()


def test_node_length_counts_line_break_as_one():
    node = Styled(kind=StyleKind.BOLD, children=(Leaf(text="ab"), LineBreak(), Leaf(text="c")))
    assert node_length(node) == 4


def test_get_stats_reports_styles():
    document = Document(nodes=(
        Leaf(text="Hi "),
        Styled(kind=StyleKind.BOLD, children=(Leaf(text="there"),)),
    ))
    stats = document.get_stats()
    assert stats["character_count"] == 8
    assert stats["word_count"] == 2
    assert stats["styled_node_count"] == 1
    assert stats["style_kinds"] == ["bold"]


def test_nodes_round_trip_through_pydantic_dump():
    document = Document(nodes=(
        Leaf(text="a"),
        Styled(kind=StyleKind.FOREGROUND, value="#859900", children=(LineBreak(), Leaf(text="b"))),
    ))
    assert Document.model_validate(document.model_dump()) == document
