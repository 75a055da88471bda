"""Tests for the command line interface."""

from __future__ import annotations

import shlex
import sys

import pytest
from typer.testing import CliRunner

from ansi_markup.cli.app import app
from ansi_markup.cli.styles import StyleSpecError, parse_style_spec
from ansi_markup.core.selection import Range
from ansi_markup.core.style_tree import StyleKind


runner = CliRunner()


def test_parse_style_spec():
    assert parse_style_spec("bold@0:5") == (StyleKind.BOLD, "", Range(0, 5))
    assert parse_style_spec("fg=red@6:11") == (StyleKind.FOREGROUND, "red", Range(6, 11))
    assert parse_style_spec("highlight=#6c71c4@1:2") == (StyleKind.BACKGROUND, "#6c71c4", Range(1, 2))


@pytest.mark.parametrize("spec", ["bold", "blink@0:1", "fg@0:2", "bold@a:b", "bold@3"])
def test_parse_style_spec_rejects_bad_input(spec):
    with pytest.raises(StyleSpecError):
        parse_style_spec(spec)


def test_render_prints_fenced_block():
    result = runner.invoke(app, ["render", "Hi there", "--style", "bold@3:8"])
    assert result.exit_code == 0, result.output
    assert result.output == "```ansi\nHi \x1b[1mthere\x1b[0m\n```\n"


def test_render_raw_applies_styles_in_order():
    result = runner.invoke(app, [
        "render", "abcdefgh", "--raw",
        "-s", "bold@0:8",
        "-s", "fg=red@2:5",
    ])
    assert result.exit_code == 0, result.output
    assert result.output == "\x1b[1mab\x1b[0m\x1b[31mcde\x1b[0m\x1b[1mfgh\x1b[0m\n"


def test_render_writes_output_file(tmp_path):
    target = tmp_path / "out.txt"
    result = runner.invoke(app, ["render", "Hi", "-s", "underline@0:2", "-o", str(target)])
    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8") == "```ansi\n\x1b[4mHi\x1b[0m\n```"


def test_render_rejects_bad_style_spec():
    result = runner.invoke(app, ["render", "Hi", "--style", "blink@0:1"])
    assert result.exit_code == 2


def test_render_reports_out_of_range_selection():
    result = runner.invoke(app, ["render", "Hi", "--style", "bold@0:10"])
    assert result.exit_code == 1
    assert "outside the document" in result.output


def test_copy_to_file(tmp_path):
    target = tmp_path / "clip.txt"
    result = runner.invoke(app, ["copy", "Hi", "-s", "fg=red@0:2", "--output", str(target)])
    assert result.exit_code == 0, result.output
    assert "Copied ANSI text to clipboard!" in result.output
    assert target.read_text(encoding="utf-8") == "```ansi\n\x1b[31mHi\x1b[0m\n```"


def test_copy_failure_exits_with_error(monkeypatch):
    failing = f"{shlex.quote(sys.executable)} -c 'import sys; sys.stdin.read(); sys.exit(1)'"
    monkeypatch.setenv("ANSI_MARKUP_CLIPBOARD", failing)
    result = runner.invoke(app, ["copy", "Hi", "-s", "bold@0:2"])
    assert result.exit_code == 1
    assert "Copy failed" in result.output


def test_preview_with_tree():
    result = runner.invoke(app, ["preview", "Hi there", "-s", "bg=orange@0:2", "--tree"])
    assert result.exit_code == 0, result.output
    assert "background" in result.output
    assert "#cb4b16" in result.output


def test_palette_lists_swatches():
    result = runner.invoke(app, ["palette"])
    assert result.exit_code == 0, result.output
    assert "#dc322f" in result.output
    assert "#fdf6e3" in result.output


def test_config_create_default(isolated_config):
    result = runner.invoke(app, ["config", "--create-default"])
    assert result.exit_code == 0, result.output
    assert isolated_config.config_file.exists()


def test_info():
    result = runner.invoke(app, ["info"])
    assert result.exit_code == 0, result.output
    assert "ansi-markup" in result.output


def test_render_reports_unwritable_output(tmp_path):
    target = tmp_path / "missing" / "out.txt"
    result = runner.invoke(app, ["render", "Hi", "-o", str(target)])
    assert result.exit_code == 1
    assert "Error: Could not write" in result.output
    assert not target.exists()
