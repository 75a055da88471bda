"""
Main CLI application for ansi-markup.

Provides a Typer-based command-line interface for styling text with ANSI
escape sequences and exporting it as a fenced block for Discord messages.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import get_config_manager, load_config
from ..converters.ansi import BACKGROUND_SWATCHES, FOREGROUND_SWATCHES
from ..core.selection import SelectionError
from ..editor.clipboard import ClipboardWriter, CommandClipboard, FileClipboard
from ..editor.session import EditingSession, SessionConfig
from .styles import StyleSpecError, build_tree, parse_style_spec

# Initialize Typer app
app = typer.Typer(
    name="ansi-markup",
    help="Style text with ANSI colors for Discord messages",
    add_completion=False,
    rich_markup_mode="rich"
)

# Global console for rich output
console = Console()

STYLE_HELP = "Style to apply, KIND[=VALUE]@START:END (e.g. bold@0:5, fg=red@6:11). Repeatable."


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Logging level (default from config)"),
) -> None:
    """
    Style text with bold, underline and colors, then copy it as ANSI.
    """
    level = (log_level or load_config().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_session(text: str, styles: Optional[List[str]]) -> EditingSession:
    """Create a session for ``text`` and apply each style spec in order."""
    config = load_config()
    session = EditingSession(SessionConfig(
        placeholder_text=config.placeholder_text,
        fence_language=config.fence_language,
    ))
    session.set_text(text)

    for spec in styles or []:
        try:
            kind, value, selection = parse_style_spec(spec)
        except StyleSpecError as e:
            raise typer.BadParameter(str(e), param_hint="--style")
        session.apply_style(selection, kind, value)

    return session


def show_preview(session: EditingSession, title: str = "Preview") -> None:
    """Show the document the way an ANSI-aware chat client draws it."""
    preview = Text.from_ansi(session.render(fenced=False))
    console.print(Panel(preview, title=title, border_style="blue"))


@app.command()
def render(
    text: str = typer.Argument(..., help="Text to style"),
    style: Optional[List[str]] = typer.Option(None, "--style", "-s", help=STYLE_HELP),
    raw: bool = typer.Option(False, "--raw", help="Print the escape sequences without the code fence"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the result to a file"),
) -> None:
    """
    Print the styled text as an ANSI code block.
    """
    try:
        session = build_session(text, style)
    except SelectionError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    result = session.render(fenced=not raw)
    console.file.write(result + "\n")

    if output:
        try:
            output.write_text(result, encoding="utf-8")
        except OSError as e:
            console.print(f"[red]Error: Could not write {escape(str(output))}: {escape(str(e))}[/red]")
            raise typer.Exit(1)
        console.print(f"[green]Saved to {escape(str(output))}[/green]")


@app.command()
def copy(
    text: str = typer.Argument(..., help="Text to style"),
    style: Optional[List[str]] = typer.Option(None, "--style", "-s", help=STYLE_HELP),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to this file instead of the clipboard"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
) -> None:
    """
    Copy the styled text to the clipboard, ready to paste into Discord.
    """
    try:
        session = build_session(text, style)
    except SelectionError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    config = load_config()
    clipboard: ClipboardWriter = FileClipboard(output) if output else CommandClipboard(config.clipboard_command)

    result = asyncio.run(session.export(clipboard))

    if verbose and result.issues:
        console.print("\n[yellow]Export notes:[/yellow]")
        for issue in result.issues:
            console.print(f"  • {escape(issue)}")

    if not result.success:
        console.print(f"[red]{escape(result.message)} ❌[/red]")
        raise typer.Exit(1)

    console.print(f"[green]{result.message} ✅[/green]")
    if config.show_preview:
        show_preview(session)


@app.command()
def preview(
    text: str = typer.Argument(..., help="Text to style"),
    style: Optional[List[str]] = typer.Option(None, "--style", "-s", help=STYLE_HELP),
    tree: bool = typer.Option(False, "--tree", "-t", help="Also show the style tree"),
) -> None:
    """
    Show how the styled text will look in the chat client.
    """
    try:
        session = build_session(text, style)
    except SelectionError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    show_preview(session)
    if tree:
        console.print(build_tree(session.document))


@app.command()
def palette() -> None:
    """
    List the colors Discord understands.
    """
    for title, swatches, background in (
        ("Text Color", FOREGROUND_SWATCHES, False),
        ("Highlight Color", BACKGROUND_SWATCHES, True),
    ):
        table = Table(title=title)
        table.add_column("Name", style="cyan")
        table.add_column("Hex", style="white")
        table.add_column("Code", style="green")
        table.add_column("Sample")

        for swatch in swatches:
            sample_style = f"on {swatch.hex}" if background else swatch.hex
            table.add_row(swatch.name, swatch.hex, str(swatch.code), Text("  sample  ", style=sample_style))

        console.print(table)


@app.command()
def interactive(
    text: Optional[str] = typer.Argument(None, help="Initial text (default: placeholder)"),
) -> None:
    """
    Start an interactive styling session.
    """
    from .interactive import InteractiveSession

    config = load_config()
    session = EditingSession(SessionConfig(
        placeholder_text=config.placeholder_text,
        fence_language=config.fence_language,
    ))
    if text:
        session.set_text(text)

    shell = InteractiveSession(
        session,
        clipboard=CommandClipboard(config.clipboard_command),
        console=console,
    )

    try:
        asyncio.run(shell.run())
    except KeyboardInterrupt:
        console.print("\n[yellow]Interactive session ended[/yellow]")


@app.command()
def info() -> None:
    """
    Show information about ansi-markup.
    """
    config_info = get_config_manager().get_config_info()

    info_text = f"""[bold cyan]ansi-markup - Discord ANSI Text Generator[/bold cyan]

Write your text, select parts of it and assign colors to them, then copy it
and send it in a Discord message.

[bold]Current Configuration:[/bold]
• Placeholder: {config_info['placeholder_text']}
• Fence Language: {config_info['fence_language']}
• Clipboard: {config_info['clipboard_command']}
• Config File: {'✓ Exists' if config_info['config_exists'] else '✗ Not Found'}

[bold]Commands:[/bold]
• [cyan]ansi-markup render <text> -s bold@0:5[/cyan] - Print the ANSI block
• [cyan]ansi-markup copy <text> -s fg=red@0:5[/cyan] - Copy the ANSI block
• [cyan]ansi-markup preview <text> --tree[/cyan] - Preview the styling
• [cyan]ansi-markup interactive[/cyan] - Style text step by step
• [cyan]ansi-markup palette[/cyan] - List supported colors
    """

    console.print(Panel(info_text, border_style="blue"))


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    create_default: bool = typer.Option(False, "--create-default", help="Create default config file"),
) -> None:
    """
    Manage ansi-markup configuration.
    """
    config_manager = get_config_manager()

    if create_default:
        config_manager.create_default_config()
        console.print(f"[green]Created default configuration at {config_manager.config_file}[/green]")
        return

    if show:
        config_info = config_manager.get_config_info()

        table = Table(title="ansi-markup Configuration", show_header=False)
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")
        for key, value in config_info.items():
            table.add_row(key.replace('_', ' ').title(), str(value))

        console.print(table)
        return

    console.print("Use [cyan]ansi-markup config --show[/cyan] to see full configuration")
    console.print("Use [cyan]ansi-markup config --create-default[/cyan] to create a default config file")


if __name__ == "__main__":
    app()
