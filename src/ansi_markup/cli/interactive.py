"""
Interactive styling loop.

Stands in for the visual editor: the user selects a range by character
offsets and picks a style with a slash command. Each command runs to
completion before the next prompt.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.markdown import Markdown
from rich.panel import Panel
from rich.text import Text

from ..core.selection import SelectionError
from ..core.style_tree import StyleKind
from ..editor.clipboard import ClipboardWriter, FileClipboard, StreamClipboard
from ..editor.session import EditingSession
from .styles import StyleSpecError, build_tree, parse_kind, parse_range


HELP_TEXT = """
## Available Commands

**Styling** (offsets count characters, a line break counts as one):
• `/bold START END` - Bold the range
• `/underline START END` - Underline the range
• `/fg COLOR START END` - Text color (name or hex, see `ansi-markup palette`)
• `/bg COLOR START END` - Highlight color

**Document:**
• `/text NEW TEXT` - Replace the text, dropping all styling
• `/reset` - Restore the placeholder text
• `/show` - Preview the styled text with offsets
• `/tree` - Show the style tree

**Export:**
• `/copy` - Copy the ANSI block to the clipboard
• `/export FILE` - Write the ANSI block to a file
• `/print` - Print the ANSI block

**Session:**
• `/help` - Show this help
• `/quit` or `/exit` - Exit

Restyling a range removes every style already inside it.
"""


class InteractiveSession:
    """Reads slash commands and runs them against an editing session."""

    def __init__(
        self,
        session: EditingSession,
        clipboard: ClipboardWriter,
        console: Optional[Console] = None,
    ):
        self.session = session
        self.clipboard = clipboard
        self.console = console or Console()
        self.is_running = False
        self.logger = logging.getLogger(__name__)

    async def run(self) -> None:
        """Main interaction loop."""
        self.is_running = True
        self.console.print(Panel(
            "Type [cyan]/help[/cyan] for commands, [cyan]/quit[/cyan] to leave.",
            title="ansi-markup",
            border_style="blue",
        ))
        self._show_document()

        while self.is_running:
            try:
                user_input = await self._get_user_input()
            except EOFError:
                break

            if not user_input:
                continue
            if not user_input.startswith('/'):
                self.console.print("[red]Commands start with '/'. Use /text to replace the text.[/red]")
                continue

            await self.handle_command(user_input)

    async def _get_user_input(self) -> str:
        """Get user input without blocking the event loop."""
        stats = self.session.get_stats()
        status = f"{stats['character_count']} chars, {stats['styled_node_count']} styles"
        prompt_text = f"\n{status}\nansi-markup> "

        loop = asyncio.get_event_loop()
        user_input = await loop.run_in_executor(None, input, prompt_text)
        return user_input.strip()

    async def handle_command(self, command: str) -> None:
        """Handle one slash command."""
        parts = command[1:].split()
        if not parts:
            return
        cmd = parts[0].lower()
        args = parts[1:]
        self.logger.debug("Command /%s %s", cmd, args)

        try:
            if cmd in ('bold', 'b', 'underline', 'u'):
                self._style(parse_kind(cmd), "", args)

            elif cmd in ('fg', 'color', 'bg', 'highlight'):
                if not args:
                    raise StyleSpecError(f"Usage: /{cmd} COLOR START END")
                self._style(parse_kind(cmd), args[0], args[1:])

            elif cmd == 'text':
                text = command[1:].split(None, 1)[1] if args else ""
                self.session.set_text(text.replace("\\n", "\n"))
                self._show_document()

            elif cmd == 'reset':
                self.session.reset()
                self.console.print("[green]Formatting reset[/green]")
                self._show_document()

            elif cmd == 'show':
                self._show_document()

            elif cmd == 'tree':
                self.console.print(build_tree(self.session.document))

            elif cmd == 'copy':
                await self._export(self.clipboard)

            elif cmd == 'export':
                if not args:
                    raise StyleSpecError("Usage: /export FILE")
                await self._export(FileClipboard(Path(' '.join(args))))

            elif cmd == 'print':
                await self._export(StreamClipboard(self.console))

            elif cmd == 'help':
                self.console.print(Panel(Markdown(HELP_TEXT.strip()), title="Help", border_style="green"))

            elif cmd in ('quit', 'exit'):
                self.is_running = False

            else:
                self.console.print(f"[red]Unknown command: /{escape(cmd)}[/red]")
                self.console.print("Use [cyan]/help[/cyan] to see available commands")

        except (StyleSpecError, SelectionError) as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")

    def _style(self, kind: StyleKind, value: str, bounds: List[str]) -> None:
        if len(bounds) != 2:
            raise StyleSpecError("Select a range with START END offsets")
        selection = parse_range(bounds[0], bounds[1])
        if selection.is_collapsed:
            self.console.print("[dim]Empty selection, nothing to style[/dim]")
        self.session.apply_style(selection, kind, value)
        self._show_document()

    async def _export(self, clipboard: ClipboardWriter) -> None:
        result = await self.session.export(clipboard)
        for issue in result.issues:
            self.console.print(f"[yellow]• {escape(issue)}[/yellow]")
        if result.success:
            self.console.print(f"[green]{result.message} ✅[/green]")
        else:
            self.console.print(f"[red]{escape(result.message)} ❌[/red]")

    def _show_document(self) -> None:
        """Preview the document with a character ruler."""
        first_line = self.session.document.plain_text().split("\n")[0]
        self.console.print(Text.from_ansi(self.session.render(fenced=False)))
        if first_line:
            ruler = "".join(str(i % 10) for i in range(len(first_line)))
            self.console.print(Text(ruler, style="dim"))
