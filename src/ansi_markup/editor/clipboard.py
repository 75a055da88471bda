"""
Clipboard collaborators for exporting the fenced ANSI block.

Every writer exposes ``async def write(text)`` and raises ``ClipboardError``
when the platform refuses the text.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console


logger = logging.getLogger(__name__)

# Tried in order when no command is configured.
CLIPBOARD_COMMANDS: Sequence[Sequence[str]] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


class ClipboardError(RuntimeError):
    """The clipboard write was rejected."""


class ClipboardWriter:
    """Base class for export targets."""

    name = "clipboard"

    async def write(self, text: str) -> None:
        raise NotImplementedError


def detect_clipboard_command() -> Optional[List[str]]:
    """Find the first clipboard command available on this platform."""
    candidates = list(CLIPBOARD_COMMANDS)
    if sys.platform == "darwin":
        candidates.sort(key=lambda command: command[0] != "pbcopy")
    for command in candidates:
        if shutil.which(command[0]):
            return list(command)
    return None


class CommandClipboard(ClipboardWriter):
    """Pipes text into a platform clipboard command such as ``pbcopy``."""

    def __init__(self, command: Optional[Sequence[str]] = None):
        self.command = list(command) if command else detect_clipboard_command()
        self.name = self.command[0] if self.command else "clipboard"

    async def write(self, text: str) -> None:
        if not self.command:
            raise ClipboardError("No clipboard command found; set ANSI_MARKUP_CLIPBOARD")

        try:
            process = await asyncio.create_subprocess_exec(
                *self.command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ClipboardError(f"Could not run {self.command[0]}: {e}") from e

        _, stderr = await process.communicate(text.encode("utf-8"))
        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise ClipboardError(
                f"{self.command[0]} exited with status {process.returncode}"
                + (f": {message}" if message else "")
            )


class FileClipboard(ClipboardWriter):
    """Writes the export to a file instead of the clipboard."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.name = str(self.path)

    async def write(self, text: str) -> None:
        try:
            self.path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise ClipboardError(f"Could not write {self.path}: {e}") from e


class StreamClipboard(ClipboardWriter):
    """Prints the export on a console, for terminals without a clipboard."""

    name = "stdout"

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    async def write(self, text: str) -> None:
        try:
            self.console.file.write(text + "\n")
            self.console.file.flush()
        except OSError as e:
            raise ClipboardError(f"Could not write to {self.name}: {e}") from e
