"""
Example usage of ansi-markup.

This demonstrates how to style text programmatically and export it as an
ANSI code block for a Discord message.
"""

import asyncio
from pathlib import Path

from ansi_markup.core.selection import Range
from ansi_markup.core.style_tree import StyleKind
from ansi_markup.editor.clipboard import FileClipboard
from ansi_markup.editor.session import EditingSession


async def example_styling():
    """Example of styling a message and exporting it."""

    session = EditingSession()
    print(f"Initial document: {session.render(fenced=False)!r}")

    session.set_text("Build passed\nDeploy failed: see logs")

    # Select ranges by character offset, the way an editor would
    session.apply_style(Range(0, 12), StyleKind.FOREGROUND, "green")
    session.apply_style(Range(13, 26), StyleKind.BOLD)
    session.apply_style(Range(13, 19), StyleKind.FOREGROUND, "red")
    session.apply_style(Range(28, 36), StyleKind.UNDERLINE)

    print("\nSerialized:")
    print(repr(session.render(fenced=False)))

    output = Path("message.txt")
    result = await session.export(FileClipboard(output))
    print(f"\n{result.message} ({output})")
    for issue in result.issues:
        print(f"  • {issue}")

    session.reset()
    print(f"\nAfter reset: {session.render(fenced=False)!r}")


if __name__ == "__main__":
    asyncio.run(example_styling())
