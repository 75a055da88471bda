"""
Editing session and export plumbing.
"""

from .clipboard import ClipboardError, ClipboardWriter, CommandClipboard, FileClipboard, StreamClipboard
from .session import EditingSession, ExportResult, SessionConfig, SessionState

__all__ = [
    "ClipboardError",
    "ClipboardWriter",
    "CommandClipboard",
    "FileClipboard",
    "StreamClipboard",
    "EditingSession",
    "ExportResult",
    "SessionConfig",
    "SessionState",
]
