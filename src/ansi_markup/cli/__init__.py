"""
Command-line interface for ansi-markup.
"""

from .app import app

__all__ = ["app"]
