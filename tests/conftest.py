"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

import ansi_markup.config as config_module
from ansi_markup.config import ConfigManager
from ansi_markup.editor.clipboard import ClipboardError, ClipboardWriter


ENV_VARS = (
    "ANSI_MARKUP_PLACEHOLDER",
    "ANSI_MARKUP_FENCE_LANGUAGE",
    "ANSI_MARKUP_CLIPBOARD",
    "ANSI_MARKUP_LOG_LEVEL",
    "ANSI_MARKUP_PREVIEW",
)


class RecordingClipboard(ClipboardWriter):
    """Keeps every write in memory, or refuses them all."""

    name = "memory"

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.writes: list = []

    async def write(self, text: str) -> None:
        if self.fail:
            raise ClipboardError("permission denied")
        self.writes.append(text)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch) -> ConfigManager:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    manager = ConfigManager(config_dir=tmp_path / "config")
    monkeypatch.setattr(config_module, "_config_manager", manager)
    return manager


@pytest.fixture
def clipboard() -> RecordingClipboard:
    return RecordingClipboard()


@pytest.fixture
def failing_clipboard() -> RecordingClipboard:
    return RecordingClipboard(fail=True)
