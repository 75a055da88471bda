"""
Configuration management for ansi-markup.

Handles loading and managing configuration from files, environment variables,
and command-line options.
"""

from __future__ import annotations

import logging
import os
import shlex
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .core.style_tree import PLACEHOLDER_TEXT


logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AnsiMarkupConfig:
    """Main configuration for ansi-markup."""

    # Document
    placeholder_text: str = PLACEHOLDER_TEXT

    # Export
    fence_language: str = "ansi"
    clipboard_command: Optional[List[str]] = None  # None: autodetect

    # Display
    log_level: str = "WARNING"
    show_preview: bool = True


class ConfigManager:
    """Manages ansi-markup configuration from multiple sources."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / '.ansi-markup'
        self.config_file = self.config_dir / 'config.yaml'
        self._config: Optional[AnsiMarkupConfig] = None

    def load_config(self) -> AnsiMarkupConfig:
        """Load configuration from all sources."""
        if self._config:
            return self._config

        # Start with defaults
        config = AnsiMarkupConfig()

        # Load from file if it exists
        if self.config_file.exists():
            file_config = self._load_from_file()
            config = self._merge_configs(config, file_config)

        # Override with environment variables
        env_config = self._load_from_env()
        config = self._merge_configs(config, env_config)

        self._config = config
        return config

    def _load_from_file(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_file, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not load config file %s: %s", self.config_file, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: expected a mapping", self.config_file)
            return {}
        return data

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}

        placeholder = os.getenv('ANSI_MARKUP_PLACEHOLDER')
        if placeholder:
            env_config['placeholder_text'] = placeholder

        fence_language = os.getenv('ANSI_MARKUP_FENCE_LANGUAGE')
        if fence_language:
            env_config['fence_language'] = fence_language

        clipboard = os.getenv('ANSI_MARKUP_CLIPBOARD')
        if clipboard:
            env_config['clipboard_command'] = shlex.split(clipboard)

        log_level = os.getenv('ANSI_MARKUP_LOG_LEVEL')
        if log_level:
            env_config['log_level'] = log_level

        preview = os.getenv('ANSI_MARKUP_PREVIEW')
        if preview:
            env_config['show_preview'] = preview.lower() in ('true', '1', 'yes', 'on')

        return env_config

    def _merge_configs(self, base: AnsiMarkupConfig, override: Dict[str, Any]) -> AnsiMarkupConfig:
        """Merge a configuration dictionary into ``base``."""
        if 'placeholder_text' in override:
            base.placeholder_text = str(override['placeholder_text'])

        if 'fence_language' in override:
            base.fence_language = str(override['fence_language'])

        if 'clipboard_command' in override:
            command = override['clipboard_command']
            if isinstance(command, str):
                command = shlex.split(command)
            base.clipboard_command = [str(part) for part in command] if command else None

        if 'log_level' in override:
            level = str(override['log_level']).upper()
            if level in LOG_LEVELS:
                base.log_level = level
            else:
                logger.warning("Ignoring unknown log level %r", override['log_level'])

        if 'show_preview' in override:
            base.show_preview = bool(override['show_preview'])

        return base

    def save_config(self, config: AnsiMarkupConfig) -> None:
        """Save configuration to file."""
        # Ensure config directory exists
        self.config_dir.mkdir(parents=True, exist_ok=True)

        config_dict: Dict[str, Any] = {
            'placeholder_text': config.placeholder_text,
            'fence_language': config.fence_language,
            'log_level': config.log_level,
            'show_preview': config.show_preview,
        }
        if config.clipboard_command:
            config_dict['clipboard_command'] = list(config.clipboard_command)

        try:
            with open(self.config_file, 'w') as f:
                yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)
        except OSError as e:
            logger.warning("Could not save config file %s: %s", self.config_file, e)
            return
        self._config = config

    def create_default_config(self) -> None:
        """Create a default configuration file."""
        self.save_config(AnsiMarkupConfig())
        logger.info("Created default configuration at %s", self.config_file)

    def get_config_info(self) -> Dict[str, Any]:
        """Get information about current configuration."""
        config = self.load_config()

        return {
            'config_file': str(self.config_file),
            'config_exists': self.config_file.exists(),
            'placeholder_text': config.placeholder_text,
            'fence_language': config.fence_language,
            'clipboard_command': ' '.join(config.clipboard_command) if config.clipboard_command else 'auto',
            'log_level': config.log_level,
            'show_preview': config.show_preview,
        }


# Global config manager instance
_config_manager: Optional[ConfigManager] = None

def get_config_manager() -> ConfigManager:
    """Get the global config manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager

def load_config() -> AnsiMarkupConfig:
    """Load the current configuration."""
    return get_config_manager().load_config()
