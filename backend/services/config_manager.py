"""
Configuration Manager - Persist formatter defaults and server settings
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from models.format import KeywordCase

CONFIG_DIR_ENV = "TOOLBOX_CONFIG_DIR"

DEFAULT_CONFIG: dict[str, Any] = {
    "formatter": {
        "indentWidth": 2,
        "keywordCase": None,  # None keeps keywords as written
        "blankLines": 1,
    },
    "server": {"host": "0.0.0.0", "port": 8000},
}


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        # 1st: environment variable, 2nd: ~/.toolbox
        config_dir = os.environ.get(CONFIG_DIR_ENV) or os.path.expanduser("~/.toolbox")

        try:
            config_path = Path(config_dir)
            config_path.mkdir(parents=True, exist_ok=True)
            self._config_file = config_path / "config.json"
        except OSError as e:
            print(f"[Config] Warning: Cannot write to {config_dir}: {e}")
            self._config_file = None

        # Last resort: temp directory
        if not self._config_file:
            tmp_dir = Path(tempfile.gettempdir()) / "toolbox"
            tmp_dir.mkdir(parents=True, exist_ok=True)
            self._config_file = tmp_dir / "config.json"
            print(f"[Config] Using temporary config path: {self._config_file}")

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton so the next get_instance() reloads from disk"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, filling gaps from defaults"""
        config = self._default_config()
        if not self._config_file.exists():
            return config

        try:
            with open(self._config_file) as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"[Config] Error loading config: {e}")
            return config

        if not isinstance(stored, dict):
            print(f"[Config] Ignoring malformed config in {self._config_file}")
            return config

        for section, values in stored.items():
            if isinstance(values, dict) and isinstance(config.get(section), dict):
                config[section].update(values)
            elif section in DEFAULT_CONFIG:
                print(f"[Config] Ignoring malformed '{section}' section")
            else:
                config[section] = values

        # Invalid formatter values fall back to their defaults one by one
        formatter = config["formatter"]
        for key, (is_valid, message) in _FORMATTER_CHECKS.items():
            if not is_valid(formatter.get(key)):
                print(f"[Config] {message}, using default {DEFAULT_CONFIG['formatter'][key]!r}")
                formatter[key] = DEFAULT_CONFIG["formatter"][key]
        return config

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return copy.deepcopy(DEFAULT_CONFIG)

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return copy.deepcopy(self._config)

    def get_formatter_defaults(self) -> dict[str, Any]:
        """Formatter section of the current configuration"""
        return self.get_config()["formatter"]

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        self._config.update(config)
        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}")

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self._config[key] = value
        self.save_config(self._config)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_FORMATTER_CHECKS = {
    "indentWidth": (
        lambda v: _is_int(v) and v > 0,
        "indentWidth must be a positive integer",
    ),
    "keywordCase": (
        lambda v: v is None or v in {c.value for c in KeywordCase},
        "keywordCase must be 'upper', 'lower' or null",
    ),
    "blankLines": (
        lambda v: _is_int(v) and v >= 0,
        "blankLines must be a non-negative integer",
    ),
}


def validate_formatter_settings(settings: dict[str, Any]) -> list[str]:
    """Return a list of problems with the given formatter settings"""
    return [
        message
        for key, (is_valid, message) in _FORMATTER_CHECKS.items()
        if not is_valid(settings.get(key))
    ]
