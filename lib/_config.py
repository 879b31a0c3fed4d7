"""
Centralized configuration for the personality hooks and statusline.

Loads settings from ~/.claude/personalities_config.json with sensible defaults.
The file may be sectioned ({"display": {...}, "thresholds": {...}}) or use the
flat preferences format ({"show_model": false, ...}); flat show_*/use_* keys
are treated as display overrides.
"""

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from _personality_constants import Thresholds

# =============================================================================
# CONFIG PATHS
# =============================================================================

CONFIG_ENV_VAR = "CLAUDE_PERSONALITIES_CONFIG"
DEFAULT_CONFIG_FILE = Path.home() / ".claude" / "personalities_config.json"


def get_config_file() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_FILE


# =============================================================================
# DEFAULT VALUES (used when config file missing or key not found)
# =============================================================================

DEFAULTS = {
    "display": {
        "show_personality": True,
        "show_activity": True,
        "show_current_job": True,
        "show_current_dir": False,
        "show_model": True,
        "show_error_indicators": True,
        "show_update_available": True,
        "use_icons": True,
        "use_colors": True,
    },
    "thresholds": {
        "error_warn": 3,
        "error_critical": 5,
        "hyperfocus": 10,
        "berserk": 20,
        "search_veteran": 5,
        "job_max_len": 20,
    },
    "update_check": {
        "enabled": True,
        "ttl_seconds": 86400,
        "timeout_seconds": 2,
        "releases_url": "https://api.github.com/repos/Mehdi-Hp/claude-code-personalities/releases/latest",
    },
}

# =============================================================================
# CONFIG LOADER
# =============================================================================


class PersonalityConfig:
    """Configuration loader with mtime-based reload."""

    def __init__(self, path: Path | None = None):
        self._path = path
        self._config: dict = {}
        self._mtime: float | None = None
        self._loaded_path: Path | None = None

    @property
    def path(self) -> Path:
        return self._path or get_config_file()

    def _should_reload(self) -> bool:
        if self.path != self._loaded_path:
            return True
        try:
            current_mtime = self.path.stat().st_mtime
        except OSError:
            current_mtime = 0.0
        return current_mtime != self._mtime

    def _load(self) -> None:
        """Load config from file; anything unusable means 'use defaults'."""
        path = self.path
        self._loaded_path = path
        try:
            self._mtime = path.stat().st_mtime
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError):
            self._mtime = 0.0
            self._config = {}
            return

        self._config = _normalize(raw) if isinstance(raw, dict) else {}

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a config value with fallback to defaults."""
        if self._should_reload():
            self._load()

        if section in self._config and key in self._config[section]:
            return self._config[section][key]

        if section in DEFAULTS and key in DEFAULTS[section]:
            return DEFAULTS[section][key]

        return default

    def get_section(self, section: str) -> dict:
        """Get an entire config section."""
        if self._should_reload():
            self._load()

        result = dict(DEFAULTS.get(section, {}))
        result.update(self._config.get(section, {}))
        return result


def _normalize(raw: dict) -> dict:
    """Fold flat preference keys into the display section, drop junk sections."""
    config: dict = {}
    for section, values in raw.items():
        if section in DEFAULTS and isinstance(values, dict):
            config.setdefault(section, {}).update(values)

    flat = {
        k: v
        for k, v in raw.items()
        if k in DEFAULTS["display"] and isinstance(v, bool)
    }
    if flat:
        config.setdefault("display", {}).update(flat)
    return config


# =============================================================================
# TYPED VIEWS
# =============================================================================


@dataclass(frozen=True)
class DisplayPreferences:
    """Which statusline segments are enabled and how they are styled."""

    show_personality: bool = True
    show_activity: bool = True
    show_current_job: bool = True
    show_current_dir: bool = False
    show_model: bool = True
    show_error_indicators: bool = True
    show_update_available: bool = True
    use_icons: bool = True
    use_colors: bool = True

    @classmethod
    def from_mapping(cls, values: dict) -> "DisplayPreferences":
        return cls(
            **{
                f.name: values[f.name]
                for f in fields(cls)
                if isinstance(values.get(f.name), bool)
            }
        )

    def enabled_fields(self) -> frozenset:
        return frozenset(f.name for f in fields(self) if getattr(self, f.name))


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

config = PersonalityConfig()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def get_display_preferences() -> DisplayPreferences:
    return DisplayPreferences.from_mapping(config.get_section("display"))


def get_thresholds() -> Thresholds:
    return Thresholds.from_mapping(config.get_section("thresholds"))


def get_update_setting(name: str) -> Any:
    """update_check value, or its default when the configured type is wrong."""
    default = DEFAULTS["update_check"].get(name)
    value = config.get("update_check", name)

    if isinstance(default, bool):
        return value if isinstance(value, bool) else default
    if isinstance(default, (int, float)):
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            return value
        return default
    if isinstance(default, str):
        return value if isinstance(value, str) and value.strip() else default
    return value
