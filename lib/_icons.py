#!/usr/bin/env python3
"""
Icons - Key-value lookup for statusline glyphs and ANSI colors.

Glyphs are Nerd Font code points. When icons are disabled the PLAIN table is
used instead; keys missing from PLAIN render as nothing.
"""

from _personality_constants import Activity


class C:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[90m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"


ICONS = {
    # Activities
    "editing": "\uf044",
    "writing": "\uf15c",
    "executing": "\uf0e7",
    "reading": "\uf06e",
    "searching": "\uf002",
    "debugging": "\uf188",
    "testing": "\uf0c3",
    "reviewing": "\uf06e",
    "thinking": "\uf0eb",
    "building": "\uf0e9",
    "installing": "\uf1c6",
    "idle": "\uf236",
    "working": "\uf135",
    "intense": "\uf06d",
    # Status
    "warning": "\uf071",
    "error": "\uf057",
    # Models
    "opus": "\uf521",
    "sonnet": "\uf219",
    "haiku": "\uf06c",
    "model": "\uf3f5",
    # Misc
    "update": "\uf062",
    "folder": "\uf07b",
}

PLAIN = {
    "warning": "!",
    "error": "!!",
    "update": "^",
}

SEPARATOR = "•"


class IconSet:
    """Glyph lookup honoring the use_icons preference."""

    def __init__(self, use_icons: bool = True, table: dict | None = None):
        self.use_icons = use_icons
        self._table = table if table is not None else (ICONS if use_icons else PLAIN)

    def get(self, key: str) -> str:
        return self._table.get(key, "")

    def for_activity(self, activity: Activity) -> str:
        return self.get(activity.value.lower()) or self.get("working")

    def for_model(self, family: str) -> str:
        return self.get(family) or self.get("model")
