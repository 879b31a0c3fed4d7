#!/usr/bin/env python3
"""
Session State Class - The SessionState dataclass definition.

One instance per session_id, persisted as a flat JSON object. Loading is
backward-compatible field by field: unknown keys are dropped and missing or
malformed values fall back to their defaults.
"""

from dataclasses import asdict, dataclass, fields
from typing import Optional

from _personality_constants import Activity, Label


def _as_count(value) -> int:
    """Coerce a persisted counter to a non-negative int (0 when unusable)."""
    if isinstance(value, bool):
        return 0
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def _as_optional_str(value) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass
class SessionState:
    """Activity/personality state for one assistant session."""

    session_id: str = "unknown"
    activity: Activity = Activity.IDLE
    personality: str = Label.BOOTING_UP
    current_job: Optional[str] = None
    consecutive_actions: int = 0
    error_count: int = 0
    last_updated: float = 0.0  # Diagnostics only, never used for ordering
    previous_personality: Optional[str] = None

    @classmethod
    def default(cls, session_id: str) -> "SessionState":
        """Fresh state for a session with no (usable) persisted data."""
        return cls(session_id=session_id)

    @classmethod
    def from_dict(cls, data: dict, session_id: str = "") -> "SessionState":
        """Build state from a persisted mapping, defaulting anything unusable."""
        known = {f.name for f in fields(cls)}
        data = {k: v for k, v in data.items() if k in known}

        state = cls.default(session_id or str(data.get("session_id") or "unknown"))
        if "activity" in data:
            state.activity = Activity.parse(data["activity"])
        if isinstance(data.get("personality"), str):
            state.personality = data["personality"]
        state.current_job = _as_optional_str(data.get("current_job"))
        state.consecutive_actions = _as_count(data.get("consecutive_actions", 0))
        state.error_count = _as_count(data.get("error_count", 0))
        try:
            state.last_updated = float(data.get("last_updated") or 0.0)
        except (TypeError, ValueError):
            state.last_updated = 0.0
        state.previous_personality = _as_optional_str(data.get("previous_personality"))
        return state

    def to_dict(self) -> dict:
        data = asdict(self)
        data["activity"] = self.activity.value
        return data
