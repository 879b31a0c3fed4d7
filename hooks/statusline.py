#!/usr/bin/env python3
"""
Personalities Statusline - what the assistant is up to, at a glance.

    ┗(▀̿Ĺ̯▀̿ ̿)┓ Git Manager • <icon> Running on git • [<icon> Opus 4.1]

Reads the statusline JSON from stdin, loads the session state written by
personality_hook.py and prints one line. Only one state file and one cache
file are read; there is no network access here.
"""

from __future__ import annotations

import json
import os
import sys
import time
from pathlib import Path

# Add lib path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "lib"))

from _config import get_display_preferences, get_thresholds
from _logging import log_debug
from _session_state_class import SessionState
from _session_store import load_state
from _statusline_render import RenderContext, render_statusline
from _update_check import read_cached_update
from personalities import VERSION

SESSION_ENV_VAR = "CLAUDE_SESSION_ID"


def parse_input(raw: str) -> dict:
    try:
        data = json.loads(raw) if raw.strip() else {}
    except (json.JSONDecodeError, ValueError) as e:
        log_debug("statusline", f"unparseable input: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _nested_str(data: dict, *keys: str) -> str:
    value = data
    for key in keys:
        if not isinstance(value, dict):
            return ""
        value = value.get(key)
    return value if isinstance(value, str) else ""


def build_context(data: dict, now: float | None = None) -> RenderContext:
    prefs = get_display_preferences()
    update = None
    if prefs.show_update_available:
        update = read_cached_update(VERSION, now)

    return RenderContext(
        model_display_name=_nested_str(data, "model", "display_name"),
        preferences=prefs,
        thresholds=get_thresholds(),
        update_version=update,
        current_version=VERSION,
        current_dir=_nested_str(data, "workspace", "current_dir")
        or _nested_str(data, "cwd"),
    )


def statusline(data: dict, now: float | None = None) -> str:
    session_id = (
        _nested_str(data, "session_id") or os.environ.get(SESSION_ENV_VAR) or "unknown"
    )
    state = load_state(session_id)
    try:
        ctx = build_context(data, now)
    except Exception as e:
        # Keep the session's state on screen even when config/cache are broken
        log_debug("statusline", f"context failed, using defaults: {type(e).__name__}: {e}")
        ctx = RenderContext(model_display_name=_nested_str(data, "model", "display_name"))
    return render_statusline(state, ctx)


def main() -> None:
    start = time.time()
    data = parse_input(sys.stdin.read())

    try:
        line = statusline(data)
    except Exception as e:
        log_debug("statusline", f"render failed: {type(e).__name__}: {e}")
        line = render_statusline(SessionState.default("unknown"))

    print(line)

    elapsed = (time.time() - start) * 1000
    if elapsed > 100:
        log_debug("statusline", f"slow render: {elapsed:.1f}ms")


if __name__ == "__main__":
    main()
