#!/usr/bin/env python3
"""
Personality Hook: one entry point for every hook event the statusline needs.

Usage (from settings.json hooks):
    personality_hook.py pre-tool       # PreToolUse
    personality_hook.py post-tool      # PostToolUse
    personality_hook.py prompt-submit  # UserPromptSubmit
    personality_hook.py session-end    # SessionEnd

The event JSON arrives on stdin. Whatever happens, the hook prints nothing and
exits 0: a failing hook must never block the host's tool call.
"""

import _lib_path  # noqa: F401
import argparse
import json
import os
import sys
import time
from typing import Optional

from _logging import log_debug
from personalities import VERSION
from _activity_classifier import ToolEvent, classify
from _config import get_thresholds
from _session_store import delete_state, load_state, reset_errors, save_state
from _update_check import spawn_background_refresh

SESSION_ENV_VAR = "CLAUDE_SESSION_ID"


def resolve_session_id(data: dict) -> str:
    session_id = data.get("session_id") if isinstance(data, dict) else None
    if isinstance(session_id, str) and session_id.strip():
        return session_id.strip()
    return os.environ.get(SESSION_ENV_VAR) or "unknown"


# =============================================================================
# HANDLERS
# =============================================================================


def handle_tool_event(data: dict, now: Optional[float] = None) -> None:
    """Classify a pre/post tool-use event and persist the new state."""
    session_id = resolve_session_id(data)
    event = ToolEvent.from_hook_input(data)
    if event.session_id != session_id:
        event = ToolEvent(
            tool_name=event.tool_name,
            parameters=event.parameters,
            response_is_error=event.response_is_error,
            session_id=session_id,
        )

    previous = load_state(session_id)
    state = classify(event, previous, now=now, thresholds=get_thresholds())
    save_state(session_id, state)
    log_debug(
        "personality_hook",
        f"{session_id}: {event.tool_name or '?'} -> {state.activity.value} / {state.personality}",
    )


def handle_prompt_submit(data: dict, now: Optional[float] = None) -> None:
    """New user turn: forget errors, refresh the update cache if stale."""
    session_id = resolve_session_id(data)
    if reset_errors(session_id) is not None:
        log_debug("personality_hook", f"{session_id}: errors reset")
    if spawn_background_refresh(now):
        log_debug("personality_hook", f"update check started (v{VERSION})")


def handle_session_end(data: dict, now: Optional[float] = None) -> None:
    session_id = resolve_session_id(data)
    delete_state(session_id)
    log_debug("personality_hook", f"{session_id}: state removed")


HANDLERS = {
    "pre-tool": handle_tool_event,
    "post-tool": handle_tool_event,
    "prompt-submit": handle_prompt_submit,
    "session-end": handle_session_end,
}


# =============================================================================
# MAIN
# =============================================================================


def read_event(stream) -> Optional[dict]:
    """Parse stdin JSON; None when it is not a JSON object."""
    try:
        data = json.load(stream)
    except (json.JSONDecodeError, ValueError) as e:
        log_debug("personality_hook", f"unparseable input: {e}")
        return None
    if not isinstance(data, dict):
        log_debug("personality_hook", f"ignoring non-object input: {type(data).__name__}")
        return None
    return data


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Claude Code personalities hook")
    parser.add_argument("hook_type", nargs="?", default="", help=", ".join(HANDLERS))
    args, _unknown = parser.parse_known_args(argv)

    handler = HANDLERS.get(args.hook_type)
    if handler is None:
        # Never exit non-zero: PreToolUse treats exit 2 as "block the tool"
        log_debug("personality_hook", f"unknown hook type: {args.hook_type!r}")
        return 0

    data = read_event(sys.stdin)
    if data is None:
        return 0

    start = time.time()
    try:
        handler(data)
    except Exception as e:
        log_debug("personality_hook", f"{args.hook_type} failed: {type(e).__name__}: {e}")
        return 0

    elapsed = (time.time() - start) * 1000
    if elapsed > 100:
        log_debug("personality_hook", f"slow {args.hook_type}: {elapsed:.1f}ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
