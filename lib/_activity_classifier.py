#!/usr/bin/env python3
"""
Activity Classifier - Pure mapping from (tool event, previous state) to new state.

No I/O happens here. The wall clock (hour of day, last_updated stamp) is an
explicit input so the same inputs always produce the same state.

Steps:
  1. activity + current_job from the tool name and its most relevant parameter
  2. consecutive_actions: +1 on the same activity, else 1
  3. error_count: +1 when the tool response carried an error
  4. personality from the rule table in _personality_rules
"""

import os
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from _personality_constants import (
    DEFAULT_THRESHOLDS,
    EDIT_TOOLS,
    FILE_PARAM_KEYS,
    PATTERN_PARAM_KEYS,
    READ_TOOLS,
    REVIEW_TOOLS,
    SEARCH_TOOLS,
    SHELL_TOOLS,
    TOOL_DELETE,
    WRITE_TOOLS,
    Activity,
    Thresholds,
)
from _personality_rules import (
    RuleContext,
    command_name,
    determine_personality,
    is_build_script,
    is_debug_command,
    is_install_command,
    is_test_command,
)
from _session_state_class import SessionState

ELLIPSIS = "…"


# =============================================================================
# EVENT
# =============================================================================


@dataclass(frozen=True)
class ToolEvent:
    """One tool invocation reported by a pre-tool or post-tool hook."""

    tool_name: str = ""
    parameters: dict = field(default_factory=dict)
    response_is_error: bool = False
    session_id: str = ""

    def param(self, *keys: str) -> str:
        """First non-empty string parameter among keys, else ''."""
        for key in keys:
            value = self.parameters.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return ""

    @property
    def file_path(self) -> str:
        return self.param(*FILE_PARAM_KEYS)

    @property
    def command(self) -> str:
        return self.param("command")

    @property
    def pattern(self) -> str:
        return self.param(*PATTERN_PARAM_KEYS)

    @classmethod
    def from_hook_input(cls, data: dict) -> "ToolEvent":
        """Build from hook JSON. Missing or mistyped keys become empty values."""
        if not isinstance(data, dict):
            data = {}

        tool_input = data.get("tool_input")
        parameters = {}
        if isinstance(tool_input, dict):
            parameters = {
                str(k): v for k, v in tool_input.items() if isinstance(v, str)
            }

        return cls(
            tool_name=str(data.get("tool_name") or ""),
            parameters=parameters,
            response_is_error=_response_has_error(data.get("tool_response")),
            session_id=str(data.get("session_id") or ""),
        )


def _response_has_error(response) -> bool:
    if not isinstance(response, dict):
        return False
    return response.get("error") is not None or response.get("is_error") is True


# =============================================================================
# JOB TRUNCATION
# =============================================================================


def truncate_text(text: str, max_len: int) -> str:
    """Cut text to max_len characters, marking the cut with an ellipsis."""
    if len(text) <= max_len:
        return text
    if max_len <= 1:
        return text[: max(max_len, 0)]
    return text[: max_len - 1] + ELLIPSIS


def trim_filename(path: str, max_len: int = DEFAULT_THRESHOLDS.job_max_len) -> str:
    """Basename of path, shortened to max_len while keeping its extension.

    >>> trim_filename("src/a_very_long_descriptive_filename_for_testing.tsx")
    'a_very_long_des….tsx'
    """
    name = os.path.basename(path.rstrip("/\\")) or path
    if len(name) <= max_len:
        return name

    base, ext = os.path.splitext(name)
    keep = max_len - len(ext) - len(ELLIPSIS)
    if ext and keep > 0:
        return base[:keep] + ELLIPSIS + ext
    return truncate_text(name, max_len)


# =============================================================================
# ACTIVITY
# =============================================================================


def _shell_activity(command: str) -> Activity:
    if is_test_command(command):
        return Activity.TESTING
    if is_install_command(command):
        return Activity.INSTALLING
    if is_build_script(command) or command_name(command) in ("make", "cmake", "gradle", "tsc"):
        return Activity.BUILDING
    if is_debug_command(command):
        return Activity.DEBUGGING
    return Activity.EXECUTING


def determine_activity(
    event: ToolEvent, max_len: int = DEFAULT_THRESHOLDS.job_max_len
) -> tuple[Activity, Optional[str]]:
    """Map a tool event to (activity, current_job)."""
    tool = event.tool_name
    file_path = event.file_path

    if tool in SHELL_TOOLS:
        command = event.command
        job = truncate_text(command_name(command), max_len) if command else None
        return _shell_activity(command), job

    if tool in SEARCH_TOOLS:
        if event.pattern:
            return Activity.SEARCHING, truncate_text(event.pattern, max_len)
        return Activity.SEARCHING, trim_filename(file_path, max_len) if file_path else None

    if tool in EDIT_TOOLS or tool == TOOL_DELETE:
        activity = Activity.EDITING
    elif tool in WRITE_TOOLS:
        activity = Activity.WRITING
    elif tool in READ_TOOLS:
        activity = Activity.READING
    elif tool in REVIEW_TOOLS:
        activity = Activity.REVIEWING
    else:
        return Activity.THINKING, None

    if not file_path and tool in READ_TOOLS and event.pattern:
        return activity, truncate_text(event.pattern, max_len)
    return activity, trim_filename(file_path, max_len) if file_path else None


# =============================================================================
# CLASSIFY
# =============================================================================


def classify(
    event: ToolEvent,
    previous: Optional[SessionState] = None,
    *,
    hour: Optional[int] = None,
    now: Optional[float] = None,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> SessionState:
    """Compute the next session state for a tool event.

    Args:
        event: The tool invocation.
        previous: Persisted state for the session, or None for a fresh session.
        hour: Local hour of day (0-23) for time-based labels. Defaults to now.
        now: Timestamp stored as last_updated. Defaults to time.time().
        thresholds: Counter thresholds used by the rule table.

    Returns:
        A new SessionState; previous is never mutated.
    """
    session_id = event.session_id or (previous.session_id if previous else "unknown")
    if previous is None:
        previous = SessionState.default(session_id)
    if hour is None:
        hour = datetime.now().hour

    activity, job = determine_activity(event, thresholds.job_max_len)

    if activity == previous.activity:
        consecutive = previous.consecutive_actions + 1
    else:
        consecutive = 1

    error_count = previous.error_count + (1 if event.response_is_error else 0)

    personality = determine_personality(
        RuleContext(
            tool_name=event.tool_name,
            activity=activity,
            file_path=event.file_path,
            command=event.command,
            consecutive_actions=consecutive,
            error_count=error_count,
            hour=hour,
            thresholds=thresholds,
        )
    )

    if personality != previous.personality:
        previous_personality = previous.personality
    else:
        previous_personality = previous.previous_personality

    return SessionState(
        session_id=session_id,
        activity=activity,
        personality=personality,
        current_job=job,
        consecutive_actions=consecutive,
        error_count=error_count,
        last_updated=time.time() if now is None else now,
        previous_personality=previous_personality,
    )
