#!/usr/bin/env python3
"""
Statusline Render - Turn a SessionState into one formatted statusline.

Segments, in order, each independently toggled by DisplayPreferences:
  personality | current dir | activity [on job] | errors | [model] | [update]

Rendering is a pure function of (state, context): no file or network access,
so the same inputs always produce byte-identical output.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Optional

from _config import DisplayPreferences
from _icons import SEPARATOR, C, IconSet
from _personality_constants import DEFAULT_THRESHOLDS, Activity, Thresholds
from _session_state_class import SessionState

# Activity -> statusline wording (others are shown as-is)
ACTIVITY_TEXT = {
    Activity.WRITING: "Creating",
    Activity.EXECUTING: "Running",
}
INTENSE_AFTER = 5

# (family, substring, color); first match wins
MODEL_FAMILIES = (
    ("opus", "opus", C.MAGENTA),
    ("sonnet", "sonnet", C.CYAN),
    ("haiku", "haiku", C.GREEN),
)
_VERSION_RE = re.compile(r"\d+(?:\.\d+)*")


@dataclass(frozen=True)
class RenderContext:
    """Everything besides SessionState that affects the rendered line."""

    model_display_name: str = ""
    preferences: DisplayPreferences = field(default_factory=DisplayPreferences)
    icons: Optional[IconSet] = None
    thresholds: Thresholds = DEFAULT_THRESHOLDS
    update_version: Optional[str] = None
    current_version: str = ""
    current_dir: str = ""

    @property
    def iconset(self) -> IconSet:
        return self.icons or IconSet(self.preferences.use_icons)


class _Painter:
    """Applies ANSI styles only when colors are enabled."""

    def __init__(self, enabled: bool):
        self.enabled = enabled

    def __call__(self, text: str, *styles: str) -> str:
        if not self.enabled or not styles:
            return text
        return f"{''.join(styles)}{text}{C.RESET}"


def _join(*parts: str) -> str:
    return " ".join(p for p in parts if p)


# =============================================================================
# SEGMENTS (each returns "" when there is nothing to show)
# =============================================================================


def personality_segment(state: SessionState, paint: _Painter) -> str:
    return paint(state.personality, C.BOLD) if state.personality else ""


def dir_segment(current_dir: str, icons: IconSet) -> str:
    name = os.path.basename(current_dir.rstrip("/\\")) if current_dir else ""
    return _join(icons.get("folder"), name) if name else ""


def activity_segment(
    state: SessionState,
    icons: IconSet,
    paint: _Painter,
    show_job: bool,
) -> str:
    if state.activity == Activity.EDITING and state.consecutive_actions > INTENSE_AFTER:
        icon, text = icons.get("intense"), "Intense"
    else:
        icon = icons.for_activity(state.activity)
        text = ACTIVITY_TEXT.get(state.activity, state.activity.value)

    segment = _join(icon, text)
    if show_job and state.current_job:
        segment += " on " + paint(state.current_job, C.YELLOW)
    return segment


def error_segment(
    error_count: int, thresholds: Thresholds, icons: IconSet, paint: _Painter
) -> str:
    """Icon colored by tier: none below 1, warn below error_warn, else critical."""
    if error_count >= thresholds.error_warn:
        return paint(icons.get("error") or "errors", C.RED)
    if error_count > 0:
        return paint(icons.get("warning") or "warn", C.YELLOW)
    return ""


def model_segment(model_display_name: str, icons: IconSet, paint: _Painter) -> str:
    """Bracketed model family with version, e.g. '[Opus 4.1]'."""
    name = (model_display_name or "").strip()
    if not name:
        return ""

    lowered = name.lower()
    for family, needle, color in MODEL_FAMILIES:
        if needle in lowered:
            match = _VERSION_RE.search(name)
            label = _join(family.capitalize(), match.group(0) if match else "")
            return paint(f"[{_join(icons.for_model(family), label)}]", color)

    return f"[{_join(icons.get('model'), name)}]"


def _strip_v(version: str) -> str:
    return version[1:] if version[:1] in ("v", "V") else version


def update_segment(
    update_version: Optional[str], current_version: str, icons: IconSet, paint: _Painter
) -> str:
    if not update_version or _strip_v(update_version) == _strip_v(current_version):
        return ""
    return paint(f"[{_join(icons.get('update'), 'Update', update_version)}]", C.YELLOW)


# =============================================================================
# RENDER
# =============================================================================


def render_segments(state: SessionState, ctx: RenderContext) -> list[str]:
    """Enabled, non-empty segments in display order."""
    prefs = ctx.preferences
    enabled = prefs.enabled_fields()
    icons = ctx.iconset
    paint = _Painter("use_colors" in enabled)

    segments = []
    if "show_personality" in enabled:
        segments.append(personality_segment(state, paint))
    if "show_current_dir" in enabled:
        segments.append(dir_segment(ctx.current_dir, icons))
    if "show_activity" in enabled:
        segments.append(
            activity_segment(state, icons, paint, "show_current_job" in enabled)
        )
    if "show_error_indicators" in enabled:
        segments.append(error_segment(state.error_count, ctx.thresholds, icons, paint))
    if "show_model" in enabled:
        segments.append(model_segment(ctx.model_display_name, icons, paint))
    if "show_update_available" in enabled:
        segments.append(
            update_segment(ctx.update_version, ctx.current_version, icons, paint)
        )
    return [s for s in segments if s]


def render_statusline(state: SessionState, ctx: Optional[RenderContext] = None) -> str:
    """One statusline for state; segments joined by a dim bullet."""
    ctx = ctx or RenderContext()
    separator = _Painter(ctx.preferences.use_colors)(SEPARATOR, C.DIM)
    return f" {separator} ".join(render_segments(state, ctx))
