#!/usr/bin/env python3
"""
Claude Code Personalities: a statusline that reacts to what the assistant does.

Hooks feed every tool-use event through the classifier, which derives an
activity and a personality label and persists them per session. The
statusline command then loads that state and renders one line.

Design Principles:
- Pure core (classifier and renderer do no I/O)
- Stateless invocations (each hook is its own process; the state file is the only link)
- Degrade, never fail (missing or corrupt state is a fresh session)

This file is a thin re-export layer. Implementation is in the _*.py modules.
"""

__version__ = "1.2.0"
VERSION = __version__

# =============================================================================
# CONSTANTS
# =============================================================================

from _personality_constants import (
    DEFAULT_THRESHOLDS,
    Activity,
    Label,
    Thresholds,
)

# =============================================================================
# STATE CLASS
# =============================================================================

from _session_state_class import SessionState

# =============================================================================
# CLASSIFIER
# =============================================================================

from _activity_classifier import (
    ToolEvent,
    classify,
    determine_activity,
    trim_filename,
    truncate_text,
)
from _personality_rules import (
    OVERRIDE_RULES,
    PERSONALITY_RULES,
    PersonalityRule,
    RuleContext,
    determine_personality,
)

# =============================================================================
# PERSISTENCE
# =============================================================================

from _session_store import (
    FileStateStore,
    MemoryStateStore,
    StateStore,
    delete_state,
    get_store,
    load_state,
    reset_errors,
    sanitize_session_id,
    save_state,
    set_store,
)

# =============================================================================
# RENDERING
# =============================================================================

from _config import (
    DisplayPreferences,
    PersonalityConfig,
    get_display_preferences,
    get_thresholds,
)
from _icons import IconSet
from _statusline_render import RenderContext, render_statusline
from _update_check import read_cached_update, refresh_update_cache

__all__ = [
    "__version__",
    "VERSION",
    # Constants
    "DEFAULT_THRESHOLDS",
    "Activity",
    "Label",
    "Thresholds",
    # State
    "SessionState",
    # Classifier
    "ToolEvent",
    "classify",
    "determine_activity",
    "trim_filename",
    "truncate_text",
    "OVERRIDE_RULES",
    "PERSONALITY_RULES",
    "PersonalityRule",
    "RuleContext",
    "determine_personality",
    # Persistence
    "FileStateStore",
    "MemoryStateStore",
    "StateStore",
    "delete_state",
    "get_store",
    "load_state",
    "reset_errors",
    "sanitize_session_id",
    "save_state",
    "set_store",
    # Rendering
    "DisplayPreferences",
    "PersonalityConfig",
    "get_display_preferences",
    "get_thresholds",
    "IconSet",
    "RenderContext",
    "render_statusline",
    "read_cached_update",
    "refresh_update_cache",
]
