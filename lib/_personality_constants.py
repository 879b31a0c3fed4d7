#!/usr/bin/env python3
"""
Personality Constants - Activities, tool names, personality labels, thresholds.

This module exists to break circular import dependencies between the
classifier, the rule table, the store and the renderer.
"""

from dataclasses import dataclass
from enum import Enum


# =============================================================================
# ACTIVITIES
# =============================================================================


class Activity(str, Enum):
    """Coarse category of the most recent tool-use event."""

    EDITING = "Editing"
    WRITING = "Writing"
    EXECUTING = "Executing"
    READING = "Reading"
    SEARCHING = "Searching"
    DEBUGGING = "Debugging"
    TESTING = "Testing"
    REVIEWING = "Reviewing"
    THINKING = "Thinking"
    BUILDING = "Building"
    INSTALLING = "Installing"
    IDLE = "Idle"

    @classmethod
    def parse(cls, value) -> "Activity":
        """Case-insensitive lookup; unknown values map to IDLE."""
        if isinstance(value, Activity):
            return value
        text = str(value or "").strip().lower()
        for activity in cls:
            if activity.value.lower() == text:
                return activity
        return cls.IDLE


# =============================================================================
# TOOL NAMES (avoid magic strings scattered across codebase)
# =============================================================================

TOOL_WRITE = "Write"
TOOL_DELETE = "Delete"
TOOL_REVIEW = "Review"

EDIT_TOOLS = frozenset({"Edit", "MultiEdit", "NotebookEdit"})
WRITE_TOOLS = frozenset({"Write"})
SHELL_TOOLS = frozenset({"Bash", "BashOutput"})
READ_TOOLS = frozenset({"Read", "NotebookRead", "WebFetch"})
SEARCH_TOOLS = frozenset({"Grep", "Glob", "LS", "WebSearch"})
REVIEW_TOOLS = frozenset({"Review"})

# Parameter keys that name the artifact a tool acts on, in preference order
FILE_PARAM_KEYS = ("file_path", "notebook_path", "path")
PATTERN_PARAM_KEYS = ("pattern", "query", "url")


# =============================================================================
# PERSONALITY LABELS
# =============================================================================


class Label:
    """Personality labels: kaomoji face followed by a role name."""

    BOOTING_UP = "( ˘ ³˘) Booting Up"

    # Mood
    TABLE_FLIPPER = "(╯°□°)╯︵ ┻━┻ Table Flipper"
    ERROR_WARRIOR = "(ノಠ益ಠ)ノ Error Warrior"

    # High-priority tool roles
    GIT_MANAGER = "┗(▀̿Ĺ̯▀̿ ̿)┓ Git Manager"
    TEST_TASKMASTER = "( ദ്ദി ˙ᗜ˙ ) Test Taskmaster"
    BUG_HUNTER = "(つ◉益◉)つ Bug Hunter"
    SEARCH_MAESTRO = "⋋| ◉ ͟ʖ ◉ |⋌ Search Maestro"

    # File types
    DOCUMENTATION_WRITER = "φ(．．) Documentation Writer"
    UI_DEVELOPER = "(✿◠ᴗ◠) UI Developer"
    SECURITY_ANALYST = "ಠ_ಠ Security Analyst"
    STYLE_ARTIST = "♥‿♥ Style Artist"
    CONFIG_HELPER = "(๑>؂•̀๑) Config Helper"

    # Streaks
    CODE_BERSERKER = "【╯°□°】╯︵ ┻━┻ Code Berserker"
    HYPERFOCUSED_CODER = "┌༼◉ل͟◉༽┐ Hyperfocused Coder"

    # Time of day
    COFFEE_POWERED = "( ˶˘ ³˘) Coffee Powered"
    AFTERNOON_THINKER = "(つ°ヮ°)つ Afternoon Thinker"
    EVENING_EXPLORER = "(￣ω￣;) Evening Explorer"
    NIGHT_CODER = "˙ ͜ʟ˙ Night Coder"

    # Tool defaults
    CODE_WIZARD = "(⌐■_■) Code Wizard"
    GENTLE_REFACTORER = "(• ε •) Gentle Refactorer"
    CODE_JANITOR = "(ง'̀-'́)ง Code Janitor"
    CASUAL_CODE_REVIEWER = "¯\\_(ツ)_/¯ Casual Code Reviewer"
    RESEARCH_KING = "╭༼ ººل͟ºº ༽╮ Research King"

    # Shell command families
    DEPLOYMENT_GUARD = "( ͡ _ ͡°)ﾉ⚲ Deployment Guard"
    DATABASE_EXPERT = "⚆_⚆ Database Expert"
    FILE_EXPLORER = "ᓚ₍ ^. .^₎ File Explorer"
    COMPILATION_WARRIOR = "ᕦ(ò_óˇ)ᕤ Compilation Warrior"
    DEPENDENCY_WRANGLER = "^⎚-⎚^ Dependency Wrangler"
    TASK_ASSASSIN = "(╬ ಠ益ಠ) Task Assassin"
    NETWORK_NINJA = "(⌐▀̯▀) Network Ninja"
    SYSTEM_DETECTIVE = "(◉_◉) System Detective"
    SYSTEM_ADMIN = "( ͡ಠ ʖ̯ ͡ಠ) System Admin"
    PERMISSION_POLICE = "(╯‵□′)╯ Permission Police"
    STRING_SURGEON = "(˘▾˘~) String Surgeon"
    EDITOR_USER = "( . .)φ Editor User"
    COMPRESSION_CHEF = "(っ˘ڡ˘ς) Compression Chef"
    ENVIRONMENT_ENCHANTER = "(∗´ര ᎑ ര`∗) Environment Enchanter"
    CODE_HISTORIAN = "(╯︵╰,) Code Historian"
    CONTAINER_CAPTAIN = "(づ｡◕‿‿◕｡)づ Container Captain"
    COMMAND_WONDERER = "( ╹ -╹)? Command Wonderer"

    # Cross-cutting overrides
    PERFORMANCE_OPTIMIZER = "'(ᗒᗣᗕ)՞ Performance Optimizer"
    PERFORMANCE_TUNER = "★⌒ヽ( ͡° ε ͡°) Performance Tuner"
    QUALITY_AUDITOR = "৻( •̀ ᗜ •́ ৻) Quality Auditor"


# Time-of-day buckets: (start_hour inclusive, end_hour exclusive, label).
# Hours outside every range belong to the night bucket.
TIME_BUCKETS = (
    (6, 12, Label.COFFEE_POWERED),
    (12, 17, Label.AFTERNOON_THINKER),
    (17, 22, Label.EVENING_EXPLORER),
)
NIGHT_LABEL = Label.NIGHT_CODER


# =============================================================================
# THRESHOLDS
# =============================================================================


@dataclass(frozen=True)
class Thresholds:
    """Tunable counters shared by the classifier and the renderer."""

    error_warn: int = 3  # Error Warrior, critical error indicator
    error_critical: int = 5  # Table Flipper
    hyperfocus: int = 10  # consecutive_actions > hyperfocus
    berserk: int = 20  # consecutive_actions > berserk
    search_veteran: int = 5  # consecutive searches/reads before Search Maestro
    job_max_len: int = 20  # display budget for current_job

    @classmethod
    def from_mapping(cls, values: dict) -> "Thresholds":
        """Build from a config section, ignoring unknown or non-integer values."""
        kwargs = {}
        for name in cls.__dataclass_fields__:
            value = values.get(name)
            if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
                kwargs[name] = value
        return cls(**kwargs)


DEFAULT_THRESHOLDS = Thresholds()
