#!/usr/bin/env python3
"""
Personality Rules - Priority-ordered rule table that picks a personality label.

Rules are evaluated top to bottom and the first match wins. After that, the
override rules run unconditionally in order; every override that matches
replaces the label chosen so far, so the last matching override wins.

Order (highest priority first):
  1. Frustration     - error_count >= error_critical / error_warn
  2. Shell roles     - git invocations, test runners
  3. Search          - Search Maestro on long search streaks, else Bug Hunter
  4. File types      - docs, UI, auth/security, styles, config
  5. Streaks         - Code Berserker, Hyperfocused Coder
  6. Fallback        - time-of-day label, replaced by a per-tool default
                       (shell commands dispatch on command families)
Overrides:
  - Performance      - profiling/benchmark commands, optimize/performance files
  - Quality          - lint/format tool files
"""

import os
import re
from dataclasses import dataclass
from typing import Callable, Optional

from _personality_constants import (
    EDIT_TOOLS,
    NIGHT_LABEL,
    READ_TOOLS,
    SEARCH_TOOLS,
    SHELL_TOOLS,
    TIME_BUCKETS,
    TOOL_DELETE,
    TOOL_REVIEW,
    TOOL_WRITE,
    Activity,
    Label,
    Thresholds,
)


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may look at. Built once per classified event."""

    tool_name: str
    activity: Activity
    file_path: str
    command: str
    consecutive_actions: int
    error_count: int
    hour: int
    thresholds: Thresholds

    @property
    def is_shell(self) -> bool:
        return self.tool_name in SHELL_TOOLS


@dataclass(frozen=True)
class PersonalityRule:
    """A named (predicate, label producer) pair."""

    name: str
    matches: Callable[[RuleContext], bool]
    label: Callable[[RuleContext], str]


def _fixed(label: str) -> Callable[[RuleContext], str]:
    return lambda ctx: label


# =============================================================================
# COMMAND HELPERS
# =============================================================================


def command_name(command: str) -> str:
    """First token of a shell command with any directory prefix removed."""
    parts = command.split()
    if not parts:
        return ""
    return os.path.basename(parts[0].rstrip("/")) or parts[0]


def _first_token_in(names: frozenset) -> Callable[[str], bool]:
    return lambda command: command_name(command).lower() in names


def _regex(pattern: str, search: bool = False) -> Callable[[str], bool]:
    compiled = re.compile(pattern, re.IGNORECASE)
    if search:
        return lambda command: bool(compiled.search(command))
    return lambda command: bool(compiled.match(command.lstrip()))


is_git_command = _first_token_in(frozenset({"git"}))

is_test_command = _regex(
    r"(npm|yarn|pnpm|bun) (run )?test\b"
    r"|(python3? -m )?pytest\b"
    r"|(npx )?(jest|mocha|vitest)\b"
    r"|cargo (test|nextest)\b"
    r"|go test\b"
    r"|tox\b"
)

is_install_command = _regex(
    r"(npm|yarn|pnpm|bun|pip3?|uv pip|cargo|gem|brew|apt(-get)?|yum|dnf|composer|poetry|go) "
    r"(install|add|i|ci|get)\b"
)

is_build_script = _regex(
    r"(npm|yarn|pnpm|bun|cargo|pip|gem) (run|build|compile|dev|start|serve)\b"
)

is_debug_command = _regex(
    r"(gdb|lldb|pdb|strace|ltrace|valgrind|dlv)\b|python3? -m pdb\b"
)

# Shell command families, checked in order after git/test roles
COMMAND_FAMILIES: tuple = (
    (
        "deployment",
        _regex(r"\bdeploy\b|docker-compose|rollout|\brelease\b", search=True),
        Label.DEPLOYMENT_GUARD,
    ),
    (
        "database",
        _regex(r"database|sql|mongo|postgres|psql|mysql|redis|sqlite", search=True),
        Label.DATABASE_EXPERT,
    ),
    (
        "filesystem",
        _first_token_in(
            frozenset(
                {
                    "ls", "cd", "mkdir", "rmdir", "rm", "mv", "cp", "find",
                    "touch", "tree", "pwd", "cat", "less", "more", "head", "tail",
                    "ln", "stat",
                }
            )
        ),
        Label.FILE_EXPLORER,
    ),
    ("build-scripts", is_build_script, Label.COMPILATION_WARRIOR),
    (
        "package-management",
        _regex(
            r"(npm|yarn|pnpm|bun|pip3?|cargo|gem|brew|apt(-get)?|yum|dnf|composer|poetry) "
            r"(install|add|remove|update|upgrade|uninstall|i|ci)\b"
        ),
        Label.DEPENDENCY_WRANGLER,
    ),
    (
        "build-tools",
        _first_token_in(
            frozenset(
                {
                    "make", "cmake", "build", "compile", "webpack", "vite",
                    "rollup", "tsc", "babel", "gradle", "mvn", "esbuild", "ninja",
                }
            )
        ),
        Label.COMPILATION_WARRIOR,
    ),
    (
        "process-management",
        _first_token_in(
            frozenset(
                {"ps", "kill", "killall", "pkill", "top", "htop", "jobs", "fg", "bg", "nohup"}
            )
        ),
        Label.TASK_ASSASSIN,
    ),
    (
        "networking",
        _first_token_in(
            frozenset(
                {
                    "curl", "wget", "ping", "ssh", "scp", "rsync", "netstat",
                    "nc", "telnet", "ftp", "dig", "nslookup", "ss",
                }
            )
        ),
        Label.NETWORK_NINJA,
    ),
    (
        "monitoring",
        _first_token_in(
            frozenset(
                {"df", "du", "free", "uname", "whoami", "which", "hostname", "uptime", "lscpu"}
            )
        ),
        Label.SYSTEM_DETECTIVE,
    ),
    (
        "admin",
        _first_token_in(
            frozenset({"systemctl", "service", "journalctl", "cron", "crontab", "launchctl"})
        ),
        Label.SYSTEM_ADMIN,
    ),
    (
        "permissions",
        _first_token_in(
            frozenset({"chmod", "chown", "chgrp", "sudo", "su", "umask", "passwd", "usermod"})
        ),
        Label.PERMISSION_POLICE,
    ),
    (
        "text-processing",
        _first_token_in(
            frozenset(
                {"grep", "sed", "awk", "cut", "sort", "uniq", "wc", "rg", "fd", "ag", "jq", "tr"}
            )
        ),
        Label.STRING_SURGEON,
    ),
    (
        "editors",
        _first_token_in(
            frozenset({"vi", "vim", "nvim", "nano", "emacs", "code", "subl", "atom"})
        ),
        Label.EDITOR_USER,
    ),
    (
        "archives",
        _first_token_in(
            frozenset({"tar", "zip", "unzip", "gzip", "gunzip", "7z", "rar", "xz", "bzip2"})
        ),
        Label.COMPRESSION_CHEF,
    ),
    (
        "environment",
        _first_token_in(
            frozenset(
                {"export", "source", "echo", "env", "printenv", "set", "unset", "alias", "history"}
            )
        ),
        Label.ENVIRONMENT_ENCHANTER,
    ),
    (
        "legacy-vcs",
        _first_token_in(frozenset({"svn", "hg", "cvs", "diff", "patch"})),
        Label.CODE_HISTORIAN,
    ),
    (
        "containers",
        _first_token_in(frozenset({"docker", "podman", "kubectl", "helm", "k9s"})),
        Label.CONTAINER_CAPTAIN,
    ),
)


def shell_family_label(command: str) -> str:
    """Label for the first command family the command belongs to."""
    for _, matches, label in COMMAND_FAMILIES:
        if matches(command):
            return label
    return Label.COMMAND_WONDERER


# =============================================================================
# FILE HELPERS
# =============================================================================

_DOCS_FILE = re.compile(r"readme|\.(md|rst|adoc)$", re.IGNORECASE)
_UI_FILE = re.compile(r"\.(jsx?|tsx?|vue|svelte)$", re.IGNORECASE)
_SECURITY_FILE = re.compile(r"auth|security", re.IGNORECASE)
_STYLE_FILE = re.compile(r"\.(css|scss|sass|less)$", re.IGNORECASE)
_CONFIG_FILE = re.compile(r"config|\.(json|ya?ml|toml)$", re.IGNORECASE)

FILE_TYPE_RULES: tuple = (
    ("docs", _DOCS_FILE, Label.DOCUMENTATION_WRITER),
    ("ui", _UI_FILE, Label.UI_DEVELOPER),
    ("security", _SECURITY_FILE, Label.SECURITY_ANALYST),
    ("styles", _STYLE_FILE, Label.STYLE_ARTIST),
    ("config", _CONFIG_FILE, Label.CONFIG_HELPER),
)


def file_type_label(file_path: str) -> Optional[str]:
    if not file_path:
        return None
    for _, pattern, label in FILE_TYPE_RULES:
        if pattern.search(file_path):
            return label
    return None


# =============================================================================
# FALLBACK: TIME OF DAY + TOOL DEFAULTS
# =============================================================================


def time_of_day_label(hour: int) -> str:
    for start, end, label in TIME_BUCKETS:
        if start <= hour < end:
            return label
    return NIGHT_LABEL


def fallback_label(ctx: RuleContext) -> str:
    """Time-of-day base label, replaced by the tool's default when it has one."""
    label = time_of_day_label(ctx.hour)

    if ctx.tool_name in EDIT_TOOLS:
        label = Label.CODE_WIZARD
    elif ctx.tool_name == TOOL_WRITE:
        label = Label.GENTLE_REFACTORER
    elif ctx.tool_name == TOOL_DELETE:
        label = Label.CODE_JANITOR
    elif ctx.tool_name == TOOL_REVIEW:
        label = Label.CASUAL_CODE_REVIEWER
    elif ctx.tool_name in READ_TOOLS:
        if ctx.consecutive_actions > ctx.thresholds.search_veteran:
            label = Label.SEARCH_MAESTRO
        else:
            label = Label.RESEARCH_KING
    elif ctx.is_shell:
        label = shell_family_label(ctx.command)

    return label


# =============================================================================
# RULE TABLE
# =============================================================================

PERSONALITY_RULES: tuple = (
    PersonalityRule(
        "table_flipper",
        lambda ctx: ctx.error_count >= ctx.thresholds.error_critical,
        _fixed(Label.TABLE_FLIPPER),
    ),
    PersonalityRule(
        "error_warrior",
        lambda ctx: ctx.error_count >= ctx.thresholds.error_warn,
        _fixed(Label.ERROR_WARRIOR),
    ),
    PersonalityRule(
        "git_manager",
        lambda ctx: ctx.is_shell and is_git_command(ctx.command),
        _fixed(Label.GIT_MANAGER),
    ),
    PersonalityRule(
        "test_taskmaster",
        lambda ctx: ctx.is_shell and is_test_command(ctx.command),
        _fixed(Label.TEST_TASKMASTER),
    ),
    PersonalityRule(
        "searcher",
        lambda ctx: ctx.tool_name in SEARCH_TOOLS,
        lambda ctx: (
            Label.SEARCH_MAESTRO
            if ctx.consecutive_actions > ctx.thresholds.search_veteran
            else Label.BUG_HUNTER
        ),
    ),
    PersonalityRule(
        "file_type",
        lambda ctx: file_type_label(ctx.file_path) is not None,
        lambda ctx: file_type_label(ctx.file_path),
    ),
    PersonalityRule(
        "code_berserker",
        lambda ctx: ctx.consecutive_actions > ctx.thresholds.berserk,
        _fixed(Label.CODE_BERSERKER),
    ),
    PersonalityRule(
        "hyperfocused",
        lambda ctx: ctx.consecutive_actions > ctx.thresholds.hyperfocus,
        _fixed(Label.HYPERFOCUSED_CODER),
    ),
    PersonalityRule("fallback", lambda ctx: True, fallback_label),
)

_PERF_COMMAND = re.compile(r"profil|performance|benchmark", re.IGNORECASE)
_PERF_FILE = re.compile(r"optimi[sz]|performance|benchmark", re.IGNORECASE)
_QUALITY_FILE = re.compile(r"lint|prettier|ruff|flake8", re.IGNORECASE)

OVERRIDE_RULES: tuple = (
    PersonalityRule(
        "performance",
        lambda ctx: bool(
            _PERF_COMMAND.search(ctx.command) or _PERF_FILE.search(ctx.file_path)
        ),
        lambda ctx: (
            Label.PERFORMANCE_OPTIMIZER
            if _PERF_COMMAND.search(ctx.command)
            else Label.PERFORMANCE_TUNER
        ),
    ),
    PersonalityRule(
        "quality",
        lambda ctx: bool(_QUALITY_FILE.search(ctx.file_path)),
        _fixed(Label.QUALITY_AUDITOR),
    ),
)


def determine_personality(ctx: RuleContext) -> str:
    """Resolve the personality label for a classified event."""
    label = next(rule.label(ctx) for rule in PERSONALITY_RULES if rule.matches(ctx))
    for rule in OVERRIDE_RULES:
        if rule.matches(ctx):
            label = rule.label(ctx)
    return label


def matching_rule(ctx: RuleContext) -> str:
    """Name of the first-match rule (diagnostics and tests)."""
    return next(rule.name for rule in PERSONALITY_RULES if rule.matches(ctx))
