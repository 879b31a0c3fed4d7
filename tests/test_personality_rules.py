#!/usr/bin/env python3
"""Tests for _personality_rules module.

Covers rule priority, the shell command families, file-type labels,
time-of-day buckets and the cross-cutting performance/quality overrides.
"""

import sys
from pathlib import Path

import pytest

# Add lib to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "lib"))

from _personality_constants import DEFAULT_THRESHOLDS, Activity, Label  # noqa: E402
from _personality_rules import (  # noqa: E402
    PERSONALITY_RULES,
    RuleContext,
    command_name,
    determine_personality,
    file_type_label,
    matching_rule,
    shell_family_label,
    time_of_day_label,
)


def ctx(
    tool_name="Edit",
    activity=Activity.EDITING,
    file_path="",
    command="",
    consecutive_actions=1,
    error_count=0,
    hour=10,
):
    return RuleContext(
        tool_name=tool_name,
        activity=activity,
        file_path=file_path,
        command=command,
        consecutive_actions=consecutive_actions,
        error_count=error_count,
        hour=hour,
        thresholds=DEFAULT_THRESHOLDS,
    )


def shell(command, **kwargs):
    return ctx(tool_name="Bash", activity=Activity.EXECUTING, command=command, **kwargs)


class TestRuleTable:
    """Ordering and totality of PERSONALITY_RULES."""

    def test_last_rule_always_matches(self):
        assert PERSONALITY_RULES[-1].name == "fallback"
        assert PERSONALITY_RULES[-1].matches(ctx(tool_name="Unknown"))

    def test_rule_names_are_unique(self):
        names = [rule.name for rule in PERSONALITY_RULES]
        assert len(names) == len(set(names))

    def test_critical_errors_beat_everything_below(self):
        c = shell("git push", error_count=5)
        assert matching_rule(c) == "table_flipper"
        assert determine_personality(c) == Label.TABLE_FLIPPER

    def test_warn_errors(self):
        c = ctx(file_path="README.md", error_count=3)
        assert determine_personality(c) == Label.ERROR_WARRIOR

    def test_git_before_tests(self):
        assert determine_personality(shell("git stash")) == Label.GIT_MANAGER

    @pytest.mark.parametrize(
        "command",
        ["npm test", "yarn run test", "pytest -x", "python -m pytest tests", "cargo test", "go test ./..."],
    )
    def test_test_runners(self, command):
        assert determine_personality(shell(command)) == Label.TEST_TASKMASTER

    def test_search_rookie_and_veteran(self):
        rookie = ctx(tool_name="Grep", activity=Activity.SEARCHING, consecutive_actions=2)
        veteran = ctx(tool_name="Grep", activity=Activity.SEARCHING, consecutive_actions=6)
        assert determine_personality(rookie) == Label.BUG_HUNTER
        assert determine_personality(veteran) == Label.SEARCH_MAESTRO

    def test_file_type_before_streaks(self):
        c = ctx(file_path="docs/guide.md", consecutive_actions=30)
        assert determine_personality(c) == Label.DOCUMENTATION_WRITER

    def test_streaks(self):
        assert determine_personality(ctx(file_path="a.py", consecutive_actions=11)) == (
            Label.HYPERFOCUSED_CODER
        )
        assert determine_personality(ctx(file_path="a.py", consecutive_actions=21)) == (
            Label.CODE_BERSERKER
        )
        assert determine_personality(ctx(file_path="a.py", consecutive_actions=10)) == (
            Label.CODE_WIZARD
        )


class TestFileTypes:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("README.md", Label.DOCUMENTATION_WRITER),
            ("docs/intro.rst", Label.DOCUMENTATION_WRITER),
            ("src/Button.jsx", Label.UI_DEVELOPER),
            ("src/App.tsx", Label.UI_DEVELOPER),
            ("src/auth.js", Label.UI_DEVELOPER),
            ("app/auth_service.py", Label.SECURITY_ANALYST),
            ("styles/main.scss", Label.STYLE_ARTIST),
            ("settings.yaml", Label.CONFIG_HELPER),
            ("tsconfig.json", Label.CONFIG_HELPER),
            ("src/main.rs", None),
            ("", None),
        ],
    )
    def test_file_type_label(self, path, expected):
        assert file_type_label(path) == expected


class TestShellFamilies:
    @pytest.mark.parametrize(
        "command,expected",
        [
            ("kubectl rollout restart deploy/api", Label.DEPLOYMENT_GUARD),
            ("psql -c 'select 1'", Label.DATABASE_EXPERT),
            ("ls -la", Label.FILE_EXPLORER),
            ("npm run build", Label.COMPILATION_WARRIOR),
            ("npm run lint", Label.COMPILATION_WARRIOR),
            ("yarn dev", Label.COMPILATION_WARRIOR),
            ("npm install lodash", Label.DEPENDENCY_WRANGLER),
            ("make all", Label.COMPILATION_WARRIOR),
            ("pkill node", Label.TASK_ASSASSIN),
            ("curl https://example.com", Label.NETWORK_NINJA),
            ("df -h", Label.SYSTEM_DETECTIVE),
            ("systemctl status nginx", Label.SYSTEM_ADMIN),
            ("chmod +x run.sh", Label.PERMISSION_POLICE),
            ("sed -i s/a/b/ file", Label.STRING_SURGEON),
            ("vim notes", Label.EDITOR_USER),
            ("tar xzf backup.tgz", Label.COMPRESSION_CHEF),
            ("export FOO=1", Label.ENVIRONMENT_ENCHANTER),
            ("svn update", Label.CODE_HISTORIAN),
            ("docker ps", Label.CONTAINER_CAPTAIN),
            ("frobnicate --all", Label.COMMAND_WONDERER),
            ("", Label.COMMAND_WONDERER),
        ],
    )
    def test_family_label(self, command, expected):
        assert shell_family_label(command) == expected

    def test_fallback_uses_family_for_shell(self):
        assert determine_personality(shell("docker ps")) == Label.CONTAINER_CAPTAIN

    def test_command_name_strips_directory(self):
        assert command_name("/usr/local/bin/git status") == "git"
        assert command_name("   ") == ""


class TestFallback:
    @pytest.mark.parametrize(
        "hour,expected",
        [
            (0, Label.NIGHT_CODER),
            (5, Label.NIGHT_CODER),
            (6, Label.COFFEE_POWERED),
            (11, Label.COFFEE_POWERED),
            (12, Label.AFTERNOON_THINKER),
            (16, Label.AFTERNOON_THINKER),
            (17, Label.EVENING_EXPLORER),
            (21, Label.EVENING_EXPLORER),
            (22, Label.NIGHT_CODER),
            (23, Label.NIGHT_CODER),
        ],
    )
    def test_time_buckets(self, hour, expected):
        assert time_of_day_label(hour) == expected

    def test_unknown_tool_gets_time_label(self):
        c = ctx(tool_name="TodoWrite", activity=Activity.THINKING, hour=13)
        assert determine_personality(c) == Label.AFTERNOON_THINKER

    @pytest.mark.parametrize(
        "tool,expected",
        [
            ("Edit", Label.CODE_WIZARD),
            ("Write", Label.GENTLE_REFACTORER),
            ("Delete", Label.CODE_JANITOR),
            ("Review", Label.CASUAL_CODE_REVIEWER),
            ("Read", Label.RESEARCH_KING),
        ],
    )
    def test_tool_defaults_replace_time_label(self, tool, expected):
        assert determine_personality(ctx(tool_name=tool, file_path="lib/core.c")) == expected

    def test_long_read_streak(self):
        c = ctx(tool_name="Read", activity=Activity.READING, file_path="a.c", consecutive_actions=6)
        assert determine_personality(c) == Label.SEARCH_MAESTRO


class TestOverrides:
    """Performance and quality labels are applied after the rule table."""

    def test_benchmark_command(self):
        assert determine_personality(shell("python benchmark.py")) == (
            Label.PERFORMANCE_OPTIMIZER
        )

    def test_profiling_command_beats_git(self):
        assert determine_personality(shell("git log --grep=profiling")) == (
            Label.PERFORMANCE_OPTIMIZER
        )

    def test_optimize_file(self):
        assert determine_personality(ctx(file_path="src/optimizer.py")) == (
            Label.PERFORMANCE_TUNER
        )

    def test_lint_file_beats_config(self):
        assert determine_personality(ctx(file_path=".eslintrc.json")) == (
            Label.QUALITY_AUDITOR
        )

    def test_overrides_win_over_frustration(self):
        c = ctx(file_path="perf/benchmark_utils.py", error_count=9)
        assert matching_rule(c) == "table_flipper"
        assert determine_personality(c) == Label.PERFORMANCE_TUNER

    def test_quality_applied_after_performance(self):
        c = ctx(file_path="tools/lint_performance.py")
        assert determine_personality(c) == Label.QUALITY_AUDITOR
