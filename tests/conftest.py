"""Shared fixtures for personalities tests."""

import sys
from pathlib import Path

# Add lib and hooks to path for imports
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "hooks"))
sys.path.insert(0, str(ROOT / "lib"))

import pytest  # noqa: E402

import _update_check  # noqa: E402
from _session_store import FileStateStore, MemoryStateStore, set_store  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.claude config and /tmp files."""
    monkeypatch.setenv("CLAUDE_PERSONALITIES_CONFIG", str(tmp_path / "personalities_config.json"))
    monkeypatch.delenv("CLAUDE_SESSION_ID", raising=False)
    monkeypatch.delenv("CLAUDE_PERSONALITIES_DEBUG", raising=False)
    monkeypatch.setattr(_update_check, "get_cache_file", lambda: tmp_path / "update_check.json")

    set_store(FileStateStore(tmp_path / "state"))
    yield
    set_store(None)


@pytest.fixture
def config_file(tmp_path):
    """Path the config loader reads during this test."""
    return tmp_path / "personalities_config.json"


@pytest.fixture
def memory_store():
    """In-memory store installed as the process-wide default."""
    store = MemoryStateStore()
    set_store(store)
    return store


@pytest.fixture
def file_store(tmp_path):
    return FileStateStore(tmp_path / "sessions")


@pytest.fixture(params=["memory", "file"])
def any_store(request, tmp_path):
    """Each store implementation in turn."""
    if request.param == "memory":
        return MemoryStateStore()
    return FileStateStore(tmp_path / "sessions")
