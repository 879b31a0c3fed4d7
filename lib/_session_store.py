#!/usr/bin/env python3
"""
Session Store - Load, save, reset, and delete per-session state.

Each hook invocation is a separate process, so the only shared resource is
one JSON file per session in the system temp directory. Writes go to a temp
file in the same directory followed by os.replace(), so a concurrent reader
sees either the old or the new complete file. Concurrent writers for the same
session are resolved last-writer-wins; no locks are taken.

load() never raises: a missing file is a fresh session, a corrupt one is
logged and treated as a fresh session.
"""

import hashlib
import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from _session_state_class import SessionState

STATE_FILE_PREFIX = "claude_personalities_activity_"
STATE_FILE_SUFFIX = ".json"
# Written by the shell version of the hooks; removed on session end
LEGACY_ERROR_FILE_PREFIX = "claude_errors_"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")
_MAX_ID_LEN = 96


def sanitize_session_id(session_id: str) -> str:
    """Filesystem-safe, deterministic stand-in for an opaque session id.

    Ids that needed rewriting get a short hash suffix so that distinct ids
    never share a file.
    """
    raw = str(session_id or "")
    safe = _UNSAFE_CHARS.sub("_", raw)[:_MAX_ID_LEN].lstrip(".")
    if not safe:
        safe = "unknown"
    if safe != raw:
        digest = hashlib.sha256(raw.encode("utf-8", "surrogatepass")).hexdigest()[:8]
        safe = f"{safe}-{digest}"
    return safe


class StateStore:
    """Key-value store of SessionState keyed by session id.

    Subclasses implement _read/_write/_remove; the public operations are
    shared so the file store and the in-memory fake behave the same.
    """

    def _read(self, session_id: str) -> Optional[str]:
        """Raw persisted text, or None when nothing is stored."""
        raise NotImplementedError

    def _write(self, session_id: str, text: str) -> None:
        raise NotImplementedError

    def _remove(self, session_id: str) -> None:
        raise NotImplementedError

    def exists(self, session_id: str) -> bool:
        return self._read(session_id) is not None

    def load(self, session_id: str) -> SessionState:
        """Persisted state for session_id, or the default state."""
        try:
            text = self._read(session_id)
        except (OSError, UnicodeDecodeError) as e:
            logging.warning("_session_store: state file unreadable: %s", e)
            return SessionState.default(session_id)

        if text is None:
            return SessionState.default(session_id)

        try:
            data = json.loads(text)
            if not isinstance(data, dict):
                raise TypeError(f"expected object, got {type(data).__name__}")
            return SessionState.from_dict(data, session_id=session_id)
        except (json.JSONDecodeError, TypeError, ValueError, RecursionError) as e:
            logging.warning(
                "_session_store: state file corrupted for %s: %s", session_id, e
            )
            return SessionState.default(session_id)

    def save(self, session_id: str, state: SessionState) -> None:
        """Persist state. Raises OSError when the write fails."""
        self._write(session_id, json.dumps(state.to_dict(), indent=2))

    def reset_errors(self, session_id: str) -> Optional[SessionState]:
        """Zero error_count, leaving every other field untouched.

        Sessions with nothing persisted are left alone (returns None), so a
        prompt arriving after session end does not resurrect a state file.
        """
        if not self.exists(session_id):
            return None
        state = self.load(session_id)
        state.error_count = 0
        self.save(session_id, state)
        return state

    def delete(self, session_id: str) -> None:
        """Remove persisted state. Unknown sessions are a no-op."""
        self._remove(session_id)


class FileStateStore(StateStore):
    """One JSON file per session under state_dir (default: system temp dir)."""

    def __init__(self, state_dir: Optional[Path] = None):
        self.state_dir = Path(state_dir or tempfile.gettempdir())

    def path_for(self, session_id: str) -> Path:
        name = f"{STATE_FILE_PREFIX}{sanitize_session_id(session_id)}{STATE_FILE_SUFFIX}"
        return self.state_dir / name

    def exists(self, session_id: str) -> bool:
        return self.path_for(session_id).exists()

    def _read(self, session_id: str) -> Optional[str]:
        path = self.path_for(session_id)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _write(self, session_id: str, text: str) -> None:
        path = self.path_for(session_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_path, path)
        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def _auxiliary_paths(self, session_id: str) -> list:
        path = self.path_for(session_id)
        stray_tmp = list(path.parent.glob(f".{path.stem}.*.tmp"))
        legacy = path.parent / f"{LEGACY_ERROR_FILE_PREFIX}{sanitize_session_id(session_id)}.count"
        return stray_tmp + [legacy]

    def _remove(self, session_id: str) -> None:
        for path in [self.path_for(session_id)] + self._auxiliary_paths(session_id):
            try:
                path.unlink()
            except FileNotFoundError:
                pass


class MemoryStateStore(StateStore):
    """In-process store holding serialized state; used by tests."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def _read(self, session_id: str) -> Optional[str]:
        return self._data.get(session_id)

    def _write(self, session_id: str, text: str) -> None:
        self._data[session_id] = text

    def _remove(self, session_id: str) -> None:
        self._data.pop(session_id, None)

    def put_raw(self, session_id: str, text: str) -> None:
        """Store arbitrary text, e.g. to simulate a corrupt file."""
        self._data[session_id] = text


# =============================================================================
# DEFAULT STORE (module-level convenience, like the hook runners expect)
# =============================================================================

_default_store: Optional[StateStore] = None


def get_store() -> StateStore:
    global _default_store
    if _default_store is None:
        _default_store = FileStateStore()
    return _default_store


def set_store(store: Optional[StateStore]) -> None:
    """Swap the process-wide store (None restores the file store on next use)."""
    global _default_store
    _default_store = store


def load_state(session_id: str) -> SessionState:
    return get_store().load(session_id)


def save_state(session_id: str, state: SessionState) -> None:
    get_store().save(session_id, state)


def reset_errors(session_id: str) -> Optional[SessionState]:
    return get_store().reset_errors(session_id)


def delete_state(session_id: str) -> None:
    get_store().delete(session_id)
