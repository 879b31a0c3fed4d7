#!/usr/bin/env python3
"""
Update Check - Cached "newer release available" lookup.

The statusline only ever reads the cache file. The network fetch happens in a
detached background process (hooks/update_check.py) spawned from the
prompt-submit hook when the cache is older than the TTL.

Cache format: {"latest_version": "v1.2.0", "current_version": "1.1.0", "timestamp": 1700000000}
"""

import json
import logging
import os
import subprocess
import sys
import tempfile
import time
from pathlib import Path
from typing import Optional

import requests

from _config import get_update_setting

CACHE_FILE_NAME = "claude_personalities_update_check.json"
REFRESH_SCRIPT = Path(__file__).parent.parent / "hooks" / "update_check.py"


def get_cache_file() -> Path:
    return Path(tempfile.gettempdir()) / CACHE_FILE_NAME


def _strip_v(version: str) -> str:
    return version[1:] if version[:1] in ("v", "V") else version


def _read_cache(cache_file: Path) -> Optional[dict]:
    try:
        data = json.loads(cache_file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, ValueError, RecursionError) as e:
        logging.warning("_update_check: cache unreadable: %s", e)
        return None
    return data if isinstance(data, dict) else None


def _cache_age(data: dict, now: float) -> Optional[float]:
    timestamp = data.get("timestamp")
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        return None
    return now - timestamp


def is_cache_fresh(
    now: Optional[float] = None, cache_file: Optional[Path] = None
) -> bool:
    data = _read_cache(cache_file or get_cache_file())
    if data is None:
        return False
    age = _cache_age(data, time.time() if now is None else now)
    return age is not None and age < get_update_setting("ttl_seconds")


def read_cached_update(
    current_version: str,
    now: Optional[float] = None,
    cache_file: Optional[Path] = None,
) -> Optional[str]:
    """Newer version string from a fresh cache, else None. Never raises."""
    data = _read_cache(cache_file or get_cache_file())
    if data is None:
        return None

    age = _cache_age(data, time.time() if now is None else now)
    if age is None or age >= get_update_setting("ttl_seconds"):
        return None

    latest = data.get("latest_version")
    if not isinstance(latest, str) or not latest.strip():
        return None
    # Cache written by another installed version says nothing about this one
    if data.get("current_version") != current_version:
        return None
    if _strip_v(latest.strip()) == _strip_v(current_version):
        return None
    return latest.strip()


def fetch_latest_version(
    url: Optional[str] = None, timeout: Optional[float] = None
) -> Optional[str]:
    """Latest release tag from the releases API, or None on any failure."""
    url = url or get_update_setting("releases_url")
    timeout = timeout or get_update_setting("timeout_seconds")
    try:
        response = requests.get(
            url,
            headers={"Accept": "application/vnd.github+json"},
            timeout=timeout,
        )
        response.raise_for_status()
        tag = response.json().get("tag_name")
    except requests.exceptions.RequestException as e:
        logging.warning("_update_check: release lookup failed: %s", e)
        return None
    except (ValueError, AttributeError) as e:
        logging.warning("_update_check: invalid release payload: %s", e)
        return None

    return tag if isinstance(tag, str) and tag.strip() else None


def write_cache(
    latest_version: str,
    current_version: str,
    now: Optional[float] = None,
    cache_file: Optional[Path] = None,
) -> None:
    """Atomically replace the cache file. Raises OSError on failure."""
    cache_file = cache_file or get_cache_file()
    payload = {
        "latest_version": latest_version,
        "current_version": current_version,
        "timestamp": int(time.time() if now is None else now),
    }
    fd, tmp_path = tempfile.mkstemp(
        dir=cache_file.parent, prefix=f".{cache_file.stem}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f)
        os.replace(tmp_path, cache_file)
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def refresh_update_cache(
    current_version: str, cache_file: Optional[Path] = None
) -> Optional[str]:
    """Fetch the latest release and cache it. Returns the fetched tag or None."""
    if not get_update_setting("enabled"):
        return None

    latest = fetch_latest_version()
    if latest is None:
        return None

    try:
        write_cache(latest, current_version, cache_file=cache_file)
    except OSError as e:
        logging.warning("_update_check: cache write failed: %s", e)
    return latest


def spawn_background_refresh(now: Optional[float] = None) -> bool:
    """Start hooks/update_check.py detached when the cache is stale.

    Returns True when a refresh process was started.
    """
    if not get_update_setting("enabled") or is_cache_fresh(now):
        return False
    if not REFRESH_SCRIPT.exists():
        return False

    try:
        subprocess.Popen(
            [sys.executable, str(REFRESH_SCRIPT)],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logging.warning("_update_check: could not start refresh: %s", e)
        return False
    return True
