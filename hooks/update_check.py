#!/usr/bin/env python3
"""
Background update check. Spawned detached by personality_hook.py prompt-submit.

Fetches the latest release tag and rewrites the update cache read by the
statusline. Silent; failures are only logged.
"""

import _lib_path  # noqa: F401
import sys

from _logging import log_debug
from _update_check import refresh_update_cache
from personalities import VERSION


def main() -> int:
    try:
        latest = refresh_update_cache(VERSION)
    except Exception as e:
        log_debug("update_check", f"failed: {type(e).__name__}: {e}")
        return 0
    log_debug("update_check", f"latest release: {latest or 'unknown'} (running {VERSION})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
