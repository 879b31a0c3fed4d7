"""
Debug logging for hook and statusline entry points.

Hooks talk to the host over stdout, so nothing here may print. Records go to
~/.claude/tmp/personalities_debug.log only when CLAUDE_PERSONALITIES_DEBUG is set.
"""

import logging
import os
from pathlib import Path

DEBUG_ENV_VAR = "CLAUDE_PERSONALITIES_DEBUG"
DEBUG_LOG_FILE = Path.home() / ".claude" / "tmp" / "personalities_debug.log"

logger = logging.getLogger("personalities")
logger.propagate = False

_configured = False


def _configure() -> None:
    global _configured
    _configured = True

    if not os.environ.get(DEBUG_ENV_VAR):
        logger.addHandler(logging.NullHandler())
        return

    try:
        DEBUG_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(DEBUG_LOG_FILE)
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(process)d] %(levelname)s %(message)s")
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def log_debug(source: str, message: str) -> None:
    """Log a diagnostic message tagged with the calling component."""
    if not _configured:
        _configure()
    logger.debug("%s: %s", source, message)
