#!/usr/bin/env python3
"""Put the personalities lib/ directory on sys.path. Import this first in hooks.

Imported for side effects only; hooks run as plain scripts, not as an
installed package, so lib/ is located relative to this file.
"""

import sys
from pathlib import Path

LIB_DIR = Path(__file__).resolve().parent.parent / "lib"

if str(LIB_DIR) not in sys.path:
    sys.path.insert(0, str(LIB_DIR))
