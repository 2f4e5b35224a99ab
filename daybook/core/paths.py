#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration for the Daybook project.

The project structure:
    ROOT/
    ├── daybook/       # Package code
    ├── data/          # User data (record store, exports)
    └── logs/          # Application logs

Paths are resolved at import time relative to the project root. None of
them need to exist until a command writes to them.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/daybook/core/paths.py.
    """
    # paths.py -> core/ -> daybook/ -> ROOT/
    return Path(__file__).resolve().parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()
DATA_DIR = ROOT / "data"

# ---- Records ----
STORE_PATH = DATA_DIR / "daybook.yaml"

# ---- Journal documents ----
EXPORT_DIR = DATA_DIR / "exports"

# ---- Logs ----
LOG_DIR = ROOT / "logs"
