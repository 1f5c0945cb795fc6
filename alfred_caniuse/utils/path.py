"""
Utilities for resolving per-user directories.
"""

import os
import sys
from pathlib import Path

APP_NAME = "alfred-caniuse"
CACHE_NAMESPACE = "dev.alfred-caniuse.py"


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / APP_NAME


def get_cache_dir() -> Path:
    """Returns the platform cache directory, namespaced for this tool."""
    if os.name == "nt":
        base_dir = Path(os.getenv("LOCALAPPDATA", "~\\AppData\\Local"))
    elif sys.platform == "darwin":
        base_dir = Path("~/Library/Caches")
    else:
        base_dir = Path(os.getenv("XDG_CACHE_HOME", "~/.cache"))
    return base_dir.expanduser() / CACHE_NAMESPACE
