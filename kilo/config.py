"""Persistent JSON config helpers.

Reads the tab stop width and the optional log file location.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .document import TAB_STOP

APP_NAME = "kilo"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
MAX_TAB_STOP = 32


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_tab_stop() -> int:
    """Return the configured tab stop, or the default when absent or invalid.

    Booleans and values outside ``[1, MAX_TAB_STOP]`` are rejected.
    """
    value = load_config().get("tab_stop")
    if isinstance(value, bool) or not isinstance(value, int):
        return TAB_STOP
    if value < 1 or value > MAX_TAB_STOP:
        return TAB_STOP
    return value


def load_log_path() -> Path | None:
    value = load_config().get("log_file")
    if not isinstance(value, str) or not value.strip():
        return None
    return Path(value).expanduser()
