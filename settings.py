"""JSON-based settings persistence for Count Per Day."""

import json
import os

from calendar_logic import SUNDAY

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".count-per-day-settings.json")
_DEFAULT_DATA_DIR = os.path.join(os.path.expanduser("~"), ".count-per-day")

_DEFAULTS = {
    "first_weekday": SUNDAY,
    "window_width": None,
    "window_height": None,
    "data_dir": None,
}


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(_SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError, UnicodeDecodeError, OSError):
        return settings
    if not isinstance(stored, dict):
        return settings
    first = stored.get("first_weekday")
    if isinstance(first, int) and not isinstance(first, bool) and 0 <= first <= 6:
        settings["first_weekday"] = first
    for key in ("window_width", "window_height"):
        value = stored.get(key)
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            settings[key] = value
    if isinstance(stored.get("data_dir"), str) and stored["data_dir"]:
        settings["data_dir"] = stored["data_dir"]
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(_SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def data_dir(settings: dict) -> str:
    """Directory holding the counts file and the log."""
    return os.path.expanduser(settings.get("data_dir") or _DEFAULT_DATA_DIR)
