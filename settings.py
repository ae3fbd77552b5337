"""JSON-based settings persistence for the date picker form."""

import json
import logging
import os

log = logging.getLogger(__name__)

_SETTINGS_ENV = "MINI_DATE_PICKER_SETTINGS"

_DEFAULTS = {
    "min_date": None,
    "max_date": None,
    "date_placeholder": "Select date",
    "time_placeholder": "Select time",
    "export_dir": os.path.join(os.path.expanduser("~"), "Documents"),
    "log_level": "INFO",
}

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def settings_path() -> str:
    """Return the settings file path, honouring the environment override."""
    return os.environ.get(_SETTINGS_ENV) or os.path.join(
        os.path.expanduser("~"), ".mini-date-picker-settings.json")


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(settings_path(), "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        log.warning("Ignoring unreadable settings file: %s", exc)
        return settings
    if not isinstance(stored, dict):
        return settings

    for key in ("min_date", "max_date"):
        if key in stored and (stored[key] is None or isinstance(stored[key], str)):
            settings[key] = stored[key] or None
    for key in ("date_placeholder", "time_placeholder", "export_dir"):
        if key in stored and isinstance(stored[key], str):
            settings[key] = stored[key]
    level = stored.get("log_level")
    if isinstance(level, str) and level.upper() in _LEVELS:
        settings["log_level"] = level.upper()
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(settings_path(), "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
