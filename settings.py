"""JSON-based settings persistence for the month grid."""

import json
import logging
import os

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".month-grid-settings.json")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_DEFAULTS = {
    "highlight_current_week": True,
    "log_level": "WARNING",
}

# Loggers whose level follows the "log_level" setting
_LIBRARY_LOGGERS = ("month_grid", __name__)


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(_SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
        if not isinstance(stored, dict):
            logger.debug("Ignoring non-object settings in %s", _SETTINGS_PATH)
            return settings
        if "highlight_current_week" in stored and isinstance(stored["highlight_current_week"], bool):
            settings["highlight_current_week"] = stored["highlight_current_week"]
        level = stored.get("log_level")
        if isinstance(level, str) and level.upper() in _LOG_LEVELS:
            settings["log_level"] = level.upper()
    except (FileNotFoundError, json.JSONDecodeError, OSError) as exc:
        logger.debug("Using default settings (%s)", exc)
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(_SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def apply_log_level(settings: dict) -> None:
    """Set the library loggers to the configured level (handlers untouched)."""
    level = settings.get("log_level", _DEFAULTS["log_level"])
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(level)
