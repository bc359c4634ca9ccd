"""Persistent user preferences for the prompt editor.

Settings are stored as JSON in an OS-appropriate config directory and
survive restarts. Missing, unreadable or invalid entries fall back to the
defaults in LineConstants.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import LineConstants
from .line import RenderMode

logger = logging.getLogger(__name__)

LINE_MODES = tuple(mode.value for mode in RenderMode)


def default_settings() -> Dict[str, Any]:
    return {
        "line_mode": LineConstants.DEFAULT_LINE_MODE,
        "prompt": LineConstants.DEFAULT_PROMPT,
        "history_limit": LineConstants.DEFAULT_HISTORY_LIMIT,
    }


def validate_setting(key: str, value: Any) -> bool:
    """Validate a setting value.

    Args:
        key: Setting key name.
        value: Setting value to validate.

    Returns:
        True if the value is acceptable for the key.
    """
    if key == "line_mode":
        return value in LINE_MODES
    if key == "prompt":
        return isinstance(value, str) and "\n" not in value
    if key == "history_limit":
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return 1 <= value <= LineConstants.MAX_HISTORY_LIMIT
    # Unknown settings are kept for forward compatibility
    return True


class SettingsStore:
    """Loads and saves the settings file."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or Path(platformdirs.user_config_dir(LineConstants.APP_NAME))
        self._settings_file = self._config_dir / LineConstants.SETTINGS_FILENAME

    @property
    def path(self) -> Path:
        return self._settings_file

    def load(self) -> Dict[str, Any]:
        """Return defaults overlaid with every valid stored value."""
        settings = default_settings()
        if not self._settings_file.exists():
            return settings

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return settings

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return settings

        for key, value in data.items():
            if validate_setting(key, value):
                settings[key] = value
            else:
                logger.warning(f"Ignoring invalid value for setting {key!r}: {value!r}")
        return settings

    def save(self, settings: Dict[str, Any]) -> bool:
        """Save settings atomically.

        The CLI calls this for ``--save`` to keep the chosen line mode.

        Returns:
            True if save was successful, False otherwise.
        """
        for key, value in settings.items():
            if not validate_setting(key, value):
                logger.warning(f"Refusing to save invalid value for {key!r}: {value!r}")
                return False

        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False
