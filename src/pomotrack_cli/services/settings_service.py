"""Timer settings store.

Durations live in their own JSON document under a fixed key so the timer can
read them without loading the rest of the configuration.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir
from pydantic import ValidationError

from pomotrack_cli.models.config_models import TimerSettings
from pomotrack_cli.utils.logger import get_logger

SETTINGS_KEY = "timer_settings"

logger = get_logger("settings")


class SettingsStore:
    """Persists and retrieves ``TimerSettings``."""

    def __init__(self, config_dir: Path | None = None):
        if config_dir is None:
            config_dir = Path(user_config_dir("pomotrack_cli"))
        self.config_dir = config_dir
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.settings_file = self.config_dir / f"{SETTINGS_KEY}.json"

    def get(self) -> TimerSettings:
        """Return the stored settings, or defaults if absent or invalid."""
        if not self.settings_file.exists():
            return TimerSettings()

        try:
            with open(self.settings_file, encoding="utf-8") as f:
                return TimerSettings.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("timer settings unreadable, using defaults: %s", e)
            return TimerSettings()

    def set(self, settings: TimerSettings) -> None:
        """Persist settings. Write failures are logged, never raised."""
        try:
            with open(self.settings_file, "w", encoding="utf-8") as f:
                f.write(settings.model_dump_json(indent=2))
        except OSError as e:
            logger.warning("could not save timer settings: %s", e)


def get_settings_store() -> SettingsStore:
    """Get a SettingsStore in the user config directory."""
    return SettingsStore()
