"""Configuration service for managing PomoTrack CLI configuration.

``ConfigService`` is the single source of truth for:

- Loading and saving config.json
- Dot-path access to individual settings (``api.endpoint``)
- Credential storage for the remote account
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from pomotrack_cli.models.config_models import AppConfig
from pomotrack_cli.utils.logger import get_logger

API_URL_ENV = "POMOTRACK_API_URL"
CREDENTIALS_KEY = "credentials"

logger = get_logger("config")


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""
        self.config_dir = Path(user_config_dir("pomotrack_cli"))
        self.config_path = self.config_dir / "config.json"
        self.credentials_path = self.config_dir / f"{CREDENTIALS_KEY}.json"
        self.data_dir = Path(user_data_dir("pomotrack_cli"))

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except (OSError, ValidationError) as e:
            logger.warning("config file unreadable, using defaults: %s", e)
            self._config = AppConfig()

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self, key: str | None = None) -> None:
        """Reset the whole configuration, or one dot-separated key, to defaults."""
        if key is None:
            self._config = AppConfig()
        else:
            self.set(key, self._lookup(AppConfig(), key))
        self.save_config()

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self._lookup(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises KeyError for unknown keys and pydantic.ValidationError for
        values the model rejects.
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)

        current[keys[-1]] = value
        self._config = AppConfig.model_validate(config_dict)
        self.save_config()

    @staticmethod
    def _lookup(config: AppConfig, key: str) -> Any:
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel) and k in type(value).model_fields:
                value = getattr(value, k)
            else:
                raise KeyError(key)
        return value

    def get_api_endpoint(self) -> str:
        """Backend URL: environment variable first, then config."""
        env_url = os.getenv(API_URL_ENV)
        if env_url:
            return env_url.strip().rstrip("/")
        return self.config.api.endpoint

    # ----- Credentials -----
    def load_credentials(self) -> dict | None:
        """Load the stored token and user, or None when logged out."""
        if not self.credentials_path.exists():
            return None
        try:
            with open(self.credentials_path, encoding="utf-8") as f:
                credentials = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("credentials file unreadable: %s", e)
            return None
        if not isinstance(credentials, dict) or not credentials.get("token"):
            return None
        return credentials

    def save_credentials(self, token: str, user: dict | None = None) -> None:
        """Save authentication credentials readable only by the owner."""
        credentials: dict[str, Any] = {"token": token}
        if user:
            credentials["user"] = user

        with open(self.credentials_path, "w", encoding="utf-8") as f:
            json.dump(credentials, f, indent=2)
        self.credentials_path.chmod(0o600)

    def clear_credentials(self) -> None:
        """Remove stored credentials."""
        if self.credentials_path.exists():
            self.credentials_path.unlink()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Return the process-wide ConfigService."""
    return ConfigService()
