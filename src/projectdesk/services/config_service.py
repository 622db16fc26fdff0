"""Configuration service for projectdesk.

This module provides the ConfigService class, the single source of truth for
configuration and persisted session state. It handles:

- Loading and saving config.json
- Environment overrides for the backend connection
- Dot-separated key access for the `config` commands
- Persisting the auth session between runs
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from projectdesk.models.config_models import AppConfig, BackendConfig

APP_NAME = "projectdesk"

ENV_BACKEND_URL = "PROJECTDESK_BACKEND_URL"
ENV_BACKEND_ANON_KEY = "PROJECTDESK_BACKEND_ANON_KEY"


class ConfigService:
    """Service for managing application configuration and the stored session."""

    def __init__(self):
        self.config_dir = Path(user_config_dir(APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(APP_NAME))
        self.session_path = self.data_dir / "session.json"

        # Ensure directories exist
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
        """Load configuration from disk, creating defaults on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except (ValidationError, OSError) as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    @property
    def backend(self) -> BackendConfig:
        """Backend settings with environment overrides applied.

        Overrides are never written back to config.json.
        """
        backend = self.config.backend.model_copy()
        url = os.environ.get(ENV_BACKEND_URL)
        if url:
            backend.url = url.strip().rstrip("/")
        anon_key = os.environ.get(ENV_BACKEND_ANON_KEY)
        if anon_key:
            backend.anon_key = anon_key
        return backend

    def save_config(self) -> None:
        """Save the current configuration to disk."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def get_from_config(self, config: AppConfig, key: str) -> Any:
        """Get value from a config object using dot notation."""
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel) and k in type(value).model_fields:
                value = getattr(value, k)
            else:
                return None
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name an existing setting
            pydantic.ValidationError: If the value is invalid for the setting
        """
        if self.get(key) is None or isinstance(self.get(key), BaseModel):
            raise KeyError(key)

        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        self._config = AppConfig(**config_dict)
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset configuration, or a single key, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
            return

        default_value = self.get_from_config(AppConfig(), key)
        if default_value is None:
            raise KeyError(key)
        self.set(key, default_value)

    def load_session(self) -> dict | None:
        """Load the persisted session, or None if there is none."""
        if not self.session_path.exists():
            return None

        try:
            with open(self.session_path, encoding="utf-8") as f:
                return json.load(f)
        except JSONDecodeError:
            return None

    def save_session(self, session: dict) -> None:
        """Persist a session (tokens, expiry and user)."""
        self.session_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.session_path, "w", encoding="utf-8") as f:
            json.dump(session, f, indent=2)

        # Set secure file permissions
        self.session_path.chmod(0o600)

    def clear_session(self) -> None:
        """Remove the persisted session."""
        if self.session_path.exists():
            self.session_path.unlink()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
