"""Configuration service for todo-cli.

Single source of truth for settings: loads and saves ``config.json`` in the
platform config directory and resolves the paths commands work with.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from todo_cli.exceptions import ValidationError
from todo_cli.models.config_models import AppConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Loads, edits and saves the application configuration."""

    def __init__(self):
        """Initialize the config service."""
        self.config_dir = Path(user_config_dir("todo_cli"))
        self.config_path = self.config_dir / "config.json"

        self._config: AppConfig | None = None
        self._storage_override: Path | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from disk, falling back to defaults."""
        try:
            with open(self.config_path, encoding="utf-8") as f:
                return AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            return AppConfig()
        except (OSError, PydanticValidationError) as e:
            # A broken config should never block working with todos
            logger.warning("ignoring unreadable config %s: %s", self.config_path, e)
            return AppConfig()

    def save_config(self) -> None:
        """Save the current configuration to disk."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write(self.config.model_dump_json(indent=2))

    def reset_config(self) -> None:
        """Reset configuration to defaults."""
        self._config = AppConfig()
        if self.config_path.exists():
            self.config_path.unlink()

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, BaseModel) or part not in type(value).model_fields:
                raise ValidationError(f"Unknown config key: {key}")
            value = getattr(value, part)
        return value

    def set(self, key: str, value: str) -> Any:
        """Set a configuration value by dot-separated key and save.

        The value is validated by the config models; list settings take a
        comma-separated string.
        """
        current = self.get(key)
        if isinstance(current, BaseModel):
            raise ValidationError(f"'{key}' is a section, not a value")

        new_value: Any = value
        if isinstance(current, list):
            new_value = [item.strip() for item in value.split(",") if item.strip()]

        data = self.config.model_dump()
        *parents, leaf = key.split(".")
        target = data
        for part in parents:
            target = target[part]
        target[leaf] = new_value

        try:
            self._config = AppConfig.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid value for {key}: {e.errors()[0]['msg']}") from e
        self.save_config()
        return self.get(key)

    def as_dict(self) -> dict[str, Any]:
        return json.loads(self.config.model_dump_json())

    def override_storage_path(self, path: str | Path | None) -> None:
        """Use ``path`` instead of ``storage.path`` for this process."""
        self._storage_override = Path(path) if path else None

    @property
    def storage_path(self) -> Path:
        if self._storage_override is not None:
            return self._storage_override
        return Path(self.config.storage.path).expanduser()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the process-wide ConfigService."""
    return ConfigService()
