"""Configuration service for Noruno.

This module provides the ConfigService class, the single source of truth for
configuration. It handles:

- Loading and saving config.json
- Config file initialization with defaults on first run
- Resolving the data directory and storage strategy
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from noruno.models.config_models import AppConfig
from noruno.models.exceptions import ConfigurationError
from noruno.models.storage_strategy import StorageStrategy, create_storage_strategy
from noruno.utils.logger import get_logger

logger = get_logger(__name__)


def resolve_data_dir(config: AppConfig) -> Path:
    """Configured data directory, or the platform default."""
    return Path(config.storage.data_dir or user_data_dir("noruno"))


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir("noruno"))
        self.config_path = self.config_dir / "config.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def data_dir(self) -> Path:
        """Configured data directory, or the platform default."""
        return resolve_data_dir(self.config)

    def load_config(self) -> AppConfig:
        """Load configuration, creating the default file on first run.

        Raises:
            ConfigurationError: If config.json exists but is invalid
        """
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = AppConfig()
            self.save_config()
            logger.info("Created default config at %s", self.config_path)
        except (OSError, ValidationError) as e:
            raise ConfigurationError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except OSError as e:
            raise ConfigurationError(f"Failed to save config: {e}") from e

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self.save_config()
        return self._config

    def set_backend(self, backend: str) -> AppConfig:
        """Switch the storage backend ("sqlite" or "json").

        Raises:
            ConfigurationError: If backend is not a known backend
        """
        data = self.config.model_dump()
        data["storage"]["backend"] = backend
        try:
            self._config = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid storage backend: {backend}") from e
        self.save_config()
        logger.info("Storage backend set to %s", backend)
        return self._config

    def create_storage_strategy(self) -> StorageStrategy:
        """Storage strategy for the configured backend and data directory."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return create_storage_strategy(self.config.storage, self.data_dir)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
