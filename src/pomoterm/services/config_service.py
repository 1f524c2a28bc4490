"""Configuration service for pomoterm.

Single source of truth for where files live and for reading and writing
config.json. The persistence gateway uses it for the settings half of a
snapshot.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from pomoterm.core.exceptions import PersistenceFailure
from pomoterm.models.config_models import AppConfig
from pomoterm.utils.atomic import atomic_write_text

APP_NAME = "pomoterm"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self, config_dir: Path | None = None, data_dir: Path | None = None):
        """Initialize the config service."""
        self.config_dir = Path(config_dir or user_config_dir(APP_NAME))
        self.data_dir = Path(data_dir or user_data_dir(APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.state_path = self.data_dir / "state.json"

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
        """Load configuration from disk. A missing file yields defaults.

        Raises:
            PersistenceFailure: If the file exists but cannot be parsed
        """
        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
        except (OSError, ValidationError) as e:
            raise PersistenceFailure(f"Failed to load config: {e}") from e
        return self._config

    def save_config(self, config: AppConfig | None = None) -> None:
        """Save the configuration atomically."""
        if config is not None:
            self._config = config
        try:
            atomic_write_text(self.config_path, self.config.model_dump_json(indent=4))
        except OSError as e:
            raise PersistenceFailure(f"Failed to save config: {e}") from e

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self.save_config()
        return self._config


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    return ConfigService()
