"""
Configuration module for the archiver query pipeline.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants
from .errors import ConfigError


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {self.config_file}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                self.config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration file {self.config_file}: {e}") from e

        if not isinstance(self.config, dict):
            raise ConfigError("Configuration root must be a JSON object")

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        env_overrides = {
            "ARCHIVER_SERVER": ("archiver", "server"),
            "ARCHIVER_MANAGE_PORT": ("archiver", "manage_port"),
            "ARCHIVER_DATA_PORT": ("archiver", "data_port"),
            "LOG_LEVEL": ("logging", "level"),
        }

        for env_var, (section, key) in env_overrides.items():
            value = os.getenv(env_var)
            if value:
                self.config.setdefault(section, {})[key] = value

        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        archiver = self.config.get("archiver")
        if not isinstance(archiver, dict):
            raise ConfigError("Missing required configuration section: archiver")

        missing_keys = [
            f"archiver.{key}"
            for key in ("server", "manage_port", "data_port")
            if not archiver.get(key)
        ]
        if missing_keys:
            raise ConfigError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        for key in ("manage_port", "data_port"):
            if not str(archiver[key]).isdigit():
                raise ConfigError(f"archiver.{key} must be a port number, got {archiver[key]!r}")

        workers = self.get("query.max_workers", constants.DEFAULT_MAX_WORKERS)
        if not isinstance(workers, int) or workers < 1:
            raise ConfigError(f"query.max_workers must be a positive integer, got {workers!r}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'archiver.server')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def server(self) -> str:
        """Get archiver host name."""
        return self.get("archiver.server", "")

    @property
    def manage_port(self) -> str:
        """Get archiver management port."""
        return str(self.get("archiver.manage_port", ""))

    @property
    def data_port(self) -> str:
        """Get archiver data retrieval port."""
        return str(self.get("archiver.data_port", ""))

    @property
    def data_timeout(self) -> int:
        """Get data retrieval timeout in seconds."""
        return self.get("archiver.data_timeout", constants.DATA_TIMEOUT)

    @property
    def status_timeout(self) -> int:
        """Get management call timeout in seconds."""
        return self.get("archiver.status_timeout", constants.STATUS_TIMEOUT)

    @property
    def max_workers(self) -> int:
        """Get number of worker threads for batch queries."""
        return self.get("query.max_workers", constants.DEFAULT_MAX_WORKERS)

    @property
    def log_level(self) -> str:
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        return self.get("logging.file")

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, server={self.server}, env={self.get('environment')})"
