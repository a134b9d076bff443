"""Configuration loader for gitlab-api-client.

This module loads the YAML configuration files from the config directory
and provides a singleton config object for easy access throughout the library.
"""

import os
from pathlib import Path
from typing import Any, cast

import yaml

from ..exceptions import ConfigurationError

CONFIG_DIR_ENV = "GITLAB_API_CONFIG_DIR"


class Config:
    """Configuration manager that loads and provides access to all config files."""

    def __init__(self, config_dict: dict[str, Any] | None = None):
        """
        Initialize the configuration manager.

        Args:
            config_dict: Optional dictionary of config values for testing.
                        If provided, config files won't be loaded from disk.
        """
        self._configs: dict[str, Any]
        self._config_dir: Path | None

        if config_dict is not None:
            # Testing mode: use provided config
            self._configs = config_dict
            self._config_dir = None
        else:
            self._configs = {}
            self._config_dir = self._find_config_dir()
            self._load_all_configs()

    def _find_config_dir(self) -> Path:
        """Find the config directory, honouring GITLAB_API_CONFIG_DIR."""
        override = os.environ.get(CONFIG_DIR_ENV)
        config_dir = Path(override) if override else Path(__file__).resolve().parent

        if not config_dir.exists():
            raise FileNotFoundError(
                f"Config directory not found at {config_dir}. "
                f"Please check the {CONFIG_DIR_ENV} environment variable."
            )

        return config_dir

    def _load_all_configs(self):
        """Load all YAML configuration files from the config directory."""
        if self._config_dir is None:
            return

        config_files = {
            "client": "client_config.yaml",
        }

        for key, filename in config_files.items():
            config_path = self._config_dir / filename
            if not config_path.exists():
                self._configs[key] = {}
                continue

            with open(config_path, encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f)

            if not isinstance(loaded_config, dict):
                raise ConfigurationError(
                    f"{filename} must contain a mapping, got {type(loaded_config).__name__}",
                    config_key=key,
                )
            self._configs[key] = loaded_config

    def get(self, path: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            path: Dot-separated path to the config value (e.g., "client.timeouts.request")
            default: Default value to return if path is not found

        Returns:
            The configuration value or default if not found

        Example:
            >>> config.get("client.api_version")
            'api/v4'
        """
        parts = path.split(".")
        value = self._configs

        for part in parts:
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def get_required(self, path: str) -> Any:
        """Get a configuration value that must be present.

        Raises:
            ConfigurationError: If the path is missing or its value is None
        """
        value = self.get(path)
        if value is None:
            raise ConfigurationError("required value is missing", config_key=path)
        return value

    @property
    def client(self) -> dict[str, Any]:
        """Get client configuration."""
        return cast(dict[str, Any], self._configs.get("client", {}))

    def reload(self):
        """Reload all configuration files."""
        self._configs.clear()
        self._load_all_configs()


# Create a singleton instance
config = Config()
