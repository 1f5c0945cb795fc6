"""
Manages loading and validation of the optional INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from alfred_caniuse.exceptions import ConfigurationError
from alfred_caniuse.models.config import AppConfig

log = logging.getLogger(__name__)

_FLOAT_KEYS = {
    "cache_ttl_hours",
    "update_check_interval_hours",
    "update_probe_timeout",
    "fetch_timeout",
}
_BOOL_KEYS = {"check_updates"}


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser()

    def load_config(self, cli_options: dict[str, Any] | None = None) -> AppConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        A missing config file is not an error; built-in defaults apply.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated AppConfig object.

        Raises:
            ConfigurationError: If the config file is invalid or validation fails.
        """
        config_from_file: dict[str, Any] = {}
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
                config_from_file = self._get_config_as_dict()
            except (configparser.Error, ValueError) as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e
        else:
            log.debug(
                f"No config file at '{self.config_file_path}', using defaults."
            )

        # Override with CLI options
        if cli_options:
            config_from_file.update(cli_options)

        try:
            return AppConfig(**config_from_file)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the known keys present in the 'DEFAULT' section into a dictionary."""
        section = self._parser["DEFAULT"]
        config: dict[str, Any] = {}

        for key in AppConfig.get_ini_keys():
            if key not in section:
                continue
            if key in _FLOAT_KEYS:
                config[key] = section.getfloat(key)
            elif key in _BOOL_KEYS:
                config[key] = section.getboolean(key)
            else:
                config[key] = section.get(key)

        unknown = set(section) - AppConfig.get_ini_keys()
        for key in sorted(unknown):
            log.warning(f"Ignoring unknown configuration key '{key}'.")

        return config
