"""
Reads and writes the INI configuration file and turns it into a validated
DownloadConfig.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from soundcloud_cli.exceptions import ConfigurationError
from soundcloud_cli.models.config import DownloadConfig

log = logging.getLogger(__name__)

SECTION = "DEFAULT"


def _ini_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigManager:
    """Owns the application's config.ini."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> DownloadConfig:
        """
        Builds the effective configuration: defaults, then the file (if there is
        one), then `cli_options`.

        Raises:
            ConfigurationError: The file cannot be parsed or a value is invalid.
        """
        settings: dict[str, Any] = {}
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(f"Error parsing configuration file: {e}") from e

            if self._migrate_if_needed():
                log.info(
                    "[yellow]Configuration file was updated with new default values."
                    "[/yellow]"
                )
            settings = self._read_settings()

        settings.update(cli_options or {})

        try:
            return DownloadConfig(**settings)
        except (ValidationError, ValueError) as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_new_config(self, settings: dict[str, Any] | None = None) -> None:
        """Writes a complete config file; settings not given take their defaults."""
        settings = settings or {}
        defaults = DownloadConfig()

        parser = configparser.ConfigParser(interpolation=None)
        parser[SECTION] = {
            key: _ini_value(settings.get(key, getattr(defaults, key)))
            for key in sorted(DownloadConfig.get_ini_keys())
        }

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            self._write(parser)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e
        log.debug(f"Wrote configuration to {self.config_file_path}")

    def get_config_as_dict(self) -> dict[str, Any]:
        """Returns the effective file settings, defaults included, for display."""
        return self.load_config().model_dump(exclude={"source_url"})

    def _read_settings(self) -> dict[str, Any]:
        section = self._parser[SECTION]
        defaults = DownloadConfig()
        settings: dict[str, Any] = {}
        try:
            for key in DownloadConfig.get_ini_keys():
                default = getattr(defaults, key)
                if isinstance(default, bool):
                    settings[key] = section.getboolean(key, default)
                elif isinstance(default, int):
                    settings[key] = section.getint(key, default)
                else:
                    settings[key] = section.get(key, default)
        except ValueError as e:
            raise ConfigurationError(f"Invalid value in configuration file: {e}") from e
        return settings

    def _migrate_if_needed(self) -> bool:
        """Fills keys missing from an existing file with their defaults."""
        section = self._parser[SECTION]
        defaults = DownloadConfig()
        missing = sorted(DownloadConfig.get_ini_keys() - set(section))
        if not missing:
            return False

        for key in missing:
            section[key] = _ini_value(getattr(defaults, key))
            log.debug(f"Config migration: added '{key} = {section[key]}'")

        try:
            self._write(self._parser)
        except OSError as e:
            log.error(f"Could not save migrated configuration file: {e}")
            return False
        return True

    def _write(self, parser: configparser.ConfigParser) -> None:
        with open(self.config_file_path, "w", encoding="utf-8") as f:
            parser.write(f)
