"""Configuration management for svg2excalidraw.

Settings live in ``svg2excalidraw_config.toml``. Without an explicit path
the file is searched in (local overrides global):

1. Current directory
2. ~/.config/svg2excalidraw/
3. /etc/svg2excalidraw/

Values found in the file are merged over the built-in defaults.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import toml

from .constants import (
    LOG_LEVELS,
    ConfigKeys,
    ConfigSections,
    CurveSampling,
    FileExtensions,
)
from .error_handling import Svg2ExcalidrawError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "svg2excalidraw_config.toml"

DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    ConfigSections.CONVERSION: {
        ConfigKeys.CURVE_POINTS: CurveSampling.DEFAULT_POINTS,
        ConfigKeys.SEED: 1,
    },
    ConfigSections.OUTPUT: {
        ConfigKeys.EXTENSION: FileExtensions.EXCALIDRAW,
        ConfigKeys.INDENT: 2,
    },
    ConfigSections.LOGGING: {
        ConfigKeys.LEVEL: "INFO",
        ConfigKeys.FILE: "",
    },
}

REQUIRED_KEYS = {
    ConfigSections.CONVERSION: [ConfigKeys.CURVE_POINTS, ConfigKeys.SEED],
    ConfigSections.OUTPUT: [ConfigKeys.EXTENSION, ConfigKeys.INDENT],
    ConfigSections.LOGGING: [ConfigKeys.LEVEL],
}


class ConfigError(Svg2ExcalidrawError):
    """Raised when there's an error with configuration."""

    pass


def find_config_file(filename: str = CONFIG_FILENAME) -> Optional[Path]:
    """Find a configuration file using the standard search order.

    Returns:
        Path to config file or None if not found
    """
    search_locations = [
        Path.cwd(),
        Path.home() / ".config" / "svg2excalidraw",
        Path("/etc/svg2excalidraw"),
    ]

    for location in search_locations:
        config_path = location / filename
        if config_path.is_file():
            return config_path

    return None


def _merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override config into base config."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_config(base[key], value)
        else:
            base[key] = value


class Config:
    """Configuration manager for svg2excalidraw."""

    def __init__(self, config_path: str | Path | None = None) -> None:
        """Load configuration.

        Args:
            config_path: Explicit configuration file; searched for when omitted

        Raises:
            ConfigError: If an explicit file does not exist or a file is invalid
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        self.path: Optional[Path] = None

        if config_path is not None:
            path = Path(config_path)
            if not path.is_file():
                raise ConfigError(f"Configuration file '{config_path}' not found")
        else:
            path = find_config_file()

        if path is None:
            logger.debug(f"Using default configuration (no {CONFIG_FILENAME} found)")
            return

        self._load(path)

    def _load(self, path: Path) -> None:
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = toml.load(f)
        except toml.TomlDecodeError as e:
            raise ConfigError(
                f"Invalid TOML in configuration file '{path}': {e}",
                {"file": str(path)},
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Failed to read configuration file '{path}': {e}",
                {"file": str(path)},
            ) from e

        _merge_config(self._config, loaded)
        self.path = path
        logger.info(f"Configuration loaded from {path}")

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        try:
            return self._config[section][key]
        except KeyError:
            if default is not None:
                return default
            raise ConfigError(f"Configuration key '{section}.{key}' not found")

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get an entire configuration section."""
        try:
            return self._config[section]
        except KeyError:
            raise ConfigError(f"Configuration section '{section}' not found")

    @property
    def conversion(self) -> Dict[str, Any]:
        """Get conversion configuration."""
        return self.get_section(ConfigSections.CONVERSION)

    @property
    def output(self) -> Dict[str, Any]:
        """Get output configuration."""
        return self.get_section(ConfigSections.OUTPUT)

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get_section(ConfigSections.LOGGING)

    @property
    def config(self) -> Dict[str, Any]:
        """Get the full configuration dictionary."""
        return self._config

    def validate(self) -> None:
        """Validate configuration completeness and correctness."""
        for section, keys in REQUIRED_KEYS.items():
            if not isinstance(self._config.get(section), dict):
                raise ConfigError(f"Missing required configuration section: {section}")
            for key in keys:
                if key not in self._config[section]:
                    raise ConfigError(
                        f"Missing required key '{key}' in section '{section}'"
                    )

        self._validate_ranges()

    def _validate_ranges(self) -> None:
        curve_points = self.conversion[ConfigKeys.CURVE_POINTS]
        if not isinstance(curve_points, int) or curve_points <= 0:
            raise ConfigError("conversion.curve_points must be a positive integer")

        if not isinstance(self.conversion[ConfigKeys.SEED], int):
            raise ConfigError("conversion.seed must be an integer")

        indent = self.output[ConfigKeys.INDENT]
        if not isinstance(indent, int) or indent < 0:
            raise ConfigError("output.indent must be a non-negative integer")

        level = str(self.logging[ConfigKeys.LEVEL]).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(
                f"logging.level must be one of {', '.join(LOG_LEVELS)}, got '{level}'"
            )
