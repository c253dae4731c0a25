"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from svg2excalidraw.core.config import (
    CONFIG_FILENAME,
    Config,
    ConfigError,
    find_config_file,
)
from svg2excalidraw.core.error_handling import Svg2ExcalidrawError


pytestmark = pytest.mark.usefixtures("isolated_config")


class TestConfig:
    """Test cases for Config class."""

    def create_config(self, directory: Path, content: str) -> Path:
        """Write a config file with given content."""
        config_path = directory / CONFIG_FILENAME
        config_path.write_text(content)
        return config_path

    def test_defaults_without_file(self):
        """Built-in defaults are used when no file is found."""
        config = Config()

        assert config.path is None
        assert config.get("conversion", "curve_points") == 10
        assert config.get("conversion", "seed") == 1
        assert config.output == {"extension": ".excalidraw", "indent": 2}
        assert config.logging["level"] == "INFO"
        config.validate()

    def test_explicit_file_is_merged_over_defaults(self, tmp_path):
        """Loaded values override defaults key by key."""
        config_path = self.create_config(
            tmp_path,
            """
[conversion]
curve_points = 25

[output]
indent = 4
        """,
        )

        config = Config(config_path)

        assert config.path == config_path
        assert config.conversion == {"curve_points": 25, "seed": 1}
        assert config.get("output", "indent") == 4
        assert config.get("output", "extension") == ".excalidraw"

    def test_file_found_in_current_directory(self, isolated_config):
        """The current directory is searched first."""
        self.create_config(isolated_config, "[conversion]\nseed = 99\n")

        config = Config()

        assert config.get("conversion", "seed") == 99
        assert find_config_file() == isolated_config / CONFIG_FILENAME

    def test_file_found_in_user_config(self, isolated_config):
        """~/.config/svg2excalidraw is searched after the current directory."""
        user_dir = isolated_config / "home" / ".config" / "svg2excalidraw"
        user_dir.mkdir(parents=True)
        self.create_config(user_dir, "[output]\nindent = 0\n")

        assert Config().get("output", "indent") == 0

    def test_missing_config_file_raises_error(self):
        """Test that missing config file raises ConfigError."""
        with pytest.raises(ConfigError, match="Configuration file .* not found"):
            Config("nonexistent_config.toml")

    def test_invalid_toml_raises_error(self, tmp_path):
        """Test that invalid TOML raises ConfigError."""
        config_path = self.create_config(tmp_path, "[section\ninvalid toml content")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            Config(config_path)

    def test_config_error_is_library_error(self):
        """ConfigError belongs to the library's error hierarchy."""
        assert issubclass(ConfigError, Svg2ExcalidrawError)

    def test_get_with_default_value(self):
        """Test getting configuration value with default."""
        config = Config()
        assert config.get("conversion", "missing_key", "default") == "default"

    def test_get_missing_key_without_default_raises_error(self):
        """Test that missing key without default raises ConfigError."""
        with pytest.raises(ConfigError, match="Configuration key .* not found"):
            Config().get("conversion", "missing_key")

    def test_get_missing_section_raises_error(self):
        """Test that missing section raises ConfigError."""
        with pytest.raises(ConfigError, match="Configuration section .* not found"):
            Config().get_section("printer")


class TestConfigValidation:
    """Test configuration validation."""

    @pytest.mark.parametrize(
        "content,message",
        [
            ("[conversion]\ncurve_points = 0\n", "curve_points"),
            ("[conversion]\ncurve_points = 2.5\n", "curve_points"),
            ("[conversion]\nseed = 'x'\n", "seed"),
            ("[output]\nindent = -1\n", "indent"),
            ("[logging]\nlevel = 'LOUD'\n", "logging.level"),
            ("conversion = 5\n", "Missing required configuration section"),
        ],
    )
    def test_invalid_values(self, tmp_path, content, message):
        """Test rejection of out-of-range values."""
        config_path = tmp_path / "custom.toml"
        config_path.write_text(content)

        with pytest.raises(ConfigError, match=message):
            Config(config_path).validate()

    def test_log_level_is_case_insensitive(self, tmp_path):
        """Lower-case level names are accepted."""
        config_path = tmp_path / "custom.toml"
        config_path.write_text("[logging]\nlevel = 'debug'\n")

        Config(config_path).validate()
