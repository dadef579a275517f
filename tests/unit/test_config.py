"""Tests for Settings defaults, environment overrides, validation and logging setup."""

import logging
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from aplib.config import DEFAULT_LOG_FORMAT, Settings, configure_logging, get_settings


class TestSettingsDefaults:
    """Test that Settings has correct default values."""

    def test_defaults(self):
        """Verify all default values."""
        settings = Settings()

        assert settings.random_seed is None
        assert settings.default_epsilon == 0.005
        assert settings.max_cycles == 1000
        assert settings.log_level == "WARNING"
        assert settings.log_format == DEFAULT_LOG_FORMAT


class TestSettingsEnvironment:
    """Test that APLIB_ environment variables override defaults."""

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("APLIB_RANDOM_SEED", "42")
        monkeypatch.setenv("APLIB_DEFAULT_EPSILON", "0.1")
        monkeypatch.setenv("APLIB_MAX_CYCLES", "25")
        monkeypatch.setenv("APLIB_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.random_seed == 42
        assert settings.default_epsilon == 0.1
        assert settings.max_cycles == 25
        assert settings.log_level == "DEBUG"

    def test_get_settings_is_cached(self, monkeypatch):
        """get_settings() caches until cache_clear()."""
        first = get_settings()
        monkeypatch.setenv("APLIB_MAX_CYCLES", "7")

        assert get_settings() is first
        get_settings.cache_clear()
        assert get_settings().max_cycles == 7

    def test_reads_environment_only(self):
        """No dotenv file is configured, so no file encoding is either."""
        assert Settings.model_config.get("env_file") is None
        assert Settings.model_config.get("env_file_encoding") is None
        assert Settings.model_config["env_prefix"] == "APLIB_"

    def test_unrelated_env_ignored(self, monkeypatch):
        monkeypatch.setenv("APLIB_SOMETHING_ELSE", "x")
        assert Settings().max_cycles == 1000


class TestSettingsValidation:
    """Test that invalid values are rejected."""

    @pytest.mark.parametrize("epsilon", [0.0, -0.5])
    def test_epsilon_must_be_positive(self, epsilon):
        with pytest.raises(ValidationError):
            Settings(default_epsilon=epsilon)

    def test_max_cycles_at_least_one(self):
        with pytest.raises(ValidationError):
            Settings(max_cycles=0)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_log_level_normalized(self):
        assert Settings(log_level=" info ").log_level == "INFO"


class TestConfigureLogging:
    """Test configure_logging()."""

    def test_applies_level_and_format(self):
        settings = Settings(log_level="DEBUG", log_format="%(message)s")

        with patch("aplib.config.logging.basicConfig") as basic_config:
            configure_logging(settings)

        basic_config.assert_called_once_with(level=logging.DEBUG, format="%(message)s")

    def test_defaults_to_cached_settings(self, monkeypatch):
        monkeypatch.setenv("APLIB_LOG_LEVEL", "ERROR")

        with patch("aplib.config.logging.basicConfig") as basic_config:
            configure_logging()

        basic_config.assert_called_once_with(
            level=logging.ERROR, format=DEFAULT_LOG_FORMAT
        )
