"""Tests for core.settings module.

Covers:
- FeatureSpineSettings instantiation with defaults
- Environment variable override (FEATURESPINE_ prefix)
- Field validation
- get_settings() caching
"""

import pytest
from pydantic import ValidationError

from featurespine.core.errors import ConfigError, InvalidConfigError
from featurespine.core.logging import LOG_LEVELS
from featurespine.core.settings import FeatureSpineSettings, clear_settings_cache, get_settings


class TestFeatureSpineSettingsDefaults:
    def test_default_adapter(self):
        assert FeatureSpineSettings().adapter == "memory"

    def test_default_log_level(self):
        assert FeatureSpineSettings().log_level == "INFO"

    def test_default_log_format(self):
        assert FeatureSpineSettings().log_format == "auto"

    def test_default_service_name(self):
        assert FeatureSpineSettings().service_name == "featurespine"


class TestFeatureSpineSettingsEnvOverride:
    def test_adapter_from_env(self, monkeypatch):
        monkeypatch.setenv("FEATURESPINE_ADAPTER", "  Custom ")
        assert FeatureSpineSettings().adapter == "custom"

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("FEATURESPINE_LOG_LEVEL", "debug")
        assert FeatureSpineSettings().log_level == "DEBUG"

    def test_log_format_from_env(self, monkeypatch):
        monkeypatch.setenv("FEATURESPINE_LOG_FORMAT", "json")
        assert FeatureSpineSettings().log_format == "json"

    def test_unprefixed_env_ignored(self, monkeypatch):
        monkeypatch.setenv("ADAPTER", "other")
        assert FeatureSpineSettings().adapter == "memory"


class TestFeatureSpineSettingsValidation:
    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            FeatureSpineSettings(log_level="LOUD")

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError):
            FeatureSpineSettings(log_format="xml")

    def test_empty_adapter(self):
        with pytest.raises(ValidationError):
            FeatureSpineSettings(adapter="   ")

    @pytest.mark.parametrize("level", LOG_LEVELS)
    def test_accepts_every_logging_level(self, level):
        assert FeatureSpineSettings(log_level=level.lower()).log_level == level


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_force_reload(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("FEATURESPINE_LOG_LEVEL", "ERROR")
        reloaded = get_settings(_force_reload=True)
        assert reloaded is not first
        assert reloaded.log_level == "ERROR"

    def test_clear_cache(self):
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first

    def test_invalid_environment_raises_config_error(self, monkeypatch):
        monkeypatch.setenv("FEATURESPINE_LOG_LEVEL", "LOUD")
        with pytest.raises(ConfigError) as exc_info:
            get_settings()
        error = exc_info.value
        assert isinstance(error, InvalidConfigError)
        assert isinstance(error.cause, ValidationError)
        assert error.context.metadata == {"fields": ["log_level"]}

    def test_failed_load_is_not_cached(self, monkeypatch):
        monkeypatch.setenv("FEATURESPINE_ADAPTER", "  ")
        with pytest.raises(InvalidConfigError):
            get_settings()
        monkeypatch.delenv("FEATURESPINE_ADAPTER")
        assert get_settings().adapter == "memory"
