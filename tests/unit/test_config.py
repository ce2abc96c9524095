"""
Unit tests for settings and logging configuration.
"""

import logging

import pytest
import structlog
from pydantic import ValidationError

from cachebridge.core.config import Settings, get_settings
from cachebridge.core.logging import configure_logging


class TestSettings:
    """Test Settings validation."""

    def test_environment_overrides(self):
        """Test values set in conftest reach the settings."""
        settings = Settings()
        assert settings.ENVIRONMENT == "test"
        assert settings.REDIS_URL == "redis://localhost:6379/15"
        assert settings.cache_prefix == "cachebridge-test:"
        assert settings.log_level == "DEBUG"

    def test_defaults(self, monkeypatch):
        for name in ("ENVIRONMENT", "REDIS_URL", "CACHE_PREFIX", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)
        assert settings.ENVIRONMENT == "development"
        assert settings.is_production is False
        assert settings.redis_url == "redis://localhost:6379/0"
        assert settings.redis_max_connections == 10
        assert settings.CACHE_PREFIX == "cachebridge:"
        assert settings.LOG_JSON is False

    def test_log_level_is_upper_cased(self):
        assert Settings(LOG_LEVEL="warning").LOG_LEVEL == "WARNING"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"ENVIRONMENT": "qa"},
            {"REDIS_URL": "http://localhost:6379"},
            {"REDIS_MAX_CONNECTIONS": 0},
            {"REDIS_CONNECTION_TIMEOUT": 0},
            {"CACHE_PREFIX": "my prefix"},
            {"LOG_LEVEL": "VERBOSE"},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ValidationError):
            Settings(**overrides)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestConfigureLogging:
    """Test structlog configuration."""

    def test_configure_logging(self, test_settings):
        previous = structlog.get_config()
        try:
            configure_logging(test_settings)

            config = structlog.get_config()
            assert isinstance(
                config["processors"][-1], structlog.dev.ConsoleRenderer
            )
            assert config["wrapper_class"] is structlog.stdlib.BoundLogger
        finally:
            structlog.configure(**previous)

    def test_configure_json_logging(self, test_settings):
        previous = structlog.get_config()
        try:
            configure_logging(test_settings.model_copy(update={"LOG_JSON": True}))

            config = structlog.get_config()
            assert isinstance(
                config["processors"][-1], structlog.processors.JSONRenderer
            )
        finally:
            structlog.configure(**previous)
        assert logging.getLogger().handlers

    def test_production_renders_json(self, test_settings):
        previous = structlog.get_config()
        try:
            configure_logging(
                test_settings.model_copy(update={"ENVIRONMENT": "production"})
            )

            config = structlog.get_config()
            assert isinstance(
                config["processors"][-1], structlog.processors.JSONRenderer
            )
        finally:
            structlog.configure(**previous)
