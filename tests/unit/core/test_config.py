"""
Unit tests for settings and logging setup.
"""

import logging

import pytest
import structlog
from pydantic import ValidationError

from doccache.core.config import Settings, get_settings
from doccache.core.logging import configure_logging


class TestSettings:
    """Test Settings validation."""

    def test_defaults(self, monkeypatch):
        """Test default values."""
        monkeypatch.delenv("DOCCACHE_ENVIRONMENT", raising=False)
        monkeypatch.delenv("DOCCACHE_LOG_LEVEL", raising=False)

        settings = Settings()

        assert settings.ENVIRONMENT == "development"
        assert settings.is_development
        assert not settings.is_production
        assert settings.LOG_LEVEL == "INFO"
        assert settings.IDENTITY_FIELD == "id"
        assert settings.STRICT_OBJECT_ID is False

    def test_environment_variables(self, monkeypatch):
        """Test prefixed environment variables are read."""
        monkeypatch.setenv("DOCCACHE_ENVIRONMENT", "production")
        monkeypatch.setenv("DOCCACHE_DELETE_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("DOCCACHE_STRICT_OBJECT_ID", "true")

        settings = Settings()

        assert settings.is_production
        assert settings.DELETE_LOG_LEVEL == "warning"
        assert settings.STRICT_OBJECT_ID is True

    def test_log_level_normalized(self):
        """Test log level is upper-cased."""
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("ENVIRONMENT", "qa"),
            ("LOG_LEVEL", "verbose"),
            ("ADD_LOG_LEVEL", "trace"),
            ("IDENTITY_FIELD", ""),
        ],
    )
    def test_invalid_values(self, field, value):
        """Test invalid settings are rejected."""
        with pytest.raises(ValidationError):
            Settings(**{field: value})

    def test_get_settings_cached(self):
        """Test settings instance is cached."""
        assert get_settings() is get_settings()
        assert get_settings().ENVIRONMENT == "test"


class TestConfigureLogging:
    """Test structlog configuration."""

    @pytest.mark.parametrize("log_json", [True, False])
    def test_configure(self, log_json):
        """Test renderer selection and root level."""
        try:
            configure_logging(Settings(LOG_LEVEL="WARNING", LOG_JSON=log_json))

            processors = structlog.get_config()["processors"]
            renderer = processors[-1]
            expected = (
                structlog.processors.JSONRenderer
                if log_json
                else structlog.dev.ConsoleRenderer
            )
            assert isinstance(renderer, expected)
            assert logging.getLogger().level == logging.WARNING
        finally:
            configure_logging(get_settings())
