"""
Document Cache Configuration

Configuration management with environment variable support.
All settings have safe defaults; override with DOCCACHE_* variables or .env.
"""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()

_CACHE_LOG_LEVELS = ["debug", "info", "warning", "error", "critical", "none"]


class Settings(BaseSettings):
    """Document cache settings with validation and secure defaults."""

    model_config = SettingsConfigDict(
        env_prefix="DOCCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment settings
    ENVIRONMENT: str = Field(
        default="development", description="Application environment"
    )

    # Logging configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_JSON: bool = Field(
        default=False, description="Render log lines as JSON instead of console output"
    )

    # Diagnostic cache log levels (default LogMapping)
    ADD_LOG_LEVEL: str = Field(default="debug", description="Level for cache add")
    UPDATE_LOG_LEVEL: str = Field(
        default="debug", description="Level for cache update"
    )
    DELETE_LOG_LEVEL: str = Field(
        default="debug", description="Level for cache delete"
    )
    IMPORT_LOG_LEVEL: str = Field(default="info", description="Level for cache import")
    CLEAR_LOG_LEVEL: str = Field(default="info", description="Level for cache clear")

    # Identity normalization
    IDENTITY_FIELD: str = Field(
        default="id", min_length=1, description="Record identity field name"
    )
    STRICT_OBJECT_ID: bool = Field(
        default=False, description="Require 24 hex character record identities"
    )

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        allowed = ["development", "test", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed}")
        return v.upper()

    @field_validator(
        "ADD_LOG_LEVEL",
        "UPDATE_LOG_LEVEL",
        "DELETE_LOG_LEVEL",
        "IMPORT_LOG_LEVEL",
        "CLEAR_LOG_LEVEL",
    )
    @classmethod
    def validate_cache_log_level(cls, v):
        """Validate diagnostic cache log level."""
        if v.lower() not in _CACHE_LOG_LEVELS:
            raise ValueError(f"cache log level must be one of: {_CACHE_LOG_LEVELS}")
        return v.lower()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
