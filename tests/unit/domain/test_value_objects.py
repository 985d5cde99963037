"""
Unit tests for cache value objects.
"""

import dataclasses

import pytest
from pydantic import ValidationError

from doccache.core.config import Settings
from doccache.domain.cache import (
    CacheChunk,
    CacheEvent,
    CacheName,
    ConfigurationError,
    LogLevel,
    LogMapping,
    LogOperation,
    RecordId,
    SessionChunk,
)


class TestRecordId:
    """Test RecordId value object."""

    def test_generate(self):
        """Test generated ids are valid and distinct."""
        first = RecordId.generate()
        second = RecordId.generate()

        assert RecordId.is_valid(first.value)
        assert len(str(first)) == 24
        assert first != second

    def test_lowercase_normalization(self):
        """Test ids are stored in lower case."""
        record_id = RecordId("ABCDEF0123456789ABCDEF01")

        assert record_id.value == "abcdef0123456789abcdef01"
        assert record_id == RecordId("abcdef0123456789abcdef01")

    @pytest.mark.parametrize("value", ["", "abc", "g" * 24, "a" * 25, 123])
    def test_invalid(self, value):
        """Test invalid record id formats."""
        with pytest.raises(ValueError):
            RecordId(value)

    def test_is_valid(self):
        """Test format check helper."""
        assert RecordId.is_valid("a" * 24)
        assert not RecordId.is_valid("a" * 23)
        assert not RecordId.is_valid(None)

    def test_immutable(self):
        """Test record id cannot be changed."""
        record_id = RecordId.generate()

        with pytest.raises(dataclasses.FrozenInstanceError):
            record_id.value = "b" * 24


class TestCacheName:
    """Test CacheName value object."""

    def test_valid(self):
        """Test valid name."""
        assert str(CacheName("Car")) == "Car"

    def test_empty(self):
        """Test empty name."""
        with pytest.raises(ConfigurationError, match="no cache name defined") as exc_info:
            CacheName("")

        assert exc_info.value.error_code == "CACHE_CONFIGURATION_ERROR"
        assert exc_info.value.details == {"field": "name"}


class TestChunks:
    """Test chunk value objects."""

    def test_cache_chunk(self):
        """Test paginator chunk fields."""
        chunk = CacheChunk(chunk=("a", "b"), total=5, size=2, index=0, has_more=True)

        assert len(chunk) == 2
        with pytest.raises(dataclasses.FrozenInstanceError):
            chunk.total = 3

    def test_session_chunk(self):
        """Test session chunk fields."""
        chunk = SessionChunk(chunk=("a",), total=3, current=3)

        assert len(chunk) == 1
        assert chunk.current == chunk.total


class TestEnums:
    """Test event and log enums."""

    def test_event_names(self):
        """Test event taxonomy values."""
        assert [e.value for e in CacheEvent] == [
            "added",
            "updated",
            "removed",
            "bulk-replaced",
            "changed",
        ]

    def test_log_operations(self):
        """Test log operation values."""
        assert LogOperation("import") == LogOperation.IMPORT


class TestLogMapping:
    """Test LogMapping model."""

    def test_defaults(self):
        """Test default levels."""
        mapping = LogMapping()

        assert mapping.level_for(LogOperation.ADD) == LogLevel.DEBUG
        assert mapping.level_for(LogOperation.UPDATE) == LogLevel.DEBUG
        assert mapping.level_for(LogOperation.DELETE) == LogLevel.DEBUG
        assert mapping.level_for(LogOperation.IMPORT) == LogLevel.INFO
        assert mapping.level_for(LogOperation.CLEAR) == LogLevel.INFO

    def test_import_alias(self):
        """Test import level accepted by alias and field name."""
        assert LogMapping(**{"import": "WARNING"}).import_ == LogLevel.WARNING
        assert LogMapping(import_=LogLevel.ERROR).level_for("import") == LogLevel.ERROR

    def test_set_level_validated(self):
        """Test assignment is validated."""
        mapping = LogMapping()
        mapping.set_level(LogOperation.CLEAR, "Critical")

        assert mapping.clear == LogLevel.CRITICAL
        with pytest.raises(ValidationError):
            mapping.set_level(LogOperation.ADD, "verbose")

    def test_from_settings(self):
        """Test mapping built from settings."""
        settings = Settings(ADD_LOG_LEVEL="INFO", CLEAR_LOG_LEVEL="none")

        mapping = LogMapping.from_settings(settings)

        assert mapping.add == LogLevel.INFO
        assert mapping.clear == LogLevel.NONE
        assert mapping.update == LogLevel.DEBUG
