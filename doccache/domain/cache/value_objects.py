"""
Cache Value Objects

Immutable value objects for the document cache domain.
Provides type safety for identities, event names, chunks and log settings.
"""

import os
import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import ConfigurationError


class CacheEvent(str, Enum):
    """Change notification event names."""

    ADDED = "added"
    UPDATED = "updated"
    REMOVED = "removed"
    BULK_REPLACED = "bulk-replaced"
    CHANGED = "changed"


class LogOperation(str, Enum):
    """Cache operations that produce a diagnostic log line."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    IMPORT = "import"
    CLEAR = "clear"


class LogLevel(str, Enum):
    """Severity used for a diagnostic log line; NONE disables the line."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    NONE = "none"


@dataclass(frozen=True)
class CacheName:
    """
    Diagnostic label of a cache instance.

    The name is otherwise inert, but it must be present.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate cache name."""
        if not isinstance(self.value, str):
            raise ConfigurationError(
                f"Cache name must be a string, got {type(self.value).__name__}",
                field="name",
            )
        if not self.value.strip():
            raise ConfigurationError("no cache name defined", field="name")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RecordId:
    """
    Canonical identity value object.

    Holds a 24 hex character document identifier, stored in lower case.
    """

    value: str

    PATTERN = re.compile(r"^[a-f0-9]{24}$")

    def __post_init__(self) -> None:
        """Validate and normalize identifier format."""
        if not isinstance(self.value, str):
            raise ValueError("Record id must be a string")

        normalized = self.value.lower()
        if not self.PATTERN.match(normalized):
            raise ValueError(f"Invalid record id format: {self.value}")
        object.__setattr__(self, "value", normalized)

    @classmethod
    def generate(cls) -> "RecordId":
        """Create a new record id (4 byte timestamp + 8 random bytes)."""
        return cls(f"{int(time.time()) & 0xFFFFFFFF:08x}{os.urandom(8).hex()}")

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        """Check if value is a well-formed record id string."""
        return isinstance(value, str) and bool(cls.PATTERN.match(value.lower()))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CacheChunk:
    """One page of a paginated cache listing."""

    chunk: Tuple[Any, ...]
    total: int
    size: int
    index: int
    has_more: bool

    def __len__(self) -> int:
        return len(self.chunk)


@dataclass(frozen=True)
class SessionChunk:
    """One precomputed chunk of a chunk session."""

    chunk: Tuple[Any, ...]
    # total amount of data
    total: int
    # amount of data iterated so far, including this chunk
    current: int

    def __len__(self) -> int:
        return len(self.chunk)


class LogMapping(BaseModel):
    """Severity per cache operation for diagnostic log lines."""

    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)

    add: LogLevel = Field(LogLevel.DEBUG, description="Level for added records")
    update: LogLevel = Field(LogLevel.DEBUG, description="Level for replaced records")
    delete: LogLevel = Field(LogLevel.DEBUG, description="Level for removed records")
    import_: LogLevel = Field(
        LogLevel.INFO, alias="import", description="Level for bulk imports"
    )
    clear: LogLevel = Field(LogLevel.INFO, description="Level for cache clears")

    @field_validator("add", "update", "delete", "import_", "clear", mode="before")
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.lower()
        return v

    @classmethod
    def from_settings(cls, settings: Any) -> "LogMapping":
        """Build log mapping from application settings."""
        return cls(
            add=settings.ADD_LOG_LEVEL,
            update=settings.UPDATE_LOG_LEVEL,
            delete=settings.DELETE_LOG_LEVEL,
            import_=settings.IMPORT_LOG_LEVEL,
            clear=settings.CLEAR_LOG_LEVEL,
        )

    @staticmethod
    def _field_for(operation: LogOperation) -> str:
        operation = LogOperation(operation)
        if operation == LogOperation.IMPORT:
            return "import_"
        return operation.value

    def level_for(self, operation: LogOperation) -> LogLevel:
        """Get configured level for an operation."""
        return getattr(self, self._field_for(operation))

    def set_level(self, operation: LogOperation, level: LogLevel) -> None:
        """Change level for a single operation."""
        setattr(self, self._field_for(operation), level)
