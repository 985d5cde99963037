"""
Cache Collaborator Interfaces

Abstract interfaces for the collaborators a ModelCache depends on.
Defines contracts for identity normalization and diagnostic logging.
"""

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable


class IdentityResolver(ABC):
    """
    Abstract identity normalization collaborator.

    Converts a raw identity string, a typed identity value or a full record
    into the canonical string key used by the cache.
    """

    @abstractmethod
    def normalize(self, value: Any) -> str:
        """Resolve canonical key or raise IdentityResolutionError."""
        pass


@runtime_checkable
class EventLogger(Protocol):
    """Structured logger receiving diagnostic cache lines."""

    def debug(self, event: str, **kw: Any) -> Any: ...

    def info(self, event: str, **kw: Any) -> Any: ...

    def warning(self, event: str, **kw: Any) -> Any: ...

    def error(self, event: str, **kw: Any) -> Any: ...

    def critical(self, event: str, **kw: Any) -> Any: ...
