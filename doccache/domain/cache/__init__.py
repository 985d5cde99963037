"""
Cache Domain Module

In-process document cache: identity-keyed record store, change notifier,
filtered/sorted views, pagination and chunk sessions.
"""

from .chunk_session import ChunkSession
from .exceptions import (
    ConfigurationError,
    DocumentCacheException,
    IdentityResolutionError,
    InvalidArgumentError,
    RecordNotFoundError,
)
from .identity import IdentityKind, IdentityNormalizer
from .interfaces import EventLogger, IdentityResolver
from .model_cache import ModelCache
from .notifier import ChangeNotifier
from .value_objects import (
    CacheChunk,
    CacheEvent,
    CacheName,
    LogLevel,
    LogMapping,
    LogOperation,
    RecordId,
    SessionChunk,
)

__all__ = [
    "CacheChunk",
    "CacheEvent",
    "CacheName",
    "ChangeNotifier",
    "ChunkSession",
    "ConfigurationError",
    "DocumentCacheException",
    "EventLogger",
    "IdentityKind",
    "IdentityNormalizer",
    "IdentityResolutionError",
    "IdentityResolver",
    "InvalidArgumentError",
    "LogLevel",
    "LogMapping",
    "LogOperation",
    "ModelCache",
    "RecordId",
    "RecordNotFoundError",
    "SessionChunk",
]
