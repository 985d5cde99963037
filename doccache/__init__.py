"""
doccache - in-process write-through cache for identity-bearing records.
"""

from .constants import APP_NAME, APP_VERSION
from .domain.cache import (
    CacheChunk,
    CacheEvent,
    ChunkSession,
    ConfigurationError,
    DocumentCacheException,
    IdentityNormalizer,
    IdentityResolutionError,
    InvalidArgumentError,
    LogLevel,
    LogMapping,
    LogOperation,
    ModelCache,
    RecordId,
    RecordNotFoundError,
    SessionChunk,
)

__version__ = APP_VERSION

__all__ = [
    "APP_NAME",
    "CacheChunk",
    "CacheEvent",
    "ChunkSession",
    "ConfigurationError",
    "DocumentCacheException",
    "IdentityNormalizer",
    "IdentityResolutionError",
    "InvalidArgumentError",
    "LogLevel",
    "LogMapping",
    "LogOperation",
    "ModelCache",
    "RecordId",
    "RecordNotFoundError",
    "SessionChunk",
]
