"""
Document Cache Exceptions

Domain-specific exceptions for document cache operations.
All errors are raised synchronously to the caller; nothing is swallowed.
"""

from typing import Optional, Any, Dict


class DocumentCacheException(Exception):
    """Base exception for document cache errors.

    All cache operations should raise this or its subclasses.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(DocumentCacheException):
    """Raised when a cache is constructed with invalid arguments."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {}
        if field:
            details["field"] = field

        super().__init__(
            message=message, error_code="CACHE_CONFIGURATION_ERROR", details=details
        )


class IdentityResolutionError(DocumentCacheException):
    """Raised when an identity value cannot be normalized to a canonical key."""

    def __init__(self, value: Any, reason: str):
        details = {"value_type": type(value).__name__, "reason": reason}

        super().__init__(
            message=f"Cannot resolve identity from {type(value).__name__}: {reason}",
            error_code="IDENTITY_RESOLUTION_ERROR",
            details=details,
        )


class InvalidArgumentError(DocumentCacheException):
    """Raised when a caller passes an out-of-range argument."""

    def __init__(self, argument: str, value: Any, reason: str):
        details = {"argument": argument, "value": repr(value), "reason": reason}

        super().__init__(
            message=f"Invalid {argument}={value!r}: {reason}",
            error_code="INVALID_ARGUMENT",
            details=details,
        )


class RecordNotFoundError(DocumentCacheException):
    """Raised by not-found handlers when an expected record is missing."""

    def __init__(self, cache_name: str, key: str):
        """Initialize exception.

        Args:
            cache_name: Name of the cache that was queried
            key: Canonical key that was not found
        """
        details = {"cache": cache_name, "key": key}

        super().__init__(
            message=f"{cache_name} record not found: {key}",
            error_code="RECORD_NOT_FOUND",
            details=details,
        )
