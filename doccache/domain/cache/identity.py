"""
Identity Normalization

Default identity normalizer for the document cache.
Resolves one of three tagged input kinds into a canonical string key.
"""

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional, Pattern, Tuple, Union
from uuid import UUID

import structlog

from .exceptions import ConfigurationError, IdentityResolutionError
from .interfaces import IdentityResolver
from .value_objects import RecordId

logger = structlog.get_logger(__name__)


class IdentityKind(str, Enum):
    """Accepted identity input kinds."""

    RAW = "raw"
    RECORD_ID = "record_id"
    RECORD = "record"


class IdentityNormalizer(IdentityResolver):
    """
    Identity normalizer with per-instance fallback state.

    Accepts a raw string, a RecordId, or a record carrying the identity
    field (as mapping key or attribute). Everything else is rejected.
    """

    def __init__(
        self,
        id_field: str = "id",
        pattern: Optional[Union[str, Pattern[str]]] = None,
        coerce_types: Tuple[type, ...] = (UUID,),
        lowercase: bool = False,
    ):
        """
        Initialize identity normalizer.

        Args:
            id_field: Name of the record identity field
            pattern: Optional regex every raw identity string must fully match
            coerce_types: Foreign identity types converted with str() as a fallback
            lowercase: Lower-case every raw identity string before matching;
                strings in RecordId format are always lower-cased

        Raises:
            ConfigurationError: If id_field is empty
        """
        if not id_field:
            raise ConfigurationError(
                "Identity field name cannot be empty", field="id_field"
            )

        self.id_field = id_field
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.coerce_types = coerce_types
        self.lowercase = lowercase
        self.has_warned = False

    @classmethod
    def object_id(cls, id_field: str = "id") -> "IdentityNormalizer":
        """Strict normalizer accepting only 24 hex character identities."""
        return cls(id_field=id_field, pattern=RecordId.PATTERN, lowercase=True)

    @classmethod
    def from_settings(cls, settings: Any) -> "IdentityNormalizer":
        """Create normalizer from application settings."""
        if settings.STRICT_OBJECT_ID:
            return cls.object_id(id_field=settings.IDENTITY_FIELD)
        return cls(id_field=settings.IDENTITY_FIELD)

    def classify(self, value: Any) -> IdentityKind:
        """Get input kind of an identity value."""
        if isinstance(value, str):
            return IdentityKind.RAW
        if isinstance(value, RecordId):
            return IdentityKind.RECORD_ID
        if isinstance(value, Mapping):
            if self.id_field in value:
                return IdentityKind.RECORD
        elif value is not None and hasattr(value, self.id_field):
            return IdentityKind.RECORD

        raise IdentityResolutionError(
            value,
            f"expected str, RecordId or record with '{self.id_field}' field",
        )

    def normalize(self, value: Any) -> str:
        """Resolve canonical key for an identity value."""
        kind = self.classify(value)

        if kind == IdentityKind.RAW:
            return self._normalize_raw(value)
        if kind == IdentityKind.RECORD_ID:
            return value.value
        return self._normalize_record_identity(self._read_identity(value))

    def _read_identity(self, record: Any) -> Any:
        if isinstance(record, Mapping):
            return record[self.id_field]
        return getattr(record, self.id_field)

    def _normalize_raw(self, value: str) -> str:
        if not value:
            raise IdentityResolutionError(value, "identity string is empty")
        if any(char.isspace() for char in value):
            raise IdentityResolutionError(value, "identity string contains whitespace")
        # RecordId keys are lower-case, so the same id in any case maps to one key
        if self.lowercase or RecordId.is_valid(value):
            value = value.lower()
        if self.pattern is not None and not self.pattern.fullmatch(value):
            raise IdentityResolutionError(
                value, f"identity '{value}' does not match {self.pattern.pattern}"
            )
        return value

    def _normalize_record_identity(self, identity: Any) -> str:
        if isinstance(identity, str):
            return self._normalize_raw(identity)
        if isinstance(identity, RecordId):
            return identity.value
        if self.coerce_types and isinstance(identity, self.coerce_types):
            if not self.has_warned:
                logger.warning(
                    "Record identity is not a str or RecordId, falling back to str()",
                    identity_type=type(identity).__name__,
                    id_field=self.id_field,
                )
                self.has_warned = True
            return self._normalize_raw(str(identity))

        raise IdentityResolutionError(
            identity, f"unsupported '{self.id_field}' value on record"
        )
