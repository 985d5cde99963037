"""
Model Cache

In-process write-through cache for identity-bearing records.

The cache never reads from or writes to a backing store; its owner feeds it
through put/remove/import_all/clear. Each of those calls is one mutation
round: the store is fully updated first, then the domain-specific event
fires, then exactly one "changed" event. The diagnostic line is written
last; a failing diagnostic logger is reported and never breaks a round.
"""

from functools import cmp_to_key
from typing import (
    Any,
    Callable,
    Iterable,
    Iterator,
    List,
    Optional,
    TypeVar,
    Union,
)

import structlog
from opentelemetry import trace

from ...core.config import get_settings
from .chunk_session import ChunkSession, validate_chunk_size
from .exceptions import InvalidArgumentError
from .identity import IdentityNormalizer
from .interfaces import EventLogger, IdentityResolver
from .notifier import ChangeNotifier, Listener
from .value_objects import (
    CacheChunk,
    CacheEvent,
    CacheName,
    LogLevel,
    LogMapping,
    LogOperation,
)

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)

T = TypeVar("T")

CacheFilter = Callable[[T, int, List[T]], bool]
CacheSort = Callable[[T, T], int]
ExternalSorter = Callable[[List[T], CacheSort], None]
NotFoundHandler = Callable[[str], BaseException]


class ModelCache:
    """
    Identity-keyed record cache with change notifications.

    Records are held by reference; the cache neither clones nor mutates them.
    Not thread-safe: use from one thread or event loop, or lock externally.

    Example:
        cars = ModelCache("Car")
        cars.subscribe("changed", rerender)
        cars.import_all(load_cars())
        page = cars.get_chunk(50, 0, sort=lambda a, b: (a.name > b.name) - (a.name < b.name))
    """

    def __init__(
        self,
        name: str,
        identity_normalizer: Optional[IdentityResolver] = None,
        logger: Optional[EventLogger] = None,
        log_mapping: Optional[LogMapping] = None,
        sorter: Optional[ExternalSorter] = None,
    ):
        """
        Initialize cache.

        Args:
            name: Diagnostic label (REQUIRED, non-empty)
            identity_normalizer: Collaborator resolving canonical keys
            logger: Structured logger receiving diagnostic lines
            log_mapping: Severity per operation for diagnostic lines
            sorter: External in-place sort function used instead of list.sort

        Raises:
            ConfigurationError: If name is missing
        """
        self._name = CacheName(name)
        self._normalizer = identity_normalizer or IdentityNormalizer()
        self._logger = logger
        self.log_mapping = log_mapping or LogMapping.from_settings(get_settings())
        self._sorter = sorter
        self._notifier = ChangeNotifier(owner=self.name)
        self._records: dict = {}

    @property
    def name(self) -> str:
        """Diagnostic name of the cache."""
        return self._name.value

    @property
    def identity_normalizer(self) -> IdentityResolver:
        return self._normalizer

    def set_logger(self, logger: Optional[EventLogger]) -> None:
        """Replace (or remove with None) the diagnostic logger."""
        self._logger = logger

    # Events

    def subscribe(self, event: Union[CacheEvent, str], listener: Listener) -> None:
        """Register listener for a change event."""
        self._notifier.subscribe(event, listener)

    def unsubscribe(self, event: Union[CacheEvent, str], listener: Listener) -> bool:
        """Remove listener; returns False if it was not registered."""
        return self._notifier.unsubscribe(event, listener)

    # Mutations

    def put(self, record: Any, notify: bool = True) -> None:
        """
        Add or replace a record.

        Emits "added" or "updated" followed by "changed" when notify is set.

        Raises:
            IdentityResolutionError: If the record has no usable identity
        """
        key = self._normalizer.normalize(record)
        existed = key in self._records
        self._records[key] = record

        if notify:
            self._notifier.emit(
                CacheEvent.UPDATED if existed else CacheEvent.ADDED, record
            )
            self._notifier.emit(CacheEvent.CHANGED)

        if existed:
            self._log(LogOperation.UPDATE, f"{self.name} cache update {key}", key=key)
        else:
            self._log(LogOperation.ADD, f"{self.name} cache add {key}", key=key)

    def remove(self, identity: Any, notify: bool = True) -> bool:
        """
        Remove a record by identity or record.

        Returns:
            True if an entry was removed
        """
        key = self._normalizer.normalize(identity)
        if key not in self._records:
            return False

        record = self._records.pop(key)

        if notify:
            self._notifier.emit(CacheEvent.REMOVED, record)
            self._notifier.emit(CacheEvent.CHANGED)

        self._log(LogOperation.DELETE, f"{self.name} cache delete {key}", key=key)
        return True

    def import_all(self, records: Iterable[Any]) -> None:
        """
        Store a batch of records with a single notification round.

        All keys are resolved before the store is touched, so an identity
        failure leaves the cache unchanged. Existing entries not in the batch
        are kept.
        """
        with tracer.start_as_current_span("model_cache.import_all") as span:
            span.set_attribute("cache.name", self.name)

            entries = tuple(
                (self._normalizer.normalize(record), record) for record in records
            )
            for key, record in entries:
                self._records[key] = record

            span.set_attribute("cache.import_count", len(entries))

            self._notifier.emit(CacheEvent.BULK_REPLACED, entries)
            self._notifier.emit(CacheEvent.CHANGED)

            self._log(
                LogOperation.IMPORT,
                f"{self.name} cache import {len(entries)} records",
                count=len(entries),
            )

    def clear(self) -> None:
        """Remove all records and broadcast the (empty) contents."""
        with tracer.start_as_current_span("model_cache.clear") as span:
            span.set_attribute("cache.name", self.name)
            span.set_attribute("cache.cleared_count", len(self._records))

            self._records.clear()
            self.notify()
            self._log(LogOperation.CLEAR, f"{self.name} cache clear")

    def notify(self) -> None:
        """Broadcast current contents as "bulk-replaced" followed by "changed"."""
        with tracer.start_as_current_span("model_cache.notify") as span:
            entries = tuple(self._records.items())
            span.set_attribute("cache.name", self.name)
            span.set_attribute("cache.size", len(entries))

            self._notifier.emit(CacheEvent.BULK_REPLACED, entries)
            self._notifier.emit(CacheEvent.CHANGED)

    # Queries

    def get(
        self, identity: Any, not_found: Optional[NotFoundHandler] = None
    ) -> Optional[Any]:
        """
        Get single record.

        Args:
            identity: Identity string, RecordId or record
            not_found: Optional hook returning the error to raise when absent

        Returns:
            Record, or None if absent and no hook given
        """
        key = self._normalizer.normalize(identity)
        if key not in self._records:
            if not_found is not None:
                raise not_found(key)
            return None
        return self._records[key]

    def get_many(self, identities: Iterable[Any]) -> List[Any]:
        """
        Get existing records for a list of identities.

        Absent identities are skipped; malformed ones still raise.

        Example:
            wheels = wheel_cache.get_many(car["wheel_ids"])
        """
        found = []
        for identity in identities:
            key = self._normalizer.normalize(identity)
            if key in self._records:
                found.append(self._records[key])
        return found

    def has(self, identity: Any) -> bool:
        """Check if identity or record is in cache."""
        return self._normalizer.normalize(identity) in self._records

    @property
    def size(self) -> int:
        """Number of records in cache."""
        return len(self._records)

    def values(self) -> Iterator[Any]:
        """
        Lazy iterator over current records.

        Not stable if the cache mutates during iteration; use list() for a snapshot.
        """
        return iter(self._records.values())

    def list(
        self,
        pre_filter: Optional[CacheFilter] = None,
        sort: Optional[CacheSort] = None,
    ) -> List[Any]:
        """
        Snapshot of records, optionally filtered then sorted.

        Args:
            pre_filter: Predicate called as pre_filter(record, index, snapshot)
            sort: Comparator returning negative, zero or positive

        Returns:
            New list; the cache itself is never modified
        """
        data = list(self._records.values())
        if pre_filter is not None:
            data = [
                record
                for index, record in enumerate(data)
                if pre_filter(record, index, data)
            ]
        if sort is not None:
            if self._sorter is not None:
                self._sorter(data, sort)
            else:
                data.sort(key=cmp_to_key(sort))
        return data

    def get_chunk(
        self,
        size: int,
        index: int,
        pre_filter: Optional[CacheFilter] = None,
        sort: Optional[CacheSort] = None,
    ) -> CacheChunk:
        """
        Get one page of the (filtered, sorted) listing.

        Args:
            size: Page size (positive)
            index: Zero-based page index

        Returns:
            Page records plus total count and whether more pages exist
        """
        size = validate_chunk_size(size)
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidArgumentError("index", index, "page index must be an integer")
        if index < 0:
            raise InvalidArgumentError("index", index, "page index cannot be negative")

        data = self.list(pre_filter, sort)
        start = size * index
        end = start + size
        return CacheChunk(
            chunk=tuple(data[start:end]),
            total=len(data),
            size=size,
            index=index,
            has_more=end < len(data),
        )

    def get_chunk_session(
        self,
        size: int,
        pre_filter: Optional[CacheFilter] = None,
        sort: Optional[CacheSort] = None,
    ) -> ChunkSession:
        """Get chunk session iterating a snapshot of the listing."""
        validate_chunk_size(size)
        return ChunkSession(self.list(pre_filter, sort), size)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identity: Any) -> bool:
        return self.has(identity)

    def __repr__(self) -> str:
        return f"ModelCache(name={self.name!r}, size={self.size})"

    def _log(self, operation: LogOperation, message: str, **context: Any) -> None:
        if self._logger is None:
            return
        level = self.log_mapping.level_for(operation)
        if level == LogLevel.NONE:
            return
        try:
            getattr(self._logger, level.value)(
                message, cache=self.name, operation=operation.value, **context
            )
        except Exception as e:
            logger.error(
                "Cache diagnostic logger failed",
                cache=self.name,
                operation=operation.value,
                diagnostic=message,
                error=str(e),
                exc_info=True,
            )
