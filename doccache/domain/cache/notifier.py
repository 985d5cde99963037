"""
Change Notifier

Synchronous publish/subscribe dispatcher for cache change events.

Listeners for an event run in registration order on the caller's thread.
A listener that raises is logged and skipped; the remaining listeners
still run and the error never reaches the mutating caller.
"""

from collections.abc import Callable
from typing import Any, Dict, List, Union

import structlog

from .exceptions import InvalidArgumentError
from .value_objects import CacheEvent

logger = structlog.get_logger(__name__)

Listener = Callable[..., Any]


class ChangeNotifier:
    """Event broadcaster owned by a single cache instance."""

    def __init__(self, owner: str = ""):
        self.owner = owner
        self._listeners: Dict[CacheEvent, List[Listener]] = {
            event: [] for event in CacheEvent
        }

    @staticmethod
    def _event(event: Union[CacheEvent, str]) -> CacheEvent:
        try:
            return CacheEvent(event)
        except ValueError as exc:
            raise InvalidArgumentError(
                "event", event, f"must be one of {[e.value for e in CacheEvent]}"
            ) from exc

    def subscribe(self, event: Union[CacheEvent, str], listener: Listener) -> None:
        """
        Register listener for an event.

        Args:
            event: Event name or CacheEvent member
            listener: Callable invoked with the event payload
        """
        if not callable(listener):
            raise InvalidArgumentError("listener", listener, "must be callable")

        event = self._event(event)
        listeners = self._listeners[event]
        listeners.append(listener)
        logger.debug(
            "Listener subscribed",
            cache=self.owner,
            event_name=event.value,
            listener_count=len(listeners),
        )

    def unsubscribe(self, event: Union[CacheEvent, str], listener: Listener) -> bool:
        """
        Remove first registration of listener for an event.

        Returns:
            True if the listener was registered
        """
        listeners = self._listeners[self._event(event)]
        if listener in listeners:
            listeners.remove(listener)
            return True
        return False

    def listener_count(self, event: Union[CacheEvent, str]) -> int:
        """Get number of listeners registered for an event."""
        return len(self._listeners[self._event(event)])

    def emit(self, event: Union[CacheEvent, str], *args: Any) -> int:
        """
        Dispatch event to its listeners.

        Args:
            event: Event to dispatch
            *args: Payload passed to every listener

        Returns:
            Number of listeners that raised
        """
        event = self._event(event)
        failures = 0

        # listeners added during dispatch run from the next round on
        for listener in list(self._listeners[event]):
            try:
                listener(*args)
            except Exception as e:
                failures += 1
                logger.error(
                    "Cache listener failed",
                    cache=self.owner,
                    event_name=event.value,
                    listener=getattr(listener, "__name__", repr(listener)),
                    error=str(e),
                    exc_info=True,
                )

        return failures
