"""Thread-safe variant of :class:`typed_event.event.Event`."""

from __future__ import annotations

from collections.abc import Callable
from threading import RLock

from typed_event.event import Event, P
from typed_event.models import Listener


class LockedEvent(Event[P]):
    """Event whose listener collection may be shared across threads.

    Reads and writes of the collection happen under a re-entrant lock.
    Handlers themselves run outside the lock, so a handler can subscribe,
    unsubscribe or trigger on the same event without deadlocking.
    """

    def __init__(self) -> None:
        super().__init__()
        self._lock = RLock()

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def _append(self, listener: Listener) -> None:
        with self._lock:
            super()._append(listener)

    def _remove(self, handler: Callable[..., None]) -> int:
        with self._lock:
            return super()._remove(handler)

    def _replace(self, listeners: list[Listener]) -> None:
        with self._lock:
            super()._replace(listeners)

    def _snapshot(self) -> list[Listener]:
        with self._lock:
            return super()._snapshot()

    def _claim(self, listener: Listener) -> bool:
        with self._lock:
            return super()._claim(listener)
