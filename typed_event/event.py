"""Synchronous in-process event with ordered, typed handlers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, ParamSpec

from typed_event.models import Listener, UnsubscribeToken

logger = logging.getLogger(__name__)

P = ParamSpec("P")


class Event(Generic[P]):
    """A single notifier that handlers can subscribe to and that can be triggered.

    Handlers are called synchronously in subscription order. The type
    parameter fixes the handler signature, e.g. ``Event[[str, int]]`` for
    handlers taking ``(message, code)``; it is not checked at runtime.

    Exceptions raised by a handler are not caught: they stop the current
    trigger pass and propagate to the caller.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(listeners={self.listener_count})"

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def is_subscribed(self, handler: Callable[P, None]) -> bool:
        return any(listener.holds(handler) for listener in self._snapshot())

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, handler: Callable[P, None]) -> UnsubscribeToken:
        """Invoke ``handler`` on every trigger until it is unsubscribed.

        Returns a zero-argument callable that unsubscribes ``handler``.
        Calling it more than once, or after the handler is already gone,
        does nothing.
        """
        return self._register(Listener(handler=handler))

    def once(self, handler: Callable[P, None]) -> UnsubscribeToken:
        """Invoke ``handler`` on the next trigger only, then drop it.

        The returned token removes the handler early if it has not fired yet.
        """
        return self._register(Listener(handler=handler, once=True))

    def unsubscribe(self, handler: Callable[P, None]) -> None:
        """Remove every registration of ``handler``. Unknown handlers are ignored."""
        removed = self._remove(handler)
        if removed:
            logger.debug(f"Unsubscribed {_name(handler)} ({removed} listener(s)) from {self!r}")

    def clear(self) -> None:
        """Remove all listeners."""
        self._replace([])
        logger.debug(f"Cleared all listeners from {self!r}")

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def trigger(self, *args: P.args, **kwargs: P.kwargs) -> None:
        """Call every registered handler with the given arguments.

        Only listeners present when the call starts are invoked. A listener
        removed by an earlier handler during the same pass is skipped.
        """
        listeners = self._snapshot()
        logger.debug("Triggering %s with %d listener(s)", type(self).__name__, len(listeners))

        for listener in listeners:
            if not listener.active:
                continue

            if not listener.once:
                listener.handler(*args, **kwargs)
                continue

            if not self._claim(listener):
                continue
            try:
                listener.handler(*args, **kwargs)
            finally:
                self.unsubscribe(listener.handler)

    # ------------------------------------------------------------------
    # Listener collection
    # ------------------------------------------------------------------

    def _register(self, listener: Listener) -> UnsubscribeToken:
        self._append(listener)
        logger.debug(
            f"Subscribed {_name(listener.handler)} to {self!r}"
            + (" (once)" if listener.once else "")
        )

        def unsubscribe() -> None:
            self.unsubscribe(listener.handler)

        return unsubscribe

    def _append(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _remove(self, handler: Callable[..., None]) -> int:
        remaining = []
        for listener in self._listeners:
            if listener.holds(handler):
                listener.drop()
            else:
                remaining.append(listener)
        removed = len(self._listeners) - len(remaining)
        self._listeners = remaining
        return removed

    def _replace(self, listeners: list[Listener]) -> None:
        for listener in self._listeners:
            listener.drop()
        self._listeners = listeners

    def _snapshot(self) -> list[Listener]:
        return list(self._listeners)

    def _claim(self, listener: Listener) -> bool:
        return listener.claim()


def _name(handler: Callable[..., object]) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)
