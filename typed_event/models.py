"""Listener records and the unsubscribe token type."""

from __future__ import annotations

from collections.abc import Callable
from types import MethodType
from typing import Any

from pydantic import BaseModel, PrivateAttr

UnsubscribeToken = Callable[[], None]


class Listener(BaseModel):
    """A registered handler and whether it removes itself after one call."""

    handler: Callable[..., Any]
    once: bool = False

    # Set just before a once-listener is invoked so nested triggers skip it.
    _fired: bool = PrivateAttr(default=False)
    _active: bool = PrivateAttr(default=True)

    @property
    def active(self) -> bool:
        """False once the record has been dropped from its event."""
        return self._active

    def drop(self) -> None:
        self._active = False

    def claim(self) -> bool:
        """Mark a once-listener as fired; False if it already was."""
        if self._fired:
            return False
        self._fired = True
        return True

    def holds(self, handler: Callable[..., Any]) -> bool:
        """Whether this record was registered with the same ``handler`` object.

        Bound methods are rebuilt on every attribute access, so two of them
        match when they bind the same function to the same instance.
        """
        if self.handler is handler:
            return True
        if isinstance(self.handler, MethodType) and isinstance(handler, MethodType):
            return self.handler.__self__ is handler.__self__ and self.handler.__func__ is handler.__func__
        return False
