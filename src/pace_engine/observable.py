"""Observable — latest-value holder with change notification.

One writer publishes, any number of readers either poll ``.value`` or
subscribe for callbacks. Publishing is serialized under a lock so every
subscriber sees values in the order they were set; reading ``.value``
takes no lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Subscriber = Callable[[T], None]


class Observable(Generic[T]):
    """Holds the latest value of a piece of state and notifies on change."""

    def __init__(self, initial: T, name: str = "") -> None:
        self._value = initial
        self._name = name
        self._subscribers: list[Subscriber] = []
        self._lock = threading.RLock()

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Publish *value*; subscribers are only called when it changed."""
        with self._lock:
            if value == self._value:
                return
            self._value = value
            for callback in list(self._subscribers):
                self._notify(callback, value)

    def subscribe(
        self, callback: Subscriber, *, replay: bool = True
    ) -> Callable[[], None]:
        """Register *callback*; returns a function that unsubscribes it.

        With ``replay`` the callback immediately receives the current value.
        """
        with self._lock:
            self._subscribers.append(callback)
            if replay:
                self._notify(callback, self._value)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, callback: Subscriber, value: T) -> None:
        try:
            callback(value)
        except Exception:
            logger.warning(
                "Subscriber %r of %s raised", callback, self._name or "observable",
                exc_info=True,
            )

    def __repr__(self) -> str:
        return f"Observable({self._name or '?'}={self._value!r})"
