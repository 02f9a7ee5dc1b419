"""Minimal observer support for client state containers."""

from collections.abc import Callable
from typing import Self


class Observable:
    """Notifies subscribers with the instance after every state change."""

    def __init__(self) -> None:
        self._listeners: list[Callable[[Self], None]] = []

    def subscribe(self, listener: Callable[[Self], None]) -> Callable[[], None]:
        """Register a listener and return a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
