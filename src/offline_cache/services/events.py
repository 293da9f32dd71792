"""Minimal event source: one async listener per event type."""

from collections.abc import Awaitable, Callable
from typing import Any

Listener = Callable[..., Awaitable[Any]]


class EventSource:
    def __init__(self) -> None:
        self._listeners: dict[str, Listener] = {}

    def add_listener(self, event_type: str, listener: Listener) -> None:
        if event_type in self._listeners:
            raise ValueError(f"A listener for {event_type!r} is already registered")
        self._listeners[event_type] = listener

    def has_listener(self, event_type: str) -> bool:
        return event_type in self._listeners

    async def dispatch(self, event_type: str, *args: Any) -> Any:
        """Run the listener for event_type and return its result.

        Raises:
            LookupError: If nothing listens for event_type
        """
        listener = self._listeners.get(event_type)
        if listener is None:
            raise LookupError(f"No listener for event {event_type!r}")
        return await listener(*args)
