"""Observable state slot for controller output.

A controller owns one ``ObservableState`` per thing it exposes. The
presentation layer subscribes and re-renders on every change; it never writes.
Notification is synchronous and happens on the event loop thread that made
the change.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

__all__ = ["ObservableState"]

logger = structlog.get_logger()

T = TypeVar("T")

Listener = Callable[[T], None]


class ObservableState(Generic[T]):
    """Single-writer, many-reader state holder.

    Attributes:
        name: Label used in log events (e.g., "user_skills").
    """

    def __init__(self, initial: T, *, name: str = "state") -> None:
        """Initialize with an initial value.

        Args:
            initial: Value exposed before any operation runs.
            name: Label used in log events.
        """
        self.name = name
        self._value = initial
        self._listeners: list[Listener[T]] = []

    @property
    def value(self) -> T:
        """Current value."""
        return self._value

    def set(self, value: T) -> None:
        """Replace the current value and notify subscribers.

        Subscribers are notified even when the new value equals the old one.

        Args:
            value: New value.
        """
        self._value = value
        logger.debug("state_changed", state=self.name, value=repr(value))
        for listener in list(self._listeners):
            listener(value)

    def subscribe(
        self, listener: Listener[T], *, replay: bool = True
    ) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Callable invoked with each new value.
            replay: If True, the listener is called with the current value
                right away.

        Returns:
            A function that removes the listener when called.
        """
        self._listeners.append(listener)
        if replay:
            listener(self._value)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
