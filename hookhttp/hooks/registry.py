"""Registry of listeners per event"""

from collections import defaultdict

import structlog

from .base import Listener
from .events import HttpClientEvent


class ListenerRegistry:
    """Keeps listeners per event in registration order"""

    def __init__(self) -> None:
        self._listeners: dict[HttpClientEvent, list[Listener]] = defaultdict(list)
        self._logger = structlog.get_logger(__name__)

    def register(self, event: HttpClientEvent, listener: Listener) -> None:
        """Append a listener for an event"""
        self._listeners[event].append(listener)
        self._logger.debug(
            "listener_registered",
            hook_event=event.value,
            listener=_listener_name(listener),
        )

    def unregister(self, event: HttpClientEvent, listener: Listener) -> None:
        """Remove a listener from an event, if present"""
        if listener in self._listeners.get(event, []):
            self._listeners[event].remove(listener)

    def get_listeners(self, event: HttpClientEvent) -> list[Listener]:
        """Snapshot of the listeners for an event"""
        return list(self._listeners.get(event, []))

    def clear(self) -> None:
        self._listeners.clear()


def _listener_name(listener: Listener) -> str:
    return getattr(listener, "__qualname__", None) or type(listener).__name__
