"""Sequential event dispatch for hookhttp.

This module provides the EventManager class, the default EventEmitter used by
HttpClient. Listeners are awaited one at a time, in registration order, and a
failing listener stops the dispatch: the pipeline that emitted the event is
aborted with the listener's own exception.
"""

import inspect
from typing import Any

import structlog

from .base import Listener
from .events import HttpClientEvent
from .registry import ListenerRegistry, _listener_name


class EventManager:
    """Dispatches events to the listeners of a ListenerRegistry.

    Both async and sync listeners are supported. Sync listeners are called
    inline on the event loop, so they must not block.
    """

    def __init__(self, registry: ListenerRegistry | None = None):
        """Initialize the event manager.

        Args:
            registry: Registry to read listeners from; a fresh one by default
        """
        self._registry = registry or ListenerRegistry()
        self._logger = structlog.get_logger(__name__)

    @property
    def registry(self) -> ListenerRegistry:
        return self._registry

    def register(self, event: HttpClientEvent, listener: Listener) -> None:
        self._registry.register(event, listener)

    def unregister(self, event: HttpClientEvent, listener: Listener) -> None:
        self._registry.unregister(event, listener)

    async def dispatch(self, event: HttpClientEvent, payload: Any) -> None:
        """Deliver a payload to every listener of an event.

        Args:
            event: The event to emit
            payload: Passed unchanged to each listener

        Raises:
            Exception: Whatever the first failing listener raised; the
                remaining listeners are not called
        """
        listeners = self._registry.get_listeners(event)
        if not listeners:
            return

        for listener in listeners:
            try:
                await self._execute_listener(listener, payload)
            except Exception as e:
                self._logger.warning(
                    "event_listener_failed",
                    hook_event=event.value,
                    listener=_listener_name(listener),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

    async def _execute_listener(self, listener: Listener, payload: Any) -> None:
        result = listener(payload)
        if inspect.isawaitable(result):
            await result
