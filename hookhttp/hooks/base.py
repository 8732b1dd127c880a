"""Listener types and the veto record shared with RESPONSE_ERROR listeners."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from .events import HttpClientEvent


Listener = Callable[[Any], Awaitable[None] | None]


@dataclass
class ThrowDecision:
    """Mutable decision handed to every RESPONSE_ERROR listener.

    Listeners run one after another against the same instance; the pipeline
    reads ``throw`` only after the last listener returned. Setting it to
    False suppresses the HttpFailure and lets the call decode the body.
    """

    throw: bool = True


@runtime_checkable
class EventEmitter(Protocol):
    """Named-event registration plus sequential dispatch.

    ``dispatch`` must await listeners one at a time in registration order
    and let listener exceptions propagate.
    """

    def register(self, event: HttpClientEvent, listener: Listener) -> None: ...

    def unregister(self, event: HttpClientEvent, listener: Listener) -> None: ...

    async def dispatch(self, event: HttpClientEvent, payload: Any) -> None: ...
