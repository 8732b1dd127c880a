"""Event system for hookhttp.

This package provides the named extension points of the request pipeline.
Listeners observe (and may modify) requests and responses without changing
call sites, and RESPONSE_ERROR listeners can veto the failure of a call.

Key components:
- HttpClientEvent: Enumeration of all lifecycle events
- ThrowDecision: Mutable veto record passed to RESPONSE_ERROR listeners
- EventEmitter: Protocol for registration and sequential dispatch
- ListenerRegistry: Registry of listeners per event
- EventManager: Default EventEmitter implementation
"""

from .base import EventEmitter, Listener, ThrowDecision
from .events import HttpClientEvent
from .manager import EventManager
from .registry import ListenerRegistry


__all__ = [
    "EventEmitter",
    "EventManager",
    "HttpClientEvent",
    "Listener",
    "ListenerRegistry",
    "ThrowDecision",
]
