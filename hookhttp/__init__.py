"""hookhttp - async HTTP client with lifecycle events.

Listeners registered for REQUEST_CREATE, RESPONSE_FETCHED, RESPONSE_CREATE
and RESPONSE_ERROR observe and modify requests and responses without
changing call sites.
"""

from .exceptions import (
    BodyConsumedError,
    DecodeFailure,
    HttpClientError,
    HttpFailure,
    RequestAborted,
    TransportFailure,
)
from .hooks import EventEmitter, EventManager, HttpClientEvent, ThrowDecision
from .http import (
    CancellationController,
    CancellationSignal,
    CancellationToken,
    ClientConfig,
    HttpClient,
    HttpMethod,
    RequestOptions,
    build_url,
)


__version__ = "0.1.0"

__all__ = [
    "BodyConsumedError",
    "CancellationController",
    "CancellationSignal",
    "CancellationToken",
    "ClientConfig",
    "DecodeFailure",
    "EventEmitter",
    "EventManager",
    "HttpClient",
    "HttpClientError",
    "HttpClientEvent",
    "HttpFailure",
    "HttpMethod",
    "RequestAborted",
    "RequestOptions",
    "ThrowDecision",
    "TransportFailure",
    "build_url",
]
