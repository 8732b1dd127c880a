"""Event definitions for the request lifecycle."""

from enum import Enum


class HttpClientEvent(str, Enum):
    """Events emitted by HttpClient during a call"""

    # Payload: the httpx.Request, before it is sent
    REQUEST_CREATE = "REQUEST_CREATE"
    # Payload: the httpx.Request, after the transport replied
    RESPONSE_FETCHED = "RESPONSE_FETCHED"
    # Payload: the httpx.Request, once the response was accepted
    RESPONSE_CREATE = "RESPONSE_CREATE"
    # Payload: (httpx.Response, ThrowDecision) for failure statuses
    RESPONSE_ERROR = "RESPONSE_ERROR"
