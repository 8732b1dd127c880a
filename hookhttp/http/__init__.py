"""Request pipeline, URL composition and cancellation."""

from .cancellation import CancellationController, CancellationSignal, CancellationToken
from .client import HttpClient
from .models import (
    DEFAULT_CONFIG,
    JSON_CONTENT_TYPE,
    ClientConfig,
    HttpMethod,
    RequestOptions,
    is_success_status,
)
from .url import build_query, build_url


__all__ = [
    "DEFAULT_CONFIG",
    "JSON_CONTENT_TYPE",
    "CancellationController",
    "CancellationSignal",
    "CancellationToken",
    "ClientConfig",
    "HttpClient",
    "HttpMethod",
    "RequestOptions",
    "build_query",
    "build_url",
    "is_success_status",
]
