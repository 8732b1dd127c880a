"""Structured logging listener implementation."""

from typing import Any

import httpx
import structlog

from ..base import ThrowDecision
from ..events import HttpClientEvent


class LoggingListener:
    """Structured logging for every lifecycle event"""

    def __init__(self, logger: structlog.BoundLogger | None = None):
        """Initialize logging listener.

        Args:
            logger: Optional structlog logger instance. If None, creates a new one.
        """
        self.logger = logger or structlog.get_logger(__name__)

    def attach(self, client: Any) -> None:
        """Register the listener on every event of an HttpClient."""
        client.on(HttpClientEvent.REQUEST_CREATE, self.on_request_created)
        client.on(HttpClientEvent.RESPONSE_FETCHED, self.on_response_fetched)
        client.on(HttpClientEvent.RESPONSE_CREATE, self.on_response_created)
        client.on(HttpClientEvent.RESPONSE_ERROR, self.on_response_error)

    async def on_request_created(self, request: httpx.Request) -> None:
        self.logger.info(
            "http_request_created",
            hook_event=HttpClientEvent.REQUEST_CREATE.value,
            **_request_fields(request),
        )

    async def on_response_fetched(self, request: httpx.Request) -> None:
        self.logger.debug(
            "http_response_fetched",
            hook_event=HttpClientEvent.RESPONSE_FETCHED.value,
            **_request_fields(request),
        )

    async def on_response_created(self, request: httpx.Request) -> None:
        self.logger.info(
            "http_response_created",
            hook_event=HttpClientEvent.RESPONSE_CREATE.value,
            **_request_fields(request),
        )

    async def on_response_error(
        self, payload: tuple[httpx.Response, ThrowDecision]
    ) -> None:
        response, decision = payload
        log_data: dict[str, Any] = {
            "hook_event": HttpClientEvent.RESPONSE_ERROR.value,
            "status_code": response.status_code,
            "reason": response.reason_phrase,
            "will_throw": decision.throw,
        }
        try:
            log_data.update(_request_fields(response.request))
        except RuntimeError:
            pass  # response built without a request
        self.logger.warning("http_response_error", **log_data)


def _request_fields(request: httpx.Request) -> dict[str, Any]:
    return {"method": request.method, "url": str(request.url)}
