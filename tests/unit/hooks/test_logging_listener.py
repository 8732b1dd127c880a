"""Tests for the structured logging listener."""

import httpx
import pytest
from structlog.testing import capture_logs

from hookhttp import HttpClient, HttpFailure, ThrowDecision
from hookhttp.hooks.implementations import LoggingListener


@pytest.fixture
def listener() -> LoggingListener:
    return LoggingListener()


async def test_logs_request_created(listener: LoggingListener) -> None:
    request = httpx.Request("POST", "https://api.example.com/items")

    with capture_logs() as logs:
        await listener.on_request_created(request)

    assert logs == [
        {
            "event": "http_request_created",
            "log_level": "info",
            "hook_event": "REQUEST_CREATE",
            "method": "POST",
            "url": "https://api.example.com/items",
        }
    ]


async def test_logs_response_error_with_decision(listener: LoggingListener) -> None:
    request = httpx.Request("GET", "https://api.example.com/items/1")
    response = httpx.Response(404, request=request)

    with capture_logs() as logs:
        await listener.on_response_error((response, ThrowDecision(throw=False)))

    (entry,) = logs
    assert entry["event"] == "http_response_error"
    assert entry["log_level"] == "warning"
    assert entry["status_code"] == 404
    assert entry["reason"] == "Not Found"
    assert entry["will_throw"] is False
    assert entry["url"] == "https://api.example.com/items/1"


async def test_response_error_without_request(listener: LoggingListener) -> None:
    with capture_logs() as logs:
        await listener.on_response_error((httpx.Response(500), ThrowDecision()))

    assert "url" not in logs[0]


async def test_attach_covers_every_event(transport_client: httpx.AsyncClient) -> None:
    from tests.helpers.echo import BASE_URL

    http = HttpClient(BASE_URL, client=transport_client)
    LoggingListener().attach(http)

    with capture_logs() as logs:
        await http.get("/get")
        with pytest.raises(HttpFailure):
            await http.get("/error")

    listener_events = [
        entry["event"] for entry in logs if "hook_event" in entry
    ]
    assert listener_events == [
        "http_request_created",
        "http_response_fetched",
        "http_response_created",
        "http_request_created",
        "http_response_fetched",
        "http_response_error",
    ]
