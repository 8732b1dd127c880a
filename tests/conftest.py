"""Shared test fixtures and configuration for hookhttp tests.

The transport is always an httpx.MockTransport; nothing leaves the process.
"""

from collections.abc import AsyncGenerator

import httpx
import pytest

from hookhttp import HttpClient
from hookhttp.core.logging import setup_logging
from tests.helpers.echo import BASE_URL, DEFAULT_HEADERS, echo_transport


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom settings."""
    # Ensure async tests work properly
    config.option.asyncio_mode = "auto"

    setup_logging(json_logs=False, log_level_name="DEBUG")


@pytest.fixture
async def transport_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """httpx client wired to the echo transport."""
    async with httpx.AsyncClient(transport=echo_transport()) as client:
        yield client


@pytest.fixture
def http(transport_client: httpx.AsyncClient) -> HttpClient:
    """HttpClient rooted at the echo routes with one default header."""
    return HttpClient(BASE_URL, DEFAULT_HEADERS, client=transport_client)
