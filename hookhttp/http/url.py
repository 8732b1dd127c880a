"""Target URL composition."""

from collections.abc import Mapping
from urllib.parse import urlencode

import httpx


QueryValue = str | int | float | bool | None
QueryParams = Mapping[str, QueryValue]


def format_value(value: str | int | float | bool) -> str:
    # Booleans go on the wire as true/false, in queries and headers alike
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_absolute_url(url: str) -> bool:
    """Return True when ``url`` carries its own scheme and host."""
    try:
        return httpx.URL(url).is_absolute_url
    except httpx.InvalidURL:
        return False


def build_query(params: QueryParams | None) -> str:
    """Serialize query parameters in iteration order, skipping None values."""
    if not params:
        return ""
    pairs = [
        (key, format_value(value)) for key, value in params.items() if value is not None
    ]
    return urlencode(pairs)


def build_url(base: str, path: str, params: QueryParams | None = None) -> str:
    """Compose the target URL of a request.

    Args:
        base: Base URL prepended to relative paths
        path: Request path, or an absolute URL that makes ``base`` irrelevant
        params: Optional query parameters

    Returns:
        ``base + path`` (or ``path`` alone when absolute) with the query
        string appended when there is at least one non-None parameter
    """
    if is_absolute_url(path):
        base = ""

    query = build_query(params)
    if query:
        return f"{base}{path}?{query}"
    return f"{base}{path}"
