"""Response body decoding."""

import json
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from hookhttp.exceptions import DecodeFailure


def decode_response(response: httpx.Response, response_type: Any = None) -> Any:
    """Parse a response body as JSON.

    Args:
        response: Response whose body has been read
        response_type: Optional type (pydantic model, TypedDict, builtin
            generic, ...) the decoded value is validated against

    Returns:
        The decoded value, validated when ``response_type`` is given

    Raises:
        DecodeFailure: If the body is not JSON or does not validate
    """
    try:
        data = json.loads(response.content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeFailure(
            f"Response body is not valid JSON: {e}",
            response=response,
            details={"status_code": response.status_code},
        ) from e

    if response_type is None:
        return data

    try:
        return TypeAdapter(response_type).validate_python(data)
    except ValidationError as e:
        raise DecodeFailure(
            f"Response body does not match {response_type!r}",
            response=response,
            details={"errors": e.errors(include_url=False)},
        ) from e
