"""Exceptions raised by the hookhttp request pipeline."""

from datetime import UTC, datetime
from typing import Any

import httpx


class HttpClientError(Exception):
    """Base exception for hookhttp errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransportFailure(HttpClientError):
    """The transport could not complete the exchange.

    Raised for network errors, DNS failures, forbidden redirects and
    cancellation. Never subject to suppression by event listeners.
    """

    def __init__(
        self,
        message: str,
        request: httpx.Request | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.request = request


class RequestAborted(TransportFailure):
    """The request was interrupted through its cancellation signal."""

    def __init__(
        self,
        reason: Any = None,
        request: httpx.Request | None = None,
    ) -> None:
        message = "Request aborted"
        if reason is not None:
            message = f"Request aborted: {reason}"
        super().__init__(message, request=request)
        self.reason = reason


class DecodeFailure(HttpClientError):
    """The response body could not be parsed as the expected format."""

    def __init__(
        self,
        message: str,
        response: httpx.Response | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.response = response


class BodyConsumedError(HttpClientError):
    """The response body of an HttpFailure was already decoded once."""

    def __init__(self) -> None:
        super().__init__("Response body already consumed")


def _response_url(response: httpx.Response) -> str:
    # Responses built by hand (tests, listeners) may not carry a request
    try:
        return str(response.url)
    except RuntimeError:
        return ""


class HttpFailure(HttpClientError):
    """A response was received but its status indicates failure.

    The message has the form ``"<status text>@<url>"``. The original response
    is kept on :attr:`response` so callers can inspect headers and status,
    and :meth:`decode_body` parses the body on demand.
    """

    def __init__(self, response: httpx.Response) -> None:
        self.code = response.status_code
        self.status_text = response.reason_phrase
        self.url = _response_url(response)
        self.date = datetime.now(UTC)
        self.response = response
        self._body_used = False
        super().__init__(
            f"{self.status_text}@{self.url}",
            details={"status_code": self.code},
        )

    @property
    def body_used(self) -> bool:
        return self._body_used

    def decode_body(self, response_type: Any = None) -> Any:
        """Decode the failed response's JSON body.

        Args:
            response_type: Optional type the decoded body is validated against

        Returns:
            The decoded body

        Raises:
            BodyConsumedError: If the body was already decoded through this error
            DecodeFailure: If the body is not valid JSON or fails validation
        """
        from hookhttp.http.decoding import decode_response

        if self._body_used:
            raise BodyConsumedError()
        self._body_used = True
        return decode_response(self.response, response_type)


__all__ = [
    "BodyConsumedError",
    "DecodeFailure",
    "HttpClientError",
    "HttpFailure",
    "RequestAborted",
    "TransportFailure",
]
