"""Per-call configuration and transport options."""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .cancellation import CancellationToken
from .url import QueryValue


HeaderValue = str | int | float | bool

JSON_CONTENT_TYPE = "application/json;charset=utf-8"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    TRACE = "TRACE"
    OPTIONS = "OPTIONS"
    CONNECT = "CONNECT"


def is_success_status(status_code: int) -> bool:
    """2xx and 3xx responses are accepted without consulting listeners."""
    return 200 <= status_code < 400


def _explicit_fields(model: BaseModel) -> dict[str, Any]:
    return {name: getattr(model, name) for name in model.model_fields_set}


class ClientConfig(BaseModel):
    """Options of a single call.

    Only the fields a caller explicitly sets take part in a merge, so an
    empty config is the same as no config at all, and ``body=None`` set on
    purpose still counts as "the caller defined the body".
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    params: dict[str, QueryValue] | None = Field(
        default=None,
        description="Query parameters, None values are left out of the URL",
    )
    body: str | bytes | None = Field(
        default=None,
        description="Raw request body sent as-is",
    )
    with_events: bool = Field(
        default=True,
        description="Emit lifecycle events for this call",
    )
    cancellation_token: CancellationToken | None = Field(
        default=None,
        description="Token resolved to a fresh cancellation signal per call",
    )

    def merged(self, overrides: "ClientConfig | Mapping[str, Any] | None") -> "ClientConfig":
        """Return a new config with the explicit fields of ``overrides`` applied."""
        if overrides is None:
            return self
        if not isinstance(overrides, ClientConfig):
            overrides = ClientConfig.model_validate(dict(overrides))
        return ClientConfig(**{**_explicit_fields(self), **_explicit_fields(overrides)})

    def defines(self, field_name: str) -> bool:
        return field_name in self.model_fields_set


DEFAULT_CONFIG = ClientConfig(with_events=True)


class RequestOptions(BaseModel):
    """Options handed to the transport.

    When a caller supplies options, every field they set replaces the
    default value wholesale. Headers are the exception: they are still
    layered on top of the client's default headers.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: HttpMethod | None = None
    mode: str = "cors"
    redirect: Literal["follow", "manual", "error"] = "follow"
    body: str | bytes | None = None
    headers: dict[str, HeaderValue] = Field(default_factory=dict)
    timeout: float | None = Field(default=None, gt=0)

    def merged(
        self, overrides: "RequestOptions | Mapping[str, Any] | None"
    ) -> "RequestOptions":
        if overrides is None:
            return self
        if not isinstance(overrides, RequestOptions):
            overrides = RequestOptions.model_validate(dict(overrides))
        return RequestOptions(
            **{**_explicit_fields(self), **_explicit_fields(overrides)}
        )
