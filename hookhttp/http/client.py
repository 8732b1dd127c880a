"""HTTP client with lifecycle events for request/response interception.

Every call runs the same pipeline: the request is built and announced with
REQUEST_CREATE, sent through the httpx transport, announced again with
RESPONSE_FETCHED, validated (failures go through RESPONSE_ERROR, whose
listeners may veto the raise), announced with RESPONSE_CREATE and finally
decoded as JSON.
"""

import asyncio
import json as jsonlib
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel

from hookhttp.core.logging import get_logger
from hookhttp.exceptions import HttpFailure, RequestAborted, TransportFailure
from hookhttp.hooks import (
    EventEmitter,
    EventManager,
    HttpClientEvent,
    Listener,
    ThrowDecision,
)

from .cancellation import CancellationSignal
from .decoding import decode_response
from .models import (
    DEFAULT_CONFIG,
    JSON_CONTENT_TYPE,
    ClientConfig,
    HeaderValue,
    HttpMethod,
    RequestOptions,
    is_success_status,
)
from .url import QueryParams, build_url, format_value


if TYPE_CHECKING:
    from hookhttp.config import Settings


logger = get_logger(__name__)

ConfigInput = ClientConfig | Mapping[str, Any] | None
OptionsInput = RequestOptions | Mapping[str, Any] | None

# Keys under which the pipeline stores per-request state in httpx extensions
SIGNAL_EXTENSION = "cancellation_signal"
MODE_EXTENSION = "mode"
REDIRECT_EXTENSION = "redirect"


def _serialize_json(body: Any) -> str:
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json")
    return jsonlib.dumps(body, separators=(",", ":"), ensure_ascii=False)


def _has_structured_body(body: Any) -> bool:
    """Whether a body argument should be serialized and sent.

    None, empty strings, zero and False are treated as "no body". Containers
    and models are always sent, even when empty.
    """
    if body is None:
        return False
    if isinstance(body, str | bytes | int | float):
        return bool(body)
    return True


class HttpClient:
    """Asynchronous HTTP client with named lifecycle events.

    Example:
        >>> async with HttpClient("https://api.example.com", {"X-Env": "prod"}) as http:
        ...     http.on(HttpClientEvent.RESPONSE_ERROR, suppress_404)
        ...     user = await http.get("/users/1", response_type=User)
    """

    def __init__(
        self,
        base_url: str = "",
        default_headers: Mapping[str, HeaderValue] | None = None,
        *,
        default_config: ClientConfig | None = None,
        events: EventEmitter | None = None,
        client: httpx.AsyncClient | None = None,
        **client_kwargs: Any,
    ) -> None:
        """Create a client.

        Args:
            base_url: Prepended to every relative request path
            default_headers: Headers sent with every request
            default_config: Config every call's config is merged onto
            events: Event emitter; a fresh EventManager by default
            client: httpx client used as transport. When omitted one is
                created from ``client_kwargs`` and closed by :meth:`aclose`
            **client_kwargs: Keyword arguments for httpx.AsyncClient

        Raises:
            TypeError: If ``client_kwargs`` are given together with ``client``
        """
        if client is not None and client_kwargs:
            raise TypeError("client_kwargs cannot be combined with client=")

        self.base_url = base_url
        self._default_headers: dict[str, HeaderValue] = dict(default_headers or {})
        self._default_config = default_config or DEFAULT_CONFIG
        self._events: EventEmitter = events if events is not None else EventManager()
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(**client_kwargs)

    @classmethod
    def from_settings(
        cls, settings: "Settings | None" = None, *, configure_logging: bool = False
    ) -> "HttpClient":
        """Build a client from Settings (environment, .env, defaults).

        Args:
            settings: Settings to use; loaded from the environment when None
            configure_logging: Also apply the logging section of the settings
        """
        from hookhttp.config import Settings
        from hookhttp.core.logging import setup_logging
        from hookhttp.hooks.implementations import LoggingListener

        settings = settings or Settings()
        if configure_logging:
            setup_logging(
                json_logs=settings.logging.format == "json",
                log_level_name=settings.logging.level,
            )

        http_settings = settings.http
        client = cls(
            http_settings.base_url,
            http_settings.default_headers,
            default_config=ClientConfig(with_events=http_settings.with_events),
            timeout=http_settings.timeout_seconds,
            verify=http_settings.verify,
        )
        if settings.logging.log_events:
            LoggingListener().attach(client)
        return client

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    @property
    def default_headers(self) -> Mapping[str, HeaderValue]:
        """Read-only view of the headers sent with every request."""
        return MappingProxyType(self._default_headers)

    @property
    def default_config(self) -> ClientConfig:
        return self._default_config

    def set_default_header(self, name: str, value: HeaderValue) -> None:
        self._default_headers[name] = value

    def on(self, event: HttpClientEvent | str, listener: Listener) -> None:
        """Register a listener for a lifecycle event.

        REQUEST_CREATE, RESPONSE_FETCHED and RESPONSE_CREATE listeners receive
        the httpx.Request. RESPONSE_ERROR listeners receive a
        ``(httpx.Response, ThrowDecision)`` pair and may set
        ``decision.throw = False`` to suppress the HttpFailure.
        """
        self._events.register(HttpClientEvent(event), listener)

    def off(self, event: HttpClientEvent | str, listener: Listener) -> None:
        self._events.unregister(HttpClientEvent(event), listener)

    def _merge_config(
        self, config: ConfigInput, **before: Any
    ) -> ClientConfig:
        merged = self._default_config
        if before:
            merged = merged.merged(before)
        return merged.merged(config)

    @staticmethod
    def _with_json_body(config: ClientConfig, body: Any) -> ClientConfig:
        # An explicitly defined raw body, even None, takes precedence
        if config.defines("body") or not _has_structured_body(body):
            return config
        return config.merged({"body": _serialize_json(body)})

    async def get(
        self,
        path: str,
        params: QueryParams | None = None,
        config: ConfigInput = None,
        options: OptionsInput = None,
        *,
        response_type: Any = None,
    ) -> Any:
        before = {"params": params} if params is not None else {}
        call_config = self._merge_config(config, **before)
        return await self._execute(
            HttpMethod.GET, path, call_config, options, response_type
        )

    async def post(
        self,
        path: str,
        body: Any = None,
        config: ConfigInput = None,
        options: OptionsInput = None,
        *,
        response_type: Any = None,
    ) -> Any:
        call_config = self._with_json_body(self._merge_config(config), body)
        return await self._execute(
            HttpMethod.POST, path, call_config, options, response_type
        )

    async def put(
        self,
        path: str,
        body: Any = None,
        config: ConfigInput = None,
        options: OptionsInput = None,
        *,
        response_type: Any = None,
    ) -> Any:
        call_config = self._with_json_body(self._merge_config(config), body)
        return await self._execute(
            HttpMethod.PUT, path, call_config, options, response_type
        )

    async def patch(
        self,
        path: str,
        body: Any = None,
        config: ConfigInput = None,
        options: OptionsInput = None,
        *,
        response_type: Any = None,
    ) -> Any:
        call_config = self._with_json_body(self._merge_config(config), body)
        return await self._execute(
            HttpMethod.PATCH, path, call_config, options, response_type
        )

    async def delete(
        self,
        path: str,
        params: QueryParams | None = None,
        options: OptionsInput = None,
        *,
        config: ConfigInput = None,
        response_type: Any = None,
    ) -> Any:
        """Send a DELETE request. Only query params are accepted, no body."""
        call_config = self._merge_config(config)
        if params is not None:
            call_config = call_config.merged({"params": params})
        return await self._execute(
            HttpMethod.DELETE, path, call_config, options, response_type
        )

    async def request(
        self,
        method: HttpMethod | str,
        path: str,
        *,
        params: QueryParams | None = None,
        body: Any = None,
        config: ConfigInput = None,
        options: OptionsInput = None,
        response_type: Any = None,
    ) -> Any:
        """Run the pipeline for any method.

        ``body`` is serialized to JSON unless the config defines a raw body.
        """
        before = {"params": params} if params is not None else {}
        call_config = self._with_json_body(self._merge_config(config, **before), body)
        return await self._execute(
            HttpMethod(method.upper() if isinstance(method, str) else method),
            path,
            call_config,
            options,
            response_type,
        )

    async def _execute(
        self,
        method: HttpMethod,
        path: str,
        config: ClientConfig,
        options: OptionsInput,
        response_type: Any,
    ) -> Any:
        request = await self._create_request(method, path, config, options)
        return await self._create_response(request, config, response_type)

    def _resolve_options(
        self, method: HttpMethod, config: ClientConfig, options: OptionsInput
    ) -> RequestOptions:
        defaults = RequestOptions(
            mode="cors",
            redirect="follow",
            method=method,
            body=config.body,
            headers={},
        )
        return defaults.merged(options)

    async def _create_request(
        self,
        method: HttpMethod,
        path: str,
        config: ClientConfig,
        options: OptionsInput = None,
    ) -> httpx.Request:
        resolved = self._resolve_options(method, config, options)
        # Option headers replace default headers case-insensitively
        headers = httpx.Headers(
            {name: format_value(value) for name, value in self._default_headers.items()}
        )
        headers.update(
            {name: format_value(value) for name, value in resolved.headers.items()}
        )

        extensions: dict[str, Any] = {
            MODE_EXTENSION: resolved.mode,
            REDIRECT_EXTENSION: resolved.redirect,
        }
        if config.cancellation_token is not None:
            extensions[SIGNAL_EXTENSION] = config.cancellation_token.get_signal()

        build_kwargs: dict[str, Any] = {}
        if resolved.timeout is not None:
            build_kwargs["timeout"] = resolved.timeout

        request_method = resolved.method or method
        request = self._client.build_request(
            request_method.value,
            build_url(self.base_url, path, config.params),
            content=resolved.body,
            headers=headers,
            extensions=extensions,
            **build_kwargs,
        )

        if resolved.body:
            request.headers["Content-Type"] = JSON_CONTENT_TYPE

        logger.debug(
            "http_request_built",
            method=request.method,
            url=str(request.url),
            with_events=config.with_events,
            cancellable=SIGNAL_EXTENSION in extensions,
        )

        if config.with_events:
            await self._events.dispatch(HttpClientEvent.REQUEST_CREATE, request)

        return request

    async def _send(self, request: httpx.Request) -> httpx.Response:
        redirect = request.extensions.get(REDIRECT_EXTENSION, "follow")
        follow_redirects = redirect == "follow"
        signal: CancellationSignal | None = request.extensions.get(SIGNAL_EXTENSION)

        try:
            if signal is None:
                response = await self._client.send(
                    request, follow_redirects=follow_redirects
                )
            else:
                response = await self._send_cancellable(
                    request, signal, follow_redirects
                )
        except httpx.TransportError as e:
            logger.warning(
                "http_transport_failed",
                method=request.method,
                url=str(request.url),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransportFailure(str(e) or type(e).__name__, request=request) from e

        if redirect == "error" and response.is_redirect:
            location = response.headers.get("location", "")
            raise TransportFailure(
                f"Redirect to {location!r} not allowed",
                request=request,
                details={"status_code": response.status_code},
            )

        return response

    async def _send_cancellable(
        self,
        request: httpx.Request,
        signal: CancellationSignal,
        follow_redirects: bool,
    ) -> httpx.Response:
        if signal.cancelled:
            signal.release()
            raise RequestAborted(signal.reason, request=request)

        send_task = asyncio.ensure_future(
            self._client.send(request, follow_redirects=follow_redirects)
        )
        cancel_task = asyncio.ensure_future(signal.wait())
        try:
            done, _ = await asyncio.wait(
                {send_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (send_task, cancel_task):
                if not task.done():
                    task.cancel()
            signal.release()

        if send_task in done:
            return send_task.result()

        # Let the aborted send unwind before reporting the cancellation
        await asyncio.gather(send_task, return_exceptions=True)
        logger.info(
            "http_request_aborted",
            method=request.method,
            url=str(request.url),
            reason=signal.reason,
        )
        raise RequestAborted(signal.reason, request=request)

    async def _check_response(
        self, response: httpx.Response, config: ClientConfig
    ) -> None:
        if is_success_status(response.status_code):
            return

        should_throw = True
        if config.with_events:
            decision = ThrowDecision()
            await self._events.dispatch(
                HttpClientEvent.RESPONSE_ERROR, (response, decision)
            )
            should_throw = decision.throw

        if should_throw:
            logger.debug(
                "http_response_rejected",
                status_code=response.status_code,
                url=str(response.url),
            )
            raise HttpFailure(response)

        logger.debug(
            "http_response_error_suppressed",
            status_code=response.status_code,
            url=str(response.url),
        )

    async def _create_response(
        self,
        request: httpx.Request,
        config: ClientConfig,
        response_type: Any = None,
    ) -> Any:
        response = await self._send(request)

        if config.with_events:
            await self._events.dispatch(HttpClientEvent.RESPONSE_FETCHED, request)

        await self._check_response(response, config)

        if config.with_events:
            await self._events.dispatch(HttpClientEvent.RESPONSE_CREATE, request)

        return decode_response(response, response_type)
