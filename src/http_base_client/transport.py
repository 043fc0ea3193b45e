# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
HTTP transport for the request pipeline.

HTTPTransport wraps an ``httpx.AsyncClient`` and adds the two things the
pipeline needs from its transport:

1. Request interceptors, run in order before every dispatch. BaseClient
   installs its authorization step here, so authorization material is attached
   after the outbound body has been validated and immediately before the
   request leaves the process.
2. A uniform failure surface. A response outside the 2xx range raises
   TransportError carrying the structured response; a timeout raises
   TransportTimeoutError; a set cancellation signal raises
   RequestCancelledError. Other httpx network errors propagate unchanged.
"""

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from typing_extensions import Self

from .config import BasicAuthCredentials, ResponseType

if TYPE_CHECKING:
    from .config import ClientConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass
class TransportRequest:
    """Outgoing request as seen by interceptors. Interceptors may mutate it."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = None
    signal: asyncio.Event | None = None


@dataclass
class TransportResponse:
    """Decoded response returned by the transport."""

    status: int
    status_text: str
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = None


RequestInterceptor = Callable[
    [TransportRequest], "TransportRequest | Awaitable[TransportRequest]"
]


class TransportError(Exception):
    """Raised by the transport when a request fails.

    Attributes:
        response: The structured upstream response, or None when the request
            never produced one (timeout, cancellation).
        request: The request that failed, after interceptors ran.
    """

    def __init__(
        self,
        message: str,
        response: TransportResponse | None = None,
        request: TransportRequest | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.response = response
        self.request = request


class TransportTimeoutError(TransportError):
    """Raised when the request exceeded the configured timeout."""

    pass


class RequestCancelledError(TransportError):
    """Raised when the request's cancellation signal was set before it completed."""

    pass


async def wait_with_signal(
    awaitable: Awaitable[T], signal: asyncio.Event | None
) -> T:
    """
    Await ``awaitable`` unless ``signal`` is set first.

    When the signal wins, the pending work is cancelled and
    RequestCancelledError is raised. Work shielded elsewhere (such as a shared
    token refresh) keeps running for its other waiters.
    """
    if signal is None:
        return await awaitable
    if signal.is_set():
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        raise RequestCancelledError("Request cancelled")

    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(signal.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        waiter.cancel()
        raise

    if task.done():
        waiter.cancel()
        return task.result()

    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task
    raise RequestCancelledError("Request cancelled")


class HTTPTransport:
    """
    Thin request layer over ``httpx.AsyncClient``.

    The underlying client owns connections, redirects, TLS and timeouts; this
    class only runs interceptors, encodes bodies, decodes responses and maps
    failures onto TransportError.

    Example:
        >>> transport = HTTPTransport("https://api.example.com", timeout=10.0)
        >>> transport.add_request_interceptor(add_trace_header)
        >>> response = await transport.request("/users", method="GET")
        >>> response.status
        200
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        basic_auth: BasicAuthCredentials | None = None,
        response_type: ResponseType = ResponseType.JSON,
        response_encoding: str | None = None,
        max_redirects: int | None = None,
        timeout: float | None = None,
        timeout_error_message: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        client_kwargs: dict[str, Any] = {}
        if max_redirects is not None:
            client_kwargs["max_redirects"] = max_redirects
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            auth=(basic_auth.username, basic_auth.password) if basic_auth else None,
            timeout=timeout,
            follow_redirects=max_redirects != 0,
            transport=transport,
            **client_kwargs,
        )
        self._response_type = response_type
        self._response_encoding = response_encoding
        self._timeout = timeout
        self._timeout_error_message = timeout_error_message
        self._interceptors: list[RequestInterceptor] = []

    @classmethod
    def from_config(cls, config: "ClientConfig") -> "HTTPTransport":
        """Build a transport from the transport section of a ClientConfig."""
        return cls(
            base_url=config.base_url,
            headers=config.headers,
            basic_auth=config.basic_auth,
            response_type=config.response_type,
            response_encoding=config.response_encoding,
            max_redirects=config.max_redirects,
            timeout=config.timeout,
            timeout_error_message=config.timeout_error_message,
            transport=config.transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    def add_request_interceptor(self, interceptor: RequestInterceptor) -> None:
        """Register a hook run before every dispatch, in registration order."""
        self._interceptors.append(interceptor)

    async def request(
        self,
        url: str,
        method: str = "GET",
        data: Any = None,
        headers: Mapping[str, str] | None = None,
        signal: asyncio.Event | None = None,
    ) -> TransportResponse:
        """
        Run interceptors and dispatch a request.

        Args:
            url: Path relative to the base URL (may include a query string).
            method: HTTP method.
            data: Body. Mappings are form-encoded when the content type is
                ``application/x-www-form-urlencoded``, ``str``/``bytes`` are
                sent as-is, anything else is sent as JSON.
            headers: Per-request headers, merged over the default headers.
            signal: Cancellation signal honoured during interceptors and
                dispatch.

        Returns:
            The decoded 2xx response.

        Raises:
            TransportError: The upstream answered outside the 2xx range.
            TransportTimeoutError: The request timed out.
            RequestCancelledError: The signal was set before completion.
            httpx.RequestError: Any other network-level failure.
        """
        request = TransportRequest(
            method=method.upper(),
            url=url,
            headers=dict(headers or {}),
            data=data,
            signal=signal,
        )
        return await wait_with_signal(self._dispatch(request), signal)

    async def _dispatch(self, request: TransportRequest) -> TransportResponse:
        for interceptor in self._interceptors:
            result = interceptor(request)
            if inspect.isawaitable(result):
                result = await result
            request = result

        logger.debug(f"Dispatching {request.method} {request.url}")
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                **self._encode_body(request),
            )
        except httpx.TimeoutException as e:
            message = self._timeout_error_message or f"timeout of {self._timeout}s exceeded"
            raise TransportTimeoutError(message, request=request) from e

        result = TransportResponse(
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=dict(response.headers),
            data=self._decode_body(response),
        )
        if not response.is_success:
            raise TransportError(
                f"Request failed with status code {response.status_code}",
                response=result,
                request=request,
            )
        return result

    @staticmethod
    def _encode_body(request: TransportRequest) -> dict[str, Any]:
        data = request.data
        if data is None:
            return {}
        if isinstance(data, (str, bytes)):
            return {"content": data}
        content_type = next(
            (v for k, v in request.headers.items() if k.lower() == "content-type"),
            "",
        )
        if content_type.startswith(FORM_CONTENT_TYPE) and isinstance(data, Mapping):
            return {"data": dict(data)}
        return {"json": data}

    def _decode_body(self, response: httpx.Response) -> Any:
        if self._response_encoding:
            response.encoding = self._response_encoding
        if self._response_type is ResponseType.BYTES:
            return response.content
        if self._response_type is ResponseType.TEXT:
            return response.text
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = [
    "FORM_CONTENT_TYPE",
    "HTTPTransport",
    "RequestCancelledError",
    "RequestInterceptor",
    "TransportError",
    "TransportRequest",
    "TransportResponse",
    "TransportTimeoutError",
    "wait_with_signal",
]
