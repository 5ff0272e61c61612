"""Typed request pipeline: build, dispatch, and classify API calls.

Every call returns a ``Result`` instead of raising for HTTP-status or body
decoding problems. Transport failures (connect/read errors, timeouts,
cancellation) are not recovered here and propagate as ``HttpClientError``
subclasses or ``asyncio.CancelledError``.
"""

from __future__ import annotations

import asyncio
import typing
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from typing import Any, TypeVar

import httpx

from packages.api_shared.config import DEFAULT_CLIENT_NAME, ApiClientSettings
from packages.api_shared.http import HttpCancelledError, read_response_body

from .envelope import decode_envelope, decode_error_envelope, encode_envelope
from .errors import ErrorResponse
from .options import DEFAULT_OPTIONS, CancellationToken, RequestOptions
from .result import Failure, Result, Success
from .transport import HttpClientFactory, SettingsClientFactory

T = TypeVar("T")
TR = TypeVar("TR")

JSON_MEDIA_TYPE = "application/json"
DEFAULT_BODY_CHUNK_SIZE = 1024

_ACCEPT_HEADERS: Mapping[str, str] = {
    "Accept": JSON_MEDIA_TYPE,
    "Accept-Encoding": "gzip",
}
_ZERO_VALUE_TYPES: tuple[type, ...] = (
    list,
    dict,
    set,
    frozenset,
    tuple,
    str,
    bytes,
    int,
    float,
    bool,
)


def build_request_uri(url: str, query_params: Mapping[str, str]) -> str:
    """Append ``?k1=v1&k2=v2`` in insertion order; values are not escaped."""
    query = "&".join(f"{key}={value}" for key, value in query_params.items())
    return f"{url}?{query}" if query else url


def zero_value(payload_type: Any) -> Any:
    """Return the empty value used when a success body carries no payload.

    Builtin scalars and containers (including parametrized forms such as
    ``list[int]``) yield their empty instance; any other type yields ``None``.
    """
    origin = typing.get_origin(payload_type) or payload_type
    if isinstance(origin, type) and origin in _ZERO_VALUE_TYPES:
        return origin()
    return None


def classify_response(
    status_code: int, body: bytes, payload_type: Any
) -> Result[Any, ErrorResponse]:
    """Map one status code and raw body to ``Success`` or ``Failure``."""
    if not httpx.codes.is_success(status_code):
        error = decode_error_envelope(body)
        if error is None or not error.has_data:
            return Failure(ErrorResponse(status_code=status_code))
        return Failure(
            ErrorResponse.from_messages(status_code, error.data.messages)
        )

    envelope = decode_envelope(body, payload_type)
    if envelope is None or not envelope.has_data:
        return Success(zero_value(payload_type))
    return Success(envelope.data)


async def process_response(
    response: httpx.Response,
    payload_type: type[T] | Any,
    cancellation: CancellationToken | None = None,
) -> Result[T, ErrorResponse]:
    """Read a header-first response body and classify it."""
    body = await _run_cancellable(
        lambda: read_response_body(response),
        cancellation or CancellationToken.none(),
        response.request,
    )
    return classify_response(response.status_code, body, payload_type)


def _cancelled_error(request: httpx.Request) -> HttpCancelledError:
    """Build the transport error raised when a caller cancels a call."""
    return HttpCancelledError(
        message=f"HTTP request cancelled for {request.method} {request.url}",
        method=request.method,
        url=str(request.url),
    )


async def _run_cancellable(
    operation: Callable[[], Awaitable[T]],
    cancellation: CancellationToken,
    request: httpx.Request,
    *,
    discard: Callable[[T], Awaitable[None]] | None = None,
) -> T:
    """Await ``operation`` unless ``cancellation`` fires first.

    When the caller is torn down after ``operation`` already produced a
    value, ``discard`` receives that orphaned value before the error
    propagates.
    """
    if not cancellation.can_be_cancelled:
        return await operation()
    if cancellation.is_cancelled:
        raise _cancelled_error(request)

    task = asyncio.ensure_future(operation())
    waiter = asyncio.ensure_future(cancellation.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except BaseException:
        waiter.cancel()
        await _settle(task)
        if discard is not None and _has_result(task):
            await discard(task.result())
        raise

    waiter.cancel()
    await _settle(task)
    if task.cancelled():
        raise _cancelled_error(request)
    return task.result()


async def _settle(task: asyncio.Future[Any]) -> None:
    """Cancel ``task`` if still running and wait for it to finish."""
    if not task.done():
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)


def _has_result(task: asyncio.Future[Any]) -> bool:
    return not task.cancelled() and task.exception() is None


async def _chunked(payload: bytes, chunk_size: int) -> AsyncIterator[bytes]:
    """Yield ``payload`` as a stream of fixed-size chunks."""
    for start in range(0, len(payload), chunk_size):
        yield payload[start : start + chunk_size]


class ApiService:
    """Issue typed GET/POST calls through one named client.

    The service holds no per-call state and may be shared by any number of
    concurrent callers.
    """

    def __init__(
        self,
        client_factory: HttpClientFactory,
        *,
        client_name: str = DEFAULT_CLIENT_NAME,
        body_chunk_size: int = DEFAULT_BODY_CHUNK_SIZE,
    ) -> None:
        if body_chunk_size <= 0:
            raise ValueError("body_chunk_size must be positive")
        self._client_factory = client_factory
        self._client_name = client_name
        self._body_chunk_size = body_chunk_size
        self._owned_factory: SettingsClientFactory | None = None

    @classmethod
    def from_settings(
        cls,
        settings: ApiClientSettings,
        *,
        client_name: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ApiService:
        """Build a service owning a settings-backed client factory."""
        factory = SettingsClientFactory(settings, transport=transport)
        service = cls(
            factory,
            client_name=client_name or settings.default_client_name,
            body_chunk_size=settings.body_chunk_size,
        )
        service._owned_factory = factory
        return service

    @property
    def client_name(self) -> str:
        """Return the logical client name used for every call."""
        return self._client_name

    async def aclose(self) -> None:
        """Close the client factory when this service owns it."""
        if self._owned_factory is not None:
            await self._owned_factory.aclose()

    async def __aenter__(self) -> ApiService:
        """Enter async context manager scope."""
        return self

    async def __aexit__(self, *_: object) -> None:
        """Exit async context manager scope and close owned clients."""
        await self.aclose()

    async def get(
        self,
        url: str,
        payload_type: type[T] | Any,
        options: RequestOptions | None = None,
    ) -> Result[T, ErrorResponse]:
        """GET ``url`` and decode the ``data`` payload as ``payload_type``."""
        options = options or DEFAULT_OPTIONS
        return await self._dispatch(
            "GET",
            build_request_uri(url, options.query_params),
            payload_type=payload_type,
            content=None,
            options=options,
        )

    async def post(
        self,
        uri: str,
        data: object,
        options: RequestOptions | None = None,
    ) -> Result[None, str]:
        """POST ``data`` and keep only success or the stringified error."""
        result = await self.post_with_result(uri, data, options=options)
        match result:
            case Success():
                return Success(None)
            case Failure(error=error):
                return Failure(str(error))
        raise TypeError(f"Not a Result: {type(result).__name__}")

    async def post_with_result(
        self,
        uri: str,
        data: object,
        response_type: type[TR] | Any = None,
        options: RequestOptions | None = None,
    ) -> Result[TR, ErrorResponse]:
        """POST ``data`` in an envelope and decode the typed response payload.

        ``response_type`` defaults to the type of ``data``.
        """
        options = options or DEFAULT_OPTIONS
        payload_type = type(data) if response_type is None else response_type
        body = encode_envelope(data)
        content: bytes | AsyncIterator[bytes] = (
            _chunked(body, self._body_chunk_size) if options.stream_body else body
        )
        return await self._dispatch(
            "POST",
            build_request_uri(uri, options.query_params),
            payload_type=payload_type,
            content=content,
            options=options,
        )

    async def _dispatch(
        self,
        method: str,
        uri: str,
        *,
        payload_type: Any,
        content: bytes | AsyncIterator[bytes] | None,
        options: RequestOptions,
    ) -> Result[Any, ErrorResponse]:
        """Send one request header-first and classify its response."""
        client = self._client_factory.create_client(self._client_name)
        headers = dict(_ACCEPT_HEADERS)
        if content is not None:
            headers["Content-Type"] = JSON_MEDIA_TYPE
        request = client.build_request(method, uri, headers=headers, content=content)

        response = await _run_cancellable(
            lambda: client.send(request),
            options.cancellation,
            request,
            discard=lambda orphan: orphan.aclose(),
        )
        try:
            return await process_response(response, payload_type, options.cancellation)
        finally:
            await response.aclose()
