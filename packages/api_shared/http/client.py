"""Minimal shared async HTTP client wrapper over httpx."""

from __future__ import annotations

from collections.abc import AsyncIterable, Mapping

import httpx

from .errors import HttpRequestError


def _request_error(exc: httpx.RequestError, *, method: str, url: str) -> HttpRequestError:
    """Build a typed transport error from one httpx request failure."""
    try:
        request = exc.request
    except RuntimeError:
        request = None
    request_url = str(request.url) if request is not None else url
    request_method = request.method if request is not None else method.upper()
    return HttpRequestError(
        message=f"HTTP request failed for {request_method} {request_url}",
        method=request_method,
        url=request_url,
        retryable=True,
        cause=exc,
    )


class AsyncHttpClient:
    """Thin asynchronous wrapper over ``httpx.AsyncClient``.

    Responses are dispatched header-first: ``send`` returns as soon as the
    status line and headers arrive, and the body is pulled separately with
    ``read_response_body``. Callers own closing every response they receive.
    """

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout_seconds: float = 10.0,
        headers: Mapping[str, str] | None = None,
        follow_redirects: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Create a new shared asynchronous HTTP client wrapper."""
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=dict(headers or {}),
            follow_redirects=follow_redirects,
            transport=transport,
        )

    @property
    def is_closed(self) -> bool:
        """Return ``True`` once the underlying client has been closed."""
        return self._client.is_closed

    async def aclose(self) -> None:
        """Close underlying transport resources when owned."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context manager scope."""
        return self

    async def __aexit__(self, *_: object) -> None:
        """Exit async context manager scope and close client."""
        await self.aclose()

    def build_request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        content: bytes | AsyncIterable[bytes] | None = None,
    ) -> httpx.Request:
        """Build one request merged with the client's base URL and headers."""
        return self._client.build_request(
            method=method,
            url=url,
            headers=dict(headers or {}),
            content=content,
        )

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Dispatch one request, returning once response headers are read."""
        try:
            return await self._client.send(request, stream=True)
        except httpx.RequestError as exc:
            raise _request_error(exc, method=request.method, url=str(request.url)) from exc


async def read_response_body(response: httpx.Response) -> bytes:
    """Read and decode the full body of a header-first response."""
    try:
        return await response.aread()
    except httpx.RequestError as exc:
        raise _request_error(
            exc,
            method=response.request.method,
            url=str(response.request.url),
        ) from exc
