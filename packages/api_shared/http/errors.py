"""Typed transport errors for the shared async HTTP client."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpError(Exception):
    """Base error type for shared HTTP helper failures."""

    message: str

    def __str__(self) -> str:
        """Return the human-readable error message."""
        return self.message


@dataclass(frozen=True)
class HttpClientError(HttpError):
    """Base error for outbound HTTP client call failures."""

    method: str
    url: str
    retryable: bool = False


@dataclass(frozen=True)
class HttpRequestError(HttpClientError):
    """HTTP client transport-level failure (connect, read, timeout)."""

    cause: Exception | None = None


@dataclass(frozen=True)
class HttpCancelledError(HttpClientError):
    """HTTP call aborted by a caller-supplied cancellation signal."""
