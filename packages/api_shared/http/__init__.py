"""Public shared HTTP API for api-client packages."""

from .client import AsyncHttpClient, read_response_body
from .errors import (
    HttpCancelledError,
    HttpClientError,
    HttpError,
    HttpRequestError,
)

__all__ = [
    "AsyncHttpClient",
    "HttpCancelledError",
    "HttpClientError",
    "HttpError",
    "HttpRequestError",
    "read_response_body",
]
