"""Public typed API client interface."""

from packages.api_client.envelope import (
    Envelope,
    ErrorEnvelope,
    ErrorMessages,
    decode_envelope,
    decode_error_envelope,
    encode_envelope,
)
from packages.api_client.errors import ErrorResponse
from packages.api_client.options import CancellationToken, RequestOptions
from packages.api_client.result import (
    Failure,
    Result,
    Success,
    is_failure,
    is_success,
    map_error,
)
from packages.api_client.service import (
    ApiService,
    build_request_uri,
    classify_response,
    process_response,
    zero_value,
)
from packages.api_client.transport import HttpClientFactory, SettingsClientFactory
from packages.api_shared.http import (
    HttpCancelledError,
    HttpClientError,
    HttpRequestError,
)

TransportError = HttpClientError

__all__ = [
    "ApiService",
    "CancellationToken",
    "Envelope",
    "ErrorEnvelope",
    "ErrorMessages",
    "ErrorResponse",
    "Failure",
    "HttpCancelledError",
    "HttpClientError",
    "HttpClientFactory",
    "HttpRequestError",
    "RequestOptions",
    "Result",
    "SettingsClientFactory",
    "Success",
    "TransportError",
    "build_request_uri",
    "classify_response",
    "decode_envelope",
    "decode_error_envelope",
    "encode_envelope",
    "is_failure",
    "is_success",
    "map_error",
    "process_response",
    "zero_value",
]
