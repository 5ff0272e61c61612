"""Public API for shared api-client configuration utilities."""

from .loader import load_settings
from .models import (
    DEFAULT_CLIENT_NAME,
    DEFAULT_CONFIG_PATH,
    ENV_PREFIX,
    ApiClientSettings,
    HttpClientSettings,
    LoggingSettings,
)

__all__ = [
    "DEFAULT_CLIENT_NAME",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "ApiClientSettings",
    "HttpClientSettings",
    "LoggingSettings",
    "load_settings",
]
