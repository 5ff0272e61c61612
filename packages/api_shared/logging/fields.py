"""Canonical logging field names for consistent structured output.

These constants define a stable key set for structured logs and context
propagation.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"

# Outbound client fields.
CLIENT_NAME = "client_name"
BASE_URL = "base_url"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
