"""Tests for shared structured logging configuration."""

from __future__ import annotations

import io
import json
import logging
from typing import Iterator

import pytest

from packages.api_shared.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_context,
    get_logger,
    log_context,
)


@pytest.fixture
def log_stream() -> Iterator[io.StringIO]:
    """Yield a buffer for log output and restore logging state afterward."""
    buffer = io.StringIO()
    root = logging.getLogger()
    previous_handlers = list(root.handlers)
    previous_level = root.level
    transport_levels = {
        name: logging.getLogger(name).level for name in ("httpx", "httpcore")
    }
    clear_context()
    yield buffer
    clear_context()
    root.handlers[:] = previous_handlers
    root.setLevel(previous_level)
    for name, level in transport_levels.items():
        logging.getLogger(name).setLevel(level)


def test_json_output_includes_core_fields_and_context(
    log_stream: io.StringIO,
) -> None:
    """JSON logs should carry level, logger, message, and bound context."""
    configure_logging(
        level="DEBUG",
        json_output=True,
        service="svc",
        environment="test",
        stream=log_stream,
    )

    with log_context({"client_name": "api"}):
        get_logger("tests.logging").info("http client created")

    payload = json.loads(log_stream.getvalue().strip().splitlines()[-1])
    assert payload["level"] == "INFO"
    assert payload["logger"] == "tests.logging"
    assert payload["message"] == "http client created"
    assert payload["client_name"] == "api"
    assert payload["service"] == "svc"
    assert payload["environment"] == "test"


def test_plain_output_appends_sorted_context(log_stream: io.StringIO) -> None:
    """Plain logs should append ``key=value`` context pairs."""
    configure_logging(level="INFO", json_output=False, stream=log_stream)
    bind_context(url="/movies", method="GET")

    get_logger("tests.logging").warning("slow call")

    line = log_stream.getvalue().strip().splitlines()[-1]
    assert "WARNING tests.logging slow call" in line
    assert line.endswith("method=GET url=/movies")


def test_transport_request_lines_are_held_back(log_stream: io.StringIO) -> None:
    """Per-request INFO lines from httpx should not reach the handler."""
    configure_logging(level="INFO", stream=log_stream)

    logging.getLogger("httpx").info("HTTP Request: GET https://example.test/m")
    logging.getLogger("httpx").warning("connection pool full")

    lines = log_stream.getvalue().strip().splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["connection pool full"]


def test_log_context_restores_previous_values() -> None:
    """Temporary context should be discarded when the block exits."""
    clear_context()
    bind_context(outer="1", skipped=None)

    with log_context({"inner": "2"}):
        assert get_context() == {"outer": "1", "inner": "2"}

    assert get_context() == {"outer": "1"}
    clear_context("outer")
    assert get_context() == {}


def test_configure_logging_replaces_existing_handlers(
    log_stream: io.StringIO,
) -> None:
    """Repeated configuration should not duplicate handlers."""
    configure_logging(stream=log_stream)
    configure_logging(stream=log_stream)

    assert len(logging.getLogger().handlers) == 1
