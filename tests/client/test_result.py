"""Unit tests for the ``Result`` tagged union helpers."""

from __future__ import annotations

from packages.api_client import (
    ErrorResponse,
    Failure,
    Success,
    is_failure,
    is_success,
    map_error,
)


def test_success_and_failure_are_mutually_exclusive() -> None:
    """A value is either a ``Success`` or a ``Failure``, never both."""
    ok = Success(1)
    failed = Failure("boom")

    assert is_success(ok) and not is_failure(ok)
    assert is_failure(failed) and not is_success(failed)


def test_results_support_structural_matching() -> None:
    """Call sites should discriminate with ``match`` on the variant."""

    def describe(result: object) -> str:
        match result:
            case Success(value=value):
                return f"ok:{value}"
            case Failure(error=error):
                return f"err:{error}"
        return "unknown"

    assert describe(Success(3)) == "ok:3"
    assert describe(Failure(ErrorResponse(status_code=404))) == "err:HTTP 404"


def test_map_error_transforms_only_failures() -> None:
    """``map_error`` should leave successes untouched."""
    assert map_error(Success(5), str) == Success(5)
    assert map_error(Failure(ErrorResponse(status_code=500)), str) == Failure("HTTP 500")


def test_error_response_string_includes_messages() -> None:
    """Stringified errors should list messages after the status."""
    error = ErrorResponse.from_messages(400, ["bad input", "title required"])

    assert error.has_messages is True
    assert str(error) == "HTTP 400: bad input; title required"


def test_error_response_from_absent_messages_is_empty() -> None:
    """Absent messages should normalize to an empty tuple."""
    error = ErrorResponse.from_messages(503, None)

    assert error.messages == ()
    assert error.has_messages is False
