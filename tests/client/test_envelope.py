"""Unit tests for wire envelope encoding and tolerant decoding."""

from __future__ import annotations

import json
from dataclasses import dataclass

import pytest
from pydantic import BaseModel, PydanticUserError

from packages.api_client import (
    ErrorMessages,
    decode_envelope,
    decode_error_envelope,
    encode_envelope,
)


class Review(BaseModel):
    """Sample payload model."""

    movie_id: int
    stars: int


@dataclass(frozen=True)
class Rating:
    """Sample dataclass payload."""

    score: float


def test_encode_envelope_wraps_payload_under_data() -> None:
    """Encoded bodies should be ``{"data": <payload>}`` UTF-8 JSON."""
    body = encode_envelope(Review(movie_id=1, stars=5))

    assert json.loads(body.decode("utf-8")) == {"data": {"movie_id": 1, "stars": 5}}


def test_encode_envelope_supports_dataclasses_and_plain_values() -> None:
    """Dataclasses and JSON-native values should encode alike."""
    assert json.loads(encode_envelope(Rating(score=4.5))) == {"data": {"score": 4.5}}
    assert json.loads(encode_envelope(["a", "b"])) == {"data": ["a", "b"]}
    assert json.loads(encode_envelope(None)) == {"data": None}


def test_decode_envelope_returns_typed_payload() -> None:
    """Decoding should validate the payload against the requested type."""
    envelope = decode_envelope(b'{"data": {"movie_id": 2, "stars": 3}}', Review)

    assert envelope is not None
    assert envelope.has_data is True
    assert envelope.data == Review(movie_id=2, stars=3)


def test_decode_envelope_returns_none_for_malformed_input() -> None:
    """Empty or malformed bodies should decode to ``None``."""
    assert decode_envelope(b"", Review) is None
    assert decode_envelope(b"{not json", Review) is None
    assert decode_envelope(b'{"data": {"stars": "many"}}', Review) is None


def test_decode_envelope_rejects_payload_types_without_a_schema() -> None:
    """Types pydantic cannot validate should fail loudly, not decode to ``None``."""

    class Opaque:
        pass

    with pytest.raises(PydanticUserError):
        decode_envelope(b'{"data": {"x": 1}}', Opaque)


def test_decode_error_envelope_reads_messages() -> None:
    """Error bodies should decode into ordered messages."""
    envelope = decode_error_envelope(b'{"data": {"messages": ["a", "b"]}}')

    assert envelope is not None
    assert envelope.data == ErrorMessages(messages=["a", "b"])


def test_decode_error_envelope_tolerates_missing_inner_payload() -> None:
    """A missing inner payload should decode with ``data`` left empty."""
    envelope = decode_error_envelope(b"{}")

    assert envelope is not None
    assert envelope.data is None
    assert decode_error_envelope(b"oops") is None
