"""Wire envelope models for ``{"data": ...}`` request and response bodies."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError


T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Single-field wire wrapper carrying one payload under ``data``."""

    model_config = ConfigDict(frozen=True)

    data: T | None = None

    @property
    def has_data(self) -> bool:
        """Return ``True`` when a payload is present."""
        return self.data is not None


class ErrorMessages(BaseModel):
    """Structured error payload carried by non-2xx response bodies."""

    model_config = ConfigDict(frozen=True)

    messages: list[str] = Field(default_factory=list)


ErrorEnvelope = Envelope[ErrorMessages]


def encode_envelope(data: object) -> bytes:
    """Serialize one payload wrapped in an envelope to UTF-8 JSON."""
    return Envelope[Any](data=data).model_dump_json().encode("utf-8")


def decode_envelope(body: bytes, payload_type: Any) -> Envelope[Any] | None:
    """Decode one envelope body, returning ``None`` for empty or malformed input.

    A ``payload_type`` pydantic cannot build a schema for raises
    ``PydanticUserError`` instead of decoding every body to ``None``.
    """
    try:
        return Envelope[payload_type].model_validate_json(body)
    except ValidationError:
        return None


def decode_error_envelope(body: bytes) -> Envelope[ErrorMessages] | None:
    """Decode one error envelope body, returning ``None`` when unreadable."""
    try:
        return ErrorEnvelope.model_validate_json(body)
    except ValidationError:
        return None
