"""Application-level error outcome for non-2xx API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class ErrorResponse:
    """HTTP status plus any structured messages from the error body."""

    status_code: int
    messages: tuple[str, ...] = ()

    @classmethod
    def from_messages(
        cls, status_code: int, messages: Sequence[str] | None = None
    ) -> ErrorResponse:
        """Build an error response, normalizing absent messages to empty."""
        return cls(status_code=status_code, messages=tuple(messages or ()))

    @property
    def has_messages(self) -> bool:
        """Return ``True`` when the server sent structured messages."""
        return len(self.messages) > 0

    def __str__(self) -> str:
        """Return ``HTTP <status>`` followed by any messages."""
        if not self.has_messages:
            return f"HTTP {self.status_code}"
        return f"HTTP {self.status_code}: {'; '.join(self.messages)}"
