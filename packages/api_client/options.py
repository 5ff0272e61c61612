"""Per-call request options and cooperative cancellation."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


class CancellationToken:
    """Cooperative cancellation signal observed at each suspension point.

    ``CancellationToken()`` can be cancelled with ``cancel()``. The shared
    ``CancellationToken.none()`` token never fires, and calls made with it
    behave exactly like calls made without a token.
    """

    __slots__ = ("_can_be_cancelled", "_event")

    _NONE: CancellationToken | None = None

    def __init__(self, *, can_be_cancelled: bool = True) -> None:
        self._can_be_cancelled = can_be_cancelled
        self._event = asyncio.Event()

    @classmethod
    def none(cls) -> CancellationToken:
        """Return the shared non-cancelling token."""
        if cls._NONE is None:
            cls._NONE = cls(can_be_cancelled=False)
        return cls._NONE

    @property
    def can_be_cancelled(self) -> bool:
        """Return ``False`` for the non-cancelling token."""
        return self._can_be_cancelled

    @property
    def is_cancelled(self) -> bool:
        """Return ``True`` once ``cancel()`` has been called."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Signal cancellation to every call observing this token."""
        if not self._can_be_cancelled:
            raise ValueError("The non-cancelling token cannot be cancelled")
        self._event.set()

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        await self._event.wait()


@dataclass(frozen=True, slots=True)
class RequestOptions:
    """Optional per-call settings; the defaults are an empty query and no cancellation."""

    query_params: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    cancellation: CancellationToken = field(default_factory=CancellationToken.none)
    stream_body: bool = False


DEFAULT_OPTIONS = RequestOptions()
