"""Discriminated ``Result`` type returned instead of raising.

A ``Result`` is exactly one of ``Success`` or ``Failure``. Call sites must
discriminate before reading the value::

    match result:
        case Success(value=movie):
            ...
        case Failure(error=error):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeGuard, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """A successful outcome holding its value."""

    value: T


@dataclass(frozen=True, slots=True)
class Failure(Generic[E]):
    """A failed outcome holding its error."""

    error: E


Result = Union[Success[T], Failure[E]]


def is_success(result: Result[T, E]) -> TypeGuard[Success[T]]:
    """Return ``True`` when ``result`` is a ``Success``."""
    return isinstance(result, Success)


def is_failure(result: Result[T, E]) -> TypeGuard[Failure[E]]:
    """Return ``True`` when ``result`` is a ``Failure``."""
    return isinstance(result, Failure)


def map_error(result: Result[T, E], mapper: Callable[[E], F]) -> Result[T, F]:
    """Return ``result`` with its failure error transformed by ``mapper``."""
    match result:
        case Success():
            return result
        case Failure(error=error):
            return Failure(mapper(error))
    raise TypeError(f"Not a Result: {type(result).__name__}")
