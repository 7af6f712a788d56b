"""
Ok / Err envelope returned by ``decode``.

A stored entry that lacks a field or holds a value of the wrong kind is an
expected outcome, not a bug. ``decode`` reports it as ``Err(DecodeError)``
rather than raising, so the batch helpers can drop or tally failures without
wrapping every entry in ``try``/``except``.

Architecture:
    ::

        Result[T] = Ok[T] | Err[T]

        Ok(value)              Err(error)
          map(f)      → Ok(f(value))      map(f)      → Err(error)
          flat_map(f) → f(value)          flat_map(f) → Err(error)
          map_err(f)  → Ok(value)         map_err(f)  → Err(f(error))
          unwrap()    → value             unwrap()    → raise error

Usage:
    match SampleRecord.decode(mapping):
        case Ok(record):
            restored.append(record)
        case Err(error):
            logger.debug("record_decode_dropped", problems=error.problems)

Examples:
    >>> try_result(lambda: int("7")).map(lambda n: n * 6)
    Ok(42)

Tags:
    result-pattern, decode, error-handling, recordkeep

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from recordkeep.core.errors import RecordkeepError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful outcome. Equal to any ``Ok`` holding an equal value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        return f(self.value)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        return self

    def to_dict(self) -> dict[str, Any]:
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    A failed outcome carrying the exception that explains it.

    ``unwrap()`` raises the stored exception; prefer ``unwrap_or`` or a
    ``match`` statement where failure is expected.
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, f: Callable[[T], U]) -> Result[U]:
        return Err(self.error)

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        return Err(self.error)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        return Err(f(self.error))

    def to_dict(self) -> dict[str, Any]:
        """Serializable form; ``RecordkeepError`` keeps its context and problems."""
        if isinstance(self.error, RecordkeepError):
            error = self.error.to_dict()
        else:
            error = {"error_type": type(self.error).__name__, "message": str(self.error)}
        return {"ok": False, "error": error}

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


def try_result(f: Callable[[], T]) -> Result[T]:
    """Call ``f``; its return value becomes ``Ok``, any ``Exception`` becomes ``Err``."""
    try:
        return Ok(f())
    except Exception as e:
        return Err(e)


__all__ = [
    "Result",
    "Ok",
    "Err",
    "try_result",
]
