"""
Record codec contract: encode a record to a Record Mapping and back.

Every persistable type implements two operations:

- ``encode(self) -> RecordMapping``: pure and total; the mapping holds every
  key that ``decode`` needs.
- ``decode(cls, mapping) -> Result[Self]``: ``Ok(record)``, or
  ``Err(DecodeError)`` when the mapping is absent, a required key is missing,
  or a value has the wrong kind. All fields are checked before deciding.

Round-trip law: ``type(r).decode(r.encode()) == Ok(r)`` for every record ``r``.

The ``Record`` base class implements both operations for frozen dataclasses,
deriving the schema from field annotations::

    @dataclass(frozen=True)
    class Reading(Record):
        sensor: str
        value: float
        taken_at: datetime = field(metadata={"key": "ts"})

Types that cannot inherit from ``Record`` implement the ``Codec`` protocol by
hand and call :func:`validate_mapping` with an explicit schema.

Tags:
    codec, encode, decode, round-trip, schema, recordkeep

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import dataclasses
import functools
import typing
from collections.abc import Mapping
from typing import Any, NamedTuple, Protocol, runtime_checkable

from recordkeep.core.errors import DecodeError, SchemaError, ValidationError
from recordkeep.core.fields import FieldKind, RecordMapping
from recordkeep.core.result import Err, Ok, Result, try_result

if typing.TYPE_CHECKING:
    from typing import Self


@runtime_checkable
class Codec(Protocol):
    """Capability of a record type to round-trip through a Record Mapping."""

    def encode(self) -> RecordMapping:
        """Return the Record Mapping for this record. Never fails."""
        ...

    @classmethod
    def decode(cls, mapping: Mapping[str, Any] | None) -> Result[Self]:
        """Rebuild a record from a mapping, or return ``Err(DecodeError)``."""
        ...


class RecordField(NamedTuple):
    """One schema entry: mapping ``key``, dataclass ``attribute`` and ``kind``."""

    key: str
    attribute: str
    kind: FieldKind


def validate_mapping(
    mapping: Mapping[str, Any] | None,
    schema: Mapping[str, FieldKind],
    *,
    record_type: str | None = None,
) -> Result[dict[str, Any]]:
    """
    Check a mapping against a ``key -> FieldKind`` schema.

    Returns ``Ok`` with only the schema keys (extra keys are ignored), or
    ``Err(DecodeError)`` whose ``problems`` names every missing or mistyped key.

    Examples:
        >>> validate_mapping({"n": 1}, {"n": FieldKind.INTEGER})
        Ok({'n': 1})
        >>> validate_mapping({"n": "1"}, {"n": FieldKind.INTEGER}).error.problems
        {'n': 'expected int, got str'}
    """
    if mapping is None:
        return Err(DecodeError("mapping is absent", record_type=record_type))
    if not isinstance(mapping, Mapping):
        return Err(DecodeError(
            f"expected a mapping, got {type(mapping).__name__}",
            record_type=record_type,
        ))

    values: dict[str, Any] = {}
    problems: dict[str, str] = {}
    for key, kind in schema.items():
        if key not in mapping:
            problems[key] = "missing"
            continue
        value = mapping[key]
        if not kind.accepts(value):
            problems[key] = kind.describe(value)
            continue
        values[key] = value

    if problems:
        return Err(DecodeError(
            f"{len(problems)} invalid field(s): {', '.join(sorted(problems))}",
            record_type=record_type,
            problems=problems,
        ))
    return Ok(values)


@functools.cache
def _record_fields(cls: type) -> tuple[RecordField, ...]:
    if not dataclasses.is_dataclass(cls):
        raise SchemaError(f"{cls.__name__} must be a dataclass", record_type=cls.__name__)

    hints = typing.get_type_hints(cls)
    fields = []
    problems = {}
    for f in dataclasses.fields(cls):
        key = f.metadata.get("key", f.name)
        try:
            fields.append(RecordField(key, f.name, FieldKind.for_annotation(hints[f.name])))
        except TypeError as exc:
            problems[f.name] = str(exc)

    keys = [rf.key for rf in fields]
    for key in {k for k in keys if keys.count(k) > 1}:
        problems[key] = "duplicate mapping key"
    if problems:
        raise SchemaError(
            f"{cls.__name__} has fields that are not Field Values",
            record_type=cls.__name__,
            problems=problems,
        )
    return tuple(fields)


class Record:
    """
    Base class for flat, immutable records.

    Subclasses must be decorated with ``@dataclass(frozen=True)`` and annotate
    every field with ``int``, ``float``, ``str``, ``bool``, ``datetime`` or
    ``bytes``. Construction checks every value against the schema and raises
    :class:`ValidationError` on mismatch, so ``encode`` cannot fail. Its
    ``problems`` are keyed by mapping key, as in :meth:`decode`.

    A field's mapping key defaults to its attribute name; override it with
    ``field(metadata={"key": "..."})``.
    """

    @classmethod
    def fields(cls) -> tuple[RecordField, ...]:
        """Schema entries in dataclass field order. Raises SchemaError."""
        return _record_fields(cls)

    @classmethod
    def schema(cls) -> dict[str, FieldKind]:
        """``key -> FieldKind`` table used by :meth:`decode`."""
        return {rf.key: rf.kind for rf in cls.fields()}

    def __post_init__(self) -> None:
        problems = {
            rf.key: rf.kind.describe(getattr(self, rf.attribute))
            for rf in self.fields()
            if not rf.kind.accepts(getattr(self, rf.attribute))
        }
        if problems:
            raise ValidationError(
                f"invalid {type(self).__name__}: {', '.join(sorted(problems))}",
                record_type=type(self).__name__,
                problems=problems,
            )

    def encode(self) -> RecordMapping:
        return {rf.key: getattr(self, rf.attribute) for rf in self.fields()}

    @classmethod
    def decode(cls, mapping: Mapping[str, Any] | None) -> Result[Self]:
        attributes = {rf.key: rf.attribute for rf in cls.fields()}
        return (
            validate_mapping(mapping, cls.schema(), record_type=cls.__name__)
            .map(lambda values: {attributes[key]: value for key, value in values.items()})
            .flat_map(lambda kwargs: try_result(lambda: cls(**kwargs)))
            .map_err(lambda error: _as_decode_error(error, cls.__name__))
        )


def _as_decode_error(error: Exception, record_type: str) -> Exception:
    if isinstance(error, DecodeError):
        return error
    problems = error.problems if isinstance(error, ValidationError) else {}
    return DecodeError(str(error), record_type=record_type, problems=problems, cause=error)


__all__ = [
    "Codec",
    "Record",
    "RecordField",
    "validate_mapping",
]
