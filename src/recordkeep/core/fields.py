"""
Field Values: the primitive kinds a record field may hold.

A Record Mapping is a flat ``dict[str, FieldValue]``. ``FieldKind`` is the tag
of the union and knows which Python values belong to it, so a decoder can
check every field against a per-record ``key -> FieldKind`` table.

Kinds:
    ============  =====================  ====================================
    FieldKind     Python type            Notes
    ============  =====================  ====================================
    INTEGER       ``int``                signed 64-bit, ``bool`` excluded
    FLOAT         ``float``              ``int`` is not promoted
    TEXT          ``str``                must encode as UTF-8
    BOOLEAN       ``bool``
    TIMESTAMP     ``datetime.datetime``  naive or aware; bare ``date`` rejected
    BYTES         ``bytes``
    ============  =====================  ====================================

There is no null kind: a field that has no value is a missing key.

Examples:
    >>> FieldKind.INTEGER.accepts(True)
    False
    >>> FieldKind.for_annotation(float)
    <FieldKind.FLOAT: 'float'>
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, TypeAlias

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

FieldValue: TypeAlias = int | float | str | bool | datetime | bytes
RecordMapping: TypeAlias = dict[str, FieldValue]


class FieldKind(str, Enum):
    """Tag of the Field Value union."""

    INTEGER = "int"
    FLOAT = "float"
    TEXT = "str"
    BOOLEAN = "bool"
    TIMESTAMP = "datetime"
    BYTES = "bytes"

    @property
    def python_type(self) -> type:
        return _PYTHON_TYPES[self]

    def accepts(self, value: Any) -> bool:
        """Return True if ``value`` is a valid Field Value of this kind."""
        if self is FieldKind.INTEGER:
            return (
                isinstance(value, int)
                and not isinstance(value, bool)
                and INT64_MIN <= value <= INT64_MAX
            )
        if self is FieldKind.FLOAT:
            return isinstance(value, float)
        if self is FieldKind.TEXT:
            return isinstance(value, str) and _encodes_as_utf8(value)
        return isinstance(value, self.python_type)

    def describe(self, value: Any) -> str:
        """Explain why ``value`` was rejected, for decode diagnostics."""
        if self is FieldKind.INTEGER and isinstance(value, int) and not isinstance(value, bool):
            return f"integer {value} is outside the signed 64-bit range"
        if self is FieldKind.TEXT and isinstance(value, str):
            return "text is not encodable as UTF-8"
        return f"expected {self.value}, got {type(value).__name__}"

    @classmethod
    def for_annotation(cls, annotation: Any) -> FieldKind:
        """Map a resolved type annotation to its kind.

        Raises:
            TypeError: if the annotation is not one of the supported types.
        """
        for kind, python_type in _PYTHON_TYPES.items():
            if annotation is python_type:
                return kind
        raise TypeError(f"unsupported field type: {annotation!r}")


_PYTHON_TYPES: dict[FieldKind, type] = {
    FieldKind.INTEGER: int,
    FieldKind.FLOAT: float,
    FieldKind.TEXT: str,
    FieldKind.BOOLEAN: bool,
    FieldKind.TIMESTAMP: datetime,
    FieldKind.BYTES: bytes,
}


def _encodes_as_utf8(value: str) -> bool:
    # lone surrogates are valid str but not valid UTF-8
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


__all__ = [
    "FieldKind",
    "FieldValue",
    "RecordMapping",
    "INT64_MIN",
    "INT64_MAX",
]
