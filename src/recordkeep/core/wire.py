"""
Wire format: MessagePack encoding of Record Mapping sequences.

Used for the file backend's payload and for values held by ``SqliteStore``.

Format:
    ``[version: uint8][msgpack array of maps]``

    ================  ===========================================
    Field Value       msgpack representation
    ================  ===========================================
    int               int (up to 64-bit signed)
    float             float 64
    str               str
    bool              bool
    bytes             bin
    datetime          ext type 1, UTF-8 ``datetime.isoformat()``
    ================  ===========================================

ISO text keeps naive datetimes naive and aware datetimes at their UTC offset,
so both compare equal after a round trip. msgpack's own timestamp extension
(-1) only carries aware UTC instants and is not used.

Errors:
    - Values msgpack cannot represent → ``StorageError``
    - Corrupt bytes, unknown version, wrong top-level shape → ``ShapeMismatchError``
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

import msgpack

from recordkeep.core.errors import ShapeMismatchError, StorageError
from recordkeep.core.fields import RecordMapping
from recordkeep.core.timestamps import from_iso8601, to_iso8601

FORMAT_VERSION = 1
DATETIME_EXT_CODE = 1


def _default(obj: Any) -> msgpack.ExtType:
    if isinstance(obj, datetime):
        return msgpack.ExtType(DATETIME_EXT_CODE, to_iso8601(obj).encode("utf-8"))
    raise TypeError(f"cannot serialize {type(obj).__name__}")


def _ext_hook(code: int, data: bytes) -> Any:
    if code == DATETIME_EXT_CODE:
        return from_iso8601(data.decode("utf-8"))
    return msgpack.ExtType(code, data)


def pack_value(value: Any) -> bytes:
    """Serialize any structure of Field Values, lists and string-keyed maps."""
    try:
        return msgpack.packb(value, default=_default, use_bin_type=True, datetime=False)
    except (TypeError, ValueError, OverflowError) as exc:
        raise StorageError(f"value cannot be serialized: {exc}", cause=exc) from exc


def unpack_value(data: bytes) -> Any:
    """Inverse of :func:`pack_value`."""
    try:
        return msgpack.unpackb(data, ext_hook=_ext_hook, raw=False, strict_map_key=True)
    except (ValueError, TypeError) as exc:
        raise ShapeMismatchError(f"data cannot be deserialized: {exc}", cause=exc) from exc


def is_mapping_sequence(value: Any) -> bool:
    """True if ``value`` is a list of string-keyed mappings."""
    return isinstance(value, list) and all(
        isinstance(item, Mapping) and all(isinstance(key, str) for key in item)
        for item in value
    )


def dumps(mappings: Sequence[Mapping[str, Any]]) -> bytes:
    """Serialize a sequence of Record Mappings into a versioned blob."""
    payload = [dict(mapping) for mapping in mappings]
    return bytes([FORMAT_VERSION]) + pack_value(payload)


def loads(data: bytes) -> list[RecordMapping]:
    """
    Deserialize a blob produced by :func:`dumps`.

    Raises:
        ShapeMismatchError: empty data, unknown version, corrupt payload, or a
            payload that is not a list of string-keyed maps.
    """
    if len(data) < 1:
        raise ShapeMismatchError("data too short to contain a version byte")
    version = data[0]
    if version != FORMAT_VERSION:
        raise ShapeMismatchError(f"unsupported format version: {version}")

    value = unpack_value(data[1:])
    if not is_mapping_sequence(value):
        raise ShapeMismatchError(
            f"expected a list of mappings, got {type(value).__name__}"
        )
    return value


__all__ = [
    "FORMAT_VERSION",
    "DATETIME_EXT_CODE",
    "pack_value",
    "unpack_value",
    "is_mapping_sequence",
    "dumps",
    "loads",
]
