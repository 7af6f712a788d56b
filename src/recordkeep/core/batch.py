"""
Batch codec helpers: lift single-record encode/decode over sequences.

``decode_all`` is best-effort by default: a mapping that fails to decode is
dropped, not replaced, and the survivors keep their relative order. Callers
that need to tell "nothing stored" from "nothing decodable" use
``decode_report`` or pass ``strict=True``.

Usage:
    mappings = encode_all(records)
    assert decode_all(mappings, SampleRecord) == records
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from recordkeep.core.codec import Codec
from recordkeep.core.errors import DecodeError
from recordkeep.core.fields import RecordMapping
from recordkeep.core.logging import get_logger
from recordkeep.core.result import Err, Ok, Result

logger = get_logger(__name__)

R = TypeVar("R", bound=Codec)


@dataclass
class DecodeReport(Generic[R]):
    """Outcome of decoding a batch: survivors plus the index of every drop."""

    records: list[R] = field(default_factory=list)
    dropped: dict[int, DecodeError] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.records) + len(self.dropped)

    @property
    def complete(self) -> bool:
        return not self.dropped


def encode_all(records: Iterable[Codec]) -> list[RecordMapping]:
    """Encode every record, 1:1 and in order."""
    return [record.encode() for record in records]


def decode_results(
    mappings: Sequence[Mapping[str, Any] | None],
    record_type: type[R],
) -> list[Result[R]]:
    """Decode every mapping, keeping one Result per input."""
    return [record_type.decode(mapping) for mapping in mappings]


def decode_report(
    mappings: Sequence[Mapping[str, Any] | None],
    record_type: type[R],
) -> DecodeReport[R]:
    """Decode every mapping and record which indexes were dropped and why."""
    report: DecodeReport[R] = DecodeReport()
    for index, result in enumerate(decode_results(mappings, record_type)):
        match result:
            case Ok(record):
                report.records.append(record)
            case Err(error):
                report.dropped[index] = _with_index(error, index, record_type)
    return report


def decode_all(
    mappings: Sequence[Mapping[str, Any] | None],
    record_type: type[R],
    *,
    strict: bool = False,
) -> list[R]:
    """
    Decode every mapping, dropping the ones that fail.

    Args:
        mappings: Record Mappings in stored order.
        record_type: Type whose ``decode`` is applied to each mapping.
        strict: Raise the first ``DecodeError`` (with its index in
            ``error.context.index``) instead of dropping.

    Returns:
        Decoded records, at most ``len(mappings)``, in input order.
    """
    records: list[R] = []
    for index, mapping in enumerate(mappings):
        match record_type.decode(mapping):
            case Ok(record):
                records.append(record)
            case Err(error):
                error = _with_index(error, index, record_type)
                if strict:
                    raise error
                logger.debug(
                    "record_decode_dropped",
                    record_type=record_type.__name__,
                    index=index,
                    reason=str(error),
                )
    return records


def _with_index(error: Exception, index: int, record_type: type) -> DecodeError:
    if not isinstance(error, DecodeError):
        error = DecodeError(str(error), record_type=record_type.__name__, cause=error)
    error.with_context(index=index)
    return error


__all__ = [
    "DecodeReport",
    "encode_all",
    "decode_all",
    "decode_results",
    "decode_report",
]
