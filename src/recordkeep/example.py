"""
Sample record type used by the ``recordkeep demo`` command and the tests.

``SampleRecord`` holds one field of every Field Value kind. Its mapping keys
(``int``, ``double``, ``string``, ``bool``, ``date``, ``blob``) differ from
its attribute names, which exercises ``field(metadata={"key": ...})``.

Examples:
    >>> a, b = sample_records()
    >>> sorted(a.encode())
    ['blob', 'bool', 'date', 'double', 'int', 'string']
    >>> SampleRecord.decode(a.encode()).unwrap() == a
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from recordkeep.core.codec import Record
from recordkeep.core.timestamps import utc_now


@dataclass(frozen=True)
class SampleRecord(Record):
    number: int = field(metadata={"key": "int"})
    ratio: float = field(metadata={"key": "double"})
    label: str = field(metadata={"key": "string"})
    flag: bool = field(metadata={"key": "bool"})
    date: datetime = field(metadata={"key": "date"})
    blob: bytes = field(metadata={"key": "blob"})


def sample_records(now: datetime | None = None) -> list[SampleRecord]:
    """The two records of the demo: ``One`` and ``Two``, both stamped ``now``."""
    now = now or utc_now()
    return [
        SampleRecord(
            number=1, ratio=1.0, label="One", flag=True, date=now,
            blob=bytes([1, 2, 3, 4, 5, 6, 7, 8]),
        ),
        SampleRecord(
            number=2, ratio=2.0, label="Two", flag=False, date=now,
            blob=bytes([9, 10, 11, 12]),
        ),
    ]


__all__ = ["SampleRecord", "sample_records"]
