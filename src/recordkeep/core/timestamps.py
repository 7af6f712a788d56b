"""
Timestamp utilities (stdlib-only).

- **utc_now():** Timezone-aware UTC datetime
- **to_iso8601() / from_iso8601():** Lossless text round-trip, used by the
  wire format for TIMESTAMP fields and by ``SqliteStore`` for ``updated_at``

``datetime.isoformat()`` keeps microseconds and the UTC offset, and omits the
offset for naive values, so ``from_iso8601(to_iso8601(dt)) == dt`` for both.

Tags:
    timestamps, utc, datetime, serialization, recordkeep
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_iso8601(dt: datetime | None) -> str | None:
    """Convert datetime to ISO 8601 string."""
    if dt is None:
        return None
    return dt.isoformat()


def from_iso8601(s: str | None) -> datetime | None:
    """Parse ISO 8601 string to datetime."""
    if s is None:
        return None
    return datetime.fromisoformat(s)


__all__ = ["utc_now", "to_iso8601", "from_iso8601"]
