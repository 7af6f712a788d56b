"""Tests for recordkeep.core.timestamps: UTC and ISO 8601 helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from recordkeep.core.timestamps import from_iso8601, to_iso8601, utc_now


class TestUtcNow:
    def test_has_utc_timezone(self):
        assert utc_now().tzinfo is UTC

    def test_is_recent(self):
        before = datetime.now(UTC)
        result = utc_now()
        after = datetime.now(UTC)
        assert before <= result <= after


class TestIso8601RoundTrip:
    """Text form used by the wire format for TIMESTAMP fields."""

    def test_none_passes_through(self):
        assert to_iso8601(None) is None
        assert from_iso8601(None) is None

    def test_aware_keeps_microseconds(self):
        dt = datetime(2025, 6, 15, 14, 30, 0, 999999, tzinfo=UTC)
        assert from_iso8601(to_iso8601(dt)) == dt

    def test_naive_stays_naive(self):
        dt = datetime(2025, 6, 15, 14, 30, 0, 1)
        result = from_iso8601(to_iso8601(dt))
        assert result == dt
        assert result.tzinfo is None

    def test_non_utc_offset_preserved(self):
        tz = timezone(timedelta(hours=5, minutes=30))
        dt = datetime(2025, 1, 1, 8, 0, tzinfo=tz)
        result = from_iso8601(to_iso8601(dt))
        assert result.utcoffset() == timedelta(hours=5, minutes=30)
        assert result == dt
