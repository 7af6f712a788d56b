"""Tests for recordkeep.core.fields: Field Value kinds."""

from datetime import date, datetime, timezone

import pytest

from recordkeep.core.fields import INT64_MAX, INT64_MIN, FieldKind


class TestAccepts:
    @pytest.mark.parametrize(
        "kind,value",
        [
            (FieldKind.INTEGER, 0),
            (FieldKind.INTEGER, INT64_MIN),
            (FieldKind.INTEGER, INT64_MAX),
            (FieldKind.FLOAT, 1.0),
            (FieldKind.FLOAT, float("inf")),
            (FieldKind.TEXT, ""),
            (FieldKind.BOOLEAN, False),
            (FieldKind.TIMESTAMP, datetime(2024, 1, 1)),
            (FieldKind.TIMESTAMP, datetime(2024, 1, 1, tzinfo=timezone.utc)),
            (FieldKind.BYTES, b""),
        ],
    )
    def test_accepts(self, kind, value):
        assert kind.accepts(value)

    @pytest.mark.parametrize(
        "kind,value",
        [
            (FieldKind.INTEGER, True),
            (FieldKind.INTEGER, 1.0),
            (FieldKind.INTEGER, INT64_MAX + 1),
            (FieldKind.INTEGER, INT64_MIN - 1),
            (FieldKind.FLOAT, 1),
            (FieldKind.TEXT, b"One"),
            (FieldKind.BOOLEAN, 1),
            (FieldKind.TIMESTAMP, date(2024, 1, 1)),
            (FieldKind.TIMESTAMP, "2024-01-01T00:00:00"),
            (FieldKind.BYTES, bytearray(b"x")),
            (FieldKind.TEXT, None),
            (FieldKind.TEXT, "\ud800"),
            (FieldKind.TEXT, "ok\udcff"),
        ],
    )
    def test_rejects(self, kind, value):
        assert not kind.accepts(value)


class TestDescribe:
    def test_wrong_type(self):
        assert FieldKind.INTEGER.describe("1") == "expected int, got str"

    def test_out_of_range_integer(self):
        assert "64-bit" in FieldKind.INTEGER.describe(2**64)

    def test_bool_for_integer_is_type_mismatch(self):
        assert FieldKind.INTEGER.describe(True) == "expected int, got bool"

    def test_text_not_utf8(self):
        assert FieldKind.TEXT.describe("\ud800") == "text is not encodable as UTF-8"

    def test_non_ascii_text_accepted(self):
        assert FieldKind.TEXT.accepts("caf\u00e9 \U0001f600")


class TestForAnnotation:
    @pytest.mark.parametrize(
        "annotation,kind",
        [
            (int, FieldKind.INTEGER),
            (float, FieldKind.FLOAT),
            (str, FieldKind.TEXT),
            (bool, FieldKind.BOOLEAN),
            (datetime, FieldKind.TIMESTAMP),
            (bytes, FieldKind.BYTES),
        ],
    )
    def test_supported(self, annotation, kind):
        assert FieldKind.for_annotation(annotation) is kind

    @pytest.mark.parametrize("annotation", [list, int | None, date, dict[str, int]])
    def test_unsupported(self, annotation):
        with pytest.raises(TypeError, match="unsupported field type"):
            FieldKind.for_annotation(annotation)

    def test_python_type(self):
        assert FieldKind.BYTES.python_type is bytes

