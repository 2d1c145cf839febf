"""Tests for the datastore value adapter."""

from datetime import datetime, timedelta, timezone

import pytest

from partquery.exceptions import UnsupportedValueTypeError
from partquery.values import Value, ValueType, wrap_value


@pytest.mark.parametrize(
    "obj,value_type",
    [
        (None, ValueType.NULL),
        (True, ValueType.BOOLEAN),
        (False, ValueType.BOOLEAN),
        (42, ValueType.LONG),
        (1.5, ValueType.DOUBLE),
        ("Paris", ValueType.STRING),
        (b"\x00\x01", ValueType.BLOB),
        (bytearray(b"ab"), ValueType.BLOB),
        (datetime(2024, 1, 1, tzinfo=timezone.utc), ValueType.TIMESTAMP),
        ({"street": "Main"}, ValueType.ENTITY),
        ([1, 2], ValueType.LIST),
        ((1, "a"), ValueType.LIST),
    ],
)
def test_wrap_value_types(obj, value_type):
    """Test the value type chosen for each Python type."""
    assert wrap_value(obj).type == value_type


def test_bool_is_not_long():
    """Test that booleans are not wrapped as integers."""
    assert wrap_value(True).type == ValueType.BOOLEAN
    assert wrap_value(1).type == ValueType.LONG


def test_wrapped_value_passes_through():
    """Test that an existing Value is returned unchanged."""
    value = wrap_value(3)
    assert wrap_value(value) is value


def test_nested_values_unwrap():
    """Test that nested containers wrap and unwrap recursively."""
    value = wrap_value({"tags": ["a", "b"], "count": 2})
    assert value.value["tags"].type == ValueType.LIST
    assert value.get() == {"tags": ["a", "b"], "count": 2}


def test_blob_is_bytes():
    """Test that bytearrays are stored as bytes."""
    assert wrap_value(bytearray(b"ab")).get() == b"ab"


class TestTimestamps:
    """Tests for timestamp normalization."""

    def test_naive_timestamp_is_utc(self):
        """Test that a naive datetime is read as UTC."""
        value = wrap_value(datetime(2024, 1, 1, 12, 0))
        assert value.get() == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert value.get().tzinfo is timezone.utc

    def test_aware_timestamp_converted_to_utc(self):
        """Test that an aware datetime is converted to UTC."""
        value = wrap_value(datetime(2024, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2))))
        assert value.get().tzinfo is timezone.utc
        assert value.get().hour == 12

    def test_mixed_timestamps_compare(self):
        """Test that normalized naive and aware timestamps are comparable."""
        naive = wrap_value(datetime(2020, 1, 1)).get()
        aware = wrap_value(datetime(2021, 1, 1, tzinfo=timezone(timedelta(hours=-5)))).get()
        assert naive < aware


@pytest.mark.parametrize("obj", [{1, 2}, object(), 1 + 2j])
def test_unsupported_types(obj):
    """Test that types without a datastore form are rejected."""
    with pytest.raises(UnsupportedValueTypeError) as exc:
        wrap_value(obj)
    assert exc.value.details["value_type"] == type(obj).__name__


def test_is_null():
    """Test the null check."""
    assert Value(type=ValueType.NULL).is_null
    assert not wrap_value(0).is_null


class TestToDict:
    """Tests for the REST rendering of values."""

    def test_scalars(self):
        """Test scalar renderings."""
        assert wrap_value(None).to_dict() == {"nullValue": None}
        assert wrap_value(True).to_dict() == {"booleanValue": True}
        assert wrap_value(7).to_dict() == {"integerValue": "7"}
        assert wrap_value(0.5).to_dict() == {"doubleValue": 0.5}
        assert wrap_value("x").to_dict() == {"stringValue": "x"}

    def test_blob_is_base64(self):
        """Test that blobs render as base64."""
        assert wrap_value(b"hi").to_dict() == {"blobValue": "aGk="}

    def test_timestamp_is_iso(self):
        """Test that timestamps render as ISO 8601 in UTC."""
        ts = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert wrap_value(ts).to_dict() == {"timestampValue": "2024-05-01T12:00:00+00:00"}
        assert wrap_value(datetime(2024, 5, 1, 12, 0)).to_dict() == {"timestampValue": "2024-05-01T12:00:00+00:00"}

    def test_containers(self):
        """Test list and entity renderings."""
        assert wrap_value([1, None]).to_dict() == {
            "arrayValue": {"values": [{"integerValue": "1"}, {"nullValue": None}]}
        }
        assert wrap_value({"a": "b"}).to_dict() == {"entityValue": {"properties": {"a": {"stringValue": "b"}}}}
