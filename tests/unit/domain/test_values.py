from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone
from typing import Any

import pytest

from nihil.domain.exceptions import DecodingFailure, UnsupportedStorageRepresentation
from nihil.domain.primitives import TIMESTAMP
from nihil.domain.values import (
    WRAPPERS,
    NilBool,
    NilByte,
    NilFloat64,
    NilInt16,
    NilInt32,
    NilInt64,
    NilString,
    NilTime,
)

PRESENT_SAMPLES: list[tuple[type[Any], Any]] = [
    (NilBool, True),
    (NilBool, False),
    (NilByte, 0),
    (NilByte, 255),
    (NilInt16, -32768),
    (NilInt16, 32767),
    (NilInt32, -456),
    (NilInt32, 2**31 - 1),
    (NilInt64, -(2**63)),
    (NilInt64, 2**63 - 1),
    (NilFloat64, 0.1),
    (NilFloat64, -67.89),
    (NilFloat64, 88.0),
    (NilFloat64, 1e21),
    (NilFloat64, 5e-324),
    (NilFloat64, 1.7976931348623157e308),
    (NilString, ""),
    (NilString, 'say "hello"'),
    (NilString, "héllo ✓"),
    (NilString, "line\nbreak\ttab"),
    (NilTime, datetime(2023, 10, 15, 14, 30, tzinfo=UTC)),
    (NilTime, datetime(2023, 10, 15, 14, 30, 0, 123456, tzinfo=UTC)),
    (NilTime, datetime(2023, 10, 15, 16, 30, tzinfo=timezone(timedelta(hours=2)))),
]


def test_wrappers_registry_covers_every_kind() -> None:
    assert set(WRAPPERS) == {"bool", "byte", "int16", "int32", "int64", "float64", "string", "time"}
    assert WRAPPERS["time"] is NilTime


@pytest.mark.parametrize("wrapper", list(WRAPPERS.values()))
def test_bare_constructor_is_absent_zero(wrapper: type[Any]) -> None:
    value = wrapper()
    assert value.is_present() is False
    assert value.get_value() == wrapper.kind.zero
    assert value == wrapper.make_null()
    assert value.to_storage_value() is None


def test_make_and_make_null() -> None:
    age = NilInt32.make(30)
    assert age.valid is True
    assert age.value == 30
    assert age == NilInt32(valid=True, value=30)

    assert NilTime.make_null().value == TIMESTAMP.zero


def test_make_checks_type_and_range() -> None:
    with pytest.raises(ValueError):
        NilByte.make(256)
    with pytest.raises(TypeError):
        NilInt32.make("30")
    with pytest.raises(TypeError):
        NilBool.make(1)
    with pytest.raises(TypeError):
        NilTime.make("2023-10-15T14:30:00Z")

    assert NilFloat64.make(88) == NilFloat64.make(88.0)


def test_contract_setters() -> None:
    value = NilString()
    value.set_value("x")
    assert value.is_present() is False
    value.set_presence(True)
    assert value.is_present() is True
    assert value.get_value() == "x"


def test_valid_person_record_fields() -> None:
    """Present fields encode to their bare JSON values."""
    assert NilString.make("John Doe").marshal_json() == b'"John Doe"'
    assert NilInt32.make(30).marshal_json() == b"30"
    assert NilFloat64.make(95.5).marshal_json() == b"95.5"
    assert NilBool.make(True).marshal_json() == b"true"
    created = NilTime.make(datetime(2023, 10, 15, 14, 30, tzinfo=UTC))
    assert created.marshal_json() == b'"2023-10-15T14:30:00Z"'
    assert NilByte.make(255).marshal_json() == b"255"


def test_decode_null_age_yields_absent() -> None:
    age = NilInt32()
    age.unmarshal_json(b"null")
    assert age.valid is False

    name = NilString()
    name.unmarshal_json(b'"Jane Smith"')
    assert name == NilString.make("Jane Smith")


def test_byte_storage_value_is_wide_int() -> None:
    stored = NilByte.make(255).to_storage_value()
    assert stored == 255
    assert type(stored) is int


def test_scan_nil_resets_to_absent() -> None:
    value = NilInt32.make(5)
    value.scan(None)
    assert value == NilInt32.make_null()
    assert value.value == 0

    stamp = NilTime.make(datetime(2023, 10, 15, tzinfo=UTC))
    stamp.scan(None)
    assert stamp.valid is False
    assert stamp.value == TIMESTAMP.zero


def test_scan_text_form() -> None:
    value = NilInt32()
    value.scan(b"42")
    assert value == NilInt32.make(42)

    flag = NilBool()
    flag.scan(1)
    assert flag == NilBool.make(True)


def test_scan_failure_raises_unsupported() -> None:
    value = NilInt32()
    with pytest.raises(UnsupportedStorageRepresentation) as excinfo:
        value.scan("abc")
    assert excinfo.value.code == "UNSUPPORTED_STORAGE_REPRESENTATION"
    assert isinstance(excinfo.value, TypeError)
    assert excinfo.value.details == {"kind": "int32", "source_type": "str"}


def test_failed_unmarshal_leaves_absent_wrapper_absent() -> None:
    value = NilFloat64()
    with pytest.raises(DecodingFailure):
        value.unmarshal_json(b"NaN")
    assert value.is_present() is False


@pytest.mark.parametrize("wrapper", list(WRAPPERS.values()))
def test_absent_round_trips_through_json(wrapper: type[Any]) -> None:
    original = wrapper.make_null()
    assert original.marshal_json() == b"null"

    decoded = wrapper.make(wrapper.kind.zero)
    decoded.unmarshal_json(original.marshal_json())
    assert decoded.is_present() is False


@pytest.mark.parametrize(("wrapper", "value"), PRESENT_SAMPLES)
def test_present_round_trips_through_json(wrapper: type[Any], value: Any) -> None:
    original = wrapper.make(value)
    decoded = wrapper()
    decoded.unmarshal_json(original.marshal_json())
    assert decoded.is_present() is True
    assert decoded.value == value


@pytest.mark.parametrize(("wrapper", "value"), PRESENT_SAMPLES)
def test_second_round_trip_is_byte_identical(wrapper: type[Any], value: Any) -> None:
    first = wrapper.make(value).marshal_json()
    decoded = wrapper()
    decoded.unmarshal_json(first)
    assert decoded.marshal_json() == first


@pytest.mark.parametrize(("wrapper", "value"), PRESENT_SAMPLES)
def test_present_round_trips_through_storage(wrapper: type[Any], value: Any) -> None:
    scanned = wrapper()
    scanned.scan(wrapper.make(value).to_storage_value())
    assert scanned == wrapper.make(value)


def test_time_round_trip_is_instant_equal() -> None:
    local = datetime(2023, 10, 15, 16, 30, tzinfo=timezone(timedelta(hours=2)))
    decoded = NilTime()
    decoded.unmarshal_json(NilTime.make(local).marshal_json())
    assert decoded.value == local
    assert decoded.value.utcoffset() == timedelta(0)


def test_wrappers_are_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(NilInt32.make(1))
