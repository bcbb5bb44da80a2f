from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from nihil.domain.rfc3339 import format_rfc3339, parse_rfc3339


def test_format_whole_seconds_has_no_fraction() -> None:
    value = datetime(2023, 10, 15, 14, 30, tzinfo=UTC)
    assert format_rfc3339(value) == "2023-10-15T14:30:00Z"


def test_format_trims_trailing_fraction_zeros() -> None:
    value = datetime(2023, 10, 15, 14, 30, 0, 500000, tzinfo=UTC)
    assert format_rfc3339(value) == "2023-10-15T14:30:00.5Z"

    value = datetime(2023, 10, 15, 14, 30, 0, 123456, tzinfo=UTC)
    assert format_rfc3339(value) == "2023-10-15T14:30:00.123456Z"


def test_format_normalizes_offsets_to_utc() -> None:
    value = datetime(2023, 10, 15, 16, 30, tzinfo=timezone(timedelta(hours=2)))
    assert format_rfc3339(value) == "2023-10-15T14:30:00Z"


def test_format_treats_naive_as_utc() -> None:
    assert format_rfc3339(datetime(2023, 10, 15, 14, 30)) == "2023-10-15T14:30:00Z"


def test_format_pads_small_years() -> None:
    assert format_rfc3339(datetime(5, 1, 2, 3, 4, 5, tzinfo=UTC)) == "0005-01-02T03:04:05Z"


def test_parse_utc() -> None:
    parsed = parse_rfc3339("2023-10-15T14:30:00Z")
    assert parsed == datetime(2023, 10, 15, 14, 30, tzinfo=UTC)
    assert parsed.utcoffset() == timedelta(0)


def test_parse_keeps_offset_and_instant() -> None:
    parsed = parse_rfc3339("2023-10-15T16:30:00+02:00")
    assert parsed.utcoffset() == timedelta(hours=2)
    assert parsed == datetime(2023, 10, 15, 14, 30, tzinfo=UTC)

    parsed = parse_rfc3339("2023-10-15T09:00:00-05:30")
    assert parsed == datetime(2023, 10, 15, 14, 30, tzinfo=UTC)


def test_parse_truncates_nanoseconds_to_microseconds() -> None:
    parsed = parse_rfc3339("2023-10-15T14:30:00.123456789Z")
    assert parsed.microsecond == 123456

    assert parse_rfc3339("2023-10-15T14:30:00.5Z").microsecond == 500000


@pytest.mark.parametrize(
    "text",
    [
        "2023-10-15 14:30:00Z",
        "2023-10-15T14:30:00",
        "2023-10-15",
        "2023-10-15T14:30Z",
        "2023-13-01T00:00:00Z",
        "2023-10-15T14:30:60Z",
        "2023-10-15T14:30:00+24:00",
        "2023-10-15T14:30:00.Z",
        " 2023-10-15T14:30:00Z",
    ],
)
def test_parse_rejects_non_rfc3339(text: str) -> None:
    with pytest.raises(ValueError):
        parse_rfc3339(text)


@pytest.mark.parametrize(
    "text",
    ["9999-12-31T23:00:00-05:00", "0001-01-01T00:00:00+05:00"],
)
def test_parse_rejects_instants_outside_utc_range(text: str) -> None:
    with pytest.raises(ValueError, match="out of range in UTC"):
        parse_rfc3339(text)


def test_parse_accepts_range_edges_in_utc() -> None:
    assert parse_rfc3339("9999-12-31T23:59:59Z").year == 9999
    assert parse_rfc3339("0001-01-01T00:00:00Z") == datetime.min.replace(tzinfo=UTC)
    assert parse_rfc3339("0001-01-01T05:00:00+05:00") == datetime.min.replace(tzinfo=UTC)
