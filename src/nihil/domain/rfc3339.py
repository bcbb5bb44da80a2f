# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""RFC 3339 timestamp text form.

Purpose:
    Format and parse the timestamp text used on the JSON wire.

Design:
    * Formatting always normalizes to UTC and writes ``Z``. Naive datetimes are
      taken to already be UTC.
    * Sub-second digits appear only when non-zero, trailing zeros trimmed.
    * Parsing is strict: ``T`` separator, mandatory ``Z`` or ``+hh:mm`` offset.
      The instant must also be representable in UTC.
      Up to nine fractional digits are accepted; anything past microseconds
      is truncated.

Layer:
    domain
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta, timezone

__all__ = ["format_rfc3339", "parse_rfc3339"]

_RFC3339 = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:\.(?P<fraction>[0-9]{1,9}))?"
    r"(?P<offset>Z|[+-][0-9]{2}:[0-9]{2})"
)


def format_rfc3339(value: datetime) -> str:
    """Return ``value`` as an RFC 3339 UTC string.

    Args:
        value: Aware or naive datetime. Naive values are treated as UTC.

    Returns:
        str: e.g. ``2023-10-15T14:30:00Z`` or ``2023-10-15T14:30:00.5Z``.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    else:
        value = value.astimezone(UTC)

    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    return text + "Z"


def parse_rfc3339(text: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware datetime.

    Args:
        text: Timestamp text, e.g. ``2023-10-15T14:30:00Z``.

    Returns:
        datetime: Aware datetime carrying the parsed offset.

    Raises:
        ValueError: If ``text`` is not RFC 3339, a field is out of range, or the
            instant falls outside what ``datetime`` can hold in UTC.
    """
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")

    offset = match["offset"]
    if offset == "Z":
        tz: timezone = UTC
    else:
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(f"timestamp offset out of range: {offset!r}")
        delta = timedelta(hours=hours, minutes=minutes)
        tz = timezone(-delta if offset[0] == "-" else delta)

    fraction = match["fraction"] or ""
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0

    parsed = datetime(
        int(match["year"]),
        int(match["month"]),
        int(match["day"]),
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"]),
        microsecond,
        tzinfo=tz,
    )
    try:
        parsed.astimezone(UTC)
    except OverflowError as exc:
        raise ValueError(f"timestamp out of range in UTC: {text!r}") from exc
    return parsed
