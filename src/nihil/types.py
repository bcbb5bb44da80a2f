"""Project-wide typing helpers.

``JsonValue`` models what the stdlib decoder hands back before a kind decodes
it. ``StorageValue`` and ``ScanSource`` model the two directions of the
DB-API driver boundary.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

type JsonPrimitive = None | bool | int | float | str
type JsonValue = JsonPrimitive | list[JsonValue] | dict[str, JsonValue]

type StorageValue = None | bool | int | float | str | datetime
type ScanSource = StorageValue | bytes | bytearray | memoryview | Decimal

__all__ = ["JsonPrimitive", "JsonValue", "ScanSource", "StorageValue"]
