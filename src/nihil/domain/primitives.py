# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Primitive kinds (Domain Layer).

Purpose:
    One small codec per primitive kind. A kind knows how to check a value
    handed to a constructor, how to write and read the value's JSON text, and
    how to convert to and from what a DB-API driver exchanges.

Design:
    * Kinds hold no state besides their constants; the module-level instances
      (``BOOL``, ``BYTE``, ...) are shared by every wrapper of that kind.
    * JSON decoding works on the object the stdlib decoder produced and raises
      ``TypeError``/``ValueError``. ``nihil.domain.codec`` turns those into
      ``DecodingFailure``.
    * Storage conversion raises ``UnsupportedStorageRepresentation`` directly.
    * Integer kinds hand the driver a plain ``int``. For the byte kind that is
      a widening: drivers get a 64-bit integer, never a one-byte ``bytes``.

Layer:
    domain
"""

from __future__ import annotations

import json
import math
import re
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from nihil.domain.exceptions import EncodingFailure, UnsupportedStorageRepresentation
from nihil.domain.rfc3339 import format_rfc3339, parse_rfc3339
from nihil.types import JsonValue, ScanSource, StorageValue

__all__ = [
    "BOOL",
    "BYTE",
    "FLOAT64",
    "INT16",
    "INT32",
    "INT64",
    "KINDS",
    "TEXT",
    "TIMESTAMP",
    "BoolKind",
    "FloatKind",
    "IntegerKind",
    "PrimitiveKind",
    "TextKind",
    "TimeKind",
    "format_json_float",
    "format_text_float",
]

_BOOL_TEXT: dict[str, bool] = {
    "1": True,
    "t": True,
    "T": True,
    "true": True,
    "TRUE": True,
    "True": True,
    "0": False,
    "f": False,
    "F": False,
    "false": False,
    "FALSE": False,
    "False": False,
}

_SIGNED_DIGITS = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_DIGITS = re.compile(r"[0-9]+")

_BYTES_LIKE = (bytes, bytearray, memoryview)


def format_json_float(value: float) -> str:
    """Return the shortest round-trip JSON text for ``value``.

    Integral values drop the trailing ``.0``. Magnitudes below ``1e-6`` or at
    or above ``1e21`` use exponent form with a trimmed negative exponent
    (``1e-7``, ``1e+21``).

    Raises:
        EncodingFailure: If ``value`` is NaN or infinite.
    """
    if not math.isfinite(value):
        raise EncodingFailure(
            f"unsupported float value: {value!r}",
            details={"value": repr(value)},
        )

    magnitude = abs(value)
    if magnitude != 0 and (magnitude < 1e-6 or magnitude >= 1e21):
        text = repr(value)
        if len(text) >= 4 and text[-4] == "e" and text[-3] == "-" and text[-2] == "0":
            text = text[:-2] + text[-1]
        return text

    return format(Decimal(repr(value)).normalize(), "f")


def format_text_float(value: float) -> str:
    """Return ``value`` in shortest general form, as text columns receive it.

    Fixed notation is used for decimal exponents in [-4, 6), exponent notation
    with at least two exponent digits otherwise: ``100.0`` gives ``"100"``,
    ``1234567.0`` gives ``"1.234567e+06"`` and ``1e-05`` gives ``"1e-05"``.
    Non-finite values are written ``NaN``, ``+Inf`` and ``-Inf``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    shortest = Decimal(repr(value)).normalize()
    sign, digits, exponent = shortest.as_tuple()
    if not any(digits):
        return "-0" if sign else "0"

    point = len(digits) + int(exponent)
    decimal_exponent = point - 1
    if -4 <= decimal_exponent < 6:
        return format(shortest, "f")

    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(d) for d in digits[1:])
    exp_sign = "-" if decimal_exponent < 0 else "+"
    return f"{'-' if sign else ''}{mantissa}e{exp_sign}{abs(decimal_exponent):02d}"


def _is_plain_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_text(src: object) -> str | None:
    if isinstance(src, str):
        return src
    if isinstance(src, _BYTES_LIKE):
        try:
            return bytes(src).decode("utf-8")
        except UnicodeDecodeError:
            return None
    return None


class PrimitiveKind[T](ABC):
    """Codec for one primitive kind.

    Attributes:
        name: Kind name used by the CLI and in error details.
        zero: Value an absent wrapper holds.
    """

    name: str
    zero: T

    @abstractmethod
    def check(self, value: object) -> T:
        """Return ``value`` if it is a ``T``; raise ``TypeError``/``ValueError`` otherwise."""

    @abstractmethod
    def to_json(self, value: T) -> str:
        """Return the JSON text of a present value."""

    @abstractmethod
    def from_json(self, obj: JsonValue) -> T:
        """Decode the object the stdlib JSON decoder produced."""

    @abstractmethod
    def from_storage(self, src: ScanSource) -> T:
        """Convert a non-NULL driver value to ``T``."""

    def from_python(self, value: object) -> T:
        """Accept a native value or its JSON-decoded form (pydantic input)."""
        return self.from_json(value)  # type: ignore[arg-type]

    def to_storage(self, value: T) -> StorageValue:
        """Return the driver representation of a present value."""
        return value  # type: ignore[return-value]

    def unsupported(
        self, src: object, cause: str | None = None
    ) -> UnsupportedStorageRepresentation:
        """Build the error raised when ``src`` cannot be stored into this kind."""
        message = f"cannot scan {type(src).__name__} into {self.name}"
        if cause:
            message = f"{message}: {cause}"
        return UnsupportedStorageRepresentation(
            message,
            details={"kind": self.name, "source_type": type(src).__name__},
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class BoolKind(PrimitiveKind[bool]):
    name = "bool"
    zero = False

    def check(self, value: object) -> bool:
        if not isinstance(value, bool):
            raise TypeError(f"{self.name} value must be bool, not {type(value).__name__}")
        return value

    def to_json(self, value: bool) -> str:
        return "true" if value else "false"

    def from_json(self, obj: JsonValue) -> bool:
        if not isinstance(obj, bool):
            raise TypeError(f"cannot decode JSON {type(obj).__name__} into {self.name}")
        return obj

    def from_storage(self, src: ScanSource) -> bool:
        if isinstance(src, bool):
            return src
        if _is_plain_int(src):
            if src in (0, 1):
                return bool(src)
            raise self.unsupported(src, f"integer {src} is not 0 or 1")
        text = _as_text(src)
        if text is not None and text in _BOOL_TEXT:
            return _BOOL_TEXT[text]
        raise self.unsupported(src)


class IntegerKind(PrimitiveKind[int]):
    """Fixed-width integer kind; the byte kind is the unsigned 8-bit case."""

    zero = 0

    def __init__(self, name: str, *, minimum: int, maximum: int) -> None:
        self.name = name
        self.minimum = minimum
        self.maximum = maximum
        self._digits = _SIGNED_DIGITS if minimum < 0 else _UNSIGNED_DIGITS

    def _in_range(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum

    def check(self, value: object) -> int:
        if not _is_plain_int(value):
            raise TypeError(f"{self.name} value must be int, not {type(value).__name__}")
        if not self._in_range(value):  # type: ignore[arg-type]
            raise ValueError(
                f"{self.name} value {value} outside [{self.minimum}, {self.maximum}]"
            )
        return value  # type: ignore[return-value]

    def to_json(self, value: int) -> str:
        return str(value)

    def from_json(self, obj: JsonValue) -> int:
        if not _is_plain_int(obj):
            raise TypeError(f"cannot decode JSON {type(obj).__name__} into {self.name}")
        if not self._in_range(obj):  # type: ignore[arg-type]
            raise ValueError(f"JSON number {obj} overflows {self.name}")
        return obj  # type: ignore[return-value]

    def from_storage(self, src: ScanSource) -> int:
        if _is_plain_int(src):
            value = src
        elif isinstance(src, float):
            if not (math.isfinite(src) and src.is_integer()):
                raise self.unsupported(src, f"{src!r} is not integral")
            value = int(src)
        elif isinstance(src, Decimal):
            if not (src.is_finite() and src == src.to_integral_value()):
                raise self.unsupported(src, f"{src} is not integral")
            value = int(src)
        else:
            text = _as_text(src)
            if text is None or self._digits.fullmatch(text) is None:
                raise self.unsupported(src)
            value = int(text)

        if not self._in_range(value):
            raise self.unsupported(src, f"value {value} out of range")
        return value

    def to_storage(self, value: int) -> StorageValue:
        return int(value)


class FloatKind(PrimitiveKind[float]):
    name = "float64"
    zero = 0.0

    def check(self, value: object) -> float:
        if isinstance(value, float):
            return value
        if _is_plain_int(value):
            try:
                return float(value)  # type: ignore[arg-type]
            except OverflowError as exc:
                raise ValueError(f"{value} overflows {self.name}") from exc
        raise TypeError(f"{self.name} value must be float, not {type(value).__name__}")

    def to_json(self, value: float) -> str:
        return format_json_float(value)

    def from_json(self, obj: JsonValue) -> float:
        if isinstance(obj, bool) or not isinstance(obj, (int, float)):
            raise TypeError(f"cannot decode JSON {type(obj).__name__} into {self.name}")
        try:
            value = float(obj)
        except OverflowError as exc:
            raise ValueError(f"JSON number overflows {self.name}") from exc
        if not math.isfinite(value):
            raise ValueError(f"JSON number overflows {self.name}")
        return value

    def from_storage(self, src: ScanSource) -> float:
        if isinstance(src, float):
            return src
        if _is_plain_int(src) or isinstance(src, Decimal):
            try:
                return float(src)
            except OverflowError as exc:
                raise self.unsupported(src, "value out of range") from exc
        text = _as_text(src)
        if text is None or text != text.strip() or "_" in text:
            raise self.unsupported(src)
        try:
            return float(text)
        except ValueError as exc:
            raise self.unsupported(src, str(exc)) from exc


class TextKind(PrimitiveKind[str]):
    name = "string"
    zero = ""

    def check(self, value: object) -> str:
        if not isinstance(value, str):
            raise TypeError(f"{self.name} value must be str, not {type(value).__name__}")
        return value

    def to_json(self, value: str) -> str:
        return json.dumps(value, ensure_ascii=False)

    def from_json(self, obj: JsonValue) -> str:
        if not isinstance(obj, str):
            raise TypeError(f"cannot decode JSON {type(obj).__name__} into {self.name}")
        return obj

    def from_storage(self, src: ScanSource) -> str:
        if isinstance(src, str):
            return src
        if isinstance(src, _BYTES_LIKE):
            try:
                return bytes(src).decode("utf-8")
            except UnicodeDecodeError as exc:
                raise self.unsupported(src, "bytes are not valid UTF-8") from exc
        if isinstance(src, bool):
            return "true" if src else "false"
        if isinstance(src, (int, Decimal)):
            return str(src)
        if isinstance(src, float):
            return format_text_float(src)
        if isinstance(src, datetime):
            return format_rfc3339(src)
        raise self.unsupported(src)


class TimeKind(PrimitiveKind[datetime]):
    """Timestamp kind. Naive datetimes coming from a driver are taken as UTC."""

    name = "time"
    zero = datetime.min.replace(tzinfo=UTC)

    def check(self, value: object) -> datetime:
        if not isinstance(value, datetime):
            raise TypeError(f"{self.name} value must be datetime, not {type(value).__name__}")
        return value

    def from_python(self, value: object) -> datetime:
        if isinstance(value, datetime):
            return value
        return self.from_json(value)  # type: ignore[arg-type]

    def to_json(self, value: datetime) -> str:
        return f'"{format_rfc3339(value)}"'

    def from_json(self, obj: JsonValue) -> datetime:
        if not isinstance(obj, str):
            raise TypeError(f"cannot decode JSON {type(obj).__name__} into {self.name}")
        return parse_rfc3339(obj)

    def from_storage(self, src: ScanSource) -> datetime:
        if isinstance(src, datetime):
            value = src
        else:
            text = _as_text(src)
            if text is None:
                raise self.unsupported(src)
            try:
                value = datetime.fromisoformat(text)
            except ValueError as exc:
                raise self.unsupported(src, str(exc)) from exc
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value


BOOL = BoolKind()
BYTE = IntegerKind("byte", minimum=0, maximum=2**8 - 1)
INT16 = IntegerKind("int16", minimum=-(2**15), maximum=2**15 - 1)
INT32 = IntegerKind("int32", minimum=-(2**31), maximum=2**31 - 1)
INT64 = IntegerKind("int64", minimum=-(2**63), maximum=2**63 - 1)
FLOAT64 = FloatKind()
TEXT = TextKind()
TIMESTAMP = TimeKind()

#: Kinds by name.
KINDS: dict[str, PrimitiveKind[Any]] = {
    kind.name: kind for kind in (BOOL, BYTE, INT16, INT32, INT64, FLOAT64, TEXT, TIMESTAMP)
}
