# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Nullable numeric values (Domain Layer).

Purpose:
    Fixed-width integers and 64-bit floats. Integer values are plain ``int``
    range-checked against their width at construction and on decode.

Notes:
    ``NilByte`` is an unsigned 8-bit integer. Its driver value is a plain
    ``int`` since not every backend has a one-byte column type.

Layer:
    domain/values
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from nihil.domain.primitives import BYTE, FLOAT64, INT16, INT32, INT64, PrimitiveKind
from nihil.domain.values.base import Nullable

__all__ = ["NilByte", "NilFloat64", "NilInt16", "NilInt32", "NilInt64"]


@dataclass
class NilByte(Nullable[int]):
    """Nullable unsigned 8-bit integer (0-255)."""

    value: int = 0

    kind: ClassVar[PrimitiveKind[Any]] = BYTE


@dataclass
class NilInt16(Nullable[int]):
    """Nullable signed 16-bit integer."""

    value: int = 0

    kind: ClassVar[PrimitiveKind[Any]] = INT16


@dataclass
class NilInt32(Nullable[int]):
    """Nullable signed 32-bit integer."""

    value: int = 0

    kind: ClassVar[PrimitiveKind[Any]] = INT32


@dataclass
class NilInt64(Nullable[int]):
    """Nullable signed 64-bit integer."""

    value: int = 0

    kind: ClassVar[PrimitiveKind[Any]] = INT64


@dataclass
class NilFloat64(Nullable[float]):
    """Nullable 64-bit float. ``make`` also takes an ``int`` and stores it as float."""

    value: float = 0.0

    kind: ClassVar[PrimitiveKind[Any]] = FLOAT64
