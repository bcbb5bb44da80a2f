# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Nullable timestamp (Domain Layer).

Purpose:
    Wrap a ``datetime``. JSON uses RFC 3339 normalized to UTC; equality after a
    round trip is instant equality, not representation equality.

Notes:
    Naive datetimes are taken as UTC on output and on scan.

Layer:
    domain/values
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from nihil.domain.primitives import TIMESTAMP, PrimitiveKind
from nihil.domain.values.base import Nullable

__all__ = ["NilTime"]


@dataclass
class NilTime(Nullable[datetime]):
    """Nullable ``datetime``. ``db_data_type`` honours a fractional-second ``precision``."""

    value: datetime = TIMESTAMP.zero

    kind: ClassVar[PrimitiveKind[Any]] = TIMESTAMP
