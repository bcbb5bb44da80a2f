# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Nullable boolean."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from nihil.domain.primitives import BOOL, PrimitiveKind
from nihil.domain.values.base import Nullable

__all__ = ["NilBool"]


@dataclass
class NilBool(Nullable[bool]):
    """Nullable ``bool``; stored as BOOLEAN (BIT on SQL Server)."""

    value: bool = False

    kind: ClassVar[PrimitiveKind[Any]] = BOOL
