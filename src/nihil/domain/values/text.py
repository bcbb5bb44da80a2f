# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Nullable text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from nihil.domain.primitives import TEXT, PrimitiveKind
from nihil.domain.values.base import Nullable

__all__ = ["NilString"]


@dataclass
class NilString(Nullable[str]):
    """Nullable ``str``. ``db_data_type`` honours a ``size`` for VARCHAR columns."""

    value: str = ""

    kind: ClassVar[PrimitiveKind[Any]] = TEXT
