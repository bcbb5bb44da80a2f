"""Typed nullable wrappers, one per primitive kind."""

from __future__ import annotations

from .base import Nullable
from .boolean import NilBool
from .numeric import NilByte, NilFloat64, NilInt16, NilInt32, NilInt64
from .temporal import NilTime
from .text import NilString

#: Every concrete wrapper type, keyed by primitive kind name.
WRAPPERS: dict[str, type[Nullable[object]]] = {
    cls.kind.name: cls
    for cls in (NilBool, NilByte, NilInt16, NilInt32, NilInt64, NilFloat64, NilString, NilTime)
}

__all__ = [
    "WRAPPERS",
    "NilBool",
    "NilByte",
    "NilFloat64",
    "NilInt16",
    "NilInt32",
    "NilInt64",
    "NilString",
    "NilTime",
    "Nullable",
]
