# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Nullable value contract (Domain Layer).

Purpose:
    The minimal operation set a typed wrapper exposes so the generic JSON
    algorithms in :mod:`nihil.domain.codec` can work on it without knowing its
    concrete kind.

Layer:
    domain
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

from nihil.types import ScanSource, StorageValue

if TYPE_CHECKING:
    from nihil.domain.primitives import PrimitiveKind

__all__ = ["NullableValue"]


@runtime_checkable
class NullableValue[T](Protocol):
    """Capability contract for a nullable wrapper over primitive kind ``T``.

    ``kind`` takes the place of the type parameter at runtime: it is how the
    decoder learns what to decode into.
    """

    kind: ClassVar[PrimitiveKind[Any]]

    def is_present(self) -> bool:
        """Return True when the wrapper holds a value."""
        ...

    def get_value(self) -> T:
        """Return the held value; meaningless when absent."""
        ...

    def set_presence(self, valid: bool) -> None:
        """Mark the wrapper present or absent."""
        ...

    def set_value(self, value: T) -> None:
        """Replace the held value without touching presence."""
        ...

    def scan(self, src: ScanSource) -> None:
        """Populate from a driver value (native, bytes/str, or ``None``).

        Raises:
            UnsupportedStorageRepresentation: If ``src`` cannot become a ``T``.
        """
        ...

    def to_storage_value(self) -> StorageValue:
        """Return ``None`` when absent, else the driver representation."""
        ...
