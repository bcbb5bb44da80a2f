"""Declarative Base and persistence mixins for nihil models.

This module defines:
    - A declarative Base with deterministic constraint naming conventions and
      a type annotation map, so ``Mapped[NilInt32]`` resolves to the matching
      nullable column type without spelling it out.
    - A shallow serialization mixin that unwraps nullable values.

Note:
    ``Mapped[NilX]`` is not ``Optional``, so SQLAlchemy would infer NOT NULL.
    Columns meant to hold NULL pass ``nullable=True`` explicitly.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

from nihil.domain.rfc3339 import format_rfc3339
from nihil.domain.values import (
    NilBool,
    NilByte,
    NilFloat64,
    NilInt16,
    NilInt32,
    NilInt64,
    NilString,
    NilTime,
    Nullable,
)
from nihil.infrastructure.database.types import (
    NilBoolType,
    NilByteType,
    NilFloat64Type,
    NilInt16Type,
    NilInt32Type,
    NilInt64Type,
    NilStringType,
    NilTimeType,
)

__all__ = ["metadata", "Base", "SerializationMixin", "now_utc"]

#: Deterministic naming conventions for stable DDL.
NAMING_CONVENTIONS: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTIONS)


class Base(DeclarativeBase):
    """Declarative Base for all ORM models."""

    metadata = metadata

    type_annotation_map = {
        NilBool: NilBoolType(),
        NilByte: NilByteType(),
        NilInt16: NilInt16Type(),
        NilInt32: NilInt32Type(),
        NilInt64: NilInt64Type(),
        NilFloat64: NilFloat64Type(),
        NilString: NilStringType(),
        NilTime: NilTimeType(),
    }


class SerializationMixin:
    """Mixin providing a shallow ``to_dict`` JSON-serializable representation."""

    def to_dict(self, *, include: Iterable[str] | None = None) -> dict[str, Any]:
        """Return a shallow dictionary representation of the model.

        Nullable values are unwrapped to their value or ``None``.

        Args:
            include: Attribute names to include. Defaults to the mapped columns.

        Returns:
            dict[str, Any]: Mapping of attribute names to simple values.
        """
        names: Iterable[str]
        if include is not None:
            names = include
        else:
            names = [column.key for column in self.__table__.columns]  # type: ignore[attr-defined]

        result: dict[str, Any] = {}
        for name in names:
            value = getattr(self, name, None)
            if isinstance(value, Nullable):
                value = value.value if value.valid else None
            if isinstance(value, datetime):
                result[name] = format_rfc3339(value)
            elif isinstance(value, (str, int, float, bool)) or value is None:
                result[name] = value
        return result


def now_utc() -> datetime:
    """Return the current UTC time with timezone info."""
    return datetime.now(UTC)
