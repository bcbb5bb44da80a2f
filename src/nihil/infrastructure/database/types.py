# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""SQLAlchemy column types for nullable wrappers.

Synopsis:
    One ``TypeDecorator`` per wrapper. Binding calls the wrapper's
    ``to_storage_value()``; loading builds a fresh wrapper and calls
    ``scan()``, so a NULL column comes back as an absent wrapper, never as
    ``None``.

Design:
    * DDL is compiled from the wrapper's ``db_data_type()`` answer table rather
      than from the ``impl`` type. The ``impl`` type still owns the driver-level
      bind/result processing (e.g. SQLite's datetime string handling).
    * SQLAlchemy dialect names are mapped onto the backend identifiers the
      answer table uses (``postgresql`` -> ``postgres``, ``mssql`` ->
      ``sqlserver``, ``mariadb`` -> ``mysql``).
    * Plain primitives are accepted as bind values (``where(col == 5)``) and
      wrapped with ``make`` first.
    * Timestamps are normalized to UTC before binding; backends without a
      zone column (SQLite) would otherwise drop the offset.

Layer:
    infrastructure/database
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, ClassVar

from sqlalchemy.engine import Dialect
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.type_api import TypeEngine
from sqlalchemy.types import (
    BigInteger,
    Boolean,
    DateTime,
    Float,
    Integer,
    SmallInteger,
    String,
    Text,
    TypeDecorator,
)

from nihil.domain.exceptions import EncodingFailure, UnsupportedStorageRepresentation
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
from nihil.infrastructure.logging.logger import get_json_logger, log_failure

__all__ = [
    "NilBoolType",
    "NilByteType",
    "NilFloat64Type",
    "NilInt16Type",
    "NilInt32Type",
    "NilInt64Type",
    "NilStringType",
    "NilTimeType",
    "NullableType",
    "backend_name",
    "nihil_column_type",
]

_log = get_json_logger(__name__)

#: SQLAlchemy dialect name -> backend identifier of the column type table.
_BACKEND_ALIASES: dict[str, str] = {
    "postgresql": "postgres",
    "mssql": "sqlserver",
    "mariadb": "mysql",
}


def backend_name(dialect_name: str) -> str:
    """Return the column-type backend identifier for a SQLAlchemy dialect name."""
    return _BACKEND_ALIASES.get(dialect_name, dialect_name)


class NullableType(TypeDecorator[Nullable[Any]]):
    """Base ``TypeDecorator`` mapping a wrapper to a driver value and back."""

    impl: Any = Integer
    cache_ok = True

    wrapper: ClassVar[type[Nullable[Any]]]

    @property
    def python_type(self) -> type[Any]:
        return self.wrapper

    def tag_settings(self) -> dict[str, Any]:
        """Return the size/precision parameters passed to ``db_data_type``."""
        return {}

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        if value is None:
            return None
        if not isinstance(value, self.wrapper):
            value = self.wrapper.make(value)
        return value.to_storage_value()

    def process_result_value(self, value: Any, dialect: Dialect) -> Nullable[Any]:
        target = self.wrapper()
        try:
            target.scan(value)
        except UnsupportedStorageRepresentation as exc:
            log_failure(
                _log, "nullable.scan_failed", exc, level=logging.DEBUG, dialect=dialect.name
            )
            raise
        return target


class NilBoolType(NullableType):
    impl = Boolean
    wrapper = NilBool


class NilByteType(NullableType):
    impl = SmallInteger
    wrapper = NilByte


class NilInt16Type(NullableType):
    impl = SmallInteger
    wrapper = NilInt16


class NilInt32Type(NullableType):
    impl = Integer
    wrapper = NilInt32


class NilInt64Type(NullableType):
    impl = BigInteger
    wrapper = NilInt64


class NilFloat64Type(NullableType):
    impl = Float
    wrapper = NilFloat64

    def __init__(self) -> None:
        super().__init__(precision=53)


class NilStringType(NullableType):
    """Text column; ``size`` selects a VARCHAR-style type where the backend has one."""

    impl = Text
    wrapper = NilString

    def __init__(self, size: int | None = None) -> None:
        self.size = size
        super().__init__()

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine[Any]:
        if self.size is not None:
            return dialect.type_descriptor(String(self.size))
        return dialect.type_descriptor(Text())

    def tag_settings(self) -> dict[str, Any]:
        return {"size": self.size}


class NilTimeType(NullableType):
    """Timestamp column; ``precision`` is the fractional-second precision."""

    impl = DateTime
    wrapper = NilTime

    def __init__(self, precision: int | None = None) -> None:
        self.precision = precision
        super().__init__(timezone=True)

    def tag_settings(self) -> dict[str, Any]:
        return {"precision": self.precision}

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        bound = super().process_bind_param(value, dialect)
        if not isinstance(bound, datetime) or bound.tzinfo is None:
            return bound
        try:
            return bound.astimezone(UTC)
        except OverflowError as exc:
            raise EncodingFailure(
                f"cannot bind time value outside the UTC range: {bound.isoformat()}",
                details={"kind": self.wrapper.kind.name},
            ) from exc


_COLUMN_TYPES: dict[type[Nullable[Any]], type[NullableType]] = {
    cls.wrapper: cls
    for cls in (
        NilBoolType,
        NilByteType,
        NilInt16Type,
        NilInt32Type,
        NilInt64Type,
        NilFloat64Type,
        NilStringType,
        NilTimeType,
    )
}


def nihil_column_type(wrapper: type[Nullable[Any]], **tag_settings: Any) -> NullableType:
    """Return a column type instance for a wrapper class.

    Args:
        wrapper: Wrapper class, e.g. ``NilInt32``.
        **tag_settings: ``size`` for ``NilString``, ``precision`` for ``NilTime``.

    Raises:
        KeyError: If ``wrapper`` is not a nihil wrapper type.
    """
    return _COLUMN_TYPES[wrapper](**tag_settings)


def _compile_nullable(type_: NullableType, compiler: Any, **kw: Any) -> str:
    return type_.wrapper.db_data_type(
        backend_name(compiler.dialect.name),
        **type_.tag_settings(),
    )


for _column_type in _COLUMN_TYPES.values():
    compiles(_column_type)(_compile_nullable)
