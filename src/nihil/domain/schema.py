# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Column type metadata (Domain Layer).

Purpose:
    Fixed answer tables for the logical and physical column type of each
    primitive kind, consumed by schema/ORM layers.

Design:
    * Backend identifiers are ``mysql``, ``postgres``, ``sqlite`` and
      ``sqlserver``; anything else takes the default branch.
    * Text honours an optional ``size``, timestamps an optional ``precision``.
      Other kinds ignore both.
    * Pure lookups: no I/O, no failure modes.

Layer:
    domain
"""

from __future__ import annotations

from collections.abc import Mapping

__all__ = [
    "BACKENDS",
    "DEFAULT_BACKEND",
    "JSON_SCHEMAS",
    "LOGICAL_TYPES",
    "physical_type",
]

BACKENDS: tuple[str, ...] = ("mysql", "postgres", "sqlite", "sqlserver")
DEFAULT_BACKEND = "default"

#: Logical type name per kind.
LOGICAL_TYPES: Mapping[str, str] = {
    "bool": "boolean",
    "byte": "tinyint",
    "int16": "smallint",
    "int32": "int",
    "int64": "bigint",
    "float64": "float",
    "string": "string",
    "time": "time",
}

#: JSON Schema of the present value per kind; pydantic adds the null branch.
JSON_SCHEMAS: Mapping[str, Mapping[str, str]] = {
    "bool": {"type": "boolean"},
    "byte": {"type": "integer"},
    "int16": {"type": "integer"},
    "int32": {"type": "integer"},
    "int64": {"type": "integer"},
    "float64": {"type": "number"},
    "string": {"type": "string"},
    "time": {"type": "string", "format": "date-time"},
}

_PHYSICAL: Mapping[str, Mapping[str, str]] = {
    "bool": {
        "mysql": "BOOLEAN",
        "postgres": "BOOLEAN",
        "sqlite": "BOOLEAN",
        "sqlserver": "BIT",
        DEFAULT_BACKEND: "BOOLEAN",
    },
    "byte": {
        "mysql": "TINYINT UNSIGNED",
        "postgres": "SMALLINT",
        "sqlite": "INTEGER",
        "sqlserver": "TINYINT",
        DEFAULT_BACKEND: "TINYINT",
    },
    "int16": {
        "mysql": "SMALLINT",
        "postgres": "SMALLINT",
        "sqlite": "INTEGER",
        "sqlserver": "SMALLINT",
        DEFAULT_BACKEND: "SMALLINT",
    },
    "int32": {
        "mysql": "INT",
        "postgres": "INTEGER",
        "sqlite": "INTEGER",
        "sqlserver": "INT",
        DEFAULT_BACKEND: "INT",
    },
    "int64": {
        "mysql": "BIGINT",
        "postgres": "BIGINT",
        "sqlite": "INTEGER",
        "sqlserver": "BIGINT",
        DEFAULT_BACKEND: "BIGINT",
    },
    "float64": {
        "mysql": "DOUBLE",
        "postgres": "DOUBLE PRECISION",
        "sqlite": "REAL",
        "sqlserver": "FLOAT",
        DEFAULT_BACKEND: "DOUBLE",
    },
    "string": {
        "mysql": "LONGTEXT",
        "postgres": "TEXT",
        "sqlite": "TEXT",
        "sqlserver": "NVARCHAR(MAX)",
        DEFAULT_BACKEND: "TEXT",
    },
    "time": {
        "mysql": "DATETIME",
        "postgres": "TIMESTAMP WITH TIME ZONE",
        "sqlite": "DATETIME",
        "sqlserver": "DATETIME2",
        DEFAULT_BACKEND: "DATETIME",
    },
}

# Templates used when a size/precision tag is present.
_SIZED_TEXT: Mapping[str, str] = {
    "mysql": "VARCHAR({})",
    "postgres": "VARCHAR({})",
    "sqlite": "TEXT",
    "sqlserver": "NVARCHAR({})",
    DEFAULT_BACKEND: "VARCHAR({})",
}

_PRECISE_TIME: Mapping[str, str] = {
    "mysql": "DATETIME({})",
    "postgres": "TIMESTAMP({}) WITH TIME ZONE",
    "sqlite": "DATETIME",
    "sqlserver": "DATETIME2({})",
    DEFAULT_BACKEND: "DATETIME",
}


def _branch(backend: str) -> str:
    return backend if backend in BACKENDS else DEFAULT_BACKEND


def physical_type(
    kind: str,
    backend: str,
    *,
    size: int | str | None = None,
    precision: int | str | None = None,
) -> str:
    """Return the physical column type of ``kind`` on ``backend``.

    Args:
        kind: Primitive kind name (``"int32"``, ``"string"``, ...).
        backend: Backend identifier; unknown values use the default branch.
        size: Optional length for text columns.
        precision: Optional fractional-second precision for timestamps.

    Returns:
        str: Column type, e.g. ``"VARCHAR(100)"``.
    """
    branch = _branch(backend)
    if kind == "string" and size is not None:
        return _SIZED_TEXT[branch].format(size)
    if kind == "time" and precision is not None:
        return _PRECISE_TIME[branch].format(precision)
    return _PHYSICAL[kind][branch]
