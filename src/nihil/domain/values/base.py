# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Nullable base value (Domain Layer).

Purpose:
    Generic two-field record ``{valid, value}`` implementing the nullable
    contract once. Concrete wrappers only bind a primitive kind and the zero
    value of ``value``.

Design:
    - ``make(v)`` builds a present value; ``make_null()`` and the bare
      constructor build an absent one holding the kind's zero.
    - Decoding (``unmarshal_json``/``scan``) mutates the instance in place.
    - Equality is structural over both fields; instances are mutable and so
      unhashable.
    - Pydantic models may declare wrapper fields directly.

Layer:
    domain/values
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Self

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import CoreSchema, core_schema

from nihil.domain.codec import marshal_json, unmarshal_json
from nihil.domain.exceptions import DecodingFailure
from nihil.domain.primitives import PrimitiveKind
from nihil.domain.schema import JSON_SCHEMAS, LOGICAL_TYPES, physical_type
from nihil.types import ScanSource, StorageValue

__all__ = ["Nullable"]


@dataclass
class Nullable[T]:
    """Nullable value over one primitive kind.

    Attributes:
        valid: True iff ``value`` is meaningful.
        value: The held primitive. Ignored while ``valid`` is False.
    """

    valid: bool = False
    value: T = None  # type: ignore[assignment]

    kind: ClassVar[PrimitiveKind[Any]]

    # ------------------------------------------------------------------ #
    # Constructors
    # ------------------------------------------------------------------ #
    @classmethod
    def make(cls, value: T) -> Self:
        """Return a present wrapper holding ``value``.

        Raises:
            TypeError: If ``value`` is not of the wrapper's primitive type.
            ValueError: If ``value`` is outside the kind's range.
        """
        return cls(valid=True, value=cls.kind.check(value))

    @classmethod
    def make_null(cls) -> Self:
        """Return an absent wrapper."""
        return cls()

    # ------------------------------------------------------------------ #
    # Nullable contract
    # ------------------------------------------------------------------ #
    def is_present(self) -> bool:
        return self.valid

    def get_value(self) -> T:
        return self.value

    def set_presence(self, valid: bool) -> None:
        self.valid = valid

    def set_value(self, value: T) -> None:
        self.value = value

    def scan(self, src: ScanSource) -> None:
        """Populate from a driver value; ``None`` resets to absent."""
        if src is None:
            self.value, self.valid = self.kind.zero, False
            return
        self.value = self.kind.from_storage(src)
        self.valid = True

    def to_storage_value(self) -> StorageValue:
        if not self.valid:
            return None
        return self.kind.to_storage(self.value)

    # ------------------------------------------------------------------ #
    # JSON
    # ------------------------------------------------------------------ #
    def marshal_json(self) -> bytes:
        """Return the JSON encoding (``b"null"`` when absent)."""
        return marshal_json(self)

    def unmarshal_json(self, data: bytes | bytearray | memoryview | str) -> None:
        """Populate from JSON text in place."""
        unmarshal_json(self, data)

    # ------------------------------------------------------------------ #
    # Schema/ORM metadata
    # ------------------------------------------------------------------ #
    @classmethod
    def data_type(cls) -> str:
        """Return the logical column type name."""
        return LOGICAL_TYPES[cls.kind.name]

    @classmethod
    def db_data_type(
        cls,
        backend: str,
        *,
        size: int | str | None = None,
        precision: int | str | None = None,
    ) -> str:
        """Return the physical column type for ``backend``.

        Args:
            backend: ``mysql``, ``postgres``, ``sqlite`` or ``sqlserver``;
                anything else gets the default type.
            size: Optional column length (text only).
            precision: Optional fractional-second precision (timestamps only).
        """
        return physical_type(cls.kind.name, backend, size=size, precision=precision)

    # ------------------------------------------------------------------ #
    # Pydantic integration
    # ------------------------------------------------------------------ #
    @classmethod
    def _validate(cls, value: Any) -> Self:
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.make_null()
        try:
            return cls(valid=True, value=cls.kind.from_python(value))
        except (TypeError, ValueError) as exc:
            raise DecodingFailure(
                f"cannot decode {cls.kind.name}: {exc}",
                details={"kind": cls.kind.name},
            ) from exc

    @staticmethod
    def _serialize(value: Nullable[Any]) -> Any:
        return value.value if value.valid else None

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(cls._serialize),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"anyOf": [dict(JSON_SCHEMAS[cls.kind.name]), {"type": "null"}]}
