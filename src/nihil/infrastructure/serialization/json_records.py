# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Composite record JSON (Infrastructure Layer).

Synopsis:
    Encode records whose fields are nullable wrappers, and decode JSON objects
    back into dataclasses holding wrappers.

Design:
    * ``dumps`` writes compact JSON (no whitespace). Wrapper fields go through
      ``marshal_json``; plain primitives use the same float, text and
      timestamp formatting, so ``88.0`` is written ``88`` whether or not it is
      wrapped.
    * Supported containers: mappings with ``str`` keys, dataclasses (field
      order), pydantic models (field order, alias when set), lists and tuples.
    * ``loads`` feeds each wrapper field its member re-encoded as JSON text, so
      null handling still goes through ``unmarshal_json``.
    * Missing keys keep the field default; unknown keys are ignored.
    * ``X | None`` annotations unwrap to ``X``. Annotations that cannot be
      resolved, or unions of several record types, raise ``DecodingFailure``.

Layer:
    infrastructure/serialization
"""

from __future__ import annotations

import dataclasses
import json
import logging
import types
import typing
from collections.abc import Mapping, Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from nihil.domain.codec import marshal_json, unmarshal_json
from nihil.domain.exceptions import DecodingFailure, EncodingFailure
from nihil.domain.primitives import FLOAT64, TEXT, TIMESTAMP
from nihil.domain.values import Nullable
from nihil.infrastructure.logging.logger import get_json_logger, log_failure

__all__ = ["dumps", "loads"]

_log = get_json_logger(__name__)


def _encode(obj: Any) -> str:
    if isinstance(obj, Nullable):
        return marshal_json(obj).decode("utf-8")
    if obj is None:
        return "null"
    if isinstance(obj, bool):
        return "true" if obj else "false"
    if isinstance(obj, int):
        return str(obj)
    if isinstance(obj, float):
        return FLOAT64.to_json(obj)
    if isinstance(obj, Decimal):
        if not obj.is_finite():
            raise EncodingFailure(f"unsupported decimal value: {obj}")
        return str(obj)
    if isinstance(obj, str):
        return TEXT.to_json(obj)
    if isinstance(obj, datetime):
        return TIMESTAMP.to_json(obj)
    if isinstance(obj, BaseModel):
        fields = type(obj).model_fields
        return _encode_members(
            (info.serialization_alias or info.alias or name, getattr(obj, name))
            for name, info in fields.items()
        )
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _encode_members(
            (field.name, getattr(obj, field.name)) for field in dataclasses.fields(obj)
        )
    if isinstance(obj, Mapping):
        for key in obj:
            if not isinstance(key, str):
                raise EncodingFailure(f"mapping keys must be str, not {type(key).__name__}")
        return _encode_members(obj.items())
    if isinstance(obj, Sequence) and not isinstance(obj, (bytes, bytearray)):
        return "[" + ",".join(_encode(item) for item in obj) + "]"
    raise EncodingFailure(
        f"cannot encode {type(obj).__name__} as JSON",
        details={"type": type(obj).__name__},
    )


def _encode_members(members: Any) -> str:
    parts = [f"{TEXT.to_json(key)}:{_encode(value)}" for key, value in members]
    return "{" + ",".join(parts) + "}"


def dumps(obj: Any) -> bytes:
    """Return compact JSON for a record, wrapper, container or primitive.

    Args:
        obj: Value to encode.

    Returns:
        bytes: UTF-8 JSON text.

    Raises:
        EncodingFailure: If any member cannot be encoded.
    """
    return _encode(obj).encode("utf-8")


def _resolve_hints(cls: type[Any]) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except NameError as exc:
        raise DecodingFailure(
            f"cannot resolve field annotations of {cls.__name__}: {exc}",
            details={"type": cls.__name__},
        ) from exc


def _decodable(hint: Any) -> bool:
    return isinstance(hint, type) and (
        issubclass(hint, Nullable) or dataclasses.is_dataclass(hint)
    )


def _target_type(cls: type[Any], name: str, hint: Any) -> tuple[type[Any] | None, bool]:
    """Return the wrapper or dataclass type ``hint`` names and whether it admits ``None``.

    ``X | None`` and ``Optional[X]`` unwrap to ``X``. Any other type yields
    ``None`` and the member is passed through as decoded.
    """
    if isinstance(hint, (str, typing.ForwardRef)):
        raise DecodingFailure(
            f"unresolved annotation {hint!r} on {cls.__name__}.{name}",
            details={"type": cls.__name__, "field": name},
        )
    if typing.get_origin(hint) in (typing.Union, types.UnionType):
        args = typing.get_args(hint)
        members = [arg for arg in args if arg is not type(None)]
        decodable = [arg for arg in members if _decodable(arg)]
        if not decodable:
            return None, False
        if len(members) > 1:
            raise DecodingFailure(
                f"ambiguous annotation {hint!r} on {cls.__name__}.{name}",
                details={"type": cls.__name__, "field": name},
            )
        return decodable[0], len(members) < len(args)
    if _decodable(hint):
        return hint, False
    return None, False


def _decode_into(cls: type[Any], obj: Any) -> Any:
    if not isinstance(obj, dict):
        raise DecodingFailure(
            f"expected a JSON object for {cls.__name__}, got {type(obj).__name__}",
            details={"type": cls.__name__},
        )

    hints = _resolve_hints(cls)
    kwargs: dict[str, Any] = {}
    for field in dataclasses.fields(cls):
        if not field.init or field.name not in obj:
            continue
        member = obj[field.name]
        target, optional = _target_type(cls, field.name, hints.get(field.name))
        if target is None:
            kwargs[field.name] = member
        elif issubclass(target, Nullable):
            # Optional[wrapper] still yields a wrapper; null decodes to absent.
            wrapper = target()
            unmarshal_json(wrapper, json.dumps(member, separators=(",", ":")))
            kwargs[field.name] = wrapper
        elif member is None and optional:
            kwargs[field.name] = None
        else:
            kwargs[field.name] = _decode_into(target, member)
    return cls(**kwargs)


def loads[T](data: bytes | str, into: type[T]) -> T:
    """Decode a JSON object into the dataclass ``into``.

    Args:
        data: JSON text holding an object.
        into: Dataclass type whose fields may be nullable wrappers.

    Returns:
        T: A new ``into`` instance.

    Raises:
        TypeError: If ``into`` is not a dataclass.
        DecodingFailure: If ``data`` is not JSON, not an object, or a wrapper
            member does not decode, or a field annotation cannot be resolved.
    """
    if not (isinstance(into, type) and dataclasses.is_dataclass(into)):
        raise TypeError(f"{into!r} is not a dataclass type")

    try:
        obj = json.loads(data)
    except ValueError as exc:
        raise DecodingFailure(f"invalid JSON: {exc}", details={"type": into.__name__}) from exc

    try:
        return _decode_into(into, obj)
    except DecodingFailure as exc:
        log_failure(
            _log, "json_records.decode_failed", exc, level=logging.DEBUG, type=into.__name__
        )
        raise
