# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Generic JSON marshal/unmarshal (Domain Layer).

Purpose:
    The two algorithms every wrapper delegates to. Null handling lives here
    and nowhere else.

Design:
    * Absent marshals to the literal ``null``.
    * Unmarshal short-circuits on the exact four bytes ``null``. The check is
      a byte comparison, so ``" null"`` is not recognized as absent: it reaches
      the decoder and fails as a decode error.
    * JSON constants ``NaN``/``Infinity``/``-Infinity`` are rejected.
    * A failed unmarshal does not roll the wrapper back.

Layer:
    domain
"""

from __future__ import annotations

import json
from typing import Any

from nihil.domain.contract import NullableValue
from nihil.domain.exceptions import DecodingFailure, EncodingFailure

__all__ = ["NULL_LITERAL", "marshal_json", "unmarshal_json"]

NULL_LITERAL = b"null"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"JSON constant {name} is not allowed")


def marshal_json(n: NullableValue[Any]) -> bytes:
    """Return the JSON encoding of a nullable wrapper.

    Args:
        n: Any wrapper satisfying the nullable contract.

    Returns:
        bytes: ``b"null"`` when absent, else the value's JSON text as UTF-8.

    Raises:
        EncodingFailure: If the value cannot be encoded.
    """
    if not n.is_present():
        return NULL_LITERAL

    try:
        return n.kind.to_json(n.get_value()).encode("utf-8")
    except EncodingFailure:
        raise
    except (TypeError, ValueError, OverflowError) as exc:
        raise EncodingFailure(
            f"cannot encode {n.kind.name} value: {exc}",
            details={"kind": n.kind.name},
        ) from exc


def unmarshal_json(n: NullableValue[Any], data: bytes | bytearray | memoryview | str) -> None:
    """Populate a nullable wrapper from JSON.

    Args:
        n: Target wrapper, mutated in place.
        data: JSON text.

    Raises:
        DecodingFailure: If ``data`` is neither ``null`` nor a valid encoding
            of the wrapper's kind. The wrapper is left as it was at the point
            of failure.
    """
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    if raw == NULL_LITERAL:
        n.set_presence(False)
        return

    try:
        decoded = n.kind.from_json(json.loads(raw, parse_constant=_reject_constant))
    except (TypeError, ValueError) as exc:
        raise DecodingFailure(
            f"cannot decode {n.kind.name}: {exc}",
            details={"kind": n.kind.name},
        ) from exc

    n.set_value(decoded)
    n.set_presence(True)
