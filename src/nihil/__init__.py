"""Nullable values that round-trip through SQL drivers and JSON.

Each wrapper holds ``valid`` and ``value``. An absent wrapper is written as
JSON ``null`` and bound as SQL NULL; a present one as its plain value.

Example:
    >>> from nihil import NilInt32, NilString
    >>> NilString.make("John").marshal_json()
    b'"John"'
    >>> NilInt32.make_null().marshal_json()
    b'null'
"""

from __future__ import annotations

from nihil.domain.codec import marshal_json, unmarshal_json
from nihil.domain.contract import NullableValue
from nihil.domain.exceptions import (
    DecodingFailure,
    EncodingFailure,
    NihilError,
    UnsupportedStorageRepresentation,
)
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

__all__ = [
    "DecodingFailure",
    "EncodingFailure",
    "NihilError",
    "NilBool",
    "NilByte",
    "NilFloat64",
    "NilInt16",
    "NilInt32",
    "NilInt64",
    "NilString",
    "NilTime",
    "Nullable",
    "NullableValue",
    "UnsupportedStorageRepresentation",
    "marshal_json",
    "unmarshal_json",
]

__version__ = "0.1.0"
