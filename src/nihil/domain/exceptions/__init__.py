"""Exceptions raised by the nullable core."""

from __future__ import annotations

from .base import NihilError
from .nullable import DecodingFailure, EncodingFailure, UnsupportedStorageRepresentation

__all__ = [
    "DecodingFailure",
    "EncodingFailure",
    "NihilError",
    "UnsupportedStorageRepresentation",
]
