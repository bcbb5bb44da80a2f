# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""
Nullable Value Exceptions

Purpose:
    Error conditions raised while moving a nullable value across the JSON or
    the storage-driver boundary. Each carries the underlying error as
    ``__cause__``.

Layer: domain/exceptions
"""
from __future__ import annotations

from .base import NihilError


class DecodingFailure(NihilError, ValueError):
    """JSON input is neither ``null`` nor a valid encoding of the target kind."""

    code = "DECODING_FAILURE"


class EncodingFailure(NihilError, ValueError):
    """The encoder rejected a present value (e.g. NaN or Infinity)."""

    code = "ENCODING_FAILURE"


class UnsupportedStorageRepresentation(NihilError, TypeError):
    """A driver-supplied value cannot be converted to the wrapper's kind."""

    code = "UNSUPPORTED_STORAGE_REPRESENTATION"
