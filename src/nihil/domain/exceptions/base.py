# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""
Base Domain Exceptions.

Summary:
    Canonical base class for every error raised by the nullable core, so callers
    can catch one type and still branch on a stable ``code``.

Layer:
    domain/exceptions
"""
from __future__ import annotations

from typing import Any


class NihilError(Exception):
    """Base class for all nihil exceptions."""

    code: str = "NIHIL_ERROR"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}
