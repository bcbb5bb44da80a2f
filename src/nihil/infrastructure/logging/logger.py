# src/nihil/infrastructure/logging/logger.py
# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Structured JSON logging for nihil tooling.

One JSON object per line, with stable keys ``ts``, ``level``, ``logger`` and
``event``. Failures of the nullable core are logged through
:func:`log_failure`, which lifts the error's ``code`` and its ``details``
(``kind``, ``source_type``, ...) to top-level keys so log lines can be
filtered on them directly.

Typical usage:
    configure_root_logging(settings.log_level)
    log = get_json_logger(__name__)
    log_failure(log, "decode.failed", exc, kind="int32")
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from nihil.domain.rfc3339 import format_rfc3339

__all__ = [
    "FIELDS_ATTR",
    "configure_root_logging",
    "failure_fields",
    "get_json_logger",
    "log_failure",
]

#: Record attribute holding structured fields.
FIELDS_ATTR = "fields"


def failure_fields(exc: BaseException) -> dict[str, Any]:
    """Return the structured fields of an exception.

    ``NihilError`` contributes ``code`` and every entry of ``details``; any
    exception contributes ``error_type`` and ``error``.
    """
    fields: dict[str, Any] = {"error_type": type(exc).__name__, "error": str(exc)}
    code = getattr(exc, "code", None)
    if isinstance(code, str):
        fields["code"] = code
    details = getattr(exc, "details", None)
    if isinstance(details, dict):
        for key, value in details.items():
            fields.setdefault(key, value)
    return fields


class _JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": format_rfc3339(datetime.fromtimestamp(record.created, tz=UTC)),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }

        if record.exc_info and record.exc_info[1] is not None:
            for key, value in failure_fields(record.exc_info[1]).items():
                payload.setdefault(key, value)

        fields = getattr(record, FIELDS_ATTR, None)
        if isinstance(fields, dict):
            payload.update(fields)

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=repr)


def configure_root_logging(level: str | int = "INFO") -> None:
    """Set the root level and install the JSON handler once.

    Args:
        level: Level number or name (case-insensitive).
    """
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)

    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(_JsonFormatter())
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``; output goes through the root JSON handler."""
    return logging.getLogger(name)


def log_failure(
    logger: logging.Logger,
    event: str,
    exc: BaseException,
    *,
    level: int = logging.ERROR,
    **context: Any,
) -> None:
    """Log a failure with the exception's code and details as top-level fields.

    Args:
        logger: Target logger.
        event: Event name, e.g. ``"decode.failed"``.
        exc: The exception being reported.
        level: Log level.
        **context: Extra fields; they win over fields taken from ``exc``.
    """
    if not logger.isEnabledFor(level):
        return
    fields = failure_fields(exc)
    fields.update(context)
    logger.log(level, event, extra={FIELDS_ATTR: fields})
