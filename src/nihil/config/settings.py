# src/nihil/config/settings.py
# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Nihil Configuration (Pydantic Settings, v2)

Summary:
    Typed configuration for the parts of nihil that touch the outside world:
    the demo database connection used by the CLI and the log level. The
    nullable core itself reads no configuration.

Design:
    - Pydantic v2 BaseSettings with `extra='forbid'` to catch unknown keys.
    - Explicit field declarations with env aliases.
    - Singleton accessor `get_settings()` with LRU cache.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Typed configuration for nihil tooling."""

    database_url: str = Field(
        default="sqlite+pysqlite:///:memory:",
        description="Synchronous SQLAlchemy URL used by the CLI demo.",
        validation_alias="NIHIL_DATABASE_URL",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level for the CLI.",
        validation_alias="LOG_LEVEL",
    )

    echo_sql: bool = Field(
        default=False,
        description="Echo emitted SQL through the SQLAlchemy engine logger.",
        validation_alias="NIHIL_ECHO_SQL",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        """Upper-case and validate the log level name."""
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance.

    Returns:
        Settings: Validated settings.

    Raises:
        RuntimeError: If configuration is invalid.
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid nihil configuration: {exc}") from exc

    logger.debug(
        "Settings initialized",
        extra={
            "fields": {
                "database_backend": settings.database_url.split(":", 1)[0],
                "log_level": settings.log_level,
                "echo_sql": settings.echo_sql,
            }
        },
    )
    return settings
