# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""SQLAlchemy engine/session factory.

This module owns a process-global synchronous engine and `sessionmaker` used
by the CLI demo and the integration tests.

Lifecycle:
    * Call `init_engine_and_sessionmaker(settings)` once.
    * Use `session_scope()` for a unit of work.
    * Call `dispose_engine()` when done.

Notes:
    * Everything in nihil is synchronous, so there is no async engine here.
    * `init_engine_and_sessionmaker` is idempotent; `dispose_engine` resets it.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from nihil.config.settings import Settings, get_settings

_engine: Engine | None = None
_sessionmaker: sessionmaker[Session] | None = None


def init_engine_and_sessionmaker(settings: Settings) -> Engine:
    """Initialize the global engine and sessionmaker.

    Args:
        settings: Settings providing `database_url` and `echo_sql`.

    Returns:
        Engine: The (possibly already existing) global engine.

    Raises:
        ValueError: If `database_url` is empty.
    """
    global _engine, _sessionmaker

    if not settings.database_url:
        raise ValueError("database_url must be configured")
    if _engine is not None:
        return _engine

    _engine = create_engine(settings.database_url, echo=settings.echo_sql)
    _sessionmaker = sessionmaker(bind=_engine, expire_on_commit=False)
    return _engine


def dispose_engine() -> None:
    """Dispose the global engine and forget the sessionmaker."""
    global _engine, _sessionmaker
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _sessionmaker = None


def get_sessionmaker() -> sessionmaker[Session]:
    """Return the initialized sessionmaker.

    Raises:
        RuntimeError: If the sessionmaker is not yet initialized.
    """
    if _sessionmaker is None:
        raise RuntimeError("DB sessionmaker not initialized (call init_engine_and_sessionmaker)")
    return _sessionmaker


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Yield a session that commits on success and rolls back on error.

    Lazily initializes the engine from `get_settings()` when needed.
    """
    if _sessionmaker is None:
        init_engine_and_sessionmaker(get_settings())

    session = get_sessionmaker()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
