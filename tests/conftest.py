# tests/conftest.py
from __future__ import annotations

from collections.abc import Generator

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session

from nihil.config.settings import get_settings
from nihil.infrastructure.database.models.base import Base
from nihil.infrastructure.database.models.user import User  # noqa: F401
from nihil.infrastructure.database.session import dispose_engine


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Give every test a fresh settings cache and no global engine."""
    monkeypatch.delenv("NIHIL_DATABASE_URL", raising=False)
    monkeypatch.delenv("NIHIL_ECHO_SQL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    dispose_engine()


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with the nihil tables created."""
    eng = create_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture()
def session(engine: Engine) -> Generator[Session, None, None]:
    """Session bound to the in-memory engine."""
    with Session(engine, expire_on_commit=False) as s:
        yield s
