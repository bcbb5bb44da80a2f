# tests/integration/database/test_sqlalchemy_roundtrip.py
from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from sqlalchemy import Engine, select, text, update
from sqlalchemy.orm import Session

from nihil.config.settings import Settings
from nihil.domain.exceptions import UnsupportedStorageRepresentation
from nihil.domain.values import (
    NilBool,
    NilByte,
    NilFloat64,
    NilInt16,
    NilInt32,
    NilInt64,
    NilString,
    NilTime,
)
from nihil.infrastructure.database.models.base import Base
from nihil.infrastructure.database.models.user import User
from nihil.infrastructure.database.session import (
    dispose_engine,
    get_sessionmaker,
    init_engine_and_sessionmaker,
    session_scope,
)


def _full_user() -> User:
    return User(
        name=NilString.make("John Doe"),
        email=NilString.make("john@example.com"),
        age=NilInt32.make(30),
        score=NilFloat64.make(95.5),
        is_active=NilBool.make(False),
        level=NilByte.make(255),
        rank=NilInt16.make(-32768),
        points=NilInt64.make(2**63 - 1),
        last_login_at=NilTime.make(datetime(2023, 10, 15, 14, 30, 0, 123456, tzinfo=UTC)),
    )


def test_present_values_round_trip(engine: Engine) -> None:
    """Every column kind comes back present and equal."""
    with Session(engine) as session:
        session.add(_full_user())
        session.commit()

    with Session(engine) as session:
        user = session.scalars(select(User)).one()
        assert user.name == NilString.make("John Doe")
        assert user.email == NilString.make("john@example.com")
        assert user.age == NilInt32.make(30)
        assert user.score == NilFloat64.make(95.5)
        assert user.is_active == NilBool.make(False)
        assert user.level == NilByte.make(255)
        assert user.rank == NilInt16.make(-32768)
        assert user.points == NilInt64.make(2**63 - 1)
        assert user.last_login_at == NilTime.make(
            datetime(2023, 10, 15, 14, 30, 0, 123456, tzinfo=UTC)
        )


def test_null_columns_load_as_absent_wrappers(engine: Engine) -> None:
    with Session(engine) as session:
        session.add(
            User(
                name=NilString.make("Jane Smith"),
                email=NilString.make_null(),
                age=NilInt32.make_null(),
                score=NilFloat64.make_null(),
            )
        )
        session.commit()

    with Session(engine) as session:
        user = session.scalars(select(User)).one()
        for wrapper in (
            user.email,
            user.age,
            user.score,
            user.is_active,
            user.level,
            user.rank,
            user.points,
            user.last_login_at,
        ):
            assert wrapper is not None
            assert wrapper.is_present() is False
        assert user.to_dict()["age"] is None
        assert user.to_dict()["name"] == "Jane Smith"


def test_offset_timestamps_are_stored_as_utc(engine: Engine) -> None:
    local = datetime(2023, 10, 15, 16, 30, tzinfo=timezone(timedelta(hours=2)))
    with Session(engine) as session:
        session.add(User(name=NilString.make("Tz"), last_login_at=NilTime.make(local)))
        session.commit()

    with Session(engine) as session:
        user = session.scalars(select(User)).one()
        assert user.last_login_at.value == local
        assert user.last_login_at.value.utcoffset() == timedelta(0)


def test_filters_accept_wrappers_and_primitives(session: Session) -> None:
    session.add_all(
        [
            User(name=NilString.make("A"), age=NilInt32.make(30)),
            User(name=NilString.make("B"), age=NilInt32.make_null()),
            User(name=NilString.make("C"), age=NilInt32.make(41)),
        ]
    )
    session.commit()

    by_wrapper = session.scalars(select(User).where(User.age == NilInt32.make(30))).all()
    assert [u.name.value for u in by_wrapper] == ["A"]

    by_primitive = session.scalars(select(User).where(User.age > 35)).all()
    assert [u.name.value for u in by_primitive] == ["C"]

    missing = session.scalars(select(User).where(User.age.is_(None))).all()
    assert [u.name.value for u in missing] == ["B"]


def test_update_to_absent_writes_null(session: Session) -> None:
    session.add(_full_user())
    session.commit()

    session.execute(update(User).values(score=NilFloat64.make_null()))
    session.commit()

    raw = session.execute(text("SELECT score FROM users")).scalar_one()
    assert raw is None
    session.expire_all()
    assert session.scalars(select(User)).one().score == NilFloat64.make_null()


def test_unscannable_column_value_raises(session: Session) -> None:
    session.execute(
        text(
            "INSERT INTO users (name, age, created_at) "
            "VALUES ('x', 'abc', '2023-10-15 00:00:00')"
        )
    )
    session.commit()

    with pytest.raises(UnsupportedStorageRepresentation):
        session.scalars(select(User)).all()


def test_session_scope_commits_and_rolls_back() -> None:
    engine = init_engine_and_sessionmaker(Settings(database_url="sqlite+pysqlite:///:memory:"))
    try:
        assert init_engine_and_sessionmaker(Settings()) is engine
        Base.metadata.create_all(engine)

        with session_scope() as session:
            session.add(User(name=NilString.make("kept")))

        with pytest.raises(RuntimeError):
            with session_scope() as session:
                session.add(User(name=NilString.make("dropped")))
                session.flush()
                raise RuntimeError("boom")

        with session_scope() as session:
            names = [u.name.value for u in session.scalars(select(User))]
        assert names == ["kept"]
    finally:
        dispose_engine()

    with pytest.raises(RuntimeError):
        get_sessionmaker()
