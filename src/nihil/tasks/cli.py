# Copyright (c) Nihil.
# SPDX-License-Identifier: MIT
"""Nihil CLI: inspect and exercise nullable values.

Commands:
    demo           Store users with missing fields in a database and print them as JSON.
    column-types   Print logical and physical column types for a backend.
    encode         Build a wrapper from command-line text and print its JSON.
    decode         Decode JSON text into a wrapper and print its state.

Environment:
    NIHIL_DATABASE_URL   Synchronous SQLAlchemy URL (default: in-memory SQLite).
    LOG_LEVEL            Root log level.
"""

from __future__ import annotations

from datetime import UTC, datetime

import typer
from sqlalchemy import select, update

from nihil.config.settings import Settings, get_settings
from nihil.domain.exceptions import NihilError
from nihil.domain.schema import BACKENDS
from nihil.domain.values import (
    WRAPPERS,
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
from nihil.infrastructure.database.models.base import Base
from nihil.infrastructure.database.models.user import User
from nihil.infrastructure.database.session import (
    dispose_engine,
    init_engine_and_sessionmaker,
    session_scope,
)
from nihil.infrastructure.logging.logger import (
    FIELDS_ATTR,
    configure_root_logging,
    get_json_logger,
    log_failure,
)
from nihil.infrastructure.serialization.json_records import dumps

log = get_json_logger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main() -> None:
    """Nullable values for SQL and JSON."""
    configure_root_logging(get_settings().log_level)


def _wrapper_for(kind: str) -> type[Nullable[object]]:
    try:
        return WRAPPERS[kind]
    except KeyError:
        raise typer.BadParameter(
            f"unknown kind {kind!r}; choose from {', '.join(WRAPPERS)}",
            param_hint="KIND",
        ) from None


def _describe(value: Nullable[object]) -> str:
    state = "present" if value.is_present() else "absent"
    return (
        f"{type(value).__name__} {state} "
        f"json={value.marshal_json().decode('utf-8')} "
        f"storage={value.to_storage_value()!r}"
    )


def _demo_users() -> list[User]:
    return [
        User(
            name=NilString.make("Alice Johnson"),
            email=NilString.make("alice@example.com"),
            age=NilInt32.make(28),
            score=NilFloat64.make(95.5),
            is_active=NilBool.make(True),
            level=NilByte.make(5),
            rank=NilInt16.make(3),
            points=NilInt64.make(1500),
            last_login_at=NilTime.make(datetime.now(UTC)),
        ),
        User(
            name=NilString.make("Bob Smith"),
            email=NilString.make_null(),
            age=NilInt32.make_null(),
            score=NilFloat64.make(88.0),
            is_active=NilBool.make_null(),
            level=NilByte.make_null(),
            rank=NilInt16.make_null(),
            points=NilInt64.make(500),
            last_login_at=NilTime.make_null(),
        ),
        User(
            name=NilString.make("Charlie Brown"),
            email=NilString.make("charlie@example.com"),
            age=NilInt32.make(35),
            score=NilFloat64.make_null(),
            is_active=NilBool.make(False),
            level=NilByte.make(1),
            rank=NilInt16.make(12),
            points=NilInt64.make_null(),
            last_login_at=NilTime.make_null(),
        ),
    ]


def _user_json(user: User) -> str:
    record = {column.key: getattr(user, column.key) for column in User.__table__.columns}
    return dumps(record).decode("utf-8")


@app.command("demo")
def demo(
    database_url: str | None = typer.Option(
        None, envvar="NIHIL_DATABASE_URL", help="Synchronous SQLAlchemy URL."
    ),  # noqa: B008
) -> None:
    """Round-trip users with missing fields through a database."""
    settings = get_settings()
    if database_url:
        settings = Settings(database_url=database_url, log_level=settings.log_level)

    engine = init_engine_and_sessionmaker(settings)
    try:
        Base.metadata.create_all(engine)

        with session_scope() as session:
            users = _demo_users()
            session.add_all(users)
            session.flush()
            log.info("demo.users_created", extra={FIELDS_ATTR: {"count": len(users)}})

        with session_scope() as session:
            typer.echo("=== All users ===")
            for user in session.scalars(select(User).order_by(User.id)):
                typer.echo(_user_json(user))

            typer.echo("=== Users with email ===")
            for user in session.scalars(select(User).where(User.email.is_not(None))):
                typer.echo(f"{user.id}: {user.name.value} <{user.email.value}>")

            typer.echo("=== Users without age ===")
            for user in session.scalars(select(User).where(User.age.is_(None))):
                typer.echo(f"{user.id}: {user.name.value} age=null")

            session.execute(
                update(User).where(User.id == 1).values(score=NilFloat64.make_null())
            )

        with session_scope() as session:
            first = session.get(User, 1)
            if first is not None:
                typer.echo("=== After clearing score of user 1 ===")
                typer.echo(_user_json(first))
    finally:
        dispose_engine()


@app.command("column-types")
def column_types(
    dialect: str = typer.Option(
        "sqlite", help=f"Backend: {', '.join(BACKENDS)}; anything else uses defaults."
    ),  # noqa: B008
    size: int | None = typer.Option(None, min=1, help="Text column size."),  # noqa: B008
    precision: int | None = typer.Option(
        None, min=0, max=9, help="Timestamp fractional-second precision."
    ),  # noqa: B008
) -> None:
    """Print the logical and physical column type of each kind."""
    for kind, wrapper in WRAPPERS.items():
        physical = wrapper.db_data_type(dialect, size=size, precision=precision)
        typer.echo(f"{kind:<8} {wrapper.data_type():<9} {physical}")


@app.command("encode")
def encode(
    kind: str = typer.Argument(..., help="Primitive kind, e.g. int32."),  # noqa: B008
    value: str | None = typer.Argument(None, help="Value as text; omit with --null."),  # noqa: B008
    null: bool = typer.Option(False, "--null", help="Encode an absent value."),  # noqa: B008
) -> None:
    """Build a wrapper from text (as a driver would hand it over) and print its JSON."""
    wrapper = _wrapper_for(kind)
    try:
        if null or value is None:
            target = wrapper.make_null()
        else:
            target = wrapper()
            target.scan(value)
        typer.echo(target.marshal_json().decode("utf-8"))
    except NihilError as exc:
        log_failure(log, "encode.failed", exc, kind=kind)
        raise typer.Exit(code=1) from exc


@app.command("decode")
def decode(
    kind: str = typer.Argument(..., help="Primitive kind, e.g. time."),  # noqa: B008
    data: str = typer.Argument(..., help="JSON text, e.g. null or 42."),  # noqa: B008
) -> None:
    """Decode JSON text into a wrapper and print its state."""
    target = _wrapper_for(kind)()
    try:
        target.unmarshal_json(data)
    except NihilError as exc:
        log_failure(log, "decode.failed", exc, kind=kind)
        raise typer.Exit(code=1) from exc
    typer.echo(_describe(target))


if __name__ == "__main__":
    app()
