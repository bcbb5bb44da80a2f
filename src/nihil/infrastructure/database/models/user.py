"""User model used by the CLI demo and the integration tests.

Every nullable kind appears once, so a round trip through a real database
exercises each column type.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

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
from nihil.infrastructure.database.models.base import Base, SerializationMixin, now_utc
from nihil.infrastructure.database.types import NilStringType, NilTimeType


class User(SerializationMixin, Base):
    """A user whose profile fields may each be unknown."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[NilString] = mapped_column(NilStringType(100), nullable=False)
    email: Mapped[NilString] = mapped_column(NilStringType(255), nullable=True, unique=True)
    age: Mapped[NilInt32] = mapped_column(nullable=True)
    score: Mapped[NilFloat64] = mapped_column(nullable=True)
    is_active: Mapped[NilBool] = mapped_column(nullable=True)
    level: Mapped[NilByte] = mapped_column(nullable=True)
    rank: Mapped[NilInt16] = mapped_column(nullable=True)
    points: Mapped[NilInt64] = mapped_column(nullable=True)
    last_login_at: Mapped[NilTime] = mapped_column(NilTimeType(precision=6), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
    )
