# src/townhall/models/user.py
"""SQLAlchemy model for users signed in through GitHub."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from townhall.db.session import Base
from townhall.db.time import utcnow


class User(Base):
    """Local identity keyed by the GitHub account id.

    Rows are upserted on every successful login so that username and avatar
    follow the GitHub profile. Users are never deleted.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    github_id: Mapped[int] = mapped_column(BigInteger, unique=True, nullable=False)
    username: Mapped[str] = mapped_column(Text, nullable=False)
    avatar_url: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
