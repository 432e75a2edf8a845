# src/townhall/models/vote.py
"""Models capturing up/down votes on comments, replies and posts."""

from datetime import datetime
from typing import Final

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from townhall.db.session import Base
from townhall.db.time import utcnow

TARGET_COMMENT: Final[str] = "comment"
TARGET_REPLY: Final[str] = "reply"
TARGET_POST: Final[str] = "post"

UPVOTE: Final[int] = 1
DOWNVOTE: Final[int] = -1


class Vote(Base):
    """Per-user signed vote on an arbitrary target.

    The target is addressed by ``(target_type, target_id)`` without a foreign
    key, so voting stays independent of the content lifecycle.
    """

    __tablename__ = "votes"
    __table_args__ = (
        # One live vote per user and target.
        UniqueConstraint("user_id", "target_type", "target_id", name="uq_votes_user_target"),
        CheckConstraint("value IN (1, -1)", name="ck_votes_value"),
        Index("ix_votes_target", "target_type", "target_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )
    target_type: Mapped[str] = mapped_column(Text, nullable=False)
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)

    # 1 = upvote, -1 = downvote.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
