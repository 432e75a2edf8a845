# src/townhall/models/comment.py
"""Models for comments attached to blog posts."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from townhall.db.session import Base
from townhall.db.time import utcnow


class Comment(Base):
    """Comment left under an external blog post.

    Posts live outside this service and are addressed only by their slug.
    The body is stored already sanitized and is never edited.
    """

    __tablename__ = "comments"
    __table_args__ = (Index("ix_comments_post_slug", "post_slug"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_slug: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
