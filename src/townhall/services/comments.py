"""Comment listing, creation and deletion for blog posts."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from townhall.core.exceptions import NotFound
from townhall.models import Comment, User
from townhall.models.vote import TARGET_COMMENT
from townhall.schemas.comment import CommentResponse
from townhall.schemas.user import UserResponse
from townhall.services.sanitizer import require_text
from townhall.services.votes import vote_total_column

__all__ = ["list_comments", "create_comment", "delete_comment"]

logger = logging.getLogger(__name__)


def _comment_from_row(row: Row) -> CommentResponse:
    comment, author, vote_count = row
    return CommentResponse(
        id=comment.id,
        post_slug=comment.post_slug,
        user=UserResponse.model_validate(author),
        body=comment.body,
        created_at=comment.created_at,
        vote_count=int(vote_count or 0),
    )


def list_comments(db: Session, post_slug: str) -> list[CommentResponse]:
    """Return the comments on a post, oldest first, with authors and scores."""
    stmt = (
        select(Comment, User, vote_total_column(TARGET_COMMENT, Comment).label("vote_count"))
        .join(User, Comment.user_id == User.id)
        .where(Comment.post_slug == post_slug)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
    )
    return [_comment_from_row(row) for row in db.execute(stmt).all()]


def create_comment(db: Session, author: User, post_slug: str, raw_body: str) -> CommentResponse:
    """Sanitize and store a new comment.

    Raises:
        ValidationFailure: If the body is empty once unsafe markup is removed.
    """
    body = require_text(raw_body, "body")

    comment = Comment(post_slug=post_slug, user_id=author.id, body=body)
    db.add(comment)
    db.commit()
    db.refresh(comment)

    logger.info("User %s commented on %s (comment %s)", author.id, post_slug, comment.id)
    return CommentResponse(
        id=comment.id,
        post_slug=comment.post_slug,
        user=UserResponse.model_validate(author),
        body=comment.body,
        created_at=comment.created_at,
        vote_count=0,
    )


def delete_comment(db: Session, author: User, comment_id: int) -> None:
    """Delete one of the caller's own comments.

    A comment owned by someone else is reported exactly like a missing one.

    Raises:
        NotFound: If no comment with this id belongs to ``author``.
    """
    result = db.execute(
        delete(Comment).where(Comment.id == comment_id, Comment.user_id == author.id)
    )
    if result.rowcount == 0:
        raise NotFound("Comment not found")
    db.commit()
    logger.info("User %s deleted comment %s", author.id, comment_id)
