"""Forum categories, threads and replies."""

from __future__ import annotations

import logging
from typing import Any, Final

from sqlalchemy import func, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import ScalarSelect

from townhall.core.exceptions import NotFound
from townhall.models import Category, Reply, Thread, User
from townhall.models.vote import TARGET_REPLY
from townhall.schemas.forum import (
    CategoryResponse,
    ReplyResponse,
    ThreadDetail,
    ThreadResponse,
)
from townhall.schemas.user import UserResponse
from townhall.services.pagination import PER_PAGE, Page, clamp_page, page_offset
from townhall.services.sanitizer import require_text
from townhall.services.votes import vote_total_column

logger = logging.getLogger(__name__)

# (id, name, slug, description)
DEFAULT_CATEGORIES: Final[tuple[tuple[int, str, str, str], ...]] = (
    (1, "General", "general", "General discussion"),
    (2, "Projects", "projects", "Discuss projects and ideas"),
    (3, "Help", "help", "Ask for help or advice"),
)


def _reply_count_column() -> ScalarSelect[Any]:
    """Return a correlated subquery counting the replies of each thread row."""
    return (
        select(func.count(Reply.id))
        .where(Reply.thread_id == Thread.id)
        .correlate(Thread)
        .scalar_subquery()
    )


def _thread_from_row(row: Row) -> ThreadResponse:
    thread, author, reply_count = row
    return ThreadResponse(
        id=thread.id,
        category_id=thread.category_id,
        user=UserResponse.model_validate(author),
        title=thread.title,
        body=thread.body,
        created_at=thread.created_at,
        reply_count=int(reply_count or 0),
    )


def _reply_from_row(row: Row) -> ReplyResponse:
    reply, author, vote_count = row
    return ReplyResponse(
        id=reply.id,
        thread_id=reply.thread_id,
        user=UserResponse.model_validate(author),
        body=reply.body,
        created_at=reply.created_at,
        vote_count=int(vote_count or 0),
    )


def _category_by_slug(db: Session, slug: str) -> Category:
    category = db.scalars(select(Category).where(Category.slug == slug)).first()
    if category is None:
        raise NotFound("Category not found")
    return category


def seed_categories(db: Session) -> int:
    """Insert the default categories that are not present yet.

    Returns:
        Number of categories inserted.
    """
    existing = set(db.scalars(select(Category.slug)).all())
    inserted = 0
    for category_id, name, slug, description in DEFAULT_CATEGORIES:
        if slug in existing:
            continue
        db.add(Category(id=category_id, name=name, slug=slug, description=description))
        inserted += 1
    if inserted:
        db.commit()
        logger.info("Seeded %d forum categories", inserted)
    return inserted


def list_categories(db: Session) -> list[CategoryResponse]:
    """Return every category ordered by id."""
    categories = db.scalars(select(Category).order_by(Category.id.asc())).all()
    return [CategoryResponse.model_validate(category) for category in categories]


def list_threads(db: Session, category_slug: str, page: int | None = None) -> Page[ThreadResponse]:
    """Return one page of a category's threads, newest first.

    Raises:
        NotFound: If the category does not exist.
    """
    category = _category_by_slug(db, category_slug)
    page = clamp_page(page)

    total = int(
        db.scalar(select(func.count(Thread.id)).where(Thread.category_id == category.id)) or 0
    )
    if page_offset(page) >= total:
        return Page(items=[], total=total, page=page)

    stmt = (
        select(Thread, User, _reply_count_column().label("reply_count"))
        .join(User, Thread.user_id == User.id)
        .where(Thread.category_id == category.id)
        .order_by(Thread.created_at.desc(), Thread.id.desc())
        .limit(PER_PAGE)
        .offset(page_offset(page))
    )
    items = [_thread_from_row(row) for row in db.execute(stmt).all()]
    return Page(items=items, total=total, page=page)


def create_thread(
    db: Session,
    author: User,
    category_slug: str,
    raw_title: str,
    raw_body: str,
) -> ThreadResponse:
    """Start a thread in an existing category.

    Raises:
        NotFound: If the category does not exist.
        ValidationFailure: If the title or body is empty after sanitizing.
    """
    category = _category_by_slug(db, category_slug)
    title = require_text(raw_title, "title")
    body = require_text(raw_body, "body")

    thread = Thread(category_id=category.id, user_id=author.id, title=title, body=body)
    db.add(thread)
    db.commit()
    db.refresh(thread)

    logger.info("User %s opened thread %s in %s", author.id, thread.id, category.slug)
    return ThreadResponse(
        id=thread.id,
        category_id=thread.category_id,
        user=UserResponse.model_validate(author),
        title=thread.title,
        body=thread.body,
        created_at=thread.created_at,
        reply_count=0,
    )


def get_thread(db: Session, thread_id: int) -> ThreadDetail:
    """Return a thread and all of its replies, oldest reply first.

    Raises:
        NotFound: If the thread does not exist.
    """
    row = db.execute(
        select(Thread, User, _reply_count_column().label("reply_count"))
        .join(User, Thread.user_id == User.id)
        .where(Thread.id == thread_id)
    ).first()
    if row is None:
        raise NotFound("Thread not found")

    replies = db.execute(
        select(Reply, User, vote_total_column(TARGET_REPLY, Reply).label("vote_count"))
        .join(User, Reply.user_id == User.id)
        .where(Reply.thread_id == thread_id)
        .order_by(Reply.created_at.asc(), Reply.id.asc())
    ).all()

    return ThreadDetail(
        thread=_thread_from_row(row),
        replies=[_reply_from_row(reply) for reply in replies],
    )


def create_reply(db: Session, author: User, thread_id: int, raw_body: str) -> ReplyResponse:
    """Reply to an existing thread.

    Raises:
        NotFound: If the thread does not exist. Nothing is written.
        ValidationFailure: If the body is empty after sanitizing.
    """
    if db.get(Thread, thread_id) is None:
        raise NotFound("Thread not found")
    body = require_text(raw_body, "body")

    reply = Reply(thread_id=thread_id, user_id=author.id, body=body)
    db.add(reply)
    db.commit()
    db.refresh(reply)

    logger.info("User %s replied to thread %s (reply %s)", author.id, thread_id, reply.id)
    return ReplyResponse(
        id=reply.id,
        thread_id=reply.thread_id,
        user=UserResponse.model_validate(author),
        body=reply.body,
        created_at=reply.created_at,
        vote_count=0,
    )
