"""Helpers for looking up and upserting GitHub-backed users."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from townhall.models.user import User

__all__ = ["get_user", "get_user_by_github_id", "upsert_github_user"]

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_by_github_id(db: Session, github_id: int) -> User | None:
    """Return the user linked to a GitHub account, if any."""
    return db.scalars(select(User).where(User.github_id == github_id)).first()


def _apply_profile(db: Session, github_id: int, username: str, avatar_url: str) -> User:
    user = get_user_by_github_id(db, github_id)
    if user is None:
        user = User(github_id=github_id, username=username, avatar_url=avatar_url)
        db.add(user)
    else:
        user.username = username
        user.avatar_url = avatar_url
    db.commit()
    db.refresh(user)
    return user


def upsert_github_user(db: Session, github_id: int, username: str, avatar_url: str) -> User:
    """Create the user for a GitHub account or refresh its profile fields.

    Two first logins racing on the same account end with one row: the loser
    of the insert sees the unique constraint fail and updates the winner's row.
    """
    try:
        user = _apply_profile(db, github_id, username, avatar_url)
    except IntegrityError:
        db.rollback()
        user = _apply_profile(db, github_id, username, avatar_url)

    logger.info("Signed in GitHub user %s as user %s (%s)", github_id, user.id, username)
    return user
