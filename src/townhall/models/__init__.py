# src/townhall/models/__init__.py
"""SQLAlchemy models for the Townhall application."""

from .comment import Comment
from .forum import Category, Reply, Thread
from .user import User
from .vote import Vote

__all__ = [
    "Comment",
    "Category", "Reply", "Thread",
    "User",
    "Vote",
]
