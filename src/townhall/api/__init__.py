# src/townhall/api/__init__.py
"""HTTP API surface."""

from .endpoints import (
    auth_router,
    comments_router,
    forum_router,
    github_stats_router,
    system_router,
    votes_router,
)

__all__ = [
    "auth_router",
    "comments_router",
    "forum_router",
    "github_stats_router",
    "system_router",
    "votes_router",
]
