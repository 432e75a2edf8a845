# src/townhall/api/endpoints/__init__.py
"""API endpoint modules."""

from .auth import router as auth_router
from .comments import router as comments_router
from .forum import router as forum_router
from .github_stats import router as github_stats_router
from .system import router as system_router
from .votes import router as votes_router

__all__ = [
    "auth_router",
    "comments_router",
    "forum_router",
    "github_stats_router",
    "system_router",
    "votes_router",
]
