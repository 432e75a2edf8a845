"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse
from .forum import (
    CategoryResponse,
    Paginated,
    ReplyCreate,
    ReplyResponse,
    ThreadCreate,
    ThreadDetail,
    ThreadResponse,
)
from .github_stats import GitHubStats
from .user import UserResponse
from .vote import VoteCreate, VoteResponse

__all__ = [
    "CommentCreate", "CommentResponse",
    "CategoryResponse", "Paginated", "ReplyCreate", "ReplyResponse",
    "ThreadCreate", "ThreadDetail", "ThreadResponse",
    "GitHubStats",
    "UserResponse",
    "VoteCreate", "VoteResponse",
]
