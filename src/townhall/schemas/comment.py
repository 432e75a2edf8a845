# src/townhall/schemas/comment.py
"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from .user import UserResponse


class CommentCreate(BaseModel):
    """Schema for creating a new comment."""

    post_slug: str = Field(..., min_length=1, description="Slug of the commented blog post")
    body: str = Field(..., description="Comment text; unsafe markup is stripped")


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: int
    post_slug: str
    user: UserResponse
    body: str
    created_at: datetime
    vote_count: int = 0
