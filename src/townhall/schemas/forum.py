"""Forum-related Pydantic schemas."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .user import UserResponse

ItemT = TypeVar("ItemT")


class CategoryResponse(BaseModel):
    """Schema for category information returned by the API."""

    id: int
    name: str
    slug: str
    description: str

    model_config = ConfigDict(from_attributes=True)


class ThreadCreate(BaseModel):
    """Schema for starting a new thread."""

    category_slug: str
    title: str
    body: str


class ThreadResponse(BaseModel):
    """Thread summary with its author and number of replies."""

    id: int
    category_id: int
    user: UserResponse
    title: str
    body: str
    created_at: datetime
    reply_count: int = 0


class ReplyCreate(BaseModel):
    """Schema for replying to a thread."""

    body: str


class ReplyResponse(BaseModel):
    """Reply with its author and aggregate vote score."""

    id: int
    thread_id: int
    user: UserResponse
    body: str
    created_at: datetime
    vote_count: int = 0


class ThreadDetail(BaseModel):
    """A thread together with all of its replies, oldest first."""

    thread: ThreadResponse
    replies: list[ReplyResponse]


class Paginated(BaseModel, Generic[ItemT]):
    """One fixed-size page of a listing."""

    items: list[ItemT]
    total: int = Field(..., description="Number of items across all pages")
    page: int = Field(..., description="1-based page number actually served")
    per_page: int
