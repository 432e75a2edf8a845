# src/townhall/schemas/vote.py
"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field

from .common import SQL_INT_MAX, SQL_INT_MIN


class VoteCreate(BaseModel):
    """Schema for casting a vote.

    ``value`` is range-checked by the vote ledger rather than here so that an
    out-of-range value is reported as a 400 instead of a schema error.
    """

    target_type: str = Field(..., min_length=1, description="comment, reply or post")
    target_id: int = Field(..., ge=SQL_INT_MIN, le=SQL_INT_MAX)
    value: int = Field(..., description="1 for upvote, -1 for downvote")


class VoteResponse(BaseModel):
    """Aggregate score plus the caller's own vote, when there is one."""

    vote_count: int = 0
    user_vote: int | None = None
