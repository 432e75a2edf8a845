# src/townhall/api/endpoints/votes.py
"""Vote endpoints shared by comments, replies and posts."""

from typing import Annotated

from fastapi import APIRouter, Query

from townhall.api.dependencies import CurrentUserDep, OptionalUserIdDep, SessionDep
from townhall.schemas.common import SQL_INT_MAX, SQL_INT_MIN
from townhall.schemas.vote import VoteCreate, VoteResponse
from townhall.services import votes as vote_service

router = APIRouter(prefix="/votes", tags=["votes"])


@router.get("", response_model=VoteResponse, response_model_exclude_none=True)
def get_votes(
    db: SessionDep,
    user_id: OptionalUserIdDep,
    target_type: Annotated[str, Query(alias="type", min_length=1)],
    target_id: Annotated[int, Query(alias="id", ge=SQL_INT_MIN, le=SQL_INT_MAX)],
) -> VoteResponse:
    """Return a target's score and, for signed-in callers, their own vote."""
    return vote_service.get_votes(db, target_type, target_id, user_id)


@router.post("", response_model=VoteResponse, response_model_exclude_none=True)
def cast_vote(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResponse:
    """Cast, flip or withdraw a vote.

    Repeating the current vote withdraws it; voting the other way flips it.
    """
    result = vote_service.cast_vote(
        db,
        current_user.id,
        vote_data.target_type,
        vote_data.target_id,
        vote_data.value,
    )
    return result.to_response()
