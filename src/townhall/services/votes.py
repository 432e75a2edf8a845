"""Vote ledger: casting, toggling and aggregating signed votes.

Every (user, target_type, target_id) holds at most one vote. Casting the same
direction twice removes the vote, casting the other direction flips it in
place. Aggregates are always summed from the ledger, never cached on the
voted content.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Final

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import ScalarSelect

from townhall.core.exceptions import ValidationFailure
from townhall.models import Vote
from townhall.models.vote import DOWNVOTE, UPVOTE
from townhall.schemas.vote import VoteResponse

logger = logging.getLogger(__name__)

VALID_VOTE_VALUES: Final[frozenset[int]] = frozenset({UPVOTE, DOWNVOTE})

# A lost insert race is re-run once against the committed row.
_MAX_ATTEMPTS: Final[int] = 2


class VoteOutcome(str, enum.Enum):
    """What a cast did to the caller's vote."""

    INSERTED = "inserted"
    SWITCHED = "switched"
    REMOVED = "removed"


@dataclass(frozen=True)
class VoteResult:
    """Outcome of a cast together with the refreshed aggregate."""

    outcome: VoteOutcome
    vote_count: int
    user_vote: int | None

    def to_response(self) -> VoteResponse:
        """Return the API representation of this result."""
        return VoteResponse(vote_count=self.vote_count, user_vote=self.user_vote)


def vote_total_column(target_type: str, entity: Any) -> ScalarSelect[Any]:
    """Return a correlated subquery summing the votes on each ``entity`` row."""
    return (
        select(func.coalesce(func.sum(Vote.value), 0))
        .where(Vote.target_type == target_type, Vote.target_id == entity.id)
        .correlate(entity)
        .scalar_subquery()
    )


def vote_total(db: Session, target_type: str, target_id: int) -> int:
    """Return the sum of all live votes on a target, 0 when there are none."""
    total = db.scalar(
        select(func.coalesce(func.sum(Vote.value), 0)).where(
            Vote.target_type == target_type,
            Vote.target_id == target_id,
        )
    )
    return int(total or 0)


def _find_vote(
    db: Session,
    user_id: int,
    target_type: str,
    target_id: int,
    *,
    for_update: bool = False,
) -> Vote | None:
    stmt = select(Vote).where(
        Vote.user_id == user_id,
        Vote.target_type == target_type,
        Vote.target_id == target_id,
    )
    if for_update:
        stmt = stmt.with_for_update()
    return db.scalars(stmt).first()


def get_votes(
    db: Session,
    target_type: str,
    target_id: int,
    user_id: int | None = None,
) -> VoteResponse:
    """Return the aggregate for a target and, if known, the caller's vote."""
    user_vote: int | None = None
    if user_id is not None:
        existing = _find_vote(db, user_id, target_type, target_id)
        if existing is not None:
            user_vote = existing.value

    return VoteResponse(
        vote_count=vote_total(db, target_type, target_id),
        user_vote=user_vote,
    )


def _apply_vote(
    db: Session,
    user_id: int,
    target_type: str,
    target_id: int,
    value: int,
) -> tuple[VoteOutcome, int | None]:
    existing = _find_vote(db, user_id, target_type, target_id, for_update=True)

    if existing is None:
        db.add(
            Vote(
                user_id=user_id,
                target_type=target_type,
                target_id=target_id,
                value=value,
            )
        )
        # Flush now so a concurrent duplicate trips the unique constraint here.
        db.flush()
        return VoteOutcome.INSERTED, value

    if existing.value == value:
        db.delete(existing)
        db.flush()
        return VoteOutcome.REMOVED, None

    existing.value = value
    db.flush()
    return VoteOutcome.SWITCHED, value


def cast_vote(
    db: Session,
    user_id: int,
    target_type: str,
    target_id: int,
    value: int,
) -> VoteResult:
    """Insert, flip or remove the caller's vote on a target.

    The read of the existing vote, the write and the recount run in a single
    transaction. The target itself is never looked up, so any
    ``(target_type, target_id)`` pair can be voted on.

    Args:
        db: Database session
        user_id: Identifier of the voting user
        target_type: Kind of the voted item (comment, reply, post)
        target_id: Identifier of the voted item
        value: 1 for upvote, -1 for downvote

    Returns:
        VoteResult with the outcome, the new aggregate and the caller's vote

    Raises:
        ValidationFailure: If ``value`` is neither 1 nor -1
    """
    if value not in VALID_VOTE_VALUES:
        raise ValidationFailure("Vote value must be 1 or -1")

    attempt = 0
    while True:
        try:
            outcome, user_vote = _apply_vote(db, user_id, target_type, target_id, value)
            vote_count = vote_total(db, target_type, target_id)
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            attempt += 1
            if attempt >= _MAX_ATTEMPTS:
                raise
            logger.info(
                "Concurrent vote by user %s on %s %s, retrying",
                user_id,
                target_type,
                target_id,
            )

    logger.debug(
        "User %s vote on %s %s: %s (total %d)",
        user_id,
        target_type,
        target_id,
        outcome.value,
        vote_count,
    )
    return VoteResult(outcome=outcome, vote_count=vote_count, user_vote=user_vote)
