# src/townhall/api/endpoints/comments.py
"""Comment endpoints for blog posts."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, Response, status

from townhall.api.dependencies import CurrentUserDep, SessionDep
from townhall.schemas.common import SQL_INT_MAX, SQL_INT_MIN
from townhall.schemas.comment import CommentCreate, CommentResponse
from townhall.services import comments as comment_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("", response_model=list[CommentResponse])
def list_comments(
    db: SessionDep,
    slug: Annotated[str, Query(min_length=1, description="Slug of the blog post")],
) -> list[CommentResponse]:
    """List a post's comments, oldest first."""
    return comment_service.list_comments(db, slug)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    comment_data: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Comment on a post as the signed-in user."""
    return comment_service.create_comment(
        db, current_user, comment_data.post_slug, comment_data.body
    )


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: Annotated[int, Path(ge=SQL_INT_MIN, le=SQL_INT_MAX)],
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    """Delete one of the caller's own comments."""
    comment_service.delete_comment(db, current_user, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
