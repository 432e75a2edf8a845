# src/townhall/api/endpoints/forum.py
"""Forum endpoints: categories, threads and replies."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from townhall.api.dependencies import CurrentUserDep, SessionDep
from townhall.schemas.common import SQL_INT_MAX, SQL_INT_MIN
from townhall.schemas.forum import (
    CategoryResponse,
    Paginated,
    ReplyCreate,
    ReplyResponse,
    ThreadCreate,
    ThreadDetail,
    ThreadResponse,
)
from townhall.services import forum as forum_service

router = APIRouter(prefix="/forum", tags=["forum"])

ThreadIdPath = Annotated[int, Path(ge=SQL_INT_MIN, le=SQL_INT_MAX)]


@router.get("/categories", response_model=list[CategoryResponse])
def list_categories(db: SessionDep) -> list[CategoryResponse]:
    return forum_service.list_categories(db)


@router.get("/threads", response_model=Paginated[ThreadResponse])
def list_threads(
    db: SessionDep,
    category: Annotated[str, Query(min_length=1, description="Category slug")],
    page: Annotated[int | None, Query(description="1-based page number")] = None,
) -> Paginated[ThreadResponse]:
    """List a category's threads, newest first, twenty per page.

    Pages below 1 are served as page 1; pages past the end are empty.
    """
    result = forum_service.list_threads(db, category, page)
    return Paginated[ThreadResponse](
        items=result.items,
        total=result.total,
        page=result.page,
        per_page=result.per_page,
    )


@router.post("/threads", response_model=ThreadResponse, status_code=status.HTTP_201_CREATED)
def create_thread(
    thread_data: ThreadCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ThreadResponse:
    """Start a thread in a category."""
    return forum_service.create_thread(
        db,
        current_user,
        thread_data.category_slug,
        thread_data.title,
        thread_data.body,
    )


@router.get("/threads/{thread_id}", response_model=ThreadDetail)
def get_thread(thread_id: ThreadIdPath, db: SessionDep) -> ThreadDetail:
    """Return a thread with all of its replies."""
    return forum_service.get_thread(db, thread_id)


@router.post(
    "/threads/{thread_id}/replies",
    response_model=ReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_reply(
    thread_id: ThreadIdPath,
    reply_data: ReplyCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReplyResponse:
    """Reply to a thread."""
    return forum_service.create_reply(db, current_user, thread_id, reply_data.body)
