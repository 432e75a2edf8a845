# src/townhall/api/endpoints/auth.py
"""Authentication endpoints: GitHub sign-in and the current user."""

from __future__ import annotations

import logging
from typing import Annotated
from urllib.parse import urlencode, urlsplit

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse

from townhall.api.dependencies import CurrentUserDep, SessionDep
from townhall.core.security import create_access_token
from townhall.core.settings import settings
from townhall.schemas.user import UserResponse
from townhall.services.github_oauth import GitHubOAuthClient, get_oauth_client
from townhall.services.users import upsert_github_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])

OAuthClientDep = Annotated[GitHubOAuthClient, Depends(get_oauth_client)]


def _safe_redirect(target: str | None) -> str:
    """Return ``target`` when it points at an allowed origin, else the frontend."""
    if target:
        parts = urlsplit(target)
        origin = f"{parts.scheme}://{parts.netloc}"
        if parts.scheme in ("http", "https") and origin in settings.allowed_redirect_origins:
            return target
        logger.info("Ignoring redirect to disallowed origin %s", origin)
    return settings.frontend_origin


def _append_query(url: str, **params: str) -> str:
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode(params)}"


@router.get("/login")
@router.get("/github", include_in_schema=False)
def github_login(
    oauth: OAuthClientDep,
    redirect: Annotated[str | None, Query()] = None,
) -> RedirectResponse:
    """Send the browser to GitHub's consent page.

    ``redirect`` is carried through the flow as OAuth ``state`` and is where
    the browser lands, token attached, after the callback.
    """
    return RedirectResponse(oauth.authorize_url(state=_safe_redirect(redirect)))


@router.get("/callback")
def github_callback(
    db: SessionDep,
    oauth: OAuthClientDep,
    code: Annotated[str, Query(min_length=1)],
    state: Annotated[str | None, Query()] = None,
) -> RedirectResponse:
    """Finish the GitHub flow and hand a bearer token back to the frontend."""
    access_token = oauth.exchange_code(code)
    profile = oauth.fetch_user(access_token)
    user = upsert_github_user(
        db,
        github_id=profile.github_id,
        username=profile.login,
        avatar_url=profile.avatar_url,
    )
    token = create_access_token(user.id)
    return RedirectResponse(_append_query(_safe_redirect(state), token=token))


@router.get("/me", response_model=UserResponse)
def read_current_user(current_user: CurrentUserDep) -> UserResponse:
    """Return the signed-in user."""
    return UserResponse.model_validate(current_user)
