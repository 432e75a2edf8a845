"""GitHub OAuth web flow: authorize redirect, code exchange, profile lookup."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import httpx

from townhall.core.exceptions import UpstreamFailure
from townhall.core.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitHubOAuthConfig:
    """Credentials and endpoints of the GitHub OAuth application."""

    client_id: str
    client_secret: str
    callback_url: str
    oauth_base_url: str
    api_base_url: str
    timeout_seconds: float
    user_agent: str


@dataclass(frozen=True)
class GitHubUser:
    """Subset of the GitHub profile kept locally."""

    github_id: int
    login: str
    avatar_url: str


def load_oauth_config() -> GitHubOAuthConfig:
    """Build configuration object from global settings."""
    return GitHubOAuthConfig(
        client_id=settings.github_client_id,
        client_secret=settings.github_client_secret,
        callback_url=settings.github_callback_url,
        oauth_base_url=settings.github_oauth_base_url.rstrip("/"),
        api_base_url=settings.github_api_base_url.rstrip("/"),
        timeout_seconds=float(settings.github_http_timeout_seconds),
        user_agent=settings.github_user_agent,
    )


class GitHubOAuthClient:
    """Synchronous wrapper around the GitHub OAuth and user endpoints."""

    def __init__(
        self,
        config: GitHubOAuthConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config or load_oauth_config()
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.config.timeout_seconds),
            headers={"User-Agent": self.config.user_agent, "Accept": "application/json"},
            transport=self._transport,
        )

    def authorize_url(self, state: str) -> str:
        """Return the GitHub consent page address carrying ``state`` through the flow."""
        query = urlencode(
            {
                "client_id": self.config.client_id,
                "redirect_uri": self.config.callback_url,
                "state": state,
            }
        )
        return f"{self.config.oauth_base_url}/login/oauth/authorize?{query}"

    def exchange_code(self, code: str) -> str:
        """Trade an authorization code for a GitHub access token.

        Raises:
            UpstreamFailure: If GitHub is unreachable or refuses the code.
        """
        payload = self._request_json(
            "POST",
            f"{self.config.oauth_base_url}/login/oauth/access_token",
            json={
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "code": code,
            },
        )
        # GitHub answers 200 with an "error" field for a bad or reused code.
        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            logger.warning(
                "GitHub token exchange returned no access token: %s",
                payload.get("error") if isinstance(payload, dict) else type(payload).__name__,
            )
            raise UpstreamFailure("GitHub authentication failed")
        return token

    def fetch_user(self, access_token: str) -> GitHubUser:
        """Return the profile of the account that granted ``access_token``.

        Raises:
            UpstreamFailure: If the profile cannot be fetched or is malformed.
        """
        payload = self._request_json(
            "GET",
            f"{self.config.api_base_url}/user",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        try:
            return GitHubUser(
                github_id=int(payload["id"]),
                login=str(payload["login"]),
                avatar_url=str(payload.get("avatar_url") or ""),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed GitHub user profile: %s", exc)
            raise UpstreamFailure("GitHub returned an invalid profile") from exc

    def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            with self._client() as client:
                response = client.request(method, url, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as exc:
            logger.warning("GitHub request %s %s failed: %s", method, url, exc)
            raise UpstreamFailure("GitHub is unavailable") from exc
        except ValueError as exc:
            logger.warning("GitHub request %s %s returned invalid JSON", method, url)
            raise UpstreamFailure("GitHub returned an invalid response") from exc


def get_oauth_client() -> GitHubOAuthClient:
    """Return an OAuth client configured from settings."""
    return GitHubOAuthClient()
