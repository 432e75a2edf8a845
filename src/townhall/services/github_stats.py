"""Repository statistics read from the GitHub REST API, cached in process.

A single slot holds the last successful snapshot together with the repository
it describes. Reads inside the TTL are served from the slot; a miss fetches
outside the lock and swaps in a fresh immutable record. A failed fetch leaves
the slot as it was.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from townhall.core.exceptions import UpstreamFailure
from townhall.core.settings import settings
from townhall.schemas.github_stats import GitHubStats

logger = logging.getLogger(__name__)

StatsFetcher = Callable[[str], GitHubStats]


@dataclass(frozen=True)
class StatsClientConfig:
    """Endpoints and counting rules used when reading a repository."""

    api_base_url: str
    timeout_seconds: float
    user_agent: str
    language: str
    bytes_per_line: int
    packages_dir: str
    extra_packages: int


def load_stats_config() -> StatsClientConfig:
    """Build configuration object from global settings."""
    return StatsClientConfig(
        api_base_url=settings.github_api_base_url.rstrip("/"),
        timeout_seconds=float(settings.github_http_timeout_seconds),
        user_agent=settings.github_user_agent,
        language=settings.github_stats_language,
        bytes_per_line=max(1, settings.github_stats_bytes_per_line),
        packages_dir=settings.github_stats_packages_dir,
        extra_packages=settings.github_stats_extra_packages,
    )


def last_page_number(response: httpx.Response) -> int | None:
    """Return the ``page`` of the ``rel="last"`` link, or None without one."""
    last = response.links.get("last")
    if not last or "url" not in last:
        return None
    page = httpx.URL(last["url"]).params.get("page")
    try:
        return int(page) if page is not None else None
    except ValueError:
        return None


class GitHubStatsClient:
    """Reads repository statistics with a handful of REST calls."""

    def __init__(
        self,
        config: StatsClientConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config or load_stats_config()
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.config.api_base_url,
            timeout=httpx.Timeout(self.config.timeout_seconds),
            headers={
                "User-Agent": self.config.user_agent,
                "Accept": "application/vnd.github+json",
            },
            transport=self._transport,
        )

    def fetch(self, repo: str) -> GitHubStats:
        """Read a fresh snapshot of ``repo`` (``owner/name``).

        Raises:
            UpstreamFailure: If any required call fails or returns malformed data.
        """
        base = f"/repos/{repo}"
        try:
            with self._client() as client:
                info = self._get_json(client, base)
                languages = self._get_json(client, f"{base}/languages")
                commits = self._commit_count(client, base)
                directory_count = self._directory_count(client, base)

                language_bytes = int(languages.get(self.config.language, 0))
                return GitHubStats(
                    commits=commits,
                    lines_of_code=language_bytes // self.config.bytes_per_line,
                    directory_count=directory_count,
                    stars=int(info["stargazers_count"]),
                    forks=int(info["forks_count"]),
                    open_issues=int(info["open_issues_count"]),
                    last_push=str(info.get("pushed_at") or ""),
                )
        except httpx.HTTPError as exc:
            logger.warning("GitHub stats request for %s failed: %s", repo, exc)
            raise UpstreamFailure("GitHub is unavailable") from exc
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("GitHub stats for %s were malformed: %s", repo, exc)
            raise UpstreamFailure("GitHub returned an invalid response") from exc

    @staticmethod
    def _get_json(client: httpx.Client, path: str, **kwargs: Any) -> Any:
        response = client.get(path, **kwargs)
        response.raise_for_status()
        return response.json()

    def _commit_count(self, client: httpx.Client, base: str) -> int:
        response = client.get(f"{base}/commits", params={"per_page": 1})
        response.raise_for_status()
        last_page = last_page_number(response)
        if last_page is not None:
            return last_page
        # Everything fit on one page.
        return len(response.json())

    def _directory_count(self, client: httpx.Client, base: str) -> int:
        try:
            response = client.get(f"{base}/contents/{self.config.packages_dir}")
        except httpx.TransportError as exc:
            logger.info("Skipping package directory count: %s", exc)
            return 0
        try:
            entries = response.json()
        except ValueError:
            entries = None
        if not isinstance(entries, list):
            return self.config.extra_packages
        dirs = sum(1 for entry in entries if isinstance(entry, dict) and entry.get("type") == "dir")
        return dirs + self.config.extra_packages


@dataclass(frozen=True)
class CachedStats:
    """Immutable cache record; replaced as a whole, never mutated."""

    repo: str
    stats: GitHubStats
    fetched_at: float


class StatsCache:
    """Process-wide single-slot TTL cache of repository statistics."""

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._slot: CachedStats | None = None

    def peek(self) -> CachedStats | None:
        """Return the current record without regard to its age."""
        with self._lock:
            return self._slot

    def clear(self) -> None:
        with self._lock:
            self._slot = None

    def get_or_fetch(self, repo: str, fetch: StatsFetcher) -> GitHubStats:
        """Return cached stats for ``repo`` or fetch and store a fresh copy.

        Concurrent misses may each fetch; the last one to finish wins the slot.

        Raises:
            UpstreamFailure: Propagated from ``fetch``; the slot is left untouched.
        """
        with self._lock:
            slot = self._slot
        if (
            slot is not None
            and slot.repo == repo
            and self._clock() - slot.fetched_at < self.ttl_seconds
        ):
            return slot.stats

        stats = fetch(repo)
        record = CachedStats(repo=repo, stats=stats, fetched_at=self._clock())
        with self._lock:
            self._slot = record
        logger.info("Refreshed GitHub stats for %s", repo)
        return stats


stats_cache = StatsCache(ttl_seconds=settings.github_stats_ttl_seconds)


def fetch_repo_stats(repo: str) -> GitHubStats:
    """Fetch a fresh snapshot of ``repo`` with a settings-configured client."""
    return GitHubStatsClient().fetch(repo)
