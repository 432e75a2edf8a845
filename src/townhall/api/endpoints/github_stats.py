# src/townhall/api/endpoints/github_stats.py
"""Repository statistics endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from townhall.schemas.github_stats import GitHubStats
from townhall.services.github_stats import (
    StatsCache,
    StatsFetcher,
    fetch_repo_stats,
    stats_cache,
)

router = APIRouter(tags=["github"])


def get_stats_cache() -> StatsCache:
    """Return the shared statistics cache."""
    return stats_cache


def get_stats_fetcher() -> StatsFetcher:
    """Return the function used to read fresh statistics."""
    return fetch_repo_stats


StatsCacheDep = Annotated[StatsCache, Depends(get_stats_cache)]
StatsFetcherDep = Annotated[StatsFetcher, Depends(get_stats_fetcher)]


@router.get("/github-stats", response_model=GitHubStats)
def get_github_stats(
    cache: StatsCacheDep,
    fetcher: StatsFetcherDep,
    repo: Annotated[
        str,
        Query(pattern=r"^[\w.-]+/[\w.-]+$", description="Repository as owner/name"),
    ],
) -> GitHubStats:
    """Return cached statistics for a repository, refreshing them hourly."""
    return cache.get_or_fetch(repo, fetcher)
