"""Tests for the single-slot GitHub statistics cache."""

import pytest

from townhall.core.exceptions import UpstreamFailure
from townhall.schemas.github_stats import GitHubStats
from townhall.services.github_stats import StatsCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class CountingFetcher:
    """Returns a new snapshot on every call and remembers how often it ran."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, repo: str) -> GitHubStats:
        self.calls.append(repo)
        return GitHubStats(
            commits=len(self.calls),
            lines_of_code=100,
            directory_count=4,
            stars=10,
            forks=2,
            open_issues=1,
            last_push="2026-01-01T00:00:00Z",
        )


def _failing_fetch(repo: str) -> GitHubStats:
    raise UpstreamFailure("GitHub is unavailable")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock) -> StatsCache:
    return StatsCache(ttl_seconds=3600, clock=clock)


def test_empty_cache_fetches(cache) -> None:
    fetcher = CountingFetcher()

    stats = cache.get_or_fetch("owner/repo", fetcher)

    assert fetcher.calls == ["owner/repo"]
    assert stats.commits == 1
    assert cache.peek().repo == "owner/repo"


def test_second_read_within_ttl_is_served_from_cache(cache, clock) -> None:
    fetcher = CountingFetcher()

    first = cache.get_or_fetch("owner/repo", fetcher)
    clock.now += 3599
    second = cache.get_or_fetch("owner/repo", fetcher)

    assert second == first
    assert len(fetcher.calls) == 1


def test_expired_entry_is_refreshed(cache, clock) -> None:
    fetcher = CountingFetcher()

    cache.get_or_fetch("owner/repo", fetcher)
    clock.now += 3600
    refreshed = cache.get_or_fetch("owner/repo", fetcher)

    assert len(fetcher.calls) == 2
    assert refreshed.commits == 2


def test_other_repository_is_a_miss(cache) -> None:
    fetcher = CountingFetcher()

    cache.get_or_fetch("owner/one", fetcher)
    cache.get_or_fetch("owner/two", fetcher)

    assert fetcher.calls == ["owner/one", "owner/two"]
    assert cache.peek().repo == "owner/two"


def test_failed_refresh_keeps_previous_entry(cache, clock) -> None:
    fetcher = CountingFetcher()
    cache.get_or_fetch("owner/repo", fetcher)
    before = cache.peek()
    clock.now += 7200

    with pytest.raises(UpstreamFailure):
        cache.get_or_fetch("owner/repo", _failing_fetch)

    assert cache.peek() is before


def test_failure_on_empty_cache_leaves_it_empty(cache) -> None:
    with pytest.raises(UpstreamFailure):
        cache.get_or_fetch("owner/repo", _failing_fetch)

    assert cache.peek() is None


def test_clear_empties_the_slot(cache) -> None:
    cache.get_or_fetch("owner/repo", CountingFetcher())
    cache.clear()

    assert cache.peek() is None
