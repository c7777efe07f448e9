"""Tests for the concurrent fetch scheduler."""

import threading

import pytest

from mediamerge.core.scheduler import FetchScheduler
from mediamerge.models.metadata import IMDB, TMDB, MediaMetadata
from mediamerge.models.options import MovieSearchAndScrapeOptions
from tests.core.fakes import FakeProvider


@pytest.fixture
def scheduler():
    """A scheduler with a small pool, shut down after the test."""
    with FetchScheduler(max_workers=4) as scheduler:
        yield scheduler


def test_fetch_all_keys_results_by_provider(scheduler: FetchScheduler) -> None:
    """Every successful fetch is returned under its provider id."""
    tmdb = FakeProvider(TMDB, metadata=MediaMetadata(title="Heat"))
    imdb = FakeProvider(IMDB, metadata=MediaMetadata(title="Heat (1995)"))

    results = scheduler.fetch_all([tmdb, imdb], MovieSearchAndScrapeOptions())

    assert set(results) == {TMDB, IMDB}
    assert results[IMDB].title == "Heat (1995)"


def test_fetch_all_isolates_failures(scheduler: FetchScheduler) -> None:
    """A provider raising is left out without affecting the others."""
    tmdb = FakeProvider(TMDB, metadata=MediaMetadata(title="Heat"))
    broken = FakeProvider("broken", metadata=RuntimeError("HTTP 500"))

    results = scheduler.fetch_all([broken, tmdb], MovieSearchAndScrapeOptions())

    assert list(results) == [TMDB]
    assert len(broken.metadata_calls) == 1


def test_fetch_all_skips_prefetched_and_inactive(scheduler: FetchScheduler) -> None:
    """Cached results are reused and inactive providers never called."""
    cached = MediaMetadata(title="cached")
    tmdb = FakeProvider(TMDB)
    imdb = FakeProvider(IMDB, active=False)

    results = scheduler.fetch_all(
        [tmdb, imdb, tmdb], MovieSearchAndScrapeOptions(), {TMDB: cached}
    )

    assert results == {TMDB: cached}
    assert tmdb.metadata_calls == []
    assert imdb.metadata_calls == []


def test_fetch_all_runs_fetches_concurrently(scheduler: FetchScheduler) -> None:
    """Fetches overlap in time instead of running one after another."""
    barrier = threading.Barrier(3, timeout=5)

    def wait_for_others(options) -> MediaMetadata:
        barrier.wait()
        return MediaMetadata(title=threading.current_thread().name)

    providers = [
        FakeProvider(f"p{i}", metadata=wait_for_others) for i in range(3)
    ]

    results = scheduler.fetch_all(providers, MovieSearchAndScrapeOptions())

    assert set(results) == {"p0", "p1", "p2"}
    assert all(md.title.startswith("mm-fetch") for md in results.values())


def test_fetch_all_result_independent_of_completion_order(
    scheduler: FetchScheduler,
) -> None:
    """The later-submitted provider finishing first changes nothing."""
    first_may_finish = threading.Event()

    def slow(options) -> MediaMetadata:
        first_may_finish.wait(timeout=5)
        return MediaMetadata(title="slow")

    def fast(options) -> MediaMetadata:
        first_may_finish.set()
        return MediaMetadata(title="fast")

    results = scheduler.fetch_all(
        [FakeProvider("slow", metadata=slow), FakeProvider("fast", metadata=fast)],
        MovieSearchAndScrapeOptions(),
    )

    assert results["slow"].title == "slow"
    assert results["fast"].title == "fast"


def test_custom_fetch_function(scheduler: FetchScheduler) -> None:
    """Another provider call can be scheduled, None results are dropped."""
    tmdb = FakeProvider(TMDB)
    imdb = FakeProvider(IMDB)

    def fetch(provider, options):
        return MediaMetadata(title=provider.id) if provider.id == TMDB else None

    results = scheduler.fetch_all(
        [tmdb, imdb], MovieSearchAndScrapeOptions(), fetch=fetch
    )

    assert list(results) == [TMDB]
