"""Tests for metadata models and search result scoring."""

from datetime import datetime

import pytest

from mediamerge.models.metadata import (
    IMDB,
    TMDB,
    MediaGenre,
    MediaMetadata,
    MediaSearchResult,
    sort_search_results,
    title_similarity,
    year_penalty,
)
from mediamerge.models.options import MovieSearchAndScrapeOptions


def test_set_id_removes_empty_values() -> None:
    """Blank strings, None and non-positive numbers remove an id."""
    md = MediaMetadata(ids={TMDB: 603, IMDB: "tt0133093"})

    md.set_id(TMDB, 0)
    md.set_id(IMDB, "  ")

    assert md.ids == {}

    md.set_id(TMDB, 603)
    md.set_id(TMDB, None)
    assert md.get_id(TMDB) is None


def test_add_genre_skips_duplicates() -> None:
    """Genres are only added once."""
    md = MediaMetadata()
    md.add_genre(MediaGenre.ACTION)
    md.add_genre(MediaGenre.ACTION)

    assert md.genres == [MediaGenre.ACTION]


def test_title_similarity_exact_and_case_insensitive() -> None:
    """Identical titles score 1 regardless of case and punctuation."""
    assert title_similarity("The Matrix", "the matrix") == pytest.approx(1.0)
    assert title_similarity("", "The Matrix") == 0.0


def test_title_similarity_ignores_trailing_year() -> None:
    """A trailing year in the query does not count against the title."""
    assert title_similarity("Heat 1995", "Heat") == pytest.approx(1.0)


@pytest.mark.parametrize(
    ("search_year", "result_year", "expected"),
    [
        (1999, 1999, 0.0),
        (1999, 2001, 0.012),
        (1999, 0, 0.11),
        (1800, 1999, 0.11),
    ],
)
def test_year_penalty(search_year: int, result_year: int, expected: float) -> None:
    """The penalty grows with the year distance and is capped."""
    assert year_penalty(search_year, result_year) == pytest.approx(expected)


def test_year_penalty_defaults_to_current_year() -> None:
    """Without a search year the current year is used."""
    assert year_penalty(0, datetime.now().year) == 0.0


def test_calculate_score_prefers_matching_year_and_poster() -> None:
    """Year and poster break ties between identical titles."""
    options = MovieSearchAndScrapeOptions(search_query="Heat", search_year=1995)
    exact = MediaSearchResult(
        provider_id="tmdb", title="Heat", year=1995, poster_url="http://p"
    )
    no_poster = MediaSearchResult(provider_id="tmdb", title="Heat", year=1995)
    other_year = MediaSearchResult(
        provider_id="tmdb", title="Heat", year=1986, poster_url="http://p"
    )

    assert exact.calculate_score(options) == pytest.approx(1.0)
    assert no_poster.calculate_score(options) == pytest.approx(0.99)
    assert other_year.calculate_score(options) == pytest.approx(1.0 - 0.019)
    assert exact.score == pytest.approx(1.0)


def test_calculate_score_uses_original_title() -> None:
    """The better of title and original title counts."""
    options = MovieSearchAndScrapeOptions(search_query="Le Samourai", search_year=1967)
    result = MediaSearchResult(
        provider_id="tmdb",
        title="The Godson",
        original_title="Le Samourai",
        year=1967,
        poster_url="http://p",
    )

    assert result.calculate_score(options) == pytest.approx(1.0)


def test_sort_search_results_orders_and_dedupes() -> None:
    """Best score first, older year first on ties, duplicates dropped."""
    a = MediaSearchResult(provider_id="x", title="A", year=2001, score=0.5)
    b = MediaSearchResult(provider_id="x", title="B", year=1999, score=0.9)
    c = MediaSearchResult(provider_id="x", title="C", year=1990, score=0.5)
    duplicate = MediaSearchResult(provider_id="x", title="B", year=1999, score=0.1)

    ordered = sort_search_results([a, b, c, duplicate])

    assert [r.title for r in ordered] == ["B", "C", "A"]


def test_sort_search_results_keeps_same_title_from_different_years() -> None:
    """Hits sharing a title but not a year are different results."""
    remake = MediaSearchResult(provider_id="x", title="Heat", year=1995, score=1.0)
    original = MediaSearchResult(provider_id="x", title="Heat", year=1986, score=0.8)

    ordered = sort_search_results([original, remake])

    assert [(r.title, r.year) for r in ordered] == [("Heat", 1995), ("Heat", 1986)]


def test_sort_search_results_keeps_best_scored_duplicate() -> None:
    """Of two identical hits the better scored one survives."""
    worse = MediaSearchResult(provider_id="x", title="Heat", year=1995, score=0.2)
    better = MediaSearchResult(provider_id="x", title="Heat", year=1995, score=0.9)

    ordered = sort_search_results([worse, better])

    assert ordered == [better]
