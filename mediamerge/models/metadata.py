"""Media metadata models shared by providers and aggregators."""

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from rapidfuzz import fuzz, utils

if TYPE_CHECKING:
    from mediamerge.models.options import MediaSearchAndScrapeOptions

__all__ = [
    "IMDB",
    "TMDB",
    "TVDB",
    "MediaAiredStatus",
    "MediaArtwork",
    "MediaArtworkType",
    "MediaGenre",
    "MediaMetadata",
    "MediaRating",
    "MediaSearchResult",
    "MediaType",
    "Person",
    "PersonType",
    "sort_search_results",
]

IMDB = "imdb"
TMDB = "tmdb"
TVDB = "tvdb"


class MediaType(StrEnum):
    """Kind of media item a request or record describes."""

    MOVIE = "movie"
    TV_SHOW = "tv_show"
    TV_EPISODE = "tv_episode"


class MediaAiredStatus(StrEnum):
    """Airing status of a TV show."""

    UNKNOWN = "unknown"
    CONTINUING = "continuing"
    ENDED = "ended"


class MediaGenre(StrEnum):
    """Normalized genres providers map their own genre names onto."""

    ACTION = "action"
    ADVENTURE = "adventure"
    ANIMATION = "animation"
    COMEDY = "comedy"
    CRIME = "crime"
    DOCUMENTARY = "documentary"
    DRAMA = "drama"
    FAMILY = "family"
    FANTASY = "fantasy"
    HISTORY = "history"
    HORROR = "horror"
    MUSIC = "music"
    MYSTERY = "mystery"
    ROMANCE = "romance"
    SCIENCE_FICTION = "science_fiction"
    THRILLER = "thriller"
    WAR = "war"
    WESTERN = "western"


class PersonType(StrEnum):
    """Role category of a person attached to a media item."""

    ACTOR = "actor"
    DIRECTOR = "director"
    WRITER = "writer"
    PRODUCER = "producer"
    GUEST = "guest"


class MediaArtworkType(StrEnum):
    """Kind of artwork image."""

    POSTER = "poster"
    BACKGROUND = "background"
    BANNER = "banner"
    THUMB = "thumb"
    CLEARLOGO = "clearlogo"


class Person(BaseModel):
    """A cast or crew member."""

    type: PersonType = PersonType.ACTOR
    name: str
    role: str = ""
    thumb_url: str | None = None
    ids: dict[str, Any] = Field(default_factory=dict)


class MediaRating(BaseModel):
    """A rating from one rating source (e.g. ``imdb``, ``tmdb``)."""

    model_config = ConfigDict(frozen=True)

    id: str
    rating: float = 0.0
    votes: int = 0
    max_value: int = 10


class MediaArtwork(BaseModel):
    """A single artwork image offered by a provider."""

    provider_id: str
    type: MediaArtworkType
    url: str
    language: str = ""


class MediaMetadata(BaseModel):
    """Metadata for one media item as delivered by a provider.

    Also used as the output record of an aggregation, in which case
    ``provider_id`` is the aggregator's id.
    """

    provider_id: str = ""
    ids: dict[str, Any] = Field(default_factory=dict)

    title: str = ""
    original_title: str = ""
    tagline: str = ""
    year: int = 0
    release_date: date | None = None
    plot: str = ""
    runtime: int = 0
    top250: int = 0
    collection_name: str = ""
    status: MediaAiredStatus = MediaAiredStatus.UNKNOWN

    ratings: list[MediaRating] = Field(default_factory=list)
    genres: list[MediaGenre] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    production_companies: list[str] = Field(default_factory=list)
    cast_members: list[Person] = Field(default_factory=list)
    spoken_languages: list[str] = Field(default_factory=list)
    countries: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    media_art: list[MediaArtwork] = Field(default_factory=list)

    season_number: int = -1
    episode_number: int = -1
    display_season_number: int = -1
    display_episode_number: int = -1
    dvd_season_number: int = -1
    dvd_episode_number: int = -1
    absolute_number: int = -1

    def set_id(self, namespace: str, value: Any) -> None:
        """Set (or, for an empty value, remove) the id of a namespace."""
        if value is None or (isinstance(value, str) and not value.strip()):
            self.ids.pop(namespace, None)
            return
        if isinstance(value, int) and value <= 0:
            self.ids.pop(namespace, None)
            return
        self.ids[namespace] = value

    def get_id(self, namespace: str) -> Any:
        """Return the raw id for a namespace, or None."""
        return self.ids.get(namespace)

    def add_genre(self, genre: MediaGenre) -> None:
        """Append a genre, keeping the list free of duplicates."""
        if genre not in self.genres:
            self.genres.append(genre)


class MediaSearchResult(BaseModel):
    """One hit returned by a provider search."""

    provider_id: str
    media_type: MediaType = MediaType.MOVIE
    title: str = ""
    original_title: str = ""
    year: int = 0
    score: float = 0.0
    ids: dict[str, Any] = Field(default_factory=dict)
    poster_url: str = ""
    overview: str = ""

    def identity(self) -> tuple:
        """Key two results are considered the same hit by."""
        return (
            self.provider_id,
            self.media_type,
            self.title,
            self.original_title,
            self.year,
            tuple(sorted((k, str(v)) for k, v in self.ids.items())),
        )

    def calculate_score(self, options: MediaSearchAndScrapeOptions) -> float:
        """Score this result against the search query of ``options``.

        The score is the best title similarity (0..1) of the translated and
        the original title, lowered by a year penalty and by 0.01 when no
        poster is known. The result is stored in ``score`` and returned.
        """
        score = max(
            title_similarity(options.search_query, self.title),
            title_similarity(options.search_query, self.original_title),
        )
        score -= year_penalty(options.search_year, self.year)
        if not self.poster_url:
            score -= 0.01

        self.score = score
        return score


def title_similarity(search_title: str, match_title: str) -> float:
    """Similarity (0..1) between a search title and a result title.

    A trailing `` YYYY`` on the search title is also tried without the year.
    """
    if not search_title.strip() or not match_title.strip():
        return 0.0

    candidates = [search_title]
    head, _, tail = search_title.rpartition(" ")
    if head and len(tail) == 4 and tail.isdigit():
        candidates.append(head)

    return max(
        fuzz.ratio(candidate, match_title, processor=utils.default_process) / 100
        for candidate in candidates
    )


def year_penalty(search_year: int, result_year: int) -> float:
    """Penalty (0..0.11) for a result year differing from the searched year.

    Without a search year the current year is used; a result without a year
    gets the maximum penalty.
    """
    if search_year <= 0:
        search_year = datetime.now().year
    if result_year <= 0:
        return 0.11

    diff = abs(search_year - result_year)
    if diff == 0:
        return 0.0
    if diff > 100:
        return 0.11
    return 0.01 + diff / 1000


def sort_search_results(results: list[MediaSearchResult]) -> list[MediaSearchResult]:
    """Order results by score (best first) then year, dropping duplicate hits.

    Of two duplicates the better scored one is kept.
    """
    unique: dict[tuple, MediaSearchResult] = {}
    for result in results:
        kept = unique.get(result.identity())
        if kept is None or result.score > kept.score:
            unique[result.identity()] = result
    return sorted(unique.values(), key=lambda r: (-r.score, r.year))
