"""Search and scrape options passed from callers through aggregators to providers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from mediamerge.models.metadata import IMDB, TMDB, MediaType

__all__ = [
    "MediaSearchAndScrapeOptions",
    "MovieSearchAndScrapeOptions",
    "TvShowEpisodeSearchAndScrapeOptions",
    "TvShowSearchAndScrapeOptions",
]


class MediaSearchAndScrapeOptions(BaseModel):
    """Caller-supplied request for a search or a scrape.

    The aggregators write identifiers they resolve back into ``ids``; callers
    holding on to the options object observe those ids after the call.
    """

    media_type: MediaType
    search_query: str = ""
    search_year: int = 0
    language: str = "en"
    certification_country: str = "US"
    ids: dict[str, Any] = Field(default_factory=dict)

    def get_id(self, namespace: str) -> Any:
        """Return the raw id for a namespace, or None."""
        return self.ids.get(namespace)

    def set_id(self, namespace: str, value: Any) -> None:
        """Set the id of a namespace; empty values are ignored."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return
        self.ids[namespace] = value

    def known_ids(self) -> dict[str, Any]:
        """Ids that providers may scrape this request by."""
        return dict(self.ids)

    @property
    def imdb_id(self) -> str:
        value = self.ids.get(IMDB)
        return value if isinstance(value, str) else ""

    @property
    def tmdb_id(self) -> int:
        try:
            return int(self.ids.get(TMDB) or 0)
        except (TypeError, ValueError):
            return 0

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}(type={self.media_type}, "
            f"query={self.search_query!r}, year={self.search_year}, "
            f"language={self.language}, ids={self.ids})"
        )


class MovieSearchAndScrapeOptions(MediaSearchAndScrapeOptions):
    media_type: MediaType = MediaType.MOVIE


class TvShowSearchAndScrapeOptions(MediaSearchAndScrapeOptions):
    media_type: MediaType = MediaType.TV_SHOW


class TvShowEpisodeSearchAndScrapeOptions(MediaSearchAndScrapeOptions):
    """Request for a single episode.

    ``ids`` holds episode ids, ``tvshow_ids`` the ids of the show. Providers
    usually locate an episode by a show id plus season/episode numbers, so
    both maps count as known ids.
    """

    media_type: MediaType = MediaType.TV_EPISODE
    tvshow_ids: dict[str, Any] = Field(default_factory=dict)
    season: int = -1
    episode: int = -1

    def known_ids(self) -> dict[str, Any]:
        return {**self.tvshow_ids, **self.ids}

    def create_tvshow_options(self) -> TvShowSearchAndScrapeOptions:
        """Derive show-level options sharing language, country and show ids."""
        return TvShowSearchAndScrapeOptions(
            search_query=self.search_query,
            search_year=self.search_year,
            language=self.language,
            certification_country=self.certification_country,
            ids=dict(self.tvshow_ids),
        )
