"""Data models shared by providers, aggregators and callers."""

from mediamerge.models.fields import MetadataField
from mediamerge.models.metadata import (
    IMDB,
    TMDB,
    TVDB,
    MediaAiredStatus,
    MediaGenre,
    MediaMetadata,
    MediaRating,
    MediaSearchResult,
    MediaType,
    Person,
)
from mediamerge.models.options import (
    MediaSearchAndScrapeOptions,
    MovieSearchAndScrapeOptions,
    TvShowEpisodeSearchAndScrapeOptions,
    TvShowSearchAndScrapeOptions,
)

__all__ = [
    "IMDB",
    "TMDB",
    "TVDB",
    "MediaAiredStatus",
    "MediaGenre",
    "MediaMetadata",
    "MediaRating",
    "MediaSearchAndScrapeOptions",
    "MediaSearchResult",
    "MediaType",
    "MetadataField",
    "MovieSearchAndScrapeOptions",
    "Person",
    "TvShowEpisodeSearchAndScrapeOptions",
    "TvShowSearchAndScrapeOptions",
]
