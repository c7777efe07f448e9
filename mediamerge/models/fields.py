"""Field descriptors used to read and write metadata fields by name.

Aggregator configuration refers to fields by their string name; this module
maps each name to an explicit getter/setter pair on ``MediaMetadata``.
"""

from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any, NamedTuple

from pydantic.alias_generators import to_camel

from mediamerge.models.metadata import MediaAiredStatus, MediaMetadata

__all__ = [
    "EPISODE_FIELDS",
    "FIELD_DESCRIPTORS",
    "MOVIE_FIELDS",
    "TVSHOW_FIELDS",
    "EpisodeNumbering",
    "FieldDescriptor",
    "MetadataField",
    "field_lookup",
    "is_value_filled",
]


class MetadataField(StrEnum):
    """Every field an aggregator can fill from a selected provider."""

    TITLE = "title"
    ORIGINAL_TITLE = "original_title"
    TAGLINE = "tagline"
    YEAR = "year"
    RELEASE_DATE = "release_date"
    PLOT = "plot"
    RUNTIME = "runtime"
    RATINGS = "ratings"
    TOP250 = "top250"
    GENRES = "genres"
    CERTIFICATIONS = "certifications"
    PRODUCTION_COMPANIES = "production_companies"
    CAST_MEMBERS = "cast_members"
    SPOKEN_LANGUAGES = "spoken_languages"
    COUNTRIES = "countries"
    TAGS = "tags"
    COLLECTION_NAME = "collection_name"
    MEDIA_ART = "media_art"
    STATUS = "status"
    EPISODES = "episodes"


class EpisodeNumbering(NamedTuple):
    """The numbering block of an episode, always taken from one provider."""

    season_number: int
    episode_number: int
    display_season_number: int
    display_episode_number: int
    dvd_season_number: int
    dvd_episode_number: int
    absolute_number: int
    release_date: date | None

    def is_numbered(self) -> bool:
        return self.season_number >= 0 and self.episode_number > 0


@dataclass(frozen=True)
class FieldDescriptor:
    """Typed accessor pair for one metadata field."""

    field: MetadataField
    getter: Callable[[MediaMetadata], Any]
    setter: Callable[[MediaMetadata, Any], None]


def _attribute(field: MetadataField, attr: str) -> FieldDescriptor:
    def getter(md: MediaMetadata) -> Any:
        return getattr(md, attr)

    def setter(md: MediaMetadata, value: Any) -> None:
        setattr(md, attr, value)

    return FieldDescriptor(field, getter, setter)


def _get_numbering(md: MediaMetadata) -> EpisodeNumbering:
    return EpisodeNumbering(
        md.season_number,
        md.episode_number,
        md.display_season_number,
        md.display_episode_number,
        md.dvd_season_number,
        md.dvd_episode_number,
        md.absolute_number,
        md.release_date,
    )


def _set_numbering(md: MediaMetadata, value: EpisodeNumbering) -> None:
    md.season_number = value.season_number
    md.episode_number = value.episode_number
    md.display_season_number = value.display_season_number
    md.display_episode_number = value.display_episode_number
    md.dvd_season_number = value.dvd_season_number
    md.dvd_episode_number = value.dvd_episode_number
    md.absolute_number = value.absolute_number
    md.release_date = value.release_date


FIELD_DESCRIPTORS: dict[MetadataField, FieldDescriptor] = {
    MetadataField.TITLE: _attribute(MetadataField.TITLE, "title"),
    MetadataField.ORIGINAL_TITLE: _attribute(
        MetadataField.ORIGINAL_TITLE, "original_title"
    ),
    MetadataField.TAGLINE: _attribute(MetadataField.TAGLINE, "tagline"),
    MetadataField.YEAR: _attribute(MetadataField.YEAR, "year"),
    MetadataField.RELEASE_DATE: _attribute(MetadataField.RELEASE_DATE, "release_date"),
    MetadataField.PLOT: _attribute(MetadataField.PLOT, "plot"),
    MetadataField.RUNTIME: _attribute(MetadataField.RUNTIME, "runtime"),
    MetadataField.RATINGS: _attribute(MetadataField.RATINGS, "ratings"),
    MetadataField.TOP250: _attribute(MetadataField.TOP250, "top250"),
    MetadataField.GENRES: _attribute(MetadataField.GENRES, "genres"),
    MetadataField.CERTIFICATIONS: _attribute(
        MetadataField.CERTIFICATIONS, "certifications"
    ),
    MetadataField.PRODUCTION_COMPANIES: _attribute(
        MetadataField.PRODUCTION_COMPANIES, "production_companies"
    ),
    MetadataField.CAST_MEMBERS: _attribute(MetadataField.CAST_MEMBERS, "cast_members"),
    MetadataField.SPOKEN_LANGUAGES: _attribute(
        MetadataField.SPOKEN_LANGUAGES, "spoken_languages"
    ),
    MetadataField.COUNTRIES: _attribute(MetadataField.COUNTRIES, "countries"),
    MetadataField.TAGS: _attribute(MetadataField.TAGS, "tags"),
    MetadataField.COLLECTION_NAME: _attribute(
        MetadataField.COLLECTION_NAME, "collection_name"
    ),
    MetadataField.MEDIA_ART: _attribute(MetadataField.MEDIA_ART, "media_art"),
    MetadataField.STATUS: _attribute(MetadataField.STATUS, "status"),
    MetadataField.EPISODES: FieldDescriptor(
        MetadataField.EPISODES, _get_numbering, _set_numbering
    ),
}

# Configuration key -> field, per aggregator. Order is the order fields are
# offered for selection.
MOVIE_FIELDS: dict[str, MetadataField] = {
    field: field
    for field in (
        MetadataField.TITLE,
        MetadataField.ORIGINAL_TITLE,
        MetadataField.TAGLINE,
        MetadataField.YEAR,
        MetadataField.RELEASE_DATE,
        MetadataField.PLOT,
        MetadataField.RUNTIME,
        MetadataField.RATINGS,
        MetadataField.TOP250,
        MetadataField.GENRES,
        MetadataField.CERTIFICATIONS,
        MetadataField.PRODUCTION_COMPANIES,
        MetadataField.CAST_MEMBERS,
        MetadataField.SPOKEN_LANGUAGES,
        MetadataField.COUNTRIES,
        MetadataField.TAGS,
        MetadataField.COLLECTION_NAME,
    )
}

TVSHOW_FIELDS: dict[str, MetadataField] = {
    field: field
    for field in (
        MetadataField.TITLE,
        MetadataField.ORIGINAL_TITLE,
        MetadataField.YEAR,
        MetadataField.RELEASE_DATE,
        MetadataField.PLOT,
        MetadataField.RUNTIME,
        MetadataField.RATINGS,
        MetadataField.GENRES,
        MetadataField.CERTIFICATIONS,
        MetadataField.PRODUCTION_COMPANIES,
        MetadataField.CAST_MEMBERS,
        MetadataField.SPOKEN_LANGUAGES,
        MetadataField.COUNTRIES,
        MetadataField.TAGS,
        MetadataField.MEDIA_ART,
        MetadataField.STATUS,
    )
}

EPISODE_FIELDS: dict[str, MetadataField] = {
    "episodes": MetadataField.EPISODES,
    "episode_title": MetadataField.TITLE,
    "episode_plot": MetadataField.PLOT,
    "episode_cast_members": MetadataField.CAST_MEMBERS,
    "episode_ratings": MetadataField.RATINGS,
    "episode_media_art": MetadataField.MEDIA_ART,
}


def field_lookup(fields: Mapping[str, MetadataField]) -> dict[str, str]:
    """Map snake_case and camelCase spellings of each key to the canonical key."""
    lookup: dict[str, str] = {}
    for key in fields:
        lookup[key] = key
        lookup[to_camel(key)] = key
    return lookup


def is_value_filled(value: Any) -> bool:
    """Decide whether a field value counts as present when merging.

    Strings must be non-blank, numbers non-zero, collections non-empty, the
    airing status known and episode numbering set. ``None``, booleans and
    any other type never count.
    """
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, MediaAiredStatus):
        return value != MediaAiredStatus.UNKNOWN
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, int | float):
        return value != 0
    if isinstance(value, EpisodeNumbering):
        return value.is_numbered()
    if isinstance(value, Collection):
        return len(value) > 0
    if isinstance(value, date):
        return True
    return False
