"""Tests for field descriptors and the value presence rule."""

from datetime import date

import pytest

from mediamerge.models.fields import (
    EPISODE_FIELDS,
    FIELD_DESCRIPTORS,
    MOVIE_FIELDS,
    TVSHOW_FIELDS,
    EpisodeNumbering,
    MetadataField,
    field_lookup,
    is_value_filled,
)
from mediamerge.models.metadata import (
    MediaAiredStatus,
    MediaMetadata,
    MediaRating,
)


@pytest.mark.parametrize(
    ("value", "filled"),
    [
        (None, False),
        (True, False),
        ("", False),
        ("   ", False),
        ("Heat", True),
        (0, False),
        (170, True),
        (0.0, False),
        (7.5, True),
        ([], False),
        ([MediaRating(id="imdb", rating=8.3)], True),
        (date(1995, 12, 15), True),
        (MediaAiredStatus.UNKNOWN, False),
        (MediaAiredStatus.ENDED, True),
        (object(), False),
    ],
)
def test_is_value_filled(value, filled: bool) -> None:
    """Only meaningful values count as present."""
    assert is_value_filled(value) is filled


def test_every_field_has_a_descriptor() -> None:
    """All aggregator keys resolve to a descriptor."""
    for fields in (MOVIE_FIELDS, TVSHOW_FIELDS, EPISODE_FIELDS):
        for metadata_field in fields.values():
            assert FIELD_DESCRIPTORS[metadata_field].field is metadata_field


def test_movie_and_tvshow_field_sets() -> None:
    """Movies offer top250 and collections, shows offer status and artwork."""
    assert MetadataField.TOP250 in MOVIE_FIELDS
    assert MetadataField.COLLECTION_NAME in MOVIE_FIELDS
    assert MetadataField.STATUS not in MOVIE_FIELDS
    assert MetadataField.STATUS in TVSHOW_FIELDS
    assert MetadataField.MEDIA_ART in TVSHOW_FIELDS
    assert EPISODE_FIELDS["episode_title"] is MetadataField.TITLE


def test_attribute_descriptor_reads_and_writes() -> None:
    """Plain descriptors map straight onto the model attribute."""
    descriptor = FIELD_DESCRIPTORS[MetadataField.PLOT]
    md = MediaMetadata()

    descriptor.setter(md, "A heist.")

    assert md.plot == "A heist."
    assert descriptor.getter(md) == "A heist."


def test_episode_numbering_moves_as_a_block() -> None:
    """The numbering descriptor copies every number and the release date."""
    descriptor = FIELD_DESCRIPTORS[MetadataField.EPISODES]
    source = MediaMetadata(
        season_number=1,
        episode_number=2,
        dvd_season_number=1,
        dvd_episode_number=3,
        absolute_number=2,
        release_date=date(2008, 1, 27),
    )
    target = MediaMetadata()

    numbering = descriptor.getter(source)
    descriptor.setter(target, numbering)

    assert isinstance(numbering, EpisodeNumbering)
    assert is_value_filled(numbering)
    assert (target.season_number, target.episode_number) == (1, 2)
    assert target.dvd_episode_number == 3
    assert target.release_date == date(2008, 1, 27)


def test_unnumbered_episode_is_not_filled() -> None:
    """A record without season/episode numbers offers no numbering."""
    numbering = FIELD_DESCRIPTORS[MetadataField.EPISODES].getter(MediaMetadata())

    assert not is_value_filled(numbering)


def test_field_lookup_accepts_camel_case() -> None:
    """Both snake_case and camelCase keys map to the canonical key."""
    lookup = field_lookup(EPISODE_FIELDS)

    assert lookup["episodeTitle"] == "episode_title"
    assert lookup["episode_title"] == "episode_title"
    assert lookup["episodes"] == "episodes"
