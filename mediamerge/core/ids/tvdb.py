"""TVDB identifier strategy."""

from mediamerge.models.metadata import TVDB

from .base import NumericIdStrategy


class TvdbIdStrategy(NumericIdStrategy):
    """Strategy for TVDB ids."""

    namespace = TVDB
