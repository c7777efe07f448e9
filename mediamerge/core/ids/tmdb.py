"""TMDB identifier strategy."""

from mediamerge.models.metadata import TMDB

from .base import NumericIdStrategy


class TmdbIdStrategy(NumericIdStrategy):
    """Strategy for TMDB ids."""

    namespace = TMDB
