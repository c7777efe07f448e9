"""Identifier namespace strategies for the supported external databases."""

from .base import IdNamespaceStrategy, NumericIdStrategy
from .imdb import ImdbIdStrategy, is_valid_imdb_id
from .tmdb import TmdbIdStrategy
from .tvdb import TvdbIdStrategy

__all__ = [
    "IdNamespaceStrategy",
    "ImdbIdStrategy",
    "NumericIdStrategy",
    "TmdbIdStrategy",
    "TvdbIdStrategy",
    "get_movie_strategies",
    "get_tvshow_strategies",
    "is_valid_imdb_id",
]


def get_movie_strategies() -> list[IdNamespaceStrategy]:
    """Namespaces the movie aggregator resolves, in bridging preference order.

    Returns:
        list[IdNamespaceStrategy]: TMDB then IMDB.
    """
    return [TmdbIdStrategy(), ImdbIdStrategy()]


def get_tvshow_strategies() -> list[IdNamespaceStrategy]:
    """Namespaces the TV show aggregator resolves, in bridging preference order.

    Returns:
        list[IdNamespaceStrategy]: TMDB, IMDB then TVDB.
    """
    return [TmdbIdStrategy(), ImdbIdStrategy(), TvdbIdStrategy()]
