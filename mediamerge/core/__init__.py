"""Core Module Initialization."""

from mediamerge.core.engine import MediaMergeEngine
from mediamerge.core.universal import (
    UniversalMovieMetadataProvider,
    UniversalTvShowMetadataProvider,
)

__all__ = [
    "MediaMergeEngine",
    "UniversalMovieMetadataProvider",
    "UniversalTvShowMetadataProvider",
]
