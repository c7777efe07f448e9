"""Provider capability interface and registry."""

from mediamerge.providers.base import UNIVERSAL_MOVIE, UNIVERSAL_TVSHOW, MetadataProvider
from mediamerge.providers.registry import ProviderRegistry

__all__ = ["UNIVERSAL_MOVIE", "UNIVERSAL_TVSHOW", "MetadataProvider", "ProviderRegistry"]
