"""Capability interface every metadata provider implements."""

from abc import ABC, abstractmethod
from typing import ClassVar

from mediamerge.exceptions import ScrapeError
from mediamerge.models.metadata import MediaMetadata, MediaSearchResult, MediaType
from mediamerge.models.options import MediaSearchAndScrapeOptions

__all__ = ["UNIVERSAL_MOVIE", "UNIVERSAL_TVSHOW", "MetadataProvider"]

UNIVERSAL_MOVIE = "universal_movie"
UNIVERSAL_TVSHOW = "universal_tvshow"


class MetadataProvider(ABC):
    """A pluggable source of search results and metadata.

    Subclasses declare their capabilities as class attributes:
    ``ID_NAMESPACES`` lists the identifier namespaces the provider can scrape
    by, ``MEDIA_TYPES`` the kinds of media it serves. Implementations may raise
    any exception from their methods; aggregators treat every provider as
    untrusted.
    """

    ID: ClassVar[str]
    NAME: ClassVar[str] = ""
    ID_NAMESPACES: ClassVar[frozenset[str]] = frozenset()
    MEDIA_TYPES: ClassVar[frozenset[MediaType]] = frozenset({MediaType.MOVIE})

    @property
    def id(self) -> str:
        return self.ID

    @property
    def name(self) -> str:
        return self.NAME or self.ID

    def is_active(self) -> bool:
        """Whether the provider is enabled and usable right now."""
        return True

    def supports(self, media_type: MediaType) -> bool:
        if media_type is MediaType.TV_EPISODE:
            media_type = MediaType.TV_SHOW
        return media_type in self.MEDIA_TYPES

    @abstractmethod
    def search(self, options: MediaSearchAndScrapeOptions) -> list[MediaSearchResult]:
        """Search the provider for items matching ``options``."""

    @abstractmethod
    def get_metadata(self, options: MediaSearchAndScrapeOptions) -> MediaMetadata:
        """Fetch metadata for the item identified by ``options``.

        Raises:
            ScrapeError: If the provider cannot deliver metadata.
        """

    def get_episode_list(
        self, options: MediaSearchAndScrapeOptions
    ) -> list[MediaMetadata]:
        """Fetch all episodes of the show identified by ``options``."""
        raise ScrapeError(f"Provider '{self.id}' does not offer episode lists")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}:{self.id}>"
