"""Configurable in-memory metadata providers for aggregator tests."""

import threading
from collections.abc import Callable, Iterable

from mediamerge.models.metadata import (
    IMDB,
    TMDB,
    MediaMetadata,
    MediaSearchResult,
    MediaType,
)
from mediamerge.models.options import MediaSearchAndScrapeOptions
from mediamerge.providers.base import MetadataProvider
from mediamerge.providers.registry import ProviderRegistry


class FakeProvider(MetadataProvider):
    """Provider returning canned data and recording the calls made to it.

    ``metadata`` may be a record, an exception to raise or a callable taking
    the options. Every call snapshots the ids the options carried.
    """

    def __init__(
        self,
        provider_id: str,
        namespaces: Iterable[str] = (TMDB, IMDB),
        metadata: MediaMetadata | Exception | Callable | None = None,
        search_results: list[MediaSearchResult] | Exception | None = None,
        episodes: list[MediaMetadata] | Exception | None = None,
        media_types: Iterable[MediaType] = (MediaType.MOVIE, MediaType.TV_SHOW),
        active: bool = True,
    ) -> None:
        self.ID = provider_id
        self.ID_NAMESPACES = frozenset(namespaces)
        self.MEDIA_TYPES = frozenset(media_types)
        self.metadata = metadata
        self.search_results = search_results or []
        self.episodes = episodes or []
        self.active = active
        self.metadata_calls: list[dict] = []
        self.search_calls = 0
        self.episode_list_calls: list[dict] = []
        self._lock = threading.Lock()

    def is_active(self) -> bool:
        return self.active

    def search(self, options: MediaSearchAndScrapeOptions) -> list[MediaSearchResult]:
        self.search_calls += 1
        if isinstance(self.search_results, Exception):
            raise self.search_results
        return [r.model_copy() for r in self.search_results]

    def get_metadata(self, options: MediaSearchAndScrapeOptions) -> MediaMetadata:
        with self._lock:
            self.metadata_calls.append(options.known_ids())
        if isinstance(self.metadata, Exception):
            raise self.metadata
        if callable(self.metadata):
            return self.metadata(options)
        if self.metadata is None:
            return MediaMetadata(provider_id=self.id)
        return self.metadata.model_copy(deep=True)

    def get_episode_list(
        self, options: MediaSearchAndScrapeOptions
    ) -> list[MediaMetadata]:
        self.episode_list_calls.append(options.known_ids())
        if isinstance(self.episodes, Exception):
            raise self.episodes
        return list(self.episodes)


def make_registry(*providers: MetadataProvider) -> ProviderRegistry:
    """A registry holding ``providers``, failing loudly on rejects."""
    registry = ProviderRegistry()
    for provider in providers:
        assert registry.register(provider), f"{provider!r} was rejected"
    return registry
