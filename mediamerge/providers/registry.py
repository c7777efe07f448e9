"""Process-wide table of the metadata providers aggregators may use."""

import threading
from collections.abc import Iterable

from mediamerge import log
from mediamerge.models.metadata import IMDB, TMDB, TVDB, MediaType
from mediamerge.providers.base import (
    UNIVERSAL_MOVIE,
    UNIVERSAL_TVSHOW,
    MetadataProvider,
)

__all__ = ["ProviderRegistry"]


class ProviderRegistry:
    """Registry of metadata providers keyed by provider id.

    Populated once at startup and read concurrently afterwards. Writes are
    serialized and replace the table as a whole, so readers never need a lock.
    """

    def __init__(
        self,
        accepted_namespaces: Iterable[str] = (IMDB, TMDB, TVDB),
        reserved_ids: Iterable[str] = (UNIVERSAL_MOVIE, UNIVERSAL_TVSHOW),
    ) -> None:
        self.accepted_namespaces = frozenset(accepted_namespaces)
        self.reserved_ids = frozenset(reserved_ids)
        self._providers: dict[str, MetadataProvider] = {}
        self._lock = threading.Lock()

    def register(self, provider: MetadataProvider) -> bool:
        """Register a provider.

        Aggregator ids, already registered ids and providers that cannot scrape
        by any accepted namespace are rejected.

        Args:
            provider (MetadataProvider): The provider to add.

        Returns:
            bool: True if the provider was added, False if it was rejected.
        """
        provider_id = provider.id
        if provider_id in self.reserved_ids:
            log.debug(f"Refusing to register aggregator $$'{provider_id}'$$")
            return False
        if not provider.ID_NAMESPACES & self.accepted_namespaces:
            log.debug(
                f"Skipping provider $$'{provider_id}'$$ without a supported id "
                f"namespace $${{namespaces: {sorted(provider.ID_NAMESPACES)}}}$$"
            )
            return False

        with self._lock:
            if provider_id in self._providers:
                log.debug(f"Provider $$'{provider_id}'$$ is already registered")
                return False
            self._providers = {**self._providers, provider_id: provider}

        log.debug(
            f"Registered provider $$'{provider_id}'$$ "
            f"$${{namespaces: {sorted(provider.ID_NAMESPACES)}}}$$"
        )
        return True

    def get(self, provider_id: str) -> MetadataProvider | None:
        return self._providers.get(provider_id)

    def all_ids(self) -> set[str]:
        return set(self._providers)

    def compatible_ids(self, media_type: MediaType) -> list[str]:
        """Ids of the providers serving ``media_type``, in registration order."""
        return [
            provider_id
            for provider_id, provider in self._providers.items()
            if provider.supports(media_type)
        ]

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._providers

    def __len__(self) -> int:
        return len(self._providers)
