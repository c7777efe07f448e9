"""Cross-namespace identifier resolution ahead of a provider fan-out."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from mediamerge import log
from mediamerge.core.ids import IdNamespaceStrategy
from mediamerge.models.metadata import MediaMetadata, MediaType
from mediamerge.models.options import MediaSearchAndScrapeOptions
from mediamerge.providers.base import MetadataProvider
from mediamerge.providers.registry import ProviderRegistry

__all__ = ["IdResolver"]


class IdResolver:
    """Makes sure a request carries the ids the selected providers scrape by.

    Providers declare the namespaces they can scrape by. When one of them
    cannot be served by the ids of the request, a single call to the bridge
    provider (which accepts and returns ids of several namespaces) is used to
    fill the gaps. The bridge response is handed back so it does not have to
    be fetched a second time.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        strategies: Sequence[IdNamespaceStrategy],
        bridge_provider_id: str,
    ) -> None:
        self.registry = registry
        self.strategies = list(strategies)
        self.bridge_provider_id = bridge_provider_id

    def relevant_providers(
        self,
        provider_ids: Iterable[str],
        media_types: Iterable[MediaType] | None = None,
    ) -> list[MetadataProvider]:
        """Resolve ids to registered, active providers, keeping their order.

        Args:
            provider_ids (Iterable[str]): Ids in order of preference.
            media_types (Iterable[MediaType] | None): Drop providers that
                support none of these; no filtering when None.
        """
        media_types = None if media_types is None else list(media_types)
        providers: list[MetadataProvider] = []
        for provider_id in provider_ids:
            provider = self.registry.get(provider_id)
            if provider is None:
                log.debug(f"Provider $$'{provider_id}'$$ is not registered")
                continue
            if media_types is not None and not any(
                provider.supports(media_type) for media_type in media_types
            ):
                log.debug(
                    f"Provider $$'{provider_id}'$$ does not support "
                    f"$${{{', '.join(sorted(media_types))}}}$$"
                )
                continue
            if not provider.is_active():
                log.debug(f"Provider $$'{provider_id}'$$ is not active")
                continue
            if provider not in providers:
                providers.append(provider)
        return providers

    def present_namespaces(self, options: MediaSearchAndScrapeOptions) -> set[str]:
        """Namespaces for which ``options`` holds a valid id.

        Episode requests count the ids of their show as well.
        """
        return self._valid_namespaces(options.known_ids())

    def _valid_namespaces(self, ids: Mapping[str, Any]) -> set[str]:
        return {
            strategy.namespace
            for strategy in self.strategies
            if strategy.is_valid(ids.get(strategy.namespace))
        }

    def needed_namespaces(self, provider: MetadataProvider) -> set[str]:
        """Namespaces of the provider this resolver knows how to validate."""
        return {s.namespace for s in self.strategies} & provider.ID_NAMESPACES

    def can_serve(self, provider: MetadataProvider, present: set[str]) -> bool:
        """A provider needing no known namespace can always be queried."""
        needed = self.needed_namespaces(provider)
        return not needed or bool(needed & present)

    def inject_missing_ids(
        self,
        providers: Sequence[MetadataProvider],
        options: MediaSearchAndScrapeOptions,
    ) -> dict[str, MediaMetadata]:
        """Fill in ids the providers need, via at most one bridge call.

        Only the request's own ids are considered: an episode request is
        bridged from and into its episode ids, never its show ids. Resolved
        ids are written into ``options``.

        Args:
            providers (Sequence[MetadataProvider]): Providers about to be queried.
            options (MediaSearchAndScrapeOptions): The request; mutated in place.

        Returns:
            dict[str, MediaMetadata]: The bridge response keyed by the bridge
                provider id, or an empty dict if no bridge call succeeded.
        """
        present = self._valid_namespaces(options.ids)
        starving = [mp for mp in providers if not self.can_serve(mp, present)]
        if not starving:
            return {}

        if not present:
            log.debug("No usable ids in the request, nothing to resolve ids from")
            return {}

        missing = {
            namespace
            for mp in starving
            for namespace in self.needed_namespaces(mp)
            if namespace not in present
        }
        log.debug(
            f"Providers $${{{', '.join(mp.id for mp in starving)}}}$$ need ids "
            f"$${{{', '.join(sorted(missing))}}}$$"
        )

        md = self._fetch_bridge(options, present)
        if md is None:
            return {}

        for strategy in self.strategies:
            if strategy.is_valid(options.get_id(strategy.namespace)):
                continue
            value = strategy.parse(md.get_id(strategy.namespace))
            if value is None:
                log.debug(f"Bridge response has no valid $$'{strategy.namespace}'$$ id")
                continue
            options.set_id(strategy.namespace, value)
            log.debug(
                f"Resolved $$'{strategy.namespace}'$$ id $$'{value}'$$ via "
                f"$$'{self.bridge_provider_id}'$$"
            )

        return {self.bridge_provider_id: md}

    def _fetch_bridge(
        self, options: MediaSearchAndScrapeOptions, present: set[str]
    ) -> MediaMetadata | None:
        bridge = self.registry.get(self.bridge_provider_id)
        if bridge is None or not bridge.is_active():
            log.debug(
                f"Bridge provider $$'{self.bridge_provider_id}'$$ is not available"
            )
            return None
        if not self.can_serve(bridge, present):
            log.debug(
                f"Bridge provider $$'{bridge.id}'$$ cannot scrape by "
                f"$${{{', '.join(sorted(present))}}}$$"
            )
            return None

        try:
            return bridge.get_metadata(options)
        except Exception as exc:
            log.warning(f"Could not resolve ids via $$'{bridge.id}'$$: {exc}")
            return None

    def filter_servable(
        self,
        providers: Sequence[MetadataProvider],
        options: MediaSearchAndScrapeOptions,
    ) -> list[MetadataProvider]:
        """Drop providers that still lack every namespace they scrape by."""
        present = self.present_namespaces(options)
        servable: list[MetadataProvider] = []
        for mp in providers:
            if self.can_serve(mp, present):
                servable.append(mp)
            else:
                log.debug(
                    f"Skipping $$'{mp.id}'$$, no "
                    f"$${{{', '.join(sorted(mp.ID_NAMESPACES))}}}$$ id available"
                )
        return servable
