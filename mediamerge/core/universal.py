"""Aggregators combining the results of several metadata providers."""

from __future__ import annotations

from abc import ABC
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import ClassVar

from mediamerge import log
from mediamerge.config.settings import MediaMergeConfig, UniversalScraperSettings
from mediamerge.core.field_config import (
    MOVIE_RESTRICTIONS,
    ChoiceFilter,
    FieldConfiguration,
    field_choices,
)
from mediamerge.core.ids import (
    IdNamespaceStrategy,
    get_movie_strategies,
    get_tvshow_strategies,
)
from mediamerge.core.merger import ResultMerger
from mediamerge.core.resolver import IdResolver
from mediamerge.core.scheduler import FetchScheduler
from mediamerge.exceptions import FeatureNotEnabledError, NothingFoundError, ScrapeError
from mediamerge.models.fields import (
    EPISODE_FIELDS,
    MOVIE_FIELDS,
    TVSHOW_FIELDS,
    MetadataField,
)
from mediamerge.models.metadata import (
    IMDB,
    TMDB,
    TVDB,
    MediaMetadata,
    MediaSearchResult,
    MediaType,
    sort_search_results,
)
from mediamerge.models.options import (
    MediaSearchAndScrapeOptions,
    TvShowEpisodeSearchAndScrapeOptions,
)
from mediamerge.providers.base import UNIVERSAL_MOVIE, UNIVERSAL_TVSHOW, MetadataProvider
from mediamerge.providers.registry import ProviderRegistry

__all__ = [
    "UniversalMetadataProvider",
    "UniversalMovieMetadataProvider",
    "UniversalTvShowMetadataProvider",
]

SettingsSource = Callable[[], UniversalScraperSettings]


class UniversalMetadataProvider(MetadataProvider, ABC):
    """A meta provider collecting data from several other providers.

    The selections are read from ``settings_source`` once per call, so
    changes made by the user apply to the next call without rebuilding the
    aggregator. Registry and scheduler are shared with other aggregators.
    """

    FIELDS: ClassVar[Mapping[str, MetadataField]]
    RESTRICTIONS: ClassVar[Mapping[MetadataField, ChoiceFilter]] = {}

    def __init__(
        self,
        registry: ProviderRegistry,
        scheduler: FetchScheduler,
        settings_source: SettingsSource,
        strategies: Sequence[IdNamespaceStrategy],
        bridge_provider_id: str = TMDB,
    ) -> None:
        self.registry = registry
        self.scheduler = scheduler
        self.settings_source = settings_source
        self.resolver = IdResolver(registry, strategies, bridge_provider_id)
        self.merger = ResultMerger()

    def is_active(self) -> bool:
        return self.settings_source().enabled

    def field_configuration(self) -> FieldConfiguration:
        """Read the current selections of this aggregator."""
        return FieldConfiguration.from_mapping(
            self.settings_source().key_value_pairs(), self.FIELDS
        )

    def choices(self) -> dict[str, list[str]]:
        """Provider ids the user may pick per configuration key."""
        media_type = next(iter(self.MEDIA_TYPES))
        return field_choices(
            self.FIELDS, self.registry.compatible_ids(media_type), self.RESTRICTIONS
        )

    def _ensure_active(self) -> None:
        if not self.is_active():
            raise FeatureNotEnabledError(self.id)

    def search(self, options: MediaSearchAndScrapeOptions) -> list[MediaSearchResult]:
        """Search with the provider selected for searching.

        Results are relabelled with this aggregator's id and scored against
        the query when the provider did not score them.

        Raises:
            FeatureNotEnabledError: If this aggregator or the search provider
                is disabled.
            ScrapeError: If the search provider fails.
        """
        log.debug(f"search(): {options}")
        self._ensure_active()

        search_id = self.field_configuration().search
        mp = self.registry.get(search_id)
        if mp is None:
            return []
        if not mp.is_active():
            raise FeatureNotEnabledError(mp.id)

        try:
            found = mp.search(options)
        except ScrapeError as exc:
            log.warning(f"Could not call search method of $$'{mp.id}'$$ - {exc}")
            raise
        except Exception as exc:
            log.warning(f"Could not call search method of $$'{mp.id}'$$ - {exc}")
            raise ScrapeError(f"Search of '{mp.id}' failed: {exc}") from exc

        results: list[MediaSearchResult] = []
        for result in found:
            result = result.model_copy(update={"provider_id": self.id})
            if result.score == 0 and options.search_query:
                result.calculate_score(options)
            results.append(result)

        return sort_search_results(results)

    def _aggregate(
        self,
        options: MediaSearchAndScrapeOptions,
        config: FieldConfiguration,
        keys: Iterable[str],
        seed: MediaSearchAndScrapeOptions | None = None,
    ) -> MediaMetadata:
        """Resolve ids, fetch from all relevant providers and merge.

        Args:
            options (MediaSearchAndScrapeOptions): The request; ids resolved
                along the way are written into it.
            config (FieldConfiguration): The selections of this call.
            keys (Iterable[str]): Field keys to fill.
            seed (MediaSearchAndScrapeOptions | None): Show-level options to
                resolve first, for episode requests.

        Raises:
            NothingFoundError: If the merged record carries no ids.
        """
        keys = list(keys)
        md = MediaMetadata(provider_id=self.id)

        providers = self.resolver.relevant_providers(
            config.referenced_provider_ids(keys), self.MEDIA_TYPES
        )
        if providers:
            if seed is not None:
                self.resolver.inject_missing_ids(providers, seed)
                if isinstance(options, TvShowEpisodeSearchAndScrapeOptions):
                    for namespace, value in seed.ids.items():
                        options.tvshow_ids.setdefault(namespace, value)

            cached = self.resolver.inject_missing_ids(providers, options)
            providers = self.resolver.filter_servable(providers, options)
            results = self.scheduler.fetch_all(providers, options, cached)
            self.merger.merge(md, config, results, keys)
        else:
            log.debug("No usable provider selected")

        if not md.ids:
            raise NothingFoundError()

        return md


class UniversalMovieMetadataProvider(UniversalMetadataProvider):
    """Movie aggregator."""

    ID = UNIVERSAL_MOVIE
    NAME = "Universal movie scraper"
    ID_NAMESPACES = frozenset({TMDB, IMDB})
    MEDIA_TYPES = frozenset({MediaType.MOVIE})
    FIELDS = MOVIE_FIELDS
    RESTRICTIONS = MOVIE_RESTRICTIONS

    def __init__(
        self,
        registry: ProviderRegistry,
        scheduler: FetchScheduler,
        settings_source: SettingsSource,
        bridge_provider_id: str = TMDB,
    ) -> None:
        super().__init__(
            registry,
            scheduler,
            settings_source,
            get_movie_strategies(),
            bridge_provider_id,
        )

    @classmethod
    def from_config(
        cls,
        config: MediaMergeConfig,
        registry: ProviderRegistry,
        scheduler: FetchScheduler,
    ) -> UniversalMovieMetadataProvider:
        return cls(registry, scheduler, lambda: config.movie, config.bridge_provider)

    def get_metadata(self, options: MediaSearchAndScrapeOptions) -> MediaMetadata:
        """Scrape a movie from all selected providers and merge the results.

        Ids resolved on the way are written into ``options``.

        Raises:
            FeatureNotEnabledError: If the aggregator is disabled.
            NothingFoundError: If no provider delivered any id.
        """
        log.debug(f"getMetadata(): {options}")
        self._ensure_active()

        config = self.field_configuration()
        md = self._aggregate(options, config, config.fields)
        log.success(f"Scraped movie $$'{md.title}'$$ $${{ids: {md.ids}}}$$")
        return md


class UniversalTvShowMetadataProvider(UniversalMetadataProvider):
    """TV show aggregator, covering shows, episodes and episode lists."""

    ID = UNIVERSAL_TVSHOW
    NAME = "Universal TV show scraper"
    ID_NAMESPACES = frozenset({TMDB, IMDB, TVDB})
    MEDIA_TYPES = frozenset({MediaType.TV_SHOW})
    FIELDS = {**TVSHOW_FIELDS, **EPISODE_FIELDS}

    def __init__(
        self,
        registry: ProviderRegistry,
        scheduler: FetchScheduler,
        settings_source: SettingsSource,
        bridge_provider_id: str = TMDB,
    ) -> None:
        super().__init__(
            registry,
            scheduler,
            settings_source,
            get_tvshow_strategies(),
            bridge_provider_id,
        )

    @classmethod
    def from_config(
        cls,
        config: MediaMergeConfig,
        registry: ProviderRegistry,
        scheduler: FetchScheduler,
    ) -> UniversalTvShowMetadataProvider:
        return cls(registry, scheduler, lambda: config.tvshow, config.bridge_provider)

    def get_metadata(self, options: MediaSearchAndScrapeOptions) -> MediaMetadata:
        """Scrape a show (or, for episode options, an episode) and merge.

        Raises:
            FeatureNotEnabledError: If the aggregator is disabled.
            NothingFoundError: If no provider delivered any id.
        """
        if isinstance(options, TvShowEpisodeSearchAndScrapeOptions):
            return self.get_episode_metadata(options)

        log.debug(f"getMetadata(): {options}")
        self._ensure_active()

        config = self.field_configuration()
        md = self._aggregate(options, config, TVSHOW_FIELDS)
        log.success(f"Scraped TV show $$'{md.title}'$$ $${{ids: {md.ids}}}$$")
        return md

    def get_episode_metadata(
        self, options: TvShowEpisodeSearchAndScrapeOptions
    ) -> MediaMetadata:
        """Scrape a single episode and merge the ``episode_*`` selections.

        Show ids are resolved first and added to ``options.tvshow_ids``; the
        episode ids are resolved afterwards.

        Raises:
            FeatureNotEnabledError: If the aggregator is disabled.
            NothingFoundError: If no provider delivered any id.
        """
        log.debug(f"getMetadata(): {options}")
        self._ensure_active()

        config = self.field_configuration()
        md = self._aggregate(
            options, config, EPISODE_FIELDS, seed=options.create_tvshow_options()
        )
        log.success(
            f"Scraped episode $${{S{md.season_number:02d}E{md.episode_number:02d}}}$$ "
            f"$$'{md.title}'$$"
        )
        return md

    def get_episode_list(
        self, options: MediaSearchAndScrapeOptions
    ) -> list[MediaMetadata]:
        """List all episodes via the provider selected for ``episodes``.

        Raises:
            FeatureNotEnabledError: If the aggregator is disabled.
            ScrapeError: If the selected provider fails.
        """
        log.debug(f"getEpisodeList(): {options}")
        self._ensure_active()

        provider_id = self.field_configuration().selected_provider_for("episodes")
        mp = self.registry.get(provider_id)
        if mp is None or not mp.is_active():
            return []

        self.resolver.inject_missing_ids([mp], options)

        try:
            return list(mp.get_episode_list(options))
        except ScrapeError:
            raise
        except Exception as exc:
            log.warning(f"Could not get the episode list of $$'{mp.id}'$$ - {exc}")
            raise ScrapeError(f"Episode list of '{mp.id}' failed: {exc}") from exc
