"""Wiring of registry, worker pool and aggregators for one process."""

from __future__ import annotations

from mediamerge import log
from mediamerge.config.settings import MediaMergeConfig, get_config
from mediamerge.core.providers import build_registry
from mediamerge.core.scheduler import FetchScheduler
from mediamerge.core.universal import (
    UniversalMovieMetadataProvider,
    UniversalTvShowMetadataProvider,
)
from mediamerge.providers.registry import ProviderRegistry

__all__ = ["MediaMergeEngine"]


class MediaMergeEngine:
    """Owns the shared worker pool and the aggregators built on it.

    Use as a context manager, or call ``close`` at process teardown to stop
    the worker pool.
    """

    def __init__(
        self,
        config: MediaMergeConfig | None = None,
        registry: ProviderRegistry | None = None,
    ) -> None:
        self.config = config or get_config()
        self.registry = registry if registry is not None else build_registry(self.config)
        self.scheduler = FetchScheduler(max_workers=self.config.max_workers)
        self.movie = UniversalMovieMetadataProvider.from_config(
            self.config, self.registry, self.scheduler
        )
        self.tvshow = UniversalTvShowMetadataProvider.from_config(
            self.config, self.registry, self.scheduler
        )
        log.info(f"Engine started: {self.config}")

    def close(self) -> None:
        log.info("Shutting down provider worker pool")
        self.scheduler.shutdown()

    def __enter__(self) -> MediaMergeEngine:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
