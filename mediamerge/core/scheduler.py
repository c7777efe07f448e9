"""Concurrent provider fetches on a shared worker pool."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor

from mediamerge import log
from mediamerge.models.metadata import MediaMetadata
from mediamerge.models.options import MediaSearchAndScrapeOptions
from mediamerge.providers.base import MetadataProvider

__all__ = ["FetchScheduler"]

FetchFn = Callable[[MetadataProvider, MediaSearchAndScrapeOptions], MediaMetadata | None]


def _get_metadata(
    provider: MetadataProvider, options: MediaSearchAndScrapeOptions
) -> MediaMetadata | None:
    return provider.get_metadata(options)


class FetchScheduler:
    """Runs one metadata fetch per provider on a bounded thread pool.

    The pool is shared by every call made through the scheduler and lives
    until ``shutdown`` is called. A call blocks until all of its fetches have
    finished; a fetch that raises is logged and left out of the result.
    """

    def __init__(self, max_workers: int = 8, thread_name_prefix: str = "mm-fetch"):
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=thread_name_prefix
        )

    def fetch_all(
        self,
        providers: Iterable[MetadataProvider],
        options: MediaSearchAndScrapeOptions,
        already_fetched: Mapping[str, MediaMetadata] | None = None,
        fetch: FetchFn = _get_metadata,
    ) -> dict[str, MediaMetadata]:
        """Fetch metadata from every provider not already fetched.

        Args:
            providers (Iterable[MetadataProvider]): Providers to query.
            options (MediaSearchAndScrapeOptions): Shared, read-only request.
            already_fetched (Mapping[str, MediaMetadata] | None): Results
                obtained earlier in the call, keyed by provider id.
            fetch (FetchFn): The call to make per provider.

        Returns:
            dict[str, MediaMetadata]: Results keyed by provider id, including
                ``already_fetched``.
        """
        results: dict[str, MediaMetadata] = dict(already_fetched or {})

        futures: dict[str, Future[MediaMetadata | None]] = {}
        for provider in providers:
            if provider.id in results or provider.id in futures:
                continue
            if not provider.is_active():
                continue
            futures[provider.id] = self._executor.submit(fetch, provider, options)

        log.debug(
            f"Waiting for $${{{len(futures)}}}$$ provider fetches "
            f"$${{{', '.join(futures)}}}$$"
        )

        for provider_id, future in futures.items():
            try:
                md = future.result()
            except Exception as exc:
                log.warning(f"Could not get a result from $$'{provider_id}'$$: {exc}")
                continue
            if md is None:
                log.debug(f"Provider $$'{provider_id}'$$ returned no metadata")
                continue
            results[provider_id] = md

        return results

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker pool; pending fetches finish first when ``wait``."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> FetchScheduler:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()
