"""Field-by-field merge of the results of several providers."""

from collections.abc import Iterable, Mapping
from copy import deepcopy
from typing import Any

from mediamerge import log
from mediamerge.core.field_config import FieldConfiguration
from mediamerge.models.fields import FIELD_DESCRIPTORS, is_value_filled
from mediamerge.models.metadata import MediaMetadata

__all__ = ["ResultMerger"]


class ResultMerger:
    """Builds one record out of per-provider results.

    Ids are united across all results. Every other field is taken from the
    first provider in the field's priority list whose value is present.
    The outcome only depends on the result map, never on the order the
    results arrived in.
    """

    def merge_ids(
        self, target: MediaMetadata, results: Mapping[str, MediaMetadata]
    ) -> None:
        # provider id spaces are disjoint, so no precedence is needed
        for md in results.values():
            for namespace, value in md.ids.items():
                target.set_id(namespace, value)

    def assign_value(
        self,
        target: MediaMetadata,
        key: str,
        config: FieldConfiguration,
        results: Mapping[str, MediaMetadata],
    ) -> str | None:
        """Copy the first present value of a field into ``target``.

        Returns:
            str | None: The id of the provider the value was taken from.
        """
        descriptor = FIELD_DESCRIPTORS[config.fields[key]]
        for provider_id in config.priority_for(key):
            md = results.get(provider_id)
            if md is None:
                continue

            value: Any = descriptor.getter(md)
            if is_value_filled(value):
                descriptor.setter(target, deepcopy(value))
                return provider_id
        return None

    def merge(
        self,
        target: MediaMetadata,
        config: FieldConfiguration,
        results: Mapping[str, MediaMetadata],
        keys: Iterable[str] | None = None,
    ) -> MediaMetadata:
        """Merge ``results`` into ``target`` following ``config``.

        Args:
            target (MediaMetadata): The record to fill; modified in place.
            config (FieldConfiguration): Field selections and fallback order.
            results (Mapping[str, MediaMetadata]): Results keyed by provider id.
            keys (Iterable[str] | None): Field keys to merge; all when None.

        Returns:
            MediaMetadata: ``target``.
        """
        self.merge_ids(target, results)

        sources: dict[str, str] = {}
        for key in config.fields if keys is None else keys:
            provider_id = self.assign_value(target, key, config, results)
            if provider_id is not None:
                sources[key] = provider_id

        log.debug(f"Merged fields $${{{sources}}}$$ ids $${{{target.ids}}}$$")
        return target
