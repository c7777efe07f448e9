"""Per-field provider selections of an aggregator."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from mediamerge import log
from mediamerge.config.settings import FALLBACK_SCRAPERS, SEARCH, UNDEFINED
from mediamerge.exceptions import FieldConfigError, UnknownFieldError
from mediamerge.models.fields import MetadataField, field_lookup
from mediamerge.models.metadata import IMDB, TMDB, TVDB

__all__ = [
    "MOVIE_RESTRICTIONS",
    "FieldConfiguration",
    "field_choices",
]

ChoiceFilter = Callable[[list[str]], list[str]]


def _only(provider_id: str) -> ChoiceFilter:
    return lambda ids: [i for i in ids if i == provider_id]


def _without(provider_id: str) -> ChoiceFilter:
    return lambda ids: [i for i in ids if i != provider_id]


# Fields only some providers can usefully supply. Applied when building the
# choice lists; merging itself treats every field the same.
MOVIE_RESTRICTIONS: Mapping[MetadataField, ChoiceFilter] = MappingProxyType(
    {
        MetadataField.RATINGS: _without(TVDB),
        MetadataField.TOP250: _only(IMDB),
        MetadataField.COLLECTION_NAME: _only(TMDB),
    }
)


def _parse_fallback(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            raise FieldConfigError(
                f"{FALLBACK_SCRAPERS} is not a valid JSON list: {value!r}"
            ) from exc
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise FieldConfigError(f"{FALLBACK_SCRAPERS} must be a list of provider ids")
    if not all(isinstance(item, str) for item in value):
        raise FieldConfigError(f"{FALLBACK_SCRAPERS} must only contain strings")
    return list(value)


@dataclass(frozen=True)
class FieldConfiguration:
    """Provider selection per field plus the shared fallback order.

    Built once per aggregation call and not modified afterwards. Keys are the
    aggregator's configuration keys (see ``mediamerge.models.fields``).
    """

    fields: Mapping[str, MetadataField]
    selections: Mapping[str, str] = field(default_factory=dict)
    fallback: tuple[str, ...] = ()
    search: str = UNDEFINED

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, Any], fields: Mapping[str, MetadataField]
    ) -> FieldConfiguration:
        """Parse the flat configuration map of an aggregator.

        Args:
            mapping (Mapping[str, Any]): ``search``, one entry per field (snake
                or camel case) and ``fallback_scrapers`` (list or JSON list).
            fields (Mapping[str, MetadataField]): The aggregator's field keys.

        Returns:
            FieldConfiguration: The parsed configuration.

        Raises:
            FieldConfigError: If a value has the wrong type.
        """
        lookup = field_lookup(fields)
        selections: dict[str, str] = {}
        search = UNDEFINED
        fallback: list[str] = []

        for raw_key, value in mapping.items():
            if raw_key in (FALLBACK_SCRAPERS, "fallbackScrapers"):
                fallback = _parse_fallback(value)
                continue

            if value is None:
                value = UNDEFINED
            if not isinstance(value, str):
                raise FieldConfigError(
                    f"Selection for '{raw_key}' must be a provider id, got {value!r}"
                )

            if raw_key == SEARCH:
                search = value
            elif raw_key in lookup:
                selections[lookup[raw_key]] = value
            else:
                log.debug(f"Ignoring unknown configuration key $$'{raw_key}'$$")

        return cls(
            fields=MappingProxyType(dict(fields)),
            selections=MappingProxyType(selections),
            fallback=tuple(fallback),
            search=search,
        )

    def _field_key(self, key: str) -> str:
        if key in self.fields:
            return key
        lookup = field_lookup(self.fields)
        if key not in lookup:
            raise UnknownFieldError(key)
        return lookup[key]

    def selected_provider_for(self, key: str) -> str:
        """Return the provider id selected for a field, or ``UNDEFINED``.

        Raises:
            UnknownFieldError: If ``key`` is not a field of this aggregator.
        """
        return self.selections.get(self._field_key(key), UNDEFINED) or UNDEFINED

    def fallback_chain(self) -> list[str]:
        """The fallback provider ids, without ``UNDEFINED`` and duplicates."""
        chain: list[str] = []
        for provider_id in self.fallback:
            if provider_id and provider_id != UNDEFINED and provider_id not in chain:
                chain.append(provider_id)
        return chain

    def priority_for(self, key: str) -> list[str]:
        """Providers to consult for a field, most preferred first.

        The selected provider leads, followed by the fallback chain without it.
        An unset or ``UNDEFINED`` field is skipped, so the list is empty.
        """
        primary = self.selected_provider_for(key)
        if primary == UNDEFINED:
            return []
        chain = self.fallback_chain()
        return [primary, *(provider_id for provider_id in chain if provider_id != primary)]

    def referenced_provider_ids(self, keys: Iterable[str] | None = None) -> list[str]:
        """Every provider id named by a field selection or the fallback chain.

        Args:
            keys (Iterable[str] | None): Restrict to these field keys; all
                fields of the aggregator when None.
        """
        keys = self.fields if keys is None else keys
        referenced: list[str] = []
        for key in keys:
            provider_id = self.selected_provider_for(key)
            if provider_id != UNDEFINED and provider_id not in referenced:
                referenced.append(provider_id)
        for provider_id in self.fallback_chain():
            if provider_id not in referenced:
                referenced.append(provider_id)
        return referenced


def field_choices(
    fields: Mapping[str, MetadataField],
    compatible_ids: Sequence[str],
    restrictions: Mapping[MetadataField, ChoiceFilter] | None = None,
) -> dict[str, list[str]]:
    """Build the options a configuration surface offers per key.

    Every list starts with ``UNDEFINED``; the fallback list does not offer it.

    Args:
        fields (Mapping[str, MetadataField]): The aggregator's field keys.
        compatible_ids (Sequence[str]): Registered provider ids for the media type.
        restrictions (Mapping[MetadataField, ChoiceFilter] | None): Filters for
            fields only some providers can supply.

    Returns:
        dict[str, list[str]]: Choices for ``search``, each field and the
            fallback list.
    """
    restrictions = restrictions or {}
    ids = list(compatible_ids)
    choices: dict[str, list[str]] = {SEARCH: [UNDEFINED, *ids]}
    for key, metadata_field in fields.items():
        allowed = restrictions.get(metadata_field, list)(ids)
        choices[key] = [UNDEFINED, *allowed]
    choices[FALLBACK_SCRAPERS] = ids
    return choices
