"""MediaMerge Configuration Settings."""

from __future__ import annotations

import json
import os
from enum import StrEnum
from functools import cached_property, lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from mediamerge.exceptions import FieldConfigError
from mediamerge.utils.logging import _get_logger

__all__ = [
    "FALLBACK_SCRAPERS",
    "SEARCH",
    "UNDEFINED",
    "LogLevel",
    "MediaMergeConfig",
    "UniversalScraperSettings",
    "get_config",
]

_log = _get_logger(__name__)

UNDEFINED = "-"
SEARCH = "search"
FALLBACK_SCRAPERS = "fallback_scrapers"

CONFIG_FILE_NAMES = ("config.yaml", "config.yml")


def get_data_path() -> Path:
    """Resolve the data directory from ``MM_DATA_PATH`` (default ``./data``)."""
    return Path(os.getenv("MM_DATA_PATH", "./data")).resolve()


def find_yaml_config_file() -> Path:
    """Locate ``config.yaml`` (or ``config.yml``) in the data path.

    Returns:
        Path: The first existing candidate, otherwise where ``config.yaml``
            would live.
    """
    data_path = get_data_path()
    candidates = [data_path / name for name in CONFIG_FILE_NAMES]
    found = next((path for path in candidates if path.is_file()), None)
    if found is None:
        return candidates[0]

    _log.debug(f"Using YAML config file: $$'{found}'$$")
    return found.resolve()


class BaseStrEnum(StrEnum):
    """String enumeration accepting values in any letter case."""

    @classmethod
    def _missing_(cls, value: object) -> BaseStrEnum | None:
        if not isinstance(value, str):
            return None
        folded = value.casefold()
        return next((m for m in cls if m.value.casefold() == folded), None)

    def __repr__(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class LogLevel(BaseStrEnum):
    """Levels accepted for ``log_level``; SUCCESS sits between INFO and WARNING."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class UniversalScraperSettings(BaseModel):
    """User selections for one aggregator (movie or TV show).

    ``fields`` maps a metadata field name to the id of the provider that
    should supply it; ``-`` or a missing entry leaves the field unfilled.
    The fallback scrapers only back up fields that have a selection.
    """

    enabled: bool = Field(default=True, description="Enable the aggregator")
    search: str = Field(
        default=UNDEFINED, description="Provider id used for searching"
    )
    fields: dict[str, str] = Field(
        default_factory=dict, description="Provider id per metadata field"
    )
    fallback_scrapers: list[str] = Field(
        default_factory=list,
        description="Ordered provider ids consulted when the selected one has no value",
    )

    @field_validator("fallback_scrapers", mode="before")
    @classmethod
    def parse_fallback_scrapers(cls, value: Any) -> Any:
        """Accept a JSON-encoded list as well as a plain list."""
        if isinstance(value, str):
            try:
                value = json.loads(value) if value.strip() else []
            except json.JSONDecodeError as exc:
                raise FieldConfigError(
                    f"fallback_scrapers is not a valid JSON list: {value!r}"
                ) from exc
        return value

    def key_value_pairs(self) -> dict[str, str]:
        """Flatten the selections into the string map read by the aggregator.

        The fallback list is serialized as a JSON array.
        """
        pairs = {SEARCH: self.search}
        pairs.update(self.fields)
        pairs[FALLBACK_SCRAPERS] = json.dumps(self.fallback_scrapers)
        return pairs


class MediaMergeConfig(BaseSettings):
    """Application settings, sourced from ``config.yaml`` in the data path."""

    log_level: LogLevel = Field(
        default=LogLevel.INFO, description="Logging level for the application"
    )
    provider_modules: list[str] = Field(
        default_factory=list,
        description="Module paths exposing a register_providers(registry) hook",
    )
    max_workers: int = Field(
        default=8, ge=1, le=64, description="Concurrent provider fetches"
    )
    bridge_provider: str = Field(
        default="tmdb",
        description="Provider used to resolve identifiers across namespaces",
    )
    movie: UniversalScraperSettings = Field(
        default_factory=UniversalScraperSettings,
        description="Movie aggregator selections",
    )
    tvshow: UniversalScraperSettings = Field(
        default_factory=UniversalScraperSettings,
        description="TV show aggregator selections",
    )

    @cached_property
    def data_path(self) -> Path:
        """Get the data path for MediaMerge.

        Returns:
            Path: The data path resolved from the environment or default location.
        """
        return get_data_path()

    def __str__(self) -> str:
        """Creates a human-readable summary of the configuration."""
        return (
            f"MediaMerge Config: DATA_PATH: {self.data_path}, "
            f"LOG_LEVEL: {self.log_level}, MAX_WORKERS: {self.max_workers}, "
            f"PROVIDER_MODULES: {self.provider_modules}"
        )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of configuration sources."""
        return (
            init_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=find_yaml_config_file()),
        )

    model_config = SettingsConfigDict(extra="ignore")


@lru_cache(maxsize=1)
def get_config() -> MediaMergeConfig:
    """Get the singleton instance of MediaMergeConfig.

    Returns:
        MediaMergeConfig: The singleton configuration instance.
    """
    return MediaMergeConfig()
