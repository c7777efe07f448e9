"""MediaMerge exception classes."""


class MediaMergeError(Exception):
    """Base class for all MediaMerge exceptions."""


# Configuration errors
class ConfigError(MediaMergeError):
    """Base class for configuration-related errors."""


class FieldConfigError(ConfigError, ValueError):
    """A field selection or fallback list could not be parsed."""


class UnknownFieldError(ConfigError, KeyError):
    """A metadata field name does not match any known field descriptor."""


# Provider registry errors
class ProviderError(MediaMergeError):
    """Base class for provider registration and lookup failures."""


class ProviderModuleError(ProviderError, ImportError):
    """A configured provider module could not be imported or has no hook."""


# Scrape errors
class ScrapeError(MediaMergeError):
    """A provider or aggregator could not deliver search results or metadata."""


class NothingFoundError(ScrapeError):
    """The aggregation produced a record without any identifiers."""

    def __init__(self, message: str = "nothing found") -> None:
        """Initialize with a default message."""
        super().__init__(message)


class FeatureNotEnabledError(ScrapeError):
    """The aggregator or its selected search provider is disabled."""

    def __init__(self, provider_id: str) -> None:
        """Remember which provider is disabled."""
        super().__init__(f"Feature not enabled for provider '{provider_id}'")
        self.provider_id = provider_id
