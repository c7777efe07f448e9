"""Provider module loading helpers."""

from collections.abc import Iterable
from importlib import import_module

from mediamerge import log
from mediamerge.config.settings import MediaMergeConfig
from mediamerge.exceptions import ProviderModuleError
from mediamerge.providers.registry import ProviderRegistry

__all__ = ["REGISTER_HOOK", "build_registry", "load_provider_modules"]

REGISTER_HOOK = "register_providers"


def load_provider_modules(registry: ProviderRegistry, modules: Iterable[str]) -> None:
    """Import provider modules and let each register its providers.

    Every module must expose a ``register_providers(registry)`` function. A
    module listed twice is only loaded once.

    Args:
        registry (ProviderRegistry): The registry to populate.
        modules (Iterable[str]): Dotted module paths.

    Raises:
        ProviderModuleError: If a module cannot be imported or has no hook.
    """
    seen: set[str] = set()
    for module_name in modules:
        if not module_name or module_name in seen:
            continue
        seen.add(module_name)

        try:
            module = import_module(module_name)
        except ImportError as exc:
            raise ProviderModuleError(
                f"Could not import provider module '{module_name}': {exc}"
            ) from exc

        hook = getattr(module, REGISTER_HOOK, None)
        if not callable(hook):
            raise ProviderModuleError(
                f"Provider module '{module_name}' has no {REGISTER_HOOK}() function"
            )

        before = len(registry)
        hook(registry)
        log.info(
            f"Loaded provider module $$'{module_name}'$$ "
            f"$${{providers: {len(registry) - before}}}$$"
        )


def build_registry(config: MediaMergeConfig) -> ProviderRegistry:
    """Create a registry holding the providers of all configured modules.

    Args:
        config (MediaMergeConfig): The application configuration.

    Returns:
        ProviderRegistry: The populated registry.
    """
    registry = ProviderRegistry()
    load_provider_modules(registry, config.provider_modules)
    log.success(f"Provider registry ready $${{providers: {sorted(registry.all_ids())}}}$$")
    return registry
