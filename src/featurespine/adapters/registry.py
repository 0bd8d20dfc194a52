"""Feature adapter registry and factory.

Manifesto:
    Consumers should never hard-code adapter class names.  The registry
    maps adapter names to factories and ``get_adapter()`` builds a
    configured instance, optionally wrapped in a :class:`MemoizableAdapter`
    around a cache store the caller provides.

Features:
    - ``AdapterRegistry`` singleton with pre-registered defaults
    - ``register()`` for custom / third-party adapters
    - ``get_adapter()`` factory: name + kwargs (+ cache) → adapter
    - ``build_adapter()`` factory driven by ``FeatureSpineSettings``

Tags:
    featurespine, adapters, registry, factory, singleton
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from typing import Any

from featurespine.adapters.base import Adapter
from featurespine.adapters.memoizable import MemoizableAdapter
from featurespine.adapters.memory import MemoryAdapter
from featurespine.core.errors import ConfigError
from featurespine.core.logging import get_logger
from featurespine.core.settings import FeatureSpineSettings, get_settings

logger = get_logger(__name__)

AdapterFactory = Callable[..., Adapter]


class AdapterRegistry:
    """
    Registry for feature adapter factories.

    Pre-registered adapters:
    - ``memory``: :class:`MemoryAdapter`
    """

    def __init__(self):
        self._factories: dict[str, AdapterFactory] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default adapters."""
        self._factories["memory"] = MemoryAdapter

    def register(self, name: str, factory: AdapterFactory) -> None:
        """Register an adapter factory."""
        self._factories[name.lower()] = factory

    def unregister(self, name: str) -> None:
        """Remove an adapter factory (mainly for testing)."""
        self._factories.pop(name.lower(), None)

    def create(self, name: str, **kwargs: Any) -> Adapter:
        """Create an adapter by name."""
        name = name.lower()
        if name not in self._factories:
            raise ConfigError(f"Unknown feature adapter: {name}").with_context(adapter=name)
        return self._factories[name](**kwargs)

    def list_adapters(self) -> list[str]:
        """List registered adapter names."""
        return sorted(self._factories.keys())


# Global registry
adapter_registry = AdapterRegistry()


def get_adapter(
    name: str,
    *,
    cache: MutableMapping[str, Any] | None = None,
    **kwargs: Any,
) -> Adapter:
    """
    Get a feature adapter by name.

    When ``cache`` is given the adapter is wrapped in a
    :class:`MemoizableAdapter` that memoizes into that store.

    Usage:
        adapter = get_adapter("memory")
        per_request = get_adapter("memory", cache={})
    """
    adapter = adapter_registry.create(name, **kwargs)
    if cache is None:
        return adapter
    logger.debug("adapter.memoized", adapter=name)
    return MemoizableAdapter(adapter, cache)


def build_adapter(
    settings: FeatureSpineSettings | None = None,
    *,
    cache: MutableMapping[str, Any] | None = None,
    **kwargs: Any,
) -> Adapter:
    """Build the adapter named by ``settings.adapter`` (default: cached settings)."""
    settings = settings or get_settings()
    return get_adapter(settings.adapter, cache=cache, **kwargs)


__all__ = [
    "AdapterFactory",
    "AdapterRegistry",
    "adapter_registry",
    "build_adapter",
    "get_adapter",
]
