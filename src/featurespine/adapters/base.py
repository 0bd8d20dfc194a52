"""
Adapter protocol shared by every feature storage backend.

Adapters are structural: anything that provides these methods can be used
where an ``Adapter`` is expected, including the memoizing decorator that
wraps another adapter.

Architecture:
    ::

        Adapter (Protocol)
        ├── MemoryAdapter       in-process reference backend
        └── MemoizableAdapter   read-through cache in front of any Adapter

        Reads:  features() → set[str]
                get(key) → FeatureConfig
                get_multi(keys) → dict[str, FeatureConfig]
                get_all() → Mapping[str, FeatureConfig]
        Writes: add(key), remove(key), clear(key)
                enable(key, gate, target), disable(key, gate, target)

Tags:
    adapter, protocol, feature-toggle, featurespine
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from featurespine.core.gates import Gate

FeatureKey = str
FeatureConfig = dict[str, Any]


@runtime_checkable
class Adapter(Protocol):
    """Protocol for feature storage backends.

    Every write returns whatever the backend reports (``True`` for the
    bundled backends); callers of a wrapping adapter see that value
    unchanged.
    """

    name: str

    def features(self) -> set[FeatureKey]:
        """Return the keys of every known feature."""
        ...

    def get(self, key: FeatureKey) -> FeatureConfig:
        """Return the gate configuration for one feature.

        Unknown features yield :func:`~featurespine.core.gates.default_config`.
        """
        ...

    def get_multi(self, keys: Iterable[FeatureKey]) -> dict[FeatureKey, FeatureConfig]:
        """Return configurations for several features in one call."""
        ...

    def get_all(self) -> Mapping[FeatureKey, FeatureConfig]:
        """Return configurations for every known feature."""
        ...

    def add(self, key: FeatureKey) -> Any:
        """Register a feature."""
        ...

    def remove(self, key: FeatureKey) -> Any:
        """Forget a feature and its configuration."""
        ...

    def clear(self, key: FeatureKey) -> Any:
        """Reset a feature's configuration; the feature stays known."""
        ...

    def enable(self, key: FeatureKey, gate: Gate | str, target: Any) -> Any:
        """Turn a gate on for ``target``."""
        ...

    def disable(self, key: FeatureKey, gate: Gate | str, target: Any) -> Any:
        """Turn a gate off for ``target``."""
        ...


__all__ = [
    "Adapter",
    "FeatureConfig",
    "FeatureKey",
]
