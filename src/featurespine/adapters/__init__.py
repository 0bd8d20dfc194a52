"""Feature adapters -- storage backends and the memoizing decorator.

Architecture::

    Adapter (base.py)               Structural protocol every backend satisfies
        |-- MemoryAdapter           In-process backend (memory.py)
        |-- MemoizableAdapter       Read-through cache around any Adapter

    DefaultedConfigMap (config_map.py)  get_all() result with default lookups
    AdapterRegistry (registry.py)       Singleton: name -> adapter factory

Modules
-------
base            Adapter protocol + FeatureKey / FeatureConfig aliases
config_map      DefaultedConfigMap + lookup()
memory          In-memory backend
memoizable      Memoizing decorator
registry        AdapterRegistry singleton + get_adapter() / build_adapter()
"""

from .base import Adapter, FeatureConfig, FeatureKey
from .config_map import DefaultedConfigMap, lookup
from .memoizable import ALL_FEATURE_KEYS, ALL_LOADED, MemoizableAdapter
from .memory import MemoryAdapter
from .registry import AdapterRegistry, adapter_registry, build_adapter, get_adapter

__all__ = [
    # Protocol / types
    "Adapter",
    "FeatureConfig",
    "FeatureKey",
    # Results
    "DefaultedConfigMap",
    "lookup",
    # Implementations
    "MemoryAdapter",
    "MemoizableAdapter",
    "ALL_FEATURE_KEYS",
    "ALL_LOADED",
    # Registry
    "AdapterRegistry",
    "adapter_registry",
    "build_adapter",
    "get_adapter",
]
