"""
Memoizing adapter: a read-through cache in front of any feature adapter.

``MemoizableAdapter`` exposes the same operations as the adapter it wraps.
Reads are answered from a cache store the caller owns (typically a fresh
``dict`` per request); writes go to the wrapped adapter first and then expire
the cache entries they made stale.

Manifesto:
    A single request often asks about the same features many times. Going to
    the backend for each question turns one page render into dozens of
    round trips. Memoizing for the lifetime of a unit of work removes the
    repeats without ever serving data older than that unit of work.

    - **Caller-owned store:** The adapter never creates, resets or replaces it
    - **Write-through invalidation:** Expire only after the backend succeeded
    - **Batched reads:** ``get_multi`` asks the backend only for what is missing
    - **Failures pass through:** Nothing is cached, retried or rewrapped

Architecture:
    ::

        cache store (caller-owned MutableMapping)
        ├── "all_feature_keys"  → set of every feature key
        ├── "all_loaded"        → True once get_all() filled the cache
        └── "feature/<key>"     → configuration of one feature

        features()        read-through on "all_feature_keys"
        get(key)          read-through on "feature/<key>"
        get_multi(keys)   one backend call for the uncached subset
        get_all()         one backend call, then served from cache
        add(key)          expire feature set
        remove(key)       expire feature set + "feature/<key>"
        clear/enable/disable(key, ...)  expire "feature/<key>"

Examples:
    >>> from featurespine.adapters.memory import MemoryAdapter
    >>> cache = {}
    >>> adapter = MemoizableAdapter(MemoryAdapter(), cache)
    >>> adapter.enable("search", Gate.BOOLEAN, True)
    True
    >>> adapter.get("search")["boolean"]
    True
    >>> MemoizableAdapter.key_for("search") in cache
    True

Guardrails:
    ❌ DON'T: Share one cache store across requests or processes
    ✅ DO: Hand each unit of work its own store and drop it afterwards

    ❌ DON'T: Write to the backend behind this adapter's back
    ✅ DO: Route every write through the adapter so it can expire entries

    ❌ DON'T: Leave structlog unconfigured in production (its defaults print
       every ``memoize.hit`` and ``memoize.miss`` debug event)
    ✅ DO: Call ``configure_logging`` at startup with INFO or above

Tags:
    memoization, cache, adapter, decorator, feature-toggle, featurespine
"""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping
from typing import Any

from featurespine.adapters.base import Adapter, FeatureConfig, FeatureKey
from featurespine.adapters.config_map import DefaultedConfigMap
from featurespine.core.gates import Gate
from featurespine.core.logging import get_logger

logger = get_logger(__name__)

ALL_FEATURE_KEYS = "all_feature_keys"
ALL_LOADED = "all_loaded"
FEATURE_KEY_PREFIX = "feature/"


class MemoizableAdapter:
    """Adapter that memoizes calls to another adapter in a caller-owned store.

    Attributes:
        name: Adapter name, ``"memoizable"``.
        adapter: The wrapped adapter.
        cache: The cache store handed in at construction.
    """

    name = "memoizable"

    def __init__(self, adapter: Adapter, cache: MutableMapping[str, Any]):
        self._adapter = adapter
        self._cache = cache

    @property
    def adapter(self) -> Adapter:
        return self._adapter

    @property
    def cache(self) -> MutableMapping[str, Any]:
        return self._cache

    @staticmethod
    def key_for(key: FeatureKey) -> str:
        """Cache key holding the configuration of feature ``key``."""
        return f"{FEATURE_KEY_PREFIX}{key}"

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def features(self) -> set[FeatureKey]:
        if ALL_FEATURE_KEYS in self._cache:
            return self._cache[ALL_FEATURE_KEYS]
        keys = self._adapter.features()
        self._cache[ALL_FEATURE_KEYS] = keys
        logger.debug("memoize.features_loaded", count=len(keys))
        return keys

    def get(self, key: FeatureKey) -> FeatureConfig:
        cache_key = self.key_for(key)
        if cache_key in self._cache:
            logger.debug("memoize.hit", feature_key=key)
            return self._cache[cache_key]
        logger.debug("memoize.miss", feature_key=key)
        config = self._adapter.get(key)
        self._cache[cache_key] = config
        return config

    def get_multi(self, keys: Iterable[FeatureKey]) -> dict[FeatureKey, FeatureConfig]:
        """Return configurations for ``keys`` with at most one backend call.

        Only keys without a cache entry are sent to the backend. If the
        backend raises, nothing from this call is cached.
        """
        keys = list(keys)
        uncached = [key for key in keys if self.key_for(key) not in self._cache]

        if uncached:
            logger.debug("memoize.get_multi", requested=len(keys), fetching=len(uncached))
            response = self._adapter.get_multi(uncached)
            for key, config in response.items():
                self._cache[self.key_for(key)] = config

        return {key: self._cache.get(self.key_for(key)) for key in keys}

    def get_all(self) -> DefaultedConfigMap:
        """Return every feature's configuration, keyed by feature key.

        The first call loads everything from the backend in one call; later
        calls are served from the cache. Looking up a feature the backend
        does not know yields the default configuration.
        """
        if self._cache.get(ALL_LOADED):
            # Entries expired by clear/enable/disable since the full load are
            # refetched in one batched call.
            response = self.get_multi(self._cache[ALL_FEATURE_KEYS])
            logger.debug("memoize.get_all", source="cache", count=len(response))
        else:
            response = dict(self._adapter.get_all())
            for key, config in response.items():
                self._cache[self.key_for(key)] = config
            self._cache[ALL_FEATURE_KEYS] = set(response)
            self._cache[ALL_LOADED] = True
            logger.debug("memoize.get_all", source="adapter", count=len(response))

        return DefaultedConfigMap(response)

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def add(self, key: FeatureKey) -> Any:
        result = self._adapter.add(key)
        self._expire_features_set()
        return result

    def remove(self, key: FeatureKey) -> Any:
        result = self._adapter.remove(key)
        self._expire_features_set()
        self._expire_feature(key)
        return result

    def clear(self, key: FeatureKey) -> Any:
        result = self._adapter.clear(key)
        self._expire_feature(key)
        return result

    def enable(self, key: FeatureKey, gate: Gate | str, target: Any) -> Any:
        result = self._adapter.enable(key, gate, target)
        self._expire_feature(key)
        return result

    def disable(self, key: FeatureKey, gate: Gate | str, target: Any) -> Any:
        result = self._adapter.disable(key, gate, target)
        self._expire_feature(key)
        return result

    # ------------------------------------------------------------------ #
    # Invalidation
    # ------------------------------------------------------------------ #

    def _expire_feature(self, key: FeatureKey) -> None:
        self._cache.pop(self.key_for(key), None)
        logger.debug("memoize.expire_feature", feature_key=key)

    def _expire_features_set(self) -> None:
        # The key set and the loaded flag always go together.
        self._cache.pop(ALL_FEATURE_KEYS, None)
        self._cache.pop(ALL_LOADED, None)
        logger.debug("memoize.expire_features_set")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(adapter={self._adapter.name!r})"


__all__ = [
    "ALL_FEATURE_KEYS",
    "ALL_LOADED",
    "FEATURE_KEY_PREFIX",
    "MemoizableAdapter",
]
