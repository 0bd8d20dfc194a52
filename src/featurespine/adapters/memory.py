"""
In-process feature storage backend.

``MemoryAdapter`` keeps every feature's configuration in a dict guarded by a
re-entrant lock. It is the default backend in the adapter registry and the
backend the test-suite wraps.

Gate writes by data type:

    ========= ============================= ==========================
    data type enable                        disable
    ========= ============================= ==========================
    BOOLEAN   reset config, boolean = True  reset config
    INTEGER   value = int(target)           value = int(target or 0)
    SET       add str(target)               discard str(target)
    JSON      expression = target           expression = None
    ========= ============================= ==========================

Only ``add`` registers a feature key. Gate writes and ``clear`` change the
stored configuration without touching the key set, so a caller that wants a
new feature listed calls ``add`` first.

Examples:
    >>> adapter = MemoryAdapter()
    >>> adapter.add("search")
    True
    >>> adapter.enable("search", Gate.ACTOR, "user:1")
    True
    >>> adapter.get("search")["actors"]
    {'user:1'}
    >>> adapter.features()
    {'search'}
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Iterable
from typing import Any

from featurespine.adapters.base import FeatureConfig, FeatureKey
from featurespine.core.errors import InvalidFeatureKeyError, ValidationError
from featurespine.core.gates import Gate, GateDataType, default_config
from featurespine.core.logging import get_logger

logger = get_logger(__name__)


class MemoryAdapter:
    """Thread-safe in-memory feature storage.

    The registered key set and the per-feature configurations are stored
    separately: ``features()`` and ``get_all()`` only see added keys, while
    ``get()`` answers from whatever configuration has been written.

    Attributes:
        name: Adapter name, ``"memory"``.
    """

    name = "memory"

    def __init__(self, features: dict[FeatureKey, FeatureConfig] | None = None):
        """Initialize, optionally seeded with ``{key: partial config}``.

        Seed configs are merged over :func:`default_config` and their keys
        are registered.
        """
        self._keys: set[FeatureKey] = set()
        self._configs: dict[FeatureKey, FeatureConfig] = {}
        self._lock = threading.RLock()
        for key, config in (features or {}).items():
            self._validate_key(key)
            merged = default_config()
            merged.update(copy.deepcopy(config))
            for gate in (Gate.ACTOR, Gate.GROUP):
                merged[gate.key] = set(merged[gate.key])
            self._keys.add(key)
            self._configs[key] = merged

    @staticmethod
    def _validate_key(key: Any) -> None:
        if not isinstance(key, str) or not key:
            raise InvalidFeatureKeyError(f"Feature key must be a non-empty string: {key!r}")

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def features(self) -> set[FeatureKey]:
        with self._lock:
            return set(self._keys)

    def get(self, key: FeatureKey) -> FeatureConfig:
        with self._lock:
            config = self._configs.get(key)
            if config is None:
                return default_config()
            return copy.deepcopy(config)

    def get_multi(self, keys: Iterable[FeatureKey]) -> dict[FeatureKey, FeatureConfig]:
        with self._lock:
            return {key: self.get(key) for key in keys}

    def get_all(self) -> dict[FeatureKey, FeatureConfig]:
        with self._lock:
            return {key: self.get(key) for key in self._keys}

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def add(self, key: FeatureKey) -> bool:
        self._validate_key(key)
        with self._lock:
            self._keys.add(key)
        logger.debug("memory.add", feature_key=key)
        return True

    def remove(self, key: FeatureKey) -> bool:
        with self._lock:
            self._keys.discard(key)
            self._configs.pop(key, None)
        logger.debug("memory.remove", feature_key=key)
        return True

    def clear(self, key: FeatureKey) -> bool:
        self._validate_key(key)
        with self._lock:
            self._configs.pop(key, None)
        logger.debug("memory.clear", feature_key=key)
        return True

    def enable(self, key: FeatureKey, gate: Gate | str, target: Any) -> bool:
        self._validate_key(key)
        gate = Gate.coerce(gate)
        if gate.data_type is GateDataType.INTEGER:
            target = self._percentage(key, gate, target)
        with self._lock:
            if gate.data_type is GateDataType.BOOLEAN:
                config = self._configs[key] = default_config()
                config[gate.key] = True
            else:
                config = self._configs.setdefault(key, default_config())
                if gate.data_type is GateDataType.INTEGER:
                    config[gate.key] = target
                elif gate.data_type is GateDataType.SET:
                    config[gate.key].add(str(target))
                else:
                    config[gate.key] = copy.deepcopy(target)
        logger.debug("memory.enable", feature_key=key, gate=gate.key)
        return True

    def disable(self, key: FeatureKey, gate: Gate | str, target: Any) -> bool:
        self._validate_key(key)
        gate = Gate.coerce(gate)
        if gate.data_type is GateDataType.INTEGER:
            target = self._percentage(key, gate, target or 0)
        with self._lock:
            if gate.data_type is GateDataType.BOOLEAN:
                self._configs.pop(key, None)
            else:
                config = self._configs.setdefault(key, default_config())
                if gate.data_type is GateDataType.INTEGER:
                    config[gate.key] = target
                elif gate.data_type is GateDataType.SET:
                    config[gate.key].discard(str(target))
                else:
                    config[gate.key] = None
        logger.debug("memory.disable", feature_key=key, gate=gate.key)
        return True

    @staticmethod
    def _percentage(key: FeatureKey, gate: Gate, target: Any) -> int:
        try:
            value = int(target)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Percentage must be an integer: {target!r}", cause=e
            ).with_context(adapter="memory", feature_key=key, gate=gate.key) from e
        if not 0 <= value <= 100:
            raise ValidationError(
                f"Percentage must be between 0 and 100: {value}"
            ).with_context(adapter="memory", feature_key=key, gate=gate.key)
        return value


__all__ = ["MemoryAdapter"]
