"""
Mapping of feature configurations with an on-demand default.

``get_all()`` only returns features the backend knows about. Callers then
look up arbitrary feature keys in that result, and a miss must not fall
back to one adapter call per unknown feature. ``DefaultedConfigMap`` answers
any such miss with :func:`~featurespine.core.gates.default_config`, storing
it so repeated lookups return the same object.

Examples:
    >>> configs = DefaultedConfigMap({"search": {"boolean": True}})
    >>> configs["search"]["boolean"]
    True
    >>> configs["unknown"]["actors"]
    set()
    >>> "unknown" in configs
    True
    >>> "other" in configs
    False
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from featurespine.core.gates import default_config


class DefaultedConfigMap(Mapping):
    """Read-only mapping whose domain covers every feature key.

    ``len()``, iteration and ``in`` only see keys that are actually present:
    those returned by the backend plus defaults already materialized by a
    lookup. ``get()`` goes through ``__getitem__`` and therefore never returns
    its fallback argument.
    """

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        default_factory: Callable[[], Any] = default_config,
    ):
        self._data: dict[str, Any] = dict(data or {})
        self._default_factory = default_factory

    def __getitem__(self, key: str) -> Any:
        try:
            return self._data[key]
        except KeyError:
            value = self._data[key] = self._default_factory()
            return value

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data!r})"


def lookup(configs: Mapping[str, Any], key: str) -> Any:
    """Return ``configs[key]``, or a default configuration when it is absent.

    Works with any mapping; a :class:`DefaultedConfigMap` already answers
    misses itself.
    """
    if isinstance(configs, DefaultedConfigMap):
        return configs[key]
    if key in configs:
        return configs[key]
    return default_config()


__all__ = [
    "DefaultedConfigMap",
    "lookup",
]
