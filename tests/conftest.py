"""
Shared pytest fixtures and configuration for featurespine tests.

This module provides:
- Seeded in-memory backends and call-counting spies around them
- A fresh cache store per test and a memoizing adapter over the spy
- Cleanup of structlog configuration, cached settings and the registry

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    def test_read_through(memoized, spy):
        memoized.get("a")
        assert spy.get.call_count == 1
"""

from typing import Any, Generator
from unittest.mock import MagicMock

import pytest
import structlog

from featurespine.adapters.memoizable import MemoizableAdapter
from featurespine.adapters.memory import MemoryAdapter
from featurespine.adapters.registry import adapter_registry
from featurespine.core.settings import clear_settings_cache


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Cleanup Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_global_state() -> Generator[None, None, None]:
    """Reset structlog, cached settings and custom registry entries."""
    registered = set(adapter_registry.list_adapters())
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    clear_settings_cache()
    for name in set(adapter_registry.list_adapters()) - registered:
        adapter_registry.unregister(name)


# =============================================================================
# Adapter Fixtures
# =============================================================================


SEED_FEATURES: dict[str, dict[str, Any]] = {
    "a": {"boolean": True},
    "b": {"actors": {"user:1", "user:2"}, "percentage_of_time": 25},
}


@pytest.fixture
def backend() -> MemoryAdapter:
    """In-memory backend knowing features ``a`` and ``b``."""
    return MemoryAdapter(SEED_FEATURES)


@pytest.fixture
def spy(backend: MemoryAdapter) -> MagicMock:
    """Call-counting spy that delegates to ``backend``."""
    return MagicMock(wraps=backend)


@pytest.fixture
def cache() -> dict[str, Any]:
    """Fresh cache store, as a caller would create per request."""
    return {}


@pytest.fixture
def memoized(spy: MagicMock, cache: dict[str, Any]) -> MemoizableAdapter:
    """Memoizing adapter over the spy, memoizing into ``cache``."""
    return MemoizableAdapter(spy, cache)
