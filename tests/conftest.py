"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tests.test_fixtures import (  # noqa: E402
    FailingCacheAdapter,
    FakeClock,
    InMemoryKVNamespace,
    OriginStub,
    OriginTestFactory,
    SpyCacheAdapter,
    make_gvl,
)
from vendorlist_cache.core.config import settings as settings_module  # noqa: E402
from vendorlist_cache.infrastructure.cache.memory_adapter import (  # noqa: E402
    MemoryCacheAdapter,
    MemoryStore,
    reset_memory_store,
)
from vendorlist_cache.resolution import origin_fetcher as origin_fetcher_module  # noqa: E402
from vendorlist_cache.resolution.inflight import InFlightRegistry, reset_inflight_registry  # noqa: E402

# Environment variables read by Settings; cleared so the host environment
# cannot leak into tests
SETTINGS_ENV_VARS = (
    "APP_NAMESPACE",
    "CACHE_MEMORY_TTL_MS",
    "CACHE_EXTERNAL_TTL_MS",
    "GVL_ENDPOINT",
    "GVL_REQUEST_TIMEOUT",
    "GVL_VENDOR_IDS",
    "UPSTASH_REDIS_REST_URL",
    "UPSTASH_REDIS_REST_TOKEN",
    "REDIS_URL",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


# ============================================================================
# Global State Isolation
# ============================================================================


@pytest.fixture(autouse=True)
def isolate_global_state(monkeypatch, tmp_path):
    """Reset every process-wide singleton and the settings environment."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # No stray .env file from the working directory
    monkeypatch.chdir(tmp_path)

    settings_module._settings = None
    reset_memory_store()
    reset_inflight_registry()
    origin_fetcher_module._origin_fetcher = None

    yield

    settings_module._settings = None
    reset_memory_store()
    reset_inflight_registry()
    origin_fetcher_module._origin_fetcher = None


# ============================================================================
# Payload Fixtures
# ============================================================================


@pytest.fixture
def gvl_en():
    return make_gvl(version=120, language="en")


@pytest.fixture
def gvl_de():
    return make_gvl(version=120, language="de")


# ============================================================================
# Cache Tier Fixtures
# ============================================================================


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def memory_store():
    """Fresh store, independent from the process-wide one."""
    return MemoryStore()


@pytest.fixture
def memory_adapter(memory_store, fake_clock):
    return MemoryCacheAdapter(store=memory_store, clock=fake_clock)


@pytest.fixture
def spy_adapter():
    return SpyCacheAdapter()


@pytest.fixture
def failing_adapter():
    return FailingCacheAdapter()


@pytest.fixture
def kv_namespace():
    return InMemoryKVNamespace()


# ============================================================================
# Origin Fixtures
# ============================================================================


@pytest.fixture
def origin(gvl_de):
    """Origin answering 200 with the German vendor list."""
    return OriginStub(payload=gvl_de)


@pytest.fixture
def inflight_registry():
    return InFlightRegistry()


@pytest.fixture
async def fetcher(origin, inflight_registry):
    """OriginFetcher wired to the origin stub."""
    fetcher = OriginTestFactory.fetcher(origin, registry=inflight_registry)
    yield fetcher
    await fetcher._get_client().aclose()


# ============================================================================
# Environment-Based Integration Toggles
# ============================================================================


@pytest.fixture(scope="session")
def use_real_redis():
    """Check if a real Redis should be used for integration tests."""
    return os.getenv("USE_REAL_REDIS", "0").lower() in ("1", "true", "yes")
