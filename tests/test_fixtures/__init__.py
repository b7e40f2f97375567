"""
Test Fixtures Package

Shared test doubles for the cache tiers and the origin endpoint.
"""

from .cache_factory import (
    BrokenKVNamespace,
    FailingCacheAdapter,
    FakeClock,
    InMemoryKVNamespace,
    SpyCacheAdapter,
)
from .origin_factory import TEST_ENDPOINT, OriginStub, OriginTestFactory, make_gvl

__all__ = [
    "FakeClock",
    "SpyCacheAdapter",
    "FailingCacheAdapter",
    "InMemoryKVNamespace",
    "BrokenKVNamespace",
    "OriginStub",
    "OriginTestFactory",
    "TEST_ENDPOINT",
    "make_gvl",
]
