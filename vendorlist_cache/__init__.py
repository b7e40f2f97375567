"""
vendorlist-cache

Multi-tier cache for the IAB Global Vendor List: bundled data, an
in-process memory tier, an optional shared external tier and a
deduplicating origin fetcher.

Usage:
    from vendorlist_cache import VendorListResolver

    resolver = VendorListResolver(namespace="app", bundled={"en": gvl_en})
    gvl = await resolver.resolve("de")
"""

from vendorlist_cache.core import (
    CacheAdapter,
    ConfigurationError,
    OriginError,
    OriginFetchError,
    OriginUnavailableError,
    InvalidPayloadError,
    VendorListCacheError,
    setup_logging,
)
from vendorlist_cache.core.config.constants import EXTERNAL_TTL_MS, MEMORY_TTL_MS
from vendorlist_cache.infrastructure.cache import (
    KVNamespaceAdapter,
    MemoryCacheAdapter,
    RedisCacheAdapter,
    UpstashRedisAdapter,
    clear_memory_cache,
    get_memory_cache_size,
)
from vendorlist_cache.resolution import (
    OriginFetcher,
    VendorListResolver,
    build_cache_key,
    build_gvl_cache_key,
    create_resolver_from_settings,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "VendorListResolver",
    "create_resolver_from_settings",
    "OriginFetcher",
    "build_cache_key",
    "build_gvl_cache_key",
    "CacheAdapter",
    "MemoryCacheAdapter",
    "UpstashRedisAdapter",
    "KVNamespaceAdapter",
    "RedisCacheAdapter",
    "clear_memory_cache",
    "get_memory_cache_size",
    "MEMORY_TTL_MS",
    "EXTERNAL_TTL_MS",
    "setup_logging",
    "VendorListCacheError",
    "ConfigurationError",
    "OriginError",
    "OriginFetchError",
    "OriginUnavailableError",
    "InvalidPayloadError",
]
