"""
Cache Module

Interchangeable cache tiers implementing the CacheAdapter contract:
in-process memory plus three remote backends (Upstash REST, edge KV
namespace, native Redis).
"""

from .kv_adapter import KVNamespace, KVNamespaceAdapter
from .memory_adapter import (
    CacheEntry,
    MemoryCacheAdapter,
    MemoryStore,
    clear_memory_cache,
    get_memory_cache_size,
    get_memory_store,
    reset_memory_store,
)
from .redis_adapter import RedisCacheAdapter
from .upstash_adapter import UpstashRedisAdapter

__all__ = [
    "CacheEntry",
    "MemoryCacheAdapter",
    "MemoryStore",
    "get_memory_store",
    "reset_memory_store",
    "clear_memory_cache",
    "get_memory_cache_size",
    "UpstashRedisAdapter",
    "KVNamespace",
    "KVNamespaceAdapter",
    "RedisCacheAdapter",
]
