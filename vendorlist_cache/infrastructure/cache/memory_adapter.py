#!/usr/bin/env python3
"""
In-Memory Cache Adapter

A dict-backed cache tier with TTL support and lazy expiration. Always used
as the first cache layer in the resolution chain.

Architecture:
    MemoryCacheAdapter (CacheAdapter contract)
        └── MemoryStore (process-wide map, explicit singleton)

Why a process-wide store?
- Repeated requests in the same worker are served in ~0ms
- Every resolver in the process shares the same warm entries
- Lifecycle is explicit: get_memory_store() / reset_memory_store()

Expiration is lazy: the read that discovers a stale entry deletes it.
There are no timers and no background sweep.

Date: 2026-03-02
"""

import copy
import time
from collections.abc import Callable
from dataclasses import dataclass

from vendorlist_cache.core.config.constants import MEMORY_TTL_MS
from vendorlist_cache.core.interfaces.cache import Payload

# Returns the current time in milliseconds
Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000


# =============================================================================
# STORAGE
# =============================================================================


@dataclass(frozen=True)
class CacheEntry:
    """A stored payload and its absolute expiry. Replaced, never mutated."""

    value: Payload
    expires_at_ms: float

    def is_expired(self, now_ms: float) -> bool:
        """An entry is live up to and including its expiry instant."""
        return now_ms > self.expires_at_ms


class MemoryStore:
    """
    Process-wide map of cache key to CacheEntry.

    Every mutation is a single dict operation, so concurrent coroutines
    never observe a half-written entry.
    """

    def __init__(self):
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def put(self, key: str, entry: CacheEntry) -> None:
        self._entries[key] = entry

    def discard(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries


# =============================================================================
# CACHE ADAPTER
# =============================================================================


class MemoryCacheAdapter:
    """
    In-memory cache tier backed by a MemoryStore.

    Features:
    - Shared store for fast access across resolvers
    - TTL with lazy expiration (checked on get/has)
    - Values are deep-copied on write and on read so callers never share
      the cached copy
    - Injectable clock for deterministic expiry tests

    Usage:
        adapter = MemoryCacheAdapter()
        await adapter.set("app:gvl:de:all", gvl, ttl_ms=60_000)
        value = await adapter.get("app:gvl:de:all")
    """

    def __init__(self, store: MemoryStore | None = None, clock: Clock | None = None):
        """
        Initialize the adapter.

        Args:
            store: Backing store (defaults to the process-wide store)
            clock: Millisecond clock (defaults to monotonic_ms)
        """
        self._store = store if store is not None else get_memory_store()
        self._clock = clock or monotonic_ms

    async def get(self, key: str) -> Payload | None:
        entry = self._live_entry(key)
        return copy.deepcopy(entry.value) if entry is not None else None

    async def set(self, key: str, value: Payload, ttl_ms: int = MEMORY_TTL_MS) -> None:
        self._store.put(
            key,
            CacheEntry(value=copy.deepcopy(value), expires_at_ms=self._clock() + ttl_ms),
        )

    async def delete(self, key: str) -> None:
        self._store.discard(key)

    async def has(self, key: str) -> bool:
        return self._live_entry(key) is not None

    def _live_entry(self, key: str) -> CacheEntry | None:
        """Return the entry for key, deleting it first if it has expired."""
        entry = self._store.get(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            self._store.discard(key)
            return None

        return entry

    # -------------------------------------------------------------------------
    # Testing / observability only (not part of the adapter contract)
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        """Remove every entry from the backing store."""
        self._store.clear()

    def size(self) -> int:
        """Number of stored entries (may include expired ones not yet read)."""
        return len(self._store)


# =============================================================================
# GLOBAL INSTANCE (SINGLETON PATTERN)
# =============================================================================

_memory_store: MemoryStore | None = None


def get_memory_store() -> MemoryStore:
    """
    Get the process-wide memory store (singleton).

    Returns:
        MemoryStore: Global store instance
    """
    global _memory_store

    if _memory_store is None:
        _memory_store = MemoryStore()

    return _memory_store


def reset_memory_store() -> None:
    """Drop the process-wide store; the next access creates a fresh one."""
    global _memory_store
    _memory_store = None


def clear_memory_cache() -> None:
    """Clear every entry of the process-wide store. Primarily used for testing."""
    get_memory_store().clear()


def get_memory_cache_size() -> int:
    """Number of entries in the process-wide store (may include expired ones)."""
    return len(get_memory_store())
