"""
Cache Adapter Protocol

This module defines the storage contract shared by every cache tier
(in-process memory, Upstash REST, edge KV namespace, Redis).

Architectural Decision: Protocol-based abstraction
- Backends are selected by dependency injection at resolver construction
- No inheritance hierarchy; any object with the four methods qualifies
- Test doubles need no base class

Date: 2026-03-02
"""

from typing import Any, Protocol, runtime_checkable

# Vendor list document (or any JSON object) as seen by the cache tiers
Payload = dict[str, Any]


@runtime_checkable
class CacheAdapter(Protocol):
    """
    Protocol defining the interface for cache tier implementations.

    Semantics:
    - get: None on miss or expiry, never raises for a plain miss
    - set: absolute expiry of now + ttl_ms, overwrites unconditionally
    - delete: idempotent
    - has: live (non-expired) presence, same expiry check as get

    Implementations backed by a network may raise CacheError subclasses on
    transport failure. The resolver treats those as misses.

    Implementations:
    - MemoryCacheAdapter: process-wide map with lazy expiration
    - UpstashRedisAdapter: Redis over the Upstash REST protocol
    - KVNamespaceAdapter: edge platform KV namespace binding
    - RedisCacheAdapter: native Redis via redis.asyncio
    """

    async def get(self, key: str) -> Payload | None:
        """
        Get value from the tier.

        Args:
            key: Cache key

        Returns:
            The stored payload, or None if absent or expired
        """
        ...

    async def set(self, key: str, value: Payload, ttl_ms: int) -> None:
        """
        Store value with an expiry of now + ttl_ms.

        Args:
            key: Cache key
            value: Payload to store
            ttl_ms: Time-to-live in milliseconds
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove key. No error if it is absent."""
        ...

    async def has(self, key: str) -> bool:
        """Check live presence of key."""
        ...
