"""
Edge KV Namespace Cache Adapter

Cache tier for a platform-native key/value namespace binding (for example a
Workers KV namespace exposed to Python workers). The binding is passed in
directly; this adapter only translates the CacheAdapter contract onto its
get/put/delete primitives.

KV namespaces have no EXISTS command, so has() is a get().
"""

import math
from typing import Any, Protocol, runtime_checkable

import orjson

from vendorlist_cache.core.config.constants import EXTERNAL_TTL_MS, KV_MIN_TTL_SECONDS
from vendorlist_cache.core.exceptions import CacheConnectionError, ConfigurationError
from vendorlist_cache.core.interfaces.cache import Payload
from vendorlist_cache.infrastructure.cache.upstash_adapter import decode_payload


@runtime_checkable
class KVNamespace(Protocol):
    """The subset of a KV namespace binding this adapter relies on."""

    async def get(self, key: str) -> Any: ...

    async def put(self, key: str, value: str, expiration_ttl: int | None = None) -> Any: ...

    async def delete(self, key: str) -> Any: ...


def kv_expiration_ttl(ttl_ms: int) -> int:
    """Seconds (rounded up), raised to the namespace minimum TTL."""
    return max(KV_MIN_TTL_SECONDS, math.ceil(ttl_ms / 1000))


class KVNamespaceAdapter:
    """
    Cache tier backed by an edge KV namespace.

    Usage:
        adapter = KVNamespaceAdapter(env.GVL_CACHE)
        await adapter.set("app:gvl:de:all", gvl, ttl_ms=86_400_000)

    Errors raised by the binding are wrapped in CacheConnectionError so the
    resolver sees the same error family for every remote tier.
    """

    def __init__(self, namespace: KVNamespace | None):
        """
        Raises:
            ConfigurationError: If no namespace binding is given or it lacks
                the get/put/delete primitives
        """
        if namespace is None:
            raise ConfigurationError("KV namespace binding is required")
        if not isinstance(namespace, KVNamespace):
            raise ConfigurationError(
                "KV namespace binding must expose get, put and delete",
                details={"type": type(namespace).__name__},
            )
        self._namespace = namespace

    async def get(self, key: str) -> Payload | None:
        try:
            raw = await self._namespace.get(key)
        except Exception as e:
            raise CacheConnectionError.from_exception(e, message=f"KV get failed: {e}", key=key)
        return decode_payload(raw, key)

    async def set(self, key: str, value: Payload, ttl_ms: int = EXTERNAL_TTL_MS) -> None:
        serialized = orjson.dumps(value).decode("utf-8")
        try:
            await self._namespace.put(key, serialized, expiration_ttl=kv_expiration_ttl(ttl_ms))
        except Exception as e:
            raise CacheConnectionError.from_exception(e, message=f"KV put failed: {e}", key=key)

    async def delete(self, key: str) -> None:
        try:
            await self._namespace.delete(key)
        except Exception as e:
            raise CacheConnectionError.from_exception(e, message=f"KV delete failed: {e}", key=key)

    async def has(self, key: str) -> bool:
        return await self.get(key) is not None
