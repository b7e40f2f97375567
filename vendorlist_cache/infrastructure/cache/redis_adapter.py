#!/usr/bin/env python3
"""
Redis Cache Adapter

Cache tier backed by a native Redis server through redis.asyncio, for
long-running deployments that can hold a pooled TCP connection.

Error Handling Strategy (same as every remote tier):
- Connection / timeout errors -> CacheConnectionError
- Any other RedisError -> CacheKeyError
- Errors are logged with the failing command before being raised

Date: 2026-03-02
"""

import orjson
import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from vendorlist_cache.core.config.constants import EXTERNAL_TTL_MS, Stage
from vendorlist_cache.core.exceptions import CacheConnectionError, CacheKeyError, ConfigurationError
from vendorlist_cache.core.interfaces.cache import Payload
from vendorlist_cache.core.logging.logger import get_logger, log_stage
from vendorlist_cache.infrastructure.cache.upstash_adapter import decode_payload, ttl_ms_to_seconds

logger = get_logger(__name__)

_REDIS_URL_SCHEMES = ("redis://", "rediss://", "unix://")


class RedisCacheAdapter:
    """
    Cache tier backed by redis.asyncio.

    Usage:
        adapter = RedisCacheAdapter.from_url("redis://localhost:6379/0")
        await adapter.set("app:gvl:de:all", gvl, ttl_ms=86_400_000)
        await adapter.aclose()
    """

    def __init__(self, client: redis.Redis):
        """
        Args:
            client: Redis client created with decode_responses=True
        """
        self._redis = client

    @classmethod
    def from_url(cls, url: str | None, **kwargs) -> "RedisCacheAdapter":
        """
        Create an adapter with its own connection pool.

        Raises:
            ConfigurationError: If url is missing or not a redis URL
        """
        if not url:
            raise ConfigurationError("Redis URL is required")
        if not url.startswith(_REDIS_URL_SCHEMES):
            raise ConfigurationError(
                "Redis URL must start with redis://, rediss:// or unix://",
                details={"url": url.split("@")[-1]},
            )

        kwargs.setdefault("decode_responses", True)
        return cls(redis.from_url(url, **kwargs))

    def _wrap(self, command: str, key: str | None, error: RedisError) -> Exception:
        log_stage(logger, Stage.ADAPTER, f"Redis {command} failed", level="error",
                  key=key, error=str(error))
        details = {"command": command, "key": key}
        if isinstance(error, (RedisConnectionError, RedisTimeoutError)):
            return CacheConnectionError(f"Redis {command} failed: {error}", details=details)
        return CacheKeyError(f"Redis {command} failed: {error}", details=details)

    async def get(self, key: str) -> Payload | None:
        try:
            raw = await self._redis.get(key)
        except RedisError as e:
            raise self._wrap("GET", key, e)
        return decode_payload(raw, key)

    async def set(self, key: str, value: Payload, ttl_ms: int = EXTERNAL_TTL_MS) -> None:
        serialized = orjson.dumps(value).decode("utf-8")
        try:
            await self._redis.set(key, serialized, ex=ttl_ms_to_seconds(ttl_ms))
        except RedisError as e:
            raise self._wrap("SET", key, e)

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(key)
        except RedisError as e:
            raise self._wrap("DEL", key, e)

    async def has(self, key: str) -> bool:
        try:
            return await self._redis.exists(key) > 0
        except RedisError as e:
            raise self._wrap("EXISTS", key, e)

    async def ping(self) -> bool:
        """Check Redis connection health."""
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            raise self._wrap("PING", None, e)

    async def aclose(self) -> None:
        """Close the client and its connection pool."""
        await self._redis.aclose()
