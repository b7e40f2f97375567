#!/usr/bin/env python3
"""
Upstash Redis Cache Adapter

Cache tier for Redis reached over the Upstash REST protocol, suitable for
serverless deployments where a persistent TCP connection is not available.

Protocol:
    POST <url>
    Authorization: Bearer <token>
    Body: ["SET", "key", "value", "EX", "3600"]

    -> 200 {"result": "OK"}
    -> 4xx {"error": "ERR ..."}

Values are stored as JSON strings (orjson), so entries written here are
readable by any other Upstash client that stores JSON.

Date: 2026-03-02
"""

import math
from typing import Any

import httpx
import orjson

from vendorlist_cache.core.config.constants import EXTERNAL_TTL_MS, Stage
from vendorlist_cache.core.exceptions import CacheConnectionError, CacheKeyError, ConfigurationError
from vendorlist_cache.core.interfaces.cache import Payload
from vendorlist_cache.core.logging.logger import get_logger, log_stage

logger = get_logger(__name__)


def ttl_ms_to_seconds(ttl_ms: int) -> int:
    """Convert an engine TTL to whole seconds, rounding up (minimum 1)."""
    return max(1, math.ceil(ttl_ms / 1000))


def decode_payload(raw: Any, key: str) -> Payload | None:
    """
    Decode a stored value back into a payload.

    Raises:
        CacheKeyError: If the stored value is not a JSON object
    """
    if raw is None:
        return None
    if isinstance(raw, dict):
        return raw

    try:
        value = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise CacheKeyError.from_exception(e, message="Stored value is not valid JSON", key=key)

    if not isinstance(value, dict):
        raise CacheKeyError("Stored value is not a JSON object", details={"key": key})
    return value


class UpstashRedisAdapter:
    """
    Cache tier backed by Upstash Redis over REST.

    Usage:
        adapter = UpstashRedisAdapter(
            url=settings.redis.UPSTASH_REDIS_REST_URL,
            token=settings.redis.UPSTASH_REDIS_REST_TOKEN,
        )
        await adapter.set("app:gvl:de:all", gvl, ttl_ms=86_400_000)

    Error Handling Strategy:
    - Transport failures and auth rejections raise CacheConnectionError
    - Command errors and undecodable values raise CacheKeyError
    - Missing url/token raise ConfigurationError at construction
    """

    def __init__(
        self,
        url: str | None,
        token: str | None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 5.0,
    ):
        """
        Initialize the adapter.

        Args:
            url: Upstash REST URL (https://...)
            token: Upstash REST bearer token
            client: Optional shared httpx client (not closed by aclose())
            timeout: Request timeout in seconds for an owned client

        Raises:
            ConfigurationError: If url or token is missing or malformed
        """
        if not url:
            raise ConfigurationError("Upstash Redis REST URL is required")
        if not url.startswith(("http://", "https://")):
            raise ConfigurationError(
                "Upstash Redis REST URL must be an http(s) URL",
                details={"url": url},
            )
        if not token:
            raise ConfigurationError("Upstash Redis REST token is required", details={"url": url})

        self._url = url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {token}"}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def _command(self, *args: Any) -> Any:
        """
        Execute one Redis command over REST and return its ``result``.

        Raises:
            CacheConnectionError: Endpoint unreachable or credentials rejected
            CacheKeyError: Redis returned an error for the command
        """
        command = [str(arg) for arg in args]
        name = command[0]

        try:
            response = await self._client.post(self._url, json=command, headers=self._headers)
        except httpx.HTTPError as e:
            log_stage(logger, Stage.ADAPTER, "Upstash request failed", level="error",
                      command=name, error=str(e))
            raise CacheConnectionError.from_exception(
                e, message=f"Upstash {name} failed: {e}", command=name
            )

        if response.status_code in (401, 403):
            raise CacheConnectionError(
                f"Upstash rejected credentials ({response.status_code})",
                details={"command": name, "status_code": response.status_code},
            )

        try:
            body = response.json()
        except ValueError:
            raise CacheKeyError(
                f"Upstash {name} returned a non-JSON response",
                details={"command": name, "status_code": response.status_code},
            )

        if isinstance(body, dict) and body.get("error"):
            log_stage(logger, Stage.ADAPTER, "Upstash command error", level="error",
                      command=name, error=body["error"])
            raise CacheKeyError(
                f"Upstash {name} failed: {body['error']}",
                details={"command": name, "status_code": response.status_code},
            )

        if response.is_error:
            raise CacheKeyError(
                f"Upstash {name} failed with status {response.status_code}",
                details={"command": name, "status_code": response.status_code},
            )

        return body.get("result") if isinstance(body, dict) else None

    async def get(self, key: str) -> Payload | None:
        return decode_payload(await self._command("GET", key), key)

    async def set(self, key: str, value: Payload, ttl_ms: int = EXTERNAL_TTL_MS) -> None:
        serialized = orjson.dumps(value).decode("utf-8")
        await self._command("SET", key, serialized, "EX", ttl_ms_to_seconds(ttl_ms))

    async def delete(self, key: str) -> None:
        await self._command("DEL", key)

    async def has(self, key: str) -> bool:
        exists = await self._command("EXISTS", key)
        return bool(exists) and int(exists) > 0

    async def ping(self) -> bool:
        """Check the REST endpoint answers PING."""
        return await self._command("PING") == "PONG"

    async def aclose(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_client:
            await self._client.aclose()
