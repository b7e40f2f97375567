#!/usr/bin/env python3
"""
Vendor List Resolver

Resolves a localized vendor list through an ordered chain of tiers:

    1. Bundled    - caller-supplied map, no I/O at all
    2. Memory     - process-wide map with lazy TTL expiry
    3. External   - optional shared adapter (Upstash, edge KV, Redis)
    4. Origin     - HTTP fetch, deduplicated across concurrent callers

A hit in a later tier populates the faster tiers on the way back. An origin
answer of "no vendor list" is returned as None and never cached.

Error Handling Strategy:
- Cache tier failures are logged and treated as a miss (reads) or skipped
  (writes); they never reach the caller
- Origin errors propagate unchanged
- Misconfiguration is raised at construction

Date: 2026-03-02
"""

import uuid
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from vendorlist_cache.core.config.constants import CacheTier, Stage
from vendorlist_cache.core.config.settings import get_settings
from vendorlist_cache.core.exceptions import ConfigurationError, InvalidPayloadError
from vendorlist_cache.core.interfaces.cache import CacheAdapter, Payload
from vendorlist_cache.core.logging.logger import (
    clear_resolution_id,
    get_logger,
    get_resolution_id,
    log_stage,
    set_resolution_id,
)
from vendorlist_cache.infrastructure.cache.memory_adapter import MemoryCacheAdapter
from vendorlist_cache.resolution.keys import build_gvl_cache_key, canonical_filter_ids, check_key_segment
from vendorlist_cache.resolution.models import validate_payload
from vendorlist_cache.resolution.observer import ResolutionObserver
from vendorlist_cache.resolution.origin_fetcher import OriginFetcher, get_origin_fetcher

logger = get_logger(__name__)


def _positive_ttl(name: str, value: int | None, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(
            f"{name} must be a positive number of milliseconds",
            details={name: value},
        )
    return value


class VendorListResolver:
    """
    Multi-tier vendor list resolver.

    Usage:
        resolver = VendorListResolver(
            namespace="app",
            bundled={"en": bundled_en},
            external=UpstashRedisAdapter(url, token),
            filter_ids=[1, 2, 10],
        )
        gvl = await resolver.resolve("de")
    """

    def __init__(
        self,
        namespace: str,
        bundled: Mapping[str, Payload] | None = None,
        external: CacheAdapter | None = None,
        filter_ids: Iterable[int] | None = None,
        endpoint: str | None = None,
        *,
        memory: CacheAdapter | None = None,
        fetcher: OriginFetcher | None = None,
        memory_ttl_ms: int | None = None,
        external_ttl_ms: int | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            namespace: Cache key namespace
            bundled: Variant -> vendor list served without any I/O
            external: Optional shared cache tier
            filter_ids: Vendor ids every resolution is restricted to
            endpoint: Origin endpoint override
            memory: Memory tier (defaults to one over the process-wide store)
            fetcher: Origin fetcher (defaults to the process-wide one)
            memory_ttl_ms: Memory tier TTL (defaults to CACHE_MEMORY_TTL_MS)
            external_ttl_ms: External tier TTL (defaults to CACHE_EXTERNAL_TTL_MS)

        Raises:
            InvalidCacheKeyError: If namespace or a filter id is unusable in a cache key
            ConfigurationError: If a TTL is not a positive number of milliseconds
        """
        settings = get_settings()

        self.namespace = check_key_segment("namespace", namespace)
        self.filter_ids = canonical_filter_ids(filter_ids)
        self.endpoint = endpoint

        self._bundled: Mapping[str, Payload] = MappingProxyType(dict(bundled or {}))
        self._memory = memory if memory is not None else MemoryCacheAdapter()
        self._external = external
        self._fetcher = fetcher
        self._memory_ttl_ms = _positive_ttl(
            "memory_ttl_ms", memory_ttl_ms, settings.cache.CACHE_MEMORY_TTL_MS
        )
        self._external_ttl_ms = _positive_ttl(
            "external_ttl_ms", external_ttl_ms, settings.cache.CACHE_EXTERNAL_TTL_MS
        )
        self._observer = ResolutionObserver()

        log_stage(logger, Stage.INITIALIZATION, "Vendor list resolver created",
                  namespace=self.namespace,
                  bundled_variants=sorted(self._bundled),
                  external=type(external).__name__ if external is not None else None,
                  vendor_ids=len(self.filter_ids))

    @property
    def fetcher(self) -> OriginFetcher:
        if self._fetcher is None:
            self._fetcher = get_origin_fetcher()
        return self._fetcher

    @property
    def observer(self) -> ResolutionObserver:
        return self._observer

    async def resolve(self, variant: str) -> Payload | None:
        """
        Resolve the vendor list for variant.

        Args:
            variant: Language code, e.g. "de"

        Returns:
            Vendor list document, or None if the origin has none for variant

        Raises:
            OriginError: Origin fetch failed (never raised for cache tier failures)
            InvalidCacheKeyError: variant is unusable in a cache key
        """
        owns_id = get_resolution_id() is None
        if owns_id:
            set_resolution_id(uuid.uuid4().hex[:12])

        try:
            return await self._resolve(variant)
        finally:
            if owns_id:
                clear_resolution_id()

    async def _resolve(self, variant: str) -> Payload | None:
        bundled = self._bundled.get(variant)
        if bundled is not None:
            self._observer.record_hit(CacheTier.BUNDLED, variant)
            return bundled

        key = build_gvl_cache_key(self.namespace, variant, self.filter_ids)

        value = await self._tier_get(CacheTier.MEMORY, self._memory, key)
        if value is not None:
            self._observer.record_hit(CacheTier.MEMORY, variant, key)
            return value

        if self._external is not None:
            value = await self._external_get(key, variant)
            if value is not None:
                await self._tier_set(CacheTier.MEMORY, self._memory, key, value, self._memory_ttl_ms)
                self._observer.record_hit(CacheTier.EXTERNAL, variant, key)
                return value

        value = await self.fetcher.fetch(variant, self.filter_ids, self.endpoint)
        if value is None:
            self._observer.record_absent(variant, key)
            return None

        await self._tier_set(CacheTier.MEMORY, self._memory, key, value, self._memory_ttl_ms)
        if self._external is not None:
            await self._tier_set(CacheTier.EXTERNAL, self._external, key, value, self._external_ttl_ms)

        self._observer.record_hit(CacheTier.ORIGIN, variant, key)
        return value

    async def _tier_get(self, tier: CacheTier, adapter: CacheAdapter, key: str) -> Payload | None:
        try:
            return await adapter.get(key)
        except Exception as e:
            self._observer.record_tier_error(tier, "get", key, e)
            return None

    async def _external_get(self, key: str, variant: str) -> Payload | None:
        """External read; a stored value that is not a vendor list counts as a miss."""
        value = await self._tier_get(CacheTier.EXTERNAL, self._external, key)
        if value is None:
            return None
        try:
            return validate_payload(value, variant)
        except InvalidPayloadError as e:
            self._observer.record_tier_error(CacheTier.EXTERNAL, "get", key, e)
            return None

    async def _tier_set(
        self,
        tier: CacheTier,
        adapter: CacheAdapter,
        key: str,
        value: Payload,
        ttl_ms: int,
    ) -> None:
        try:
            await adapter.set(key, value, ttl_ms)
        except Exception as e:
            self._observer.record_tier_error(tier, "set", key, e)
            return
        log_stage(logger, Stage.CACHE_POPULATION, f"Populated {tier.value} cache",
                  level="debug", cache_key=key, ttl_ms=ttl_ms)

    def stats(self) -> dict[str, Any]:
        """
        Resolution counters plus memory tier size.

        Returns:
            Dict with per-tier hits, origin fetches, absent results,
            tier errors, hit_rate and memory_entries
        """
        stats = self._observer.get_stats()
        size = getattr(self._memory, "size", None)
        stats["memory_entries"] = size() if callable(size) else None
        return stats

    async def health_check(self) -> dict[str, Any]:
        """
        Check the external tier, if one is configured.

        The resolver stays usable when the external tier is down (reads fall
        through to the origin), so a failure reports "degraded" rather than
        raising.
        """
        result: dict[str, Any] = {
            "status": "healthy",
            "namespace": self.namespace,
            "external": {"configured": self._external is not None},
        }
        if self._external is None:
            return result

        ping = getattr(self._external, "ping", None)
        if not callable(ping):
            result["external"]["reachable"] = None
            return result

        try:
            reachable = bool(await ping())
        except Exception as e:
            log_stage(logger, Stage.TIER_FAILURE, "External cache health check failed",
                      level="warning", error_type=type(e).__name__, error=str(e))
            result["external"]["reachable"] = False
            result["external"]["error"] = str(e)
            result["status"] = "degraded"
            return result

        result["external"]["reachable"] = reachable
        if not reachable:
            result["status"] = "degraded"
        return result
