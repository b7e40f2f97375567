#!/usr/bin/env python3
"""
Origin Fetcher with In-Flight Deduplication

Fetches a localized vendor list from the origin endpoint:

    GET <endpoint>[?vendorIds=1,2,10]
    Accept-Language: <variant>

Concurrent identical requests (same endpoint, variant and filter set) are
coalesced onto a single task registered in the InFlightRegistry. Every
caller awaits the task through asyncio.shield, so one caller being
cancelled never cancels the fetch the others are waiting on.

Response Mapping:
- 204           -> None (no vendor list for this variant; not an error)
- other non-2xx -> OriginFetchError(status_code, body)
- transport     -> OriginUnavailableError
- bad JSON or missing mandatory fields -> InvalidPayloadError

Date: 2026-03-02
"""

import asyncio
from collections.abc import Iterable

import httpx
import orjson

from vendorlist_cache.core.config.constants import (
    FILTER_ID_SEPARATOR,
    HEADER_ACCEPT_LANGUAGE,
    HTTP_STATUS_NO_CONTENT,
    QUERY_PARAM_VENDOR_IDS,
    Stage,
)
from vendorlist_cache.core.config.settings import get_settings
from vendorlist_cache.core.exceptions import InvalidPayloadError, OriginFetchError, OriginUnavailableError
from vendorlist_cache.core.interfaces.cache import Payload
from vendorlist_cache.core.logging.logger import get_logger, log_stage
from vendorlist_cache.resolution.inflight import InFlightRegistry, get_inflight_registry
from vendorlist_cache.resolution.keys import build_dedup_key, canonical_filter_ids
from vendorlist_cache.resolution.models import validate_payload

logger = get_logger(__name__)

# Longest response body kept on OriginFetchError
_MAX_ERROR_BODY = 1024


class OriginFetcher:
    """
    HTTP client for the vendor list origin.

    Usage:
        fetcher = OriginFetcher()
        gvl = await fetcher.fetch("de", filter_ids=[1, 2, 10])
        await fetcher.aclose()
    """

    def __init__(
        self,
        endpoint: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        registry: InFlightRegistry | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            endpoint: Default origin endpoint (defaults to GVL_ENDPOINT)
            client: Optional shared httpx client (not closed by aclose())
            timeout: Request timeout in seconds for an owned client
            registry: In-flight registry (defaults to the process-wide one)
        """
        settings = get_settings()
        self.endpoint = endpoint or settings.origin.GVL_ENDPOINT
        self._timeout = timeout if timeout is not None else settings.origin.GVL_REQUEST_TIMEOUT
        self._client = client
        self._owns_client = client is None
        self._registry = registry if registry is not None else get_inflight_registry()

    @property
    def registry(self) -> InFlightRegistry:
        return self._registry

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
        return self._client

    async def fetch(
        self,
        variant: str,
        filter_ids: Iterable[int] | None = None,
        endpoint: str | None = None,
    ) -> Payload | None:
        """
        Fetch the vendor list for variant, joining an identical in-flight fetch if any.

        Args:
            variant: Language code sent as Accept-Language
            filter_ids: Optional vendor ids (order and duplicates ignored)
            endpoint: Per-call endpoint override

        Returns:
            Vendor list document, or None when the origin answers 204

        Raises:
            OriginFetchError: Non-2xx status other than 204
            OriginUnavailableError: Origin unreachable
            InvalidPayloadError: Body is not a vendor list
        """
        endpoint = endpoint or self.endpoint
        ids = canonical_filter_ids(filter_ids)
        dedup_key = build_dedup_key(endpoint, variant, ids)

        # Lookup and registration happen with no await in between
        task = self._registry.get(dedup_key)
        if task is not None:
            log_stage(logger, Stage.ORIGIN_DEDUP, "Joining in-flight origin fetch",
                      level="debug", dedup_key=dedup_key)
        else:
            task = asyncio.create_task(self._run(dedup_key, endpoint, variant, ids))
            self._registry.register(dedup_key, task)

        return await asyncio.shield(task)

    async def _run(self, dedup_key: str, endpoint: str, variant: str, ids: list[int]) -> Payload | None:
        try:
            return await self._request(endpoint, variant, ids)
        finally:
            self._registry.release(dedup_key, asyncio.current_task())

    async def _request(self, endpoint: str, variant: str, ids: list[int]) -> Payload | None:
        params = {QUERY_PARAM_VENDOR_IDS: FILTER_ID_SEPARATOR.join(str(i) for i in ids)} if ids else None
        headers = {HEADER_ACCEPT_LANGUAGE: variant}

        log_stage(logger, Stage.ORIGIN_FETCH, "Fetching vendor list from origin",
                  endpoint=endpoint, variant=variant, vendor_ids=len(ids))

        try:
            response = await self._get_client().get(endpoint, params=params, headers=headers)
        except httpx.HTTPError as e:
            log_stage(logger, Stage.ORIGIN_FETCH, "Origin unreachable", level="error",
                      endpoint=endpoint, variant=variant, error=str(e))
            raise OriginUnavailableError.from_exception(
                e,
                message=f"Vendor list origin unreachable: {e}",
                endpoint=endpoint,
                variant=variant,
            ) from e

        if response.status_code == HTTP_STATUS_NO_CONTENT:
            log_stage(logger, Stage.ORIGIN_FETCH, "Origin has no vendor list for variant",
                      variant=variant)
            return None

        if not response.is_success:
            log_stage(logger, Stage.ORIGIN_FETCH, "Origin returned an error status", level="warning",
                      endpoint=endpoint, variant=variant, status_code=response.status_code)
            raise OriginFetchError(
                f"Failed to fetch vendor list: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                body=response.text[:_MAX_ERROR_BODY],
                details={"endpoint": endpoint, "variant": variant},
            )

        try:
            document = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise InvalidPayloadError(
                "Vendor list response is not valid JSON",
                details={"endpoint": endpoint, "variant": variant},
            ) from e

        return validate_payload(document, variant)

    async def aclose(self) -> None:
        """Close the owned httpx client, if one was created."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None


# =============================================================================
# GLOBAL INSTANCE (SINGLETON PATTERN)
# =============================================================================

_origin_fetcher: OriginFetcher | None = None


def get_origin_fetcher() -> OriginFetcher:
    """
    Get the process-wide origin fetcher (singleton).

    Returns:
        OriginFetcher: Global fetcher instance
    """
    global _origin_fetcher

    if _origin_fetcher is None:
        _origin_fetcher = OriginFetcher()

    return _origin_fetcher


async def close_origin_fetcher() -> None:
    """Close and drop the process-wide fetcher."""
    global _origin_fetcher

    if _origin_fetcher is not None:
        await _origin_fetcher.aclose()
        _origin_fetcher = None
