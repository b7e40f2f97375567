"""
System Constants and Enumerations

This module defines the constants and enumerations shared by the cache
adapters, the key builder, the origin fetcher and the resolver.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for TTLs, separators and wire names
- Type-safe enums for stages and cache tiers
- Settings defaults refer back to these values

Date: 2026-03-02
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Resolution stages used as the ``stage`` field of log events.

    Format: {SEQUENCE}_{DESCRIPTIVE_NAME}

    Each stage is one step of the layered lookup, in the order the
    resolver walks them.
    """

    INITIALIZATION = "0.0_INITIALIZATION"
    BUNDLED_LOOKUP = "1.0_BUNDLED_LOOKUP"
    MEMORY_LOOKUP = "2.1_MEMORY_LOOKUP"
    EXTERNAL_LOOKUP = "2.2_EXTERNAL_LOOKUP"
    CACHE_POPULATION = "2.3_CACHE_POPULATION"
    ORIGIN_FETCH = "3.0_ORIGIN_FETCH"
    ORIGIN_DEDUP = "3.1_ORIGIN_DEDUP"

    # Cross-cutting
    TIER_FAILURE = "E_TIER_FAILURE"
    ADAPTER = "A_ADAPTER_OPERATION"


# ============================================================================
# Cache Tiers
# ============================================================================


class CacheTier(str, Enum):
    """
    Where a resolution was served from.

    BUNDLED: caller-supplied payloads (0ms)
    MEMORY: process-wide map (< 1ms)
    EXTERNAL: Redis / REST KV / edge KV (20-40ms)
    ORIGIN: HTTP fetch from the vendor list endpoint (100-300ms)
    """

    BUNDLED = "bundled"
    MEMORY = "memory"
    EXTERNAL = "external"
    ORIGIN = "origin"


# ============================================================================
# TTL Policy (milliseconds)
# ============================================================================

# Memory tier is recycled with the worker, keep it short
MEMORY_TTL_MS = 5 * 60 * 1000

# The vendor list is republished weekly; one day keeps it reasonably fresh
EXTERNAL_TTL_MS = 24 * 60 * 60 * 1000

# Edge KV namespaces reject expiration TTLs below one minute
KV_MIN_TTL_SECONDS = 60


# ============================================================================
# Cache Keys
# ============================================================================

KEY_SEPARATOR = ":"
KEY_ALL_FILTER = "all"
FILTER_ID_SEPARATOR = ","
DEDUP_KEY_SEPARATOR = "|"

RESOURCE_KIND_GVL = "gvl"


# ============================================================================
# Origin HTTP Contract
# ============================================================================

DEFAULT_GVL_ENDPOINT = "https://gvl.consent.io"
DEFAULT_ORIGIN_TIMEOUT = 10.0

HEADER_ACCEPT_LANGUAGE = "Accept-Language"
QUERY_PARAM_VENDOR_IDS = "vendorIds"

HTTP_STATUS_NO_CONTENT = 204


# ============================================================================
# Defaults
# ============================================================================

DEFAULT_APP_NAMESPACE = "c15t"
