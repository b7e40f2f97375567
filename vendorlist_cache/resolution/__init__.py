"""
Resolution Module

Tier orchestration for vendor lists: cache keys, the deduplicating origin
fetcher, the resolver itself and its settings-driven factory.
"""

from .factory import create_external_adapter, create_resolver_from_settings
from .inflight import InFlightRegistry, get_inflight_registry, reset_inflight_registry
from .keys import (
    build_cache_key,
    build_dedup_key,
    build_gvl_cache_key,
    canonical_filter_ids,
    check_key_segment,
)
from .models import VendorListDocument, validate_payload
from .observer import ResolutionObserver
from .origin_fetcher import OriginFetcher, close_origin_fetcher, get_origin_fetcher
from .resolver import VendorListResolver

__all__ = [
    "build_cache_key",
    "build_gvl_cache_key",
    "build_dedup_key",
    "canonical_filter_ids",
    "check_key_segment",
    "InFlightRegistry",
    "get_inflight_registry",
    "reset_inflight_registry",
    "VendorListDocument",
    "validate_payload",
    "OriginFetcher",
    "get_origin_fetcher",
    "close_origin_fetcher",
    "ResolutionObserver",
    "VendorListResolver",
    "create_external_adapter",
    "create_resolver_from_settings",
]
