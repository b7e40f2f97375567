"""
Core Module

Foundational components: configuration, logging, exceptions and interfaces.
"""

from .exceptions import (
    CacheConnectionError,
    CacheError,
    CacheKeyError,
    ConfigurationError,
    InvalidCacheKeyError,
    InvalidPayloadError,
    OriginError,
    OriginFetchError,
    OriginUnavailableError,
    VendorListCacheError,
)
from .interfaces import CacheAdapter, Payload
from .logging import (
    clear_resolution_id,
    get_logger,
    get_resolution_id,
    log_stage,
    set_resolution_id,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "set_resolution_id",
    "get_resolution_id",
    "clear_resolution_id",
    "log_stage",
    "VendorListCacheError",
    "ConfigurationError",
    "CacheError",
    "CacheConnectionError",
    "CacheKeyError",
    "InvalidCacheKeyError",
    "OriginError",
    "OriginFetchError",
    "OriginUnavailableError",
    "InvalidPayloadError",
    "CacheAdapter",
    "Payload",
]
