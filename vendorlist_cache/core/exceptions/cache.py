"""
Cache-Related Exceptions

All exceptions raised by storage adapters and the key builder.
"""

from vendorlist_cache.core.exceptions.base import VendorListCacheError


class CacheError(VendorListCacheError):
    """Base exception for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """
    Raised when a remote cache tier cannot be reached.

    Common causes:
    - Redis / REST endpoint is down
    - Network connectivity issues
    - Authentication failure
    """
    pass


class CacheKeyError(CacheError):
    """
    Raised when a cache key operation fails.

    Common causes:
    - Backend rejected the command
    - Stored value could not be decoded
    """
    pass


class InvalidCacheKeyError(CacheError):
    """Raised when a key segment is empty or contains the key separator."""
    pass
