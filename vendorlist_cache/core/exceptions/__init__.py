"""
Exception Module

Structured exception hierarchy for the vendor list cache engine.

Module Structure:
-----------------
- **base.py**: VendorListCacheError base class + ConfigurationError
- **cache.py**: Storage adapter and key builder exceptions
- **origin.py**: Origin fetch exceptions

Usage:
------
```python
from vendorlist_cache.core.exceptions import CacheError, OriginFetchError

try:
    gvl = await resolver.resolve("de")
except OriginFetchError as e:
    logger.error("GVL unavailable", status=e.status_code)
```
"""

from vendorlist_cache.core.exceptions.base import ConfigurationError, VendorListCacheError
from vendorlist_cache.core.exceptions.cache import (
    CacheConnectionError,
    CacheError,
    CacheKeyError,
    InvalidCacheKeyError,
)
from vendorlist_cache.core.exceptions.origin import (
    InvalidPayloadError,
    OriginError,
    OriginFetchError,
    OriginUnavailableError,
)

__all__ = [
    # Base
    "VendorListCacheError",
    "ConfigurationError",
    # Cache
    "CacheError",
    "CacheConnectionError",
    "CacheKeyError",
    "InvalidCacheKeyError",
    # Origin
    "OriginError",
    "OriginFetchError",
    "OriginUnavailableError",
    "InvalidPayloadError",
]
