"""
Configuration Module

Centralized, type-safe configuration for the vendor list cache engine.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: TTLs, key separators, enums and origin wire names

Usage:
------
```python
from vendorlist_cache.core.config import get_settings
from vendorlist_cache.core.config.constants import CacheTier, MEMORY_TTL_MS

settings = get_settings()
endpoint = settings.origin.GVL_ENDPOINT
```

Environment Variables:
---------------------
```bash
APP_NAMESPACE=my-app
CACHE_MEMORY_TTL_MS=300000
CACHE_EXTERNAL_TTL_MS=86400000
GVL_ENDPOINT=https://gvl.consent.io
GVL_VENDOR_IDS=1,2,10,755
UPSTASH_REDIS_REST_URL=https://...upstash.io
UPSTASH_REDIS_REST_TOKEN=...
REDIS_URL=redis://localhost:6379/0
LOG_LEVEL=INFO
LOG_FORMAT=json
```
"""

from .constants import (
    EXTERNAL_TTL_MS,
    MEMORY_TTL_MS,
    CacheTier,
    Stage,
)
from .settings import Settings, get_settings, reload_settings

__all__ = [
    "Settings",
    "get_settings",
    "reload_settings",
    "CacheTier",
    "Stage",
    "MEMORY_TTL_MS",
    "EXTERNAL_TTL_MS",
]
