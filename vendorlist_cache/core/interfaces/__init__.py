"""
Core Interfaces Module

Protocols for pluggable components, enabling dependency injection and
testability.

Components:
-----------
- **cache.py**: CacheAdapter protocol for cache tier implementations

Usage:
------
```python
from vendorlist_cache.core.interfaces import CacheAdapter

async def warm(adapter: CacheAdapter, key: str, gvl: dict) -> None:
    await adapter.set(key, gvl, ttl_ms=60_000)
```
"""

from .cache import CacheAdapter, Payload

__all__ = ["CacheAdapter", "Payload"]
