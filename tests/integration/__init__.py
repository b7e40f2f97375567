"""
Integration tests.

These exercise real backends and are skipped unless enabled:
- USE_REAL_REDIS=1 with REDIS_URL pointing at a disposable Redis database
"""
