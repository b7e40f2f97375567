"""
In-Flight Request Registry

Process-wide map from deduplication key to the task performing that origin
fetch. Concurrent callers for the same key await the same task instead of
issuing their own request (thundering herd protection).

Invariants:
- At most one live entry per key
- An entry is removed when its task settles, success or failure
- register/lookup never span an await, so no lock is needed
"""

import asyncio

from vendorlist_cache.core.interfaces.cache import Payload


class InFlightRegistry:
    """Map of dedup key to the in-progress origin fetch."""

    def __init__(self):
        self._tasks: dict[str, "asyncio.Task[Payload | None]"] = {}

    def get(self, key: str) -> "asyncio.Task[Payload | None] | None":
        return self._tasks.get(key)

    def register(self, key: str, task: "asyncio.Task[Payload | None]") -> None:
        self._tasks[key] = task

    def release(self, key: str, task: "asyncio.Task[Payload | None]") -> None:
        """Remove the entry for key, but only if it still belongs to task."""
        if self._tasks.get(key) is task:
            del self._tasks[key]

    def clear(self) -> None:
        self._tasks.clear()

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, key: str) -> bool:
        return key in self._tasks


# =============================================================================
# GLOBAL INSTANCE (SINGLETON PATTERN)
# =============================================================================

_registry: InFlightRegistry | None = None


def get_inflight_registry() -> InFlightRegistry:
    """
    Get the process-wide in-flight registry (singleton).

    Returns:
        InFlightRegistry: Global registry instance
    """
    global _registry

    if _registry is None:
        _registry = InFlightRegistry()

    return _registry


def reset_inflight_registry() -> None:
    """Drop the process-wide registry (testing only)."""
    global _registry
    _registry = None
