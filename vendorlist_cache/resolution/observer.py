"""
Resolution Observer

Counts where each resolution was served from and logs it. Kept apart from
the resolver so the tier walk stays free of bookkeeping.
"""

from typing import Any

from vendorlist_cache.core.config.constants import CacheTier, Stage
from vendorlist_cache.core.logging.logger import get_logger, log_stage

logger = get_logger(__name__)

_HIT_STAGES = {
    CacheTier.BUNDLED: Stage.BUNDLED_LOOKUP,
    CacheTier.MEMORY: Stage.MEMORY_LOOKUP,
    CacheTier.EXTERNAL: Stage.EXTERNAL_LOOKUP,
    CacheTier.ORIGIN: Stage.ORIGIN_FETCH,
}


class ResolutionObserver:
    """
    Tracks resolution outcomes per tier.

    Metrics Tracked:
    - Hits per tier (bundled, memory, external) and origin fetches
    - Absent results (origin answered with no vendor list)
    - Cache tier errors that were degraded to misses
    """

    def __init__(self, logger_instance=None):
        self._logger = logger_instance or logger
        self._served = {tier: 0 for tier in CacheTier}
        self._absent = 0
        self._tier_errors = 0

    def record_hit(self, tier: CacheTier, variant: str, key: str | None = None) -> None:
        self._served[tier] += 1
        log_stage(self._logger, _HIT_STAGES[tier], f"Vendor list served from {tier.value}",
                  level="debug", variant=variant, cache_key=key)

    def record_absent(self, variant: str, key: str) -> None:
        self._absent += 1
        log_stage(self._logger, Stage.ORIGIN_FETCH, "No vendor list for variant",
                  variant=variant, cache_key=key)

    def record_tier_error(self, tier: CacheTier, operation: str, key: str, error: Exception) -> None:
        self._tier_errors += 1
        log_stage(self._logger, Stage.TIER_FAILURE, f"{tier.value} cache {operation} failed, continuing",
                  level="warning", cache_key=key, error_type=type(error).__name__, error=str(error))

    def get_stats(self) -> dict[str, Any]:
        """
        Get resolution statistics.

        hit_rate is the share of resolutions answered without going to the
        origin.
        """
        cached = (
            self._served[CacheTier.BUNDLED]
            + self._served[CacheTier.MEMORY]
            + self._served[CacheTier.EXTERNAL]
        )
        origin = self._served[CacheTier.ORIGIN] + self._absent
        total = cached + origin

        return {
            "bundled_hits": self._served[CacheTier.BUNDLED],
            "memory_hits": self._served[CacheTier.MEMORY],
            "external_hits": self._served[CacheTier.EXTERNAL],
            "origin_fetches": self._served[CacheTier.ORIGIN],
            "absent": self._absent,
            "tier_errors": self._tier_errors,
            "total_resolutions": total,
            "hit_rate": round(cached / total, 4) if total > 0 else 0.0,
        }

    def reset(self) -> None:
        self._served = {tier: 0 for tier in CacheTier}
        self._absent = 0
        self._tier_errors = 0
