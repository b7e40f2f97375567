"""
Cache Key Builder

Deterministic, canonical cache keys:

    namespace:resource_kind:variant:filter

The filter segment is the de-duplicated filter ids sorted ascending and
joined with ",", or the literal "all" when no filter is given. Two filter
sets that are set-equal therefore always produce byte-identical keys.

The ":" separator is rejected inside the other segments, which keeps keys
for distinct namespaces, kinds and variants from colliding.
"""

from collections.abc import Iterable

from vendorlist_cache.core.config.constants import (
    DEDUP_KEY_SEPARATOR,
    FILTER_ID_SEPARATOR,
    KEY_ALL_FILTER,
    KEY_SEPARATOR,
    RESOURCE_KIND_GVL,
)
from vendorlist_cache.core.exceptions import InvalidCacheKeyError


def canonical_filter_ids(filter_ids: Iterable[int] | None) -> list[int]:
    """
    Sorted, de-duplicated copy of filter_ids (empty list for None).

    Raises:
        InvalidCacheKeyError: If an id is not an integer
    """
    if filter_ids is None:
        return []

    ids = list(filter_ids)
    for value in ids:
        # bool is an int subclass but never a meaningful id
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidCacheKeyError(
                "Filter ids must be integers",
                details={"value": repr(value)},
            )
    return sorted(set(ids))


def _filter_segment(filter_ids: Iterable[int] | None) -> str:
    ids = canonical_filter_ids(filter_ids)
    if not ids:
        return KEY_ALL_FILTER
    return FILTER_ID_SEPARATOR.join(str(i) for i in ids)


def check_key_segment(name: str, value: str) -> str:
    """Return value if it is usable as a key segment, else raise InvalidCacheKeyError."""
    if not isinstance(value, str) or not value:
        raise InvalidCacheKeyError(f"Cache key {name} must be a non-empty string", details={name: value})
    if KEY_SEPARATOR in value:
        raise InvalidCacheKeyError(
            f"Cache key {name} must not contain '{KEY_SEPARATOR}'",
            details={name: value},
        )
    return value


def build_cache_key(
    namespace: str,
    resource_kind: str,
    variant: str,
    filter_ids: Iterable[int] | None = None,
) -> str:
    """
    Build a canonical cache key.

    Args:
        namespace: Application namespace (tenant prefix)
        resource_kind: Kind of payload, e.g. "gvl"
        variant: Variant identifier, e.g. a language code
        filter_ids: Optional numeric filter (order and duplicates ignored)

    Returns:
        Cache key, e.g. "app:gvl:de:1,2,10"

    Raises:
        InvalidCacheKeyError: On an empty segment, a segment containing ":",
            or a non-integer filter id
    """
    return KEY_SEPARATOR.join(
        (
            check_key_segment("namespace", namespace),
            check_key_segment("resource_kind", resource_kind),
            check_key_segment("variant", variant),
            _filter_segment(filter_ids),
        )
    )


def build_gvl_cache_key(
    namespace: str,
    language: str,
    vendor_ids: Iterable[int] | None = None,
) -> str:
    """Cache key for a localized vendor list, e.g. "app:gvl:de:all"."""
    return build_cache_key(namespace, RESOURCE_KIND_GVL, language, vendor_ids)


def build_dedup_key(
    endpoint: str,
    variant: str,
    filter_ids: Iterable[int] | None = None,
) -> str:
    """
    Key identifying one origin query for in-flight deduplication.

    Same canonicalization as cache keys: "endpoint|variant|1,2,10".
    """
    ids = canonical_filter_ids(filter_ids)
    return DEDUP_KEY_SEPARATOR.join(
        (endpoint, variant, FILTER_ID_SEPARATOR.join(str(i) for i in ids))
    )
