"""
Resolver Factory

Builds a VendorListResolver from Settings, choosing the external tier:

    1. Upstash REST  - UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN
    2. Native Redis  - REDIS_URL
    3. None          - memory and origin only
"""

from collections.abc import Mapping

from vendorlist_cache.core.config.constants import Stage
from vendorlist_cache.core.config.settings import Settings, get_settings
from vendorlist_cache.core.exceptions import ConfigurationError
from vendorlist_cache.core.interfaces.cache import CacheAdapter, Payload
from vendorlist_cache.core.logging.logger import get_logger, log_stage
from vendorlist_cache.infrastructure.cache.redis_adapter import RedisCacheAdapter
from vendorlist_cache.infrastructure.cache.upstash_adapter import UpstashRedisAdapter
from vendorlist_cache.resolution.origin_fetcher import OriginFetcher
from vendorlist_cache.resolution.resolver import VendorListResolver

logger = get_logger(__name__)


def create_external_adapter(settings: Settings) -> CacheAdapter | None:
    """
    External cache tier described by settings, or None.

    Raises:
        ConfigurationError: If only one of the Upstash url/token is set
    """
    redis_settings = settings.redis
    url = redis_settings.UPSTASH_REDIS_REST_URL
    token = redis_settings.UPSTASH_REDIS_REST_TOKEN

    if bool(url) != bool(token):
        raise ConfigurationError(
            "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set together",
            details={"url_set": bool(url), "token_set": bool(token)},
        )

    if url and token:
        return UpstashRedisAdapter(url=url, token=token)

    if redis_settings.REDIS_URL:
        return RedisCacheAdapter.from_url(redis_settings.REDIS_URL)

    return None


def create_resolver_from_settings(
    bundled: Mapping[str, Payload] | None = None,
    settings: Settings | None = None,
) -> VendorListResolver:
    """
    Create a resolver configured from the environment.

    Args:
        bundled: Optional variant -> vendor list map served without I/O
        settings: Settings to use (defaults to get_settings())

    Returns:
        VendorListResolver
    """
    settings = settings or get_settings()
    external = create_external_adapter(settings)

    log_stage(logger, Stage.INITIALIZATION, "Creating resolver from settings",
              namespace=settings.APP_NAMESPACE,
              external=type(external).__name__ if external is not None else None)

    return VendorListResolver(
        namespace=settings.APP_NAMESPACE,
        bundled=bundled,
        external=external,
        filter_ids=settings.origin.GVL_VENDOR_IDS,
        endpoint=settings.origin.GVL_ENDPOINT,
        fetcher=OriginFetcher(
            endpoint=settings.origin.GVL_ENDPOINT,
            timeout=settings.origin.GVL_REQUEST_TIMEOUT,
        ),
        memory_ttl_ms=settings.cache.CACHE_MEMORY_TTL_MS,
        external_ttl_ms=settings.cache.CACHE_EXTERNAL_TTL_MS,
    )
