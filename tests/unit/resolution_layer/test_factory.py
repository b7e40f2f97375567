"""
Unit Tests for the Resolver Factory

Tests external tier selection from settings.
"""

import pytest

from vendorlist_cache.core.config.settings import Settings
from vendorlist_cache.core.exceptions import ConfigurationError
from vendorlist_cache.infrastructure.cache.redis_adapter import RedisCacheAdapter
from vendorlist_cache.infrastructure.cache.upstash_adapter import UpstashRedisAdapter
from vendorlist_cache.resolution.factory import create_external_adapter, create_resolver_from_settings
from vendorlist_cache.resolution.origin_fetcher import get_origin_fetcher
from vendorlist_cache.resolution.resolver import VendorListResolver

UPSTASH_URL = "https://eu1-example.upstash.io"


@pytest.mark.unit
class TestCreateExternalAdapter:
    def test_no_external_tier(self):
        """Test that no external tier is built when nothing is configured."""
        assert create_external_adapter(Settings()) is None

    def test_upstash_selected(self):
        """Test that an Upstash url and token select the Upstash adapter."""
        settings = Settings(UPSTASH_REDIS_REST_URL=UPSTASH_URL, UPSTASH_REDIS_REST_TOKEN="secret")

        assert isinstance(create_external_adapter(settings), UpstashRedisAdapter)

    def test_upstash_preferred_over_redis(self):
        """Test that Upstash wins when both Upstash and REDIS_URL are set."""
        settings = Settings(
            UPSTASH_REDIS_REST_URL=UPSTASH_URL,
            UPSTASH_REDIS_REST_TOKEN="secret",
            REDIS_URL="redis://localhost:6379/0",
        )

        assert isinstance(create_external_adapter(settings), UpstashRedisAdapter)

    def test_redis_selected(self):
        """Test that REDIS_URL alone selects the native Redis adapter."""
        settings = Settings(REDIS_URL="redis://localhost:6379/0")

        assert isinstance(create_external_adapter(settings), RedisCacheAdapter)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"UPSTASH_REDIS_REST_URL": UPSTASH_URL},
            {"UPSTASH_REDIS_REST_TOKEN": "secret"},
        ],
    )
    def test_half_configured_upstash_fails(self, overrides):
        """Test that an Upstash url without a token, or the reverse, is a configuration error."""
        with pytest.raises(ConfigurationError):
            create_external_adapter(Settings(**overrides))

    def test_invalid_redis_url_fails(self):
        """Test that a REDIS_URL without a redis scheme is a configuration error."""
        with pytest.raises(ConfigurationError):
            create_external_adapter(Settings(REDIS_URL="localhost:6379"))


@pytest.mark.unit
class TestCreateResolverFromSettings:
    def test_resolver_from_explicit_settings(self, gvl_en):
        """Test that namespace, vendor ids and endpoint come from the given settings."""
        settings = Settings(APP_NAMESPACE="app", GVL_VENDOR_IDS="10,1", GVL_ENDPOINT="https://gvl.test")

        resolver = create_resolver_from_settings(bundled={"en": gvl_en}, settings=settings)

        assert isinstance(resolver, VendorListResolver)
        assert resolver.namespace == "app"
        assert resolver.filter_ids == [1, 10]
        assert resolver.endpoint == "https://gvl.test"

    def test_fetcher_built_from_given_settings(self):
        """Test that the origin fetcher uses the endpoint and timeout of the given settings."""
        settings = Settings(GVL_ENDPOINT="https://gvl.test", GVL_REQUEST_TIMEOUT=1.5)

        resolver = create_resolver_from_settings(settings=settings)

        assert resolver.fetcher is not get_origin_fetcher()
        assert resolver.fetcher.endpoint == "https://gvl.test"
        assert resolver.fetcher._timeout == 1.5

    def test_ttls_from_given_settings(self):
        """Test that both tier TTLs come from the given settings."""
        settings = Settings(CACHE_MEMORY_TTL_MS=1_000, CACHE_EXTERNAL_TTL_MS=120_000)

        resolver = create_resolver_from_settings(settings=settings)

        assert resolver._memory_ttl_ms == 1_000
        assert resolver._external_ttl_ms == 120_000

    def test_resolver_from_environment(self, monkeypatch):
        """Test that the environment is used when no settings are passed."""
        monkeypatch.setenv("APP_NAMESPACE", "tenant")
        monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")

        resolver = create_resolver_from_settings()

        assert resolver.namespace == "tenant"
        assert isinstance(resolver._external, RedisCacheAdapter)

    async def test_bundled_served_without_network(self, gvl_en):
        """Test that a bundled variant resolves without touching the origin."""
        resolver = create_resolver_from_settings(bundled={"en": gvl_en}, settings=Settings())

        assert await resolver.resolve("en") is gvl_en
