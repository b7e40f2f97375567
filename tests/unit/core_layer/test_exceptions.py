"""
Unit Tests for Core Exceptions

Tests the exception hierarchy and its structured details.
"""

import httpx
import pytest

from vendorlist_cache.core.exceptions import (
    CacheConnectionError,
    CacheError,
    CacheKeyError,
    ConfigurationError,
    InvalidCacheKeyError,
    InvalidPayloadError,
    OriginError,
    OriginFetchError,
    OriginUnavailableError,
    VendorListCacheError,
)


@pytest.mark.unit
class TestVendorListCacheError:
    """Test the base exception class."""

    def test_base_error_creation(self):
        """Test that the base error keeps its message and empty details."""
        error = VendorListCacheError("Test message")

        assert str(error) == "Test message"
        assert error.message == "Test message"
        assert error.details == {}

    def test_details_are_copied(self):
        """Test that the error copies the details it is given."""
        details = {"key": "value"}
        error = VendorListCacheError("Test", details=details)
        error.details["extra"] = 1

        assert details == {"key": "value"}

    def test_to_dict(self):
        """Test that to_dict includes type, message and details."""
        error = CacheKeyError("Bad value", details={"key": "app:gvl:de:all"})

        assert error.to_dict() == {
            "error_type": "CacheKeyError",
            "message": "Bad value",
            "details": {"key": "app:gvl:de:all"},
        }

    def test_with_context_chains(self):
        """Test that with_context adds details and returns the same error."""
        error = OriginError("Failed").with_context(variant="de")

        assert isinstance(error, OriginError)
        assert error.details["variant"] == "de"

    def test_repr_includes_details(self):
        """Test that repr shows message and details."""
        error = ConfigurationError("Missing token", details={"url": "https://x"})

        assert repr(error) == "ConfigurationError(message='Missing token', details={'url': 'https://x'})"

    def test_from_exception_wraps_original(self):
        """Test that from_exception records the original error and extra context."""
        original = httpx.ConnectError("connection refused")

        error = CacheConnectionError.from_exception(original, command="GET")

        assert isinstance(error, CacheConnectionError)
        assert error.message == "connection refused"
        assert error.details == {
            "original_error": "ConnectError",
            "original_message": "connection refused",
            "command": "GET",
        }

    def test_from_exception_custom_message(self):
        """Test that from_exception accepts a custom message."""
        error = OriginUnavailableError.from_exception(TimeoutError("slow"), message="Origin down")

        assert error.message == "Origin down"
        assert error.details["original_error"] == "TimeoutError"


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test that every exception sits in the right branch."""

    @pytest.mark.parametrize(
        "error_class",
        [CacheConnectionError, CacheKeyError, InvalidCacheKeyError],
    )
    def test_cache_errors(self, error_class):
        """Test that cache errors belong to the cache branch only."""
        error = error_class("x")
        assert isinstance(error, CacheError)
        assert isinstance(error, VendorListCacheError)
        assert not isinstance(error, OriginError)

    @pytest.mark.parametrize(
        "error_class",
        [OriginFetchError, OriginUnavailableError, InvalidPayloadError],
    )
    def test_origin_errors(self, error_class):
        """Test that origin errors belong to the origin branch only."""
        error = error_class("x")
        assert isinstance(error, OriginError)
        assert isinstance(error, VendorListCacheError)
        assert not isinstance(error, CacheError)

    def test_configuration_error_is_base_error(self):
        """Test that ConfigurationError derives from the base error."""
        assert isinstance(ConfigurationError("x"), VendorListCacheError)


@pytest.mark.unit
class TestOriginFetchError:
    """Test status code and body on OriginFetchError."""

    def test_carries_status_and_body(self):
        """Test that OriginFetchError keeps status code and body."""
        error = OriginFetchError("Failed to fetch", status_code=503, body="maintenance")

        assert error.status_code == 503
        assert error.body == "maintenance"
        assert error.details["status_code"] == 503

    def test_explicit_details_kept(self):
        """Test that explicit details are merged with the status code."""
        error = OriginFetchError("Failed", status_code=500, details={"variant": "fr"})

        assert error.details == {"variant": "fr", "status_code": 500}
