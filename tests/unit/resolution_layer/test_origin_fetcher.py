"""
Unit Tests for OriginFetcher

Tests the request shape, response mapping and in-flight deduplication.
"""

import asyncio

import httpx
import pytest

from tests.test_fixtures import TEST_ENDPOINT, OriginStub, OriginTestFactory
from vendorlist_cache.core.config.constants import DEFAULT_GVL_ENDPOINT
from vendorlist_cache.core.exceptions import InvalidPayloadError, OriginFetchError, OriginUnavailableError
from vendorlist_cache.resolution.inflight import InFlightRegistry, get_inflight_registry
from vendorlist_cache.resolution.origin_fetcher import (
    OriginFetcher,
    close_origin_fetcher,
    get_origin_fetcher,
)


@pytest.mark.unit
class TestOriginRequest:
    """Test the outgoing HTTP request."""

    async def test_accept_language_header(self, fetcher, origin):
        """Test that the variant is sent as Accept-Language."""
        await fetcher.fetch("de")

        assert origin.requests[0].headers["accept-language"] == "de"

    async def test_unfiltered_request_has_no_query(self, fetcher, origin):
        """Test that a request without ids carries no vendorIds parameter."""
        await fetcher.fetch("de")

        request = origin.requests[0]
        assert "vendorIds" not in request.url.params
        assert str(request.url) == TEST_ENDPOINT

    async def test_vendor_ids_sorted_in_query(self, fetcher, origin):
        """Test that vendorIds holds the sorted, deduplicated ids."""
        await fetcher.fetch("de", filter_ids=[10, 2, 1, 2])

        assert origin.requests[0].url.params["vendorIds"] == "1,2,10"

    async def test_endpoint_override(self, fetcher, origin):
        """Test that a per-call endpoint replaces the default one."""
        await fetcher.fetch("de", endpoint="https://mirror.test.local/gvl")

        assert origin.requests[0].url.host == "mirror.test.local"


@pytest.mark.unit
class TestOriginResponses:
    """Test mapping of origin responses to results and errors."""

    async def test_success_returns_document(self, fetcher, gvl_de):
        """Test that a 200 response returns the decoded document."""
        assert await fetcher.fetch("de") == gvl_de

    async def test_no_content_returns_none(self):
        """Test that a 204 response returns None."""
        stub = OriginStub(status_code=204)
        fetcher = OriginTestFactory.fetcher(stub)

        assert await fetcher.fetch("de") is None

    @pytest.mark.parametrize("status", [400, 404, 500, 503])
    async def test_error_status_raises_fetch_error(self, status):
        """Test that other error statuses raise OriginFetchError with status and body."""
        stub = OriginStub(status_code=status, text="upstream says no")
        fetcher = OriginTestFactory.fetcher(stub)

        with pytest.raises(OriginFetchError) as exc_info:
            await fetcher.fetch("de")

        assert exc_info.value.status_code == status
        assert exc_info.value.body == "upstream says no"
        assert exc_info.value.details["variant"] == "de"

    async def test_transport_failure_raises_unavailable(self):
        """Test that a connection failure raises OriginUnavailableError."""
        stub = OriginStub(error=httpx.ConnectError("connection refused"))
        fetcher = OriginTestFactory.fetcher(stub)

        with pytest.raises(OriginUnavailableError) as exc_info:
            await fetcher.fetch("de")

        assert exc_info.value.details["original_error"] == "ConnectError"

    async def test_timeout_raises_unavailable(self):
        """Test that a timeout raises OriginUnavailableError."""
        stub = OriginStub(error=httpx.ReadTimeout("timed out"))
        fetcher = OriginTestFactory.fetcher(stub)

        with pytest.raises(OriginUnavailableError):
            await fetcher.fetch("de")

    async def test_non_json_body(self):
        """Test that a body that is not JSON raises InvalidPayloadError."""
        stub = OriginStub(text="<html>maintenance</html>")
        fetcher = OriginTestFactory.fetcher(stub)

        with pytest.raises(InvalidPayloadError):
            await fetcher.fetch("de")

    @pytest.mark.parametrize(
        "payload",
        [
            {"purposes": {}, "vendors": {}},
            {"vendorListVersion": 3, "vendors": {}},
            {"vendorListVersion": 3, "purposes": {}},
            {"vendorListVersion": 0, "purposes": {}, "vendors": {}},
            {"vendorListVersion": "3", "purposes": {}, "vendors": {}},
            [1, 2, 3],
        ],
    )
    async def test_incomplete_document(self, payload):
        """Test that a document missing mandatory fields raises InvalidPayloadError."""
        stub = OriginStub(payload=payload)
        fetcher = OriginTestFactory.fetcher(stub)

        with pytest.raises(InvalidPayloadError):
            await fetcher.fetch("de")

    async def test_extra_fields_preserved(self, gvl_de):
        """Test that fields beyond the mandatory set are returned unchanged."""
        gvl_de["stacks"] = {"1": {"id": 1}}
        stub = OriginStub(payload=gvl_de)
        fetcher = OriginTestFactory.fetcher(stub)

        result = await fetcher.fetch("de")

        assert result["stacks"] == {"1": {"id": 1}}


@pytest.mark.unit
class TestInFlightDeduplication:
    """Concurrent identical fetches share one HTTP request."""

    async def test_concurrent_identical_fetches_share_one_request(self, gvl_de):
        """Test that concurrent identical fetches share one request and one result."""
        stub = OriginStub(payload=gvl_de, delay=0.05)
        fetcher = OriginTestFactory.fetcher(stub)

        results = await asyncio.gather(*(fetcher.fetch("de") for _ in range(10)))

        assert stub.call_count == 1
        assert all(result == gvl_de for result in results)
        assert all(result is results[0] for result in results)

    async def test_filter_order_does_not_split_requests(self):
        """Test that differently ordered id lists share one request."""
        stub = OriginStub(delay=0.05)
        fetcher = OriginTestFactory.fetcher(stub)

        await asyncio.gather(fetcher.fetch("de", [1, 2, 10]), fetcher.fetch("de", [10, 1, 2]))

        assert stub.call_count == 1

    async def test_different_variants_fetch_separately(self):
        """Test that different variants are fetched separately."""
        stub = OriginStub(delay=0.05)
        fetcher = OriginTestFactory.fetcher(stub)

        await asyncio.gather(fetcher.fetch("de"), fetcher.fetch("fr"))

        assert stub.call_count == 2

    async def test_failure_shared_by_all_callers(self):
        """Test that every joined caller receives the shared failure."""
        stub = OriginStub(status_code=503, text="down", delay=0.05)
        fetcher = OriginTestFactory.fetcher(stub)

        results = await asyncio.gather(
            *(fetcher.fetch("de") for _ in range(5)), return_exceptions=True
        )

        assert stub.call_count == 1
        assert all(isinstance(result, OriginFetchError) for result in results)

    async def test_registry_cleared_after_success(self, fetcher, inflight_registry):
        """Test that the in-flight entry is removed after success."""
        await fetcher.fetch("de")

        assert len(inflight_registry) == 0

    async def test_registry_cleared_after_failure(self):
        """Test that the in-flight entry is removed after failure."""
        registry = InFlightRegistry()
        fetcher = OriginTestFactory.fetcher(OriginStub(status_code=500), registry=registry)

        with pytest.raises(OriginFetchError):
            await fetcher.fetch("de")

        assert len(registry) == 0

    async def test_registry_holds_entry_while_in_flight(self):
        """Test that the in-flight entry exists only while the request runs."""
        registry = InFlightRegistry()
        fetcher = OriginTestFactory.fetcher(OriginStub(delay=0.05), registry=registry)

        task = asyncio.create_task(fetcher.fetch("de", [2, 1]))
        await asyncio.sleep(0.01)

        assert f"{TEST_ENDPOINT}|de|1,2" in registry

        await task
        assert len(registry) == 0

    async def test_sequential_fetches_are_not_deduplicated(self, fetcher, origin):
        """Test that a fetch after completion issues a new request."""
        await fetcher.fetch("de")
        await fetcher.fetch("de")

        assert origin.call_count == 2

    async def test_cancelled_caller_does_not_cancel_shared_fetch(self, gvl_de):
        """Test that cancelling one caller leaves the shared fetch running for the others."""
        stub = OriginStub(payload=gvl_de, delay=0.05)
        fetcher = OriginTestFactory.fetcher(stub)

        first = asyncio.create_task(fetcher.fetch("de"))
        second = asyncio.create_task(fetcher.fetch("de"))
        await asyncio.sleep(0.01)

        first.cancel()

        assert await second == gvl_de
        with pytest.raises(asyncio.CancelledError):
            await first
        assert stub.call_count == 1


@pytest.mark.unit
class TestOriginFetcherLifecycle:
    """Test client ownership and the process-wide fetcher."""

    def test_defaults_from_settings(self):
        """Test that endpoint and registry default to settings and the process-wide registry."""
        fetcher = OriginFetcher()

        assert fetcher.endpoint == DEFAULT_GVL_ENDPOINT
        assert fetcher.registry is get_inflight_registry()

    def test_endpoint_from_environment(self, monkeypatch):
        """Test that GVL_ENDPOINT sets the default endpoint."""
        monkeypatch.setenv("GVL_ENDPOINT", "https://gvl.internal")

        assert OriginFetcher().endpoint == "https://gvl.internal"

    async def test_owned_client_closed(self):
        """Test that aclose closes a client the fetcher created."""
        fetcher = OriginFetcher()
        client = fetcher._get_client()

        await fetcher.aclose()

        assert client.is_closed is True

    async def test_injected_client_left_open(self, origin):
        """Test that aclose leaves an injected client open."""
        client = origin.client()
        fetcher = OriginFetcher(endpoint=TEST_ENDPOINT, client=client)

        await fetcher.aclose()

        assert client.is_closed is False
        await client.aclose()

    async def test_global_fetcher_singleton(self):
        """Test that get_origin_fetcher is reused until close_origin_fetcher."""
        fetcher = get_origin_fetcher()

        assert get_origin_fetcher() is fetcher

        await close_origin_fetcher()

        assert get_origin_fetcher() is not fetcher
