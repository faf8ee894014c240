"""
Unit tests for CoinGeckoClient over a mock HTTP transport.

Tests cover:
- Request paths and query parameters
- Fallback data when throttled
- Error propagation
"""

import asyncio

import httpx
import pytest

from coinfolio.core.exceptions import UpstreamError, UpstreamThrottledError
from coinfolio.gateway import RequestGateway
from coinfolio.providers import CoinGeckoClient, build_gateway
from coinfolio.providers.fallback_data import FALLBACK_MARKETS, FALLBACK_SEARCH_RESULT

from tests.conftest import MockUpstream

BASE_URL = "https://api.coingecko.com/api/v3"


def make_client(upstream: MockUpstream, gateway: RequestGateway = None) -> CoinGeckoClient:
    return CoinGeckoClient(
        gateway=gateway or build_gateway(0.0),
        base_url=BASE_URL,
        transport=upstream.transport,
    )


class TestRequests:
    """Tests for request construction."""

    @pytest.mark.asyncio
    async def test_markets_query_parameters(self, upstream: MockUpstream):
        client = make_client(upstream)

        await client.get_coins_markets(page=2, per_page=10, vs_currency="eur", ids=["bitcoin", "ethereum"])
        await client.aclose()

        request = upstream.requests[0]
        assert request.url.path == "/api/v3/coins/markets"
        params = request.url.params
        assert params["vs_currency"] == "eur"
        assert params["order"] == "market_cap_desc"
        assert params["per_page"] == "10"
        assert params["page"] == "2"
        assert params["sparkline"] == "false"
        assert params["price_change_percentage"] == "24h"
        assert params["ids"] == "bitcoin,ethereum"

    @pytest.mark.asyncio
    async def test_markets_without_ids_omits_param(self, upstream: MockUpstream):
        client = make_client(upstream)

        result = await client.get_coins_markets()
        await client.aclose()

        assert "ids" not in upstream.requests[0].url.params
        assert result == FALLBACK_MARKETS

    @pytest.mark.asyncio
    async def test_search_and_chart_paths(self, upstream: MockUpstream):
        upstream.route("/api/v3/search", json={"coins": []})
        upstream.route("/api/v3/coins/bitcoin/market_chart", json={"prices": []})
        client = make_client(upstream)

        await client.search_coins("bit")
        await client.get_coin_market_chart("bitcoin", days=30)
        await client.aclose()

        search, chart = upstream.requests
        assert search.url.params["query"] == "bit"
        assert chart.url.path == "/api/v3/coins/bitcoin/market_chart"
        assert chart.url.params["days"] == "30"
        assert chart.url.params["interval"] == "daily"

    @pytest.mark.asyncio
    async def test_concurrent_calls_share_one_queue(self, upstream: MockUpstream):
        upstream.route("/api/v3/search", json={"coins": []})
        client = make_client(upstream)

        await asyncio.gather(
            client.get_coins_markets(),
            client.search_coins("eth"),
            client.get_coins_markets(page=2),
        )
        await client.aclose()

        assert upstream.paths() == ["/api/v3/coins/markets", "/api/v3/search", "/api/v3/coins/markets"]


class TestThrottledResponses:
    """Tests for 429 answers from the upstream."""

    @pytest.mark.asyncio
    async def test_markets_fall_back(self, upstream: MockUpstream):
        upstream.route("/api/v3/coins/markets", status=429, json={"status": {"error_code": 429}})
        client = make_client(upstream)

        result = await client.get_coins_markets()
        await client.aclose()

        assert result == FALLBACK_MARKETS

    @pytest.mark.asyncio
    async def test_search_falls_back(self, upstream: MockUpstream):
        upstream.route("/api/v3/search", status=429, json={})
        client = make_client(upstream)

        result = await client.search_coins("bitcoin")
        await client.aclose()

        assert result == FALLBACK_SEARCH_RESULT

    @pytest.mark.asyncio
    async def test_chart_has_no_fallback(self, upstream: MockUpstream):
        upstream.route("/api/v3/coins/bitcoin/market_chart", status=429, json={})
        client = make_client(upstream)

        with pytest.raises(UpstreamThrottledError):
            await client.get_coin_market_chart("bitcoin")
        await client.aclose()


class TestErrors:
    @pytest.mark.asyncio
    async def test_unknown_coin_chart_raises(self, upstream: MockUpstream):
        client = make_client(upstream)

        with pytest.raises(UpstreamError) as exc_info:
            await client.get_coin_market_chart("nope")
        await client.aclose()

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "API Error: coin not found"

    @pytest.mark.asyncio
    async def test_connection_failure_raises(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = CoinGeckoClient(
            gateway=build_gateway(0.0),
            base_url=BASE_URL,
            transport=httpx.MockTransport(refuse),
        )

        with pytest.raises(UpstreamError) as exc_info:
            await client.get_coins_markets()
        await client.aclose()

        assert exc_info.value.code == "UPSTREAM_UNAVAILABLE"
