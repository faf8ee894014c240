"""CoinGecko market data client; every call goes through the RequestGateway."""

import logging
from typing import Any, Optional

import httpx

from coinfolio.gateway import RequestCategory, RequestGateway
from coinfolio.providers.fallback_data import FALLBACK_MARKETS, FALLBACK_SEARCH_RESULT

logger = logging.getLogger(__name__)

COINGECKO_BASE_URL = "https://api.coingecko.com/api/v3"
DEFAULT_TIMEOUT_SECONDS = 30.0


def build_gateway(min_interval_seconds: float) -> RequestGateway:
    """Create a gateway with the fallback datasets for listings and search."""
    return RequestGateway(
        min_interval_seconds=min_interval_seconds,
        fallbacks={
            RequestCategory.MARKETS: FALLBACK_MARKETS,
            RequestCategory.SEARCH: FALLBACK_SEARCH_RESULT,
        },
    )


class CoinGeckoClient:
    """
    Async client for the CoinGecko public API.

    Only builds requests; queueing, spacing and throttle fallback are the
    gateway's job.
    """

    def __init__(
        self,
        gateway: RequestGateway,
        base_url: str = COINGECKO_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._gateway = gateway
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def _get(
        self,
        path: str,
        params: dict[str, Any],
        category: RequestCategory,
    ) -> Any:
        logger.debug("Queueing GET %s %s", path, params)
        return await self._gateway.enqueue(
            lambda: self._http.get(path, params=params),
            category=category,
        )

    async def get_coins_markets(
        self,
        page: int = 1,
        per_page: int = 50,
        vs_currency: str = "usd",
        ids: Optional[list[str]] = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {
            "vs_currency": vs_currency,
            "order": "market_cap_desc",
            "per_page": per_page,
            "page": page,
            "sparkline": "false",
            "price_change_percentage": "24h",
        }
        if ids:
            params["ids"] = ",".join(ids)
        return await self._get("/coins/markets", params, RequestCategory.MARKETS)

    async def search_coins(self, query: str) -> dict[str, Any]:
        return await self._get("/search", {"query": query}, RequestCategory.SEARCH)

    async def get_coin_market_chart(
        self,
        coin_id: str,
        days: int = 7,
        vs_currency: str = "usd",
    ) -> dict[str, Any]:
        params = {"vs_currency": vs_currency, "days": days, "interval": "daily"}
        return await self._get(f"/coins/{coin_id}/market_chart", params, RequestCategory.CHART)

    async def aclose(self) -> None:
        await self._http.aclose()
