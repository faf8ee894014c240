"""Market data service for coin listings, search and price history."""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from coinfolio.core.exceptions import NotFoundError, UpstreamError
from coinfolio.domain.views import CoinMarket, CoinSearchResult, MarketChart
from coinfolio.providers.market_data_provider import MarketDataProvider
from coinfolio.services.retry_policy import RetryPolicy, execute_with_retry

logger = logging.getLogger(__name__)

MIN_SEARCH_QUERY_LENGTH = 3
MAX_CACHE_ENTRIES = 256
# Expired entries are kept this many TTLs for stale fallback, then dropped
STALE_RETENTION_FACTOR = 10


def _expect_market_list(payload: Any) -> list[dict]:
    if not isinstance(payload, list) or not all(isinstance(item, dict) and item.get("id") for item in payload):
        raise UpstreamError("API Error: unexpected markets payload")
    return payload


def _expect_object(payload: Any) -> dict:
    if not isinstance(payload, dict):
        raise UpstreamError("API Error: unexpected response payload")
    return payload


class MarketDataService:
    """
    Service for fetching market data.

    Wraps the provider with retries, a per-request TTL cache and graceful
    degradation: when the upstream keeps failing, a stale cached answer is
    returned if one exists.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache_ttl_seconds: float = 60,
        retry_policy: Optional[RetryPolicy] = None,
        vs_currency: str = "usd",
        clock: Callable[[], float] = time.monotonic,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        max_cache_entries: int = MAX_CACHE_ENTRIES,
    ):
        self._provider = provider
        self._cache_ttl = cache_ttl_seconds
        self._retry_policy = retry_policy or RetryPolicy()
        self._vs_currency = vs_currency
        self._clock = clock
        self._sleep = sleep or asyncio.sleep
        self._max_cache_entries = max_cache_entries
        # key -> (fetched_at, raw payload)
        self._cache: dict[tuple, tuple[float, Any]] = {}

    async def get_coins_markets(
        self,
        page: int = 1,
        per_page: int = 50,
        vs_currency: Optional[str] = None,
        ids: Optional[list[str]] = None,
    ) -> list[CoinMarket]:
        """Coins ordered by market cap; ids restricts the listing to those coins."""
        currency = vs_currency or self._vs_currency
        id_key = tuple(sorted(ids)) if ids else ()
        raw = await self._fetch(
            ("markets", page, per_page, currency, id_key),
            lambda: self._provider.get_coins_markets(
                page=page,
                per_page=per_page,
                vs_currency=currency,
                ids=list(ids) if ids else None,
            ),
            _expect_market_list,
        )
        return [CoinMarket.from_api(item) for item in raw]

    async def search_coins(self, query: str) -> CoinSearchResult:
        """Search coins; queries shorter than three characters return nothing."""
        query = (query or "").strip()
        if len(query) < MIN_SEARCH_QUERY_LENGTH:
            return CoinSearchResult()
        raw = await self._fetch(
            ("search", query.lower()),
            lambda: self._provider.search_coins(query),
            _expect_object,
        )
        return CoinSearchResult.from_api(raw)

    async def get_coin_market_chart(
        self,
        coin_id: str,
        days: int = 7,
        vs_currency: Optional[str] = None,
    ) -> MarketChart:
        currency = vs_currency or self._vs_currency
        raw = await self._fetch(
            ("chart", coin_id, days, currency),
            lambda: self._provider.get_coin_market_chart(coin_id, days=days, vs_currency=currency),
            _expect_object,
        )
        return MarketChart.from_api(raw)

    async def get_coin_details(self, coin_id: str, vs_currency: Optional[str] = None) -> CoinMarket:
        """Market record for a single coin."""
        coins = await self.get_coins_markets(page=1, per_page=1, vs_currency=vs_currency, ids=[coin_id])
        for coin in coins:
            if coin.id == coin_id:
                return coin
        raise NotFoundError("Coin", coin_id)

    def clear_cache(self) -> None:
        self._cache.clear()

    async def _fetch(
        self,
        key: tuple,
        call: Callable[[], Awaitable[Any]],
        check: Callable[[Any], Any],
    ) -> Any:
        """Cached, retried call; check() rejects malformed payloads before they are cached."""
        cached = self._cache.get(key)
        if cached and self._clock() - cached[0] < self._cache_ttl:
            return cached[1]

        async def attempt():
            return check(await call())

        try:
            payload = await execute_with_retry(
                attempt,
                retry_policy=self._retry_policy,
                logger=logger,
                sleep=self._sleep,
                description=key[0],
            )
        except UpstreamError as exc:
            if cached:
                # Graceful degradation: serve the stale entry
                logger.warning("Serving stale %s data after upstream failure: %s", key[0], exc)
                return cached[1]
            raise

        now = self._clock()
        # Re-insert so dict order stays oldest-first
        self._cache.pop(key, None)
        self._cache[key] = (now, payload)
        self._prune(now)
        return payload

    def _prune(self, now: float) -> None:
        horizon = self._cache_ttl * STALE_RETENTION_FACTOR
        for key in [k for k, (fetched_at, _) in self._cache.items() if now - fetched_at >= horizon]:
            del self._cache[key]
        while len(self._cache) > self._max_cache_entries:
            del self._cache[next(iter(self._cache))]
