"""Periodic refresh of holding prices from the market listing."""

import asyncio
import logging
from decimal import Decimal
from typing import Iterable, Optional

from coinfolio.core.exceptions import UpstreamError
from coinfolio.domain.views import CoinMarket, PriceUpdate
from coinfolio.services.ledger_store import LedgerStore
from coinfolio.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)

MARKETS_PAGE_SIZE = 250


def build_price_updates(coin_ids: Iterable[str], coins: Iterable[CoinMarket]) -> list[PriceUpdate]:
    """Pair each tracked coin id with its listed price; unlisted or unpriced coins are skipped."""
    prices = {c.id: c.current_price for c in coins if c.current_price is not None}
    return [
        PriceUpdate(coin_id=coin_id, current_price=prices[coin_id])
        for coin_id in coin_ids
        if coin_id in prices
    ]


def price_signature(updates: Iterable[PriceUpdate]) -> str:
    """Order-independent fingerprint of a price update list."""
    pairs = sorted(f"{u.coin_id}:{_canonical(u.current_price)}" for u in updates)
    return "|".join(pairs)


def _canonical(price: Decimal) -> str:
    # 43250 and 43250.00 must fingerprint the same
    return format(price.normalize(), "f")


class PriceSyncLoop:
    """
    Feeds market prices for tracked coins into the ledger.

    An update whose signature matches the last applied one is skipped, so an
    unchanged market causes no ledger mutation and no persistence write.
    """

    def __init__(
        self,
        store: LedgerStore,
        market_data: MarketDataService,
        interval_seconds: float = 60.0,
    ):
        self._store = store
        self._market = market_data
        self._interval = interval_seconds
        self._last_signature: Optional[str] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def reset(self) -> None:
        """Forget the last applied update so the next sync always applies."""
        self._last_signature = None

    async def sync_once(self) -> bool:
        """Fetch prices once; returns True if the ledger was updated."""
        coin_ids = self._store.coin_ids()
        if not coin_ids:
            return False

        coins = await self._market.get_coins_markets(
            page=1,
            per_page=MARKETS_PAGE_SIZE,
            ids=coin_ids,
        )
        updates = build_price_updates(coin_ids, coins)
        if not updates:
            return False

        signature = price_signature(updates)
        if signature == self._last_signature:
            logger.debug("Prices unchanged, skipping update")
            return False

        self._store.update_prices(updates)
        self._last_signature = signature
        logger.info("Applied %d price updates", len(updates))
        return True

    async def run(self) -> None:
        """Sync forever, every interval_seconds."""
        while True:
            try:
                await self.sync_once()
            except UpstreamError as exc:
                logger.warning("Price sync failed: %s", exc)
            except Exception:
                logger.exception("Unexpected error during price sync")
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        if not self.is_running:
            self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
