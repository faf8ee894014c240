"""Market data provider protocol."""

from typing import Any, Optional, Protocol


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Methods return the decoded upstream JSON; parsing into view models is
    left to MarketDataService.
    """

    async def get_coins_markets(
        self,
        page: int = 1,
        per_page: int = 50,
        vs_currency: str = "usd",
        ids: Optional[list[str]] = None,
    ) -> list[dict[str, Any]]:
        """Fetch market records ordered by market cap, optionally restricted to ids."""
        ...

    async def search_coins(self, query: str) -> dict[str, Any]:
        """Search coins by name or symbol."""
        ...

    async def get_coin_market_chart(
        self,
        coin_id: str,
        days: int = 7,
        vs_currency: str = "usd",
    ) -> dict[str, Any]:
        """Fetch daily price history for a coin."""
        ...
