"""View models for service outputs."""

from coinfolio.domain.views.market import (
    CoinMarket,
    SearchCoin,
    CoinSearchResult,
    MarketChart,
    PriceUpdate,
)
from coinfolio.domain.views.portfolio import AllocationItem, AllocationView

__all__ = [
    "CoinMarket",
    "SearchCoin",
    "CoinSearchResult",
    "MarketChart",
    "PriceUpdate",
    "AllocationItem",
    "AllocationView",
]
