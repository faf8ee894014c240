"""Market data providers module."""

from coinfolio.providers.market_data_provider import MarketDataProvider
from coinfolio.providers.coingecko_client import CoinGeckoClient, build_gateway
from coinfolio.providers.fallback_data import FALLBACK_MARKETS, FALLBACK_SEARCH_RESULT

__all__ = [
    "MarketDataProvider",
    "CoinGeckoClient",
    "build_gateway",
    "FALLBACK_MARKETS",
    "FALLBACK_SEARCH_RESULT",
]
