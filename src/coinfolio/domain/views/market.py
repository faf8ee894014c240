"""View models for upstream market data."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Optional


def to_decimal(value: Any) -> Optional[Decimal]:
    """Convert a JSON number to Decimal; None for missing or non-numeric values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


@dataclass
class CoinMarket:
    """One record of the /coins/markets listing."""

    id: str
    symbol: str
    name: str
    image: str = ""
    current_price: Optional[Decimal] = None
    market_cap: Optional[Decimal] = None
    market_cap_rank: Optional[int] = None
    total_volume: Optional[Decimal] = None
    price_change_percentage_24h: Optional[Decimal] = None
    high_24h: Optional[Decimal] = None
    low_24h: Optional[Decimal] = None
    ath: Optional[Decimal] = None
    ath_change_percentage: Optional[Decimal] = None
    atl: Optional[Decimal] = None
    atl_change_percentage: Optional[Decimal] = None
    circulating_supply: Optional[Decimal] = None

    @classmethod
    def from_api(cls, data: dict) -> "CoinMarket":
        return cls(
            id=data["id"],
            symbol=data.get("symbol") or "",
            name=data.get("name") or data["id"],
            image=data.get("image") or "",
            current_price=to_decimal(data.get("current_price")),
            market_cap=to_decimal(data.get("market_cap")),
            market_cap_rank=data.get("market_cap_rank"),
            total_volume=to_decimal(data.get("total_volume")),
            price_change_percentage_24h=to_decimal(data.get("price_change_percentage_24h")),
            high_24h=to_decimal(data.get("high_24h")),
            low_24h=to_decimal(data.get("low_24h")),
            ath=to_decimal(data.get("ath")),
            ath_change_percentage=to_decimal(data.get("ath_change_percentage")),
            atl=to_decimal(data.get("atl")),
            atl_change_percentage=to_decimal(data.get("atl_change_percentage")),
            circulating_supply=to_decimal(data.get("circulating_supply")),
        )


@dataclass
class SearchCoin:
    """A coin hit from /search."""

    id: str
    name: str
    symbol: str
    thumb: str = ""
    market_cap_rank: Optional[int] = None

    @classmethod
    def from_api(cls, data: dict) -> "SearchCoin":
        return cls(
            id=data["id"],
            name=data.get("name") or data["id"],
            symbol=data.get("symbol") or "",
            thumb=data.get("thumb") or "",
            market_cap_rank=data.get("market_cap_rank"),
        )


@dataclass
class CoinSearchResult:
    """Result of a coin search."""

    coins: list[SearchCoin] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "CoinSearchResult":
        return cls(coins=[SearchCoin.from_api(c) for c in data.get("coins") or []])


@dataclass
class MarketChart:
    """Daily price history: (timestamp in ms, price) pairs."""

    prices: list[tuple[int, Decimal]] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "MarketChart":
        prices = []
        for point in data.get("prices") or []:
            price = to_decimal(point[1])
            if price is not None:
                prices.append((int(point[0]), price))
        return cls(prices=prices)


@dataclass(frozen=True)
class PriceUpdate:
    """A fresh market price for one coin."""

    coin_id: str
    current_price: Decimal
