"""Pydantic schemas for market data endpoints."""

from typing import Optional

from pydantic import BaseModel

from coinfolio.domain.views import CoinMarket, CoinSearchResult, MarketChart


def _num(value) -> Optional[float]:
    return float(value) if value is not None else None


class CoinMarketOut(BaseModel):
    """One coin of the market listing."""

    id: str
    symbol: str
    name: str
    image: str
    current_price: Optional[float] = None
    market_cap: Optional[float] = None
    market_cap_rank: Optional[int] = None
    total_volume: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None
    high_24h: Optional[float] = None
    low_24h: Optional[float] = None
    ath: Optional[float] = None
    ath_change_percentage: Optional[float] = None
    atl: Optional[float] = None
    atl_change_percentage: Optional[float] = None
    circulating_supply: Optional[float] = None

    @classmethod
    def from_domain(cls, coin: CoinMarket) -> "CoinMarketOut":
        return cls(
            id=coin.id,
            symbol=coin.symbol,
            name=coin.name,
            image=coin.image,
            current_price=_num(coin.current_price),
            market_cap=_num(coin.market_cap),
            market_cap_rank=coin.market_cap_rank,
            total_volume=_num(coin.total_volume),
            price_change_percentage_24h=_num(coin.price_change_percentage_24h),
            high_24h=_num(coin.high_24h),
            low_24h=_num(coin.low_24h),
            ath=_num(coin.ath),
            ath_change_percentage=_num(coin.ath_change_percentage),
            atl=_num(coin.atl),
            atl_change_percentage=_num(coin.atl_change_percentage),
            circulating_supply=_num(coin.circulating_supply),
        )


class SearchCoinOut(BaseModel):
    id: str
    name: str
    symbol: str
    thumb: str
    market_cap_rank: Optional[int] = None


class CoinSearchOut(BaseModel):
    """Search result."""

    coins: list[SearchCoinOut]

    @classmethod
    def from_domain(cls, result: CoinSearchResult) -> "CoinSearchOut":
        return cls(
            coins=[
                SearchCoinOut(
                    id=c.id,
                    name=c.name,
                    symbol=c.symbol,
                    thumb=c.thumb,
                    market_cap_rank=c.market_cap_rank,
                )
                for c in result.coins
            ]
        )


class MarketChartOut(BaseModel):
    """Price history as [timestamp_ms, price] pairs."""

    prices: list[tuple[int, float]]

    @classmethod
    def from_domain(cls, chart: MarketChart) -> "MarketChartOut":
        return cls(prices=[(ts, float(price)) for ts, price in chart.prices])
