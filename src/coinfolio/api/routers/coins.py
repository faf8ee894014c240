from typing import Optional

from fastapi import APIRouter, Depends, Query

from coinfolio.api.deps import get_market_data_service
from coinfolio.api.schemas.coins import CoinMarketOut, CoinSearchOut, MarketChartOut
from coinfolio.services import MarketDataService

router = APIRouter(prefix="/coins", tags=["coins"])


@router.get("/markets", response_model=list[CoinMarketOut])
async def list_markets(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=250),
    vs_currency: Optional[str] = Query(None),
    market: MarketDataService = Depends(get_market_data_service),
):
    """Coins ordered by market cap."""
    coins = await market.get_coins_markets(page=page, per_page=per_page, vs_currency=vs_currency)
    return [CoinMarketOut.from_domain(c) for c in coins]


@router.get("/search", response_model=CoinSearchOut)
async def search(
    query: str = Query("", description="At least three characters"),
    market: MarketDataService = Depends(get_market_data_service),
):
    result = await market.search_coins(query)
    return CoinSearchOut.from_domain(result)


@router.get("/{coin_id}", response_model=CoinMarketOut)
async def get_coin(
    coin_id: str,
    market: MarketDataService = Depends(get_market_data_service),
):
    """Market record for a single coin."""
    coin = await market.get_coin_details(coin_id)
    return CoinMarketOut.from_domain(coin)


@router.get("/{coin_id}/chart", response_model=MarketChartOut)
async def get_chart(
    coin_id: str,
    days: int = Query(7, ge=1, le=365),
    market: MarketDataService = Depends(get_market_data_service),
):
    """Daily price history."""
    chart = await market.get_coin_market_chart(coin_id, days=days)
    return MarketChartOut.from_domain(chart)
