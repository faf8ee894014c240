"""API routers package."""

from coinfolio.api.routers.portfolio import router as portfolio_router
from coinfolio.api.routers.coins import router as coins_router
from coinfolio.api.routers.analysis import router as analysis_router

__all__ = [
    "portfolio_router",
    "coins_router",
    "analysis_router",
]
