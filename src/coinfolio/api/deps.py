"""Dependency injection for FastAPI."""

from fastapi import Depends, Request

from coinfolio.app_context import AppContext
from coinfolio.csv import CsvExporter
from coinfolio.services import (
    AnalysisService,
    LedgerStore,
    MarketDataService,
    PriceSyncLoop,
)


def get_app_context(request: Request) -> AppContext:
    """Provide the AppContext created by the application lifespan."""
    return request.app.state.context


def get_ledger_store(context: AppContext = Depends(get_app_context)) -> LedgerStore:
    """Provide the LedgerStore instance."""
    return context.store


def get_market_data_service(context: AppContext = Depends(get_app_context)) -> MarketDataService:
    """Provide the MarketDataService instance."""
    return context.market_data


def get_price_sync(context: AppContext = Depends(get_app_context)) -> PriceSyncLoop:
    """Provide the PriceSyncLoop instance."""
    return context.price_sync


def get_analysis_service(context: AppContext = Depends(get_app_context)) -> AnalysisService:
    """Provide the AnalysisService instance."""
    return context.analysis


def get_csv_exporter(context: AppContext = Depends(get_app_context)) -> CsvExporter:
    """Provide the CsvExporter instance."""
    return context.csv_exporter
