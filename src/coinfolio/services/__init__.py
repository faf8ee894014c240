"""Service layer - business logic orchestration."""

from coinfolio.services.ledger_store import LedgerStore
from coinfolio.services.persistence_adapter import PersistenceAdapter
from coinfolio.services.retry_policy import RetryPolicy, execute_with_retry
from coinfolio.services.market_data_service import MarketDataService
from coinfolio.services.price_sync import PriceSyncLoop
from coinfolio.services.analysis_service import AnalysisService

__all__ = [
    "LedgerStore",
    "PersistenceAdapter",
    "RetryPolicy",
    "execute_with_retry",
    "MarketDataService",
    "PriceSyncLoop",
    "AnalysisService",
]
