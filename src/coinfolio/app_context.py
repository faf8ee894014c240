"""Application context: one explicitly owned instance of every component.

Created by the application entry point and passed by reference to whatever
needs it; the FastAPI app keeps it on ``app.state.context``.
"""

import logging
from typing import Optional

import httpx
from sqlalchemy.orm import sessionmaker

from coinfolio.config.settings import Settings, get_settings
from coinfolio.csv import CsvExporter
from coinfolio.gateway import RequestGateway
from coinfolio.providers import CoinGeckoClient, build_gateway
from coinfolio.repositories.sqlalchemy import SqlAlchemySnapshotRepository
from coinfolio.repositories.sqlalchemy.database import get_session_factory
from coinfolio.services import (
    AnalysisService,
    LedgerStore,
    MarketDataService,
    PersistenceAdapter,
    PriceSyncLoop,
)

logger = logging.getLogger(__name__)


class AppContext:
    """
    Wires the ledger, persistence, gateway and market data services.

    The ledger is restored from the saved snapshot on construction, and
    every committed ledger state is saved from then on.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session_factory: Optional[sessionmaker] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        gateway: Optional[RequestGateway] = None,
    ):
        self.settings = settings or get_settings()

        session_factory = session_factory or get_session_factory()

        self.persistence = PersistenceAdapter(
            snapshot_repo=SqlAlchemySnapshotRepository(session_factory),
            storage_key=self.settings.portfolio_storage_key,
        )
        self.store = LedgerStore()
        self.persistence.restore_into(self.store)
        self.store.subscribe(self.persistence.save)

        self.gateway = gateway or build_gateway(self.settings.rate_limit_delay_seconds)
        self.client = CoinGeckoClient(
            gateway=self.gateway,
            base_url=self.settings.coingecko_base_url,
            timeout_seconds=self.settings.upstream_timeout_seconds,
            transport=transport,
        )
        self.market_data = MarketDataService(
            provider=self.client,
            cache_ttl_seconds=self.settings.market_data_cache_ttl_seconds,
            vs_currency=self.settings.vs_currency,
        )
        self.price_sync = PriceSyncLoop(
            store=self.store,
            market_data=self.market_data,
            interval_seconds=self.settings.price_sync_interval_seconds,
        )
        self.analysis = AnalysisService(store=self.store)
        self.csv_exporter = CsvExporter(store=self.store)

        logger.info(
            "Portfolio restored: %d holdings, %d transactions",
            len(self.store.state.holdings),
            len(self.store.state.transactions),
        )

    async def start(self) -> None:
        """Start background work (price sync) if enabled."""
        if self.settings.price_sync_enabled:
            self.price_sync.start()

    async def close(self) -> None:
        """Stop background work and release the HTTP client."""
        await self.price_sync.stop()
        await self.client.aclose()
