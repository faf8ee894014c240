"""
Pytest configuration and fixtures for portfolio tracker tests.

This module provides:
- In-memory SQLite database fixtures
- Ledger and persistence fixtures
- A scripted async market data provider
- A mock upstream HTTP server (httpx.MockTransport)
- A fake clock for gateway timing
- The FastAPI test client wired to all of the above
"""

from decimal import Decimal
from typing import Any, Optional

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker

from coinfolio.app_context import AppContext
from coinfolio.config.settings import Settings, reset_settings
from coinfolio.core.exceptions import UpstreamError
from coinfolio.domain.views import PriceUpdate
from coinfolio.main import create_app
from coinfolio.providers import build_gateway
from coinfolio.providers.fallback_data import FALLBACK_MARKETS
from coinfolio.repositories.sqlalchemy.database import Base
# Import ORM models to register them with Base before creating tables
from coinfolio.repositories.sqlalchemy import orm_models  # noqa: F401
from coinfolio.repositories.sqlalchemy import SqlAlchemySnapshotRepository
from coinfolio.services import (
    AnalysisService,
    LedgerStore,
    MarketDataService,
    PersistenceAdapter,
    RetryPolicy,
)
from coinfolio.csv import CsvExporter


# =============================================================================
# CLOCK HELPERS
# =============================================================================


class FakeClock:
    """
    Monotonic clock driven by the code under test.

    sleep() advances time instantly and records every requested delay.
    """

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a fake monotonic clock."""
    return FakeClock()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_factory(test_engine) -> sessionmaker:
    """Create test session factory."""
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


# =============================================================================
# REPOSITORY / LEDGER FIXTURES
# =============================================================================


@pytest.fixture
def snapshot_repo(session_factory) -> SqlAlchemySnapshotRepository:
    """Provide test SnapshotRepository."""
    return SqlAlchemySnapshotRepository(session_factory)


@pytest.fixture
def persistence(snapshot_repo) -> PersistenceAdapter:
    """Provide test PersistenceAdapter."""
    return PersistenceAdapter(snapshot_repo=snapshot_repo, storage_key="test-portfolio")


@pytest.fixture
def store() -> LedgerStore:
    """Provide an empty LedgerStore (not persisted)."""
    return LedgerStore()


@pytest.fixture
def analysis_service(store) -> AnalysisService:
    return AnalysisService(store=store)


@pytest.fixture
def csv_exporter(store) -> CsvExporter:
    return CsvExporter(store=store)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


def market_record(coin_id: str, price: Optional[float], symbol: Optional[str] = None) -> dict:
    """Minimal /coins/markets record."""
    return {
        "id": coin_id,
        "symbol": symbol or coin_id[:3],
        "name": coin_id.capitalize(),
        "image": f"https://img.example/{coin_id}.png",
        "current_price": price,
        "market_cap": 1000000,
        "market_cap_rank": 1,
    }


class ScriptedMarketProvider:
    """
    Async market data provider for testing.

    Serves fixed markets; errors queued in `failures` are raised first, one
    per call, before the normal answer resumes.
    """

    def __init__(self, markets: Optional[list[dict]] = None):
        self.markets = markets if markets is not None else [
            market_record("bitcoin", 50000.0, "btc"),
            market_record("ethereum", 3000.0, "eth"),
        ]
        self.search_result: dict[str, Any] = {
            "coins": [
                {"id": "bitcoin", "name": "Bitcoin", "symbol": "BTC", "thumb": "", "market_cap_rank": 1},
            ]
        }
        self.chart: dict[str, Any] = {"prices": [[1700000000000, 50000.0], [1700086400000, 51000.5]]}
        self.failures: list[Exception] = []
        self.calls: list[tuple[str, dict]] = []

    def _maybe_fail(self) -> None:
        if self.failures:
            raise self.failures.pop(0)

    async def get_coins_markets(self, page=1, per_page=50, vs_currency="usd", ids=None):
        self.calls.append(("markets", {"page": page, "per_page": per_page, "vs_currency": vs_currency, "ids": ids}))
        self._maybe_fail()
        if ids:
            return [m for m in self.markets if m["id"] in ids]
        return list(self.markets)

    async def search_coins(self, query):
        self.calls.append(("search", {"query": query}))
        self._maybe_fail()
        return self.search_result

    async def get_coin_market_chart(self, coin_id, days=7, vs_currency="usd"):
        self.calls.append(("chart", {"coin_id": coin_id, "days": days}))
        self._maybe_fail()
        return self.chart


@pytest.fixture
def market_provider() -> ScriptedMarketProvider:
    """Provide scripted async market data provider."""
    return ScriptedMarketProvider()


@pytest.fixture
def market_data_service(market_provider, fake_clock) -> MarketDataService:
    """Provide MarketDataService with instant retries and a fake clock."""
    return MarketDataService(
        provider=market_provider,
        cache_ttl_seconds=60,
        retry_policy=RetryPolicy(),
        clock=fake_clock,
        sleep=fake_clock.sleep,
    )


# =============================================================================
# MOCK UPSTREAM (HTTP)
# =============================================================================


class MockUpstream:
    """
    Route table for httpx.MockTransport.

    Routes map a URL path to a status and JSON body; every request is
    recorded. Unrouted paths answer 404.
    """

    def __init__(self):
        self.routes: dict[str, tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def route(self, path: str, status: int = 200, json: Any = None) -> None:
        self.routes[path] = (status, json)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(request.url.path, (404, {"error": "coin not found"}))
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def upstream() -> MockUpstream:
    """Provide a mock upstream serving the fallback markets by default."""
    mock = MockUpstream()
    mock.route("/api/v3/coins/markets", json=FALLBACK_MARKETS)
    return mock


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings for tests: no background sync, no request spacing."""
    return Settings(
        data_dir=tmp_path,
        database_url="sqlite://",
        price_sync_enabled=False,
        rate_limit_delay_seconds=0.0,
    )


@pytest.fixture
def app_context(test_settings, session_factory, upstream) -> AppContext:
    """Provide an AppContext bound to the test database and mock upstream."""
    return AppContext(
        settings=test_settings,
        session_factory=session_factory,
        transport=upstream.transport,
        gateway=build_gateway(test_settings.rate_limit_delay_seconds),
    )


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client with test database and mock upstream."""
    app = create_app(app_context)
    with TestClient(app) as c:
        yield c


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.0001"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def buy(
    store: LedgerStore,
    coin_id: str,
    quantity: str,
    price: str,
    symbol: Optional[str] = None,
):
    """Helper to record a BUY with string amounts."""
    return store.buy(
        coin_id=coin_id,
        symbol=symbol or coin_id[:3],
        name=coin_id.capitalize(),
        image="",
        quantity=Decimal(quantity),
        price=Decimal(price),
    )


def price_update(coin_id: str, price: str) -> PriceUpdate:
    return PriceUpdate(coin_id=coin_id, current_price=Decimal(price))


def throttled() -> UpstreamError:
    return UpstreamError("API Error: Rate limited", status_code=429)


