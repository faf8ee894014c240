"""
Unit tests for AnalysisService.

Tests cover:
- Allocation percentages and ordering
- Empty portfolio
"""

from decimal import Decimal

from coinfolio.services import AnalysisService, LedgerStore

from tests.conftest import buy, price_update


class TestAllocation:
    """Tests for allocation breakdown."""

    def test_allocation_by_current_value(self, store: LedgerStore, analysis_service: AnalysisService):
        """
        GIVEN bitcoin worth 7500 and ethereum worth 2500
        WHEN I compute allocation
        THEN bitcoin is 75% and listed first
        """
        buy(store, "ethereum", "1", "2500", symbol="eth")
        buy(store, "bitcoin", "0.25", "20000", symbol="btc")
        store.update_prices([price_update("bitcoin", "30000")])

        view = analysis_service.allocation()

        assert [i.coin_id for i in view.items] == ["bitcoin", "ethereum"]
        assert view.items[0].percentage == Decimal("75.00")
        assert view.items[1].percentage == Decimal("25.00")
        assert view.total_value == Decimal("10000.00")
        assert view.as_of is not None

    def test_empty_portfolio(self, analysis_service: AnalysisService):
        view = analysis_service.allocation()

        assert view.items == []
        assert view.total_value == Decimal("0")
