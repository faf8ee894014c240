"""Analysis service for portfolio analytics."""

from decimal import Decimal

from coinfolio.core.timezone import now_utc
from coinfolio.domain.views import AllocationItem, AllocationView
from coinfolio.services.ledger_store import LedgerStore


class AnalysisService:
    """
    Service for portfolio analytics and reporting.

    Works on the ledger's current valuation; prices are as fresh as the last
    price sync.
    """

    def __init__(self, store: LedgerStore):
        self._store = store

    def allocation(self) -> AllocationView:
        """
        Calculate portfolio allocation breakdown.

        Returns current value and share of total value for each holding,
        largest first.
        """
        state = self._store.state
        if not state.holdings:
            return AllocationView(as_of=now_utc())

        total_value = state.total_value
        items: list[AllocationItem] = []
        for holding in state.holdings.values():
            percentage = Decimal("0")
            if total_value > Decimal("0"):
                percentage = (holding.current_value / total_value * 100).quantize(Decimal("0.01"))
            items.append(
                AllocationItem(
                    coin_id=holding.coin_id,
                    symbol=holding.symbol,
                    current_value=holding.current_value.quantize(Decimal("0.01")),
                    percentage=percentage,
                )
            )

        # Sort by value descending
        items.sort(key=lambda x: x.current_value, reverse=True)

        return AllocationView(
            items=items,
            total_value=total_value.quantize(Decimal("0.01")),
            as_of=now_utc(),
        )
