"""Portfolio state model."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from coinfolio.domain.models.holding import Holding, ZERO, percentage_of
from coinfolio.domain.models.transaction import Transaction


@dataclass(frozen=True)
class PortfolioState:
    """
    Complete ledger state: holdings, transaction log and aggregates.

    IMPORTANT: Never build aggregates by hand; use with_totals(), which sums
    over the holdings.
    """

    holdings: dict[str, Holding] = field(default_factory=dict)
    transactions: tuple[Transaction, ...] = ()
    total_value: Decimal = ZERO
    total_invested: Decimal = ZERO
    total_profit_loss: Decimal = ZERO
    total_profit_loss_percentage: Decimal = ZERO

    def get_holding(self, coin_id: str) -> Optional[Holding]:
        return self.holdings.get(coin_id)

    @property
    def is_empty(self) -> bool:
        return not self.holdings and not self.transactions

    def with_totals(self) -> "PortfolioState":
        """Return a copy whose aggregates are recomputed from the holdings."""
        total_value = sum((h.current_value for h in self.holdings.values()), ZERO)
        total_invested = sum((h.total_invested for h in self.holdings.values()), ZERO)
        total_profit_loss = total_value - total_invested
        return PortfolioState(
            holdings=dict(self.holdings),
            transactions=tuple(self.transactions),
            total_value=total_value,
            total_invested=total_invested,
            total_profit_loss=total_profit_loss,
            total_profit_loss_percentage=percentage_of(total_profit_loss, total_invested),
        )


def empty_portfolio() -> PortfolioState:
    """Return the canonical empty initial state."""
    return PortfolioState()
