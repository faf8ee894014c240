"""Holding domain model."""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Optional

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def percentage_of(amount: Decimal, base: Decimal) -> Decimal:
    """Return amount as a percentage of base, or 0 when base is not positive."""
    if base > ZERO:
        return amount / base * HUNDRED
    return ZERO


@dataclass(frozen=True)
class Holding:
    """
    A position in one coin, keyed by coin_id.

    Valuation fields (current_value, profit_loss, profit_loss_percentage) are
    always derived from quantity, total_invested and current_price; use
    revalued() rather than setting them by hand.
    """

    coin_id: str
    symbol: str
    name: str
    image: str
    quantity: Decimal
    average_buy_price: Decimal
    total_invested: Decimal
    current_price: Decimal
    current_value: Decimal = ZERO
    profit_loss: Decimal = ZERO
    profit_loss_percentage: Decimal = ZERO
    last_updated: Optional[datetime] = None

    def revalued(
        self,
        current_price: Optional[Decimal] = None,
        last_updated: Optional[datetime] = None,
    ) -> "Holding":
        """Return a copy with valuation recomputed at current_price (default: unchanged)."""
        price = self.current_price if current_price is None else current_price
        current_value = self.quantity * price
        profit_loss = current_value - self.total_invested
        return replace(
            self,
            current_price=price,
            current_value=current_value,
            profit_loss=profit_loss,
            profit_loss_percentage=percentage_of(profit_loss, self.total_invested),
            last_updated=last_updated if last_updated is not None else self.last_updated,
        )
