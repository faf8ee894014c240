"""Transaction domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from coinfolio.domain.models.enums import TransactionType


@dataclass(frozen=True)
class Transaction:
    """
    Ledger entry for a single buy or sell (append-only, never edited).

    total_amount is quantity x price at the time of the trade.
    """

    txn_id: str
    coin_id: str
    txn_type: TransactionType
    quantity: Decimal
    price: Decimal
    total_amount: Decimal
    timestamp: datetime

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            object.__setattr__(self, "txn_type", TransactionType(self.txn_type))
