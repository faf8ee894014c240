"""Domain models package."""

from coinfolio.domain.models.enums import TransactionType
from coinfolio.domain.models.holding import Holding
from coinfolio.domain.models.transaction import Transaction
from coinfolio.domain.models.portfolio import PortfolioState, empty_portfolio

__all__ = [
    "TransactionType",
    "Holding",
    "Transaction",
    "PortfolioState",
    "empty_portfolio",
]
