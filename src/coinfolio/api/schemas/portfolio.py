"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from coinfolio.domain.models import Holding, PortfolioState, Transaction, TransactionType


class BuyRequest(BaseModel):
    """Request schema for buying a coin."""

    coin_id: str = Field(..., min_length=1, description="Upstream coin id, e.g. 'bitcoin'")
    symbol: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    image: str = ""
    quantity: Decimal = Field(..., gt=0)
    price: Decimal = Field(..., gt=0)


class SellRequest(BaseModel):
    """Request schema for selling a coin."""

    coin_id: str = Field(..., min_length=1)
    quantity: Decimal = Field(..., gt=0)
    price: Decimal = Field(..., gt=0)


class TransactionOut(BaseModel):
    """A single ledger transaction."""

    txn_id: str
    coin_id: str
    txn_type: TransactionType
    quantity: float
    price: float
    total_amount: float
    timestamp: datetime

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionOut":
        return cls(
            txn_id=txn.txn_id,
            coin_id=txn.coin_id,
            txn_type=txn.txn_type,
            quantity=float(txn.quantity),
            price=float(txn.price),
            total_amount=float(txn.total_amount),
            timestamp=txn.timestamp,
        )


class TransactionListResponse(BaseModel):
    """Response schema for listing transactions."""

    transactions: list[TransactionOut]
    count: int


class HoldingOut(BaseModel):
    """A single holding with valuation."""

    coin_id: str
    symbol: str
    name: str
    image: str
    quantity: float
    average_buy_price: float
    total_invested: float
    current_price: float
    current_value: float
    profit_loss: float
    profit_loss_percentage: float
    last_updated: Optional[datetime] = None

    @classmethod
    def from_domain(cls, holding: Holding) -> "HoldingOut":
        return cls(
            coin_id=holding.coin_id,
            symbol=holding.symbol,
            name=holding.name,
            image=holding.image,
            quantity=float(holding.quantity),
            average_buy_price=float(holding.average_buy_price),
            total_invested=float(holding.total_invested),
            current_price=float(holding.current_price),
            current_value=float(holding.current_value),
            profit_loss=float(holding.profit_loss),
            profit_loss_percentage=float(holding.profit_loss_percentage),
            last_updated=holding.last_updated,
        )


class PortfolioOut(BaseModel):
    """Full portfolio state: holdings, transactions and totals."""

    holdings: list[HoldingOut]
    transactions: list[TransactionOut]
    total_value: float
    total_invested: float
    total_profit_loss: float
    total_profit_loss_percentage: float

    @classmethod
    def from_domain(cls, state: PortfolioState) -> "PortfolioOut":
        return cls(
            holdings=[HoldingOut.from_domain(h) for h in state.holdings.values()],
            transactions=[TransactionOut.from_domain(t) for t in state.transactions],
            total_value=float(state.total_value),
            total_invested=float(state.total_invested),
            total_profit_loss=float(state.total_profit_loss),
            total_profit_loss_percentage=float(state.total_profit_loss_percentage),
        )


class SyncResult(BaseModel):
    """Outcome of a manual price sync."""

    updated: bool
    portfolio: PortfolioOut
