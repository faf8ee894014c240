"""JSON-ready conversion of portfolio snapshots."""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from coinfolio.core.exceptions import PersistenceError
from coinfolio.core.timezone import parse_datetime_utc
from coinfolio.domain.models import Holding, PortfolioState, Transaction, TransactionType

_HOLDING_DECIMALS = (
    "quantity",
    "average_buy_price",
    "total_invested",
    "current_price",
    "current_value",
    "profit_loss",
    "profit_loss_percentage",
)
_TOTALS = (
    "total_value",
    "total_invested",
    "total_profit_loss",
    "total_profit_loss_percentage",
)


def _load_decimal(value: Any) -> Decimal:
    number = Decimal(str(value))
    if not number.is_finite():
        raise PersistenceError(f"Non-finite amount in portfolio snapshot: {value!r}")
    return number


def _dump_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def holding_to_dict(holding: Holding) -> dict[str, Any]:
    data: dict[str, Any] = {
        "coin_id": holding.coin_id,
        "symbol": holding.symbol,
        "name": holding.name,
        "image": holding.image,
        "last_updated": _dump_datetime(holding.last_updated),
    }
    for key in _HOLDING_DECIMALS:
        data[key] = str(getattr(holding, key))
    return data


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    return {
        "txn_id": txn.txn_id,
        "coin_id": txn.coin_id,
        "txn_type": txn.txn_type.value,
        "quantity": str(txn.quantity),
        "price": str(txn.price),
        "total_amount": str(txn.total_amount),
        "timestamp": _dump_datetime(txn.timestamp),
    }


def state_to_dict(state: PortfolioState) -> dict[str, Any]:
    """Serialize a portfolio state to plain JSON types (Decimals as strings)."""
    data: dict[str, Any] = {
        "holdings": [holding_to_dict(h) for h in state.holdings.values()],
        "transactions": [transaction_to_dict(t) for t in state.transactions],
    }
    for key in _TOTALS:
        data[key] = str(getattr(state, key))
    return data


def state_from_dict(data: Any) -> PortfolioState:
    """
    Rebuild a portfolio state from state_to_dict() output.

    Raises PersistenceError on any structural or value problem.
    """
    if not isinstance(data, dict):
        raise PersistenceError("Portfolio snapshot must be a JSON object")
    try:
        holdings: dict[str, Holding] = {}
        for raw in data.get("holdings") or []:
            holding = Holding(
                coin_id=raw["coin_id"],
                symbol=raw.get("symbol", ""),
                name=raw.get("name", ""),
                image=raw.get("image", ""),
                last_updated=_load_datetime(raw.get("last_updated")),
                **{key: _load_decimal(raw[key]) for key in _HOLDING_DECIMALS},
            )
            holdings[holding.coin_id] = holding

        transactions = tuple(
            Transaction(
                txn_id=raw["txn_id"],
                coin_id=raw["coin_id"],
                txn_type=TransactionType(raw["txn_type"]),
                quantity=_load_decimal(raw["quantity"]),
                price=_load_decimal(raw["price"]),
                total_amount=_load_decimal(raw["total_amount"]),
                timestamp=_load_datetime(raw["timestamp"]),
            )
            for raw in data.get("transactions") or []
        )
        totals = {key: _load_decimal(data.get(key, "0")) for key in _TOTALS}
    except (KeyError, TypeError, ValueError, OverflowError, InvalidOperation) as exc:
        raise PersistenceError(f"Malformed portfolio snapshot: {exc!r}") from exc

    return PortfolioState(holdings=holdings, transactions=transactions, **totals)


def _load_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return parse_datetime_utc(value)
