"""Ledger store: the portfolio accounting state machine."""

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import replace
from decimal import Decimal
from typing import Callable, Iterable, Iterator, Optional

from coinfolio.core.exceptions import ValidationError
from coinfolio.core.timezone import now_utc
from coinfolio.domain.models import (
    Holding,
    PortfolioState,
    Transaction,
    TransactionType,
    empty_portfolio,
)
from coinfolio.domain.views import PriceUpdate

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

StateListener = Callable[[PortfolioState], None]


def _new_txn_id() -> str:
    return f"tx_{uuid.uuid4().hex}"


def _require_positive(field_name: str, value: Decimal) -> None:
    if value is None or not value.is_finite() or value <= ZERO:
        raise ValidationError(f"{field_name} must be > 0")


@contextmanager
def _amounts_in_range(command: str) -> Iterator[None]:
    """Turn Decimal overflow during a command into a rejected command."""
    try:
        yield
    except ArithmeticError as exc:
        raise ValidationError(f"{command} amounts are out of range") from exc


class LedgerStore:
    """
    Owner of the portfolio state.

    Every command builds a new immutable PortfolioState and swaps it in as a
    whole, so a command is either fully applied or not applied at all.
    Aggregates are recomputed from the holdings after every command.
    Commands are serialized by a re-entrant lock; listeners registered with
    subscribe() see each committed state in commit order.
    """

    def __init__(self, initial_state: Optional[PortfolioState] = None):
        self._lock = threading.RLock()
        self._state = (initial_state or empty_portfolio()).with_totals()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> PortfolioState:
        """Current committed state."""
        return self._state

    def get_holding(self, coin_id: str) -> Optional[Holding]:
        return self._state.get_holding(coin_id)

    def coin_ids(self) -> list[str]:
        """Coin ids of current holdings, in insertion order."""
        return list(self._state.holdings)

    def subscribe(self, listener: StateListener) -> None:
        """Register a callable invoked with every committed state."""
        with self._lock:
            self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def buy(
        self,
        coin_id: str,
        symbol: str,
        name: str,
        image: str,
        quantity: Decimal,
        price: Decimal,
    ) -> Transaction:
        """
        Record a purchase.

        An existing holding is blended at weighted-average cost:
        new average = (old invested + quantity x price) / (old quantity + quantity).
        """
        if not coin_id:
            raise ValidationError("BUY requires a coin_id")
        _require_positive("quantity", quantity)
        _require_positive("price", price)

        with self._lock, _amounts_in_range("BUY"):
            state = self._state
            now = now_utc()
            total_amount = quantity * price

            existing = state.get_holding(coin_id)
            if existing:
                new_quantity = existing.quantity + quantity
                new_invested = existing.total_invested + total_amount
                holding = replace(
                    existing,
                    quantity=new_quantity,
                    total_invested=new_invested,
                    average_buy_price=new_invested / new_quantity,
                ).revalued(last_updated=now)
            else:
                holding = Holding(
                    coin_id=coin_id,
                    symbol=symbol,
                    name=name,
                    image=image,
                    quantity=quantity,
                    average_buy_price=price,
                    total_invested=total_amount,
                    current_price=price,
                ).revalued(last_updated=now)

            transaction = Transaction(
                txn_id=_new_txn_id(),
                coin_id=coin_id,
                txn_type=TransactionType.BUY,
                quantity=quantity,
                price=price,
                total_amount=total_amount,
                timestamp=now,
            )

            holdings = dict(state.holdings)
            holdings[coin_id] = holding
            self._commit(
                PortfolioState(
                    holdings=holdings,
                    transactions=state.transactions + (transaction,),
                )
            )
            return transaction

    def sell(self, coin_id: str, quantity: Decimal, price: Decimal) -> Optional[Transaction]:
        """
        Record a sale.

        The remaining position keeps its average cost: invested capital is
        reduced in proportion to the quantity sold. Selling a coin that is not
        held, or more than is held, leaves the state untouched and returns None.
        """
        _require_positive("quantity", quantity)
        _require_positive("price", price)

        with self._lock, _amounts_in_range("SELL"):
            state = self._state
            existing = state.get_holding(coin_id)
            if not existing or existing.quantity < quantity:
                logger.warning(
                    "Rejected sell of %s %s: holding %s",
                    quantity,
                    coin_id,
                    existing.quantity if existing else "none",
                )
                return None

            now = now_utc()
            new_quantity = existing.quantity - quantity
            sold_invested = (quantity / existing.quantity) * existing.total_invested
            remaining_invested = existing.total_invested - sold_invested

            holdings = dict(state.holdings)
            if new_quantity == ZERO:
                del holdings[coin_id]
            else:
                holdings[coin_id] = replace(
                    existing,
                    quantity=new_quantity,
                    total_invested=remaining_invested,
                    average_buy_price=remaining_invested / new_quantity,
                ).revalued(last_updated=now)

            transaction = Transaction(
                txn_id=_new_txn_id(),
                coin_id=coin_id,
                txn_type=TransactionType.SELL,
                quantity=quantity,
                price=price,
                total_amount=quantity * price,
                timestamp=now,
            )
            self._commit(
                PortfolioState(
                    holdings=holdings,
                    transactions=state.transactions + (transaction,),
                )
            )
            return transaction

    def update_prices(self, updates: Iterable[PriceUpdate]) -> PortfolioState:
        """
        Revalue holdings at fresh market prices.

        Updates for coins that are not held are ignored. A price refresh is not
        a ledger event, so no transaction is appended.
        """
        prices = {u.coin_id: u.current_price for u in updates}

        with self._lock:
            state = self._state
            now = now_utc()
            holdings: dict[str, Holding] = {}
            for coin_id, holding in state.holdings.items():
                price = prices.get(coin_id)
                if price is None:
                    holdings[coin_id] = holding
                elif price == holding.current_price:
                    holdings[coin_id] = holding.revalued(price)
                else:
                    holdings[coin_id] = holding.revalued(price, last_updated=now)

            return self._commit(
                PortfolioState(holdings=holdings, transactions=state.transactions)
            )

    def clear(self) -> PortfolioState:
        """Reset to the empty initial state."""
        with self._lock:
            return self._commit(empty_portfolio())

    def load(self, snapshot: PortfolioState) -> PortfolioState:
        """Replace the whole state (used when restoring a saved snapshot)."""
        with self._lock:
            return self._commit(snapshot)

    def _commit(self, state: PortfolioState) -> PortfolioState:
        """Recompute aggregates, swap the state in and notify listeners."""
        committed = state.with_totals()
        self._state = committed
        for listener in self._listeners:
            listener(committed)
        return committed
