from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from coinfolio.api.deps import get_csv_exporter, get_ledger_store, get_price_sync
from coinfolio.api.schemas.portfolio import (
    BuyRequest,
    PortfolioOut,
    SellRequest,
    SyncResult,
    TransactionListResponse,
    TransactionOut,
)
from coinfolio.core.exceptions import InsufficientHoldingError
from coinfolio.csv import CsvExporter
from coinfolio.services import LedgerStore, PriceSyncLoop

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioOut)
def get_portfolio(store: LedgerStore = Depends(get_ledger_store)):
    """Current holdings, transaction log and totals."""
    return PortfolioOut.from_domain(store.state)


@router.post("/buy", response_model=TransactionOut, status_code=201)
def buy(data: BuyRequest, store: LedgerStore = Depends(get_ledger_store)):
    """Record a purchase."""
    txn = store.buy(
        coin_id=data.coin_id,
        symbol=data.symbol,
        name=data.name,
        image=data.image,
        quantity=data.quantity,
        price=data.price,
    )
    return TransactionOut.from_domain(txn)


@router.post("/sell", response_model=TransactionOut, status_code=201)
def sell(data: SellRequest, store: LedgerStore = Depends(get_ledger_store)):
    """Record a sale. Selling more than is held is rejected."""
    txn = store.sell(coin_id=data.coin_id, quantity=data.quantity, price=data.price)
    if txn is None:
        holding = store.get_holding(data.coin_id)
        raise InsufficientHoldingError(
            data.coin_id,
            requested=str(data.quantity),
            available=str(holding.quantity) if holding else "0",
        )
    return TransactionOut.from_domain(txn)


@router.post("/clear", response_model=PortfolioOut)
def clear(
    store: LedgerStore = Depends(get_ledger_store),
    price_sync: PriceSyncLoop = Depends(get_price_sync),
):
    """Wipe all holdings and transactions."""
    state = store.clear()
    price_sync.reset()
    return PortfolioOut.from_domain(state)


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(
    coin_id: Optional[str] = Query(None, description="Only transactions for this coin"),
    store: LedgerStore = Depends(get_ledger_store),
):
    """Transaction log in recording order."""
    transactions = store.state.transactions
    if coin_id:
        transactions = tuple(t for t in transactions if t.coin_id == coin_id)
    return TransactionListResponse(
        transactions=[TransactionOut.from_domain(t) for t in transactions],
        count=len(transactions),
    )


@router.get("/transactions/export", response_class=PlainTextResponse)
def export_transactions(
    coin_id: Optional[str] = Query(None),
    exporter: CsvExporter = Depends(get_csv_exporter),
):
    """Export the transaction log as CSV."""
    return PlainTextResponse(
        content=exporter.export_string(coin_id=coin_id),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="transactions.csv"'},
    )


@router.post("/sync", response_model=SyncResult)
async def sync_prices(
    store: LedgerStore = Depends(get_ledger_store),
    price_sync: PriceSyncLoop = Depends(get_price_sync),
):
    """Refresh holding prices from the market listing now."""
    updated = await price_sync.sync_once()
    return SyncResult(updated=updated, portfolio=PortfolioOut.from_domain(store.state))
