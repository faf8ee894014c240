"""CSV export functionality."""

import csv
import io
from pathlib import Path
from typing import Iterable, Optional, TextIO

from coinfolio.domain.models import Transaction
from coinfolio.services.ledger_store import LedgerStore

CSV_COLUMNS = [
    "txn_id",
    "timestamp",
    "type",
    "coin_id",
    "quantity",
    "price",
    "total_amount",
]


class CsvExporter:
    """
    CSV exporter for the transaction log.

    Exports ledger transactions in log order for audit or backup.
    """

    def __init__(self, store: LedgerStore):
        self._store = store

    def export_csv(self, path: str, coin_id: Optional[str] = None) -> None:
        """
        Export transactions to a CSV file.

        Args:
            path: Output file path
            coin_id: Optional coin to export (None = all)
        """
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", newline="", encoding="utf-8") as csvfile:
            self._write(csvfile, self._select(coin_id))

    def export_string(self, coin_id: Optional[str] = None) -> str:
        """Return the CSV export as a string."""
        buffer = io.StringIO()
        self._write(buffer, self._select(coin_id))
        return buffer.getvalue()

    def _select(self, coin_id: Optional[str]) -> list[Transaction]:
        transactions = self._store.state.transactions
        if coin_id:
            return [t for t in transactions if t.coin_id == coin_id]
        return list(transactions)

    @staticmethod
    def _write(out: TextIO, transactions: Iterable[Transaction]) -> None:
        writer = csv.DictWriter(out, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for txn in transactions:
            writer.writerow({
                "txn_id": txn.txn_id,
                "timestamp": txn.timestamp.isoformat() if txn.timestamp else "",
                "type": txn.txn_type.value,
                "coin_id": txn.coin_id,
                "quantity": str(txn.quantity),
                "price": str(txn.price),
                "total_amount": str(txn.total_amount),
            })
