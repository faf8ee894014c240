"""
Unit tests for CsvExporter.

Tests cover:
- Header and row format
- Filtering by coin
- File export
"""

import csv
import io
from decimal import Decimal
from pathlib import Path

from coinfolio.csv import CsvExporter
from coinfolio.csv.exporter import CSV_COLUMNS
from coinfolio.services import LedgerStore

from tests.conftest import buy


def read_rows(text: str) -> list[dict]:
    return list(csv.DictReader(io.StringIO(text)))


class TestExportString:
    """Tests for in-memory CSV export."""

    def test_empty_ledger_exports_header_only(self, csv_exporter: CsvExporter):
        text = csv_exporter.export_string()

        assert text.strip().split(",") == CSV_COLUMNS

    def test_rows_in_log_order(self, store: LedgerStore, csv_exporter: CsvExporter):
        """
        GIVEN a buy and a sell
        WHEN I export
        THEN both rows appear in recording order with exact amounts
        """
        buy(store, "bitcoin", "0.5", "40000")
        store.sell("bitcoin", Decimal("0.2"), Decimal("45000"))

        rows = read_rows(csv_exporter.export_string())

        assert [r["type"] for r in rows] == ["BUY", "SELL"]
        assert rows[0]["quantity"] == "0.5"
        assert rows[0]["total_amount"] == "20000.0"
        assert rows[1]["total_amount"] == "9000.0"
        assert rows[0]["txn_id"].startswith("tx_")

    def test_filter_by_coin(self, store: LedgerStore, csv_exporter: CsvExporter):
        buy(store, "bitcoin", "1", "40000")
        buy(store, "ethereum", "1", "2000")

        rows = read_rows(csv_exporter.export_string(coin_id="ethereum"))

        assert [r["coin_id"] for r in rows] == ["ethereum"]


class TestExportFile:
    def test_writes_file(self, store: LedgerStore, csv_exporter: CsvExporter, tmp_path: Path):
        buy(store, "bitcoin", "1", "40000")
        path = tmp_path / "exports" / "transactions.csv"

        csv_exporter.export_csv(str(path))

        rows = read_rows(path.read_text(encoding="utf-8"))
        assert len(rows) == 1
        assert rows[0]["coin_id"] == "bitcoin"
