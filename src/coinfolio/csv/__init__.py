"""CSV export utilities."""

from coinfolio.csv.exporter import CsvExporter, CSV_COLUMNS

__all__ = [
    "CsvExporter",
    "CSV_COLUMNS",
]
