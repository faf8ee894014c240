"""Domain layer: ledger models and market data views."""
