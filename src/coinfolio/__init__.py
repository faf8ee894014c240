"""Crypto portfolio tracker with a rate-limited market data gateway."""

__version__ = "0.1.0"
