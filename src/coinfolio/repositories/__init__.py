"""Repository layer - data access abstractions and implementations."""

from coinfolio.repositories.protocols import SnapshotRepository

__all__ = [
    "SnapshotRepository",
]
