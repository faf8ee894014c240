"""Repository protocols."""

from coinfolio.repositories.protocols.snapshot_repo import SnapshotRepository

__all__ = [
    "SnapshotRepository",
]
