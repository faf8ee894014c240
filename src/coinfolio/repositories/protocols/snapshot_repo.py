"""Snapshot repository protocol for persisted portfolio state."""

from typing import Protocol, Optional


class SnapshotRepository(Protocol):
    """Interface for keyed storage of serialized snapshots."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored payload for key, or None if absent."""
        ...

    def put(self, key: str, payload: str) -> None:
        """Insert or overwrite the payload stored under key."""
        ...

    def delete(self, key: str) -> None:
        """Remove the record stored under key, if any."""
        ...
