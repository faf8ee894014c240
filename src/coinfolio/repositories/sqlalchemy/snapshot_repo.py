"""SQLAlchemy implementation of SnapshotRepository."""

from typing import Optional

from coinfolio.repositories.sqlalchemy.orm_models import PortfolioSnapshotORM


class SqlAlchemySnapshotRepository:
    """
    SQLAlchemy-backed snapshot storage.

    Takes a session factory rather than a session: saves happen from API
    worker threads and the price-sync task alike, so each call opens and
    closes its own short-lived session.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        """Return the stored payload for key, or None if absent."""
        with self._session_factory() as db:
            orm = db.get(PortfolioSnapshotORM, key)
            return orm.payload if orm else None

    def put(self, key: str, payload: str) -> None:
        """Insert or overwrite the payload stored under key."""
        with self._session_factory() as db:
            orm = db.get(PortfolioSnapshotORM, key)
            if orm:
                orm.payload = payload
            else:
                db.add(PortfolioSnapshotORM(key=key, payload=payload))
            db.commit()

    def delete(self, key: str) -> None:
        """Remove the record stored under key, if any."""
        with self._session_factory() as db:
            db.query(PortfolioSnapshotORM).filter(PortfolioSnapshotORM.key == key).delete()
            db.commit()
