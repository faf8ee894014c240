"""SQLAlchemy repository implementations."""

from coinfolio.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    init_db,
    Base,
)
from coinfolio.repositories.sqlalchemy.snapshot_repo import SqlAlchemySnapshotRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "init_db",
    "Base",
    "SqlAlchemySnapshotRepository",
]
