"""SQLAlchemy ORM model definitions."""

from sqlalchemy import Column, String, DateTime, Text

from coinfolio.core.timezone import now_utc
from coinfolio.repositories.sqlalchemy.database import Base


class PortfolioSnapshotORM(Base):
    """One serialized portfolio state per storage key."""

    __tablename__ = "portfolio_snapshots"

    key = Column(String(64), primary_key=True)
    payload = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc)
