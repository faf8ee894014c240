"""Database connection and session management."""

from typing import Optional

from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from coinfolio.config.settings import get_settings

Base = declarative_base()

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Engine for the configured portfolio database, created on first use."""
    global _engine
    if _engine is None:
        _engine = create_engine(
            get_settings().get_database_url(),
            # Saves arrive from API worker threads and the price-sync task
            connect_args={"check_same_thread": False},
        )
    return _engine


def get_session_factory() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def init_db() -> None:
    """Create the snapshot table if it does not exist yet."""
    from coinfolio.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
