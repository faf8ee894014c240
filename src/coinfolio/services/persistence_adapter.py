"""Persistence of the ledger state as a single keyed snapshot."""

import json
import logging

from sqlalchemy.exc import SQLAlchemyError

from coinfolio.core.exceptions import PersistenceError
from coinfolio.domain.models import PortfolioState, empty_portfolio
from coinfolio.domain.serialization import state_from_dict, state_to_dict
from coinfolio.repositories.protocols import SnapshotRepository

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "crypto-portfolio"


class PersistenceAdapter:
    """
    Saves and restores the portfolio as one JSON record.

    Every save overwrites the record wholesale (last write wins). Neither save
    nor load ever raises: a failed save is logged, and an absent or unreadable
    record loads as the empty portfolio.
    """

    def __init__(
        self,
        snapshot_repo: SnapshotRepository,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        self._repo = snapshot_repo
        self._key = storage_key

    @property
    def storage_key(self) -> str:
        return self._key

    def save(self, state: PortfolioState) -> None:
        """Serialize state and overwrite the stored record."""
        try:
            payload = json.dumps(state_to_dict(state))
            self._repo.put(self._key, payload)
        except (TypeError, ValueError, SQLAlchemyError):
            logger.exception("Error saving portfolio snapshot '%s'", self._key)

    def load(self) -> PortfolioState:
        """Return the stored state, or the empty portfolio if there is none usable."""
        try:
            payload = self._repo.get(self._key)
        except SQLAlchemyError:
            logger.exception("Error reading portfolio snapshot '%s'", self._key)
            return empty_portfolio()

        if not payload:
            return empty_portfolio()

        try:
            return state_from_dict(json.loads(payload)).with_totals()
        except (ValueError, ArithmeticError, PersistenceError) as exc:
            logger.error("Discarding unreadable portfolio snapshot '%s': %s", self._key, exc)
            return empty_portfolio()

    def restore_into(self, store) -> PortfolioState:
        """Load the saved snapshot into a LedgerStore."""
        return store.load(self.load())
