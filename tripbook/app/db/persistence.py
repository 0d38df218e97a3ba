"""Snapshot persistence of the full repository state."""

import logging

from pydantic import ValidationError

from tripbook.app.db.repositories import StateStore
from tripbook.app.errors import StateRestoreError
from tripbook.app.itinerary.repository import ItineraryRepository
from tripbook.app.models.trip import TripState
from tripbook.app.utils.metrics import PrometheusTripMetrics

logger = logging.getLogger(__name__)


def dump_state(state: TripState) -> str:
    """Serialize state to the persisted JSON layout ``{trips, activeTripId}``."""
    return state.model_dump_json(by_alias=True)


def restore_state(raw: str) -> TripState:
    """Parse a persisted record.

    Raises:
        StateRestoreError: If the record is not valid state JSON
    """
    try:
        return TripState.model_validate_json(raw)
    except ValidationError as exc:
        raise StateRestoreError(f"stored itinerary state is corrupt: {exc}") from exc


class StatePersistence:
    """Writes the whole state to one storage slot on every change."""

    def __init__(self, store: StateStore, key: str) -> None:
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def save(self, state: TripState) -> None:
        """Overwrite the slot with a full snapshot."""
        self._store.put(self._key, dump_state(state))
        logger.debug("Persisted %d trips to %s", len(state.trips), self._key)

    def load(self) -> TripState:
        """Restore state; an empty slot yields an empty state.

        Raises:
            StateRestoreError: If the stored record is corrupt
        """
        raw = self._store.get(self._key)
        if raw is None:
            return TripState()
        return restore_state(raw)

    def clear(self) -> None:
        """Empty the slot."""
        self._store.delete(self._key)


def open_repository(
    persistence: StatePersistence, metrics: PrometheusTripMetrics | None = None
) -> ItineraryRepository:
    """Restore persisted state and wire snapshot saving into every mutation."""
    state = persistence.load()
    logger.info("Restored %d trips from %s", len(state.trips), persistence.key)
    return ItineraryRepository(state=state, on_change=persistence.save, metrics=metrics)
