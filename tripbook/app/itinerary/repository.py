"""Itinerary repository - the authoritative trip/day/activity state container."""

import logging
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

from tripbook.app.errors import (
    ActivityNotFoundError,
    DayNotFoundError,
    DuplicateEntityError,
    EntityNotFound,
    TripNotFoundError,
)
from tripbook.app.models.trip import ActivityPatch, ItineraryDay, ItineraryItem, Trip, TripState
from tripbook.app.utils.logging import StructuredEventLogger
from tripbook.app.utils.metrics import PrometheusTripMetrics, metrics as default_metrics

logger = logging.getLogger(__name__)

StateCallback = Callable[[TripState], None]


class ItineraryRepository:
    """Constructible state container for trips, days and activities.

    State is an immutable ``TripState``. Every mutation builds a new state that
    shares untouched trips, days and items with the previous one, installs it,
    and then hands it to ``on_change`` (the persistence hook). Snapshots taken
    before a mutation are never affected by it.

    Each mutation reads the state current at call time, so writes issued from
    asynchronous completions never clobber one another.
    """

    def __init__(
        self,
        state: TripState | None = None,
        on_change: StateCallback | None = None,
        metrics: PrometheusTripMetrics | None = None,
    ) -> None:
        self._state = state or TripState()
        self._on_change = on_change
        self._metrics = metrics or default_metrics
        self._events = StructuredEventLogger(__name__)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def state(self) -> TripState:
        """Current snapshot."""
        return self._state

    @property
    def trips(self) -> tuple[Trip, ...]:
        return self._state.trips

    @property
    def active_trip_id(self) -> str | None:
        return self._state.active_trip_id

    def get_trip(self, trip_id: str) -> Trip:
        """Get trip by ID.

        Raises:
            TripNotFoundError: If no trip has this id
        """
        for trip in self._state.trips:
            if trip.id == trip_id:
                return trip
        raise TripNotFoundError(trip_id)

    def active_trip(self) -> Trip | None:
        """Trip selected for read views, or None if unset or unresolvable."""
        if self._state.active_trip_id is None:
            return None
        try:
            return self.get_trip(self._state.active_trip_id)
        except TripNotFoundError:
            return None

    def find_activity(self, trip_id: str, item_id: str) -> tuple[ItineraryDay, ItineraryItem]:
        """Locate an activity by id across every day of the trip.

        Raises:
            TripNotFoundError: If the trip does not exist
            ActivityNotFoundError: If no day holds the activity
        """
        trip = self.get_trip(trip_id)
        day_index, item_index = _locate_item(trip, item_id)
        day = trip.itinerary[day_index]
        return day, day.items[item_index]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_trip(self, trip: Trip) -> Trip:
        """Append a fully formed trip. Does not change the active trip.

        Raises:
            DuplicateEntityError: If a trip with the same id exists
        """
        if any(existing.id == trip.id for existing in self._state.trips):
            self._reject("create_trip", trip.id, "duplicate")
            raise DuplicateEntityError(f"trip {trip.id} already exists")

        new_state = self._state.model_copy(update={"trips": self._state.trips + (trip,)})
        self._commit("create_trip", trip.id, new_state, days=len(trip.itinerary))
        return trip

    def set_active_trip(self, trip_id: str | None) -> None:
        """Select the trip used by read views.

        Never raises. An unknown id is stored as-is and simply leaves
        ``active_trip()`` returning None; callers must handle that.
        """
        if trip_id is not None and all(trip.id != trip_id for trip in self._state.trips):
            logger.warning("Active trip %s does not exist; no trip will resolve", trip_id)

        new_state = self._state.model_copy(update={"active_trip_id": trip_id})
        self._commit("set_active_trip", trip_id, new_state)

    def add_activity(
        self, trip_id: str, day_date: date | str, item: ItineraryItem
    ) -> ItineraryItem:
        """Append an activity to the day whose date equals ``day_date``.

        Raises:
            TripNotFoundError: If the trip does not exist
            DayNotFoundError: If the trip has no such day
            DuplicateEntityError: If the activity id is already used in the trip
        """
        if isinstance(day_date, str):
            day_date = date.fromisoformat(day_date)

        trip = self._get_trip_for("add_activity", trip_id)

        day_index = next(
            (i for i, day in enumerate(trip.itinerary) if day.date == day_date), None
        )
        if day_index is None:
            self._reject("add_activity", trip_id, "day_not_found", day=day_date.isoformat())
            raise DayNotFoundError(day_date.isoformat(), trip_id)

        if any(existing.id == item.id for day in trip.itinerary for existing in day.items):
            self._reject("add_activity", trip_id, "duplicate", item_id=item.id)
            raise DuplicateEntityError(f"activity {item.id} already exists in trip {trip_id}")

        day = trip.itinerary[day_index]
        new_day = day.model_copy(update={"items": day.items + (item,)})
        self._commit(
            "add_activity",
            trip_id,
            self._with_trip(_with_day(trip, day_index, new_day)),
            item_id=item.id,
            day=day_date.isoformat(),
        )
        return item

    def update_activity(
        self,
        trip_id: str,
        item_id: str,
        patch: ActivityPatch | Mapping[str, Any],
    ) -> ItineraryItem:
        """Overwrite the fields present in ``patch``; all others are preserved.

        Raises:
            TripNotFoundError: If the trip does not exist
            ActivityNotFoundError: If no day holds the activity
            pydantic.ValidationError: If a mapping patch is invalid
        """
        if not isinstance(patch, ActivityPatch):
            patch = ActivityPatch.model_validate(patch)
        changes = patch.changes()

        def apply(item: ItineraryItem) -> ItineraryItem:
            return item.model_copy(update=changes)

        return self._replace_item(
            "update_activity", trip_id, item_id, apply, fields=sorted(changes)
        )

    def delete_activity(self, trip_id: str, item_id: str) -> ItineraryItem:
        """Remove the activity from whichever day holds it.

        Returns:
            The removed activity

        Raises:
            TripNotFoundError: If the trip does not exist
            ActivityNotFoundError: If no day holds the activity
        """
        trip = self._get_trip_for("delete_activity", trip_id)
        day_index, item_index = self._locate_for("delete_activity", trip, item_id)

        day = trip.itinerary[day_index]
        removed = day.items[item_index]
        new_day = day.model_copy(
            update={"items": day.items[:item_index] + day.items[item_index + 1 :]}
        )
        self._commit(
            "delete_activity",
            trip_id,
            self._with_trip(_with_day(trip, day_index, new_day)),
            item_id=item_id,
        )
        return removed

    def add_photo(self, trip_id: str, item_id: str, photo_ref: str) -> ItineraryItem:
        """Append one photo reference to the activity's photo list.

        This is a targeted append against the current state, so concurrent
        completions for the same activity all land.

        Raises:
            TripNotFoundError: If the trip does not exist
            ActivityNotFoundError: If no day holds the activity
        """

        def apply(item: ItineraryItem) -> ItineraryItem:
            return item.model_copy(update={"photos": item.photos + (photo_ref,)})

        return self._replace_item("add_photo", trip_id, item_id, apply)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _replace_item(
        self,
        op: str,
        trip_id: str,
        item_id: str,
        apply: Callable[[ItineraryItem], ItineraryItem],
        **fields: Any,
    ) -> ItineraryItem:
        trip = self._get_trip_for(op, trip_id)
        day_index, item_index = self._locate_for(op, trip, item_id)

        day = trip.itinerary[day_index]
        updated = apply(day.items[item_index])
        items = day.items[:item_index] + (updated,) + day.items[item_index + 1 :]
        new_day = day.model_copy(update={"items": items})

        new_state = self._with_trip(_with_day(trip, day_index, new_day))
        self._commit(op, trip_id, new_state, item_id=item_id, **fields)
        return updated

    def _get_trip_for(self, op: str, trip_id: str) -> Trip:
        try:
            return self.get_trip(trip_id)
        except TripNotFoundError:
            self._reject(op, trip_id, "trip_not_found")
            raise

    def _locate_for(self, op: str, trip: Trip, item_id: str) -> tuple[int, int]:
        try:
            return _locate_item(trip, item_id)
        except EntityNotFound:
            self._reject(op, trip.id, "activity_not_found", item_id=item_id)
            raise

    def _with_trip(self, trip: Trip) -> TripState:
        trips = tuple(
            trip if existing.id == trip.id else existing for existing in self._state.trips
        )
        return self._state.model_copy(update={"trips": trips})

    def _commit(self, op: str, trip_id: str | None, new_state: TripState, **fields: Any) -> None:
        previous = self._state
        self._state = new_state
        if self._on_change is not None:
            try:
                self._on_change(new_state)
            except Exception:
                # an unsaved mutation must not survive in memory
                self._state = previous
                self._reject(op, trip_id, "persist_failed", **fields)
                raise
        self._metrics.inc_mutation(op, "ok")
        self._events.log_mutation(op, trip_id, "ok", **fields)

    def _reject(self, op: str, trip_id: str | None, outcome: str, **fields: Any) -> None:
        self._metrics.inc_mutation(op, outcome)
        self._events.log_mutation(op, trip_id, outcome, **fields)


def _locate_item(trip: Trip, item_id: str) -> tuple[int, int]:
    """Find (day index, item index) of an activity; ids are unique per trip."""
    for day_index, day in enumerate(trip.itinerary):
        for item_index, item in enumerate(day.items):
            if item.id == item_id:
                return day_index, item_index
    raise ActivityNotFoundError(item_id, trip.id)


def _with_day(trip: Trip, day_index: int, day: ItineraryDay) -> Trip:
    itinerary = trip.itinerary[:day_index] + (day,) + trip.itinerary[day_index + 1 :]
    return trip.model_copy(update={"itinerary": itinerary})
