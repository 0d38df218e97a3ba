"""Map interaction bridge - map clicks to committed activities.

A click session moves idle -> resolving -> drafting -> committed; a discard
returns it to idle. Reverse geocoding is the only suspension point. Each click
takes a fresh sequence number and a geocode result is applied only if its
number is still the latest when it arrives. Superseded lookups are not
cancelled; their results are dropped.
"""

import logging
from enum import Enum

from tripbook.app.adapters.geocoding import Geocoder, fallback_label
from tripbook.app.errors import DayNotFoundError, DraftStateError, GeocodeFailure, TripNotFoundError
from tripbook.app.itinerary.builders import IdFactory, new_id
from tripbook.app.itinerary.repository import ItineraryRepository
from tripbook.app.itinerary.views import day_at
from tripbook.app.models.common import ActivityType, GeoPosition
from tripbook.app.models.map import DraftActivity
from tripbook.app.models.trip import ItineraryItem, Trip
from tripbook.app.utils.logging import StructuredEventLogger
from tripbook.app.utils.metrics import PrometheusTripMetrics, metrics as default_metrics

logger = logging.getLogger(__name__)


class BridgeState(str, Enum):
    """Map click session state."""

    idle = "idle"
    resolving = "resolving"
    drafting = "drafting"
    committed = "committed"


class MapInteractionBridge:
    """Turns map clicks into draft activities and commits them on confirmation.

    Holds only the transient draft; all itinerary data stays in the repository.
    """

    def __init__(
        self,
        repository: ItineraryRepository,
        geocoder: Geocoder,
        trip_id: str | None = None,
        default_time: str = "12:00",
        id_factory: IdFactory = new_id,
        metrics: PrometheusTripMetrics | None = None,
    ) -> None:
        """Initialize bridge.

        Args:
            repository: Itinerary repository commits go through
            geocoder: Reverse geocoding collaborator
            trip_id: Target trip; None follows the repository's active trip
            default_time: Time given to new drafts (HH:MM)
            id_factory: Activity id generator
            metrics: Metrics recorder (defaults to the Prometheus one)
        """
        self._repository = repository
        self._geocoder = geocoder
        self._trip_id = trip_id
        self._default_time = default_time
        self._id_factory = id_factory
        self._metrics = metrics or default_metrics
        self._events = StructuredEventLogger(__name__)

        self._state = BridgeState.idle
        self._sequence = 0
        self._draft: DraftActivity | None = None

    @property
    def state(self) -> BridgeState:
        return self._state

    @property
    def draft(self) -> DraftActivity | None:
        return self._draft

    @property
    def sequence(self) -> int:
        """Number of the most recent click (or discard)."""
        return self._sequence

    async def handle_click(self, position: GeoPosition, day_index: int) -> DraftActivity | None:
        """Start a click session and resolve the clicked coordinate to a draft.

        A click while another one is resolving supersedes it.

        Args:
            position: Clicked coordinate
            day_index: Zero-based index of the day the activity is drafted for

        Returns:
            The draft, or None if a newer click or a discard superseded this one

        Raises:
            DayNotFoundError: If day_index is negative; the current session is untouched
        """
        if day_index < 0:
            raise DayNotFoundError(f"index {day_index}", self._trip_id)

        self._sequence += 1
        token = self._sequence
        self._state = BridgeState.resolving
        self._draft = None

        resolved = True
        try:
            label = await self._geocoder.reverse(position)
        except GeocodeFailure as exc:
            resolved = False
            label = fallback_label(position)
            self._events.log_event(
                "geocode_fallback", logging.WARNING, token=token, label=label, reason=str(exc)
            )

        if token != self._sequence:
            self._metrics.inc_stale_geocode()
            self._events.log_event(
                "stale_geocode_dropped", logging.DEBUG, token=token, latest=self._sequence
            )
            return None

        if not label:
            resolved = False
            label = fallback_label(position)

        self._draft = DraftActivity(
            day_index=day_index,
            title=_default_title(label),
            time=self._default_time,
            activity_type=ActivityType.sightseeing,
            position=position,
            location_name=label,
            resolved=resolved,
        )
        self._state = BridgeState.drafting
        return self._draft

    def confirm(
        self,
        *,
        title: str | None = None,
        time: str | None = None,
        activity_type: ActivityType | None = None,
        memo: str | None = None,
        location_name: str | None = None,
    ) -> ItineraryItem:
        """Commit the current draft through ``add_activity``.

        Keyword arguments override the draft's fields. An empty title falls
        back to the location label. On error the draft stays pending.

        Raises:
            DraftStateError: If no draft is awaiting confirmation
            TripNotFoundError: If the target trip cannot be resolved
            DayNotFoundError: If the draft's day index is outside the trip
            pydantic.ValidationError: If an override is invalid (e.g. bad time)
        """
        if self._state != BridgeState.drafting or self._draft is None:
            raise DraftStateError(f"nothing to confirm in state {self._state.value}")

        draft = self._draft
        trip = self._target_trip()
        day = day_at(trip, draft.day_index)
        if day is None:
            raise DayNotFoundError(f"index {draft.day_index}", trip.id)

        location = location_name if location_name is not None else draft.location_name
        item = ItineraryItem(
            id=self._id_factory(),
            time=time if time is not None else draft.time,
            title=(title if title is not None else draft.title) or location,
            location_name=location,
            memo=memo if memo is not None else draft.memo,
            activity_type=activity_type if activity_type is not None else draft.activity_type,
            position=draft.position,
        )

        self._repository.add_activity(trip.id, day.date, item)
        self._state = BridgeState.committed
        self._draft = None
        logger.info("Committed map draft %s to %s on %s", item.id, trip.id, day.date)
        return item

    def discard(self) -> None:
        """Drop the draft (or in-flight lookup) and return to idle."""
        self._sequence += 1
        self._draft = None
        self._state = BridgeState.idle

    def _target_trip(self) -> Trip:
        if self._trip_id is not None:
            return self._repository.get_trip(self._trip_id)
        trip = self._repository.active_trip()
        if trip is None:
            raise TripNotFoundError(self._repository.active_trip_id)
        return trip


def _default_title(label: str) -> str:
    """First comma-separated segment of a place label."""
    head = label.split(",")[0].strip()
    return head or label
