"""Derived read views over repository snapshots.

Nothing here is stored: display order, markers and the countdown are all
recomputed from the current ``TripState``.
"""

from collections.abc import Iterable, Sequence
from datetime import date

from tripbook.app.config import Settings
from tripbook.app.models.common import GeoPosition
from tripbook.app.models.map import MapMarker, MapView
from tripbook.app.models.trip import ItineraryDay, ItineraryItem, Trip, TripState

TRIP_STARTED_LABEL = "Trip Started!"


def resolve_active_trip(state: TripState) -> Trip | None:
    """Return the active trip, or None when unset or pointing at nothing."""
    if state.active_trip_id is None:
        return None
    return next((trip for trip in state.trips if trip.id == state.active_trip_id), None)


def day_at(trip: Trip, day_index: int) -> ItineraryDay | None:
    """Day bucket at a zero-based index, or None when out of range."""
    if 0 <= day_index < len(trip.itinerary):
        return trip.itinerary[day_index]
    return None


def sorted_items(day: ItineraryDay) -> list[ItineraryItem]:
    """Activities in time-ascending order.

    Times are zero-padded HH:MM, so string order is clock order. The sort is
    stable: equal times keep insertion order.
    """
    return sorted(day.items, key=lambda item: item.time)


def map_markers(items: Iterable[ItineraryItem]) -> list[MapMarker]:
    """One labeled pin per activity, in the given order."""
    return [MapMarker(id=item.id, position=item.position, title=item.title) for item in items]


def map_center(items: Sequence[ItineraryItem], default: GeoPosition) -> GeoPosition:
    """Position of the first activity, falling back to the default center."""
    if items:
        return items[0].position
    return default


def build_map_view(trip: Trip, day_index: int, settings: Settings) -> MapView:
    """Center, zoom, pins and fit bounds for one day of a trip."""
    day = day_at(trip, day_index)
    items = sorted_items(day) if day is not None else []
    default_center = GeoPosition(lat=settings.default_map_lat, lng=settings.default_map_lng)

    return MapView(
        center=map_center(items, default_center),
        zoom=settings.default_map_zoom,
        markers=tuple(map_markers(items)),
        bounds=trip.bounds,
    )


def countdown_label(start_date: date, today: date) -> str:
    """Days remaining until the trip starts.

    Counts whole calendar days between the two dates. A timestamp-based
    difference would truncate partial days and show "0 Days Left" on the
    afternoon before the start; here that afternoon shows "1 Days Left".

    Args:
        start_date: First day of the trip
        today: Current date from the wall clock

    Returns:
        "{n} Days Left", or "Trip Started!" once the start date has passed
    """
    diff = (start_date - today).days
    if diff < 0:
        return TRIP_STARTED_LABEL
    return f"{diff} Days Left"
