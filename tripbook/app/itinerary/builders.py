"""Constructors for fully formed trips and activities."""

import uuid
from collections.abc import Callable
from datetime import date

from tripbook.app.itinerary.expander import expand_days
from tripbook.app.models.common import ActivityType, GeoBounds, GeoPosition
from tripbook.app.models.trip import ItineraryItem, Trip

IdFactory = Callable[[], str]


def new_id() -> str:
    """Generate a globally unique identifier."""
    return str(uuid.uuid4())


def new_trip(
    title: str,
    destination: str,
    start_date: date,
    end_date: date,
    bounds: GeoBounds | None = None,
    id_factory: IdFactory = new_id,
) -> Trip:
    """Create a trip with its itinerary pre-expanded from the date range.

    Raises:
        InvalidRangeError: If end_date < start_date
    """
    itinerary = expand_days(start_date, end_date)
    return Trip(
        id=id_factory(),
        title=title,
        destination=destination,
        start_date=start_date,
        end_date=end_date,
        bounds=bounds,
        itinerary=itinerary,
    )


def new_activity(
    title: str,
    position: GeoPosition,
    time: str = "12:00",
    location_name: str = "",
    memo: str = "",
    activity_type: ActivityType = ActivityType.sightseeing,
    id_factory: IdFactory = new_id,
) -> ItineraryItem:
    """Create an activity with a fresh id and no photos."""
    return ItineraryItem(
        id=id_factory(),
        time=time,
        title=title,
        location_name=location_name,
        memo=memo,
        activity_type=activity_type,
        position=position,
    )
