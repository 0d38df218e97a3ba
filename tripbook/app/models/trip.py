"""Trip models - the itinerary data owned by the repository."""

from datetime import date, timedelta
from typing import Annotated

from pydantic import Field, StringConstraints, model_validator

from tripbook.app.errors import InvalidRangeError
from tripbook.app.models.common import ActivityType, GeoBounds, GeoPosition, TripbookModel

# 24-hour clock, zero-padded, minute resolution
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
ClockTime = Annotated[str, StringConstraints(pattern=TIME_PATTERN)]


class ItineraryItem(TripbookModel):
    """Single timed activity on a day."""

    id: str = Field(..., min_length=1)
    time: ClockTime
    title: str
    location_name: str = ""
    memo: str = ""
    activity_type: ActivityType = ActivityType.sightseeing
    position: GeoPosition
    photos: tuple[str, ...] = ()


class ItineraryDay(TripbookModel):
    """One calendar date of a trip with its activities in insertion order."""

    date: date
    items: tuple[ItineraryItem, ...] = ()


class Trip(TripbookModel):
    """A planned journey with a fully expanded day-by-day itinerary."""

    id: str = Field(..., min_length=1)
    title: str
    destination: str
    start_date: date
    end_date: date
    bounds: GeoBounds | None = None
    itinerary: tuple[ItineraryDay, ...]

    @model_validator(mode="after")
    def validate_itinerary(self) -> "Trip":
        """Ensure days cover [start_date, end_date] contiguously and ids are trip-unique."""
        if self.end_date < self.start_date:
            raise InvalidRangeError(self.start_date, self.end_date)

        span = (self.end_date - self.start_date).days + 1
        expected = [self.start_date + timedelta(days=i) for i in range(span)]
        if [day.date for day in self.itinerary] != expected:
            raise ValueError("itinerary must contain exactly one day per date in the trip range")

        seen: set[str] = set()
        for day in self.itinerary:
            for item in day.items:
                if item.id in seen:
                    raise ValueError(f"duplicate activity id {item.id}")
                seen.add(item.id)
        return self


class ActivityPatch(TripbookModel):
    """Partial update for an activity.

    Unset (or None) fields are preserved. ``id`` and ``photos`` are not
    patchable; photos only ever grow through ``add_photo``.
    """

    time: ClockTime | None = None
    title: str | None = None
    location_name: str | None = None
    memo: str | None = None
    activity_type: ActivityType | None = None
    position: GeoPosition | None = None

    def changes(self) -> dict[str, object]:
        """Fields to overwrite, keyed by attribute name."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class TripState(TripbookModel):
    """Complete repository state - the persisted record."""

    trips: tuple[Trip, ...] = ()
    active_trip_id: str | None = None
