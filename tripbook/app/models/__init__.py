"""Models package - re-exports for convenience."""

from tripbook.app.models.common import ActivityType, GeoBounds, GeoPosition, TripbookModel
from tripbook.app.models.map import DraftActivity, MapMarker, MapView, PlaceResult
from tripbook.app.models.trip import (
    TIME_PATTERN,
    ClockTime,
    ActivityPatch,
    ItineraryDay,
    ItineraryItem,
    Trip,
    TripState,
)

__all__ = [
    # Common
    "TripbookModel",
    "GeoPosition",
    "GeoBounds",
    "ActivityType",
    # Trip
    "TIME_PATTERN",
    "ClockTime",
    "ItineraryItem",
    "ItineraryDay",
    "Trip",
    "ActivityPatch",
    "TripState",
    # Map
    "PlaceResult",
    "DraftActivity",
    "MapMarker",
    "MapView",
]
