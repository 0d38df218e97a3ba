"""Map and places models - transient values exchanged with the map surface."""

from pydantic import Field

from tripbook.app.models.common import ActivityType, GeoBounds, GeoPosition, TripbookModel
from tripbook.app.models.trip import ClockTime


class PlaceResult(TripbookModel):
    """Forward search / autocomplete hit."""

    label: str
    position: GeoPosition
    bounds: GeoBounds | None = None


class DraftActivity(TripbookModel):
    """Uncommitted activity candidate produced by a map click."""

    day_index: int = Field(..., ge=0)
    title: str
    time: ClockTime
    activity_type: ActivityType = ActivityType.sightseeing
    position: GeoPosition
    location_name: str
    memo: str = ""
    resolved: bool = Field(
        default=True, description="False when the label is the coordinate fallback"
    )


class MapMarker(TripbookModel):
    """Labeled pin for one activity."""

    id: str
    position: GeoPosition
    title: str


class MapView(TripbookModel):
    """Everything the map surface needs to render one day."""

    center: GeoPosition
    zoom: int
    markers: tuple[MapMarker, ...] = ()
    bounds: GeoBounds | None = None
