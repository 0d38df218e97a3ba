"""Test model contract validators and invariants."""

from datetime import date

import pytest
from pydantic import ValidationError

from tripbook.app.itinerary.expander import expand_days
from tripbook.app.models import (
    ActivityPatch,
    ActivityType,
    GeoBounds,
    GeoPosition,
    ItineraryDay,
    ItineraryItem,
    Trip,
    TripState,
)


def _item(item_id: str = "a1", time: str = "09:00") -> ItineraryItem:
    return ItineraryItem(
        id=item_id, time=time, title="Louvre", position=GeoPosition(lat=48.86, lng=2.33)
    )


@pytest.mark.parametrize("value", ["00:00", "09:05", "12:00", "23:59"])
def test_item_time_accepts_24h_clock(value: str) -> None:
    """Test zero-padded 24-hour times are accepted."""
    assert _item(time=value).time == value


@pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "noon", "12:00:00", ""])
def test_item_time_rejects_invalid(value: str) -> None:
    """Test non-HH:MM times fail validation."""
    with pytest.raises(ValidationError):
        _item(time=value)


def test_item_defaults() -> None:
    """Test new items default to sightseeing, empty memo, no photos."""
    item = _item()

    assert item.activity_type == ActivityType.sightseeing
    assert item.memo == ""
    assert item.photos == ()


def test_item_is_immutable() -> None:
    """Test items cannot be mutated in place."""
    item = _item()

    with pytest.raises(ValidationError):
        item.title = "Changed"  # type: ignore[misc]


def test_activity_type_is_closed() -> None:
    """Test unknown categories are rejected."""
    with pytest.raises(ValidationError):
        ItineraryItem(
            id="x",
            time="10:00",
            title="Cruise",
            activity_type="boat",  # type: ignore[arg-type]
            position=GeoPosition(lat=0, lng=0),
        )


def test_geo_position_out_of_range_fails() -> None:
    """Test latitude/longitude range checks."""
    with pytest.raises(ValidationError):
        GeoPosition(lat=91, lng=0)
    with pytest.raises(ValidationError):
        GeoPosition(lat=0, lng=-181)


def test_geo_bounds_south_above_north_fails() -> None:
    """Test bounds with south > north fail validation."""
    with pytest.raises(ValidationError, match="south must be <= north"):
        GeoBounds(north=48.0, south=49.0, east=2.5, west=2.2)


def test_trip_reversed_dates_fail() -> None:
    """Test a trip whose end precedes its start fails validation."""
    with pytest.raises(ValidationError, match="before start date"):
        Trip(
            id="t",
            title="Backwards",
            destination="Nowhere",
            start_date=date(2024, 6, 3),
            end_date=date(2024, 6, 1),
            itinerary=(),
        )


def test_trip_with_gap_in_itinerary_fails() -> None:
    """Test the itinerary must cover the range with no gaps."""
    days = expand_days(date(2024, 6, 1), date(2024, 6, 3))

    with pytest.raises(ValidationError, match="exactly one day per date"):
        Trip(
            id="t",
            title="Gap",
            destination="Paris",
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 3),
            itinerary=(days[0], days[2]),
        )


def test_trip_with_duplicate_activity_ids_fails() -> None:
    """Test activity ids must be unique across the whole trip."""
    days = (
        ItineraryDay(date=date(2024, 6, 1), items=(_item("dup"),)),
        ItineraryDay(date=date(2024, 6, 2), items=(_item("dup", "10:00"),)),
    )

    with pytest.raises(ValidationError, match="duplicate activity id dup"):
        Trip(
            id="t",
            title="Dup",
            destination="Paris",
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 2),
            itinerary=days,
        )


def test_patch_changes_only_set_fields() -> None:
    """Test ActivityPatch reports only explicitly set, non-null fields."""
    patch = ActivityPatch(title="Musée du Louvre", memo=None)

    assert patch.changes() == {"title": "Musée du Louvre"}


def test_patch_accepts_camel_case_aliases() -> None:
    """Test patches built from persisted/UI payloads use camelCase keys."""
    patch = ActivityPatch.model_validate(
        {"locationName": "Rue de Rivoli", "activityType": "dining"}
    )

    assert patch.changes() == {
        "location_name": "Rue de Rivoli",
        "activity_type": ActivityType.dining,
    }


def test_patch_rejects_invalid_time() -> None:
    """Test patch time uses the same clock format as items."""
    with pytest.raises(ValidationError):
        ActivityPatch(time="7pm")


def test_patch_cannot_touch_photos_or_id() -> None:
    """Test id and photos are not patchable fields."""
    assert "photos" not in ActivityPatch.model_fields
    assert "id" not in ActivityPatch.model_fields


def test_trip_state_serializes_with_camel_case_keys() -> None:
    """Test the persisted layout is {trips, activeTripId}."""
    data = TripState(active_trip_id="t1").model_dump(mode="json", by_alias=True)

    assert data == {"trips": [], "activeTripId": "t1"}
