"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable, Generator
from datetime import date

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tripbook.app.db.engine import create_session_factory, init_storage
from tripbook.app.itinerary.builders import new_trip
from tripbook.app.itinerary.repository import ItineraryRepository
from tripbook.app.models import ActivityType, GeoPosition, ItineraryItem, Trip

LOUVRE = GeoPosition(lat=48.8606, lng=2.3376)
EIFFEL = GeoPosition(lat=48.8584, lng=2.2945)


@pytest.fixture
def paris_trip() -> Trip:
    """Three-day trip, 2024-06-01..2024-06-03, no activities."""
    return new_trip(
        title="Paris Getaway",
        destination="Paris, France",
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 3),
        id_factory=lambda: "trip-paris",
    )


@pytest.fixture
def rome_trip() -> Trip:
    """Two-day trip used as the 'other trip' in isolation checks."""
    return new_trip(
        title="Rome",
        destination="Rome, Italy",
        start_date=date(2024, 7, 10),
        end_date=date(2024, 7, 11),
        id_factory=lambda: "trip-rome",
    )


@pytest.fixture
def make_item() -> Callable[..., ItineraryItem]:
    """Factory for activities with sensible defaults."""

    def _make(
        item_id: str,
        time: str = "12:00",
        title: str | None = None,
        position: GeoPosition = LOUVRE,
        activity_type: ActivityType = ActivityType.sightseeing,
    ) -> ItineraryItem:
        return ItineraryItem(
            id=item_id,
            time=time,
            title=title or item_id.title(),
            location_name="Paris",
            activity_type=activity_type,
            position=position,
        )

    return _make


@pytest.fixture
def repository(paris_trip: Trip, rome_trip: Trip) -> ItineraryRepository:
    """Repository holding the Paris and Rome trips, Paris active."""
    repo = ItineraryRepository()
    repo.create_trip(paris_trip)
    repo.create_trip(rome_trip)
    repo.set_active_trip(paris_trip.id)
    return repo


@pytest.fixture
def sqlite_engine() -> Generator[Engine, None, None]:
    """In-memory sqlite engine shared across sessions."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_storage(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sqlite_session_factory(sqlite_engine: Engine) -> sessionmaker[Session]:
    return create_session_factory(sqlite_engine)
