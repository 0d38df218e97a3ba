"""Service wiring - config, storage, repository and the async pipelines."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from tripbook.app.adapters.geocoding import Geocoder, NominatimGeocoder
from tripbook.app.config import Settings, get_settings
from tripbook.app.db.engine import create_engine_from_settings, create_session_factory, init_storage
from tripbook.app.db.inmemory import InMemoryStateStore
from tripbook.app.db.persistence import StatePersistence, open_repository
from tripbook.app.db.repositories import StateStore
from tripbook.app.db.sql_store import SqlStateStore
from tripbook.app.errors import DayNotFoundError, TripNotFoundError
from tripbook.app.itinerary.builders import new_trip
from tripbook.app.itinerary.repository import ItineraryRepository
from tripbook.app.itinerary.views import day_at
from tripbook.app.map.bridge import MapInteractionBridge
from tripbook.app.models.common import GeoBounds
from tripbook.app.models.trip import ItineraryItem, Trip
from tripbook.app.photos.pipeline import PhotoAttachmentPipeline

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> StateStore:
    """SQL-backed store when a storage URL is configured, otherwise in-memory."""
    if not settings.storage_url:
        logger.info("No storage URL configured; itinerary state is kept in memory")
        return InMemoryStateStore()

    engine = create_engine_from_settings(settings)
    init_storage(engine)
    return SqlStateStore(create_session_factory(engine))


@dataclass
class TripbookServices:
    """Everything a UI needs to drive the itinerary core."""

    settings: Settings
    persistence: StatePersistence
    repository: ItineraryRepository
    geocoder: Geocoder
    photos: PhotoAttachmentPipeline

    def map_bridge(self, trip_id: str | None = None) -> MapInteractionBridge:
        """New click-session bridge; None targets the active trip."""
        return MapInteractionBridge(
            self.repository,
            self.geocoder,
            trip_id=trip_id,
            default_time=self.settings.default_activity_time,
        )

    def plan_trip(
        self,
        title: str,
        destination: str,
        start_date: date,
        end_date: date | None = None,
        bounds: GeoBounds | None = None,
    ) -> Trip:
        """Create a trip and make it the active one.

        Without ``end_date`` the trip ends ``default_trip_length_days`` after
        ``start_date``, like the new-trip form.

        Raises:
            InvalidRangeError: If end_date < start_date
        """
        if end_date is None:
            end_date = start_date + timedelta(days=self.settings.default_trip_length_days)
        trip = new_trip(title, destination, start_date, end_date, bounds=bounds)
        self.repository.create_trip(trip)
        self.repository.set_active_trip(trip.id)
        return trip

    def add_activity_at(self, day_index: int, item: ItineraryItem) -> ItineraryItem:
        """Add an activity to the active trip's day at ``day_index``.

        Raises:
            TripNotFoundError: If no active trip resolves
            DayNotFoundError: If the index is outside the trip
        """
        trip = self.repository.active_trip()
        if trip is None:
            raise TripNotFoundError(self.repository.active_trip_id)
        day = day_at(trip, day_index)
        if day is None:
            raise DayNotFoundError(f"index {day_index}", trip.id)
        return self.repository.add_activity(trip.id, day.date, item)


def build_services(
    settings: Settings | None = None,
    *,
    store: StateStore | None = None,
    geocoder: Geocoder | None = None,
) -> TripbookServices:
    """Wire the core from settings; collaborators can be injected for tests.

    Raises:
        StateRestoreError: If the persisted record is corrupt
    """
    settings = settings or get_settings()
    persistence = StatePersistence(store or build_store(settings), settings.storage_key)
    repository = open_repository(persistence)

    return TripbookServices(
        settings=settings,
        persistence=persistence,
        repository=repository,
        geocoder=geocoder or NominatimGeocoder.from_settings(settings),
        photos=PhotoAttachmentPipeline(repository, max_bytes=settings.photo_max_bytes),
    )
