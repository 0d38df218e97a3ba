"""Error kinds raised by the itinerary core.

None of these are fatal: input errors are rejected at the boundary, lookups
surface as recoverable ``EntityNotFound`` subclasses, and external failures
(geocoding, file reads) degrade without aborting sibling work.
"""


class TripbookError(Exception):
    """Base class for all itinerary errors."""

    pass


class InvalidRangeError(TripbookError, ValueError):
    """End date falls before start date."""

    def __init__(self, start: object, end: object) -> None:
        super().__init__(f"end date {end} is before start date {start}")
        self.start = start
        self.end = end


class EntityNotFound(TripbookError, LookupError):
    """A referenced trip, day or activity does not exist."""

    kind = "entity"

    def __init__(self, entity_id: object, trip_id: str | None = None) -> None:
        where = f" in trip {trip_id}" if trip_id is not None else ""
        super().__init__(f"{self.kind} {entity_id} not found{where}")
        self.entity_id = entity_id
        self.trip_id = trip_id


class TripNotFoundError(EntityNotFound):
    """No trip with the given id."""

    kind = "trip"


class DayNotFoundError(EntityNotFound):
    """No day bucket with the given date (or index) in the trip."""

    kind = "day"


class ActivityNotFoundError(EntityNotFound):
    """No activity with the given id on any day of the trip."""

    kind = "activity"


class DuplicateEntityError(TripbookError):
    """An id that must be unique is already taken."""

    pass


class GeocodeFailure(TripbookError):
    """Reverse or forward geocoding failed."""

    pass


class FileConversionFailure(TripbookError):
    """A selected file could not be turned into an embeddable reference."""

    def __init__(self, file_name: str, reason: str) -> None:
        super().__init__(f"{file_name}: {reason}")
        self.file_name = file_name
        self.reason = reason


class DraftStateError(TripbookError):
    """Map bridge operation called in the wrong state."""

    pass


class StateRestoreError(TripbookError):
    """Persisted record exists but cannot be parsed."""

    pass
