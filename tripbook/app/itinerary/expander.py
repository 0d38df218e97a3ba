"""Calendar expander - date range to day buckets."""

from datetime import date, timedelta

from tripbook.app.errors import InvalidRangeError
from tripbook.app.models.trip import ItineraryDay


def inclusive_day_span(start_date: date, end_date: date) -> int:
    """Number of calendar days in [start_date, end_date].

    Raises:
        InvalidRangeError: If end_date < start_date
    """
    if end_date < start_date:
        raise InvalidRangeError(start_date, end_date)
    return (end_date - start_date).days + 1


def expand_days(start_date: date, end_date: date) -> tuple[ItineraryDay, ...]:
    """Build one empty day bucket per calendar date, both endpoints included.

    Date arithmetic goes through ``timedelta`` so month ends, year ends and
    leap days need no special casing.

    Args:
        start_date: First day of the trip
        end_date: Last day of the trip (inclusive)

    Returns:
        Day buckets in ascending date order, each with no activities

    Raises:
        InvalidRangeError: If end_date < start_date
    """
    span = inclusive_day_span(start_date, end_date)
    return tuple(ItineraryDay(date=start_date + timedelta(days=i)) for i in range(span))
