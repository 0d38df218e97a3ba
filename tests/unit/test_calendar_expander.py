"""Tests for calendar expansion."""

from datetime import date, timedelta

import pytest

from tripbook.app.errors import InvalidRangeError
from tripbook.app.itinerary.expander import expand_days, inclusive_day_span


def test_expand_days_three_day_trip() -> None:
    """Test 2024-06-01..03 yields exactly three empty, ordered days."""
    days = expand_days(date(2024, 6, 1), date(2024, 6, 3))

    assert [d.date for d in days] == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]
    assert all(d.items == () for d in days)


def test_expand_days_single_day() -> None:
    """Test start == end yields one bucket."""
    days = expand_days(date(2024, 6, 1), date(2024, 6, 1))

    assert len(days) == 1
    assert days[0].date == date(2024, 6, 1)


def test_expand_days_crosses_month_and_year() -> None:
    """Test expansion across Dec 31 -> Jan 1."""
    days = expand_days(date(2024, 12, 30), date(2025, 1, 2))

    assert [d.date.isoformat() for d in days] == [
        "2024-12-30",
        "2024-12-31",
        "2025-01-01",
        "2025-01-02",
    ]


def test_expand_days_includes_leap_day() -> None:
    """Test Feb 29 appears in a leap year and not otherwise."""
    leap = expand_days(date(2024, 2, 28), date(2024, 3, 1))
    common = expand_days(date(2023, 2, 28), date(2023, 3, 1))

    assert date(2024, 2, 29) in [d.date for d in leap]
    assert len(leap) == 3
    assert len(common) == 2


@pytest.mark.parametrize(
    ("start", "end"),
    [
        (date(2024, 1, 1), date(2024, 12, 31)),
        (date(2023, 11, 15), date(2024, 3, 15)),
        (date(2025, 6, 30), date(2025, 7, 1)),
    ],
)
def test_expand_days_count_unique_sorted(start: date, end: date) -> None:
    """Test bucket count equals the inclusive span; dates are unique and ascending."""
    days = expand_days(start, end)
    dates = [d.date for d in days]

    assert len(days) == (end - start).days + 1 == inclusive_day_span(start, end)
    assert len(set(dates)) == len(dates)
    assert dates == sorted(dates)
    assert all(b - a == timedelta(days=1) for a, b in zip(dates, dates[1:]))


def test_expand_days_reversed_range_fails() -> None:
    """Test end before start raises InvalidRangeError."""
    with pytest.raises(InvalidRangeError, match="before start date"):
        expand_days(date(2024, 6, 3), date(2024, 6, 1))


def test_invalid_range_error_is_value_error() -> None:
    """Test InvalidRangeError can be handled as a ValueError."""
    with pytest.raises(ValueError):
        inclusive_day_span(date(2024, 6, 2), date(2024, 6, 1))
