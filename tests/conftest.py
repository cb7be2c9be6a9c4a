"""Shared fixtures for the scheduling tests."""

from datetime import date, time

import pytest

from recurrence.models import RecurrencePattern, WeekdayTimeSlot

from .helpers import MONDAY, TUESDAY, WEDNESDAY


@pytest.fixture
def mon_wed_pattern() -> RecurrencePattern:
    """Mondays and Wednesdays 10:00-11:30, 2026-03-02 to 2026-03-16."""
    return RecurrencePattern(
        start_date=date(2026, 3, 2),
        end_date=date(2026, 3, 16),
        slots=(
            WeekdayTimeSlot(MONDAY, time(10, 0), time(11, 30)),
            WeekdayTimeSlot(WEDNESDAY, time(10, 0), time(11, 30)),
        ),
        location="Community Hall",
    )


@pytest.fixture
def tuesday_pattern() -> RecurrencePattern:
    """Tuesdays 18:00-19:00, 2026-03-02 to 2026-03-31."""
    return RecurrencePattern(
        start_date=date(2026, 3, 2),
        end_date=date(2026, 3, 31),
        slots=(WeekdayTimeSlot(TUESDAY, time(18, 0), time(19, 0)),),
        location="Studio B",
        location_details="Second floor",
    )
