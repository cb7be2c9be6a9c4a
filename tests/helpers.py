"""Builders shared by the test modules.

Calendar reference: 2026-03-01 is a Sunday, 2026-03-02 a Monday.
"""

from datetime import date, time

from recurrence.models import SessionInstance

SUNDAY = 0
MONDAY = 1
TUESDAY = 2
WEDNESDAY = 3
FRIDAY = 5


def make_session(day, start="10:00", end="11:30", **kwargs) -> SessionInstance:
    """Build a session from ISO date and HH:MM strings."""
    return SessionInstance(
        date=date.fromisoformat(day),
        start_time=time.fromisoformat(start),
        end_time=time.fromisoformat(end),
        **kwargs,
    )
