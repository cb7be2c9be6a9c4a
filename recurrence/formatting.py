"""Human-readable descriptions of schedules and sessions."""

from datetime import date, time
from typing import Optional, Union

from .models import (
    WEEKDAY_ABBREVIATIONS,
    WEEKDAY_NAMES,
    ExtractedSchedule,
    RecurrencePattern,
    SessionInstance,
    format_time,
)

NO_SCHEDULE_TEXT = "No recurring schedule set"

Schedule = Union[ExtractedSchedule, RecurrencePattern]


def format_time_12h(value: time) -> str:
    """Format a time as ``10:00 AM``."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_time_range(start: time, end: time) -> str:
    return f"{format_time_12h(start)}–{format_time_12h(end)}"


def _join_words(words: list[str]) -> str:
    if len(words) <= 1:
        return "".join(words)
    return f"{', '.join(words[:-1])} and {words[-1]}"


def format_schedule_summary(schedule: Schedule) -> str:
    """Describe a schedule in one line.

    Weekdays are listed Sunday first regardless of slot order, e.g.
    ``Mondays and Wednesdays, 10:00 AM–11:30 AM``. When the weekdays
    meet at different times each gets its own time range.
    """
    if not getattr(schedule, "has_schedule", True) or not schedule.slots:
        return NO_SCHEDULE_TEXT

    slots = sorted(schedule.slots, key=lambda slot: slot.weekday)
    times = {(slot.start_time, slot.end_time) for slot in slots}

    if len(times) == 1:
        days = _join_words([f"{WEEKDAY_NAMES[slot.weekday]}s" for slot in slots])
        return f"{days}, {format_time_range(slots[0].start_time, slots[0].end_time)}"

    return ", ".join(
        f"{WEEKDAY_NAMES[slot.weekday]}s "
        f"{format_time_range(slot.start_time, slot.end_time)}"
        for slot in slots
    )


def format_long_date(value: date) -> str:
    """Format a date as ``Mar 2, 2026``."""
    return f"{value:%b} {value.day}, {value.year}"


def format_date_range(start: Optional[date], end: Optional[date]) -> str:
    """Format a date range; empty when either end is missing."""
    if start is None or end is None:
        return ""
    return f"{format_long_date(start)} – {format_long_date(end)}"


def format_session(session: SessionInstance) -> str:
    """One preview line, e.g. ``Mon Mar 2, 2026  10:00-11:30``."""
    if session.date is None:
        day = "(no date)"
    else:
        day = f"{WEEKDAY_ABBREVIATIONS[session.weekday]} {format_long_date(session.date)}"

    line = f"{day}  {format_time(session.start_time)}-{format_time(session.end_time)}"
    if session.is_one_off:
        line += "  [one-off]"
    if session.is_cancelled:
        line += "  [cancelled]"
    return line
