"""Conversion of UI/CRUD-shaped data into scheduling models.

Two pattern shapes are in circulation. The current one lists a start and
end time per weekday::

    {"startDate": "2026-03-02", "endDate": "2026-03-16",
     "dayTimes": [{"dayOfWeek": 1, "startTime": "10:00", "endTime": "11:30"}],
     "location": "Community Hall", "locationDetails": ""}

The legacy one shares a single time range across several weekdays::

    {"startDate": "2026-03-02", "endDate": "2026-03-16",
     "frequency": "weekly", "daysOfWeek": [1, 3],
     "startTime": "10:00", "endTime": "11:30", ...}

Both are normalized into a ``RecurrencePattern`` here, so nothing
downstream needs to know which shape was supplied.
"""

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, time
from typing import Any, Optional

from .exceptions import InvalidPatternError, InvalidSessionError, ScheduleError
from .models import RecurrencePattern, SessionInstance, WeekdayTimeSlot

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*$")
ALL_WEEKDAYS = (0, 1, 2, 3, 4, 5, 6)
FLAG_STRINGS = {"true": True, "1": True, "false": False, "0": False, "": False}


def parse_date(value: Any) -> date:
    """Parse a calendar date.

    Accepts ``date``/``datetime`` objects and ISO strings. A full ISO
    datetime string such as ``2026-03-02T00:00:00.000Z`` is truncated to
    its date part.

    Raises:
        InvalidPatternError: If the value is empty or not a valid date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidPatternError(f"Missing or invalid date: {value!r}")

    date_part = value.strip().split("T", 1)[0]
    try:
        return datetime.strptime(date_part, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidPatternError(
            f"Invalid date format: '{value}'. Expected YYYY-MM-DD."
        ) from None


def parse_time(value: Any) -> time:
    """Parse a 24h ``HH:MM`` time string (seconds are ignored).

    Raises:
        InvalidPatternError: If the value is empty or not a valid time.
    """
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise InvalidPatternError(f"Missing or invalid time: {value!r}")

    match = TIME_PATTERN.match(value)
    if match:
        hour, minute = map(int, match.groups())
        if hour < 24 and minute < 60:
            return time(hour, minute)

    raise InvalidPatternError(f"Invalid time format: '{value}'. Expected HH:MM.")


def _parse_weekday(value: Any) -> int:
    try:
        weekday = int(value)
    except (TypeError, ValueError):
        raise InvalidPatternError(f"Invalid weekday: {value!r}") from None
    if isinstance(value, bool) or not 0 <= weekday <= 6:
        raise InvalidPatternError(f"Weekday must be 0-6 (Sun-Sat), got {value!r}")
    return weekday


def _require_list(value: Any, field_name: str) -> Sequence[Any]:
    if not isinstance(value, (list, tuple)):
        raise InvalidPatternError(
            f"Expected a list for {field_name}, got {type(value).__name__}"
        )
    return value


def _slots_from_day_times(day_times: Any) -> list[WeekdayTimeSlot]:
    slots = []
    for entry in _require_list(day_times, "dayTimes"):
        if not isinstance(entry, Mapping):
            raise InvalidPatternError(
                f"Expected a mapping for each dayTimes entry, got {entry!r}"
            )
        weekday = entry.get("dayOfWeek", entry.get("weekday"))
        slots.append(WeekdayTimeSlot(
            weekday=_parse_weekday(weekday),
            start_time=parse_time(entry.get("startTime")),
            end_time=parse_time(entry.get("endTime")),
        ))
    return slots


def _slots_from_legacy(raw: Mapping[str, Any]) -> list[WeekdayTimeSlot]:
    if raw.get("frequency") == "daily":
        weekdays = ALL_WEEKDAYS
    else:
        weekdays = _require_list(raw.get("daysOfWeek") or (), "daysOfWeek")

    if not weekdays:
        return []

    start_time = parse_time(raw.get("startTime"))
    end_time = parse_time(raw.get("endTime"))
    # Legacy forms could list a weekday twice; keep first-seen order.
    unique_weekdays = dict.fromkeys(_parse_weekday(day) for day in weekdays)
    return [
        WeekdayTimeSlot(weekday=day, start_time=start_time, end_time=end_time)
        for day in unique_weekdays
    ]


def is_legacy_shape(raw: Mapping[str, Any]) -> bool:
    """True for the single-time-range ``daysOfWeek`` shape."""
    return "dayTimes" not in raw and (
        "daysOfWeek" in raw or "frequency" in raw
    )


def normalize_pattern(raw: Any) -> RecurrencePattern:
    """Build a ``RecurrencePattern`` from either supported input shape.

    Args:
        raw: A ``RecurrencePattern`` (returned unchanged) or a mapping in
            the current or the legacy shape.

    Returns:
        The normalized pattern.

    Raises:
        InvalidPatternError: If required fields are missing or malformed.
        InvalidRangeError: If the start date is after the end date.
        InvalidTimeOrderError: If a slot ends before it starts.
    """
    if isinstance(raw, RecurrencePattern):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidPatternError(
            f"Expected a mapping for the pattern, got {type(raw).__name__}"
        )

    if is_legacy_shape(raw):
        logger.debug("Normalizing legacy pattern shape")
        slots = _slots_from_legacy(raw)
    else:
        slots = _slots_from_day_times(raw.get("dayTimes") or ())

    return RecurrencePattern(
        start_date=parse_date(raw.get("startDate")),
        end_date=parse_date(raw.get("endDate")),
        slots=slots,
        location=raw.get("location") or "",
        location_details=raw.get("locationDetails") or "",
    )


def _lenient(parser, value: Any, field_name: str) -> Optional[Any]:
    if value is None or value == "":
        return None
    try:
        return parser(value)
    except ScheduleError as e:
        logger.warning("Ignoring unparsable %s: %s", field_name, e)
        return None


def _parse_flag(value: Any, field_name: str) -> bool:
    """Read a stored boolean flag; ``"true"``/``"false"`` strings are accepted."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in FLAG_STRINGS:
        return FLAG_STRINGS[value.strip().lower()]
    logger.warning("Ignoring unparsable %s flag: %r", field_name, value)
    return False


def session_from_dict(row: Mapping[str, Any]) -> SessionInstance:
    """Build a ``SessionInstance`` from a stored row.

    Never raises on bad field values: anything that cannot be parsed
    becomes ``None`` (or False for flags) so the row can still be carried
    around and flagged later.

    Raises:
        InvalidSessionError: If the row itself is not a mapping.
    """
    if not isinstance(row, Mapping):
        raise InvalidSessionError(
            f"Expected a mapping for each session, got {row!r}"
        )
    return SessionInstance(
        date=_lenient(parse_date, row.get("date"), "date"),
        start_time=_lenient(parse_time, row.get("startTime"), "start time"),
        end_time=_lenient(parse_time, row.get("endTime"), "end time"),
        location=row.get("location") or "",
        location_details=row.get("locationDetails") or "",
        is_one_off=_parse_flag(row.get("isOneOff"), "isOneOff"),
        is_cancelled=_parse_flag(row.get("isCancelled"), "isCancelled"),
    )


def sessions_from_dicts(rows: Iterable[Mapping[str, Any]]) -> list[SessionInstance]:
    return [session_from_dict(row) for row in rows]
