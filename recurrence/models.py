"""Data models for recurring session schedules."""

from dataclasses import dataclass, field, replace
from datetime import date, time
from typing import Any, Optional

from .exceptions import (
    DuplicateWeekdayError,
    InvalidPatternError,
    InvalidRangeError,
    InvalidTimeOrderError,
)

WEEKDAY_NAMES = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"
)
WEEKDAY_ABBREVIATIONS = tuple(name[:3] for name in WEEKDAY_NAMES)


def weekday_of(day: date) -> int:
    """Return the weekday of a date, 0 = Sunday through 6 = Saturday."""
    return day.isoweekday() % 7


def format_time(value: Optional[time]) -> str:
    """Format a time as 24h ``HH:MM``, or an empty string when missing."""
    return value.strftime("%H:%M") if value is not None else ""


def format_date(value: Optional[date]) -> str:
    return value.isoformat() if value is not None else ""


@dataclass(frozen=True)
class WeekdayTimeSlot:
    """A single weekly meeting rule."""

    weekday: int  # 0-6: Sunday-Saturday
    start_time: time
    end_time: time

    def __post_init__(self) -> None:
        if not 0 <= self.weekday <= 6:
            raise InvalidPatternError(
                f"Weekday must be 0-6 (Sun-Sat), got {self.weekday}"
            )
        if self.end_time <= self.start_time:
            raise InvalidTimeOrderError(
                f"End time {format_time(self.end_time)} must be after "
                f"start time {format_time(self.start_time)} "
                f"on {WEEKDAY_NAMES[self.weekday]}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "dayOfWeek": self.weekday,
            "startTime": format_time(self.start_time),
            "endTime": format_time(self.end_time),
        }


@dataclass(frozen=True)
class RecurrencePattern:
    """A date range plus the weekly slots that recur inside it.

    Slots are kept in the order they were supplied. At most one slot is
    allowed per weekday.
    """

    start_date: date
    end_date: date
    slots: tuple[WeekdayTimeSlot, ...] = field(default_factory=tuple)
    location: str = ""
    location_details: str = ""
    _by_weekday: dict[int, WeekdayTimeSlot] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "slots", tuple(self.slots))
        if self.start_date > self.end_date:
            raise InvalidRangeError(
                f"Start date {self.start_date} is after end date {self.end_date}"
            )
        by_weekday: dict[int, WeekdayTimeSlot] = {}
        for slot in self.slots:
            if slot.weekday in by_weekday:
                raise DuplicateWeekdayError(
                    f"More than one slot given for {WEEKDAY_NAMES[slot.weekday]}"
                )
            by_weekday[slot.weekday] = slot
        object.__setattr__(self, "_by_weekday", by_weekday)

    @property
    def is_active(self) -> bool:
        """True when at least one weekday is selected."""
        return bool(self.slots)

    def slots_by_weekday(self) -> dict[int, WeekdayTimeSlot]:
        """Weekday index built once at construction; do not mutate."""
        return self._by_weekday

    def slot_for(self, weekday: int) -> Optional[WeekdayTimeSlot]:
        return self._by_weekday.get(weekday)

    def to_dict(self) -> dict[str, Any]:
        return {
            "startDate": format_date(self.start_date),
            "endDate": format_date(self.end_date),
            "dayTimes": [slot.to_dict() for slot in self.slots],
            "location": self.location,
            "locationDetails": self.location_details,
        }


@dataclass(frozen=True)
class SessionInstance:
    """A single dated session, generated from a pattern or added by hand.

    Stored rows can be incomplete, so date and times are optional here;
    see ``is_well_formed``. Cancelled sessions keep their date and times.
    """

    date: Optional[date]
    start_time: Optional[time]
    end_time: Optional[time]
    location: str = ""
    location_details: str = ""
    is_one_off: bool = False
    is_cancelled: bool = False

    @property
    def weekday(self) -> Optional[int]:
        return weekday_of(self.date) if self.date is not None else None

    @property
    def is_complete(self) -> bool:
        """True when date, start time and end time are all present."""
        return (
            self.date is not None
            and self.start_time is not None
            and self.end_time is not None
        )

    @property
    def is_well_formed(self) -> bool:
        """True when complete and the end time is after the start time."""
        return self.is_complete and self.end_time > self.start_time

    def sort_key(self) -> tuple:
        """Order by date then start time; missing values sort last."""
        return (
            self.date is None,
            self.date or date.min,
            self.start_time is None,
            self.start_time or time.min,
        )

    def cancelled(self) -> "SessionInstance":
        return replace(self, is_cancelled=True)

    def restored(self) -> "SessionInstance":
        return replace(self, is_cancelled=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": format_date(self.date),
            "dayOfWeek": self.weekday,
            "startTime": format_time(self.start_time),
            "endTime": format_time(self.end_time),
            "location": self.location,
            "locationDetails": self.location_details,
            "isOneOff": self.is_one_off,
            "isCancelled": self.is_cancelled,
        }


@dataclass(frozen=True)
class ExtractedSchedule:
    """Best-fit recurrence pattern recovered from stored sessions."""

    has_schedule: bool = False
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    slots: tuple[WeekdayTimeSlot, ...] = field(default_factory=tuple)
    location: str = ""
    location_details: str = ""

    def to_pattern(self) -> RecurrencePattern:
        """Rebuild an editable pattern from the extracted schedule.

        Raises:
            InvalidPatternError: If no schedule was extracted.
        """
        if not self.has_schedule:
            raise InvalidPatternError("No recurring schedule to convert")
        return RecurrencePattern(
            start_date=self.start_date,
            end_date=self.end_date,
            slots=self.slots,
            location=self.location,
            location_details=self.location_details,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasSchedule": self.has_schedule,
            "startDate": format_date(self.start_date),
            "endDate": format_date(self.end_date),
            "dayTimes": [slot.to_dict() for slot in self.slots],
            "location": self.location,
            "locationDetails": self.location_details,
        }


def sort_sessions(sessions) -> list[SessionInstance]:
    """Return sessions ordered by date then start time (stable)."""
    return sorted(sessions, key=SessionInstance.sort_key)
