"""Tests for human-readable schedule descriptions."""

from datetime import date, time

import pytest

from recurrence.extractor import extract_schedule
from recurrence.generator import generate_sessions
from recurrence.formatting import (
    NO_SCHEDULE_TEXT,
    format_date_range,
    format_schedule_summary,
    format_session,
    format_time_12h,
)
from recurrence.models import ExtractedSchedule, RecurrencePattern, WeekdayTimeSlot

from .helpers import FRIDAY, MONDAY, SUNDAY, WEDNESDAY, make_session


class TestTime:

    @pytest.mark.parametrize("value, expected", [
        (time(0, 0), "12:00 AM"),
        (time(9, 5), "9:05 AM"),
        (time(12, 0), "12:00 PM"),
        (time(13, 30), "1:30 PM"),
        (time(23, 59), "11:59 PM"),
    ])
    def test_12h_format(self, value, expected):
        assert format_time_12h(value) == expected


class TestScheduleSummary:

    def test_shared_times(self, mon_wed_pattern):
        assert format_schedule_summary(mon_wed_pattern) == (
            "Mondays and Wednesdays, 10:00 AM–11:30 AM"
        )

    def test_single_day(self, tuesday_pattern):
        assert format_schedule_summary(tuesday_pattern) == "Tuesdays, 6:00 PM–7:00 PM"

    def test_three_days(self):
        pattern = RecurrencePattern(
            date(2026, 3, 1),
            date(2026, 3, 31),
            slots=[WeekdayTimeSlot(day, time(9, 0), time(10, 0)) for day in (FRIDAY, MONDAY, WEDNESDAY)],
        )
        assert format_schedule_summary(pattern) == (
            "Mondays, Wednesdays and Fridays, 9:00 AM–10:00 AM"
        )

    def test_distinct_times_sunday_first(self):
        pattern = RecurrencePattern(
            date(2026, 3, 1),
            date(2026, 3, 31),
            slots=[
                WeekdayTimeSlot(MONDAY, time(10, 0), time(11, 30)),
                WeekdayTimeSlot(SUNDAY, time(14, 0), time(15, 0)),
            ],
        )
        assert format_schedule_summary(pattern) == (
            "Sundays 2:00 PM–3:00 PM, Mondays 10:00 AM–11:30 AM"
        )

    def test_order_does_not_depend_on_slot_order(self, mon_wed_pattern):
        reversed_pattern = RecurrencePattern(
            mon_wed_pattern.start_date,
            mon_wed_pattern.end_date,
            slots=tuple(reversed(mon_wed_pattern.slots)),
        )
        assert format_schedule_summary(reversed_pattern) == format_schedule_summary(mon_wed_pattern)

    def test_extracted_schedule(self, mon_wed_pattern):
        schedule = extract_schedule(generate_sessions(mon_wed_pattern))
        assert format_schedule_summary(schedule) == format_schedule_summary(mon_wed_pattern)

    def test_no_schedule(self):
        assert format_schedule_summary(ExtractedSchedule()) == NO_SCHEDULE_TEXT

    def test_pattern_without_slots(self):
        pattern = RecurrencePattern(date(2026, 3, 1), date(2026, 3, 31))
        assert format_schedule_summary(pattern) == NO_SCHEDULE_TEXT


class TestDateRange:

    def test_range(self):
        assert format_date_range(date(2026, 3, 2), date(2026, 5, 30)) == (
            "Mar 2, 2026 – May 30, 2026"
        )

    @pytest.mark.parametrize("start, end", [
        (None, date(2026, 3, 2)),
        (date(2026, 3, 2), None),
        (None, None),
    ])
    def test_missing_end_gives_empty_text(self, start, end):
        assert format_date_range(start, end) == ""


class TestSessionLine:

    def test_regular_session(self):
        assert format_session(make_session("2026-03-02")) == "Mon Mar 2, 2026  10:00-11:30"

    def test_flags_are_shown(self):
        session = make_session("2026-03-07", is_one_off=True, is_cancelled=True)
        assert format_session(session) == (
            "Sat Mar 7, 2026  10:00-11:30  [one-off]  [cancelled]"
        )
