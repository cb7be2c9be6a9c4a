"""Tests for the scheduling data models."""

import copy
from dataclasses import FrozenInstanceError, replace
from datetime import date, time

import pytest

from recurrence.exceptions import (
    DuplicateWeekdayError,
    InvalidPatternError,
    InvalidRangeError,
    InvalidTimeOrderError,
)
from recurrence.models import (
    ExtractedSchedule,
    RecurrencePattern,
    SessionInstance,
    WeekdayTimeSlot,
    sort_sessions,
    weekday_of,
)

from .helpers import FRIDAY, MONDAY, SUNDAY, WEDNESDAY, make_session


class TestWeekdayNumbering:
    """Weekdays are numbered Sunday=0 through Saturday=6."""

    def test_sunday_is_zero(self):
        assert weekday_of(date(2026, 3, 1)) == SUNDAY

    def test_monday_is_one(self):
        assert weekday_of(date(2026, 3, 2)) == MONDAY

    def test_saturday_is_six(self):
        assert weekday_of(date(2026, 3, 7)) == 6


class TestWeekdayTimeSlot:

    def test_end_before_start_is_rejected(self):
        with pytest.raises(InvalidTimeOrderError):
            WeekdayTimeSlot(MONDAY, time(11, 30), time(10, 0))

    def test_equal_times_are_rejected(self):
        with pytest.raises(InvalidTimeOrderError):
            WeekdayTimeSlot(MONDAY, time(10, 0), time(10, 0))

    @pytest.mark.parametrize("weekday", [-1, 7])
    def test_weekday_out_of_range_is_rejected(self, weekday):
        with pytest.raises(InvalidPatternError):
            WeekdayTimeSlot(weekday, time(10, 0), time(11, 0))

    def test_to_dict_uses_row_shape(self):
        slot = WeekdayTimeSlot(WEDNESDAY, time(9, 5), time(10, 0))
        assert slot.to_dict() == {
            "dayOfWeek": 3, "startTime": "09:05", "endTime": "10:00"
        }


class TestRecurrencePattern:

    def test_start_after_end_is_rejected(self):
        with pytest.raises(InvalidRangeError):
            RecurrencePattern(date(2026, 3, 10), date(2026, 3, 1))

    def test_same_start_and_end_is_allowed(self):
        pattern = RecurrencePattern(date(2026, 3, 2), date(2026, 3, 2))
        assert pattern.start_date == pattern.end_date

    def test_two_slots_on_same_weekday_are_rejected(self):
        with pytest.raises(DuplicateWeekdayError):
            RecurrencePattern(
                date(2026, 3, 1),
                date(2026, 3, 31),
                slots=[
                    WeekdayTimeSlot(MONDAY, time(10, 0), time(11, 0)),
                    WeekdayTimeSlot(MONDAY, time(14, 0), time(15, 0)),
                ],
            )

    def test_slots_are_stored_as_tuple_in_given_order(self):
        wednesday = WeekdayTimeSlot(WEDNESDAY, time(10, 0), time(11, 0))
        monday = WeekdayTimeSlot(MONDAY, time(10, 0), time(11, 0))
        pattern = RecurrencePattern(
            date(2026, 3, 1), date(2026, 3, 31), slots=[wednesday, monday]
        )
        assert pattern.slots == (wednesday, monday)

    def test_slot_lookup_by_weekday(self, mon_wed_pattern):
        assert mon_wed_pattern.slot_for(WEDNESDAY).start_time == time(10, 0)
        assert mon_wed_pattern.slot_for(SUNDAY) is None

    def test_weekday_index_is_built_once(self, mon_wed_pattern):
        index = mon_wed_pattern.slots_by_weekday()

        assert mon_wed_pattern.slots_by_weekday() is index
        assert sorted(index) == [MONDAY, WEDNESDAY]
        assert all(mon_wed_pattern.slot_for(day) is slot for day, slot in index.items())

    def test_weekday_index_follows_replace_and_copy(self, mon_wed_pattern):
        friday = WeekdayTimeSlot(FRIDAY, time(9, 0), time(10, 0))
        edited = replace(mon_wed_pattern, slots=(friday,))

        assert edited.slot_for(FRIDAY) is friday
        assert edited.slot_for(MONDAY) is None
        assert copy.deepcopy(mon_wed_pattern) == mon_wed_pattern
        assert copy.deepcopy(mon_wed_pattern).slot_for(MONDAY) == mon_wed_pattern.slot_for(MONDAY)

    def test_is_active_requires_slots(self, mon_wed_pattern):
        assert mon_wed_pattern.is_active
        assert not RecurrencePattern(date(2026, 3, 1), date(2026, 3, 2)).is_active


class TestSessionInstance:

    def test_is_immutable(self):
        session = make_session("2026-03-02")
        with pytest.raises(FrozenInstanceError):
            session.is_cancelled = True

    def test_cancelled_keeps_date_and_times(self):
        session = make_session("2026-03-02")
        cancelled = session.cancelled()
        assert cancelled.is_cancelled
        assert (cancelled.date, cancelled.start_time, cancelled.end_time) == (
            session.date, session.start_time, session.end_time
        )
        assert not session.is_cancelled

    def test_missing_fields_are_not_complete(self):
        session = SessionInstance(date=None, start_time=time(10, 0), end_time=time(11, 0))
        assert not session.is_complete
        assert not session.is_well_formed
        assert session.weekday is None

    def test_reversed_times_are_complete_but_not_well_formed(self):
        session = make_session("2026-03-02", "12:00", "11:00")
        assert session.is_complete
        assert not session.is_well_formed

    def test_sort_places_missing_dates_last(self):
        undated = SessionInstance(date=None, start_time=None, end_time=None)
        later = make_session("2026-03-04")
        earlier_afternoon = make_session("2026-03-02", "14:00", "15:00")
        earlier_morning = make_session("2026-03-02", "09:00", "10:00")

        ordered = sort_sessions([undated, later, earlier_afternoon, earlier_morning])

        assert ordered == [earlier_morning, earlier_afternoon, later, undated]

    def test_to_dict_uses_row_shape(self):
        session = make_session(
            "2026-03-02", location="Hall", location_details="Door 3", is_one_off=True
        )
        assert session.to_dict() == {
            "date": "2026-03-02",
            "dayOfWeek": 1,
            "startTime": "10:00",
            "endTime": "11:30",
            "location": "Hall",
            "locationDetails": "Door 3",
            "isOneOff": True,
            "isCancelled": False,
        }


class TestExtractedSchedule:

    def test_default_has_no_schedule(self):
        schedule = ExtractedSchedule()
        assert not schedule.has_schedule
        assert schedule.slots == ()
        assert schedule.start_date is None

    def test_to_pattern_without_schedule_is_rejected(self):
        with pytest.raises(InvalidPatternError):
            ExtractedSchedule().to_pattern()

    def test_to_pattern_copies_fields(self, mon_wed_pattern):
        schedule = ExtractedSchedule(
            has_schedule=True,
            start_date=mon_wed_pattern.start_date,
            end_date=mon_wed_pattern.end_date,
            slots=mon_wed_pattern.slots,
            location=mon_wed_pattern.location,
        )
        assert schedule.to_pattern() == mon_wed_pattern
