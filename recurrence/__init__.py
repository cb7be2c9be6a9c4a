"""Recurring session scheduling: generation, extraction and reconciliation."""

from .adapters import normalize_pattern, session_from_dict, sessions_from_dicts
from .editing import (
    add_one_off,
    cancel_session,
    find_incomplete,
    restore_session,
    validate_for_save,
)
from .exceptions import (
    DuplicateWeekdayError,
    IncompleteSessionError,
    InstanceLimitExceededError,
    InvalidPatternError,
    InvalidRangeError,
    InvalidSessionError,
    InvalidTimeOrderError,
    ScheduleError,
    SessionNotFoundError,
)
from .extractor import PatternExtractor, extract_schedule
from .formatting import format_date_range, format_schedule_summary
from .generator import PatternGenerator, generate_sessions
from .models import (
    ExtractedSchedule,
    RecurrencePattern,
    SessionInstance,
    WeekdayTimeSlot,
)
from .reconciler import ScheduleReconciler, reconcile_sessions

__all__ = [
    "DuplicateWeekdayError",
    "ExtractedSchedule",
    "IncompleteSessionError",
    "InstanceLimitExceededError",
    "InvalidPatternError",
    "InvalidRangeError",
    "InvalidSessionError",
    "InvalidTimeOrderError",
    "PatternExtractor",
    "PatternGenerator",
    "RecurrencePattern",
    "ScheduleError",
    "ScheduleReconciler",
    "SessionInstance",
    "SessionNotFoundError",
    "WeekdayTimeSlot",
    "add_one_off",
    "cancel_session",
    "extract_schedule",
    "find_incomplete",
    "format_date_range",
    "format_schedule_summary",
    "generate_sessions",
    "normalize_pattern",
    "reconcile_sessions",
    "restore_session",
    "session_from_dict",
    "sessions_from_dicts",
    "validate_for_save",
]
