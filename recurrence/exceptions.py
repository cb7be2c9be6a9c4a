"""Errors raised by the scheduling engine."""


class ScheduleError(ValueError):
    """Base class for all scheduling errors."""


class InvalidRangeError(ScheduleError):
    """Start date is after end date."""


class InvalidTimeOrderError(ScheduleError):
    """A slot's end time is not after its start time."""


class InvalidPatternError(ScheduleError):
    """A recurrence pattern could not be built from the supplied data."""


class DuplicateWeekdayError(InvalidPatternError):
    """More than one slot was supplied for the same weekday."""


class InvalidSessionError(ScheduleError):
    """A stored session row is not a mapping."""


class InstanceLimitExceededError(ScheduleError):
    """Generation would emit more sessions than the configured cap."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"Pattern generates more than {limit} sessions; "
            "narrow the date range or raise the limit"
        )
        self.limit = limit


class SessionNotFoundError(ScheduleError):
    """The session to edit is not part of the instance list."""


class IncompleteSessionError(ScheduleError):
    """One or more sessions are missing a date or a time."""

    def __init__(self, sessions: list) -> None:
        super().__init__(
            f"{len(sessions)} session(s) are missing a date, start time or end time"
        )
        self.sessions = sessions
