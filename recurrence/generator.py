"""Expansion of a recurrence pattern into dated sessions."""

import logging
from datetime import timedelta
from typing import Any, Optional

from .adapters import normalize_pattern
from .exceptions import InstanceLimitExceededError
from .models import SessionInstance, weekday_of

logger = logging.getLogger(__name__)


class PatternGenerator:
    """Turns a ``RecurrencePattern`` into an ordered list of sessions.

    The walk visits every date in the range once. Slots are indexed by
    weekday before the walk, so each date costs a single lookup.
    """

    MAX_INSTANCES = 1000  # about 20 years of one weekly session

    def __init__(self, max_instances: Optional[int] = None) -> None:
        """Initialize the generator.

        Args:
            max_instances: Maximum number of sessions one call may emit
                (default: ``MAX_INSTANCES``).
        """
        if max_instances is None:
            max_instances = self.MAX_INSTANCES
        if max_instances < 1:
            raise ValueError("max_instances must be at least 1")
        self._max_instances = max_instances

    @property
    def max_instances(self) -> int:
        return self._max_instances

    def generate(self, pattern: Any) -> list[SessionInstance]:
        """Generate one session per matching date in the pattern's range.

        Args:
            pattern: A ``RecurrencePattern`` or a mapping accepted by
                ``normalize_pattern``.

        Returns:
            Sessions sorted by date. Empty when no weekday is selected or
            no date in the range falls on a selected weekday.

        Raises:
            InvalidRangeError: If the start date is after the end date.
            InvalidTimeOrderError: If a slot ends before it starts.
            InstanceLimitExceededError: If more than ``max_instances``
                sessions would be emitted.
        """
        pattern = normalize_pattern(pattern)
        if not pattern.is_active:
            logger.debug("Pattern has no weekdays selected, nothing to generate")
            return []

        slots = pattern.slots_by_weekday()
        sessions: list[SessionInstance] = []
        day_count = (pattern.end_date - pattern.start_date).days + 1

        for offset in range(day_count):
            current = pattern.start_date + timedelta(days=offset)
            slot = slots.get(weekday_of(current))
            if slot is not None:
                if len(sessions) >= self._max_instances:
                    raise InstanceLimitExceededError(self._max_instances)
                sessions.append(SessionInstance(
                    date=current,
                    start_time=slot.start_time,
                    end_time=slot.end_time,
                    location=pattern.location,
                    location_details=pattern.location_details,
                ))

        logger.debug(
            "Generated %d sessions between %s and %s",
            len(sessions), pattern.start_date, pattern.end_date,
        )
        return sessions


def generate_sessions(
    pattern: Any, max_instances: Optional[int] = None
) -> list[SessionInstance]:
    """Shortcut for ``PatternGenerator(max_instances).generate(pattern)``."""
    return PatternGenerator(max_instances).generate(pattern)
