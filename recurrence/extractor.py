"""Recovery of a recurrence pattern from stored sessions.

This is the inverse of generation. Only pattern-governed sessions (not
one-offs) vote. Each weekday keeps the start/end combination it saw most
often; on a tie the combination that occurs first by date wins. The
result is lossy: a session whose times were edited by hand is simply
outvoted, not reported. Keep the raw list alongside when per-session
fidelity matters.
"""

import logging
from collections import Counter
from collections.abc import Hashable, Iterable
from typing import Optional

from .models import (
    ExtractedSchedule,
    SessionInstance,
    WeekdayTimeSlot,
    sort_sessions,
)

logger = logging.getLogger(__name__)


def _most_common(values: Iterable[Hashable]) -> Optional[Hashable]:
    """Return the most frequent value; ties go to the first one seen.

    ``values`` must already be in chronological order.
    """
    counts: Counter = Counter()
    first_seen: dict[Hashable, int] = {}
    for index, value in enumerate(values):
        counts[value] += 1
        first_seen.setdefault(value, index)

    if not counts:
        return None
    return max(counts, key=lambda value: (counts[value], -first_seen[value]))


class PatternExtractor:
    """Infers the best-fit ``RecurrencePattern`` behind a list of sessions."""

    def extract(self, sessions: Iterable[SessionInstance]) -> ExtractedSchedule:
        """Extract the recurring schedule from stored sessions.

        Args:
            sessions: Stored sessions in any order, including one-offs and
                cancelled sessions.

        Returns:
            The extracted schedule. ``has_schedule`` is False when there
            are no usable pattern-governed sessions.
        """
        candidates = []
        skipped = 0
        for session in sessions:
            if session.is_one_off:
                continue
            if not session.is_well_formed:
                skipped += 1
                continue
            # Cancelled sessions still vote; cancellation is only a status.
            candidates.append(session)

        if skipped:
            logger.info("Skipped %d malformed sessions during extraction", skipped)
        if not candidates:
            return ExtractedSchedule()

        candidates = sort_sessions(candidates)

        by_weekday: dict[int, list[SessionInstance]] = {}
        for session in candidates:
            by_weekday.setdefault(session.weekday, []).append(session)

        slots = []
        for weekday in sorted(by_weekday):
            start_time, end_time = _most_common(
                (session.start_time, session.end_time)
                for session in by_weekday[weekday]
            )
            slots.append(WeekdayTimeSlot(weekday, start_time, end_time))

        location = _most_common(s.location for s in candidates if s.location)
        details = _most_common(
            s.location_details for s in candidates if s.location_details
        )

        schedule = ExtractedSchedule(
            has_schedule=True,
            start_date=candidates[0].date,
            end_date=candidates[-1].date,
            slots=tuple(slots),
            location=location or "",
            location_details=details or "",
        )
        logger.debug(
            "Extracted %d weekday slots from %d sessions",
            len(slots), len(candidates),
        )
        return schedule


def extract_schedule(sessions: Iterable[SessionInstance]) -> ExtractedSchedule:
    """Shortcut for ``PatternExtractor().extract(sessions)``."""
    return PatternExtractor().extract(sessions)
