"""Regeneration of an edited schedule without losing one-off sessions."""

import logging
from collections.abc import Iterable
from typing import Any, Optional

from .generator import PatternGenerator
from .models import SessionInstance, sort_sessions

logger = logging.getLogger(__name__)


class ScheduleReconciler:
    """Builds the replacement session list after a pattern edit.

    Sessions fall into two buckets:

    * pattern-governed sessions (``is_one_off`` False) are thrown away and
      regenerated from the new pattern. This is a full replace, not a
      diff, so a cancellation on a pattern-governed date is forgotten
      when the pattern is saved again.
    * one-off sessions are protected and returned exactly as stored,
      including their cancelled flag.

    The asymmetry is intentional. The returned list is the complete
    replacement set, so the caller can swap old for new in one
    transaction.
    """

    def __init__(self, generator: Optional[PatternGenerator] = None) -> None:
        self._generator = generator or PatternGenerator()

    def reconcile(
        self,
        existing: Iterable[SessionInstance],
        pattern: Any = None,
    ) -> list[SessionInstance]:
        """Merge one-off sessions with sessions generated from ``pattern``.

        Args:
            existing: Currently stored sessions.
            pattern: The edited pattern (``RecurrencePattern`` or a mapping
                accepted by ``normalize_pattern``). When None the stored
                pattern-governed sessions are kept as they are.

        Returns:
            The full replacement list, sorted by date then start time.
            Calling again with this list and the same pattern returns an
            identical list.

        Raises:
            InvalidRangeError: If the pattern's start date is after its
                end date.
            InvalidTimeOrderError: If a slot ends before it starts.
            InstanceLimitExceededError: If the pattern generates too many
                sessions.
        """
        existing = list(existing)
        one_offs = [session for session in existing if session.is_one_off]

        if pattern is None:
            pattern_sessions = [s for s in existing if not s.is_one_off]
        else:
            pattern_sessions = self._generator.generate(pattern)
            logger.info(
                "Replacing %d pattern sessions with %d generated, keeping %d one-off",
                len(existing) - len(one_offs), len(pattern_sessions), len(one_offs),
            )

        # Stable sort: generated sessions precede one-offs at the same
        # date and time, which keeps the result idempotent.
        return sort_sessions(pattern_sessions + one_offs)


def reconcile_sessions(
    existing: Iterable[SessionInstance],
    pattern: Any = None,
    max_instances: Optional[int] = None,
) -> list[SessionInstance]:
    """Shortcut for ``ScheduleReconciler().reconcile(existing, pattern)``."""
    generator = PatternGenerator(max_instances)
    return ScheduleReconciler(generator).reconcile(existing, pattern)
