"""Edits applied to a session list before it is saved.

Each helper returns a new list; the input list is never modified.
"""

from collections.abc import Callable, Iterable
from dataclasses import replace

from .exceptions import IncompleteSessionError, SessionNotFoundError
from .models import SessionInstance, sort_sessions


def add_one_off(
    sessions: Iterable[SessionInstance], session: SessionInstance
) -> list[SessionInstance]:
    """Add a manually scheduled session, e.g. a makeup class.

    The new session is flagged as a one-off so later pattern edits keep it.
    """
    one_off = replace(session, is_one_off=True, is_cancelled=False)
    return sort_sessions([*sessions, one_off])


def _replace_first(
    sessions: Iterable[SessionInstance],
    target: SessionInstance,
    change: Callable[[SessionInstance], SessionInstance],
) -> list[SessionInstance]:
    result = list(sessions)
    for index, session in enumerate(result):
        if session == target:
            result[index] = change(session)
            return result
    raise SessionNotFoundError(
        f"No session on {target.date} at {target.start_time} to update"
    )


def cancel_session(
    sessions: Iterable[SessionInstance], target: SessionInstance
) -> list[SessionInstance]:
    """Mark ``target`` as cancelled; it keeps its date and times."""
    return _replace_first(sessions, target, SessionInstance.cancelled)


def restore_session(
    sessions: Iterable[SessionInstance], target: SessionInstance
) -> list[SessionInstance]:
    """Undo a cancellation."""
    return _replace_first(sessions, target, SessionInstance.restored)


def find_incomplete(sessions: Iterable[SessionInstance]) -> list[SessionInstance]:
    return [session for session in sessions if not session.is_complete]


def validate_for_save(sessions: Iterable[SessionInstance]) -> None:
    """Refuse a session list that has sessions without a date or time.

    Raises:
        IncompleteSessionError: Listing the offending sessions.
    """
    incomplete = find_incomplete(sessions)
    if incomplete:
        raise IncompleteSessionError(incomplete)
