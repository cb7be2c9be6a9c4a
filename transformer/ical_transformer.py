"""iCalendar transformer for session lists."""

import hashlib
import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event

from recurrence.models import SessionInstance, format_time
from .base import BaseTransformer

logger = logging.getLogger(__name__)


class ICalTransformer(BaseTransformer):
    """Transformer that converts sessions to iCalendar format.

    Every session becomes its own VEVENT rather than one RRULE per slot,
    so one-off and cancelled sessions are represented exactly as stored.
    """

    PRODID = "-//Recurring Sessions//schedule2iCal//EN"
    UID_DOMAIN = "recurring-sessions"
    ONE_OFF_CATEGORY = "One-off"

    def __init__(self, timezone: Optional[str] = None) -> None:
        """Initialize the iCalendar transformer.

        Args:
            timezone: IANA timezone name attached to every event. When
                omitted, events use floating local time.
        """
        self._calendar: Optional[Calendar] = None
        self._timezone_name = timezone
        self._timezone = ZoneInfo(timezone) if timezone else None

    def _generate_uid(self, session: SessionInstance, calendar_name: str) -> str:
        """Generate a stable identifier for a session.

        Args:
            session: The session.
            calendar_name: Name of the calendar the session belongs to.

        Returns:
            Hex digest; ``transform`` adds the domain and any suffix.
        """
        unique_string = (
            f"{calendar_name}-{session.date}-{format_time(session.start_time)}-"
            f"{format_time(session.end_time)}-{session.is_one_off}-"
            f"{session.location}-{session.location_details}"
        )
        return hashlib.md5(unique_string.encode()).hexdigest()

    def _build_event(self, session: SessionInstance, calendar_name: str, uid: str) -> Event:
        ical_event = Event()
        start_datetime = datetime.combine(
            session.date, session.start_time, tzinfo=self._timezone
        )
        end_datetime = datetime.combine(
            session.date, session.end_time, tzinfo=self._timezone
        )

        ical_event.add("uid", uid)
        ical_event.add("dtstart", start_datetime)
        ical_event.add("dtend", end_datetime)
        ical_event.add("dtstamp", datetime.now(ZoneInfo("UTC")))
        ical_event.add("summary", calendar_name)

        if session.location:
            ical_event.add("location", session.location)
        if session.location_details:
            ical_event.add("description", session.location_details)
        if session.is_one_off:
            ical_event.add("categories", [self.ONE_OFF_CATEGORY])

        ical_event.add("status", "CANCELLED" if session.is_cancelled else "CONFIRMED")
        return ical_event

    def transform(
        self,
        sessions: list[SessionInstance],
        calendar_name: str = "Schedule"
    ) -> Calendar:
        """Transform sessions into iCalendar format.

        Sessions without a usable date or time range are skipped.

        Args:
            sessions: Ordered list of sessions to transform.
            calendar_name: Calendar name, also used as each event's summary.

        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", self.PRODID)
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        self._calendar.add("x-wr-calname", calendar_name)
        if self._timezone_name:
            self._calendar.add("x-wr-timezone", self._timezone_name)

        skipped = 0
        seen: dict[str, int] = {}
        for session in sessions:
            if not session.is_well_formed:
                skipped += 1
                continue
            digest = self._generate_uid(session, calendar_name)
            # Identical sessions get a numbered suffix so no event is merged away.
            seen[digest] = seen.get(digest, 0) + 1
            if seen[digest] > 1:
                digest = f"{digest}-{seen[digest]}"
            uid = f"{digest}@{self.UID_DOMAIN}"
            self._calendar.add_component(self._build_event(session, calendar_name, uid))

        if skipped:
            logger.warning("Skipped %d sessions without a valid date and time", skipped)

        return self._calendar

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        with open(output_path, "wb") as f:
            f.write(self._calendar.to_ical())
