"""
HTTP client for iCalendar feeds and the typed event parse step.
"""

import logging
from typing import List

import pendulum
import requests
from icalendar import Calendar
from pendulum import DateTime

from ..domain.exceptions import EventMalformed, FeedMalformed, FeedUnavailable
from ..domain.models import CalendarEvent

logger = logging.getLogger(__name__)

ICAL_DATETIME_FORMAT = "YYYYMMDD[T]HHmmss"


def parse_ical_datetime(value: str, timezone: str) -> DateTime:
    """
    Parse an iCalendar DATE-TIME value in the operational timezone.

    Accepts the floating form ``20250101T120000`` and the UTC form
    ``20250101T120000Z``. The UTC designator is stripped and the wall-clock
    fields are read as local time in ``timezone``; no conversion from UTC
    takes place.

    Raises:
        EventMalformed: If the value is in any other encoding
    """
    raw = value.strip().replace("Z", "")

    try:
        return pendulum.from_format(raw, ICAL_DATETIME_FORMAT, tz=timezone)
    except ValueError as e:
        raise EventMalformed(f"Unsupported date-time value: {value!r}") from e


def _property_value(component, name: str) -> str:
    """Return the raw serialized value of a date property."""
    prop = component.get(name)
    if prop is None:
        raise EventMalformed(f"Missing {name}")

    value = prop.to_ical()
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def parse_event(component, timezone: str) -> CalendarEvent:
    """
    Extract the two timestamps of a VEVENT into a CalendarEvent.

    Raises:
        EventMalformed: If DTSTART/DTEND is missing, unparsable, or start is after end
    """
    start = parse_ical_datetime(_property_value(component, "DTSTART"), timezone)
    end = parse_ical_datetime(_property_value(component, "DTEND"), timezone)

    if start > end:
        raise EventMalformed(f"Event starts at {start} after it ends at {end}")

    return CalendarEvent(start=start, end=end)


def parse_calendar(payload: bytes | str, timezone: str) -> List[CalendarEvent]:
    """
    Parse an iCalendar document into events.

    Individual malformed entries are logged and skipped.

    Raises:
        FeedMalformed: If the payload is not an iCalendar document at all
    """
    try:
        calendar = Calendar.from_ical(payload)
    except (ValueError, IndexError) as e:
        raise FeedMalformed(f"Calendar feed could not be parsed: {e}") from e

    events: List[CalendarEvent] = []
    skipped = 0

    for component in calendar.walk("VEVENT"):
        try:
            events.append(parse_event(component, timezone))
        except EventMalformed as e:
            skipped += 1
            logger.warning("Skipping calendar entry %s: %s", component.get("UID", "?"), e)

    logger.debug("Parsed %d calendar events (%d skipped)", len(events), skipped)
    return events


class IcsFeedClient:
    """
    Client fetching busy events from a remote iCalendar feed.

    Every call performs exactly one GET; nothing is cached.
    """

    DEFAULT_USER_AGENT = "Mozilla/5.0"

    def __init__(
        self,
        url: str,
        timezone: str,
        timeout_seconds: float = 10,
        user_agent: str = DEFAULT_USER_AGENT
    ):
        """
        Initialize the feed client.

        Args:
            url: Address of the .ics feed
            timezone: IANA timezone the event timestamps are read in
            timeout_seconds: Upper bound for connect and read
            user_agent: Client identification; some hosts reject requests without one
        """
        self.url = url
        self.timezone = timezone
        self.timeout_seconds = timeout_seconds
        self.headers = {
            "User-Agent": user_agent,
            "Accept": "text/calendar"
        }

    def fetch_events(self) -> List[CalendarEvent]:
        """
        Fetch and parse the feed.

        Raises:
            FeedUnavailable: On network failure, timeout or non-2xx response
            FeedMalformed: If the body is not a calendar
        """
        payload = self.fetch_payload()
        return parse_calendar(payload, self.timezone)

    def fetch_payload(self) -> bytes:
        logger.debug("Fetching calendar feed")

        try:
            response = requests.get(
                self.url,
                headers=self.headers,
                timeout=self.timeout_seconds
            )
            response.raise_for_status()

        except requests.exceptions.RequestException as e:
            raise FeedUnavailable(f"Failed to fetch calendar feed: {e}") from e

        return response.content
