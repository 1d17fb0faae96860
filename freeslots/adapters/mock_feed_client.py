"""
Local-file feed client for working without network access.
"""

from pathlib import Path
from typing import List

from ..domain.exceptions import FeedUnavailable
from ..domain.models import CalendarEvent
from .ics_feed_client import parse_calendar


class MockFeedClient:
    """
    Reads an .ics file from disk instead of fetching it over HTTP.

    Parsing rules and errors are the same as IcsFeedClient, so it can stand
    in for the real client in the CLI (``--ics-file``) and in tests.
    """

    def __init__(self, path: Path, timezone: str):
        """
        Initialize the mock client.

        Args:
            path: Path to an iCalendar file
            timezone: IANA timezone the event timestamps are read in
        """
        self.path = Path(path)
        self.timezone = timezone

    def fetch_events(self) -> List[CalendarEvent]:
        """Load events from the file; re-read on every call."""
        try:
            payload = self.path.read_bytes()
        except OSError as e:
            raise FeedUnavailable(f"Could not read calendar file {self.path}: {e}") from e

        return parse_calendar(payload, self.timezone)
