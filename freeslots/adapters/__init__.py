"""
Adapters layer - External integrations (iCalendar feeds).
"""

from .ics_feed_client import IcsFeedClient, parse_calendar, parse_ical_datetime
from .mock_feed_client import MockFeedClient

__all__ = ["IcsFeedClient", "MockFeedClient", "parse_calendar", "parse_ical_datetime"]
