"""
Domain-specific exception hierarchy for the availability pipeline.
"""


class AvailabilityError(Exception):
    """Base class for all application-level errors."""


class FeedUnavailable(AvailabilityError):
    """Raised when the calendar feed cannot be fetched (transport, timeout, non-2xx)."""


class FeedMalformed(AvailabilityError):
    """Raised when the feed body is not a parsable iCalendar document."""


class EventMalformed(AvailabilityError):
    """Raised for a single calendar entry with an unparsable or inverted timestamp."""
