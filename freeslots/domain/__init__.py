"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import AvailabilityError, EventMalformed, FeedMalformed, FeedUnavailable
from .models import CalendarEvent, FreeSlotReport, TimeSlot, WorkingHours
from .normalizer import BusyIntervalNormalizer
from .report_formatter import ReportFormatter, build_report
from .slot_calculator import SlotCalculator
from .slot_grid import SlotGridGenerator

__all__ = [
    "AvailabilityError",
    "BusyIntervalNormalizer",
    "CalendarEvent",
    "EventMalformed",
    "FeedMalformed",
    "FeedUnavailable",
    "FreeSlotReport",
    "ReportFormatter",
    "SlotCalculator",
    "SlotGridGenerator",
    "TimeSlot",
    "WorkingHours",
    "build_report",
]
