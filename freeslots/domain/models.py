"""
Domain models for slots, calendar events and working hours.
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Dict, List, Tuple

from pendulum import DateTime


@dataclass(frozen=True)
class TimeSlot:
    """
    Represents an immutable half-open time interval [start, end).

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def overlaps(self, other: "TimeSlot") -> bool:
        """Check if this slot overlaps with another (touching endpoints do not count)."""
        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f"{self.start.format('DD.MM.YYYY HH:mm')} - {self.end.format('HH:mm')}"


@dataclass(frozen=True)
class CalendarEvent:
    """
    Timing of a single entry read from the calendar feed.

    Unlike TimeSlot, a zero-length event is allowed here; the normalizer
    decides what survives.
    """
    start: DateTime
    end: DateTime


@dataclass(frozen=True)
class WorkingHours:
    """
    The daily window in which slots and busy events are considered.
    """
    start_hour: int
    end_hour: int
    timezone: str = "Asia/Yekaterinburg"

    @property
    def start_time(self) -> time:
        return time(hour=self.start_hour)

    @property
    def end_time(self) -> time:
        return time(hour=self.end_hour)

    def window_for_day(self, day: DateTime) -> TimeSlot:
        """
        Get the working window for the calendar day of ``day``.
        """
        start = day.set(hour=self.start_hour, minute=0, second=0, microsecond=0)
        end = day.set(hour=self.end_hour, minute=0, second=0, microsecond=0)

        return TimeSlot(start=start, end=end)

    def contains(self, slot: TimeSlot) -> bool:
        """Check that the slot's hour bounds fall within [start_hour, end_hour]."""
        return slot.start.hour >= self.start_hour and slot.end.hour <= self.end_hour

    def clamp_start(self, moment: DateTime) -> DateTime:
        """
        Move an interval start into the working window.

        Before opening -> same day at opening; after closing -> next day at opening.
        """
        current = moment.time()

        if current < self.start_time:
            return self._at_hour(moment, self.start_hour)
        if current > self.end_time:
            return self._at_hour(moment.add(days=1), self.start_hour)
        return moment

    def clamp_end(self, moment: DateTime) -> DateTime:
        """
        Move an interval end into the working window.

        After closing -> same day at closing; before opening -> previous day at closing.
        """
        current = moment.time()

        if current > self.end_time:
            return self._at_hour(moment, self.end_hour)
        if current < self.start_time:
            return self._at_hour(moment.subtract(days=1), self.end_hour)
        return moment

    @staticmethod
    def _at_hour(moment: DateTime, hour: int) -> DateTime:
        return moment.set(hour=hour, minute=0, second=0, microsecond=0)


@dataclass
class FreeSlotReport:
    """
    Free time grouped by calendar day, adjacent slots already merged.

    ``days`` keeps insertion order, which is ascending by date.
    """
    horizon_days: int
    days: Dict[date, List[Tuple[str, str]]] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.days
