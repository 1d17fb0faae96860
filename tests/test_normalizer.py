"""
Tests for busy interval normalization.
"""

import pendulum

from freeslots.domain.models import CalendarEvent, TimeSlot, WorkingHours
from freeslots.domain.normalizer import BusyIntervalNormalizer

TZ = "Asia/Yekaterinburg"


def _dt(value: str):
    return pendulum.parse(value, tz=TZ)


def _event(start: str, end: str) -> CalendarEvent:
    return CalendarEvent(start=_dt(start), end=_dt(end))


class TestBusyIntervalNormalizer:
    """Tests for BusyIntervalNormalizer."""

    def setup_method(self):
        self.normalizer = BusyIntervalNormalizer(
            WorkingHours(start_hour=9, end_hour=23, timezone=TZ)
        )

    def test_event_inside_working_hours_is_kept(self):
        busy = self.normalizer.normalize([_event("2024-07-15 12:00", "2024-07-15 13:30")])

        assert busy == [TimeSlot(start=_dt("2024-07-15 12:00"), end=_dt("2024-07-15 13:30"))]

    def test_start_before_opening_is_clipped(self):
        busy = self.normalizer.normalize([_event("2024-07-15 07:00", "2024-07-15 10:00")])

        assert busy == [TimeSlot(start=_dt("2024-07-15 09:00"), end=_dt("2024-07-15 10:00"))]

    def test_event_before_opening_is_dropped(self):
        busy = self.normalizer.normalize([_event("2024-07-15 06:00", "2024-07-15 08:00")])

        assert busy == []

    def test_event_crossing_midnight_is_clipped_to_closing(self):
        busy = self.normalizer.normalize([_event("2024-07-15 22:00", "2024-07-16 02:00")])

        assert busy == [TimeSlot(start=_dt("2024-07-15 22:00"), end=_dt("2024-07-15 23:00"))]

    def test_event_after_closing_is_dropped(self):
        busy = self.normalizer.normalize([_event("2024-07-15 23:30", "2024-07-15 23:50")])

        assert busy == []

    def test_end_after_closing_is_clipped(self):
        busy = self.normalizer.normalize([_event("2024-07-15 21:00", "2024-07-15 23:59")])

        assert busy == [TimeSlot(start=_dt("2024-07-15 21:00"), end=_dt("2024-07-15 23:00"))]

    def test_zero_length_event_is_dropped(self):
        busy = self.normalizer.normalize([_event("2024-07-15 12:00", "2024-07-15 12:00")])

        assert busy == []

    def test_inverted_event_is_dropped(self):
        event = CalendarEvent(start=_dt("2024-07-15 14:00"), end=_dt("2024-07-15 12:00"))

        assert self.normalizer.normalize([event]) == []

    def test_event_in_other_timezone_is_converted(self):
        event = CalendarEvent(
            start=pendulum.datetime(2024, 7, 15, 5, 0, tz="UTC"),
            end=pendulum.datetime(2024, 7, 15, 6, 0, tz="UTC"),
        )

        busy = self.normalizer.normalize([event])

        assert busy == [TimeSlot(start=_dt("2024-07-15 10:00"), end=_dt("2024-07-15 11:00"))]

    def test_only_valid_events_survive(self):
        busy = self.normalizer.normalize([
            _event("2024-07-15 06:00", "2024-07-15 08:00"),
            _event("2024-07-15 10:00", "2024-07-15 11:00"),
            _event("2024-07-15 23:10", "2024-07-15 23:20"),
        ])

        assert len(busy) == 1
        assert busy[0].start == _dt("2024-07-15 10:00")
