"""
Tests for slot calculator.
"""

import pendulum

from freeslots.domain.models import TimeSlot, WorkingHours
from freeslots.domain.slot_calculator import SlotCalculator

TZ = "Asia/Yekaterinburg"


def _slot(start: str, end: str) -> TimeSlot:
    return TimeSlot(start=pendulum.parse(start, tz=TZ), end=pendulum.parse(end, tz=TZ))


def _hourly(day: str, first_hour: int, last_hour: int):
    return [
        _slot(f"{day} {hour:02d}:00", f"{day} {hour + 1:02d}:00")
        for hour in range(first_hour, last_hour)
    ]


class TestSlotCalculator:
    """Tests for SlotCalculator."""

    def setup_method(self):
        self.calculator = SlotCalculator(
            working_hours=WorkingHours(start_hour=9, end_hour=23, timezone=TZ)
        )

    def test_no_busy_times_keeps_every_candidate(self):
        candidates = _hourly("2024-07-15", 9, 23)

        free = self.calculator.find_free_slots(candidates, [])

        assert free == candidates

    def test_overlapping_candidates_are_excluded(self):
        """Slots touching a busy interval stay free, slots overlapping it do not."""
        candidates = _hourly("2024-07-15", 9, 12)
        busy = [_slot("2024-07-15 10:00", "2024-07-15 11:00")]

        free = self.calculator.find_free_slots(candidates, busy)

        assert free == [
            _slot("2024-07-15 09:00", "2024-07-15 10:00"),
            _slot("2024-07-15 11:00", "2024-07-15 12:00"),
        ]

    def test_partial_overlap_excludes_slot(self):
        candidates = _hourly("2024-07-15", 9, 12)
        busy = [_slot("2024-07-15 10:30", "2024-07-15 10:45")]

        free = self.calculator.find_free_slots(candidates, busy)

        assert _slot("2024-07-15 10:00", "2024-07-15 11:00") not in free
        assert len(free) == 2

    def test_busy_interval_spanning_several_slots(self):
        candidates = _hourly("2024-07-15", 9, 15)
        busy = [_slot("2024-07-15 09:30", "2024-07-15 12:10")]

        free = self.calculator.find_free_slots(candidates, busy)

        assert free == [
            _slot("2024-07-15 13:00", "2024-07-15 14:00"),
            _slot("2024-07-15 14:00", "2024-07-15 15:00"),
        ]

    def test_multiple_busy_intervals(self):
        candidates = _hourly("2024-07-15", 9, 14)
        busy = [
            _slot("2024-07-15 13:00", "2024-07-15 14:00"),
            _slot("2024-07-15 09:00", "2024-07-15 10:00"),
        ]

        free = self.calculator.find_free_slots(candidates, busy)

        assert [slot.start.hour for slot in free] == [10, 11, 12]

    def test_candidates_outside_working_hours_are_excluded(self):
        candidates = _hourly("2024-07-15", 7, 11)

        free = self.calculator.find_free_slots(candidates, [])

        assert [slot.start.hour for slot in free] == [9, 10]

    def test_busy_on_other_day_does_not_block(self):
        candidates = _hourly("2024-07-15", 9, 11)
        busy = [_slot("2024-07-16 09:00", "2024-07-16 11:00")]

        assert self.calculator.find_free_slots(candidates, busy) == candidates
