"""
Generation of the candidate slot grid over the look-ahead horizon.
"""

from typing import List

import pendulum
from pendulum import DateTime

from .models import TimeSlot, WorkingHours


class SlotGridGenerator:
    """
    Produces fixed-duration candidate slots for every day of the horizon.

    Algorithm:
    1. Take today (in the operational timezone) and the next ``horizon_days - 1`` days
    2. Start each day at the later of the working-day start or the next full hour after ``now``
    3. Emit back-to-back slots until the next one would run past the working-day end
    """

    def __init__(
        self,
        working_hours: WorkingHours,
        horizon_days: int = 7,
        slot_duration_minutes: int = 60
    ):
        self.working_hours = working_hours
        self.horizon_days = horizon_days
        self.slot_duration_minutes = slot_duration_minutes

    def generate(self, now: DateTime | None = None) -> List[TimeSlot]:
        """
        Generate all candidate slots.

        Args:
            now: Reference moment; defaults to the current time in the working-hours timezone

        Returns:
            Slots ordered by start time
        """
        tz = self.working_hours.timezone
        now = pendulum.now(tz) if now is None else now.in_timezone(tz)

        earliest_start = self._next_full_hour(now)
        today = now.start_of("day")

        slots: List[TimeSlot] = []

        for offset in range(self.horizon_days):
            day = today.add(days=offset)
            slots.extend(self._slots_for_day(day, earliest_start))

        return slots

    def _slots_for_day(self, day: DateTime, earliest_start: DateTime) -> List[TimeSlot]:
        """
        Fill one day's working window with back-to-back slots.

        A slot that would only partially fit is dropped, not truncated.
        """
        window = self.working_hours.window_for_day(day)
        slots: List[TimeSlot] = []

        slot_start = max(window.start, earliest_start)

        while slot_start < window.end:
            slot_end = slot_start.add(minutes=self.slot_duration_minutes)
            if slot_end > window.end:
                break

            slots.append(TimeSlot(start=slot_start, end=slot_end))
            slot_start = slot_end

        return slots

    @staticmethod
    def _next_full_hour(moment: DateTime) -> DateTime:
        """Truncate to the hour and step one hour forward (10:00 -> 11:00, 10:25 -> 11:00)."""
        return moment.start_of("hour").add(hours=1)
