"""
Normalization of raw calendar events into busy intervals.
"""

from typing import Iterable, List

from .models import CalendarEvent, TimeSlot, WorkingHours


class BusyIntervalNormalizer:
    """
    Clips calendar events to working hours.

    Events outside working hours must not block time inside them, and an
    event crossing a boundary only blocks the part within the window.
    Events spanning more than one day boundary are not split per day.
    """

    def __init__(self, working_hours: WorkingHours):
        self.working_hours = working_hours

    def normalize(self, events: Iterable[CalendarEvent]) -> List[TimeSlot]:
        """
        Convert events to busy intervals in the working-hours timezone.

        Events that collapse to an empty or inverted range are discarded.
        """
        busy: List[TimeSlot] = []

        for event in events:
            interval = self.normalize_event(event)
            if interval is not None:
                busy.append(interval)

        return busy

    def normalize_event(self, event: CalendarEvent) -> TimeSlot | None:
        tz = self.working_hours.timezone
        start = event.start.in_timezone(tz)
        end = event.end.in_timezone(tz)

        if start > end:
            return None

        clipped_start = self.working_hours.clamp_start(start)
        clipped_end = self.working_hours.clamp_end(end)

        if clipped_start >= clipped_end:
            return None

        return TimeSlot(start=clipped_start, end=clipped_end)
