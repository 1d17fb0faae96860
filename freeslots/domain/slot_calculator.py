"""
Core business logic for resolving free slots.

Pure domain logic without any external dependencies (no HTTP, no I/O).
"""

from typing import List, Sequence

from .models import TimeSlot, WorkingHours


class SlotCalculator:
    """
    Filters candidate slots down to the ones that are actually free.

    A candidate is free when:
    1. Its hour bounds lie within working hours
    2. It overlaps none of the busy intervals (half-open semantics)

    Runs in O(candidates x busy).
    """

    def __init__(self, working_hours: WorkingHours):
        self.working_hours = working_hours

    def find_free_slots(
        self,
        candidates: Sequence[TimeSlot],
        busy_intervals: Sequence[TimeSlot]
    ) -> List[TimeSlot]:
        """
        Subtract busy intervals from the candidate grid.

        Args:
            candidates: Slots produced by the grid generator
            busy_intervals: Normalized busy intervals from the calendar feed

        Returns:
            Free slots in candidate order
        """
        return [
            slot for slot in candidates
            if self.working_hours.contains(slot)
            and not self.is_busy(slot, busy_intervals)
        ]

    @staticmethod
    def is_busy(slot: TimeSlot, busy_intervals: Sequence[TimeSlot]) -> bool:
        """Check whether any busy interval overlaps the slot."""
        return any(slot.overlaps(busy) for busy in busy_intervals)
