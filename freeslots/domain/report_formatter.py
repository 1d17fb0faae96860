"""
Grouping, merging and text rendering of free slots.
"""

from typing import Dict, Iterable, List, Tuple

from pendulum import Date

from .models import FreeSlotReport, TimeSlot

TIME_FORMAT = "HH:mm"
DAY_HEADER_FORMAT = "dddd, DD.MM.YYYY"

MESSAGES: Dict[str, Dict[str, str]] = {
    "ru": {
        "title": "Свободные слоты на ближайшие {days} дней:",
        "empty": "Нет свободных слотов в ближайшие {days} дней",
    },
    "en": {
        "title": "Free slots for the next {days} days:",
        "empty": "No free slots in the next {days} days",
    },
}

SUPPORTED_LOCALES = tuple(MESSAGES)


def group_by_day(slots: Iterable[TimeSlot]) -> Dict[Date, List[TimeSlot]]:
    """
    Group slots by their local calendar date.

    Days come out in ascending order, slots within a day sorted by start.
    """
    grouped: Dict[Date, List[TimeSlot]] = {}

    for slot in slots:
        grouped.setdefault(slot.start.date(), []).append(slot)

    return {
        day: sorted(grouped[day], key=lambda s: s.start)
        for day in sorted(grouped)
    }


def merge_contiguous(slots: List[TimeSlot]) -> List[TimeSlot]:
    """
    Merge slots whose start equals the previous slot's end.

    Example: [09:00-10:00, 10:00-11:00, 13:00-14:00] -> [09:00-11:00, 13:00-14:00]

    Input must already be sorted by start time.
    """
    if not slots:
        return []

    merged: List[TimeSlot] = [slots[0]]

    for current in slots[1:]:
        last = merged[-1]

        if current.start == last.end:
            merged[-1] = TimeSlot(start=last.start, end=current.end)
        else:
            merged.append(current)

    return merged


def build_report(free_slots: Iterable[TimeSlot], horizon_days: int) -> FreeSlotReport:
    """Project free slots into per-day lists of merged ``(HH:mm, HH:mm)`` ranges."""
    report = FreeSlotReport(horizon_days=horizon_days)

    for day, day_slots in group_by_day(free_slots).items():
        report.days[day] = [
            (slot.start.format(TIME_FORMAT), slot.end.format(TIME_FORMAT))
            for slot in merge_contiguous(day_slots)
        ]

    return report


class ReportFormatter:
    """
    Renders a FreeSlotReport as the text block shown to users.

    Output shape:

        Свободные слоты на ближайшие 7 дней:

        Понедельник, 15.07.2024: 09:00-11:00, 13:00-14:00

        Вторник, 16.07.2024: 10:00-23:00
    """

    def __init__(self, locale: str = "ru"):
        if locale not in MESSAGES:
            raise ValueError(
                f"Unsupported locale '{locale}', expected one of {', '.join(SUPPORTED_LOCALES)}"
            )
        self.locale = locale
        self.messages = MESSAGES[locale]

    def render(self, report: FreeSlotReport) -> str:
        if report.is_empty():
            return self.messages["empty"].format(days=report.horizon_days)

        sections = [self.messages["title"].format(days=report.horizon_days)]

        for day, ranges in report.days.items():
            sections.append(f"{self.format_day_header(day)}: {self.format_ranges(ranges)}")

        return "\n\n".join(sections)

    def format_day_header(self, day: Date) -> str:
        """Localized weekday and date with the first letter capitalized."""
        header = day.format(DAY_HEADER_FORMAT, locale=self.locale)
        return header[:1].upper() + header[1:]

    @staticmethod
    def format_ranges(ranges: List[Tuple[str, str]]) -> str:
        return ", ".join(f"{start}-{end}" for start, end in ranges)
