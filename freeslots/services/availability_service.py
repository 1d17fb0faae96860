"""
Application service computing the availability report.

The service wires the feed client adapter to the domain pipeline:
fetch -> normalize -> generate -> resolve -> format. The feed dependency is
a protocol so the HTTP client, the local-file client or a test stub can be
plugged in.
"""

from __future__ import annotations

import logging
from typing import List, Protocol

from pendulum import DateTime

from ..config import AppConfig
from ..domain.models import CalendarEvent, FreeSlotReport, TimeSlot
from ..domain.normalizer import BusyIntervalNormalizer
from ..domain.report_formatter import ReportFormatter, build_report
from ..domain.slot_calculator import SlotCalculator
from ..domain.slot_grid import SlotGridGenerator

logger = logging.getLogger(__name__)


class FeedClientProtocol(Protocol):
    """Protocol describing the feed client behaviour needed by the service."""

    def fetch_events(self) -> List[CalendarEvent]:
        """Return raw busy events, or raise FeedUnavailable / FeedMalformed."""


class AvailabilityService:
    """
    Stateless pipeline over an immutable configuration.

    Every call re-fetches the feed; the same ``now`` and feed contents always
    give the same report.
    """

    def __init__(self, feed_client: FeedClientProtocol, config: AppConfig) -> None:
        self._feed_client = feed_client
        self._config = config

        working_hours = config.working_hours()
        schedule = config.schedule

        self._normalizer = BusyIntervalNormalizer(working_hours)
        self._grid = SlotGridGenerator(
            working_hours=working_hours,
            horizon_days=schedule.horizon_days,
            slot_duration_minutes=schedule.slot_duration_minutes,
        )
        self._calculator = SlotCalculator(working_hours)
        self._formatter = ReportFormatter(locale=config.locale)

    @property
    def config(self) -> AppConfig:
        return self._config

    def compute_availability_report(self, now: DateTime | None = None) -> str:
        """
        Run the full pipeline and render the report text.

        Raises:
            FeedUnavailable: If the feed cannot be fetched
            FeedMalformed: If the feed cannot be parsed at all
        """
        return self._formatter.render(self.build_report(now=now))

    def build_report(self, now: DateTime | None = None) -> FreeSlotReport:
        """Compute free slots and group them per day."""
        free_slots = self.find_free_slots(now=now)
        return build_report(free_slots, horizon_days=self._config.schedule.horizon_days)

    def find_free_slots(self, now: DateTime | None = None) -> List[TimeSlot]:
        busy = self.fetch_busy_intervals()
        candidates = self._grid.generate(now=now)
        free_slots = self._calculator.find_free_slots(candidates, busy)

        logger.info(
            "Resolved %d free slots out of %d candidates (%d busy intervals)",
            len(free_slots),
            len(candidates),
            len(busy),
        )
        return free_slots

    def fetch_busy_intervals(self) -> List[TimeSlot]:
        """Fetch events from the feed and clip them to working hours."""
        events = self._feed_client.fetch_events()
        return self._normalizer.normalize(events)
