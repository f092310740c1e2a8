"""
Event Source - Supplies events to the timeline service.

Storage is outside this package. Anything that can answer a date-range
query implements EventSource; InMemoryEventSource serves a plain list.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List

from memory_timeline.data.event import TimelineEvent

# Configure logger
logger = logging.getLogger(__name__)


class EventSource(ABC):
    """Read-only supplier of timeline events."""

    @abstractmethod
    def get_events_in_range(self, start: datetime, end: datetime) -> List[TimelineEvent]:
        """
        Get events whose interval intersects [start, end].

        Point events are treated as zero-length intervals.

        Args:
            start: Range start (inclusive)
            end: Range end (inclusive)

        Returns:
            List[TimelineEvent]: Matching events
        """

    @abstractmethod
    def get_all_events(self) -> List[TimelineEvent]:
        """Get every event the source holds."""


class InMemoryEventSource(EventSource):
    """EventSource backed by a list, kept sorted by start date."""

    def __init__(self, events: Iterable[TimelineEvent] = ()):
        self._events = sorted(events, key=lambda e: e.start_date)
        logger.debug(f"In-memory event source created with {len(self._events)} events")

    def add_event(self, event: TimelineEvent):
        self._events.append(event)
        self._events.sort(key=lambda e: e.start_date)

    def get_events_in_range(self, start: datetime, end: datetime) -> List[TimelineEvent]:
        return [
            event for event in self._events
            if event.effective_end_date >= start and event.start_date <= end
        ]

    def get_all_events(self) -> List[TimelineEvent]:
        return list(self._events)

    def __len__(self):
        return len(self._events)
