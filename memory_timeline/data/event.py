"""
Timeline Event - Read-only view of a journal event for layout.

The layout engine only needs a start and an optional end date; the remaining
fields are carried for display and statistics.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from memory_timeline.utils.timestamp_parser import TimestampParser

# Configure logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineEvent:
    """A dated journal event. ``end_date`` is None for point events."""
    event_id: str
    start_date: datetime
    end_date: Optional[datetime] = None
    title: str = ""
    category: Optional[str] = None

    @property
    def is_point_event(self) -> bool:
        return self.end_date is None

    @property
    def effective_end_date(self) -> datetime:
        """End date, or start date for point events."""
        return self.end_date if self.end_date is not None else self.start_date

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> 'TimelineEvent':
        """
        Build an event from a record dictionary.

        Accepts ``id`` or ``event_id`` as the identifier. Dates may use any
        format TimestampParser understands. An unparseable end date is
        dropped with a warning and the event becomes a point event.

        Args:
            record: Event record

        Returns:
            TimelineEvent: Parsed event

        Raises:
            TimestampParseError: If start_date is missing or invalid
        """
        event_id = record.get('event_id', record.get('id'))
        start_date = TimestampParser.require_timestamp(record.get('start_date'), 'start_date')

        end_date = None
        raw_end = record.get('end_date')
        if raw_end is not None:
            end_date = TimestampParser.parse_timestamp(raw_end)
            if end_date is None:
                logger.warning(f"Ignoring invalid end_date {raw_end!r} for event {event_id}")

        return cls(
            event_id=str(event_id) if event_id is not None else "",
            start_date=start_date,
            end_date=end_date,
            title=record.get('title') or "",
            category=record.get('category')
        )
