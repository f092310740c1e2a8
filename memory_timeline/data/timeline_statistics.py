"""
Timeline Statistics - Summary figures for a set of timeline events.

This module provides the TimelineStatistics snapshot and the
StatisticsAggregator that fills it from a list of events, optionally
counting how many of them a viewport shows.

Author: Memory Timeline Development Team
Version: 1.0
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

# Configure logger
logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.25
DAYS_PER_MONTH = 30.44


@dataclass
class TimelineStatistics:
    """Snapshot of timeline statistics."""
    total_events: int = 0
    visible_events: int = 0
    earliest_date: Optional[datetime] = None
    latest_date: Optional[datetime] = None
    time_span: Optional[timedelta] = None
    events_by_category: Dict[str, int] = field(default_factory=dict)
    events_by_year: Dict[int, int] = field(default_factory=dict)
    events_by_month: Dict[int, int] = field(default_factory=dict)
    average_events_per_year: float = 0.0
    busiest_month: Optional[Tuple[int, int, int]] = None  # (year, month, count)

    @property
    def total_years(self) -> float:
        if self.time_span is None:
            return 0.0
        return self.time_span / timedelta(days=1) / DAYS_PER_YEAR

    @property
    def total_months(self) -> float:
        if self.time_span is None:
            return 0.0
        return self.time_span / timedelta(days=1) / DAYS_PER_MONTH

    def get_summary_description(self) -> str:
        """
        Get a one-line summary such as "12 events spanning 2 years".

        Spans shorter than a year are given in whole months.
        """
        if self.total_events == 0:
            return "No events in timeline"

        years = int(self.total_years)
        if years > 0:
            span = f"{years} year{'s' if years != 1 else ''}"
        else:
            months = int(self.total_months)
            span = f"{months} month{'s' if months != 1 else ''}"

        return f"{self.total_events} events spanning {span}"


class StatisticsAggregator:
    """
    Calculates TimelineStatistics from events.

    Events need ``start_date`` and ``end_date`` attributes; ``category`` is
    optional and missing categories count as "Uncategorized".
    """

    UNCATEGORIZED = "Uncategorized"

    @staticmethod
    def calculate(events: List, viewport=None) -> TimelineStatistics:
        """
        Calculate statistics for a set of events.

        Args:
            events: Events to summarize
            viewport: Optional TimelineViewport; when given, visible_events
                counts the events it shows

        Returns:
            TimelineStatistics: Calculated statistics
        """
        events = list(events)
        stats = TimelineStatistics(total_events=len(events))

        if not events:
            logger.debug("No events to summarize")
            return stats

        stats.earliest_date = min(e.start_date for e in events)
        stats.latest_date = max(
            e.end_date if e.end_date is not None else e.start_date for e in events
        )
        stats.time_span = stats.latest_date - stats.earliest_date

        categories = Counter(
            getattr(e, 'category', None) or StatisticsAggregator.UNCATEGORIZED for e in events
        )
        stats.events_by_category = dict(categories)

        by_year = defaultdict(int)
        by_year_month = defaultdict(int)
        for event in events:
            by_year[event.start_date.year] += 1
            by_year_month[(event.start_date.year, event.start_date.month)] += 1

        stats.events_by_year = dict(sorted(by_year.items()))

        # Monthly breakdown covers the year of the most recent event
        current_year = stats.latest_date.year
        stats.events_by_month = {
            month: count for (year, month), count in sorted(by_year_month.items())
            if year == current_year
        }

        stats.average_events_per_year = len(events) / len(by_year)

        # Ties go to the earliest month
        (year, month), count = max(
            sorted(by_year_month.items()), key=lambda item: item[1]
        )
        stats.busiest_month = (year, month, count)

        if viewport is not None:
            stats.visible_events = sum(
                1 for e in events if viewport.is_event_visible(e.start_date, e.end_date)
            )

        logger.info(f"Statistics: {stats.get_summary_description()}")
        return stats
