"""
Time Ruler - Screen-space conversion and adaptive tick marks for the time axis.

This module provides:
- TimelineCoordinateConverter, a screen-space view of a TimelineViewport
- TimeRulerConfig, which picks a readable tick interval for a pixel density
- TimeRulerTick, one tick mark on the ruler

The tick interval is chosen with a "nice numbers" rule so that major ticks
land roughly ``target_pixel_gap`` pixels apart and on calendar boundaries.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from memory_timeline.utils.error_handler import require

# Configure logger
logger = logging.getLogger(__name__)


class TimeRulerIntervalType(Enum):
    """Calendar unit a ruler aligns its major ticks to."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    FIVE_YEAR = "five_year"


@dataclass
class TimeRulerTick:
    """A single tick mark on the time ruler."""
    date: datetime
    screen_x: float
    is_major: bool
    label: Optional[str] = None


class TimelineCoordinateConverter:
    """
    Date <-> screen conversion anchored at the viewport's left edge.

    Unlike TimelineViewport.date_to_pixel, conversions here are never clamped,
    so ticks and events just outside the window get real coordinates.
    """

    def __init__(self, scroll_offset: datetime, pixels_per_day: float, viewport_width: float):
        """
        Initialize the converter.

        Args:
            scroll_offset: Leftmost visible date
            pixels_per_day: Pixel density
            viewport_width: Visible width in pixels
        """
        require(pixels_per_day > 0, f"Pixels per day must be positive, got {pixels_per_day}")
        self.scroll_offset = scroll_offset
        self.pixels_per_day = pixels_per_day
        self.viewport_width = viewport_width

    @classmethod
    def from_viewport(cls, viewport) -> 'TimelineCoordinateConverter':
        """Create a converter matching a TimelineViewport."""
        return cls(viewport.start_date, viewport.pixels_per_day, viewport.viewport_width)

    def date_to_screen(self, date: datetime) -> float:
        return (date - self.scroll_offset) / timedelta(days=1) * self.pixels_per_day

    def screen_to_date(self, screen_x: float) -> datetime:
        return self.scroll_offset + timedelta(days=screen_x / self.pixels_per_day)

    @property
    def visible_start_date(self) -> datetime:
        return self.scroll_offset

    @property
    def visible_end_date(self) -> datetime:
        return self.scroll_offset + timedelta(days=self.visible_days)

    @property
    def visible_duration(self) -> timedelta:
        return self.visible_end_date - self.visible_start_date

    @property
    def visible_days(self) -> float:
        return self.viewport_width / self.pixels_per_day

    def is_date_visible(self, date: datetime) -> bool:
        """Check if a date lies in the visible range (both ends inclusive)."""
        return self.visible_start_date <= date <= self.visible_end_date

    def is_range_visible(self, start: datetime, end: Optional[datetime] = None) -> bool:
        """Check if [start, end or start] intersects the visible range."""
        range_end = end if end is not None else start
        return range_end >= self.visible_start_date and start <= self.visible_end_date


@dataclass
class TimeRulerConfig:
    """
    Tick layout for one pixel density.

    Use calculate() to pick a configuration, then generate_ticks() per frame.
    """
    major_tick_interval_days: float
    minor_ticks_per_major: int
    label_format: str
    interval_type: TimeRulerIntervalType

    DEFAULT_TARGET_PIXEL_GAP = 120.0

    # (upper bound on target interval in days, major days, minor ticks, strftime label, type)
    INTERVAL_TABLE = [
        (3, 1, 4, "%a %d", TimeRulerIntervalType.DAY),          # 6-hour minor marks
        (10, 7, 7, "%b %d", TimeRulerIntervalType.WEEK),        # daily minor marks
        (35, 7, 7, "%b %d", TimeRulerIntervalType.WEEK),
        (60, 30, 4, "%b %Y", TimeRulerIntervalType.MONTH),      # roughly weekly
        (180, 30, 2, "%b %Y", TimeRulerIntervalType.MONTH),     # bi-weekly
        (400, 90, 3, "%b %Y", TimeRulerIntervalType.QUARTER),
        (730, 365, 4, "%Y", TimeRulerIntervalType.YEAR),        # quarterly
    ]
    FALLBACK_INTERVAL = (365 * 5, 5, "%Y", TimeRulerIntervalType.FIVE_YEAR)

    @classmethod
    def calculate(cls, pixels_per_day: float, target_pixel_gap: float = DEFAULT_TARGET_PIXEL_GAP) -> 'TimeRulerConfig':
        """
        Pick the ruler configuration for a pixel density.

        Args:
            pixels_per_day: Current pixel density
            target_pixel_gap: Desired pixels between major ticks (80-150 reads well)

        Returns:
            TimeRulerConfig: Matching configuration
        """
        require(pixels_per_day > 0, f"Pixels per day must be positive, got {pixels_per_day}")
        target_interval_days = target_pixel_gap / pixels_per_day

        for upper_bound, major_days, minor_ticks, label_format, interval_type in cls.INTERVAL_TABLE:
            if target_interval_days < upper_bound:
                return cls(major_days, minor_ticks, label_format, interval_type)

        major_days, minor_ticks, label_format, interval_type = cls.FALLBACK_INTERVAL
        return cls(major_days, minor_ticks, label_format, interval_type)

    @property
    def minor_tick_interval_days(self) -> float:
        return self.major_tick_interval_days / self.minor_ticks_per_major

    def generate_ticks(self, converter: TimelineCoordinateConverter) -> List[TimeRulerTick]:
        """
        Generate tick marks covering the visible range.

        Ticks start one major interval before the aligned visible start and
        end one major interval after the visible end, so a ruler that is
        scrolled slightly never shows an empty edge.

        Args:
            converter: Converter for the current viewport

        Returns:
            List[TimeRulerTick]: Ticks in date order
        """
        ticks = []
        major_step = timedelta(days=self.major_tick_interval_days)
        minor_step = timedelta(days=self.minor_tick_interval_days)

        current_date = self.get_aligned_date(converter.visible_start_date) - major_step
        end_date = converter.visible_end_date + major_step

        minor_counter = 0
        while current_date <= end_date:
            is_major = minor_counter % self.minor_ticks_per_major == 0
            ticks.append(TimeRulerTick(
                date=current_date,
                screen_x=converter.date_to_screen(current_date),
                is_major=is_major,
                label=current_date.strftime(self.label_format) if is_major else None
            ))
            current_date += minor_step
            minor_counter += 1

        logger.debug(f"Generated {len(ticks)} ruler ticks ({self.interval_type.value})")
        return ticks

    def get_aligned_date(self, date: datetime) -> datetime:
        """
        Align a date down to the start of its interval.

        Weeks start on Sunday.

        Args:
            date: Date to align

        Returns:
            datetime: Start of the interval containing date
        """
        midnight = datetime(date.year, date.month, date.day)

        if self.interval_type == TimeRulerIntervalType.WEEK:
            days_since_sunday = (midnight.weekday() + 1) % 7
            return midnight - timedelta(days=days_since_sunday)
        if self.interval_type == TimeRulerIntervalType.MONTH:
            return datetime(date.year, date.month, 1)
        if self.interval_type == TimeRulerIntervalType.QUARTER:
            return datetime(date.year, ((date.month - 1) // 3) * 3 + 1, 1)
        if self.interval_type == TimeRulerIntervalType.YEAR:
            return datetime(date.year, 1, 1)
        if self.interval_type == TimeRulerIntervalType.FIVE_YEAR:
            return datetime((date.year // 5) * 5, 1, 1)
        return midnight
