"""
Timeline Scale - Zoom levels and pixel/date conversions for the timeline.

This module provides the ZoomLevel enumeration and the TimelineScale class,
a set of stateless lookups that map a zoom level to:
- Pixel density (pixels per day)
- Minimum event widths
- Axis grid spacing
- Neighbouring zoom levels

Every function here is pure and safe to call from any thread.
"""

from datetime import datetime, timedelta
from enum import IntEnum
from typing import Optional

from memory_timeline.utils.error_handler import ContractViolationError


class ZoomLevel(IntEnum):
    """Zoom levels ordered from coarsest (YEAR) to finest (DAY)."""
    YEAR = 0   # 1 pixel ~ 10 days, for decades at a glance
    MONTH = 1  # 1 pixel ~ 8 hours, for annual timelines
    WEEK = 2   # 1 pixel ~ 30 minutes, for monthly timelines
    DAY = 3    # 1 pixel ~ 2 minutes, for weekly timelines


class TimelineScale:
    """
    Stateless scale calculations for the timeline.

    All methods are static lookups keyed by ZoomLevel. Passing anything that
    is not a ZoomLevel member is a programming error and raises
    ContractViolationError.
    """

    PIXELS_PER_DAY = {
        ZoomLevel.YEAR: 0.1,     # ~36 pixels per year
        ZoomLevel.MONTH: 3.0,    # ~90 pixels per month
        ZoomLevel.WEEK: 50.0,    # ~350 pixels per week
        ZoomLevel.DAY: 800.0,
    }

    # Point events stay visible and clickable at every zoom
    MINIMUM_EVENT_WIDTH = {
        ZoomLevel.YEAR: 2.0,
        ZoomLevel.MONTH: 4.0,
        ZoomLevel.WEEK: 8.0,
        ZoomLevel.DAY: 24.0,
    }

    # Axis grid spacing in days
    GRID_INTERVAL_DAYS = {
        ZoomLevel.YEAR: 365,
        ZoomLevel.MONTH: 30,
        ZoomLevel.WEEK: 7,
        ZoomLevel.DAY: 1,
    }

    ZOOM_LEVEL_NAMES = {
        ZoomLevel.YEAR: "Year View",
        ZoomLevel.MONTH: "Month View",
        ZoomLevel.WEEK: "Week View",
        ZoomLevel.DAY: "Day View",
    }

    ZOOM_LEVEL_DESCRIPTIONS = {
        ZoomLevel.YEAR: "View decades at a glance",
        ZoomLevel.MONTH: "View years in detail",
        ZoomLevel.WEEK: "View months in detail",
        ZoomLevel.DAY: "View weeks in detail",
    }

    MIN_ZOOM = ZoomLevel.YEAR
    MAX_ZOOM = ZoomLevel.DAY

    @staticmethod
    def validate_zoom_level(zoom):
        """Reject anything that is not a ZoomLevel member."""
        if not isinstance(zoom, ZoomLevel):
            raise ContractViolationError(f"Undefined zoom level: {zoom!r}")

    @staticmethod
    def _lookup(table: dict, zoom: ZoomLevel):
        """Look up a per-zoom value, rejecting undefined zoom levels."""
        TimelineScale.validate_zoom_level(zoom)
        return table[zoom]

    @staticmethod
    def get_pixels_per_day(zoom: ZoomLevel) -> float:
        """
        Get the pixel density for a zoom level.

        Args:
            zoom: Zoom level

        Returns:
            float: Pixels per day
        """
        return TimelineScale._lookup(TimelineScale.PIXELS_PER_DAY, zoom)

    @staticmethod
    def get_visible_days(zoom: ZoomLevel, viewport_width: float) -> float:
        """
        Get the number of days that fit in a viewport of the given width.

        Args:
            zoom: Zoom level
            viewport_width: Viewport width in pixels

        Returns:
            float: Visible days
        """
        return viewport_width / TimelineScale.get_pixels_per_day(zoom)

    @staticmethod
    def get_pixel_position(date: datetime, reference_date: datetime, zoom: ZoomLevel) -> float:
        """
        Get the pixel offset of a date relative to a reference date.

        Args:
            date: Date to position
            reference_date: Date at pixel offset zero
            zoom: Zoom level

        Returns:
            float: Pixel offset, negative for dates before the reference
        """
        days_difference = (date - reference_date) / timedelta(days=1)
        return days_difference * TimelineScale.get_pixels_per_day(zoom)

    @staticmethod
    def get_date_from_pixel(pixel_position: float, reference_date: datetime, zoom: ZoomLevel) -> datetime:
        """
        Get the date at a pixel offset; inverse of get_pixel_position.

        Args:
            pixel_position: Pixel offset from the reference date
            reference_date: Date at pixel offset zero
            zoom: Zoom level

        Returns:
            datetime: Date at that offset
        """
        days = pixel_position / TimelineScale.get_pixels_per_day(zoom)
        return reference_date + timedelta(days=days)

    @staticmethod
    def get_event_width(start_date: datetime, end_date: Optional[datetime], zoom: ZoomLevel) -> float:
        """
        Get the pixel width of an event, never below the zoom's minimum.

        Args:
            start_date: Event start
            end_date: Event end, or None for a point event
            zoom: Zoom level

        Returns:
            float: Width in pixels
        """
        minimum = TimelineScale.get_minimum_event_width(zoom)
        if end_date is None:
            return minimum

        duration_days = (end_date - start_date) / timedelta(days=1)
        width = duration_days * TimelineScale.get_pixels_per_day(zoom)
        return max(width, minimum)

    @staticmethod
    def get_minimum_event_width(zoom: ZoomLevel) -> float:
        """Get the minimum event width in pixels for a zoom level."""
        return TimelineScale._lookup(TimelineScale.MINIMUM_EVENT_WIDTH, zoom)

    @staticmethod
    def get_grid_interval(zoom: ZoomLevel) -> int:
        """Get the axis grid interval in days for a zoom level."""
        return TimelineScale._lookup(TimelineScale.GRID_INTERVAL_DAYS, zoom)

    @staticmethod
    def zoom_in(current: ZoomLevel) -> ZoomLevel:
        """Get the next finer zoom level, staying at DAY."""
        if TimelineScale.can_zoom_in(current):
            return ZoomLevel(current + 1)
        return current

    @staticmethod
    def zoom_out(current: ZoomLevel) -> ZoomLevel:
        """Get the next coarser zoom level, staying at YEAR."""
        if TimelineScale.can_zoom_out(current):
            return ZoomLevel(current - 1)
        return current

    @staticmethod
    def can_zoom_in(current: ZoomLevel) -> bool:
        TimelineScale.validate_zoom_level(current)
        return current < TimelineScale.MAX_ZOOM

    @staticmethod
    def can_zoom_out(current: ZoomLevel) -> bool:
        TimelineScale.validate_zoom_level(current)
        return current > TimelineScale.MIN_ZOOM

    @staticmethod
    def get_zoom_level_name(zoom: ZoomLevel) -> str:
        """Get a human-readable name such as "Month View"."""
        return TimelineScale._lookup(TimelineScale.ZOOM_LEVEL_NAMES, zoom)

    @staticmethod
    def get_zoom_level_description(zoom: ZoomLevel) -> str:
        """Get a short description of what a zoom level is suited for."""
        return TimelineScale._lookup(TimelineScale.ZOOM_LEVEL_DESCRIPTIONS, zoom)

    @staticmethod
    def parse_zoom_level(value) -> ZoomLevel:
        """
        Resolve a zoom level from a member, its name or its integer value.

        Used when reading zoom levels from configuration files.

        Args:
            value: ZoomLevel, name ("Month", "MONTH") or integer (0-3)

        Returns:
            ZoomLevel: Resolved zoom level

        Raises:
            ContractViolationError: If the value names no zoom level
        """
        if isinstance(value, ZoomLevel):
            return value
        if isinstance(value, str):
            try:
                return ZoomLevel[value.strip().upper()]
            except KeyError:
                raise ContractViolationError(f"Undefined zoom level: {value!r}") from None
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return ZoomLevel(value)
            except ValueError:
                raise ContractViolationError(f"Undefined zoom level: {value!r}") from None
        raise ContractViolationError(f"Undefined zoom level: {value!r}")
