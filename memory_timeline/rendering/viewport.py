"""
Timeline Viewport - The visible window of the timeline.

This module provides the TimelineViewport class, the single source of truth
for what the timeline currently shows:
- Visible date range and center date
- Zoom level and the pixel density that follows from it
- Date <-> pixel conversion within the window
- Pan, zoom and center-on mutations

A viewport is owned by one view and mutated in place from that view's thread.
It does no locking; sharing one instance between threads needs external
serialization.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from memory_timeline.rendering.timeline_scale import TimelineScale, ZoomLevel
from memory_timeline.utils.error_handler import require

# Configure logger
logger = logging.getLogger(__name__)


class TimelineViewport:
    """
    Mutable camera state for the timeline.

    The pixel density is derived from the zoom level on every access, so
    ``pixels_per_day`` can never diverge from
    ``TimelineScale.get_pixels_per_day(zoom_level)``.

    Optional ``min_date``/``max_date`` boundaries keep the window inside a
    date range. They default to None, in which case the viewport is unbounded
    and pan/zoom/center behave as plain linear transforms.
    """

    DEFAULT_VIEWPORT_HEIGHT = 600.0

    # How much of an overshoot past a boundary survives a pan
    PAN_RESISTANCE_FACTOR = 0.15

    def __init__(
        self,
        start_date: datetime,
        end_date: datetime,
        zoom_level: ZoomLevel = ZoomLevel.MONTH,
        viewport_width: float = 0.0,
        viewport_height: float = DEFAULT_VIEWPORT_HEIGHT,
        center_date: Optional[datetime] = None,
        scroll_position: float = 0.0,
        min_date: Optional[datetime] = None,
        max_date: Optional[datetime] = None
    ):
        """
        Initialize a viewport from explicit values.

        Most callers should use create_centered() instead.

        Args:
            start_date: First visible date
            end_date: Last visible date
            zoom_level: Current zoom level
            viewport_width: Viewport width in pixels
            viewport_height: Viewport height in pixels
            center_date: Date under the viewport center (default: midpoint)
            scroll_position: Accumulated horizontal scroll in pixels
            min_date: Optional earliest date the window may show
            max_date: Optional latest date the window may show
        """
        TimelineScale.validate_zoom_level(zoom_level)

        self.start_date = start_date
        self.end_date = end_date
        self.zoom_level = zoom_level
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.center_date = center_date if center_date is not None else start_date + (end_date - start_date) / 2
        self.scroll_position = scroll_position
        self.min_date = min_date
        self.max_date = max_date

    @classmethod
    def create_centered(
        cls,
        center_date: datetime,
        zoom: ZoomLevel,
        viewport_width: float,
        viewport_height: float = DEFAULT_VIEWPORT_HEIGHT,
        min_date: Optional[datetime] = None,
        max_date: Optional[datetime] = None
    ) -> 'TimelineViewport':
        """
        Create a viewport centered on a date.

        Args:
            center_date: Date to put under the viewport center
            zoom: Zoom level
            viewport_width: Viewport width in pixels (must be positive)
            viewport_height: Viewport height in pixels
            min_date: Optional earliest date the window may show
            max_date: Optional latest date the window may show

        Returns:
            TimelineViewport: New viewport
        """
        require(viewport_width > 0, f"Viewport width must be positive, got {viewport_width}")

        half_span = timedelta(days=TimelineScale.get_visible_days(zoom, viewport_width) / 2.0)

        viewport = cls(
            start_date=center_date - half_span,
            end_date=center_date + half_span,
            zoom_level=zoom,
            viewport_width=viewport_width,
            viewport_height=viewport_height,
            center_date=center_date,
            scroll_position=0.0,
            min_date=min_date,
            max_date=max_date
        )

        if viewport.has_boundaries:
            viewport.center_on(center_date)

        return viewport

    @property
    def pixels_per_day(self) -> float:
        """Pixel density for the current zoom level."""
        return TimelineScale.get_pixels_per_day(self.zoom_level)

    @property
    def visible_time_span(self) -> timedelta:
        """Duration between start_date and end_date."""
        return self.end_date - self.start_date

    @property
    def visible_days(self) -> float:
        """Visible duration in (fractional) days."""
        return self.visible_time_span / timedelta(days=1)

    @property
    def has_boundaries(self) -> bool:
        """True if either date boundary is set."""
        return self.min_date is not None or self.max_date is not None

    def date_to_pixel(self, date: datetime) -> float:
        """
        Convert a date to a pixel position in the viewport.

        Dates outside the visible range clamp to the nearest edge.

        Args:
            date: Date to convert

        Returns:
            float: Pixel position in [0, viewport_width]
        """
        if date < self.start_date:
            return 0.0
        if date > self.end_date:
            return self.viewport_width

        days = (date - self.start_date) / timedelta(days=1)
        return days * self.pixels_per_day

    def pixel_to_date(self, pixel: float) -> datetime:
        """
        Convert a pixel position to a date.

        Not clamped: positions outside the viewport map to dates outside the
        visible range, which pan and zoom math relies on.

        Args:
            pixel: Pixel position relative to the viewport's left edge

        Returns:
            datetime: Date at that position
        """
        pixels_per_day = self.pixels_per_day
        require(pixels_per_day > 0, f"Pixels per day must be positive, got {pixels_per_day}")
        return self.start_date + timedelta(days=pixel / pixels_per_day)

    def is_date_visible(self, date: datetime) -> bool:
        """Check if a date lies in [start_date, end_date] (both ends inclusive)."""
        return self.start_date <= date <= self.end_date

    def is_event_visible(self, start_date: datetime, end_date: Optional[datetime] = None) -> bool:
        """
        Check if an event's interval intersects the visible range.

        Both intervals are closed; a point event uses start_date as its end.

        Args:
            start_date: Event start
            end_date: Event end, or None for a point event

        Returns:
            bool: True if the event overlaps the visible range
        """
        event_end = end_date if end_date is not None else start_date
        return event_end >= self.start_date and start_date <= self.end_date

    def update_for_zoom(self, new_zoom: ZoomLevel):
        """
        Switch zoom level while keeping center_date under the viewport center.

        Args:
            new_zoom: Zoom level to switch to
        """
        TimelineScale.validate_zoom_level(new_zoom)
        require(self.viewport_width > 0, f"Viewport width must be positive, got {self.viewport_width}")

        self.zoom_level = new_zoom

        half_span = timedelta(days=TimelineScale.get_visible_days(new_zoom, self.viewport_width) / 2.0)
        self.start_date = self.center_date - half_span
        self.end_date = self.center_date + half_span

        self._clamp_to_boundaries()

        logger.debug(f"Zoom changed to {new_zoom.name}: {self.start_date} - {self.end_date}")

    def pan(self, delta_pixels: float):
        """
        Pan the viewport by a number of pixels.

        Positive deltas move the visible window earlier in time (dragging the
        content to the right). With boundaries set, movement past a boundary
        is damped by PAN_RESISTANCE_FACTOR; call snap_to_boundaries() once
        the gesture ends.

        Args:
            delta_pixels: Horizontal drag distance in pixels
        """
        pixels_per_day = self.pixels_per_day
        require(pixels_per_day > 0, f"Pixels per day must be positive, got {pixels_per_day}")

        delta = timedelta(days=delta_pixels / pixels_per_day)
        new_start = self.start_date - delta
        new_end = self.end_date - delta
        new_center = self.center_date - delta

        span = self.visible_time_span

        if self.min_date is not None and new_start < self.min_date:
            overshoot = self.min_date - new_start
            new_start = self.min_date - overshoot * self.PAN_RESISTANCE_FACTOR
            new_end = new_start + span
            new_center = new_start + span / 2

        if self.max_date is not None and new_end > self.max_date:
            overshoot = new_end - self.max_date
            new_end = self.max_date + overshoot * self.PAN_RESISTANCE_FACTOR
            new_start = new_end - span
            new_center = new_start + span / 2

        self.start_date = new_start
        self.end_date = new_end
        self.center_date = new_center
        self.scroll_position += delta_pixels

    def center_on(self, date: datetime):
        """
        Center the viewport on a date, keeping zoom and scale fixed.

        With boundaries set, the date is clamped into them first and the
        window is then kept inside the boundaries.

        Args:
            date: Date to center on
        """
        require(self.viewport_width > 0, f"Viewport width must be positive, got {self.viewport_width}")

        date = self._clamp_date(date)
        half_span = timedelta(days=TimelineScale.get_visible_days(self.zoom_level, self.viewport_width) / 2.0)

        self.center_date = date
        self.start_date = date - half_span
        self.end_date = date + half_span

        self._clamp_to_boundaries()

    def snap_to_boundaries(self) -> bool:
        """
        Snap a window that was dragged past a boundary back inside it.

        Returns:
            bool: True if the window moved
        """
        return self._clamp_to_boundaries()

    def _clamp_date(self, date: datetime) -> datetime:
        """Clamp a single date into the boundaries."""
        if self.min_date is not None and date < self.min_date:
            return self.min_date
        if self.max_date is not None and date > self.max_date:
            return self.max_date
        return date

    def _clamp_to_boundaries(self) -> bool:
        """
        Move the window inside the boundaries without resistance.

        center_date is only recomputed when the window actually moved.

        Returns:
            bool: True if the window moved
        """
        if not self.has_boundaries:
            return False

        span = self.visible_time_span
        moved = False

        if self.min_date is not None and self.start_date < self.min_date:
            self.start_date = self.min_date
            self.end_date = self.start_date + span
            moved = True

        if self.max_date is not None and self.end_date > self.max_date:
            self.end_date = self.max_date
            self.start_date = self.end_date - span
            if self.min_date is not None and self.start_date < self.min_date:
                self.start_date = self.min_date
            moved = True

        if moved:
            self.center_date = self.start_date + (self.end_date - self.start_date) / 2
            logger.debug(f"Viewport clamped to boundaries: {self.start_date} - {self.end_date}")

        return moved

    def __repr__(self):
        return (
            f"TimelineViewport(zoom={self.zoom_level.name}, "
            f"start={self.start_date.isoformat()}, "
            f"end={self.end_date.isoformat()}, "
            f"width={self.viewport_width})"
        )
