"""
Zoom Manager - Controls zoom levels and anchored zoom for the timeline.

This module provides:
- ZoomManager, the per-view holder of the current zoom level with
  step-in/step-out controls and axis helpers
- ZoomHelper, which applies a zoom change to a TimelineViewport while keeping
  a chosen date at the same screen position
"""

from datetime import datetime, timedelta

from memory_timeline.rendering.timeline_scale import TimelineScale, ZoomLevel
from memory_timeline.rendering.viewport import TimelineViewport
from memory_timeline.utils.error_handler import require


class ZoomManager:
    """
    Manages the zoom level of one timeline view.

    Zoom levels run from YEAR (coarsest) to DAY (finest). Stepping past either
    end leaves the level unchanged.
    """

    # Switch to aggregated rendering when more events than this are visible
    AGGREGATION_THRESHOLD = 1000

    def __init__(self, initial_zoom=ZoomLevel.MONTH):
        """
        Initialize the ZoomManager.

        Args:
            initial_zoom (ZoomLevel): Initial zoom level (default: MONTH)

        Raises:
            ContractViolationError: If initial_zoom is not a ZoomLevel
        """
        TimelineScale.validate_zoom_level(initial_zoom)
        self._current_zoom = initial_zoom

    @property
    def current_zoom(self):
        """
        Get the current zoom level.

        Returns:
            ZoomLevel: Current zoom level
        """
        return self._current_zoom

    def zoom_in(self):
        """
        Step one level toward DAY.

        Returns:
            bool: True if zoom level changed, False if already at DAY
        """
        if not TimelineScale.can_zoom_in(self._current_zoom):
            return False
        self._current_zoom = TimelineScale.zoom_in(self._current_zoom)
        return True

    def zoom_out(self):
        """
        Step one level toward YEAR.

        Returns:
            bool: True if zoom level changed, False if already at YEAR
        """
        if not TimelineScale.can_zoom_out(self._current_zoom):
            return False
        self._current_zoom = TimelineScale.zoom_out(self._current_zoom)
        return True

    def set_zoom_level(self, level):
        """
        Set zoom level directly.

        Args:
            level (ZoomLevel): Zoom level to set

        Raises:
            ContractViolationError: If level is not a ZoomLevel
        """
        TimelineScale.validate_zoom_level(level)
        self._current_zoom = level

    def can_zoom_in(self):
        return TimelineScale.can_zoom_in(self._current_zoom)

    def can_zoom_out(self):
        return TimelineScale.can_zoom_out(self._current_zoom)

    def get_zoom_label(self):
        """
        Get a human-readable label for the current zoom level.

        Returns:
            str: Zoom level label (e.g., 'Month View')
        """
        return TimelineScale.get_zoom_level_name(self._current_zoom)

    def get_pixels_per_day(self):
        return TimelineScale.get_pixels_per_day(self._current_zoom)

    def get_grid_interval(self):
        """
        Get the axis grid interval in days for the current zoom level.

        Returns:
            int: Interval in days
        """
        return TimelineScale.get_grid_interval(self._current_zoom)

    def get_recommended_marker_interval(self):
        """
        Get the recommended interval for time axis markers at current zoom.

        Returns:
            timedelta: Interval between time markers
        """
        return timedelta(days=self.get_grid_interval())

    def get_zoom_info(self):
        """
        Get complete information about the current zoom level.

        Returns:
            dict: Dictionary with keys 'level', 'label', 'description',
                  'pixels_per_day', 'grid_interval_days'
        """
        return {
            'level': self._current_zoom,
            'label': self.get_zoom_label(),
            'description': TimelineScale.get_zoom_level_description(self._current_zoom),
            'pixels_per_day': self.get_pixels_per_day(),
            'grid_interval_days': self.get_grid_interval()
        }

    def should_aggregate(self, visible_event_count):
        """
        Determine if visible events should be drawn in aggregated form.

        Args:
            visible_event_count (int): Number of events visible in viewport

        Returns:
            bool: True if aggregation is recommended
        """
        return visible_event_count > self.AGGREGATION_THRESHOLD

    def __repr__(self):
        return (
            f"ZoomManager(level={self._current_zoom.name}, "
            f"label='{self.get_zoom_label()}')"
        )


class ZoomHelper:
    """
    Zoom operations that keep an anchor date fixed on screen.

    The anchor can be the viewport center, a date, or the date under a screen
    position such as the mouse cursor.
    """

    @staticmethod
    def zoom_centered_on(viewport: TimelineViewport, anchor_date: datetime, new_zoom: ZoomLevel):
        """
        Change zoom keeping anchor_date at the same fraction of the viewport width.

        The fraction is clamped to [0, 1], so an anchor outside the window
        behaves like the nearest edge.

        Args:
            viewport: Viewport to update in place
            anchor_date: Date to keep at its screen position
            new_zoom: Zoom level to switch to
        """
        TimelineScale.validate_zoom_level(new_zoom)
        visible_days = viewport.visible_days
        require(visible_days > 0, f"Viewport must span a positive range, got {visible_days} days")

        anchor_fraction = (anchor_date - viewport.start_date) / timedelta(days=1) / visible_days
        anchor_fraction = max(0.0, min(1.0, anchor_fraction))

        new_visible_days = TimelineScale.get_visible_days(new_zoom, viewport.viewport_width)
        new_start = anchor_date - timedelta(days=anchor_fraction * new_visible_days)

        viewport.zoom_level = new_zoom
        viewport.start_date = new_start
        viewport.end_date = new_start + timedelta(days=new_visible_days)
        viewport.center_date = new_start + timedelta(days=new_visible_days / 2)

    @staticmethod
    def zoom_centered_on_center(viewport: TimelineViewport, new_zoom: ZoomLevel):
        """Change zoom keeping the viewport's center date fixed."""
        ZoomHelper.zoom_centered_on(viewport, viewport.center_date, new_zoom)

    @staticmethod
    def zoom_centered_on_screen_position(viewport: TimelineViewport, screen_x: float, new_zoom: ZoomLevel):
        """Change zoom keeping the date under screen_x fixed."""
        anchor_date = viewport.pixel_to_date(screen_x)
        ZoomHelper.zoom_centered_on(viewport, anchor_date, new_zoom)
