"""
Viewport Optimizer - Bridges event layouts to a Qt graphics scene.

This module provides the ViewportOptimizer class which implements:
- EventLayout <-> QRectF conversion for scene items
- Viewport culling with a pixel buffer around the visible area
- Level-of-detail selection for crowded views
- Batching of layouts for progressive rendering
"""

import logging

from PyQt5.QtCore import QRectF

from memory_timeline.rendering.event_layout import EventLayoutEngine

# Configure logger
logger = logging.getLogger(__name__)


class ViewportOptimizer:
    """
    Culls and sizes event layouts for a QGraphicsView.

    Scene coordinates are layout pixels: x grows with time, y with track.
    """

    # Level-of-detail thresholds
    LOD_HIGH_DETAIL = 0  # Show full detail (< 1000 events visible)
    LOD_MEDIUM_DETAIL = 1  # Simplified bars (1000-5000 events visible)
    LOD_LOW_DETAIL = 2  # Minimal bars (> 5000 events visible)

    # Viewport buffer (fraction of viewport width laid out outside the visible area)
    VIEWPORT_BUFFER = 0.2

    def __init__(self):
        """Initialize the viewport optimizer."""
        self.visible_event_ids = set()
        self.current_lod = self.LOD_HIGH_DETAIL

    @staticmethod
    def layout_to_rect(layout):
        """
        Convert an event layout to a scene rectangle.

        Args:
            layout (EventLayout): Layout to convert

        Returns:
            QRectF: Rectangle at (x, y) with the layout's width and height
        """
        return QRectF(layout.x, layout.y, layout.width, layout.height)

    @staticmethod
    def scene_rect(layouts, width, track_height=EventLayoutEngine.DEFAULT_TRACK_HEIGHT):
        """
        Get the scene rectangle needed to hold all tracks.

        Args:
            layouts (list): Layouts from EventLayoutEngine.calculate_layout
            width (float): Scene width in pixels
            track_height (float): Vertical distance between tracks

        Returns:
            QRectF: Scene rectangle anchored at the origin
        """
        height = EventLayoutEngine.calculate_total_height(layouts, track_height)
        return QRectF(0.0, 0.0, width, height)

    def visible_pixel_range(self, viewport_rect, buffer_ratio=None):
        """
        Get the horizontal pixel range to lay out for a viewport.

        Args:
            viewport_rect (QRectF): Visible viewport rectangle in scene coordinates
            buffer_ratio (float): Fraction of the width added on each side
                (default: VIEWPORT_BUFFER)

        Returns:
            tuple: (start, end) half-open pixel range
        """
        if buffer_ratio is None:
            buffer_ratio = self.VIEWPORT_BUFFER
        buffer_width = viewport_rect.width() * buffer_ratio
        return viewport_rect.left() - buffer_width, viewport_rect.right() + buffer_width

    def get_visible_layouts(self, layouts, viewport_rect, buffer_ratio=0.0):
        """
        Filter layouts to those intersecting the viewport.

        Uses the same half-open test as the layout engine. Also records the
        ids of the visible events for is_event_visible().

        Args:
            layouts (list): Layouts to filter
            viewport_rect (QRectF): Visible viewport rectangle in scene coordinates
            buffer_ratio (float): Extra fraction of the width on each side

        Returns:
            list: Visible layouts, in input order
        """
        if not layouts or viewport_rect is None or viewport_rect.isEmpty():
            self.visible_event_ids = set()
            return []

        start, end = self.visible_pixel_range(viewport_rect, buffer_ratio)
        visible = EventLayoutEngine.get_visible_layouts(layouts, start, end)

        self.visible_event_ids = {
            getattr(layout.event, 'event_id', None) for layout in visible
        }
        self.visible_event_ids.discard(None)

        logger.debug(f"{len(visible)} of {len(layouts)} layouts visible in [{start:.1f}, {end:.1f})")
        return visible

    def is_event_visible(self, event_id):
        """
        Check if an event was visible in the last get_visible_layouts() call.

        Args:
            event_id (str): Event identifier

        Returns:
            bool: True if event is visible
        """
        return event_id in self.visible_event_ids

    def calculate_lod(self, visible_event_count):
        """
        Calculate appropriate level-of-detail based on visible event count.

        Args:
            visible_event_count (int): Number of events visible in viewport

        Returns:
            int: LOD level (LOD_HIGH_DETAIL, LOD_MEDIUM_DETAIL, or LOD_LOW_DETAIL)
        """
        if visible_event_count < 1000:
            lod = self.LOD_HIGH_DETAIL
        elif visible_event_count < 5000:
            lod = self.LOD_MEDIUM_DETAIL
        else:
            lod = self.LOD_LOW_DETAIL

        self.current_lod = lod
        return lod

    def should_use_simplified_rendering(self):
        return self.current_lod >= self.LOD_MEDIUM_DETAIL

    def get_event_height_for_lod(self, base_height=EventLayoutEngine.EVENT_HEIGHT):
        """
        Get the bar height for the current LOD level.

        Args:
            base_height (float): Full-detail bar height

        Returns:
            float: Adjusted bar height
        """
        if self.current_lod == self.LOD_HIGH_DETAIL:
            return base_height
        elif self.current_lod == self.LOD_MEDIUM_DETAIL:
            return base_height * 0.8
        else:
            return base_height * 0.6

    @staticmethod
    def batch_layouts_for_rendering(layouts, batch_size=100):
        """
        Split layouts into batches for progressive rendering.

        Args:
            layouts (list): Layouts to batch
            batch_size (int): Number of layouts per batch

        Returns:
            list: List of layout batches
        """
        return [layouts[i:i + batch_size] for i in range(0, len(layouts), batch_size)]
