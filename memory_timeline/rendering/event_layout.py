"""
Event Layout Engine - Packs timeline events into non-overlapping tracks.

This module provides the EventLayout record and the EventLayoutEngine, which
turns a set of dated events into screen rectangles for one zoom level:
- Horizontal position and width from the timeline scale
- Greedy first-fit track assignment so overlapping events stack vertically
- Viewport culling flags for virtualized rendering

Track assignment is first-fit on the lowest free track, not an optimal
interval-graph coloring. Track indices are part of the output and are
identical for identical input.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List

from memory_timeline.rendering.timeline_scale import TimelineScale, ZoomLevel

# Configure logger
logger = logging.getLogger(__name__)


@dataclass
class EventLayout:
    """Screen placement of one event for one layout pass."""
    event: Any = None
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 24.0
    track: int = 0
    is_visible: bool = False
    opacity: float = 1.0

    @property
    def right(self) -> float:
        """Right edge (exclusive) in pixels."""
        return self.x + self.width


class EventLayoutEngine:
    """
    Stateless layout calculations for timeline events.

    Events only need ``start_date`` and ``end_date`` attributes (end_date is
    None for point events). The engine never mutates them.
    """

    DEFAULT_TRACK_HEIGHT = 30.0
    EVENT_HEIGHT = 24.0

    # Gap in pixels kept on each side of an event within a track
    OVERLAP_BUFFER = 4.0

    @staticmethod
    def calculate_layout(
        events: Iterable[Any],
        zoom: ZoomLevel,
        reference_date: datetime,
        viewport_start: float,
        viewport_end: float,
        track_height: float = DEFAULT_TRACK_HEIGHT,
        event_height: float = EVENT_HEIGHT,
        overlap_buffer: float = OVERLAP_BUFFER
    ) -> List[EventLayout]:
        """
        Calculate the layout of a set of events.

        Events are sorted by start date (stable, so ties keep their input
        order) and each is placed on the first track where its interval,
        widened by overlap_buffer on both sides, touches nothing already
        placed. Layouts come back in that sorted order.

        Args:
            events: Events with start_date / end_date attributes
            zoom: Zoom level
            reference_date: Date at pixel offset zero
            viewport_start: Left edge of the visible pixel range (inclusive)
            viewport_end: Right edge of the visible pixel range (exclusive)
            track_height: Vertical distance between tracks in pixels
            event_height: Height of each event bar in pixels
            overlap_buffer: Gap kept on each side of an event within a track

        Returns:
            List[EventLayout]: One layout per input event
        """
        TimelineScale.validate_zoom_level(zoom)

        layouts = []
        tracks = []  # per track: list of (x, right) intervals already placed

        for event in sorted(events, key=lambda e: e.start_date):
            x = TimelineScale.get_pixel_position(event.start_date, reference_date, zoom)
            width = TimelineScale.get_event_width(event.start_date, event.end_date, zoom)

            track_index = EventLayoutEngine._find_available_track(tracks, x, width, overlap_buffer)
            if track_index == len(tracks):
                tracks.append([])
            tracks[track_index].append((x, x + width))

            layouts.append(EventLayout(
                event=event,
                x=x,
                y=track_index * track_height,
                width=width,
                height=event_height,
                track=track_index,
                is_visible=EventLayoutEngine.is_in_viewport(x, width, viewport_start, viewport_end),
                opacity=1.0
            ))

        logger.debug(f"Laid out {len(layouts)} events on {len(tracks)} tracks (zoom: {zoom.name})")
        return layouts

    @staticmethod
    def _find_available_track(tracks: list, x: float, width: float, buffer: float = OVERLAP_BUFFER) -> int:
        """
        Find the first track where an event does not collide.

        Args:
            tracks: Placed intervals per track
            x: Event left edge
            width: Event width
            buffer: Gap kept on each side

        Returns:
            int: Track index; len(tracks) if a new track is needed
        """
        for index, track in enumerate(tracks):
            if not EventLayoutEngine._has_overlap(track, x, width, buffer):
                return index
        return len(tracks)

    @staticmethod
    def _has_overlap(track: list, x: float, width: float, buffer: float = OVERLAP_BUFFER) -> bool:
        """Check an event against every interval on a track, with buffer."""
        event_end = x + width

        for existing_x, existing_end in track:
            if x < existing_end + buffer and event_end > existing_x - buffer:
                return True

        return False

    @staticmethod
    def is_in_viewport(x: float, width: float, viewport_start: float, viewport_end: float) -> bool:
        """
        Half-open visibility test of [x, x + width) against [viewport_start, viewport_end).

        An event ending exactly at viewport_start is not visible; one starting
        exactly at viewport_start is. An event starting at viewport_end is not.
        """
        return x + width > viewport_start and x < viewport_end

    @staticmethod
    def get_visible_layouts(
        all_layouts: List[EventLayout],
        viewport_start: float,
        viewport_end: float
    ) -> List[EventLayout]:
        """
        Filter already computed layouts to a pixel range.

        This is the cheap path for scroll-only updates: track assignment is
        reused and only the half-open visibility test is re-run. The result
        keeps the relative order of all_layouts.

        Args:
            all_layouts: Layouts from calculate_layout
            viewport_start: Left edge of the visible pixel range (inclusive)
            viewport_end: Right edge of the visible pixel range (exclusive)

        Returns:
            List[EventLayout]: Visible layouts
        """
        return [
            layout for layout in all_layouts
            if EventLayoutEngine.is_in_viewport(layout.x, layout.width, viewport_start, viewport_end)
        ]

    @staticmethod
    def calculate_total_height(layouts: List[EventLayout], track_height: float = DEFAULT_TRACK_HEIGHT) -> float:
        """
        Calculate the canvas height needed for all tracks.

        Never returns less than one track's height, so an empty canvas keeps
        a scrollable area.

        Args:
            layouts: Layouts to measure
            track_height: Vertical distance between tracks in pixels

        Returns:
            float: Total height in pixels
        """
        return EventLayoutEngine.get_track_count(layouts) * track_height if layouts else track_height

    @staticmethod
    def get_track_count(layouts: List[EventLayout]) -> int:
        """Number of tracks spanned by the layouts (highest index + 1), 0 when empty."""
        if not layouts:
            return 0
        return max(layout.track for layout in layouts) + 1
