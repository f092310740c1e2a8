"""
Timeline Service - Ties event supply, viewport and layout together.

This module provides the TimelineService class, the synchronous entry point a
view uses to:
- Load the events around a viewport
- Lay them out for the viewport's zoom level
- Create, zoom and pan viewports
- Summarize the timeline

Errors are logged, reported to an optional ErrorHandler and re-raised.

Author: Memory Timeline Development Team
Version: 1.0
"""

import copy
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from memory_timeline.config import TimelineConfig
from memory_timeline.data.event_source import EventSource
from memory_timeline.data.timeline_statistics import StatisticsAggregator, TimelineStatistics
from memory_timeline.rendering.event_layout import EventLayout, EventLayoutEngine
from memory_timeline.rendering.timeline_scale import TimelineScale, ZoomLevel
from memory_timeline.rendering.viewport import TimelineViewport
from memory_timeline.utils.error_handler import (
    ContractViolationError, ErrorHandler, EventSourceError, TimelineError
)

# Configure logger
logger = logging.getLogger(__name__)


class TimelineService:
    """
    Timeline operations over an EventSource.

    Viewports returned by create_viewport, zoom_in, zoom_out and pan are new
    objects; the viewport passed in is left untouched.
    """

    def __init__(self, event_source: EventSource, config: Optional[TimelineConfig] = None,
                 error_handler: Optional[ErrorHandler] = None):
        """
        Initialize the timeline service.

        Args:
            event_source: Supplier of events
            config: Layout and viewport settings (default: built-in defaults)
            error_handler: Optional handler errors are reported to before re-raising
        """
        self.event_source = event_source
        self.config = config if config is not None else TimelineConfig()
        self.error_handler = error_handler

    def _report(self, error: Exception, context: str):
        """Log an error and hand it to the error handler, if any."""
        logger.error(f"Error {context}: {error}")
        if self.error_handler is not None:
            self.error_handler.handle_error(error, context)

    def get_events_for_viewport(self, viewport: TimelineViewport) -> List:
        """
        Get the events in and around a viewport.

        The queried range extends viewport_buffer_days on both sides so that
        short pans do not need a new query.

        Args:
            viewport: Current viewport

        Returns:
            list: Events intersecting the buffered range

        Raises:
            EventSourceError: If the event source fails
        """
        buffer = timedelta(days=self.config.get_viewport_buffer_days())
        start = viewport.start_date - buffer
        end = viewport.end_date + buffer

        try:
            events = self.event_source.get_events_in_range(start, end)
        except TimelineError as e:
            self._report(e, "getting events for viewport")
            raise
        except Exception as e:
            error = EventSourceError(
                "Failed to load events for viewport",
                operation=f"get_events_in_range({start.isoformat()}, {end.isoformat()})",
                original_error=e
            )
            self._report(error, "getting events for viewport")
            raise error from e

        logger.debug(f"Loaded {len(events)} events for viewport")
        return events

    def layout_for_viewport(self, viewport: TimelineViewport,
                            reference_date: Optional[datetime] = None) -> List[EventLayout]:
        """
        Load and lay out the events around a viewport.

        Args:
            viewport: Current viewport
            reference_date: Date at pixel offset zero (default: viewport start)

        Returns:
            List[EventLayout]: Layouts in start-date order
        """
        events = self.get_events_for_viewport(viewport)
        if reference_date is None:
            reference_date = viewport.start_date

        viewport_start = TimelineScale.get_pixel_position(
            viewport.start_date, reference_date, viewport.zoom_level
        )
        viewport_end = viewport_start + viewport.viewport_width

        return EventLayoutEngine.calculate_layout(
            events,
            viewport.zoom_level,
            reference_date,
            viewport_start,
            viewport_end,
            track_height=self.config.get_track_height(),
            event_height=self.config.get_event_height(),
            overlap_buffer=self.config.get_overlap_buffer()
        )

    def create_viewport(self, zoom: Optional[ZoomLevel] = None, center_date: Optional[datetime] = None,
                        viewport_width: float = 1200.0,
                        viewport_height: Optional[float] = None) -> TimelineViewport:
        """
        Create a viewport.

        Args:
            zoom: Zoom level (default: configured default zoom)
            center_date: Date to center on (default: midpoint of all events,
                or now when there are none)
            viewport_width: Viewport width in pixels
            viewport_height: Viewport height in pixels (default: configured)

        Returns:
            TimelineViewport: New viewport
        """
        if zoom is None:
            zoom = self.config.get_default_zoom()
        if viewport_height is None:
            viewport_height = self.config.get_viewport_height()

        try:
            if center_date is None:
                center_date = self._default_center_date()

            min_date, max_date = self.config.get_date_bounds()
            return TimelineViewport.create_centered(
                center_date, zoom, viewport_width, viewport_height,
                min_date=min_date, max_date=max_date
            )
        except ContractViolationError:
            raise
        except Exception as e:
            self._report(e, "creating viewport")
            raise

    def _default_center_date(self) -> datetime:
        earliest = self.get_earliest_event_date()
        latest = self.get_latest_event_date()
        if earliest is not None and latest is not None:
            return earliest + (latest - earliest) / 2
        return datetime.now()

    def zoom_in(self, viewport: TimelineViewport, center_date: Optional[datetime] = None) -> TimelineViewport:
        """
        Get a viewport one zoom level finer.

        Args:
            viewport: Current viewport
            center_date: Date to center on (default: viewport center)

        Returns:
            TimelineViewport: New viewport, or the same one at DAY level
        """
        if not TimelineScale.can_zoom_in(viewport.zoom_level):
            logger.debug("Already at maximum zoom level")
            return viewport

        return self.create_viewport(
            TimelineScale.zoom_in(viewport.zoom_level),
            center_date if center_date is not None else viewport.center_date,
            viewport.viewport_width,
            viewport.viewport_height
        )

    def zoom_out(self, viewport: TimelineViewport, center_date: Optional[datetime] = None) -> TimelineViewport:
        """
        Get a viewport one zoom level coarser.

        Args:
            viewport: Current viewport
            center_date: Date to center on (default: viewport center)

        Returns:
            TimelineViewport: New viewport, or the same one at YEAR level
        """
        if not TimelineScale.can_zoom_out(viewport.zoom_level):
            logger.debug("Already at minimum zoom level")
            return viewport

        return self.create_viewport(
            TimelineScale.zoom_out(viewport.zoom_level),
            center_date if center_date is not None else viewport.center_date,
            viewport.viewport_width,
            viewport.viewport_height
        )

    def pan(self, viewport: TimelineViewport, pixel_offset: float) -> TimelineViewport:
        """
        Get a copy of a viewport panned by a pixel offset.

        Args:
            viewport: Current viewport
            pixel_offset: Horizontal drag distance in pixels

        Returns:
            TimelineViewport: Panned copy
        """
        panned = copy.copy(viewport)
        panned.pan(pixel_offset)
        return panned

    def get_earliest_event_date(self) -> Optional[datetime]:
        """Start of the earliest event, or None when there are no events."""
        events = self._all_events("getting earliest event date")
        if not events:
            return None
        return min(e.start_date for e in events)

    def get_latest_event_date(self) -> Optional[datetime]:
        """End (or start, for point events) of the latest event, or None."""
        events = self._all_events("getting latest event date")
        if not events:
            return None
        return max(e.end_date if e.end_date is not None else e.start_date for e in events)

    def get_statistics(self, viewport: Optional[TimelineViewport] = None) -> TimelineStatistics:
        """
        Summarize all events.

        Args:
            viewport: Optional viewport used to count visible events

        Returns:
            TimelineStatistics: Calculated statistics
        """
        return StatisticsAggregator.calculate(self._all_events("calculating statistics"), viewport)

    def _all_events(self, context: str) -> List:
        try:
            return self.event_source.get_all_events()
        except TimelineError as e:
            self._report(e, context)
            raise
        except Exception as e:
            error = EventSourceError("Failed to load events", operation="get_all_events", original_error=e)
            self._report(error, context)
            raise error from e
