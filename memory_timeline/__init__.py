"""
Memory Timeline Layout Module

This module computes timeline geometry for a journaling application: it
places dated events into non-overlapping tracks for a zoom level and manages
the visible window (zoom, pan and center) over the timeline.
"""

__version__ = "1.0.0"
__author__ = "Memory Timeline Development Team"

from .config import TimelineConfig
from .data.event import TimelineEvent
from .data.event_source import EventSource, InMemoryEventSource
from .data.timeline_service import TimelineService
from .data.timeline_statistics import StatisticsAggregator, TimelineStatistics
from .rendering.event_layout import EventLayout, EventLayoutEngine
from .rendering.time_ruler import TimelineCoordinateConverter, TimeRulerConfig, TimeRulerTick
from .rendering.timeline_scale import TimelineScale, ZoomLevel
from .rendering.viewport import TimelineViewport
from .rendering.zoom_manager import ZoomHelper, ZoomManager
from .utils.error_handler import ContractViolationError, ErrorHandler, TimelineError

__all__ = [
    'TimelineConfig',
    'TimelineEvent',
    'EventSource',
    'InMemoryEventSource',
    'TimelineService',
    'StatisticsAggregator',
    'TimelineStatistics',
    'EventLayout',
    'EventLayoutEngine',
    'TimelineCoordinateConverter',
    'TimeRulerConfig',
    'TimeRulerTick',
    'TimelineScale',
    'ZoomLevel',
    'TimelineViewport',
    'ZoomHelper',
    'ZoomManager',
    'ContractViolationError',
    'ErrorHandler',
    'TimelineError',
]
