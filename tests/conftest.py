from datetime import datetime

import pytest

from memory_timeline.data.event import TimelineEvent


@pytest.fixture
def make_event():
    """Factory for TimelineEvent with an auto-incremented id."""
    counter = {"next": 0}

    def _make(start, end=None, title="", category=None, event_id=None):
        counter["next"] += 1
        return TimelineEvent(
            event_id=event_id or f"evt-{counter['next']}",
            start_date=start,
            end_date=end,
            title=title,
            category=category,
        )

    return _make


@pytest.fixture
def reference_date():
    return datetime(2024, 1, 1)
