from datetime import datetime

import pytest

from memory_timeline.data.event import TimelineEvent
from memory_timeline.data.event_source import EventSource, InMemoryEventSource
from memory_timeline.utils.timestamp_parser import TimestampParseError


def test_from_dict_parses_dates() -> None:
    event = TimelineEvent.from_dict({
        "id": 17,
        "start_date": "2024-01-05T10:00:00Z",
        "end_date": "2024-01-07",
        "title": "Trip",
        "category": "Travel",
    })

    assert event.event_id == "17"
    assert event.start_date == datetime(2024, 1, 5, 10)
    assert event.end_date == datetime(2024, 1, 7)
    assert event.title == "Trip"
    assert event.category == "Travel"
    assert not event.is_point_event


def test_from_dict_drops_invalid_end_date(caplog) -> None:
    event = TimelineEvent.from_dict({"event_id": "a", "start_date": "2024-01-05", "end_date": "soon"})

    assert event.end_date is None
    assert event.is_point_event
    assert event.effective_end_date == datetime(2024, 1, 5)
    assert "Ignoring invalid end_date" in caplog.text


def test_from_dict_requires_start_date() -> None:
    with pytest.raises(TimestampParseError):
        TimelineEvent.from_dict({"id": "x", "title": "no date"})


def test_events_are_immutable() -> None:
    event = TimelineEvent("a", datetime(2024, 1, 1))
    with pytest.raises(AttributeError):
        event.start_date = datetime(2025, 1, 1)


def test_in_memory_source_range_query(make_event) -> None:
    inside = make_event(datetime(2024, 1, 10))
    overlapping = make_event(datetime(2023, 12, 20), datetime(2024, 1, 2))
    touching_end = make_event(datetime(2024, 1, 31))
    outside = make_event(datetime(2024, 3, 1))
    source = InMemoryEventSource([outside, touching_end, inside, overlapping])

    found = source.get_events_in_range(datetime(2024, 1, 1), datetime(2024, 1, 31))

    assert found == [overlapping, inside, touching_end]
    assert len(source) == 4
    assert isinstance(source, EventSource)


def test_in_memory_source_add_event_keeps_order(make_event) -> None:
    source = InMemoryEventSource()
    late = make_event(datetime(2024, 6, 1))
    early = make_event(datetime(2024, 1, 1))

    source.add_event(late)
    source.add_event(early)

    assert source.get_all_events() == [early, late]
