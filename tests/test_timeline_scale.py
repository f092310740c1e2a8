from datetime import datetime, timedelta

import pytest

from memory_timeline.rendering.timeline_scale import TimelineScale, ZoomLevel
from memory_timeline.utils.error_handler import ContractViolationError


@pytest.mark.parametrize(
    ("zoom", "expected"),
    [
        (ZoomLevel.YEAR, 0.1),
        (ZoomLevel.MONTH, 3.0),
        (ZoomLevel.WEEK, 50.0),
        (ZoomLevel.DAY, 800.0),
    ],
)
def test_pixels_per_day_table(zoom, expected) -> None:
    assert TimelineScale.get_pixels_per_day(zoom) == expected


@pytest.mark.parametrize(
    ("zoom", "expected"),
    [
        (ZoomLevel.YEAR, 2.0),
        (ZoomLevel.MONTH, 4.0),
        (ZoomLevel.WEEK, 8.0),
        (ZoomLevel.DAY, 24.0),
    ],
)
def test_minimum_event_width_table(zoom, expected) -> None:
    assert TimelineScale.get_minimum_event_width(zoom) == expected


def test_grid_interval_table() -> None:
    assert TimelineScale.get_grid_interval(ZoomLevel.YEAR) == 365
    assert TimelineScale.get_grid_interval(ZoomLevel.MONTH) == 30
    assert TimelineScale.get_grid_interval(ZoomLevel.WEEK) == 7
    assert TimelineScale.get_grid_interval(ZoomLevel.DAY) == 1


def test_visible_days_divides_width_by_density() -> None:
    assert TimelineScale.get_visible_days(ZoomLevel.MONTH, 900) == pytest.approx(300.0)
    assert TimelineScale.get_visible_days(ZoomLevel.DAY, 800) == pytest.approx(1.0)


def test_pixel_position_is_negative_before_reference() -> None:
    ref = datetime(2024, 1, 1)
    assert TimelineScale.get_pixel_position(datetime(2024, 1, 11), ref, ZoomLevel.MONTH) == pytest.approx(30.0)
    assert TimelineScale.get_pixel_position(datetime(2023, 12, 22), ref, ZoomLevel.MONTH) == pytest.approx(-30.0)
    assert TimelineScale.get_pixel_position(ref, ref, ZoomLevel.DAY) == 0.0


def test_pixel_position_counts_fractional_days() -> None:
    ref = datetime(2024, 1, 1)
    position = TimelineScale.get_pixel_position(datetime(2024, 1, 1, 12), ref, ZoomLevel.DAY)
    assert position == pytest.approx(400.0)


@pytest.mark.parametrize("zoom", list(ZoomLevel))
def test_pixel_round_trip_within_a_microsecond(zoom) -> None:
    ref = datetime(2024, 1, 1)
    for date in (datetime(2024, 3, 15, 7, 30), datetime(1999, 7, 4, 23, 59, 59), datetime(2031, 2, 1)):
        pixels = TimelineScale.get_pixel_position(date, ref, zoom)
        back = TimelineScale.get_date_from_pixel(pixels, ref, zoom)
        assert abs(back - date) <= timedelta(microseconds=1)


def test_point_event_gets_minimum_width() -> None:
    start = datetime(2024, 1, 15)
    assert TimelineScale.get_event_width(start, None, ZoomLevel.MONTH) == 4.0
    assert TimelineScale.get_event_width(start, None, ZoomLevel.DAY) == 24.0


def test_duration_event_width_follows_density() -> None:
    start = datetime(2024, 1, 5)
    end = datetime(2024, 1, 10)
    assert TimelineScale.get_event_width(start, end, ZoomLevel.MONTH) == pytest.approx(15.0)
    assert TimelineScale.get_event_width(start, end, ZoomLevel.WEEK) == pytest.approx(250.0)


def test_short_event_width_is_floored() -> None:
    start = datetime(2024, 1, 5)
    end = start + timedelta(hours=1)
    assert TimelineScale.get_event_width(start, end, ZoomLevel.MONTH) == 4.0
    assert TimelineScale.get_event_width(start, start, ZoomLevel.YEAR) == 2.0


def test_zoom_steps_are_clamped() -> None:
    assert TimelineScale.zoom_in(ZoomLevel.YEAR) == ZoomLevel.MONTH
    assert TimelineScale.zoom_in(ZoomLevel.WEEK) == ZoomLevel.DAY
    assert TimelineScale.zoom_in(ZoomLevel.DAY) == ZoomLevel.DAY
    assert TimelineScale.zoom_out(ZoomLevel.DAY) == ZoomLevel.WEEK
    assert TimelineScale.zoom_out(ZoomLevel.MONTH) == ZoomLevel.YEAR
    assert TimelineScale.zoom_out(ZoomLevel.YEAR) == ZoomLevel.YEAR


def test_can_zoom_boundaries() -> None:
    assert TimelineScale.can_zoom_in(ZoomLevel.MONTH)
    assert not TimelineScale.can_zoom_in(ZoomLevel.DAY)
    assert TimelineScale.can_zoom_out(ZoomLevel.MONTH)
    assert not TimelineScale.can_zoom_out(ZoomLevel.YEAR)


def test_zoom_level_names_and_descriptions() -> None:
    assert TimelineScale.get_zoom_level_name(ZoomLevel.YEAR) == "Year View"
    assert TimelineScale.get_zoom_level_name(ZoomLevel.DAY) == "Day View"
    assert TimelineScale.get_zoom_level_description(ZoomLevel.YEAR) == "View decades at a glance"


@pytest.mark.parametrize("bad_zoom", [4, -1, "Month", None, 1.0])
def test_undefined_zoom_level_is_rejected(bad_zoom) -> None:
    with pytest.raises(ContractViolationError):
        TimelineScale.get_pixels_per_day(bad_zoom)


def test_parse_zoom_level_accepts_names_and_values() -> None:
    assert TimelineScale.parse_zoom_level("Month") == ZoomLevel.MONTH
    assert TimelineScale.parse_zoom_level(" week ") == ZoomLevel.WEEK
    assert TimelineScale.parse_zoom_level(3) == ZoomLevel.DAY
    assert TimelineScale.parse_zoom_level(ZoomLevel.YEAR) == ZoomLevel.YEAR


@pytest.mark.parametrize("bad_value", ["Decade", 7, True, None])
def test_parse_zoom_level_rejects_unknown_values(bad_value) -> None:
    with pytest.raises(ContractViolationError):
        TimelineScale.parse_zoom_level(bad_value)
