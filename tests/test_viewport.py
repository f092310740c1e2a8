from datetime import datetime, timedelta

import pytest

from memory_timeline.rendering.timeline_scale import TimelineScale, ZoomLevel
from memory_timeline.rendering.viewport import TimelineViewport
from memory_timeline.utils.error_handler import ContractViolationError

CENTER = datetime(2024, 1, 15)


def _assert_close(actual: datetime, expected: datetime, tolerance=timedelta(microseconds=1)) -> None:
    assert abs(actual - expected) <= tolerance, f"{actual} != {expected}"


def test_create_centered_month_view() -> None:
    viewport = TimelineViewport.create_centered(CENTER, ZoomLevel.MONTH, 900)

    _assert_close(viewport.start_date, CENTER - timedelta(days=150))
    _assert_close(viewport.end_date, CENTER + timedelta(days=150))
    assert viewport.center_date == CENTER
    assert viewport.pixels_per_day == 3.0
    assert viewport.viewport_height == 600.0
    assert viewport.scroll_position == 0.0
    assert viewport.visible_days == pytest.approx(300.0)
    assert viewport.visible_time_span == viewport.end_date - viewport.start_date


@pytest.mark.parametrize("width", [0, -10])
def test_create_centered_requires_positive_width(width) -> None:
    with pytest.raises(ContractViolationError):
        TimelineViewport.create_centered(CENTER, ZoomLevel.MONTH, width)


def test_pixels_per_day_tracks_zoom_level() -> None:
    viewport = TimelineViewport.create_centered(CENTER, ZoomLevel.MONTH, 900)
    for zoom in ZoomLevel:
        viewport.update_for_zoom(zoom)
        assert viewport.pixels_per_day == TimelineScale.get_pixels_per_day(zoom)
        assert viewport.visible_days == pytest.approx(900 / viewport.pixels_per_day)


def test_date_to_pixel_inside_and_clamped_outside() -> None:
    viewport = TimelineViewport.create_centered(CENTER, ZoomLevel.MONTH, 900)

    assert viewport.date_to_pixel(CENTER) == pytest.approx(450.0)
    assert viewport.date_to_pixel(viewport.start_date) == 0.0
    assert viewport.date_to_pixel(CENTER - timedelta(days=400)) == 0.0
    assert viewport.date_to_pixel(CENTER + timedelta(days=400)) == 900


def test_pixel_to_date_is_not_clamped() -> None:
    viewport = TimelineViewport.create_centered(CENTER, ZoomLevel.MONTH, 900)

    _assert_close(viewport.pixel_to_date(-30), viewport.start_date - timedelta(days=10))
    _assert_close(viewport.pixel_to_date(930), viewport.end_date + timedelta(days=10))


def test_date_pixel_round_trip_inside_window() -> None:
    viewport = TimelineViewport.create_centered(CENTER, ZoomLevel.WEEK, 1000)
    date = CENTER + timedelta(days=3, hours=5)
    _assert_close(viewport.pixel_to_date(viewport.date_to_pixel(date)), date)


def test_date_visibility_is_closed_at_both_ends() -> None:
    viewport = TimelineViewport.create_centered(CENTER, ZoomLevel.MONTH, 900)

    assert viewport.is_date_visible(viewport.start_date)
    assert viewport.is_date_visible(viewport.end_date)
    assert viewport.is_date_visible(CENTER)
    assert not viewport.is_date_visible(viewport.end_date + timedelta(seconds=1))


def test_event_visibility() -> None:
    viewport = TimelineViewport.create_centered(CENTER, ZoomLevel.MONTH, 900)
    before = viewport.start_date - timedelta(days=10)

    assert viewport.is_event_visible(before, viewport.start_date)
    assert viewport.is_event_visible(before, CENTER)
    assert not viewport.is_event_visible(before, before + timedelta(days=1))
    assert viewport.is_event_visible(CENTER)
    assert not viewport.is_event_visible(viewport.end_date + timedelta(days=1))


def test_update_for_zoom_keeps_center() -> None:
    viewport = TimelineViewport.create_centered(CENTER, ZoomLevel.MONTH, 900)

    viewport.update_for_zoom(ZoomLevel.DAY)

    assert viewport.center_date == CENTER
    assert viewport.zoom_level == ZoomLevel.DAY
    _assert_close(viewport.start_date, CENTER - timedelta(days=900 / 800 / 2))
    _assert_close(viewport.end_date, CENTER + timedelta(days=900 / 800 / 2))


def test_pan_moves_window_earlier_for_positive_delta() -> None:
    viewport = TimelineViewport.create_centered(CENTER, ZoomLevel.MONTH, 900)
    start, end = viewport.start_date, viewport.end_date

    viewport.pan(30)

    _assert_close(viewport.start_date, start - timedelta(days=10))
    _assert_close(viewport.end_date, end - timedelta(days=10))
    _assert_close(viewport.center_date, CENTER - timedelta(days=10))
    assert viewport.scroll_position == 30

    viewport.pan(-60)
    _assert_close(viewport.center_date, CENTER + timedelta(days=10))
    assert viewport.scroll_position == -30


def test_center_on_recomputes_window() -> None:
    viewport = TimelineViewport.create_centered(CENTER, ZoomLevel.MONTH, 900)
    target = datetime(2030, 6, 1)

    viewport.center_on(target)

    assert viewport.center_date == target
    _assert_close(viewport.start_date, target - timedelta(days=150))
    _assert_close(viewport.end_date, target + timedelta(days=150))


def test_center_on_clamps_into_boundaries() -> None:
    min_date = datetime(2024, 1, 1)
    max_date = datetime(2025, 1, 1)
    viewport = TimelineViewport.create_centered(
        datetime(2024, 6, 1), ZoomLevel.MONTH, 300, min_date=min_date, max_date=max_date
    )

    viewport.center_on(datetime(2020, 1, 1))

    assert viewport.start_date == min_date
    _assert_close(viewport.end_date, min_date + timedelta(days=100))
    _assert_close(viewport.center_date, min_date + timedelta(days=50))


def test_create_centered_respects_boundaries() -> None:
    max_date = datetime(2024, 2, 1)
    viewport = TimelineViewport.create_centered(
        datetime(2024, 1, 31), ZoomLevel.MONTH, 300, max_date=max_date
    )

    assert viewport.end_date == max_date
    _assert_close(viewport.start_date, max_date - timedelta(days=100))


def test_pan_past_boundary_is_damped_then_snaps_back() -> None:
    min_date = datetime(2024, 1, 1)
    viewport = TimelineViewport.create_centered(
        min_date + timedelta(days=50), ZoomLevel.MONTH, 300, min_date=min_date
    )
    assert viewport.start_date == min_date

    # 30 days of drag past the boundary survive as 15% of the overshoot
    viewport.pan(90)
    _assert_close(viewport.start_date, min_date - timedelta(days=4.5))

    assert viewport.snap_to_boundaries() is True
    assert viewport.start_date == min_date
    assert viewport.snap_to_boundaries() is False


def test_unbounded_viewport_never_snaps() -> None:
    viewport = TimelineViewport.create_centered(CENTER, ZoomLevel.MONTH, 900)
    viewport.pan(100000)
    assert viewport.has_boundaries is False
    assert viewport.snap_to_boundaries() is False


def test_zero_width_viewport_cannot_zoom() -> None:
    viewport = TimelineViewport(CENTER, CENTER, ZoomLevel.MONTH, viewport_width=0)
    with pytest.raises(ContractViolationError):
        viewport.update_for_zoom(ZoomLevel.DAY)


def test_constructor_defaults_center_to_midpoint() -> None:
    viewport = TimelineViewport(datetime(2024, 1, 1), datetime(2024, 1, 11), viewport_width=30)
    assert viewport.center_date == datetime(2024, 1, 6)
    assert "MONTH" in repr(viewport)
