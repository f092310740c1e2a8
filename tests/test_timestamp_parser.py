from datetime import date, datetime, timedelta, timezone

import pytest

from memory_timeline.utils.timestamp_parser import TimestampParseError, TimestampParser


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-01-15", datetime(2024, 1, 15)),
        ("2024-01-15T16:00:00", datetime(2024, 1, 15, 16)),
        ("2024-01-15T16:00:00Z", datetime(2024, 1, 15, 16)),
        ("2024-01-15T18:00:00+02:00", datetime(2024, 1, 15, 16)),
        ("2024/01/15", datetime(2024, 1, 15)),
        ("15.01.2024", datetime(2024, 1, 15)),
        ("  2024-01-15 16:00  ", datetime(2024, 1, 15, 16)),
        (1705276800, datetime(2024, 1, 15)),
        (1705276800000, datetime(2024, 1, 15)),
        ("1705276800", datetime(2024, 1, 15)),
        (date(2024, 1, 15), datetime(2024, 1, 15)),
        (datetime(2024, 1, 15, 16, tzinfo=timezone(timedelta(hours=-5))), datetime(2024, 1, 15, 21)),
    ],
)
def test_parse_supported_formats(value, expected) -> None:
    assert TimestampParser.parse_timestamp(value) == expected


@pytest.mark.parametrize("value", [None, "", "   ", "not a date", True, "1800-01-01", [2024, 1, 15]])
def test_unparseable_values_return_none(value) -> None:
    assert TimestampParser.parse_timestamp(value) is None


def test_require_timestamp_raises_with_field_name() -> None:
    assert TimestampParser.require_timestamp("2024-01-15", "start_date") == datetime(2024, 1, 15)
    with pytest.raises(TimestampParseError, match="start_date"):
        TimestampParser.require_timestamp("garbage", "start_date")


def test_format_timestamp() -> None:
    assert TimestampParser.format_timestamp(datetime(2024, 1, 15, 16, 5)) == "2024-01-15 16:05:00"
    assert TimestampParser.format_timestamp(datetime(2024, 1, 15), "%Y") == "2024"
    assert TimestampParser.format_timestamp(None) == ""
