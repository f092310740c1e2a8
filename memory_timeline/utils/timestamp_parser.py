"""
Timestamp Parser Utility
========================

This module normalizes the date values found in journal event records into
timezone-naive Python datetime objects in UTC, which is the representation the
layout engine and viewport work with.

Supported Formats:
- Python datetime and date objects
- ISO 8601 strings (with or without time, offset or 'Z' suffix)
- Unix timestamps in seconds or milliseconds
- Numeric strings holding one of the above

Author: Memory Timeline Development Team
Version: 1.0
"""

import datetime
import logging
from typing import Optional, Union

# Configure logger
logger = logging.getLogger(__name__)


class TimestampParseError(Exception):
    """Exception raised when a required timestamp cannot be parsed."""
    pass


class TimestampParser:
    """
    Unified date parser for journal event records.

    All results are timezone-naive datetimes in UTC so that dates coming from
    different sources compare and subtract without surprises.
    """

    # Earliest date a journal entry may carry - timezone-naive
    MIN_TIMESTAMP = datetime.datetime(1900, 1, 1)

    # Latest date a journal entry may carry - timezone-naive
    MAX_TIMESTAMP = datetime.datetime(2100, 1, 1)

    STRING_FORMATS = [
        "%Y-%m-%dT%H:%M:%S.%fZ",      # 2024-01-15T16:00:00.000Z
        "%Y-%m-%dT%H:%M:%SZ",          # 2024-01-15T16:00:00Z
        "%Y-%m-%d %H:%M:%S.%f",        # 2024-01-15 16:00:00.000
        "%Y-%m-%d %H:%M:%S",           # 2024-01-15 16:00:00
        "%Y-%m-%d %H:%M",              # 2024-01-15 16:00
        "%Y/%m/%d",                    # 2024/01/15
        "%d.%m.%Y",                    # 15.01.2024
    ]

    @staticmethod
    def parse_timestamp(
        timestamp: Union[str, int, float, datetime.date, None]
    ) -> Optional[datetime.datetime]:
        """
        Parse a date value and return a naive datetime in UTC.

        Args:
            timestamp: Value in any supported format, or None

        Returns:
            datetime.datetime: Parsed value, or None if it cannot be parsed

        Examples:
            >>> TimestampParser.parse_timestamp("2024-01-15")
            datetime.datetime(2024, 1, 15, 0, 0)

            >>> TimestampParser.parse_timestamp(1705276800)
            datetime.datetime(2024, 1, 15, 0, 0)
        """
        if timestamp is None:
            return None

        # bool is an int subclass but never a date
        if isinstance(timestamp, bool):
            logger.warning(f"Unsupported timestamp value: {timestamp!r}")
            return None

        if isinstance(timestamp, datetime.datetime):
            return TimestampParser._ensure_utc(timestamp)

        if isinstance(timestamp, datetime.date):
            return datetime.datetime(timestamp.year, timestamp.month, timestamp.day)

        if isinstance(timestamp, (int, float)):
            return TimestampParser._parse_numeric_timestamp(timestamp)

        if isinstance(timestamp, str):
            if not timestamp.strip():
                return None
            return TimestampParser._parse_string_timestamp(timestamp)

        logger.warning(f"Unknown timestamp type: {type(timestamp)}")
        return None

    @staticmethod
    def require_timestamp(timestamp, field_name: str = "timestamp") -> datetime.datetime:
        """
        Parse a date value that must be present.

        Args:
            timestamp: Value in any supported format
            field_name: Name of the record field, used in the error message

        Returns:
            datetime.datetime: Parsed value

        Raises:
            TimestampParseError: If the value is missing or cannot be parsed
        """
        parsed = TimestampParser.parse_timestamp(timestamp)
        if parsed is None:
            raise TimestampParseError(f"Invalid or missing {field_name}: {timestamp!r}")
        return parsed

    @staticmethod
    def _parse_numeric_timestamp(timestamp: Union[int, float]) -> Optional[datetime.datetime]:
        """
        Parse a Unix timestamp in seconds or milliseconds.

        Values of 1e11 and above are taken as milliseconds; in seconds they
        would land past the year 5000.

        Args:
            timestamp: Numeric timestamp

        Returns:
            datetime.datetime: Parsed timestamp, or None if out of range
        """
        seconds = timestamp / 1000.0 if abs(timestamp) >= 1e11 else float(timestamp)

        try:
            dt = datetime.datetime.fromtimestamp(seconds, tz=datetime.timezone.utc).replace(tzinfo=None)
        except (ValueError, OSError, OverflowError) as e:
            logger.debug(f"Failed to parse Unix timestamp {timestamp}: {e}")
            return None

        if TimestampParser._is_reasonable_timestamp(dt):
            return dt
        return None

    @staticmethod
    def _parse_string_timestamp(timestamp_str: str) -> Optional[datetime.datetime]:
        """
        Parse a string timestamp.

        Tries ``datetime.fromisoformat`` first, then the explicit formats in
        STRING_FORMATS, then a numeric interpretation.

        Args:
            timestamp_str: Timestamp string

        Returns:
            datetime.datetime: Parsed timestamp, or None if invalid
        """
        timestamp_str = timestamp_str.strip()

        try:
            dt = datetime.datetime.fromisoformat(timestamp_str.replace('Z', '+00:00'))
            dt = TimestampParser._ensure_utc(dt)
            if TimestampParser._is_reasonable_timestamp(dt):
                return dt
            return None
        except ValueError:
            pass

        for fmt in TimestampParser.STRING_FORMATS:
            try:
                dt = datetime.datetime.strptime(timestamp_str, fmt)
            except ValueError:
                continue

            if TimestampParser._is_reasonable_timestamp(dt):
                return dt
            return None

        try:
            numeric_value = float(timestamp_str)
        except ValueError:
            logger.debug(f"Failed to parse string timestamp: {timestamp_str}")
            return None

        return TimestampParser._parse_numeric_timestamp(numeric_value)

    @staticmethod
    def _ensure_utc(dt: datetime.datetime) -> datetime.datetime:
        """
        Convert an aware datetime to UTC and drop the tzinfo.

        Naive datetimes are assumed to already be in UTC.

        Args:
            dt: Datetime object

        Returns:
            datetime.datetime: Timezone-naive datetime in UTC
        """
        if dt.tzinfo is None:
            return dt
        return dt.astimezone(datetime.timezone.utc).replace(tzinfo=None)

    @staticmethod
    def _is_reasonable_timestamp(dt: datetime.datetime) -> bool:
        """
        Check that a parsed date lies within MIN_TIMESTAMP..MAX_TIMESTAMP.

        Args:
            dt: Datetime object to validate

        Returns:
            bool: True if the date is in range
        """
        return TimestampParser.MIN_TIMESTAMP <= dt <= TimestampParser.MAX_TIMESTAMP

    @staticmethod
    def format_timestamp(dt: Optional[datetime.datetime], format_str: str = "%Y-%m-%d %H:%M:%S") -> str:
        """
        Format datetime object as string.

        Args:
            dt: Datetime object to format
            format_str: Format string (default: "%Y-%m-%d %H:%M:%S")

        Returns:
            str: Formatted timestamp string, or empty string if dt is None
        """
        if dt is None:
            return ""

        return dt.strftime(format_str)
