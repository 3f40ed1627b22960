"""
Date and timestamp utilities.

Centralizes conversions between timezone-aware datetimes, the archiver's
RFC 3339 request format and the integer-nanosecond timestamps carried by
decoded series.
"""

import re
from datetime import datetime, timedelta
from typing import Any

import pytz

from .constants import NANOS_PER_SECOND

EPOCH = pytz.UTC.localize(datetime(1970, 1, 1))

_FRACTION_RE = re.compile(r"\.(\d+)")


def _microsecond_fraction(match: "re.Match") -> str:
    # fromisoformat before 3.11 takes exactly 3 or 6 digits
    return "." + match.group(1)[:6].ljust(6, "0")


class DateUtils:
    """Utilities for date and timestamp handling."""

    @staticmethod
    def parse_datetime(value: Any) -> datetime:
        """
        Parse a time boundary into a timezone-aware UTC datetime.

        Accepts datetimes (naive ones are taken as UTC), ISO 8601 strings
        (a trailing 'Z' is allowed) and epoch milliseconds, the form used by
        dashboard time pickers.

        Args:
            value: Datetime, ISO string or epoch milliseconds

        Returns:
            Timezone-aware datetime in UTC

        Raises:
            ValueError: If the value cannot be interpreted as a time
        """
        if isinstance(value, datetime):
            dt = value
        elif isinstance(value, bool):
            raise ValueError(f"Invalid time value: {value!r}")
        elif isinstance(value, (int, float)):
            return EPOCH + timedelta(milliseconds=value)
        elif isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return EPOCH + timedelta(milliseconds=int(text))
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            text = _FRACTION_RE.sub(_microsecond_fraction, text, count=1)
            try:
                dt = datetime.fromisoformat(text)
            except ValueError:
                raise ValueError(f"Invalid time value: {value!r}")
        else:
            raise ValueError(f"Invalid time value: {value!r}")

        if dt.tzinfo is None:
            return pytz.UTC.localize(dt)
        return dt.astimezone(pytz.UTC)

    @staticmethod
    def to_epoch_nanos(dt: datetime) -> int:
        """
        Convert a timezone-aware datetime to integer nanoseconds since the epoch.

        Args:
            dt: Timezone-aware datetime

        Returns:
            Nanoseconds since 1970-01-01T00:00:00Z
        """
        delta = dt - EPOCH
        seconds = delta.days * 86400 + delta.seconds
        return seconds * NANOS_PER_SECOND + delta.microseconds * 1000

    @staticmethod
    def from_epoch_nanos(nanos: int) -> datetime:
        """Convert epoch nanoseconds to a UTC datetime (microsecond precision)."""
        seconds, remainder = divmod(nanos, NANOS_PER_SECOND)
        return EPOCH + timedelta(seconds=seconds, microseconds=remainder // 1000)

    @staticmethod
    def format_nanos(nanos: int) -> str:
        """
        Format epoch nanoseconds as RFC 3339 UTC with nine fractional digits.

        Example:
            1592956800123456789 -> '2020-06-24T00:00:00.123456789Z'
        """
        seconds, remainder = divmod(nanos, NANOS_PER_SECOND)
        whole = EPOCH + timedelta(seconds=seconds)
        return f"{whole.strftime('%Y-%m-%dT%H:%M:%S')}.{remainder:09d}Z"

    @classmethod
    def format_rfc3339_nanos(cls, dt: datetime) -> str:
        """
        Format a datetime for archiver 'from'/'to' request parameters.

        Args:
            dt: Timezone-aware datetime

        Returns:
            Timestamp string such as '2024-01-01T00:00:00.000000000Z'
        """
        return cls.format_nanos(cls.to_epoch_nanos(dt))

    @staticmethod
    def truncate_to_second(nanos: int) -> int:
        """Drop the sub-second part of an epoch-nanosecond timestamp."""
        return nanos - nanos % NANOS_PER_SECOND
