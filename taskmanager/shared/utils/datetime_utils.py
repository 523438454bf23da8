# taskmanager/shared/utils/datetime_utils.py

"""
Utilities for datetime operations.

This module provides helper functions for working with dates and times
in a consistent manner throughout the application: timezone-aware UTC
timestamps, conversion of naive values coming from the database or from
query strings, and parsing of human duration strings ("15m", "7d") used
by the token lifetime settings.
"""

import re
from datetime import datetime, timezone, timedelta
from typing import Optional, Union

import pytz  # Dependência para suporte a fusos horários

# <n>[s|m|h|d], ou apenas segundos
_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)

_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


class DateTimeUtil:
    """
    Utility class for datetime operations.

    Provides static methods for:
    - Getting current UTC time
    - Normalizing naive datetimes to UTC
    - Parsing duration strings into timedelta
    """

    UTC = pytz.utc

    @staticmethod
    def utcnow() -> datetime:
        """
        Get current UTC time.

        Returns:
            datetime: Current UTC time with timezone info
        """
        return datetime.now(timezone.utc)

    @staticmethod
    def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
        """
        Return a timezone-aware UTC datetime.

        Naive values are assumed to already be in UTC (this is how the
        database columns store them); aware values are converted.
        """
        if value is None:
            return None
        if value.tzinfo is None:
            return DateTimeUtil.UTC.localize(value)
        return value.astimezone(DateTimeUtil.UTC)

    @staticmethod
    def from_timestamp(timestamp: Union[int, float]) -> datetime:
        """Convert a POSIX timestamp (e.g. a JWT 'exp' claim) into an aware UTC datetime."""
        return datetime.fromtimestamp(timestamp, tz=DateTimeUtil.UTC)

    @staticmethod
    def parse_duration(value: Union[str, int, timedelta]) -> timedelta:
        """
        Parse a duration such as "15m", "7d", "12h", "30s" or "900".

        Raises:
            ValueError: If the value is not a positive duration
        """
        if isinstance(value, timedelta):
            duration = value
        elif isinstance(value, int):
            duration = timedelta(seconds=value)
        else:
            match = _DURATION_PATTERN.match(str(value))
            if not match:
                raise ValueError(f"Invalid duration: {value!r}")
            amount, unit = match.groups()
            duration = timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})

        if duration <= timedelta(0):
            raise ValueError(f"Duration must be positive, got: {value!r}")
        return duration
