"""
Utility functions for Claude Diary MCP
Copyright 2025 Jurden Bruce
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from errors import InvalidDate

DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Timezone-qualified (RFC 3339) shapes first, then the naive SQLite shape
START_TIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S.%f%z",
    "%Y-%m-%d %H:%M:%S",
)

# strptime reads at most microseconds; RFC 3339 allows any fraction length
EXCESS_FRACTION = re.compile(r"(\.[0-9]{6})[0-9]+")


def parse_date(date_str: str) -> date:
    """Validate a strict YYYY-MM-DD calendar date

    Raises:
        InvalidDate: for anything that is not an exact, real calendar date
    """
    if not isinstance(date_str, str) or not DATE_PATTERN.fullmatch(date_str):
        raise InvalidDate("Date must be in YYYY-MM-DD format")
    try:
        return datetime.strptime(date_str, DATE_FORMAT).date()
    except ValueError:
        # Lexically fine but not on the calendar, e.g. 2024-02-30
        raise InvalidDate("Date must be in YYYY-MM-DD format")


def format_date(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def parse_start_time(value: str) -> datetime:
    """Parse a stored session start time against the accepted formats"""
    if isinstance(value, str):
        value = EXCESS_FRACTION.sub(r"\1", value, count=1)
    for fmt in START_TIME_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except (ValueError, TypeError):
            continue
    raise ValueError(f"unrecognized timestamp {value!r}")


def today() -> date:
    """Local calendar date"""
    return datetime.now().date()


def yesterday(current: Optional[date] = None) -> date:
    """Exactly one calendar day before ``current`` (default: local today)"""
    return (current or today()) - timedelta(days=1)
