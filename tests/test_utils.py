"""
Tests for date and timestamp helpers
Copyright 2025 Jurden Bruce
"""

from datetime import date, timedelta, timezone

import pytest

from errors import ErrorKind, InvalidDate
from utils import format_date, parse_date, parse_start_time, yesterday


def test_parse_date_accepts_calendar_date():
    assert parse_date("2024-02-29") == date(2024, 2, 29)


@pytest.mark.parametrize("value", [
    "2024-02-30",
    "2023-02-29",
    "2024-13-01",
    "2024-00-10",
    "2024/02/01",
    "Feb 1 2024",
    "2024-2-1",
    "24-02-01",
    " 2024-02-01",
    "2024-02-01 ",
    "2024-02-01T00:00:00",
    "",
    "２０２４-０２-０１",
])
def test_parse_date_rejects_invalid(value):
    with pytest.raises(InvalidDate) as excinfo:
        parse_date(value)
    assert excinfo.value.kind is ErrorKind.INVALID_DATE
    assert excinfo.value.detail == "Date must be in YYYY-MM-DD format"


def test_parse_date_rejects_non_string():
    with pytest.raises(InvalidDate):
        parse_date(None)


def test_parse_start_time_rfc3339_with_offset():
    parsed = parse_start_time("2024-03-05T14:07:09+02:00")
    assert parsed.strftime("%H:%M:%S") == "14:07:09"
    assert parsed.utcoffset() == timedelta(hours=2)


def test_parse_start_time_rfc3339_utc_with_fraction():
    parsed = parse_start_time("2024-03-05T14:07:09.123456Z")
    assert parsed.tzinfo == timezone.utc
    assert parsed.microsecond == 123456


def test_parse_start_time_naive_space_separated():
    parsed = parse_start_time("2024-03-05 08:00:01")
    assert parsed.tzinfo is None
    assert parsed.strftime("%H:%M:%S") == "08:00:01"


@pytest.mark.parametrize("value", ["yesterday", "2024-03-05", "2024-03-05T14:07", None])
def test_parse_start_time_rejects_unknown_shapes(value):
    with pytest.raises(ValueError):
        parse_start_time(value)


def test_yesterday_crosses_month_and_year():
    assert yesterday(date(2024, 3, 1)) == date(2024, 2, 29)
    assert yesterday(date(2025, 1, 1)) == date(2024, 12, 31)


def test_format_date_zero_pads():
    assert format_date(date(2024, 1, 5)) == "2024-01-05"


@pytest.mark.parametrize("value,expected_offset", [
    ("2024-06-10T14:07:09.123456789+00:00", timedelta(0)),
    ("2024-06-10T14:07:09.1234567Z", timedelta(0)),
    ("2024-06-10 14:07:09+02:00", timedelta(hours=2)),
    ("2024-06-10 14:07:09.5-05:00", timedelta(hours=-5)),
])
def test_parse_start_time_other_rfc3339_shapes(value, expected_offset):
    parsed = parse_start_time(value)
    assert parsed.strftime("%H:%M:%S") == "14:07:09"
    assert parsed.utcoffset() == expected_offset


def test_parse_start_time_truncates_nanoseconds():
    assert parse_start_time("2024-06-10T14:07:09.123456789+00:00").microsecond == 123456
