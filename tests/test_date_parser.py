"""Tests for date and timestamp parsing."""

import pytest
from datetime import date, datetime, timedelta, timezone
from fintrack.utils.date_parser import get_date_range, month_range, parse_date, parse_timestamp


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("July 15, 2025") == date(2025, 7, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date(" Today ") == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    assert parse_date("yesterday") == date.today() - timedelta(days=1)


def test_parse_last_month():
    """Test parsing 'last month'."""
    result = parse_date("last month")
    # Should be first day of last month
    today = date.today()
    if today.month == 1:
        expected = date(today.year - 1, 12, 1)
    else:
        expected = date(today.year, today.month - 1, 1)
    assert result == expected


def test_parse_this_week():
    """Test parsing 'this week' gives the Monday of the current week."""
    result = parse_date("this week")
    assert result.weekday() == 0
    assert date.today() - result < timedelta(days=7)


def test_parse_this_year():
    """Test parsing 'this year'."""
    today = date.today()
    assert parse_date("this year") == date(today.year, 1, 1)


def test_parse_invalid():
    """Test parsing garbage."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("next fortnight maybe")


class TestParseTimestamp:
    def test_missing(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None

    def test_naive_datetime_unchanged(self):
        value = datetime(2025, 3, 1, 10, 15)
        assert parse_timestamp(value) == value

    def test_date_is_midnight(self):
        assert parse_timestamp(date(2025, 3, 1)) == datetime(2025, 3, 1)

    def test_iso_string_with_offset(self):
        assert parse_timestamp("2025-03-01T10:00:00+05:30") == datetime(2025, 3, 1, 4, 30)

    def test_aware_datetime(self):
        value = datetime(2025, 3, 1, 1, 0, tzinfo=timezone(timedelta(hours=2)))
        result = parse_timestamp(value)
        assert result == datetime(2025, 2, 28, 23, 0)
        assert result.tzinfo is None

    def test_free_form_string(self):
        assert parse_timestamp("March 1, 2025 10:00") == datetime(2025, 3, 1, 10, 0)

    def test_invalid_string(self):
        with pytest.raises(ValueError):
            parse_timestamp("yesterday-ish")

    def test_unsupported_type(self):
        with pytest.raises(ValueError):
            parse_timestamp(12345)


def test_month_range():
    assert month_range(2, 2024) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_range(12, 2025) == (date(2025, 12, 1), date(2025, 12, 31))
    with pytest.raises(ValueError):
        month_range(13, 2025)


def test_get_date_range_this_month():
    """Test getting date range for this month."""
    start, end = get_date_range("this-month")
    today = date.today()
    assert start == date(today.year, today.month, 1)
    assert end == today


def test_get_date_range_last_year():
    """Test getting date range for last year."""
    start, end = get_date_range("last-year")
    today = date.today()
    assert start == date(today.year - 1, 1, 1)
    assert end == date(today.year - 1, 12, 31)


def test_get_date_range_unknown():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")
