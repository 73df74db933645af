"""Tests for date parser with relative dates."""

import pytest
from datetime import date, datetime, timedelta, UTC
from mudir.utils.date_parser import parse_date, parse_datetime


def test_parse_absolute_date():
    """ISO dates parse as-is."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_written_date():
    """Test parsing a date with a month name."""
    assert parse_date("15 Jan 2024") == date(2024, 1, 15)


def test_parse_today():
    """'today' is the local date."""
    result = parse_date("today")
    assert result == date.today()


def test_parse_yesterday():
    """Relative words are case-insensitive."""
    result = parse_date("Yesterday")
    assert result == date.today() - timedelta(days=1)


def test_parse_tomorrow():
    """'tomorrow' is one day ahead."""
    result = parse_date("tomorrow")
    assert result == date.today() + timedelta(days=1)


def test_parse_invalid_date():
    """Test that garbage raises ValueError."""
    with pytest.raises(ValueError):
        parse_date("banana")


def test_parse_empty_date():
    """Test that an empty string raises ValueError."""
    with pytest.raises(ValueError):
        parse_date("  ")


def test_parse_datetime_bare_date_is_utc_midnight():
    """Test that a bare date becomes midnight UTC."""
    assert parse_datetime("2024-01-15") == datetime(2024, 1, 15, tzinfo=UTC)


def test_parse_datetime_keeps_offset():
    """Test that an explicit offset is kept."""
    result = parse_datetime("2024-01-15T10:00:00+05:30")
    assert result == datetime(2024, 1, 15, 4, 30, tzinfo=UTC)


def test_parse_datetime_now():
    """Test parsing 'now'."""
    before = datetime.now(UTC)
    result = parse_datetime("now")
    assert before <= result <= datetime.now(UTC)


def test_parse_datetime_yesterday():
    """Test parsing relative days as datetimes."""
    result = parse_datetime("yesterday")
    assert result.date() == date.today() - timedelta(days=1)
    assert result.tzinfo is not None
