"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta, UTC
from dateutil import parser as date_parser

_RELATIVE_DAYS = {
    "today": 0,
    "yesterday": -1,
    "tomorrow": 1,
}


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports "today", "yesterday", "tomorrow" and any absolute format
    python-dateutil understands ("2024-01-15", "15 Jan 2024", ...).

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    cleaned = date_str.strip().lower()
    if not cleaned:
        raise ValueError("Empty date string")

    if cleaned in _RELATIVE_DAYS:
        return date.today() + timedelta(days=_RELATIVE_DAYS[cleaned])

    try:
        return date_parser.parse(cleaned).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(date_str: str) -> datetime:
    """Parse a transaction timestamp.

    A bare date is taken as midnight UTC; "now" and naive times are UTC.

    Raises:
        ValueError: If date string cannot be parsed
    """
    cleaned = date_str.strip().lower()
    if cleaned == "now":
        return datetime.now(UTC)
    if cleaned in _RELATIVE_DAYS:
        return datetime.combine(parse_date(cleaned), time(), tzinfo=UTC)

    try:
        parsed = date_parser.parse(date_str.strip())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
