"""Utility functions for mudir."""

from mudir.utils.date_parser import parse_date, parse_datetime
from mudir.utils.amount_parser import parse_amount, parse_positive_amount
from mudir.utils.field_parser import parse_field_value

__all__ = [
    "parse_date",
    "parse_datetime",
    "parse_amount",
    "parse_positive_amount",
    "parse_field_value",
]
