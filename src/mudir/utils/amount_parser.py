"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from mudir.config import CURRENCIES

_CURRENCY_SYMBOLS = re.compile("[" + re.escape("".join(symbol for symbol, _ in CURRENCIES)) + "]")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "₹123.45", "$ 123.45"
    - "-123.45"
    - "1,234.56"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = _CURRENCY_SYMBOLS.sub("", amount_str.strip())
    cleaned = cleaned.replace(",", "").replace(" ", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def parse_positive_amount(amount_str: str) -> Decimal:
    """Parse a ledger amount, which must not be negative.

    Raises:
        ValueError: If the amount cannot be parsed or is negative
    """
    amount = parse_amount(amount_str)
    if amount < 0:
        raise ValueError(f"Amount must not be negative: '{amount_str}'")
    return amount
