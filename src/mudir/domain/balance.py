"""Ledger balance arithmetic and statement preparation.

Balance sign convention: ``sum(DEBIT) - sum(CREDIT)``. A positive balance
means the party owes the shop ("You will get"), a negative balance means the
shop owes the party ("You will give").
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from typing import Iterable, Optional

from mudir.domain.entities import Organization, Transaction, TransactionType


def compute_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Return the net amount owed to the shop."""
    balance = Decimal("0")
    for txn in transactions:
        if txn.type == TransactionType.CREDIT:
            balance -= txn.amount
        else:
            balance += txn.amount
    return balance


def total_of(transactions: Iterable[Transaction], type: TransactionType) -> Decimal:
    """Sum the amounts of all transactions of one type."""
    return sum((txn.amount for txn in transactions if txn.type == type), Decimal("0"))


def format_currency(amount: Decimal, currency: str) -> str:
    """Format an absolute amount with two decimals, e.g. ``₹ 1,234.50``."""
    return f"{currency} {abs(amount):,.2f}"


def balance_label(balance: Decimal, currency: str) -> str:
    """Describe a balance from the shop's point of view."""
    if balance > 0:
        return f"You will get {format_currency(balance, currency)}"
    if balance < 0:
        return f"You will give {format_currency(balance, currency)}"
    return "Settled"


@dataclass(frozen=True)
class Statement:
    """Everything a statement renderer needs for one party."""

    organization: Organization
    organization_display_name: str
    currency: str
    transactions: tuple[Transaction, ...]
    total_credit: Decimal
    total_debit: Decimal
    balance: Decimal
    generated_at: datetime

    @property
    def balance_text(self) -> str:
        return balance_label(self.balance, self.currency)


def build_statement(
    organization: Organization,
    transactions: Iterable[Transaction],
    currency: str,
    organization_display_name: str,
    generated_at: Optional[datetime] = None,
) -> Statement:
    """Prepare a statement with transactions sorted newest first.

    The sort is stable, so transactions sharing a date keep their recorded
    order relative to each other.
    """
    transactions = list(transactions)
    ordered = sorted(transactions, key=lambda txn: txn.date, reverse=True)
    return Statement(
        organization=organization,
        organization_display_name=organization_display_name,
        currency=currency,
        transactions=tuple(ordered),
        total_credit=total_of(transactions, TransactionType.CREDIT),
        total_debit=total_of(transactions, TransactionType.DEBIT),
        balance=compute_balance(transactions),
        generated_at=generated_at or datetime.now(UTC),
    )
