"""Tests for balance arithmetic and statements."""

from datetime import datetime, timedelta, UTC
from decimal import Decimal

from mudir.domain.balance import (
    balance_label,
    build_statement,
    compute_balance,
    format_currency,
    total_of,
)
from mudir.domain.entities import Organization, Transaction, TransactionType

NOW = datetime(2024, 1, 15, tzinfo=UTC)


def txn(txn_id, type, amount, days_ago=0):
    return Transaction(
        id=txn_id,
        organization_id="o1",
        type=type,
        amount=Decimal(amount),
        date=NOW - timedelta(days=days_ago),
    )


def test_party_owes_the_shop():
    """DEBIT 100 then CREDIT 30 leaves the party owing 70."""
    transactions = [txn("t1", TransactionType.DEBIT, "100"), txn("t2", TransactionType.CREDIT, "30")]

    assert compute_balance(transactions) == Decimal("70")


def test_shop_owes_the_party():
    transactions = [txn("t1", TransactionType.CREDIT, "100"), txn("t2", TransactionType.DEBIT, "30")]

    assert compute_balance(transactions) == Decimal("-70")


def test_empty_history_is_settled():
    assert compute_balance([]) == 0
    assert balance_label(Decimal("0"), "₹") == "Settled"


def test_totals_by_type():
    transactions = [
        txn("t1", TransactionType.DEBIT, "100"),
        txn("t2", TransactionType.DEBIT, "50.25"),
        txn("t3", TransactionType.CREDIT, "30"),
    ]

    assert total_of(transactions, TransactionType.DEBIT) == Decimal("150.25")
    assert total_of(transactions, TransactionType.CREDIT) == Decimal("30")


def test_format_currency():
    assert format_currency(Decimal("1234.5"), "₹") == "₹ 1,234.50"
    assert format_currency(Decimal("-70"), "$") == "$ 70.00"


def test_balance_labels():
    assert balance_label(Decimal("70"), "₹") == "You will get ₹ 70.00"
    assert balance_label(Decimal("-70"), "₹") == "You will give ₹ 70.00"


def test_statement_sorts_newest_first_and_totals():
    organization = Organization(id="o1", name="Sharma Traders")
    transactions = [
        txn("old", TransactionType.DEBIT, "1500", days_ago=6),
        txn("new", TransactionType.CREDIT, "500", days_ago=2),
        txn("mid", TransactionType.DEBIT, "100", days_ago=4),
    ]

    statement = build_statement(
        organization, transactions, currency="₹", organization_display_name="Demo Store",
        generated_at=NOW,
    )

    assert [t.id for t in statement.transactions] == ["new", "mid", "old"]
    assert statement.total_debit == Decimal("1600")
    assert statement.total_credit == Decimal("500")
    assert statement.balance == Decimal("1100")
    assert statement.balance_text == "You will get ₹ 1,100.00"
    assert statement.generated_at == NOW


def test_statement_keeps_order_of_same_day_transactions():
    organization = Organization(id="o1", name="Sharma Traders")
    transactions = [txn("first", TransactionType.DEBIT, "1"), txn("second", TransactionType.DEBIT, "2")]

    statement = build_statement(organization, transactions, "₹", "")

    assert [t.id for t in statement.transactions] == ["first", "second"]
