"""Linear substring search over items, parties and transactions."""

from decimal import Decimal
from typing import Any, Iterable

from mudir.domain.entities import Collection, Item, LedgerEntry, Transaction


def stringify_value(value: Any) -> str:
    """Render a stored value the way it is displayed.

    Booleans render as ``true``/``false`` and integral numbers without a
    trailing ``.0``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    return str(value)


def _contains(value: Any, query: str) -> bool:
    if value is None:
        return False
    return query in stringify_value(value).lower()


def search_items(collection: Collection, query: str) -> list[Item]:
    """Return items where any schema field's value contains ``query``.

    Matching is case-insensitive and unanchored. A blank query returns every
    item in storage order. Values under keys that are not in the schema are
    not searched.
    """
    if not query.strip():
        return list(collection.data)

    needle = query.lower()
    return [
        item
        for item in collection.data
        if any(_contains(item.values.get(f.key), needle) for f in collection.schema)
    ]


def search_entries(entries: Iterable[LedgerEntry], query: str) -> list[LedgerEntry]:
    """Return ledger entries whose party name, phone or email contains ``query``."""
    entries = list(entries)
    if not query.strip():
        return entries

    needle = query.lower()
    return [
        entry
        for entry in entries
        if _contains(entry.organization.name, needle)
        or _contains(entry.organization.phone, needle)
        or _contains(entry.organization.email, needle)
    ]


def search_transactions(transactions: Iterable[Transaction], query: str) -> list[Transaction]:
    """Return transactions newest-first, filtered by amount or remark."""
    newest_first = list(reversed(list(transactions)))
    if not query.strip():
        return newest_first

    needle = query.lower()
    return [
        txn
        for txn in newest_first
        if _contains(txn.amount, needle) or _contains(txn.remark, needle)
    ]
