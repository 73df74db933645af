"""Tests for item, party and transaction search."""

from datetime import datetime, UTC
from decimal import Decimal

from mudir.domain.entities import (
    Collection,
    FieldType,
    Item,
    LedgerEntry,
    Organization,
    SchemaField,
    Transaction,
    TransactionType,
)
from mudir.domain.schema import DEFAULT_INVENTORY_SCHEMA
from mudir.domain.search import (
    search_entries,
    search_items,
    search_transactions,
    stringify_value,
)

NOW = datetime(2024, 1, 15, tzinfo=UTC)


def make_collection(*values_list, schema=DEFAULT_INVENTORY_SCHEMA):
    return Collection(
        id="c1",
        name="Stationery",
        schema=schema,
        data=tuple(
            Item(id=f"i{n}", created_at=NOW, values=values)
            for n, values in enumerate(values_list, start=1)
        ),
    )


def test_stringify_value():
    assert stringify_value(True) == "true"
    assert stringify_value(40.0) == "40"
    assert stringify_value(45.5) == "45.5"
    assert stringify_value(Decimal("1500")) == "1500"
    assert stringify_value(Decimal("12.50")) == "12.5"
    assert stringify_value("Red Pen") == "Red Pen"


class TestSearchItems:
    """Tests for search_items."""

    def test_blank_query_returns_all_in_order(self):
        collection = make_collection({"name": "B"}, {"name": "A"})

        assert [i.id for i in search_items(collection, "  ")] == ["i1", "i2"]

    def test_case_insensitive_substring(self):
        collection = make_collection({"name": "Red Pen"}, {"name": "Notebook"})

        assert [i.id for i in search_items(collection, "PEN")] == ["i1"]

    def test_numbers_are_searched_as_text(self):
        collection = make_collection({"name": "Red Pen", "quantity": 40}, {"name": "Ink", "quantity": 3})

        assert [i.id for i in search_items(collection, "40")] == ["i1"]

    def test_booleans_match_their_words(self):
        schema = (SchemaField(key="organic", label="Organic", type=FieldType.BOOLEAN),)
        collection = make_collection({"organic": True}, {"organic": False}, schema=schema)

        assert [i.id for i in search_items(collection, "tru")] == ["i1"]

    def test_values_outside_schema_are_not_searched(self):
        collection = make_collection({"name": "Pen", "legacy": "hidden"})

        assert search_items(collection, "hidden") == []

    def test_missing_values_do_not_match(self):
        collection = make_collection({"name": "Pen"})

        assert search_items(collection, "none") == []


def test_search_entries_by_name_phone_email():
    entries = [
        LedgerEntry(organization=Organization(id="o1", name="Sharma Traders", phone="98765")),
        LedgerEntry(organization=Organization(id="o2", name="Mehta Dairy", email="acc@mehta.example")),
    ]

    assert [e.organization.id for e in search_entries(entries, "sharma")] == ["o1"]
    assert [e.organization.id for e in search_entries(entries, "987")] == ["o1"]
    assert [e.organization.id for e in search_entries(entries, "MEHTA.EX")] == ["o2"]
    assert len(search_entries(entries, "")) == 2


def test_search_transactions_newest_first():
    transactions = [
        Transaction(id="t1", organization_id="o1", type=TransactionType.DEBIT,
                    amount=Decimal("1500"), date=NOW, remark="Stationery"),
        Transaction(id="t2", organization_id="o1", type=TransactionType.CREDIT,
                    amount=Decimal("500"), date=NOW, remark="Part payment"),
    ]

    assert [t.id for t in search_transactions(transactions, "")] == ["t2", "t1"]
    assert [t.id for t in search_transactions(transactions, "500")] == ["t2", "t1"]
    assert [t.id for t in search_transactions(transactions, "1500")] == ["t1"]
    assert [t.id for t in search_transactions(transactions, "payment")] == ["t2"]
