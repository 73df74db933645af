"""Tests for the in-memory record store."""

from datetime import datetime, UTC
from decimal import Decimal

import pytest

from mudir.domain.entities import (
    Collection,
    Item,
    LedgerEntry,
    Organization,
    SchemaField,
    Transaction,
    TransactionType,
)
from mudir.domain.errors import SchemaError
from mudir.domain.schema import DEFAULT_INVENTORY_SCHEMA
from mudir.store.settings import SettingsModel

NOW = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)


def make_collection(collection_id="c1", name="Stationery"):
    return Collection(id=collection_id, name=name, schema=DEFAULT_INVENTORY_SCHEMA)


def make_item(item_id="i1", **values):
    return Item(id=item_id, created_at=NOW, values=values or {"name": "Red Pen"})


def make_txn(txn_id="t1", type=TransactionType.DEBIT, amount="100", organization_id="o1"):
    return Transaction(
        id=txn_id,
        organization_id=organization_id,
        type=type,
        amount=Decimal(amount),
        date=NOW,
    )


class TestCollections:
    """Collection and item operations."""

    def test_add_and_get(self, store, scheduler):
        store.add_collection(make_collection())

        assert store.get_collection("c1").name == "Stationery"
        assert scheduler.calls == 1

    def test_insertion_order_is_kept(self, store):
        store.add_collection(make_collection("c1", "B"))
        store.add_collection(make_collection("c2", "A"))

        assert [c.name for c in store.collections] == ["B", "A"]

    def test_delete_cascades_items(self, store):
        store.add_collection(make_collection())
        store.add_item("c1", make_item())

        deleted = store.delete_collection("c1")

        assert len(deleted.data) == 1
        assert store.collections == ()

    def test_delete_unknown_collection_is_noop(self, store, scheduler):
        assert store.delete_collection("missing") is None
        assert scheduler.calls == 0

    def test_update_collection_name(self, store):
        store.add_collection(make_collection())

        updated = store.update_collection("c1", name="Office", description="Desk things")

        assert updated.name == "Office"
        assert updated.description == "Desk things"
        assert store.get_collection("c1").name == "Office"

    def test_add_item_appends(self, store):
        store.add_collection(make_collection())
        store.add_item("c1", make_item("i1"))
        store.add_item("c1", make_item("i2", name="Blue Pen"))

        assert [i.id for i in store.get_collection("c1").data] == ["i1", "i2"]

    def test_add_item_to_unknown_collection(self, store, scheduler):
        assert store.add_item("missing", make_item()) is None
        assert scheduler.calls == 0

    def test_delete_item_is_idempotent(self, store, scheduler):
        store.add_collection(make_collection())
        store.add_item("c1", make_item())
        store.delete_item("c1", "i1")
        calls = scheduler.calls

        result = store.delete_item("c1", "i1")

        assert result.data == ()
        assert scheduler.calls == calls

    def test_old_references_are_not_mutated(self, store):
        store.add_collection(make_collection())
        before = store.get_collection("c1")

        store.add_item("c1", make_item())

        assert before.data == ()
        assert len(store.get_collection("c1").data) == 1


class TestSchemaEdit:
    """Schema replacement does not migrate items."""

    def test_invalid_schema_leaves_state_unchanged(self, store, scheduler):
        store.add_collection(make_collection())
        calls = scheduler.calls

        with pytest.raises(SchemaError):
            store.set_collection_schema("c1", [])

        assert store.get_collection("c1").schema == DEFAULT_INVENTORY_SCHEMA
        assert scheduler.calls == calls

    def test_removed_field_values_are_kept(self, store):
        store.add_collection(make_collection())
        store.add_item("c1", make_item(name="Red Pen", price=10))

        store.set_collection_schema("c1", DEFAULT_INVENTORY_SCHEMA[:2])

        item = store.get_collection("c1").data[0]
        assert item.values["price"] == 10

    def test_new_required_field_does_not_touch_existing_items(self, store):
        store.add_collection(make_collection())
        store.add_item("c1", make_item(name="Red Pen"))
        schema = DEFAULT_INVENTORY_SCHEMA + (SchemaField(key="sku", label="SKU", required=True),)

        store.set_collection_schema("c1", schema)

        item = store.get_collection("c1").data[0]
        assert "sku" not in item.values


class TestLedger:
    """Organization and transaction operations."""

    def test_add_organization_starts_empty(self, store):
        entry = store.add_organization(Organization(id="o1", name="Sharma Traders"))

        assert entry.transactions == ()
        assert store.get_ledger_entry("o1").organization.name == "Sharma Traders"

    def test_update_organization_merges(self, store):
        store.add_organization(Organization(id="o1", name="Sharma", phone="123"))

        updated = store.update_organization("o1", email="a@b.example", id="other")

        assert updated.organization.id == "o1"
        assert updated.organization.phone == "123"
        assert updated.organization.email == "a@b.example"

    def test_transactions_keep_insertion_order(self, store):
        store.add_organization(Organization(id="o1", name="Sharma"))
        store.add_transaction("o1", make_txn("t1"))
        store.add_transaction("o1", make_txn("t2", TransactionType.CREDIT))

        assert [t.id for t in store.get_ledger_entry("o1").transactions] == ["t1", "t2"]

    def test_update_transaction(self, store):
        store.add_organization(Organization(id="o1", name="Sharma"))
        store.add_transaction("o1", make_txn("t1"))

        updated = store.update_transaction("o1", "t1", amount=Decimal("250"), remark="fixed")

        assert updated.transactions[0].amount == Decimal("250")
        assert updated.transactions[0].remark == "fixed"

    def test_update_unknown_transaction(self, store, scheduler):
        store.add_organization(Organization(id="o1", name="Sharma"))
        calls = scheduler.calls

        assert store.update_transaction("o1", "missing", amount=Decimal("1")) is None
        assert scheduler.calls == calls

    def test_delete_organization_removes_transactions(self, store):
        store.add_organization(Organization(id="o1", name="Sharma"))
        store.add_transaction("o1", make_txn())

        store.delete_organization("o1")

        assert store.get_ledger_entry("o1") is None
        assert store.ledger_entries == ()

    def test_delete_transaction_is_idempotent(self, store, scheduler):
        store.add_organization(Organization(id="o1", name="Sharma"))
        store.add_transaction("o1", make_txn())
        store.delete_transaction("o1", "t1")
        calls = scheduler.calls

        store.delete_transaction("o1", "t1")

        assert store.get_ledger_entry("o1").transactions == ()
        assert scheduler.calls == calls


def test_replace_all(store, scheduler):
    """replace_all swaps the whole tree and notifies once."""
    store.add_collection(make_collection())
    calls = scheduler.calls
    entry = LedgerEntry(organization=Organization(id="o9", name="New"))

    store.replace_all([make_collection("c9", "Other")], [entry])

    assert [c.id for c in store.collections] == ["c9"]
    assert [e.organization.id for e in store.ledger_entries] == ["o9"]
    assert scheduler.calls == calls + 1


def test_replace_all_without_notify(store, scheduler):
    store.replace_all([make_collection()], [], notify=False)

    assert scheduler.calls == 0


class TestSettingsModel:
    """Settings share the change notifications."""

    def test_update_currency_notifies(self, scheduler):
        model = SettingsModel(scheduler=scheduler)

        model.update_currency("$")

        assert model.settings.user_currency == "$"
        assert scheduler.calls == 1

    def test_unchanged_value_does_not_notify(self, scheduler):
        model = SettingsModel(scheduler=scheduler)

        model.update_currency("₹")

        assert scheduler.calls == 0

    def test_complete_onboarding(self, scheduler):
        model = SettingsModel(scheduler=scheduler)

        model.complete_onboarding()

        assert model.settings.is_new_user is False
