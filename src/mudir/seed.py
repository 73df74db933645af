"""Demo data for trying the app out."""

from datetime import datetime, timedelta, UTC
from decimal import Decimal

from mudir.domain.entities import (
    AppSettings,
    Collection,
    FieldType,
    Item,
    LedgerEntry,
    Organization,
    SchemaField,
    Snapshot,
    Transaction,
    TransactionType,
)
from mudir.domain.schema import DEFAULT_INVENTORY_SCHEMA


def seed_snapshot(now: datetime | None = None) -> Snapshot:
    """Build a small demo shop: two collections and two parties."""
    now = now or datetime.now(UTC)

    stationery = Collection(
        id="seed-stationery",
        name="Stationery",
        description="Pens, notebooks and paper",
        schema=DEFAULT_INVENTORY_SCHEMA,
        data=(
            Item(id="seed-item-1", created_at=now, values={"name": "Red Pen", "quantity": 40, "price": 10}),
            Item(id="seed-item-2", created_at=now, values={"name": "Blue Pen", "quantity": 25, "price": 10}),
            Item(id="seed-item-3", created_at=now, values={"name": "A5 Notebook", "quantity": 12, "price": 45.5}),
        ),
    )

    groceries = Collection(
        id="seed-groceries",
        name="Groceries",
        schema=(
            SchemaField(key="name", label="Name", type=FieldType.TEXT, required=True),
            SchemaField(key="unit", label="Unit", type=FieldType.SELECT, options=("kg", "litre", "packet")),
            SchemaField(key="price", label="Price", type=FieldType.CURRENCY),
            SchemaField(key="expiry", label="Expiry", type=FieldType.DATE),
            SchemaField(key="organic", label="Organic", type=FieldType.BOOLEAN),
        ),
        data=(
            Item(
                id="seed-item-4",
                created_at=now,
                values={"name": "Basmati Rice", "unit": "kg", "price": 120, "expiry": "2027-03-01", "organic": False},
            ),
            Item(
                id="seed-item-5",
                created_at=now,
                values={"name": "Milk", "unit": "litre", "price": 56, "expiry": "2026-10-25", "organic": True},
            ),
        ),
    )

    sharma = Organization(id="seed-party-1", name="Sharma Traders", phone="9876543210")
    mehta = Organization(id="seed-party-2", name="Mehta Dairy", email="accounts@mehtadairy.example")

    ledger = (
        LedgerEntry(
            organization=sharma,
            transactions=(
                Transaction(
                    id="seed-txn-1",
                    organization_id=sharma.id,
                    type=TransactionType.DEBIT,
                    amount=Decimal("1500"),
                    date=now - timedelta(days=6),
                    remark="Stationery on credit",
                ),
                Transaction(
                    id="seed-txn-2",
                    organization_id=sharma.id,
                    type=TransactionType.CREDIT,
                    amount=Decimal("500"),
                    date=now - timedelta(days=2),
                    remark="Part payment",
                ),
            ),
        ),
        LedgerEntry(
            organization=mehta,
            transactions=(
                Transaction(
                    id="seed-txn-3",
                    organization_id=mehta.id,
                    type=TransactionType.CREDIT,
                    amount=Decimal("2400"),
                    date=now - timedelta(days=3),
                    remark="Milk supply, October",
                ),
            ),
        ),
    )

    return Snapshot(
        meta=AppSettings(organization_name="Demo Store", export_date=now),
        collections=(stationery, groceries),
        ledger=ledger,
    )
