"""Domain model entities for mudir.

These are pure data classes representing the inventory and ledger concepts,
independent of how the document is laid out on disk. All entities are
frozen; the record store builds new instances instead of mutating, so a
reader never observes a half-applied change.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from mudir.config import APP_VERSION, DEFAULT_CURRENCY


class FieldType(str, Enum):
    """Value types a schema field can hold."""

    TEXT = "text"
    NUMBER = "number"
    CURRENCY = "currency"
    DATE = "date"
    BOOLEAN = "boolean"
    SELECT = "select"


class TransactionType(str, Enum):
    """Direction of a ledger movement."""

    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


@dataclass(frozen=True)
class SchemaField:
    """One typed column definition within a collection."""

    key: str
    label: str
    type: FieldType = FieldType.TEXT
    required: bool = False
    default_value: Any = None
    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class Item:
    """One record within a collection.

    ``values`` is keyed by schema field keys; keys that are no longer in the
    schema are kept as they are.
    """

    id: str
    created_at: Optional[datetime]
    values: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Collection:
    """A user-defined record type plus its items."""

    id: str
    name: str
    description: Optional[str] = None
    schema: tuple[SchemaField, ...] = ()
    data: tuple[Item, ...] = ()

    def get_field(self, key: str) -> Optional[SchemaField]:
        """Return the schema field with the given key, if any."""
        for schema_field in self.schema:
            if schema_field.key == key:
                return schema_field
        return None

    def used_keys(self) -> set[str]:
        """Keys in the schema plus stale keys still stored on items."""
        keys = {schema_field.key for schema_field in self.schema}
        for item in self.data:
            keys.update(item.values)
        return keys


@dataclass(frozen=True)
class Organization:
    """A ledger party (customer or supplier)."""

    id: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """A credit or debit movement against one organization."""

    id: str
    organization_id: str
    type: TransactionType
    amount: Decimal
    date: datetime
    remark: Optional[str] = None


@dataclass(frozen=True)
class LedgerEntry:
    """An organization together with its ordered transaction history."""

    organization: Organization
    transactions: tuple[Transaction, ...] = ()


@dataclass(frozen=True)
class AppSettings:
    """Singleton application settings stored alongside the data."""

    app_version: str = APP_VERSION
    organization_name: str = ""
    user_currency: str = DEFAULT_CURRENCY
    export_date: Optional[datetime] = None
    is_new_user: bool = True


@dataclass(frozen=True)
class Snapshot:
    """Full serializable state at one point in time."""

    meta: AppSettings
    collections: tuple[Collection, ...] = ()
    ledger: tuple[LedgerEntry, ...] = ()
