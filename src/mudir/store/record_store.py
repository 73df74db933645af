"""In-memory record store for collections and ledger entries."""

import threading
from dataclasses import replace
from typing import Any, Iterable, Optional, Protocol, Sequence

from mudir.domain.entities import (
    Collection,
    Item,
    LedgerEntry,
    Organization,
    SchemaField,
    Transaction,
)
from mudir.domain.schema import validate_schema
from mudir.logging_config import get_logger

logger = get_logger("store")


class ChangeScheduler(Protocol):
    """Anything that wants to hear about committed mutations."""

    def schedule(self) -> None: ...


class RecordStore:
    """Single authoritative in-memory state for collections and the ledger.

    Every mutation is applied under a lock by swapping in new immutable
    tuples, so readers see either the old or the new state. Mutations that
    target an unknown id are no-ops and return None. Each mutation that
    changes state notifies the injected scheduler afterwards.
    """

    def __init__(self, scheduler: Optional[ChangeScheduler] = None):
        """Initialize record store.

        Args:
            scheduler: Notified after every state-changing mutation
        """
        self.scheduler = scheduler
        self.lock = threading.RLock()
        self._collections: tuple[Collection, ...] = ()
        self._ledger: tuple[LedgerEntry, ...] = ()

    def _changed(self) -> None:
        if self.scheduler is not None:
            self.scheduler.schedule()

    # Reads
    @property
    def collections(self) -> tuple[Collection, ...]:
        return self._collections

    @property
    def ledger_entries(self) -> tuple[LedgerEntry, ...]:
        return self._ledger

    def get_collection(self, collection_id: str) -> Optional[Collection]:
        for collection in self._collections:
            if collection.id == collection_id:
                return collection
        return None

    def get_ledger_entry(self, organization_id: str) -> Optional[LedgerEntry]:
        for entry in self._ledger:
            if entry.organization.id == organization_id:
                return entry
        return None

    # Collection operations
    def _swap_collection(self, collection_id: str, updated: Collection) -> None:
        self._collections = tuple(
            updated if c.id == collection_id else c for c in self._collections
        )

    def add_collection(self, collection: Collection) -> Collection:
        """Append a collection. Id uniqueness is the caller's responsibility."""
        with self.lock:
            self._collections = self._collections + (collection,)
        self._changed()
        return collection

    def delete_collection(self, collection_id: str) -> Optional[Collection]:
        """Remove a collection and all of its items."""
        with self.lock:
            existing = self.get_collection(collection_id)
            if existing is None:
                return None
            self._collections = tuple(c for c in self._collections if c.id != collection_id)
        self._changed()
        return existing

    def update_collection(self, collection_id: str, **changes: Any) -> Optional[Collection]:
        """Merge name/description changes into a collection."""
        allowed = {k: v for k, v in changes.items() if k in ("name", "description")}
        with self.lock:
            existing = self.get_collection(collection_id)
            if existing is None:
                return None
            updated = replace(existing, **allowed)
            self._swap_collection(collection_id, updated)
        self._changed()
        return updated

    def set_collection_schema(
        self, collection_id: str, fields: Sequence[SchemaField]
    ) -> Optional[Collection]:
        """Replace a collection's schema after validating it.

        Existing items are left untouched: values under removed keys stay,
        and newly required fields are not back-filled.

        Raises:
            SchemaError: If the new schema is invalid (state is unchanged)
        """
        fields = tuple(fields)
        validate_schema(fields)
        with self.lock:
            existing = self.get_collection(collection_id)
            if existing is None:
                return None
            updated = replace(existing, schema=fields)
            self._swap_collection(collection_id, updated)
        self._changed()
        return updated

    def add_item(self, collection_id: str, item: Item) -> Optional[Collection]:
        """Append an item. Required-field validation is the caller's job."""
        with self.lock:
            existing = self.get_collection(collection_id)
            if existing is None:
                return None
            updated = replace(existing, data=existing.data + (item,))
            self._swap_collection(collection_id, updated)
        self._changed()
        return updated

    def delete_item(self, collection_id: str, item_id: str) -> Optional[Collection]:
        """Remove an item by id. Deleting an absent item changes nothing."""
        with self.lock:
            existing = self.get_collection(collection_id)
            if existing is None:
                return None
            remaining = tuple(item for item in existing.data if item.id != item_id)
            if len(remaining) == len(existing.data):
                return existing
            updated = replace(existing, data=remaining)
            self._swap_collection(collection_id, updated)
        self._changed()
        return updated

    # Ledger operations
    def _swap_entry(self, organization_id: str, updated: LedgerEntry) -> None:
        self._ledger = tuple(
            updated if e.organization.id == organization_id else e for e in self._ledger
        )

    def add_organization(self, organization: Organization) -> LedgerEntry:
        """Create a ledger entry with no transactions."""
        entry = LedgerEntry(organization=organization)
        with self.lock:
            self._ledger = self._ledger + (entry,)
        self._changed()
        return entry

    def delete_organization(self, organization_id: str) -> Optional[LedgerEntry]:
        """Remove a ledger entry together with all its transactions."""
        with self.lock:
            existing = self.get_ledger_entry(organization_id)
            if existing is None:
                return None
            self._ledger = tuple(
                e for e in self._ledger if e.organization.id != organization_id
            )
        self._changed()
        return existing

    def update_organization(self, organization_id: str, **changes: Any) -> Optional[LedgerEntry]:
        """Merge the given fields into an organization; others stay as they are."""
        changes.pop("id", None)
        with self.lock:
            existing = self.get_ledger_entry(organization_id)
            if existing is None:
                return None
            updated = replace(existing, organization=replace(existing.organization, **changes))
            self._swap_entry(organization_id, updated)
        self._changed()
        return updated

    def add_transaction(self, organization_id: str, transaction: Transaction) -> Optional[LedgerEntry]:
        """Append a transaction to an existing ledger entry."""
        with self.lock:
            existing = self.get_ledger_entry(organization_id)
            if existing is None:
                return None
            updated = replace(existing, transactions=existing.transactions + (transaction,))
            self._swap_entry(organization_id, updated)
        self._changed()
        return updated

    def update_transaction(
        self, organization_id: str, transaction_id: str, **changes: Any
    ) -> Optional[LedgerEntry]:
        """Merge the given fields into one transaction."""
        changes.pop("id", None)
        with self.lock:
            existing = self.get_ledger_entry(organization_id)
            if existing is None:
                return None
            if not any(txn.id == transaction_id for txn in existing.transactions):
                return None
            transactions = tuple(
                replace(txn, **changes) if txn.id == transaction_id else txn
                for txn in existing.transactions
            )
            updated = replace(existing, transactions=transactions)
            self._swap_entry(organization_id, updated)
        self._changed()
        return updated

    def delete_transaction(self, organization_id: str, transaction_id: str) -> Optional[LedgerEntry]:
        """Remove a transaction by id."""
        with self.lock:
            existing = self.get_ledger_entry(organization_id)
            if existing is None:
                return None
            remaining = tuple(txn for txn in existing.transactions if txn.id != transaction_id)
            if len(remaining) == len(existing.transactions):
                return existing
            updated = replace(existing, transactions=remaining)
            self._swap_entry(organization_id, updated)
        self._changed()
        return updated

    # Bulk
    def replace_all(
        self,
        collections: Iterable[Collection],
        ledger_entries: Iterable[LedgerEntry],
        notify: bool = True,
    ) -> None:
        """Overwrite the whole state tree without per-item validation.

        Args:
            collections: New collections
            ledger_entries: New ledger entries
            notify: If False, the scheduler is not told (used for hydration)
        """
        with self.lock:
            self._collections = tuple(collections)
            self._ledger = tuple(ledger_entries)
        logger.debug(
            "Replaced state: %d collections, %d ledger entries",
            len(self._collections),
            len(self._ledger),
        )
        if notify:
            self._changed()
