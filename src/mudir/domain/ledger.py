"""Ledger domain service."""

import uuid
from datetime import datetime, UTC
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Optional

from mudir.config import AMOUNT_QUANTUM, MAX_AMOUNT
from mudir.domain.balance import Statement, build_statement, compute_balance
from mudir.domain.entities import LedgerEntry, Organization, Transaction, TransactionType
from mudir.domain.errors import (
    NotFoundError,
    ValidationError,
    organization_not_found,
    transaction_not_found,
)

if TYPE_CHECKING:
    # Imported for annotations only; the store imports domain modules
    from mudir.store.record_store import RecordStore


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def _checked_amount(amount: Decimal) -> Decimal:
    """Round to cents and enforce the storable range."""
    if amount < 0:
        raise ValidationError("Amount must not be negative")
    # Compared before rounding too; quantize fails past the context precision
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Amount must not exceed {MAX_AMOUNT:,}")
    rounded = amount.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)
    if rounded > MAX_AMOUNT:
        raise ValidationError(f"Amount must not exceed {MAX_AMOUNT:,}")
    return rounded


class LedgerService:
    """Service for managing parties and their credit/debit transactions."""

    def __init__(self, store: "RecordStore"):
        """Initialize ledger service.

        Args:
            store: Record store instance
        """
        self.store = store

    def list_entries(self) -> list[LedgerEntry]:
        return list(self.store.ledger_entries)

    def get_entry(self, organization_id: str) -> LedgerEntry:
        """Get a ledger entry by organization id.

        Raises:
            NotFoundError: If the party does not exist
        """
        entry = self.store.get_ledger_entry(organization_id)
        if entry is None:
            raise NotFoundError(organization_not_found(organization_id))
        return entry

    def add_party(
        self, name: str, phone: Optional[str] = None, email: Optional[str] = None
    ) -> Organization:
        """Add a party with an empty transaction history.

        Raises:
            ValidationError: If the name is blank
        """
        if not name.strip():
            raise ValidationError("Party name cannot be empty")
        organization = Organization(
            id=uuid.uuid4().hex,
            name=name.strip(),
            phone=_clean(phone),
            email=_clean(email),
        )
        self.store.add_organization(organization)
        return organization

    def update_party(
        self,
        organization_id: str,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Organization:
        """Update the given party fields; omitted (None) fields are unchanged.

        An empty string clears phone or email.

        Raises:
            ValidationError: If the new name is blank
            NotFoundError: If the party does not exist
        """
        changes: dict[str, Any] = {}
        if name is not None:
            if not name.strip():
                raise ValidationError("Party name cannot be empty")
            changes["name"] = name.strip()
        if phone is not None:
            changes["phone"] = _clean(phone)
        if email is not None:
            changes["email"] = _clean(email)

        updated = self.store.update_organization(organization_id, **changes)
        if updated is None:
            raise NotFoundError(organization_not_found(organization_id))
        return updated.organization

    def delete_party(self, organization_id: str) -> LedgerEntry:
        """Delete a party and all of its transactions.

        Raises:
            NotFoundError: If the party does not exist
        """
        deleted = self.store.delete_organization(organization_id)
        if deleted is None:
            raise NotFoundError(organization_not_found(organization_id))
        return deleted

    def record(
        self,
        organization_id: str,
        type: TransactionType,
        amount: Decimal,
        remark: Optional[str] = None,
        when: Optional[datetime] = None,
    ) -> Transaction:
        """Record a credit or debit against a party.

        Raises:
            ValidationError: If the amount is negative or too large
            NotFoundError: If the party does not exist
        """
        amount = _checked_amount(amount)
        self.get_entry(organization_id)

        transaction = Transaction(
            id=uuid.uuid4().hex,
            organization_id=organization_id,
            type=TransactionType(type),
            amount=amount,
            date=when or datetime.now(UTC),
            remark=_clean(remark),
        )
        self.store.add_transaction(organization_id, transaction)
        return transaction

    def edit_transaction(
        self,
        organization_id: str,
        transaction_id: str,
        type: Optional[TransactionType] = None,
        amount: Optional[Decimal] = None,
        remark: Optional[str] = None,
        when: Optional[datetime] = None,
    ) -> Transaction:
        """Update the given transaction fields; None means unchanged.

        Raises:
            ValidationError: If the amount is negative or too large
            NotFoundError: If the party or transaction does not exist
        """
        changes: dict[str, Any] = {}
        if type is not None:
            changes["type"] = TransactionType(type)
        if amount is not None:
            changes["amount"] = _checked_amount(amount)
        if remark is not None:
            changes["remark"] = _clean(remark)
        if when is not None:
            changes["date"] = when

        self.get_entry(organization_id)
        updated = self.store.update_transaction(organization_id, transaction_id, **changes)
        if updated is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        for transaction in updated.transactions:
            if transaction.id == transaction_id:
                return transaction
        raise NotFoundError(transaction_not_found(transaction_id))

    def delete_transaction(self, organization_id: str, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the party or transaction does not exist
        """
        entry = self.get_entry(organization_id)
        if not any(t.id == transaction_id for t in entry.transactions):
            raise NotFoundError(transaction_not_found(transaction_id))
        self.store.delete_transaction(organization_id, transaction_id)

    def balance(self, organization_id: str) -> Decimal:
        """Net amount the party owes the shop (negative if the shop owes)."""
        return compute_balance(self.get_entry(organization_id).transactions)

    def statement(
        self, organization_id: str, currency: str, organization_display_name: str
    ) -> Statement:
        """Prepare a statement for the party, newest transactions first."""
        entry = self.get_entry(organization_id)
        return build_statement(
            entry.organization,
            entry.transactions,
            currency=currency,
            organization_display_name=organization_display_name,
        )
