"""Utilities for resolving user-typed references to ids."""

from typing import Iterable

from mudir.domain.entities import Collection, Item, LedgerEntry, Transaction
from mudir.domain.errors import NotFoundError, ValidationError

SHORT_ID_LENGTH = 8
MIN_PREFIX_LENGTH = 4


def short_id(entity_id: str) -> str:
    """Abbreviated id shown in listings."""
    return entity_id[:SHORT_ID_LENGTH]


def _resolve(candidates: Iterable[tuple[str, str]], reference: str, kind: str) -> str:
    """Resolve an exact id, a unique id prefix, or a case-insensitive name.

    Args:
        candidates: (id, name) pairs
        reference: What the user typed
        kind: Noun used in error messages

    Returns:
        The matching id

    Raises:
        NotFoundError: If nothing matches
        ValidationError: If the reference is ambiguous
    """
    candidates = list(candidates)
    reference = reference.strip()

    for entity_id, _ in candidates:
        if entity_id == reference:
            return entity_id

    if len(reference) >= MIN_PREFIX_LENGTH:
        prefixed = [entity_id for entity_id, _ in candidates if entity_id.startswith(reference)]
        if len(prefixed) == 1:
            return prefixed[0]
        if len(prefixed) > 1:
            raise ValidationError(f"{kind} id prefix '{reference}' is ambiguous")

    wanted = reference.lower()
    named = [entity_id for entity_id, name in candidates if name.strip().lower() == wanted]
    if len(named) == 1:
        return named[0]
    if len(named) > 1:
        raise ValidationError(f"More than one {kind.lower()} is named '{reference}'; use its id")

    raise NotFoundError(f"{kind} '{reference}' not found")


def resolve_collection(collections: Iterable[Collection], reference: str) -> str:
    """Resolve a collection name or id to its id."""
    return _resolve(((c.id, c.name) for c in collections), reference, "Collection")


def resolve_item(collection: Collection, reference: str) -> str:
    """Resolve an item id or id prefix within a collection."""
    return _resolve(((item.id, "") for item in collection.data), reference, "Item")


def resolve_party(entries: Iterable[LedgerEntry], reference: str) -> str:
    """Resolve a party name or id to the organization id."""
    return _resolve(
        ((e.organization.id, e.organization.name) for e in entries), reference, "Party"
    )


def resolve_transaction(transactions: Iterable[Transaction], reference: str) -> str:
    """Resolve a transaction id or id prefix."""
    return _resolve(((t.id, "") for t in transactions), reference, "Transaction")
