"""Shared domain error messages and error types."""

from enum import Enum
from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as an id that is already taken."""


class SchemaErrorKind(str, Enum):
    """Reasons a collection schema is rejected."""

    EMPTY_SCHEMA = "empty_schema"
    DUPLICATE_KEY = "duplicate_key"
    EMPTY_LABEL = "empty_label"
    MISSING_OPTIONS = "missing_options"


class SchemaError(ValidationError):
    """A collection schema failed structural validation."""

    def __init__(self, kind: SchemaErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class MissingRequiredFieldsError(ValidationError):
    """An item is missing values for required fields."""

    def __init__(self, labels: list[str]):
        super().__init__(missing_required_fields(labels))
        self.labels = labels


class BackupError(DomainError):
    """Base class for backup import/export failures."""


class BackupParseError(BackupError):
    """Backup file could not be read or is not JSON."""


class InvalidBackupError(BackupError):
    """Backup file is JSON but lacks the expected document shape."""


class ExportUnavailableError(BackupError):
    """Nothing to export, or no way to hand the export to the user."""


class StorageError(Exception):
    """Durable storage could not be read or written.

    Raised by storage backends only; the persistence bridge catches it.
    """


def collection_not_found(collection_id: str) -> str:
    """Return message for missing collection."""
    return f"Collection {collection_id} not found"


def item_not_found(item_id: str) -> str:
    """Return message for missing item."""
    return f"Item {item_id} not found"


def organization_not_found(organization_id: str) -> str:
    """Return message for missing organization."""
    return f"Party {organization_id} not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_collection_id(collection_id: str) -> str:
    """Return message for an id collision on collection creation."""
    return f"Collection with id '{collection_id}' already exists"


def duplicate_field_keys(keys: Iterable[str]) -> str:
    """Return message for duplicate schema keys."""
    return (
        f"Field keys must be unique. Duplicated: {', '.join(sorted(set(keys)))}"
    )


def missing_required_fields(labels: list[str]) -> str:
    """Return message for an item missing required values."""
    noun = "field" if len(labels) == 1 else "fields"
    return f"Please fill all required fields (missing {noun}: {', '.join(labels)})"


def invalid_backup() -> str:
    """Return message for a file that is not a backup document."""
    return "The selected file is not a valid backup (expected meta, collections and ledger)"
