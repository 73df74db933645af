"""Inventory domain service."""

import uuid
from datetime import datetime, UTC
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

from mudir.domain.entities import Collection, Item, SchemaField
from mudir.domain.errors import (
    ConflictError,
    MissingRequiredFieldsError,
    NotFoundError,
    ValidationError,
    collection_not_found,
    duplicate_collection_id,
    item_not_found,
)
from mudir.domain.schema import DEFAULT_INVENTORY_SCHEMA, validate_schema
from mudir.domain.search import search_items
from mudir.domain.validation import is_present, missing_required_fields

if TYPE_CHECKING:
    # Imported for annotations only; the store imports domain modules
    from mudir.store.record_store import RecordStore


def new_id() -> str:
    """Generate a collision-proof entity id."""
    return uuid.uuid4().hex


class InventoryService:
    """Service for managing collections and their items."""

    def __init__(self, store: "RecordStore"):
        """Initialize inventory service.

        Args:
            store: Record store instance
        """
        self.store = store

    def list_collections(self) -> list[Collection]:
        return list(self.store.collections)

    def get_collection(self, collection_id: str) -> Collection:
        """Get a collection by id.

        Raises:
            NotFoundError: If the collection does not exist
        """
        collection = self.store.get_collection(collection_id)
        if collection is None:
            raise NotFoundError(collection_not_found(collection_id))
        return collection

    def create_collection(
        self,
        name: str,
        fields: Sequence[SchemaField],
        description: Optional[str] = None,
        collection_id: Optional[str] = None,
    ) -> Collection:
        """Create a new collection with an initial schema.

        Args:
            name: Collection name
            fields: Initial schema
            description: Optional description
            collection_id: Explicit id (generated if None)

        Returns:
            The created collection

        Raises:
            ValidationError: If the name is blank
            SchemaError: If the schema is invalid
            ConflictError: If collection_id is already in use
        """
        if not name.strip():
            raise ValidationError("Please enter a collection name")
        validate_schema(fields)

        collection_id = collection_id or new_id()
        if self.store.get_collection(collection_id) is not None:
            raise ConflictError(duplicate_collection_id(collection_id))

        description = (description or "").strip() or None
        collection = Collection(
            id=collection_id,
            name=name.strip(),
            description=description,
            schema=tuple(fields),
        )
        return self.store.add_collection(collection)

    def quick_create_collection(self, name: str) -> Collection:
        """Create a collection with the default name/quantity/price schema."""
        return self.create_collection(name, DEFAULT_INVENTORY_SCHEMA)

    def rename_collection(
        self, collection_id: str, name: str, description: Optional[str] = None
    ) -> Collection:
        """Rename a collection and optionally change its description.

        Raises:
            ValidationError: If the name is blank
            NotFoundError: If the collection does not exist
        """
        if not name.strip():
            raise ValidationError("Please enter a collection name")
        changes: dict[str, Any] = {"name": name.strip()}
        if description is not None:
            changes["description"] = description.strip() or None
        updated = self.store.update_collection(collection_id, **changes)
        if updated is None:
            raise NotFoundError(collection_not_found(collection_id))
        return updated

    def edit_schema(self, collection_id: str, fields: Sequence[SchemaField]) -> Collection:
        """Replace a collection's schema.

        Existing items are not migrated. Values under removed keys stay, and
        items created before a field became required are not re-checked.

        Raises:
            SchemaError: If the schema is invalid
            NotFoundError: If the collection does not exist
        """
        updated = self.store.set_collection_schema(collection_id, fields)
        if updated is None:
            raise NotFoundError(collection_not_found(collection_id))
        return updated

    def delete_collection(self, collection_id: str) -> Collection:
        """Delete a collection and every item in it.

        Raises:
            NotFoundError: If the collection does not exist
        """
        deleted = self.store.delete_collection(collection_id)
        if deleted is None:
            raise NotFoundError(collection_not_found(collection_id))
        return deleted

    def add_item(self, collection_id: str, values: Mapping[str, Any]) -> Item:
        """Create an item after filling defaults and checking required fields.

        Args:
            collection_id: Owning collection
            values: Field key to value mapping

        Returns:
            The created item

        Raises:
            NotFoundError: If the collection does not exist
            MissingRequiredFieldsError: If a required field has no value
        """
        collection = self.get_collection(collection_id)

        filled = dict(values)
        for schema_field in collection.schema:
            if not is_present(filled.get(schema_field.key)) and schema_field.default_value is not None:
                filled[schema_field.key] = schema_field.default_value

        missing = missing_required_fields(collection.schema, filled)
        if missing:
            raise MissingRequiredFieldsError([f.label for f in missing])

        item = Item(id=new_id(), created_at=datetime.now(UTC), values=filled)
        self.store.add_item(collection_id, item)
        return item

    def delete_item(self, collection_id: str, item_id: str) -> None:
        """Delete an item.

        Raises:
            NotFoundError: If the collection or item does not exist
        """
        collection = self.get_collection(collection_id)
        if not any(item.id == item_id for item in collection.data):
            raise NotFoundError(item_not_found(item_id))
        self.store.delete_item(collection_id, item_id)

    def search(self, collection_id: str, query: str) -> list[Item]:
        """Return the collection's items matching ``query``.

        Raises:
            NotFoundError: If the collection does not exist
        """
        return search_items(self.get_collection(collection_id), query)
