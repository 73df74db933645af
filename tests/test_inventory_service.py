"""Tests for InventoryService."""

import pytest

from mudir.domain.entities import FieldType, SchemaField
from mudir.domain.errors import (
    ConflictError,
    MissingRequiredFieldsError,
    NotFoundError,
    SchemaError,
    ValidationError,
)
from mudir.domain.schema import DEFAULT_INVENTORY_SCHEMA, FieldKeyGenerator, add_field


def test_quick_create_uses_default_schema(inventory_service):
    collection = inventory_service.quick_create_collection("Stationery")

    assert collection.schema == DEFAULT_INVENTORY_SCHEMA
    assert [f.key for f in collection.schema] == ["name", "quantity", "price"]
    assert collection.schema[0].required is True
    assert collection.schema[1].default_value == 0
    assert inventory_service.get_collection(collection.id) == collection


def test_create_with_custom_schema(inventory_service):
    generator = FieldKeyGenerator()
    fields = add_field((), generator, label="Title", required=True)
    fields = add_field(fields, generator, label="Unit", type=FieldType.SELECT, options=["kg"])

    collection = inventory_service.create_collection("Groceries", fields, description=" Food ")

    assert collection.description == "Food"
    assert [f.label for f in collection.schema] == ["Title", "Unit"]


def test_create_requires_name(inventory_service):
    with pytest.raises(ValidationError, match="collection name"):
        inventory_service.create_collection("  ", DEFAULT_INVENTORY_SCHEMA)
    assert inventory_service.list_collections() == []


def test_create_rejects_invalid_schema(inventory_service):
    with pytest.raises(SchemaError):
        inventory_service.create_collection("Empty", [])
    assert inventory_service.list_collections() == []


def test_create_rejects_taken_id(inventory_service):
    inventory_service.create_collection("A", DEFAULT_INVENTORY_SCHEMA, collection_id="same")

    with pytest.raises(ConflictError):
        inventory_service.create_collection("B", DEFAULT_INVENTORY_SCHEMA, collection_id="same")


def test_ids_are_unique(inventory_service):
    ids = {inventory_service.quick_create_collection(f"C{n}").id for n in range(20)}

    assert len(ids) == 20


def test_add_item_fills_defaults(inventory_service, sample_collection):
    item = inventory_service.add_item(sample_collection.id, {"name": "Red Pen"})

    assert item.values == {"name": "Red Pen", "quantity": 0}
    assert item.created_at is not None
    assert inventory_service.get_collection(sample_collection.id).data == (item,)


def test_add_item_missing_required(inventory_service, sample_collection):
    with pytest.raises(MissingRequiredFieldsError) as exc_info:
        inventory_service.add_item(sample_collection.id, {"price": 10})

    assert exc_info.value.labels == ["Name"]
    assert "Please fill all required fields" in str(exc_info.value)
    assert inventory_service.get_collection(sample_collection.id).data == ()


def test_add_item_unknown_collection(inventory_service):
    with pytest.raises(NotFoundError):
        inventory_service.add_item("missing", {"name": "x"})


def test_delete_item(inventory_service, sample_collection):
    item = inventory_service.add_item(sample_collection.id, {"name": "Red Pen"})

    inventory_service.delete_item(sample_collection.id, item.id)

    assert inventory_service.get_collection(sample_collection.id).data == ()
    with pytest.raises(NotFoundError):
        inventory_service.delete_item(sample_collection.id, item.id)


def test_rename_collection(inventory_service, sample_collection):
    renamed = inventory_service.rename_collection(sample_collection.id, "Office", description="")

    assert renamed.name == "Office"
    assert renamed.description is None


def test_edit_schema_does_not_revalidate_items(inventory_service, sample_collection):
    """Making a field required later leaves older items as they were."""
    inventory_service.add_item(sample_collection.id, {"name": "Red Pen"})
    schema = DEFAULT_INVENTORY_SCHEMA + (SchemaField(key="sku", label="SKU", required=True),)

    updated = inventory_service.edit_schema(sample_collection.id, schema)

    assert len(updated.data) == 1
    assert "sku" not in updated.data[0].values
    with pytest.raises(MissingRequiredFieldsError):
        inventory_service.add_item(sample_collection.id, {"name": "Blue Pen"})


def test_delete_collection(inventory_service, sample_collection):
    inventory_service.add_item(sample_collection.id, {"name": "Red Pen"})

    inventory_service.delete_collection(sample_collection.id)

    with pytest.raises(NotFoundError):
        inventory_service.get_collection(sample_collection.id)


def test_search(inventory_service, sample_collection):
    inventory_service.add_item(sample_collection.id, {"name": "Red Pen", "price": 10})
    inventory_service.add_item(sample_collection.id, {"name": "Notebook", "price": 45})

    found = inventory_service.search(sample_collection.id, "pen")

    assert [i.values["name"] for i in found] == ["Red Pen"]
