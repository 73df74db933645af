"""Collection schema model: structural checks, key generation and editing."""

import itertools
from dataclasses import replace
from typing import Any, Iterable, Optional, Sequence

from mudir.domain.entities import FieldType, SchemaField
from mudir.domain.errors import (
    SchemaError,
    SchemaErrorKind,
    duplicate_field_keys,
)

FIELD_KEY_PREFIX = "field_"

# Schema used when a collection is created by name only
DEFAULT_INVENTORY_SCHEMA: tuple[SchemaField, ...] = (
    SchemaField(key="name", label="Name", type=FieldType.TEXT, required=True),
    SchemaField(key="quantity", label="Quantity", type=FieldType.NUMBER, default_value=0),
    SchemaField(key="price", label="Price", type=FieldType.CURRENCY),
)


def validate_schema(fields: Sequence[SchemaField]) -> None:
    """Validate the structure of a schema.

    Checks run in a fixed order and the first failure is reported.

    Args:
        fields: Ordered field definitions

    Raises:
        SchemaError: If the schema is empty, has duplicate keys, has a blank
            label, or has a select field without options
    """
    if len(fields) == 0:
        raise SchemaError(SchemaErrorKind.EMPTY_SCHEMA, "Please add at least one field")

    seen: set[str] = set()
    duplicates = []
    for schema_field in fields:
        if schema_field.key in seen:
            duplicates.append(schema_field.key)
        seen.add(schema_field.key)
    if duplicates:
        raise SchemaError(SchemaErrorKind.DUPLICATE_KEY, duplicate_field_keys(duplicates))

    if any(not (schema_field.label or "").strip() for schema_field in fields):
        raise SchemaError(SchemaErrorKind.EMPTY_LABEL, "All fields must have labels")

    for schema_field in fields:
        if schema_field.type == FieldType.SELECT and len(schema_field.options) == 0:
            raise SchemaError(
                SchemaErrorKind.MISSING_OPTIONS,
                f"Dropdown field '{schema_field.label}' must have at least one option",
            )


class FieldKeyGenerator:
    """Generate field keys that are unique within an editing session.

    Keys are ``field_<n>`` with ``n`` drawn from a counter that only moves
    forward, and any key already in use is skipped.
    """

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def next_key(self, existing_keys: Iterable[str] = ()) -> str:
        taken = set(existing_keys)
        while True:
            key = f"{FIELD_KEY_PREFIX}{next(self._counter)}"
            if key not in taken:
                return key


def add_field(
    fields: Sequence[SchemaField],
    generator: FieldKeyGenerator,
    label: str = "New Field",
    type: FieldType = FieldType.TEXT,
    required: bool = False,
    default_value: Any = None,
    options: Sequence[str] = (),
    reserved_keys: Iterable[str] = (),
) -> tuple[SchemaField, ...]:
    """Return a new schema with a freshly keyed field appended.

    ``reserved_keys`` lists keys the new field must not take even though
    they are not in ``fields``, such as values items still hold for a
    removed field.
    """
    taken = {schema_field.key for schema_field in fields}
    taken.update(reserved_keys)
    key = generator.next_key(taken)
    new_field = SchemaField(
        key=key,
        label=label,
        type=FieldType(type),
        required=required,
        default_value=default_value,
        options=tuple(options),
    )
    return tuple(fields) + (new_field,)


def update_field(
    fields: Sequence[SchemaField], key: str, **changes: Any
) -> tuple[SchemaField, ...]:
    """Return a new schema with the field ``key`` updated.

    Raises:
        KeyError: If no field has the given key
    """
    if "options" in changes and changes["options"] is not None:
        changes["options"] = tuple(changes["options"])
    if "type" in changes and changes["type"] is not None:
        changes["type"] = FieldType(changes["type"])

    updated = []
    found = False
    for schema_field in fields:
        if schema_field.key == key:
            schema_field = replace(schema_field, **changes)
            found = True
        updated.append(schema_field)
    if not found:
        raise KeyError(key)
    return tuple(updated)


def relabel_field(
    fields: Sequence[SchemaField], key: str, label: str
) -> tuple[SchemaField, ...]:
    """Return a new schema with the field ``key`` relabeled."""
    return update_field(fields, key, label=label)


def remove_field(fields: Sequence[SchemaField], key: str) -> tuple[SchemaField, ...]:
    """Return a new schema without the field ``key``.

    Values stored under the removed key stay on existing items.

    Raises:
        KeyError: If no field has the given key
    """
    remaining = tuple(schema_field for schema_field in fields if schema_field.key != key)
    if len(remaining) == len(fields):
        raise KeyError(key)
    return remaining


def find_field(fields: Sequence[SchemaField], key_or_label: str) -> Optional[SchemaField]:
    """Find a field by key, falling back to a case-insensitive label match."""
    for schema_field in fields:
        if schema_field.key == key_or_label:
            return schema_field
    wanted = key_or_label.strip().lower()
    for schema_field in fields:
        if schema_field.label.strip().lower() == wanted:
            return schema_field
    return None
