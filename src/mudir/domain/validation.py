"""Required-field validation for new items."""

from typing import Any, Mapping, Sequence

from mudir.domain.entities import SchemaField


def is_present(value: Any) -> bool:
    """Return True if a value counts as filled in.

    None and the empty string are absent; 0 and False are present.
    """
    return value is not None and value != ""


def missing_required_fields(
    schema: Sequence[SchemaField], values: Mapping[str, Any]
) -> list[SchemaField]:
    """Return the required fields whose value is absent, in schema order."""
    return [
        schema_field
        for schema_field in schema
        if schema_field.required and not is_present(values.get(schema_field.key))
    ]


def validate_item_values(schema: Sequence[SchemaField], values: Mapping[str, Any]) -> bool:
    """Decide whether an item with ``values`` may be created.

    Only presence of required fields is checked; value types are constrained
    by the input layer.
    """
    return not missing_required_fields(schema, values)
