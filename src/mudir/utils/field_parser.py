"""Typed input handling for schema fields.

The validation engine only checks that required values are present; this
module is what keeps a number field from holding "abc".
"""

from typing import Any

from mudir.domain.entities import FieldType, SchemaField
from mudir.domain.errors import ValidationError
from mudir.utils.amount_parser import parse_amount
from mudir.utils.date_parser import parse_date

_TRUE_WORDS = {"true", "yes", "y", "1", "on"}
_FALSE_WORDS = {"false", "no", "n", "0", "off"}


def parse_field_value(schema_field: SchemaField, raw: str) -> Any:
    """Convert user input into a value of the field's type.

    Blank input is returned as "" so that required-field checks treat it as
    missing.

    Args:
        schema_field: Field the value belongs to
        raw: Text entered by the user

    Returns:
        str for text/date/select fields, int or float for number/currency
        fields, bool for boolean fields

    Raises:
        ValidationError: If the input does not fit the field type
    """
    text = raw.strip()
    if text == "":
        return ""

    field_type = schema_field.type
    label = schema_field.label

    if field_type in (FieldType.NUMBER, FieldType.CURRENCY):
        try:
            amount = parse_amount(text)
        except ValueError:
            raise ValidationError(f"'{label}' must be a number, got '{raw}'")
        if amount == amount.to_integral_value():
            return int(amount)
        return float(amount)

    if field_type == FieldType.DATE:
        try:
            return parse_date(text).isoformat()
        except ValueError:
            raise ValidationError(f"'{label}' must be a date, got '{raw}'")

    if field_type == FieldType.BOOLEAN:
        lowered = text.lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        raise ValidationError(f"'{label}' must be yes or no, got '{raw}'")

    if field_type == FieldType.SELECT:
        for option in schema_field.options:
            if option.lower() == text.lower():
                return option
        raise ValidationError(
            f"'{label}' must be one of: {', '.join(schema_field.options)}"
        )

    return text


def parse_assignment(assignment: str) -> tuple[str, str]:
    """Split a ``key=value`` command line assignment.

    Raises:
        ValidationError: If there is no '=' or the key is blank
    """
    if "=" not in assignment:
        raise ValidationError(f"Expected KEY=VALUE, got '{assignment}'")
    key, value = assignment.split("=", 1)
    if not key.strip():
        raise ValidationError(f"Expected KEY=VALUE, got '{assignment}'")
    return key.strip(), value




def parse_field_spec(spec: str) -> dict[str, Any]:
    """Parse a field definition like ``Label:type[:required][:options=a|b][:default=x]``.

    Examples:
        "Name:text:required"
        "Unit:select:options=kg|litre|packet"
        "Quantity:number:default=0"

    Returns:
        Dict with label, type, required, options and default_value, ready
        for schema.add_field

    Raises:
        ValidationError: If the spec is malformed
    """
    parts = [part.strip() for part in spec.split(":")]
    label = parts[0]
    if not label:
        raise ValidationError(f"Field spec '{spec}' has no label")

    type_name = parts[1].lower() if len(parts) > 1 and parts[1] else FieldType.TEXT.value
    try:
        field_type = FieldType(type_name)
    except ValueError:
        choices = ", ".join(t.value for t in FieldType)
        raise ValidationError(f"Unknown field type '{type_name}' (choose from: {choices})")

    required = False
    options: tuple[str, ...] = ()
    default_raw = None
    for part in parts[2:]:
        if part.lower() == "required":
            required = True
        elif part.lower().startswith("options="):
            options = tuple(o.strip() for o in part[len("options="):].split("|") if o.strip())
        elif part.lower().startswith("default="):
            default_raw = part[len("default="):]
        elif part:
            raise ValidationError(f"Unknown field attribute '{part}' in '{spec}'")

    default_value = None
    if default_raw is not None:
        probe = SchemaField(key="", label=label, type=field_type, options=options)
        default_value = parse_field_value(probe, default_raw)
        if default_value == "":
            default_value = None

    return {
        "label": label,
        "type": field_type,
        "required": required,
        "options": options,
        "default_value": default_value,
    }
