"""Mapper functions between domain entities and the JSON document.

The document shape is ``{"meta": ..., "collections": [...], "ledger": [...]}``
with camelCase member names. The same shape is used for storage and for
backup files, so both directions must round-trip exactly.
"""

import json
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Any, Optional

from dateutil import parser as date_parser

from mudir.domain import entities as domain

DOCUMENT_KEYS = ("meta", "collections", "ledger")


def _datetime_to_json(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


def _datetime_from_json(value: Optional[str]) -> Optional[datetime]:
    if value is None or value == "":
        return None
    parsed = date_parser.isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _amount_to_json(amount: Decimal) -> int | float:
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def _json_default(value: Any) -> Any:
    """Encode the non-JSON types that can end up in item values."""
    if isinstance(value, Decimal):
        return _amount_to_json(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


# Settings
def settings_to_json(settings: domain.AppSettings) -> dict[str, Any]:
    return {
        "appVersion": settings.app_version,
        "organizationName": settings.organization_name,
        "userCurrency": settings.user_currency,
        "exportDate": _datetime_to_json(settings.export_date),
        "isNewUser": settings.is_new_user,
    }


def settings_from_json(data: dict[str, Any]) -> domain.AppSettings:
    defaults = domain.AppSettings()
    is_new_user = data.get("isNewUser")
    return domain.AppSettings(
        app_version=data.get("appVersion") or defaults.app_version,
        organization_name=data.get("organizationName") or "",
        user_currency=data.get("userCurrency") or defaults.user_currency,
        export_date=_datetime_from_json(data.get("exportDate")),
        is_new_user=defaults.is_new_user if is_new_user is None else bool(is_new_user),
    )


# Inventory
def schema_field_to_json(schema_field: domain.SchemaField) -> dict[str, Any]:
    data: dict[str, Any] = {
        "key": schema_field.key,
        "label": schema_field.label,
        "type": schema_field.type.value,
        "required": schema_field.required,
    }
    if schema_field.default_value is not None:
        data["defaultValue"] = schema_field.default_value
    if schema_field.options:
        data["options"] = list(schema_field.options)
    return data


def schema_field_from_json(data: dict[str, Any]) -> domain.SchemaField:
    return domain.SchemaField(
        key=data["key"],
        label=data["label"],
        type=domain.FieldType(data.get("type", domain.FieldType.TEXT.value)),
        required=bool(data.get("required", False)),
        default_value=data.get("defaultValue"),
        options=tuple(data.get("options") or ()),
    )


def item_to_json(item: domain.Item) -> dict[str, Any]:
    return {
        "id": item.id,
        "createdAt": _datetime_to_json(item.created_at),
        "values": dict(item.values),
    }


def item_from_json(data: dict[str, Any]) -> domain.Item:
    return domain.Item(
        id=data["id"],
        created_at=_datetime_from_json(data.get("createdAt")),
        values=dict(data.get("values") or {}),
    )


def collection_to_json(collection: domain.Collection) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": collection.id,
        "name": collection.name,
    }
    if collection.description is not None:
        data["description"] = collection.description
    data["schema"] = [schema_field_to_json(f) for f in collection.schema]
    data["data"] = [item_to_json(item) for item in collection.data]
    return data


def collection_from_json(data: dict[str, Any]) -> domain.Collection:
    return domain.Collection(
        id=data["id"],
        name=data["name"],
        description=data.get("description"),
        schema=tuple(schema_field_from_json(f) for f in data.get("schema") or ()),
        data=tuple(item_from_json(item) for item in data.get("data") or ()),
    )


# Ledger
def organization_to_json(organization: domain.Organization) -> dict[str, Any]:
    data: dict[str, Any] = {"id": organization.id, "name": organization.name}
    if organization.phone is not None:
        data["phone"] = organization.phone
    if organization.email is not None:
        data["email"] = organization.email
    return data


def organization_from_json(data: dict[str, Any]) -> domain.Organization:
    return domain.Organization(
        id=data["id"],
        name=data["name"],
        phone=data.get("phone"),
        email=data.get("email"),
    )


def transaction_to_json(transaction: domain.Transaction) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": transaction.id,
        "organizationId": transaction.organization_id,
        "type": transaction.type.value,
        "amount": _amount_to_json(transaction.amount),
        "date": _datetime_to_json(transaction.date),
    }
    if transaction.remark is not None:
        data["remark"] = transaction.remark
    return data


def transaction_from_json(data: dict[str, Any]) -> domain.Transaction:
    return domain.Transaction(
        id=data["id"],
        organization_id=data["organizationId"],
        type=domain.TransactionType(data["type"]),
        amount=Decimal(str(data["amount"])),
        date=_datetime_from_json(data["date"]),
        remark=data.get("remark"),
    )


def ledger_entry_to_json(entry: domain.LedgerEntry) -> dict[str, Any]:
    return {
        "organization": organization_to_json(entry.organization),
        "transactions": [transaction_to_json(t) for t in entry.transactions],
    }


def ledger_entry_from_json(data: dict[str, Any]) -> domain.LedgerEntry:
    return domain.LedgerEntry(
        organization=organization_from_json(data["organization"]),
        transactions=tuple(transaction_from_json(t) for t in data.get("transactions") or ()),
    )


# Whole document
def snapshot_to_document(snapshot: domain.Snapshot) -> dict[str, Any]:
    """Convert a snapshot to the document dictionary."""
    return {
        "meta": settings_to_json(snapshot.meta),
        "collections": [collection_to_json(c) for c in snapshot.collections],
        "ledger": [ledger_entry_to_json(e) for e in snapshot.ledger],
    }


def snapshot_from_document(data: dict[str, Any]) -> domain.Snapshot:
    """Convert a document dictionary to a snapshot.

    Raises:
        KeyError, TypeError, ValueError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise TypeError("Document must be a JSON object")
    return domain.Snapshot(
        meta=settings_from_json(data["meta"]),
        collections=tuple(collection_from_json(c) for c in data["collections"]),
        ledger=tuple(ledger_entry_from_json(e) for e in data["ledger"]),
    )


def dumps(snapshot: domain.Snapshot) -> str:
    """Serialize a snapshot to indented JSON text."""
    return json.dumps(
        snapshot_to_document(snapshot), indent=2, ensure_ascii=False, default=_json_default
    )


def loads(text: str) -> domain.Snapshot:
    """Parse JSON text into a snapshot."""
    return snapshot_from_document(json.loads(text))
