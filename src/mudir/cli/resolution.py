"""CLI helpers for reference resolution and shared rendering."""

from __future__ import annotations

import click

from mudir.domain.entities import Collection, LedgerEntry
from mudir.domain.errors import DomainError
from mudir.cli.error_handling import handle_domain_error
from mudir.utils.resolvers import (
    resolve_collection,
    resolve_item,
    resolve_party,
    resolve_transaction,
)
from mudir.workspace import Workspace


def get_workspace(ctx: click.Context) -> Workspace:
    """Return the workspace opened by the main command group."""
    return ctx.obj["workspace"]


def collection_or_exit(ctx: click.Context, workspace: Workspace, reference: str) -> Collection:
    """Resolve a collection name or id, or exit with a CLI error."""
    try:
        collection_id = resolve_collection(workspace.store.collections, reference)
        return workspace.inventory.get_collection(collection_id)
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def item_id_or_exit(ctx: click.Context, collection: Collection, reference: str) -> str:
    """Resolve an item id or id prefix, or exit with a CLI error."""
    try:
        return resolve_item(collection, reference)
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def party_or_exit(ctx: click.Context, workspace: Workspace, reference: str) -> LedgerEntry:
    """Resolve a party name or id, or exit with a CLI error."""
    try:
        organization_id = resolve_party(workspace.store.ledger_entries, reference)
        return workspace.ledger.get_entry(organization_id)
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def transaction_id_or_exit(ctx: click.Context, entry: LedgerEntry, reference: str) -> str:
    """Resolve a transaction id or id prefix, or exit with a CLI error."""
    try:
        return resolve_transaction(entry.transactions, reference)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
