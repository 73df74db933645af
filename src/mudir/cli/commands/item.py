"""Inventory item commands."""

import click

from mudir.cli.error_handling import handle_domain_error
from mudir.cli.resolution import collection_or_exit, get_workspace, item_id_or_exit
from mudir.domain.entities import FieldType
from mudir.domain.errors import DomainError, NotFoundError
from mudir.domain.schema import find_field
from mudir.domain.search import search_items, stringify_value
from mudir.utils.field_parser import parse_assignment, parse_field_value
from mudir.utils.resolvers import short_id


def _display(value, field_type: FieldType, currency: str) -> str:
    if value is None or value == "":
        return "-"
    if field_type == FieldType.CURRENCY:
        return f"{currency} {stringify_value(value)}"
    if field_type == FieldType.BOOLEAN:
        return "yes" if value is True or value == "true" else "no"
    return stringify_value(value)


@click.group()
def item_group():
    """Manage items within a collection."""
    pass


@item_group.command("add")
@click.argument("collection", metavar="COLLECTION")
@click.option(
    "--set",
    "assignments",
    multiple=True,
    metavar="FIELD=VALUE",
    help="Field value; FIELD is a field key or label (repeatable)",
)
@click.pass_context
def add_item(ctx, collection: str, assignments: tuple[str, ...]):
    """Add an item to a collection.

    Values are checked against each field's type. Required fields must be
    given unless the field has a default.

    Examples:
        mudir item add Stationery --set Name="Red Pen" --set Quantity=40 --set Price=10
    """
    workspace = get_workspace(ctx)
    found = collection_or_exit(ctx, workspace, collection)

    try:
        values = {}
        for assignment in assignments:
            key, raw = parse_assignment(assignment)
            schema_field = find_field(found.schema, key)
            if schema_field is None:
                raise NotFoundError(f"Field '{key}' not found in '{found.name}'")
            values[schema_field.key] = parse_field_value(schema_field, raw)
        created = workspace.inventory.add_item(found.id, values)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added item {short_id(created.id)} to '{found.name}'")


@item_group.command("list")
@click.argument("collection", metavar="COLLECTION")
@click.option("--search", "-s", "query", default="", help="Case-insensitive text to look for in any field")
@click.pass_context
def list_items(ctx, collection: str, query: str):
    """List a collection's items, optionally filtered by a search query."""
    workspace = get_workspace(ctx)
    found = collection_or_exit(ctx, workspace, collection)
    currency = workspace.settings.settings.user_currency

    items = search_items(found, query)
    if not items:
        click.echo("No items found." if query.strip() else f"No items in '{found.name}' yet.")
        return

    headers = ["ID"] + [f.label for f in found.schema]
    rows = [
        [short_id(item.id)]
        + [_display(item.values.get(f.key), f.type, currency) for f in found.schema]
        for item in items
    ]
    widths = [
        max(len(str(cell)) for cell in [header] + [row[i] for row in rows])
        for i, header in enumerate(headers)
    ]

    click.echo(f"\n{found.name}: {len(items)} item(s)")
    click.echo("  ".join(h.ljust(w) for h, w in zip(headers, widths)))
    click.echo("-" * (sum(widths) + 2 * (len(widths) - 1)))
    for row in rows:
        click.echo("  ".join(str(cell).ljust(w) for cell, w in zip(row, widths)))


@item_group.command("delete")
@click.argument("collection", metavar="COLLECTION")
@click.argument("item", metavar="ITEM_ID")
@click.pass_context
def delete_item(ctx, collection: str, item: str):
    """Delete an item. ITEM_ID may be abbreviated to a unique prefix."""
    workspace = get_workspace(ctx)
    found = collection_or_exit(ctx, workspace, collection)
    item_id = item_id_or_exit(ctx, found, item)

    try:
        workspace.inventory.delete_item(found.id, item_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted item {short_id(item_id)}")


def register_commands(cli):
    """Register item commands with main CLI."""
    cli.add_command(item_group, name="item")
