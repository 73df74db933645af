"""Collection management commands."""

import click

from mudir.cli.error_handling import handle_domain_error
from mudir.cli.resolution import collection_or_exit, get_workspace
from mudir.domain.errors import DomainError, NotFoundError, ValidationError
from mudir.domain.schema import (
    DEFAULT_INVENTORY_SCHEMA,
    FieldKeyGenerator,
    add_field,
    find_field,
    relabel_field,
    remove_field,
)
from mudir.domain.search import stringify_value
from mudir.utils.field_parser import parse_field_spec
from mudir.utils.resolvers import short_id


def describe_field(schema_field) -> str:
    """One-line description of a schema field."""
    parts = [schema_field.type.value]
    if schema_field.required:
        parts.append("required")
    if schema_field.options:
        parts.append("options: " + " | ".join(schema_field.options))
    if schema_field.default_value is not None:
        parts.append(f"default: {stringify_value(schema_field.default_value)}")
    return f"{schema_field.label} [{schema_field.key}] ({', '.join(parts)})"


@click.group()
def collection_group():
    """Manage inventory collections and their fields."""
    pass


@collection_group.command("create")
@click.argument("name", metavar="NAME")
@click.option("--description", help="Optional description")
@click.option(
    "--field",
    "fields",
    multiple=True,
    metavar="SPEC",
    help="Field as Label:type[:required][:options=a|b][:default=x] (repeatable)",
)
@click.pass_context
def create_collection(ctx, name: str, description: str | None, fields: tuple[str, ...]):
    """Create a new collection.

    Without --field the collection gets the default Name (required),
    Quantity and Price fields.

    Field types: text, number, currency, date, boolean, select.

    Examples:
        mudir collection create "Stationery"
        mudir collection create "Groceries" --field "Name:text:required" \\
            --field "Unit:select:options=kg|litre" --field "Price:currency"
    """
    workspace = get_workspace(ctx)

    try:
        if fields:
            generator = FieldKeyGenerator()
            schema = ()
            for spec in fields:
                schema = add_field(schema, generator, **parse_field_spec(spec))
        else:
            schema = DEFAULT_INVENTORY_SCHEMA
        created = workspace.inventory.create_collection(name, schema, description=description)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created collection '{created.name}' (ID: {short_id(created.id)})")
    for schema_field in created.schema:
        click.echo(f"  {describe_field(schema_field)}")


@collection_group.command("list")
@click.pass_context
def list_collections(ctx):
    """List all collections."""
    workspace = get_workspace(ctx)

    collections = workspace.inventory.list_collections()
    if not collections:
        click.echo("No collections found.")
        return

    click.echo("\nCollections:")
    click.echo("-" * 60)
    for c in collections:
        count = len(c.data)
        click.echo(f"ID: {short_id(c.id):8s} | {c.name:24s} | {count} item{'s' if count != 1 else ''}")


@collection_group.command("show")
@click.argument("collection", metavar="COLLECTION")
@click.pass_context
def show_collection(ctx, collection: str):
    """Show a collection's fields.

    COLLECTION can be a collection name or ID.
    """
    workspace = get_workspace(ctx)
    found = collection_or_exit(ctx, workspace, collection)

    click.echo(f"\n{found.name} (ID: {found.id})")
    if found.description:
        click.echo(found.description)
    click.echo(f"{len(found.data)} item(s)")
    click.echo("\nFields:")
    for schema_field in found.schema:
        click.echo(f"  {describe_field(schema_field)}")


@collection_group.command("rename")
@click.argument("collection", metavar="COLLECTION")
@click.argument("new_name", metavar="NEW_NAME")
@click.option("--description", help="New description (empty string clears it)")
@click.pass_context
def rename_collection(ctx, collection: str, new_name: str, description: str | None):
    """Rename a collection."""
    workspace = get_workspace(ctx)
    found = collection_or_exit(ctx, workspace, collection)

    try:
        workspace.inventory.rename_collection(found.id, new_name, description)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed collection to '{new_name.strip()}'")


@collection_group.command("delete")
@click.argument("collection", metavar="COLLECTION")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_collection(ctx, collection: str, yes: bool):
    """Delete a collection and all of its items."""
    workspace = get_workspace(ctx)
    found = collection_or_exit(ctx, workspace, collection)

    if not yes and not click.confirm(
        f"Delete collection '{found.name}' and its {len(found.data)} item(s)?"
    ):
        click.echo("Deletion cancelled.")
        return

    workspace.inventory.delete_collection(found.id)
    click.echo(f"Deleted collection '{found.name}'")


@collection_group.command("add-field")
@click.argument("collection", metavar="COLLECTION")
@click.argument("spec", metavar="SPEC")
@click.pass_context
def add_collection_field(ctx, collection: str, spec: str):
    """Add a field to a collection.

    SPEC is Label:type[:required][:options=a|b][:default=x]. Existing items
    are not changed, even when the new field is required.

    Examples:
        mudir collection add-field Stationery "Brand:text"
        mudir collection add-field Stationery "Colour:select:options=red|blue"
    """
    workspace = get_workspace(ctx)
    found = collection_or_exit(ctx, workspace, collection)

    try:
        schema = add_field(
            found.schema,
            FieldKeyGenerator(),
            reserved_keys=found.used_keys(),
            **parse_field_spec(spec),
        )
        updated = workspace.inventory.edit_schema(found.id, schema)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added field {describe_field(updated.schema[-1])}")


@collection_group.command("remove-field")
@click.argument("collection", metavar="COLLECTION")
@click.argument("field", metavar="FIELD")
@click.pass_context
def remove_collection_field(ctx, collection: str, field: str):
    """Remove a field from a collection.

    FIELD can be a field key or label. Values already stored under the field
    stay on existing items but are no longer shown or searched.
    """
    workspace = get_workspace(ctx)
    found = collection_or_exit(ctx, workspace, collection)

    try:
        schema_field = find_field(found.schema, field)
        if schema_field is None:
            raise NotFoundError(f"Field '{field}' not found in '{found.name}'")
        workspace.inventory.edit_schema(found.id, remove_field(found.schema, schema_field.key))
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Removed field '{schema_field.label}'")


@collection_group.command("relabel-field")
@click.argument("collection", metavar="COLLECTION")
@click.argument("field", metavar="FIELD")
@click.argument("label", metavar="NEW_LABEL")
@click.pass_context
def relabel_collection_field(ctx, collection: str, field: str, label: str):
    """Change the display label of a field (its key stays the same)."""
    workspace = get_workspace(ctx)
    found = collection_or_exit(ctx, workspace, collection)

    try:
        schema_field = find_field(found.schema, field)
        if schema_field is None:
            raise NotFoundError(f"Field '{field}' not found in '{found.name}'")
        if not label.strip():
            raise ValidationError("All fields must have labels")
        workspace.inventory.edit_schema(
            found.id, relabel_field(found.schema, schema_field.key, label.strip())
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Relabeled '{schema_field.label}' to '{label.strip()}'")


def register_commands(cli):
    """Register collection commands with main CLI."""
    cli.add_command(collection_group, name="collection")
