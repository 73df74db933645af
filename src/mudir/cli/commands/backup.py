"""Backup export and import commands."""

import click

from mudir.backup import export_backup, import_backup
from mudir.cli.error_handling import handle_domain_error
from mudir.domain.errors import BackupError


@click.group()
def backup_group():
    """Export or restore a JSON backup of all data."""
    pass


@backup_group.command("export")
@click.option(
    "--dest",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Directory to write the backup file to",
)
@click.pass_context
def export_command(ctx, dest: str):
    """Export all data to mudir_backup_<date>.json.

    Pending changes are saved first, so the backup matches what you see.
    """
    workspace = ctx.obj["workspace"]
    workspace.close()

    try:
        path = export_backup(workspace.bridge, destination_dir=dest)
    except BackupError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Backup written to {path}")


@backup_group.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_command(ctx, file: str, yes: bool):
    """Replace all data with the contents of a backup FILE.

    The file must contain meta, collections and ledger. Nothing is changed
    if it does not.
    """
    workspace = ctx.obj["workspace"]

    try:
        snapshot = import_backup(file)
    except BackupError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        "Importing replaces all current collections, parties and settings. Continue?"
    ):
        click.echo("Import cancelled.")
        return

    workspace.apply(snapshot)
    click.echo(
        f"Imported {len(snapshot.collections)} collection(s) and "
        f"{len(snapshot.ledger)} ledger entr{'y' if len(snapshot.ledger) == 1 else 'ies'}"
    )


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(backup_group, name="backup")
