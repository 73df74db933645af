"""Demo data and reset commands."""

import click


@click.command("seed")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def seed(ctx, yes: bool):
    """Replace all data with a small demo data set."""
    if not yes and not click.confirm("This replaces all current data with demo data. Continue?"):
        click.echo("Seeding cancelled.")
        return

    workspace = ctx.obj["workspace"]
    workspace.seed()
    click.echo(
        f"Loaded demo data: {len(workspace.store.collections)} collection(s), "
        f"{len(workspace.store.ledger_entries)} part{'y' if len(workspace.store.ledger_entries) == 1 else 'ies'}"
    )


@click.command("clear")
@click.option("--keep-settings", is_flag=True, help="Keep name and currency settings")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear(ctx, keep_settings: bool, yes: bool):
    """Delete all collections and parties."""
    if not yes and not click.confirm("Delete ALL data? This action cannot be undone."):
        click.echo("Clear cancelled.")
        return

    ctx.obj["workspace"].clear(keep_settings=keep_settings)
    click.echo("All data cleared.")


def register_commands(cli):
    """Register data commands with main CLI."""
    cli.add_command(seed)
    cli.add_command(clear)
