"""Application settings commands."""

import click

from mudir.config import CURRENCIES


def _currency_label(symbol: str) -> str:
    for candidate, label in CURRENCIES:
        if candidate == symbol:
            return f"{symbol} ({label})"
    return symbol


@click.group()
def settings_group():
    """View and change application settings."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show the current settings."""
    settings = ctx.obj["workspace"].settings.settings

    click.echo(f"Organization name: {settings.organization_name or '(not set)'}")
    click.echo(f"Currency: {_currency_label(settings.user_currency)}")
    click.echo(f"App version: {settings.app_version}")
    if settings.export_date is not None:
        click.echo(f"Last saved: {settings.export_date.isoformat()}")
    if settings.is_new_user:
        click.echo("\nRun 'mudir settings setup' to finish setting up.")


@settings_group.command("name")
@click.argument("name", metavar="NAME")
@click.pass_context
def set_name(ctx, name: str):
    """Set the shop or organization name shown on statements."""
    updated = ctx.obj["workspace"].settings.update_organization_name(name.strip())
    click.echo(f"Organization name set to '{updated.organization_name}'")


@settings_group.command("currency")
@click.argument("symbol", type=click.Choice([symbol for symbol, _ in CURRENCIES]))
@click.pass_context
def set_currency(ctx, symbol: str):
    """Set the currency symbol used when showing amounts."""
    ctx.obj["workspace"].settings.update_currency(symbol)
    click.echo(f"Currency set to {_currency_label(symbol)}")


@settings_group.command("setup")
@click.option("--name", help="Organization name")
@click.option(
    "--currency",
    type=click.Choice([symbol for symbol, _ in CURRENCIES]),
    help="Currency symbol",
)
@click.pass_context
def setup(ctx, name: str | None, currency: str | None):
    """First-run setup: set name and currency, then mark setup complete.

    Prompts for anything not passed as an option.
    """
    model = ctx.obj["workspace"].settings

    if name is None:
        name = click.prompt("Organization name", default=model.settings.organization_name or "")
    if currency is None:
        currency = click.prompt(
            "Currency",
            type=click.Choice([symbol for symbol, _ in CURRENCIES]),
            default=model.settings.user_currency,
        )

    model.update_organization_name(name.strip())
    model.update_currency(currency)
    model.complete_onboarding()
    click.echo("Setup complete.")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
