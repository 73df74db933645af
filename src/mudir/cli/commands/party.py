"""Ledger party commands."""

import click

from mudir.cli.error_handling import handle_domain_error
from mudir.cli.resolution import get_workspace, party_or_exit
from mudir.domain.balance import balance_label, compute_balance, format_currency
from mudir.domain.entities import TransactionType
from mudir.domain.errors import DomainError
from mudir.domain.search import search_entries, search_transactions
from mudir.utils.resolvers import short_id


@click.group()
def party_group():
    """Manage the parties you keep accounts with."""
    pass


@party_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--phone", help="Phone number")
@click.option("--email", help="Email address")
@click.pass_context
def add_party(ctx, name: str, phone: str | None, email: str | None):
    """Add a party.

    Examples:
        mudir party add "Sharma Traders" --phone 9876543210
    """
    workspace = get_workspace(ctx)
    try:
        organization = workspace.ledger.add_party(name, phone=phone, email=email)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added party '{organization.name}' (ID: {short_id(organization.id)})")


@party_group.command("list")
@click.option("--search", "-s", "query", default="", help="Match name, phone or email")
@click.pass_context
def list_parties(ctx, query: str):
    """List parties with their balances."""
    workspace = get_workspace(ctx)
    currency = workspace.settings.settings.user_currency

    entries = search_entries(workspace.ledger.list_entries(), query)
    if not entries:
        click.echo("No parties found.")
        return

    click.echo("\nParties:")
    click.echo("-" * 72)
    for entry in entries:
        organization = entry.organization
        balance = compute_balance(entry.transactions)
        click.echo(
            f"ID: {short_id(organization.id):8s} | {organization.name:24s} | "
            f"{balance_label(balance, currency)}"
        )


@party_group.command("show")
@click.argument("party", metavar="PARTY")
@click.option("--search", "-s", "query", default="", help="Match amount or remark")
@click.pass_context
def show_party(ctx, party: str, query: str):
    """Show a party's details and transactions, newest first.

    PARTY can be a party name or ID.
    """
    workspace = get_workspace(ctx)
    entry = party_or_exit(ctx, workspace, party)
    currency = workspace.settings.settings.user_currency
    organization = entry.organization

    click.echo(f"\n{organization.name} (ID: {organization.id})")
    if organization.phone:
        click.echo(f"  Phone: {organization.phone}")
    if organization.email:
        click.echo(f"  Email: {organization.email}")
    click.echo(f"  Balance: {balance_label(compute_balance(entry.transactions), currency)}")

    transactions = search_transactions(entry.transactions, query)
    if not transactions:
        click.echo("\nNo transactions found.")
        return

    click.echo(f"\n{'ID':<9} {'Date':<11} {'Gave (debit)':>16} {'Got (credit)':>16}  Remark")
    click.echo("-" * 80)
    for txn in transactions:
        amount = format_currency(txn.amount, currency)
        debit = amount if txn.type == TransactionType.DEBIT else "-"
        credit = amount if txn.type == TransactionType.CREDIT else "-"
        click.echo(
            f"{short_id(txn.id):<9} {txn.date.date().isoformat():<11} "
            f"{debit:>16} {credit:>16}  {txn.remark or ''}"
        )


@party_group.command("edit")
@click.argument("party", metavar="PARTY")
@click.option("--name", help="New name")
@click.option("--phone", help="New phone (empty string clears it)")
@click.option("--email", help="New email (empty string clears it)")
@click.pass_context
def edit_party(ctx, party: str, name: str | None, phone: str | None, email: str | None):
    """Edit a party's details. Options not given are left unchanged."""
    workspace = get_workspace(ctx)
    entry = party_or_exit(ctx, workspace, party)

    if name is None and phone is None and email is None:
        click.echo("Nothing to change.")
        return

    try:
        organization = workspace.ledger.update_party(
            entry.organization.id, name=name, phone=phone, email=email
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated party '{organization.name}'")


@party_group.command("delete")
@click.argument("party", metavar="PARTY")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_party(ctx, party: str, yes: bool):
    """Delete a party together with all of its transactions."""
    workspace = get_workspace(ctx)
    entry = party_or_exit(ctx, workspace, party)
    name = entry.organization.name

    if not yes and not click.confirm(
        f'Are you sure you want to delete "{name}" and its '
        f"{len(entry.transactions)} transaction(s)? This action cannot be undone."
    ):
        click.echo("Deletion cancelled.")
        return

    workspace.ledger.delete_party(entry.organization.id)
    click.echo(f"Deleted party '{name}'")


def register_commands(cli):
    """Register party commands with main CLI."""
    cli.add_command(party_group, name="party")
