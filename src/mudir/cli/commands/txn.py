"""Ledger transaction commands."""

import click

from mudir.cli.error_handling import handle_domain_error
from mudir.cli.resolution import get_workspace, party_or_exit, transaction_id_or_exit
from mudir.domain.balance import balance_label, format_currency
from mudir.domain.entities import TransactionType
from mudir.domain.errors import DomainError, ValidationError
from mudir.utils.amount_parser import parse_positive_amount
from mudir.utils.date_parser import parse_datetime
from mudir.utils.resolvers import short_id


def _record(ctx, party: str, amount: str, remark: str | None, when: str | None, type: TransactionType):
    workspace = get_workspace(ctx)
    entry = party_or_exit(ctx, workspace, party)
    currency = workspace.settings.settings.user_currency

    try:
        parsed_amount = parse_positive_amount(amount)
        parsed_when = parse_datetime(when) if when else None
    except ValueError as e:
        handle_domain_error(ctx, e)

    try:
        txn = workspace.ledger.record(
            entry.organization.id, type, parsed_amount, remark=remark, when=parsed_when
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    verb = "Received" if type == TransactionType.CREDIT else "Gave"
    click.echo(
        f"{verb} {format_currency(txn.amount, currency)} "
        f"{'from' if type == TransactionType.CREDIT else 'to'} '{entry.organization.name}' "
        f"(ID: {short_id(txn.id)})"
    )
    balance = workspace.ledger.balance(entry.organization.id)
    click.echo(f"Balance: {balance_label(balance, currency)}")


@click.group()
def txn_group():
    """Record credits and debits against a party."""
    pass


@txn_group.command("credit")
@click.argument("party", metavar="PARTY")
@click.argument("amount", metavar="AMOUNT")
@click.option("--remark", "-r", help="What the payment was for")
@click.option("--date", "when", help="Date of the transaction (default: now)")
@click.pass_context
def credit(ctx, party: str, amount: str, remark: str | None, when: str | None):
    """Record money received from a party (reduces what they owe).

    Examples:
        mudir txn credit "Sharma Traders" 500 --remark "Part payment"
    """
    _record(ctx, party, amount, remark, when, TransactionType.CREDIT)


@txn_group.command("debit")
@click.argument("party", metavar="PARTY")
@click.argument("amount", metavar="AMOUNT")
@click.option("--remark", "-r", help="What was given")
@click.option("--date", "when", help="Date of the transaction (default: now)")
@click.pass_context
def debit(ctx, party: str, amount: str, remark: str | None, when: str | None):
    """Record goods or money given to a party (increases what they owe).

    Examples:
        mudir txn debit "Sharma Traders" 1500 --remark "Stationery on credit"
    """
    _record(ctx, party, amount, remark, when, TransactionType.DEBIT)


@txn_group.command("edit")
@click.argument("party", metavar="PARTY")
@click.argument("transaction", metavar="TRANSACTION_ID")
@click.option("--amount", help="New amount")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    help="New type",
)
@click.option("--remark", "-r", help="New remark (empty string clears it)")
@click.option("--date", "when", help="New date")
@click.pass_context
def edit_transaction(
    ctx, party: str, transaction: str, amount: str | None, txn_type: str | None,
    remark: str | None, when: str | None,
):
    """Edit a transaction. Options not given are left unchanged."""
    workspace = get_workspace(ctx)
    entry = party_or_exit(ctx, workspace, party)
    transaction_id = transaction_id_or_exit(ctx, entry, transaction)

    try:
        if amount is None and txn_type is None and remark is None and when is None:
            raise ValidationError("Nothing to change")
        workspace.ledger.edit_transaction(
            entry.organization.id,
            transaction_id,
            type=TransactionType(txn_type.upper()) if txn_type else None,
            amount=parse_positive_amount(amount) if amount is not None else None,
            remark=remark,
            when=parse_datetime(when) if when else None,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {short_id(transaction_id)}")


@txn_group.command("delete")
@click.argument("party", metavar="PARTY")
@click.argument("transaction", metavar="TRANSACTION_ID")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, party: str, transaction: str, yes: bool):
    """Delete a transaction."""
    workspace = get_workspace(ctx)
    entry = party_or_exit(ctx, workspace, party)
    transaction_id = transaction_id_or_exit(ctx, entry, transaction)

    if not yes and not click.confirm(f"Delete transaction {short_id(transaction_id)}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        workspace.ledger.delete_transaction(entry.organization.id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {short_id(transaction_id)}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(txn_group, name="txn")
