"""Party statement command."""

import click

from mudir.cli.resolution import get_workspace, party_or_exit
from mudir.domain.balance import Statement, format_currency
from mudir.domain.entities import TransactionType

WIDTH = 78


def render_statement(statement: Statement) -> str:
    """Render a statement as plain text."""
    organization = statement.organization
    currency = statement.currency
    lines = [
        "=" * WIDTH,
        statement.organization_display_name.upper() or "MUDIR",
        f"Ledger statement, generated {statement.generated_at.strftime('%d %B %Y')}",
        "=" * WIDTH,
        organization.name,
    ]
    if organization.phone:
        lines.append(f"Phone: {organization.phone}")
    if organization.email:
        lines.append(f"Email: {organization.email}")
    lines += [
        "",
        f"Balance: {statement.balance_text}",
        "",
        f"{'Date':<12} {'Remark':<30} {'Debit':>16} {'Credit':>16}",
        "-" * WIDTH,
    ]
    for txn in statement.transactions:
        amount = format_currency(txn.amount, currency)
        lines.append(
            f"{txn.date.strftime('%d/%m/%Y'):<12} {(txn.remark or '-')[:30]:<30} "
            f"{amount if txn.type == TransactionType.DEBIT else '-':>16} "
            f"{amount if txn.type == TransactionType.CREDIT else '-':>16}"
        )
    lines += [
        "-" * WIDTH,
        f"{'Total':<43} {format_currency(statement.total_debit, currency):>16} "
        f"{format_currency(statement.total_credit, currency):>16}",
        f"{len(statement.transactions)} transaction(s)",
    ]
    return "\n".join(lines) + "\n"


@click.command("statement")
@click.argument("party", metavar="PARTY")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to a file instead of stdout")
@click.pass_context
def statement(ctx, party: str, output: str | None):
    """Print a party's ledger statement, newest transactions first."""
    workspace = get_workspace(ctx)
    entry = party_or_exit(ctx, workspace, party)
    settings = workspace.settings.settings

    text = render_statement(
        workspace.ledger.statement(
            entry.organization.id,
            currency=settings.user_currency,
            organization_display_name=settings.organization_name,
        )
    )
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text)
        click.echo(f"Statement written to {output}")
    else:
        click.echo(text, nl=False)


def register_commands(cli):
    """Register statement command with main CLI."""
    cli.add_command(statement)
