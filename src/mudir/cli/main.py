"""Main CLI entry point."""

import click

from mudir.config import BACKEND_ENV, DATA_PATH_ENV, DEBOUNCE_ENV, DEFAULT_DEBOUNCE_SECONDS
from mudir.logging_config import configure_logging
from mudir.storage.factories import BACKENDS, create_storage
from mudir.workspace import Workspace

# Import and register all commands at module level
from mudir.cli.commands import (
    backup,
    collection,
    data,
    item,
    party,
    settings,
    statement,
    txn,
)


@click.group()
@click.option(
    "--data-path",
    type=click.Path(),
    help=f"Path to the data file (overrides {DATA_PATH_ENV} environment variable)",
    envvar=DATA_PATH_ENV,
)
@click.option(
    "--backend",
    type=click.Choice(BACKENDS),
    default="json",
    show_default=True,
    help="Storage backend for the data file",
    envvar=BACKEND_ENV,
)
@click.option(
    "--debounce",
    type=float,
    default=DEFAULT_DEBOUNCE_SECONDS,
    show_default=True,
    help="Seconds of inactivity before changes are written",
    envvar=DEBOUNCE_ENV,
)
@click.option("--verbose", "-v", is_flag=True, help="Log storage activity to stderr")
@click.pass_context
def cli(ctx, data_path: str | None, backend: str, debounce: float, verbose: bool):
    """Mudir - shopkeeper's assistant.

    Keep custom inventory collections and a simple credit/debit ledger of
    the parties you deal with, stored in a single local JSON document.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose=verbose)

    # Open the data file only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        storage = create_storage(backend=backend, path=data_path)
        workspace = Workspace.open(storage, window=debounce)
        ctx.obj["workspace"] = workspace
        # Pending debounced writes would be lost when the process exits
        ctx.call_on_close(workspace.close)


# Register all commands
collection.register_commands(cli)
item.register_commands(cli)
party.register_commands(cli)
txn.register_commands(cli)
statement.register_commands(cli)
settings.register_commands(cli)
backup.register_commands(cli)
data.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
