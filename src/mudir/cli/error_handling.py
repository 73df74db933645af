"""CLI error handling helpers."""

from typing import NoReturn

import click

from mudir.logging_config import get_logger

logger = get_logger("cli")


def handle_domain_error(ctx: click.Context, error: ValueError) -> NoReturn:
    """Print ``Error: <message>`` to stderr and exit with status 1.

    Covers DomainError subclasses as well as the ValueErrors raised by the
    input parsers. Storage failures never get here; the persistence bridge
    logs them instead.
    """
    logger.debug("%s rejected: %r", ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
