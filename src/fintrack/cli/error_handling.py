"""CLI error handling helpers."""

import logging

import click

from fintrack.domain.errors import LOAD_FAILED_MESSAGE, DomainError, UpstreamUnavailable

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    Storage failures show a generic retry message; the details go to the log.
    """
    if isinstance(error, UpstreamUnavailable):
        logger.error("Storage failure: %s", error)
        click.echo(f"Error: {LOAD_FAILED_MESSAGE}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
