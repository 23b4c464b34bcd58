"""Main CLI entry point."""

import logging

import click
from fintrack.database.factories import create_sqlite_database
from fintrack.domain.errors import UpstreamUnavailable
from fintrack.domain.presentation import DEFAULT_CURRENCY
from fintrack.cli.error_handling import handle_domain_error

# Import and register all commands at module level
from fintrack.cli.commands import (
    user,
    account,
    transaction,
    activity,
    summary,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINTRACK_DB_PATH environment variable)",
    envvar="FINTRACK_DB_PATH",
)
@click.option(
    "--currency",
    default=DEFAULT_CURRENCY,
    show_default=True,
    envvar="FINTRACK_CURRENCY",
    help="Currency symbol for displayed amounts",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="FINTRACK_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, currency: str, log_level: str):
    """Fintrack - Personal finance tracker.

    Configure banks, credit cards and cash, record income and expenses, and
    review the activity feed and monthly summaries.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["currency"] = currency

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            db = create_sqlite_database(database_path=db_path)
        except UpstreamUnavailable as e:
            handle_domain_error(ctx, e)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
user.register_commands(cli)
account.register_commands(cli)
transaction.register_commands(cli)
activity.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
