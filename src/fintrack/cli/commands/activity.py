"""Activity feed commands."""

import json
import logging

import click
from fintrack.domain.activity import ActivityService
from fintrack.domain.aggregator import parse_filter
from fintrack.domain.errors import DomainError
from fintrack.domain.pagination import DEFAULT_PAGE_SIZE, render_csv
from fintrack.domain.presentation import format_amount
from fintrack.cli.account_resolution import resolve_user_or_exit
from fintrack.cli.commands.account import user_option
from fintrack.cli.date_filters import resolve_cli_date_range
from fintrack.cli.error_handling import handle_domain_error

logger = logging.getLogger(__name__)


def _echo_statistics(statistics, currency: str):
    click.echo(f"Total income:       {format_amount(statistics.total_income, '', currency)}")
    click.echo(f"Total expenses:     {format_amount(statistics.total_expenses, '', currency)}")
    click.echo(f"Net balance:        {format_amount(statistics.net_balance, '', currency)}")
    click.echo(f"Total transactions: {statistics.total_transactions}")


def _echo_page(result, currency: str):
    _echo_statistics(result.statistics, currency)

    if result.total_count == 0:
        click.echo("\nNo activity found.")
        return

    click.echo(
        f"\nShowing page {result.page} of {result.total_pages} "
        f"({result.total_count} activit{'y' if result.total_count == 1 else 'ies'})"
    )
    click.echo("-" * 110)
    click.echo(
        f"{'Date':<12} {'Action':<12} {'Type':<8} {'Description':<32} {'Amount':>14}  {'Details':<24}"
    )
    click.echo("-" * 110)
    for row in result.activities:
        click.echo(
            f"{row.date:<12} {row.action:<12} {row.type:<8} {row.description[:32]:<32} "
            f"{row.amount:>14}  {row.details[:24]:<24}"
        )
    if not result.activities:
        click.echo("(page is past the end of the activity feed)")


@click.command("activity")
@user_option
@click.option("--type", "activity_type", help="Activity type: income, expense or setup")
@click.option("--from-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--to-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--month", help="Calendar month (1-12)")
@click.option("--year", help="Calendar year")
@click.option("--this-month", is_flag=True, help="Filter to current month")
@click.option("--this-year", is_flag=True, help="Filter to current year")
@click.option("--last-month", is_flag=True, help="Filter to previous month")
@click.option("--last-year", is_flag=True, help="Filter to previous year")
@click.option("--page", default=1, show_default=True, type=int, help="Page number (1-based)")
@click.option(
    "--limit", "page_size", default=DEFAULT_PAGE_SIZE, show_default=True, type=int, help="Page size"
)
@click.option("--export", "export", is_flag=True, help="Export every matching activity as CSV")
@click.option("--output", type=click.Path(dir_okay=False, writable=True), help="Write the export to a file")
@click.option("--json", "as_json", is_flag=True, help="Print the page as JSON")
@click.pass_context
def activity(
    ctx,
    username: str,
    activity_type: str | None,
    from_date: str | None,
    to_date: str | None,
    month: str | None,
    year: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
    page: int,
    page_size: int,
    export: bool,
    output: str | None,
    as_json: bool,
):
    """Show the activity feed of a user.

    Setup events, income and expenses are merged into one history, newest
    first. All filters combine.

    Examples:
        fintrack activity --user asha
        fintrack activity --user asha --type expense --last-month
        fintrack activity --user asha --month 3 --year 2025 --export --output march.csv
    """
    if output and not export:
        click.echo("Error: --output can only be used with --export.", err=True)
        ctx.exit(1)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=from_date,
        end_date=to_date,
        period_flags={
            "this-month": this_month,
            "this-year": this_year,
            "last-month": last_month,
            "last-year": last_year,
        },
    )

    owner_id = resolve_user_or_exit(ctx, username)
    currency = ctx.obj["currency"]
    service = ActivityService(ctx.obj["db"], currency=currency)

    try:
        filters = parse_filter(activity_type, start, end, month, year)
        if export:
            result = service.export_activity(owner_id, filters)
        else:
            result = service.get_activity(owner_id, filters, page=page, page_size=page_size)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if export:
        text = render_csv(result.rows)
        if output:
            with open(output, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            logger.info("Exported %d activities to %s", len(result.rows), output)
            click.echo(f"Exported {len(result.rows)} activities to {output}")
        else:
            click.echo(text, nl=False)
        return

    if as_json:
        click.echo(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
        return

    _echo_page(result, currency)


def register_commands(cli):
    """Register activity commands with main CLI."""
    cli.add_command(activity)
