"""CLI helpers for date range resolution."""

from datetime import date

import click

from fintrack.utils.date_parser import get_date_range

PERIOD_OPTIONS = "--this-month, --this-year, --last-month, --last-year"


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[str | None, str | None]:
    """Resolve the CLI date range from period flags or explicit dates.

    Explicit dates are returned unparsed so that the activity filter parser
    reports invalid values; period flags are resolved to ISO dates.
    """
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            f"Error: Only one period option ({PERIOD_OPTIONS}) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --from-date or --to-date.",
            err=True,
        )
        ctx.exit(1)

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_date_range(period)
                return _iso(start), _iso(end)

    return start_date, end_date


def _iso(value: date) -> str:
    return value.isoformat()
