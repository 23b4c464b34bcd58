"""Monthly summary command."""

import calendar

import click
from fintrack.domain.errors import DomainError
from fintrack.domain.presentation import format_amount
from fintrack.domain.summary import MonthlySummaryService
from fintrack.cli.account_resolution import resolve_user_or_exit
from fintrack.cli.commands.account import user_option
from fintrack.cli.error_handling import handle_domain_error


@click.command("monthly-summary")
@user_option
@click.option("--month", required=True, type=click.IntRange(1, 12), help="Month (1-12)")
@click.option("--year", required=True, type=int, help="Year")
@click.pass_context
def monthly_summary(ctx, username: str, month: int, year: int):
    """Show income, expenses and month-end balances for one month.

    Examples:
        fintrack monthly-summary --user asha --month 3 --year 2025
    """
    owner_id = resolve_user_or_exit(ctx, username)
    currency = ctx.obj["currency"]

    def money(value) -> str:
        return format_amount(value, "", currency)

    service = MonthlySummaryService(ctx.obj["db"])
    try:
        summary = service.build_monthly_summary(owner_id, month, year)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{calendar.month_name[month]} {year}")
    click.echo("=" * 60)

    if summary.message:
        click.echo(summary.message)
        if not summary.type_totals:
            return

    if summary.type_totals:
        click.echo(f"\n{'Type':<12} {'Count':>6} {'Total':>18}")
        click.echo("-" * 40)
        for row in summary.type_totals:
            click.echo(f"{row.type.value:<12} {row.count:>6} {money(row.total):>18}")

    if summary.message:
        return

    click.echo(f"\nIncome:    {money(summary.monthly_income):>18}")
    click.echo(f"Expenses:  {money(summary.monthly_expenses):>18}")
    click.echo(f"Net:       {money(summary.monthly_income - summary.monthly_expenses):>18}")
    click.echo(f"Net savings: {money(summary.net_savings)}")

    if summary.banks:
        click.echo("\nBank balances at month end:")
        for bank in summary.banks:
            click.echo(
                f"  {bank.name:<20} {money(bank.balance):>18}  (opening {money(bank.initial_balance)})"
            )
    click.echo(f"\nCash at month end: {money(summary.cash_balance)}")

    if summary.credit_cards:
        click.echo("\nCredit card usage:")
        for card in summary.credit_cards:
            click.echo(
                f"  {card.name:<20} {money(card.used_limit):>18} of {money(card.credit_limit)}"
            )

    click.echo(f"\nTotal wealth: {money(summary.total_current_wealth)}")
    if summary.is_current_month:
        click.echo("(month in progress)")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(monthly_summary)
