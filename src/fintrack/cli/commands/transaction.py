"""Income and expense commands."""

import click
from fintrack.domain.errors import DomainError
from fintrack.domain.presentation import project
from fintrack.domain.transaction import TransactionService
from fintrack.cli.account_resolution import (
    resolve_bank_or_exit,
    resolve_card_or_exit,
    resolve_user_or_exit,
)
from fintrack.cli.commands.account import user_option, _parse_amount_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.utils.date_parser import parse_date


def _parse_date_or_exit(ctx, value: str | None, label: str):
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _echo_records(ctx, records, empty_message: str):
    if not records:
        click.echo(empty_message)
        return

    click.echo(f"\nFound {len(records)} entr{'y' if len(records) == 1 else 'ies'}:")
    click.echo("-" * 80)
    click.echo(f"{'ID':<6} {'Date':<12} {'Amount':<14} {'Account':<20} {'Description':<26}")
    click.echo("-" * 80)
    for record in records:
        row = project(record, ctx.obj["currency"])
        click.echo(
            f"{record.id.source_id:<6} {row.date:<12} {row.amount:<14} "
            f"{row.details[:20]:<20} {row.description[:26]:<26}"
        )


@click.group()
def income_group():
    """Manage income entries."""
    pass


@income_group.command("add")
@user_option
@click.option("--source", required=True, help="Where the income came from")
@click.option("--amount", required=True, help="Amount (e.g., 3000 or 3,000.00)")
@click.option("--bank", help="Bank name or ID to credit (cash if omitted)")
@click.option("--date", "on_date", default="today", show_default=True, help="Date (YYYY-MM-DD or relative)")
@click.pass_context
def add_income(ctx, username: str, source: str, amount: str, bank: str | None, on_date: str):
    """Record income credited to a bank or to cash.

    Examples:
        fintrack income add --user asha --source Salary --amount 3000 --bank HDFC
        fintrack income add --user asha --source Gift --amount 500 --date yesterday
    """
    owner_id = resolve_user_or_exit(ctx, username)
    value = _parse_amount_or_exit(ctx, amount, "amount")
    entry_date = _parse_date_or_exit(ctx, on_date, "date")

    credited_to_type, credited_to_id = "cash", None
    if bank is not None:
        credited_to_type = "bank"
        credited_to_id = resolve_bank_or_exit(ctx, owner_id, bank)

    service = TransactionService(ctx.obj["db"])
    try:
        income_id = service.add_income(
            owner_id=owner_id,
            source=source,
            amount=value,
            credited_to_type=credited_to_type,
            credited_to_id=credited_to_id,
            on_date=entry_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added income (ID: {income_id})")


@income_group.command("list")
@user_option
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def list_income(ctx, username: str, start_date: str | None, end_date: str | None):
    """List income entries, newest first."""
    owner_id = resolve_user_or_exit(ctx, username)
    start = _parse_date_or_exit(ctx, start_date, "start date")
    end = _parse_date_or_exit(ctx, end_date, "end date")
    try:
        records = TransactionService(ctx.obj["db"]).list_income(owner_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _echo_records(ctx, records, "No income found.")


@income_group.command("edit")
@click.argument("income_id", type=int)
@user_option
@click.option("--source", help="New source")
@click.option("--amount", help="New amount")
@click.option("--bank", help="Move the credit to this bank name or ID")
@click.option("--cash", is_flag=True, help="Move the credit to cash")
@click.option("--date", "on_date", help="New date (YYYY-MM-DD or relative)")
@click.pass_context
def edit_income(
    ctx,
    income_id: int,
    username: str,
    source: str | None,
    amount: str | None,
    bank: str | None,
    cash: bool,
    on_date: str | None,
):
    """Edit an income entry.

    Only the given fields change. Balances are corrected for the old and
    the new values.

    Examples:
        fintrack income edit 3 --user asha --amount 3500
        fintrack income edit 3 --user asha --cash
    """
    if bank is not None and cash:
        click.echo("Error: Only one of --bank or --cash can be specified.", err=True)
        ctx.exit(1)

    owner_id = resolve_user_or_exit(ctx, username)
    value = _parse_amount_or_exit(ctx, amount, "amount") if amount is not None else None
    entry_date = _parse_date_or_exit(ctx, on_date, "date")

    credited_to_type, credited_to_id = None, None
    if bank is not None:
        credited_to_type = "bank"
        credited_to_id = resolve_bank_or_exit(ctx, owner_id, bank)
    elif cash:
        credited_to_type = "cash"

    try:
        TransactionService(ctx.obj["db"]).update_income(
            owner_id,
            income_id,
            source=source,
            amount=value,
            credited_to_type=credited_to_type,
            credited_to_id=credited_to_id,
            on_date=entry_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated income (ID: {income_id})")


@income_group.command("delete")
@click.argument("income_id", type=int)
@user_option
@click.pass_context
def delete_income(ctx, income_id: int, username: str):
    """Delete an income entry and take the amount back out of its account."""
    owner_id = resolve_user_or_exit(ctx, username)

    if not click.confirm(f"Are you sure you want to delete income {income_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        TransactionService(ctx.obj["db"]).delete_income(owner_id, income_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted income (ID: {income_id})")


@click.group()
def expense_group():
    """Manage expenses."""
    pass


@expense_group.command("add")
@user_option
@click.option("--title", required=True, help="What the money was spent on")
@click.option("--amount", required=True, help="Amount (e.g., 100 or 1,250.50)")
@click.option("--bank", help="Bank name or ID paid from")
@click.option("--card", help="Credit card name or ID paid with")
@click.option("--date", "on_date", default="today", show_default=True, help="Date (YYYY-MM-DD or relative)")
@click.pass_context
def add_expense(
    ctx,
    username: str,
    title: str,
    amount: str,
    bank: str | None,
    card: str | None,
    on_date: str,
):
    """Record an expense paid by cash, bank or credit card.

    Examples:
        fintrack expense add --user asha --title Groceries --amount 100
        fintrack expense add --user asha --title Flight --amount 8000 --card "Amex Gold"
    """
    if bank is not None and card is not None:
        click.echo("Error: Only one of --bank or --card can be specified.", err=True)
        ctx.exit(1)

    owner_id = resolve_user_or_exit(ctx, username)
    value = _parse_amount_or_exit(ctx, amount, "amount")
    entry_date = _parse_date_or_exit(ctx, on_date, "date")

    payment_method, payment_source_id = "cash", None
    if bank is not None:
        payment_method = "bank"
        payment_source_id = resolve_bank_or_exit(ctx, owner_id, bank)
    elif card is not None:
        payment_method = "credit_card"
        payment_source_id = resolve_card_or_exit(ctx, owner_id, card)

    service = TransactionService(ctx.obj["db"])
    try:
        expense_id = service.add_expense(
            owner_id=owner_id,
            title=title,
            amount=value,
            payment_method=payment_method,
            payment_source_id=payment_source_id,
            on_date=entry_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added expense (ID: {expense_id})")


@expense_group.command("list")
@user_option
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def list_expenses(ctx, username: str, start_date: str | None, end_date: str | None):
    """List expenses, newest first."""
    owner_id = resolve_user_or_exit(ctx, username)
    start = _parse_date_or_exit(ctx, start_date, "start date")
    end = _parse_date_or_exit(ctx, end_date, "end date")
    try:
        records = TransactionService(ctx.obj["db"]).list_expenses(owner_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _echo_records(ctx, records, "No expenses found.")


@expense_group.command("edit")
@click.argument("expense_id", type=int)
@user_option
@click.option("--title", help="New title")
@click.option("--amount", help="New amount")
@click.option("--bank", help="Pay from this bank name or ID instead")
@click.option("--card", help="Pay with this credit card name or ID instead")
@click.option("--cash", is_flag=True, help="Pay with cash instead")
@click.option("--date", "on_date", help="New date (YYYY-MM-DD or relative)")
@click.pass_context
def edit_expense(
    ctx,
    expense_id: int,
    username: str,
    title: str | None,
    amount: str | None,
    bank: str | None,
    card: str | None,
    cash: bool,
    on_date: str | None,
):
    """Edit an expense.

    Only the given fields change. The old payment is refunded to its
    account before the new one is charged.

    Examples:
        fintrack expense edit 7 --user asha --amount 120
        fintrack expense edit 7 --user asha --card AMEX
    """
    if sum([bank is not None, card is not None, cash]) > 1:
        click.echo("Error: Only one of --bank, --card or --cash can be specified.", err=True)
        ctx.exit(1)

    owner_id = resolve_user_or_exit(ctx, username)
    value = _parse_amount_or_exit(ctx, amount, "amount") if amount is not None else None
    entry_date = _parse_date_or_exit(ctx, on_date, "date")

    payment_method, payment_source_id = None, None
    if bank is not None:
        payment_method = "bank"
        payment_source_id = resolve_bank_or_exit(ctx, owner_id, bank)
    elif card is not None:
        payment_method = "credit_card"
        payment_source_id = resolve_card_or_exit(ctx, owner_id, card)
    elif cash:
        payment_method = "cash"

    try:
        TransactionService(ctx.obj["db"]).update_expense(
            owner_id,
            expense_id,
            title=title,
            amount=value,
            payment_method=payment_method,
            payment_source_id=payment_source_id,
            on_date=entry_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated expense (ID: {expense_id})")


@expense_group.command("delete")
@click.argument("expense_id", type=int)
@user_option
@click.pass_context
def delete_expense(ctx, expense_id: int, username: str):
    """Delete an expense and refund its account."""
    owner_id = resolve_user_or_exit(ctx, username)

    if not click.confirm(f"Are you sure you want to delete expense {expense_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        TransactionService(ctx.obj["db"]).delete_expense(owner_id, expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted expense (ID: {expense_id})")


def register_commands(cli):
    """Register income and expense commands with main CLI."""
    cli.add_command(income_group, name="income")
    cli.add_command(expense_group, name="expense")
