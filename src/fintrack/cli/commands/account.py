"""Bank, credit card and cash setup commands."""

import click
from fintrack.domain.account import AccountService
from fintrack.domain.errors import DomainError
from fintrack.cli.account_resolution import (
    resolve_bank_or_exit,
    resolve_card_or_exit,
    resolve_user_or_exit,
)
from fintrack.cli.error_handling import handle_domain_error
from fintrack.utils.amount_parser import parse_amount

user_option = click.option(
    "--user", "username", required=True, envvar="FINTRACK_USER", help="Username to act as"
)


def _parse_amount_or_exit(ctx, value: str, label: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.group()
def bank_group():
    """Manage bank accounts."""
    pass


@bank_group.command("add")
@click.argument("name")
@user_option
@click.option("--initial-balance", default="0", show_default=True, help="Opening balance")
@click.pass_context
def add_bank(ctx, name: str, username: str, initial_balance: str):
    """Add a bank account.

    Examples:
        fintrack bank add "HDFC" --user asha --initial-balance 10000
    """
    owner_id = resolve_user_or_exit(ctx, username)
    balance = _parse_amount_or_exit(ctx, initial_balance, "initial balance")
    service = AccountService(ctx.obj["db"])
    try:
        bank_id = service.add_bank(owner_id, name, balance)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added bank '{name.strip().upper()}' (ID: {bank_id})")


@bank_group.command("list")
@user_option
@click.pass_context
def list_banks(ctx, username: str):
    """List bank accounts."""
    owner_id = resolve_user_or_exit(ctx, username)
    currency = ctx.obj["currency"]
    banks = AccountService(ctx.obj["db"]).list_banks(owner_id)
    if not banks:
        click.echo("No banks found.")
        return

    click.echo("\nBanks:")
    click.echo("-" * 60)
    for bank in banks:
        click.echo(
            f"ID: {bank.id:3d} | {bank.name:20s} | Balance: {currency}{bank.current_balance:.2f}"
        )


@bank_group.command("edit")
@click.argument("bank", metavar="BANK")
@user_option
@click.option("--name", help="New bank name")
@click.option("--initial-balance", help="New opening balance")
@click.pass_context
def edit_bank(ctx, bank: str, username: str, name: str | None, initial_balance: str | None):
    """Rename a bank or change its opening balance.

    BANK can be a bank name or ID. The current balance moves by the same
    amount as the opening balance.

    Examples:
        fintrack bank edit HDFC --user asha --name "HDFC SALARY"
        fintrack bank edit 1 --user asha --initial-balance 12000
    """
    owner_id = resolve_user_or_exit(ctx, username)
    bank_id = resolve_bank_or_exit(ctx, owner_id, bank)
    balance = None
    if initial_balance is not None:
        balance = _parse_amount_or_exit(ctx, initial_balance, "initial balance")
    try:
        AccountService(ctx.obj["db"]).update_bank(owner_id, bank_id, name=name, initial_balance=balance)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated bank (ID: {bank_id})")


@bank_group.command("delete")
@click.argument("bank", metavar="BANK")
@user_option
@click.pass_context
def delete_bank(ctx, bank: str, username: str):
    """Delete a bank.

    BANK can be a bank name or ID. A bank can only be deleted once no
    income or expense refers to it.

    Examples:
        fintrack bank delete HDFC --user asha
    """
    owner_id = resolve_user_or_exit(ctx, username)
    bank_id = resolve_bank_or_exit(ctx, owner_id, bank)

    if not click.confirm(f"Are you sure you want to delete bank {bank_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        AccountService(ctx.obj["db"]).delete_bank(owner_id, bank_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted bank (ID: {bank_id})")


@click.group()
def card_group():
    """Manage credit cards."""
    pass


@card_group.command("add")
@click.argument("name")
@user_option
@click.option("--limit", "credit_limit", required=True, help="Credit limit")
@click.pass_context
def add_card(ctx, name: str, username: str, credit_limit: str):
    """Add a credit card.

    Examples:
        fintrack card add "Amex Gold" --user asha --limit 50000
    """
    owner_id = resolve_user_or_exit(ctx, username)
    limit = _parse_amount_or_exit(ctx, credit_limit, "credit limit")
    service = AccountService(ctx.obj["db"])
    try:
        card_id = service.add_credit_card(owner_id, name, limit)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added credit card '{name.strip().upper()}' (ID: {card_id})")


@card_group.command("list")
@user_option
@click.pass_context
def list_cards(ctx, username: str):
    """List credit cards."""
    owner_id = resolve_user_or_exit(ctx, username)
    currency = ctx.obj["currency"]
    cards = AccountService(ctx.obj["db"]).list_credit_cards(owner_id)
    if not cards:
        click.echo("No credit cards found.")
        return

    click.echo("\nCredit cards:")
    click.echo("-" * 72)
    for card in cards:
        click.echo(
            f"ID: {card.id:3d} | {card.name:20s} | Limit: {currency}{card.credit_limit:.2f}"
            f" | Used: {currency}{card.used_limit:.2f}"
        )


@card_group.command("edit")
@click.argument("card", metavar="CARD")
@user_option
@click.option("--name", help="New card name")
@click.option("--limit", "credit_limit", help="New credit limit")
@click.pass_context
def edit_card(ctx, card: str, username: str, name: str | None, credit_limit: str | None):
    """Rename a credit card or change its limit.

    CARD can be a card name or ID. The limit cannot go below what is
    already used.

    Examples:
        fintrack card edit AMEX --user asha --limit 80000
    """
    owner_id = resolve_user_or_exit(ctx, username)
    card_id = resolve_card_or_exit(ctx, owner_id, card)
    limit = None
    if credit_limit is not None:
        limit = _parse_amount_or_exit(ctx, credit_limit, "credit limit")
    try:
        AccountService(ctx.obj["db"]).update_credit_card(owner_id, card_id, name=name, credit_limit=limit)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated credit card (ID: {card_id})")


@card_group.command("delete")
@click.argument("card", metavar="CARD")
@user_option
@click.pass_context
def delete_card(ctx, card: str, username: str):
    """Delete a credit card that no expense refers to.

    Examples:
        fintrack card delete AMEX --user asha
    """
    owner_id = resolve_user_or_exit(ctx, username)
    card_id = resolve_card_or_exit(ctx, owner_id, card)

    if not click.confirm(f"Are you sure you want to delete credit card {card_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        AccountService(ctx.obj["db"]).delete_credit_card(owner_id, card_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted credit card (ID: {card_id})")


@click.group()
def cash_group():
    """Manage cash balance."""
    pass


@cash_group.command("set")
@click.argument("balance")
@user_option
@click.pass_context
def set_cash(ctx, balance: str, username: str):
    """Set the cash balance.

    The first time it is set, the amount also becomes the opening balance.
    """
    owner_id = resolve_user_or_exit(ctx, username)
    amount = _parse_amount_or_exit(ctx, balance, "balance")
    try:
        AccountService(ctx.obj["db"]).set_cash_balance(owner_id, amount)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Cash balance set to {ctx.obj['currency']}{amount:.2f}")


@cash_group.command("show")
@user_option
@click.pass_context
def show_cash(ctx, username: str):
    """Show the cash balance."""
    owner_id = resolve_user_or_exit(ctx, username)
    currency = ctx.obj["currency"]
    cash = AccountService(ctx.obj["db"]).get_cash_balance(owner_id)
    if cash is None:
        click.echo(f"Cash balance: {currency}0.00")
        return
    click.echo(f"Cash balance: {currency}{cash.balance:.2f}")
    click.echo(f"Opening balance: {currency}{cash.initial_balance:.2f}")


def register_commands(cli):
    """Register account setup commands with main CLI."""
    cli.add_command(bank_group, name="bank")
    cli.add_command(card_group, name="card")
    cli.add_command(cash_group, name="cash")
