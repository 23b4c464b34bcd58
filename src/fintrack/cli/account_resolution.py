"""CLI helpers for user and account resolution."""

from __future__ import annotations

import click

from fintrack.domain.account import AccountService
from fintrack.domain.errors import DomainError
from fintrack.domain.user import UserService
from fintrack.cli.error_handling import handle_domain_error
from fintrack.utils.account_resolver import resolve_bank, resolve_card


def resolve_user_or_exit(ctx: click.Context, username: str) -> int:
    """Resolve a username to the user ID, or exit with a CLI error.

    Every activity and account command is scoped to the resolved user.
    """
    try:
        return UserService(ctx.obj["db"]).get_by_username(username).id
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def resolve_bank_or_exit(ctx: click.Context, owner_id: int, bank: str) -> int:
    """Resolve a bank name or ID, or exit with a CLI error."""
    try:
        return resolve_bank(AccountService(ctx.obj["db"]), owner_id, bank)
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def resolve_card_or_exit(ctx: click.Context, owner_id: int, card: str) -> int:
    """Resolve a credit card name or ID, or exit with a CLI error."""
    try:
        return resolve_card(AccountService(ctx.obj["db"]), owner_id, card)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
