"""Utility for resolving bank and credit card names to IDs."""

from fintrack.domain.account import AccountService
from fintrack.domain.errors import NotFoundError


def _resolve(accounts, kind: str, account: str | int) -> int:
    # Numeric values are IDs, anything else is a name
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    for acc in accounts:
        if account_id is not None and acc.id == account_id:
            return acc.id
        if account_id is None and acc.name == str(account).strip().upper():
            return acc.id

    if account_id is not None:
        raise NotFoundError(f"{kind} ID {account_id} not found")
    raise NotFoundError(f"{kind} '{account}' not found")


def resolve_bank(account_service: AccountService, owner_id: int, bank: str | int) -> int:
    """Resolve a bank name or ID of an owner to the bank ID.

    Names match case-insensitively since bank names are stored upper-cased.

    Raises:
        NotFoundError: If the owner has no such bank
    """
    return _resolve(account_service.list_banks(owner_id), "Bank", bank)


def resolve_card(account_service: AccountService, owner_id: int, card: str | int) -> int:
    """Resolve a credit card name or ID of an owner to the card ID.

    Raises:
        NotFoundError: If the owner has no such card
    """
    return _resolve(account_service.list_credit_cards(owner_id), "Credit card", card)
