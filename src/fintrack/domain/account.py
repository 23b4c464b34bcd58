"""Account setup domain service."""

from decimal import Decimal
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.entities import Bank, CashBalance, CreditCard
from fintrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    bank_not_found,
    credit_card_not_found,
)

IN_USE_MESSAGE = (
    "Cannot delete {kind} with existing transactions. "
    "Please delete all related transactions first."
)


class AccountService:
    """Service for configuring banks, credit cards and cash."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_bank(self, owner_id: int, name: str, initial_balance: Decimal = Decimal("0")) -> int:
        """Add a bank account.

        Bank names are stored upper-cased and must be unique per owner.

        Args:
            owner_id: Owning user ID
            name: Bank name
            initial_balance: Opening balance

        Returns:
            Bank ID

        Raises:
            ValidationError: If the name is empty or the balance is negative
            ConflictError: If the owner already has a bank with this name
        """
        name = name.strip().upper()
        if not name:
            raise ValidationError("Bank name is required")
        if initial_balance < 0:
            raise ValidationError("Valid initial balance is required")

        for bank in self.db.list_banks(owner_id):
            if bank.name == name:
                raise ConflictError("Bank already exists")

        return self.db.create_bank(owner_id=owner_id, name=name, initial_balance=initial_balance)

    def list_banks(self, owner_id: int) -> list[Bank]:
        """List banks of an owner."""
        return self.db.list_banks(owner_id)

    def _require_bank(self, owner_id: int, bank_id: int) -> Bank:
        bank = self.db.get_bank(owner_id, bank_id)
        if bank is None:
            raise NotFoundError(bank_not_found(bank_id))
        return bank

    def update_bank(
        self,
        owner_id: int,
        bank_id: int,
        name: Optional[str] = None,
        initial_balance: Optional[Decimal] = None,
    ) -> None:
        """Rename a bank or change its initial balance.

        The current balance moves by the change in initial balance, so
        transactions already recorded against the bank keep their effect.
        None keeps the existing value.

        Raises:
            ValidationError: If the name is empty or the balance is negative
            ConflictError: If another bank of the owner has the new name
            NotFoundError: If the bank does not belong to the owner
        """
        bank = self._require_bank(owner_id, bank_id)

        if name is None:
            name = bank.name
        name = name.strip().upper()
        if not name:
            raise ValidationError("Bank name is required")
        if initial_balance is None:
            initial_balance = bank.initial_balance
        elif initial_balance < 0:
            raise ValidationError("Valid initial balance is required")

        for other in self.db.list_banks(owner_id):
            if other.id != bank_id and other.name == name:
                raise ConflictError("Bank already exists")

        self.db.update_bank(owner_id, bank_id, name=name, initial_balance=initial_balance)

    def delete_bank(self, owner_id: int, bank_id: int) -> None:
        """Delete a bank that no income or expense refers to.

        Raises:
            NotFoundError: If the bank does not belong to the owner
            ConflictError: If transactions still reference the bank
        """
        self._require_bank(owner_id, bank_id)
        if self.db.count_bank_transactions(owner_id, bank_id):
            raise ConflictError(IN_USE_MESSAGE.format(kind="bank"))
        self.db.delete_bank(owner_id, bank_id)

    def add_credit_card(self, owner_id: int, name: str, credit_limit: Decimal) -> int:
        """Add a credit card.

        Raises:
            ValidationError: If the name is empty or the limit is negative
            ConflictError: If the owner already has a card with this name
        """
        name = name.strip().upper()
        if not name:
            raise ValidationError("Credit card name is required")
        if credit_limit < 0:
            raise ValidationError("Valid credit limit is required")

        for card in self.db.list_credit_cards(owner_id):
            if card.name == name:
                raise ConflictError("Credit card already exists")

        return self.db.create_credit_card(owner_id=owner_id, name=name, credit_limit=credit_limit)

    def list_credit_cards(self, owner_id: int) -> list[CreditCard]:
        """List credit cards of an owner."""
        return self.db.list_credit_cards(owner_id)

    def _require_card(self, owner_id: int, card_id: int) -> CreditCard:
        card = self.db.get_credit_card(owner_id, card_id)
        if card is None:
            raise NotFoundError(credit_card_not_found(card_id))
        return card

    def update_credit_card(
        self,
        owner_id: int,
        card_id: int,
        name: Optional[str] = None,
        credit_limit: Optional[Decimal] = None,
    ) -> None:
        """Rename a credit card or change its limit.

        Raises:
            ValidationError: If the name is empty or the limit is below the used limit
            ConflictError: If another card of the owner has the new name
            NotFoundError: If the card does not belong to the owner
        """
        card = self._require_card(owner_id, card_id)

        if name is None:
            name = card.name
        name = name.strip().upper()
        if not name:
            raise ValidationError("Credit card name is required")
        if credit_limit is None:
            credit_limit = card.credit_limit
        else:
            if credit_limit < 0:
                raise ValidationError("Valid credit limit is required")
            used = card.used_limit or Decimal("0")
            if credit_limit < used:
                raise ValidationError(f"Credit limit cannot be less than used limit (₹{used:.2f})")

        for other in self.db.list_credit_cards(owner_id):
            if other.id != card_id and other.name == name:
                raise ConflictError("Credit card already exists")

        self.db.update_credit_card(owner_id, card_id, name=name, credit_limit=credit_limit)

    def delete_credit_card(self, owner_id: int, card_id: int) -> None:
        """Delete a credit card that no expense refers to.

        Raises:
            NotFoundError: If the card does not belong to the owner
            ConflictError: If expenses still reference the card
        """
        self._require_card(owner_id, card_id)
        if self.db.count_credit_card_transactions(owner_id, card_id):
            raise ConflictError(IN_USE_MESSAGE.format(kind="credit card"))
        self.db.delete_credit_card(owner_id, card_id)

    def set_cash_balance(self, owner_id: int, balance: Decimal) -> None:
        """Set the cash balance.

        The first call also fixes the initial balance shown in the activity
        feed; later calls only change the current balance.

        Raises:
            ValidationError: If the balance is negative
        """
        if balance < 0:
            raise ValidationError("Cash balance cannot be negative")
        self.db.upsert_cash_balance(owner_id=owner_id, balance=balance)

    def get_cash_balance(self, owner_id: int) -> Optional[CashBalance]:
        """Get the cash balance of an owner, if one was set."""
        return self.db.get_cash_balance(owner_id)
