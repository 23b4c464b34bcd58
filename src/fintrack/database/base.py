"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from fintrack.domain.entities import (
    User,
    Bank,
    CreditCard,
    CashBalance,
)


class Database(ABC):
    """Abstract database interface for fintrack.

    Every read is scoped to one owner. Activity source listings return raw
    row dicts; they are normalized by the record adapter, not here.
    Implementations raise UpstreamUnavailable when the storage fails.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, username: str, name: str, tracking_option: str) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    def set_tracking_option(self, user_id: int, tracking_option: str) -> None:
        """Change what a user tracks."""
        pass

    # Account setup operations
    @abstractmethod
    def create_bank(self, owner_id: int, name: str, initial_balance: Optional[Decimal]) -> int:
        """Create a bank with current balance equal to the initial balance. Returns bank ID."""
        pass

    @abstractmethod
    def get_bank(self, owner_id: int, bank_id: int) -> Optional[Bank]:
        """Get a bank owned by owner_id."""
        pass

    @abstractmethod
    def list_banks(self, owner_id: int) -> list[Bank]:
        """List banks of an owner ordered by name."""
        pass

    @abstractmethod
    def adjust_bank_balance(self, owner_id: int, bank_id: int, delta: Decimal) -> None:
        """Add delta to a bank's current balance."""
        pass

    @abstractmethod
    def update_bank(
        self, owner_id: int, bank_id: int, name: str, initial_balance: Optional[Decimal]
    ) -> None:
        """Rename a bank and change its initial balance.

        The current balance moves by the same amount as the initial balance.
        """
        pass

    @abstractmethod
    def delete_bank(self, owner_id: int, bank_id: int) -> None:
        """Delete a bank."""
        pass

    @abstractmethod
    def count_bank_transactions(self, owner_id: int, bank_id: int) -> int:
        """Count income and expenses that reference a bank."""
        pass

    @abstractmethod
    def create_credit_card(self, owner_id: int, name: str, credit_limit: Decimal) -> int:
        """Create a credit card. Returns card ID."""
        pass

    @abstractmethod
    def get_credit_card(self, owner_id: int, card_id: int) -> Optional[CreditCard]:
        """Get a credit card owned by owner_id."""
        pass

    @abstractmethod
    def list_credit_cards(self, owner_id: int) -> list[CreditCard]:
        """List credit cards of an owner ordered by name."""
        pass

    @abstractmethod
    def adjust_card_used_limit(self, owner_id: int, card_id: int, delta: Decimal) -> None:
        """Add delta to a credit card's used limit."""
        pass

    @abstractmethod
    def update_credit_card(self, owner_id: int, card_id: int, name: str, credit_limit: Decimal) -> None:
        """Rename a credit card and change its limit."""
        pass

    @abstractmethod
    def delete_credit_card(self, owner_id: int, card_id: int) -> None:
        """Delete a credit card."""
        pass

    @abstractmethod
    def count_credit_card_transactions(self, owner_id: int, card_id: int) -> int:
        """Count expenses paid with a credit card."""
        pass

    @abstractmethod
    def get_cash_balance(self, owner_id: int) -> Optional[CashBalance]:
        """Get the cash balance of an owner."""
        pass

    @abstractmethod
    def upsert_cash_balance(self, owner_id: int, balance: Decimal) -> None:
        """Set the cash balance.

        The first call also records the initial balance; later calls only
        update the balance and its update time.
        """
        pass

    @abstractmethod
    def adjust_cash_balance(self, owner_id: int, delta: Decimal) -> None:
        """Add delta to the cash balance."""
        pass

    # Transaction operations
    @abstractmethod
    def create_income(
        self,
        owner_id: int,
        source: str,
        amount: Decimal,
        credited_to_type: str,
        credited_to_id: Optional[int],
        on_date: datetime,
    ) -> int:
        """Create an income entry. Returns entry ID."""
        pass

    @abstractmethod
    def create_expense(
        self,
        owner_id: int,
        title: str,
        amount: Decimal,
        payment_method: str,
        payment_source_id: Optional[int],
        on_date: datetime,
    ) -> int:
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def get_income(self, owner_id: int, income_id: int) -> Optional[dict[str, Any]]:
        """Get one income row owned by owner_id."""
        pass

    @abstractmethod
    def update_income(
        self,
        owner_id: int,
        income_id: int,
        source: str,
        amount: Decimal,
        credited_to_type: str,
        credited_to_id: Optional[int],
        on_date: datetime,
    ) -> None:
        """Replace the fields of an income entry."""
        pass

    @abstractmethod
    def delete_income(self, owner_id: int, income_id: int) -> None:
        """Delete an income entry."""
        pass

    @abstractmethod
    def get_expense(self, owner_id: int, expense_id: int) -> Optional[dict[str, Any]]:
        """Get one expense row owned by owner_id."""
        pass

    @abstractmethod
    def update_expense(
        self,
        owner_id: int,
        expense_id: int,
        title: str,
        amount: Decimal,
        payment_method: str,
        payment_source_id: Optional[int],
        on_date: datetime,
    ) -> None:
        """Replace the fields of an expense."""
        pass

    @abstractmethod
    def delete_expense(self, owner_id: int, expense_id: int) -> None:
        """Delete an expense."""
        pass

    # Activity sources
    @abstractmethod
    def list_bank_creation_events(self, owner_id: int) -> list[dict[str, Any]]:
        """List bank rows of an owner as creation events."""
        pass

    @abstractmethod
    def list_credit_card_creation_events(self, owner_id: int) -> list[dict[str, Any]]:
        """List credit card rows of an owner as creation events."""
        pass

    @abstractmethod
    def list_cash_balance_events(self, owner_id: int) -> list[dict[str, Any]]:
        """List cash balance rows of an owner with a positive initial balance."""
        pass

    @abstractmethod
    def list_income(
        self,
        owner_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[dict[str, Any]]:
        """List income rows with optional inclusive date bounds.

        Rows carry the credited bank's name as bank_name when credited to a bank.
        """
        pass

    @abstractmethod
    def list_expenses(
        self,
        owner_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[dict[str, Any]]:
        """List expense rows with optional inclusive date bounds.

        Rows carry bank_name or card_name for the paying account.
        """
        pass
