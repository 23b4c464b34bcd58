"""Income and expense domain service."""

from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Optional, Union

from fintrack.database.base import Database
from fintrack.domain.aggregator import order
from fintrack.domain.entities import (
    ActivityRecord,
    CreditedToType,
    PaymentMethod,
    RecordSource,
)
from fintrack.domain.errors import (
    NotFoundError,
    ValidationError,
    bank_not_found,
    credit_card_not_found,
    expense_not_found,
    income_not_found,
)
from fintrack.domain.record_adapter import normalize_rows
from fintrack.utils.date_parser import parse_timestamp


def _entry_timestamp(on_date: Union[date, datetime]) -> datetime:
    """Resolve an entry date to a timestamp.

    A plain date gets the current time of day so entries made on the same
    day keep their entry order.
    """
    if isinstance(on_date, datetime):
        return parse_timestamp(on_date)
    now = datetime.now(UTC).replace(tzinfo=None)
    return datetime.combine(on_date, now.time())


class TransactionService:
    """Service for recording income and expenses."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_bank(self, owner_id: int, bank_id: Optional[int]) -> int:
        if bank_id is None or self.db.get_bank(owner_id, bank_id) is None:
            raise NotFoundError(bank_not_found(bank_id))
        return bank_id

    def _require_card(self, owner_id: int, card_id: Optional[int]) -> int:
        if card_id is None or self.db.get_credit_card(owner_id, card_id) is None:
            raise NotFoundError(credit_card_not_found(card_id))
        return card_id

    def _validate_income(
        self,
        owner_id: int,
        source: str,
        amount: Decimal,
        credited_to_type: str,
        credited_to_id: Optional[int],
    ) -> tuple[str, CreditedToType, Optional[int]]:
        if not source or not source.strip():
            raise ValidationError("Income source is required")
        if amount <= 0:
            raise ValidationError("Amount must be greater than zero")
        try:
            target = CreditedToType(credited_to_type)
        except ValueError:
            raise ValidationError(f"Invalid credit type '{credited_to_type}'")

        if target == CreditedToType.BANK:
            credited_to_id = self._require_bank(owner_id, credited_to_id)
        else:
            credited_to_id = None
        return source.strip(), target, credited_to_id

    def _validate_expense(
        self,
        owner_id: int,
        title: str,
        amount: Decimal,
        payment_method: str,
        payment_source_id: Optional[int],
    ) -> tuple[str, PaymentMethod, Optional[int]]:
        if not title or not title.strip():
            raise ValidationError("Expense title is required")
        if amount <= 0:
            raise ValidationError("Amount must be greater than zero")
        try:
            method = PaymentMethod(payment_method)
        except ValueError:
            raise ValidationError(f"Invalid payment method '{payment_method}'")

        if method == PaymentMethod.BANK:
            payment_source_id = self._require_bank(owner_id, payment_source_id)
        elif method == PaymentMethod.CREDIT_CARD:
            payment_source_id = self._require_card(owner_id, payment_source_id)
        else:
            payment_source_id = None
        return title.strip(), method, payment_source_id

    def _apply_income(
        self, owner_id: int, target: str, credited_to_id: Optional[int], amount: Decimal
    ) -> None:
        # A negative amount reverses an earlier credit
        if target == CreditedToType.BANK.value:
            self.db.adjust_bank_balance(owner_id, credited_to_id, amount)
        else:
            self.db.adjust_cash_balance(owner_id, amount)

    def _apply_expense(
        self, owner_id: int, method: str, payment_source_id: Optional[int], amount: Decimal
    ) -> None:
        # A negative amount reverses an earlier debit
        if method == PaymentMethod.BANK.value:
            self.db.adjust_bank_balance(owner_id, payment_source_id, -amount)
        elif method == PaymentMethod.CREDIT_CARD.value:
            self.db.adjust_card_used_limit(owner_id, payment_source_id, amount)
        else:
            self.db.adjust_cash_balance(owner_id, -amount)

    def add_income(
        self,
        owner_id: int,
        source: str,
        amount: Decimal,
        credited_to_type: str,
        credited_to_id: Optional[int],
        on_date: Union[date, datetime],
    ) -> int:
        """Record an income entry and credit the receiving account.

        Args:
            owner_id: Owning user ID
            source: Where the income came from
            amount: Positive amount
            credited_to_type: bank or cash
            credited_to_id: Bank ID when credited to a bank
            on_date: Entry date

        Returns:
            Income entry ID

        Raises:
            ValidationError: If the amount or credit type is invalid
            NotFoundError: If the bank does not belong to the owner
        """
        source, target, credited_to_id = self._validate_income(
            owner_id, source, amount, credited_to_type, credited_to_id
        )

        income_id = self.db.create_income(
            owner_id=owner_id,
            source=source,
            amount=amount,
            credited_to_type=target.value,
            credited_to_id=credited_to_id,
            on_date=_entry_timestamp(on_date),
        )
        self._apply_income(owner_id, target.value, credited_to_id, amount)
        return income_id

    def _require_income(self, owner_id: int, income_id: int) -> dict:
        row = self.db.get_income(owner_id, income_id)
        if row is None:
            raise NotFoundError(income_not_found(income_id))
        return row

    def update_income(
        self,
        owner_id: int,
        income_id: int,
        source: Optional[str] = None,
        amount: Optional[Decimal] = None,
        credited_to_type: Optional[str] = None,
        credited_to_id: Optional[int] = None,
        on_date: Union[date, datetime, None] = None,
    ) -> None:
        """Edit an income entry and move its credit to the new account.

        Fields left as None keep their stored value. The old credit is
        reversed before the new one is applied, so changing the amount or
        the receiving account leaves every balance consistent.

        Raises:
            ValidationError: If the new values are invalid
            NotFoundError: If the entry, or the new bank, does not belong to the owner
        """
        current = self._require_income(owner_id, income_id)

        if credited_to_type is None:
            credited_to_type = current["credited_to_type"]
            if credited_to_id is None:
                credited_to_id = current["credited_to_id"]
        if amount is None:
            amount = current["amount"]
        source, target, credited_to_id = self._validate_income(
            owner_id,
            source if source is not None else current["source"],
            amount,
            credited_to_type,
            credited_to_id,
        )
        timestamp = _entry_timestamp(on_date) if on_date is not None else current["date"]

        self._apply_income(
            owner_id, current["credited_to_type"], current["credited_to_id"], -current["amount"]
        )
        self.db.update_income(
            owner_id,
            income_id,
            source=source,
            amount=amount,
            credited_to_type=target.value,
            credited_to_id=credited_to_id,
            on_date=timestamp,
        )
        self._apply_income(owner_id, target.value, credited_to_id, amount)

    def delete_income(self, owner_id: int, income_id: int) -> None:
        """Delete an income entry and reverse its credit.

        Raises:
            NotFoundError: If the entry does not belong to the owner
        """
        current = self._require_income(owner_id, income_id)
        self._apply_income(
            owner_id, current["credited_to_type"], current["credited_to_id"], -current["amount"]
        )
        self.db.delete_income(owner_id, income_id)

    def add_expense(
        self,
        owner_id: int,
        title: str,
        amount: Decimal,
        payment_method: str,
        payment_source_id: Optional[int],
        on_date: Union[date, datetime],
    ) -> int:
        """Record an expense and debit the paying account.

        Credit card expenses increase the card's used limit.

        Raises:
            ValidationError: If the amount or payment method is invalid
            NotFoundError: If the bank or card does not belong to the owner
        """
        title, method, payment_source_id = self._validate_expense(
            owner_id, title, amount, payment_method, payment_source_id
        )

        expense_id = self.db.create_expense(
            owner_id=owner_id,
            title=title,
            amount=amount,
            payment_method=method.value,
            payment_source_id=payment_source_id,
            on_date=_entry_timestamp(on_date),
        )
        self._apply_expense(owner_id, method.value, payment_source_id, amount)
        return expense_id

    def _require_expense(self, owner_id: int, expense_id: int) -> dict:
        row = self.db.get_expense(owner_id, expense_id)
        if row is None:
            raise NotFoundError(expense_not_found(expense_id))
        return row

    def update_expense(
        self,
        owner_id: int,
        expense_id: int,
        title: Optional[str] = None,
        amount: Optional[Decimal] = None,
        payment_method: Optional[str] = None,
        payment_source_id: Optional[int] = None,
        on_date: Union[date, datetime, None] = None,
    ) -> None:
        """Edit an expense, reversing the old debit before applying the new one.

        Raises:
            ValidationError: If the new values are invalid
            NotFoundError: If the expense, or the new account, does not belong to the owner
        """
        current = self._require_expense(owner_id, expense_id)

        if payment_method is None:
            payment_method = current["payment_method"]
            if payment_source_id is None:
                payment_source_id = current["payment_source_id"]
        if amount is None:
            amount = current["amount"]
        title, method, payment_source_id = self._validate_expense(
            owner_id,
            title if title is not None else current["title"],
            amount,
            payment_method,
            payment_source_id,
        )
        timestamp = _entry_timestamp(on_date) if on_date is not None else current["date"]

        self._apply_expense(
            owner_id, current["payment_method"], current["payment_source_id"], -current["amount"]
        )
        self.db.update_expense(
            owner_id,
            expense_id,
            title=title,
            amount=amount,
            payment_method=method.value,
            payment_source_id=payment_source_id,
            on_date=timestamp,
        )
        self._apply_expense(owner_id, method.value, payment_source_id, amount)

    def delete_expense(self, owner_id: int, expense_id: int) -> None:
        """Delete an expense and reverse its debit.

        Raises:
            NotFoundError: If the expense does not belong to the owner
        """
        current = self._require_expense(owner_id, expense_id)
        self._apply_expense(
            owner_id, current["payment_method"], current["payment_source_id"], -current["amount"]
        )
        self.db.delete_expense(owner_id, expense_id)

    def list_income(
        self,
        owner_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[ActivityRecord]:
        """List income entries as activity records, newest first."""
        rows = self.db.list_income(owner_id, start_date=start_date, end_date=end_date)
        return order(normalize_rows(RecordSource.INCOME, rows))

    def list_expenses(
        self,
        owner_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[ActivityRecord]:
        """List expenses as activity records, newest first."""
        rows = self.db.list_expenses(owner_id, start_date=start_date, end_date=end_date)
        return order(normalize_rows(RecordSource.EXPENSE, rows))
