"""Domain model entities for fintrack.

These are pure data classes representing business concepts, independent of
database schema. The activity feed works on ActivityRecord, a canonical shape
built fresh from the storage rows on every load.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from math import ceil
from typing import Any, Optional


class ActivityType(str, Enum):
    """Kind of activity shown in the feed."""

    INCOME = "income"
    EXPENSE = "expense"
    SETUP = "setup"


class SetupSubtype(str, Enum):
    """Kind of account configuration event."""

    BANK_ADDED = "bank_added"
    CREDIT_CARD_ADDED = "credit_card_added"
    CASH_BALANCE_SET = "cash_balance_set"


class RecordSource(str, Enum):
    """Storage source a record was built from."""

    BANK = "bank"
    CREDIT_CARD = "credit_card"
    CASH_BALANCE = "cash_balance"
    INCOME = "income"
    EXPENSE = "expense"


class TrackingOption(str, Enum):
    """What a user chose to track at registration."""

    INCOME = "income"
    EXPENSES = "expenses"
    BOTH = "both"


class CreditedToType(str, Enum):
    """Where an income entry was credited."""

    BANK = "bank"
    CASH = "cash"


class PaymentMethod(str, Enum):
    """How an expense was paid."""

    CASH = "cash"
    BANK = "bank"
    CREDIT_CARD = "credit_card"


@dataclass(frozen=True, order=True)
class ActivityId:
    """Identity of an activity record.

    Storage ids are only unique per source, so the source is part of the key.
    """

    source: RecordSource
    source_id: int

    def __str__(self) -> str:
        return f"{self.source.value}:{self.source_id}"


@dataclass(frozen=True)
class ActivityRecord:
    """Canonical activity feed record."""

    id: ActivityId
    activity_type: ActivityType
    subtype: Optional[SetupSubtype]
    amount: Optional[Decimal]
    description: str
    account_info: str
    activity_date: datetime
    created_at: datetime
    owner_id: int

    @property
    def is_dated(self) -> bool:
        """True when activity_date holds a usable timestamp."""
        return isinstance(self.activity_date, datetime)


@dataclass(frozen=True)
class ActivityFilter:
    """Optional, AND-combined filters for the activity feed."""

    activity_type: Optional[ActivityType] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    month: Optional[int] = None
    year: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.activity_type,
                self.date_from,
                self.date_to,
                self.month,
                self.year,
            )
        )


@dataclass(frozen=True)
class Statistics:
    """Totals derived from one view of the activity feed."""

    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    total_transactions: int = 0

    @property
    def net_balance(self) -> Decimal:
        return self.total_income - self.total_expenses

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_income": self.total_income,
            "total_expenses": self.total_expenses,
            "net_balance": self.net_balance,
            "total_transactions": self.total_transactions,
        }


@dataclass(frozen=True)
class TypeTotal:
    """Per-type aggregate row for the monthly summary."""

    type: ActivityType
    total: Decimal
    count: int


@dataclass(frozen=True)
class Page:
    """One page of an ordered record set."""

    items: tuple[ActivityRecord, ...]
    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total_count / self.page_size)


@dataclass(frozen=True)
class ExportRow:
    """Flat export row: date, type, description, amount, account."""

    date: str
    type: str
    description: str
    amount: str
    account: str

    def as_tuple(self) -> tuple[str, str, str, str, str]:
        return (self.date, self.type, self.description, self.amount, self.account)


@dataclass(frozen=True)
class DisplayRow:
    """Read-model row for one activity."""

    date: str
    action: str
    type: str
    description: str
    amount: str
    details: str

    def to_dict(self) -> dict[str, str]:
        return {
            "date": self.date,
            "action": self.action,
            "type": self.type,
            "description": self.description,
            "amount": self.amount,
            "details": self.details,
        }


@dataclass(frozen=True)
class ActivityPage:
    """Paginated activity response."""

    activities: tuple[DisplayRow, ...]
    statistics: Statistics
    page: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total_count / self.page_size)

    def to_payload(self) -> dict[str, Any]:
        return {
            "activities": [row.to_dict() for row in self.activities],
            "statistics": {
                key: str(value) if isinstance(value, Decimal) else value
                for key, value in self.statistics.to_dict().items()
            },
            "page": self.page,
            "page_size": self.page_size,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
        }


@dataclass(frozen=True)
class ActivityExport:
    """All records matching a filter, flattened for export."""

    rows: tuple[ExportRow, ...]
    statistics: Statistics


@dataclass(frozen=True)
class User:
    """Registered user domain entity."""

    id: int
    username: str
    name: str
    tracking_option: TrackingOption
    created_at: datetime


@dataclass(frozen=True)
class Bank:
    """Bank account domain entity."""

    id: int
    owner_id: int
    name: str
    initial_balance: Decimal
    current_balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class CreditCard:
    """Credit card domain entity."""

    id: int
    owner_id: int
    name: str
    credit_limit: Decimal
    used_limit: Decimal
    created_at: datetime


@dataclass(frozen=True)
class CashBalance:
    """Cash holdings of a user."""

    id: int
    owner_id: int
    balance: Decimal
    initial_balance: Decimal
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class BankBalance:
    """Bank balance as of a month end."""

    bank_id: int
    name: str
    initial_balance: Decimal
    balance: Decimal


@dataclass(frozen=True)
class CardUsage:
    """Credit card usage as of a month end."""

    card_id: int
    name: str
    credit_limit: Decimal
    used_limit: Decimal


@dataclass(frozen=True)
class MonthlySummary:
    """Monthly summary with type totals and month-end balances."""

    month: int
    year: int
    type_totals: tuple[TypeTotal, ...] = ()
    monthly_income: Decimal = Decimal("0")
    monthly_expenses: Decimal = Decimal("0")
    banks: tuple[BankBalance, ...] = ()
    cash_balance: Decimal = Decimal("0")
    cash_initial_balance: Decimal = Decimal("0")
    credit_cards: tuple[CardUsage, ...] = ()
    tracking_option: TrackingOption = TrackingOption.BOTH
    is_current_month: bool = False
    is_month_completed: bool = False
    message: Optional[str] = None
    total_initial_balance: Decimal = Decimal("0")
    total_current_wealth: Decimal = Decimal("0")

    @property
    def net_savings(self) -> Decimal:
        return self.total_initial_balance + self.monthly_income - self.monthly_expenses
