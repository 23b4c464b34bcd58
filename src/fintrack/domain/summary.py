"""Monthly summary domain service."""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.activity import ActivityService
from fintrack.domain.entities import (
    ActivityType,
    BankBalance,
    CardUsage,
    CreditedToType,
    MonthlySummary,
    PaymentMethod,
    TrackingOption,
)
from fintrack.domain.errors import InvalidFilter, NotFoundError
from fintrack.utils.amount_parser import to_decimal
from fintrack.utils.date_parser import month_range, parse_timestamp

FUTURE_MONTH_MESSAGE = "Future date selected - no data available"
BEFORE_REGISTRATION_MESSAGE = "Date before registration - no data available"
NO_TRANSACTIONS_MESSAGE = "No transactions found for this month"

ZERO = Decimal("0")


def _sum_amounts(rows: list[dict]) -> Decimal:
    return sum((to_decimal(row["amount"]) for row in rows if row.get("amount") is not None), ZERO)


class MonthlySummaryService:
    """Service for building monthly summaries."""

    def __init__(self, db: Database, activity_service: Optional[ActivityService] = None):
        """Initialize monthly summary service.

        Args:
            db: Database instance
            activity_service: Activity service used for per-type totals
        """
        self.db = db
        self.activity_service = activity_service or ActivityService(db)

    def build_monthly_summary(
        self,
        owner_id: int,
        month: int,
        year: int,
        today: Optional[date] = None,
    ) -> MonthlySummary:
        """Build the summary of one calendar month.

        Balances are reconstructed as of the last day of the month from the
        opening balances and every income and expense dated up to then.

        Args:
            owner_id: Owning user ID
            month: Month number (1-12)
            year: Year
            today: Reference date for future/current month checks

        Returns:
            MonthlySummary for the month

        Raises:
            InvalidFilter: If month is outside 1-12
            NotFoundError: If the user does not exist
        """
        if not 1 <= month <= 12:
            raise InvalidFilter(f"Month must be between 1 and 12, got {month}")
        today = today or date.today()
        month_start, month_end = month_range(month, year)

        if month_start > today:
            return MonthlySummary(month=month, year=year, message=FUTURE_MONTH_MESSAGE)

        user = self.db.get_user(owner_id)
        if user is None:
            raise NotFoundError(f"User {owner_id} not found")

        registered = user.created_at
        if (year, month) < (registered.year, registered.month):
            return MonthlySummary(
                month=month,
                year=year,
                tracking_option=user.tracking_option,
                is_month_completed=True,
                message=BEFORE_REGISTRATION_MESSAGE,
            )

        is_current_month = (year, month) == (today.year, today.month)
        is_month_completed = (year, month) < (today.year, today.month)

        type_totals = self.activity_service.get_monthly_summary(owner_id, month, year)
        totals = {row.type: row.total for row in type_totals}
        monthly_income = totals.get(ActivityType.INCOME, ZERO)
        monthly_expenses = totals.get(ActivityType.EXPENSE, ZERO)

        income_rows = self.db.list_income(owner_id, end_date=month_end)
        expense_rows = self.db.list_expenses(owner_id, end_date=month_end)
        end_of_month = datetime.combine(month_end, time.max)

        banks = self._bank_balances(owner_id, end_of_month, income_rows, expense_rows)
        cash_initial, cash_balance = self._cash_balance(owner_id, income_rows, expense_rows)

        credit_cards: tuple[CardUsage, ...] = ()
        if user.tracking_option in (TrackingOption.EXPENSES, TrackingOption.BOTH):
            credit_cards = self._card_usage(owner_id, end_of_month, expense_rows)

        no_transactions = monthly_income == 0 and monthly_expenses == 0
        no_accounts = not banks and cash_initial == 0
        if no_transactions and no_accounts:
            return MonthlySummary(
                month=month,
                year=year,
                type_totals=tuple(type_totals),
                tracking_option=user.tracking_option,
                is_current_month=is_current_month,
                is_month_completed=is_month_completed,
                message=NO_TRANSACTIONS_MESSAGE,
            )

        total_initial = sum((bank.initial_balance for bank in banks), ZERO) + cash_initial
        total_wealth = sum((bank.balance for bank in banks), ZERO) + cash_balance

        return MonthlySummary(
            month=month,
            year=year,
            type_totals=tuple(type_totals),
            monthly_income=monthly_income,
            monthly_expenses=monthly_expenses,
            banks=banks,
            cash_balance=cash_balance,
            cash_initial_balance=cash_initial,
            credit_cards=credit_cards,
            tracking_option=user.tracking_option,
            is_current_month=is_current_month,
            is_month_completed=is_month_completed,
            total_initial_balance=total_initial,
            total_current_wealth=total_wealth,
        )

    def _bank_balances(
        self,
        owner_id: int,
        end_of_month: datetime,
        income_rows: list[dict],
        expense_rows: list[dict],
    ) -> tuple[BankBalance, ...]:
        balances = []
        for bank in self.db.list_banks(owner_id):
            if parse_timestamp(bank.created_at) > end_of_month:
                continue
            initial = bank.initial_balance or ZERO
            credited = _sum_amounts([
                row for row in income_rows
                if row["credited_to_type"] == CreditedToType.BANK.value
                and row["credited_to_id"] == bank.id
            ])
            debited = _sum_amounts([
                row for row in expense_rows
                if row["payment_method"] == PaymentMethod.BANK.value
                and row["payment_source_id"] == bank.id
            ])
            balances.append(
                BankBalance(
                    bank_id=bank.id,
                    name=bank.name,
                    initial_balance=initial,
                    balance=initial + credited - debited,
                )
            )
        return tuple(balances)

    def _cash_balance(
        self, owner_id: int, income_rows: list[dict], expense_rows: list[dict]
    ) -> tuple[Decimal, Decimal]:
        cash = self.db.get_cash_balance(owner_id)
        # Cash movements are tracked even before an opening balance is set
        initial = cash.initial_balance if cash is not None else ZERO
        credited = _sum_amounts([
            row for row in income_rows if row["credited_to_type"] == CreditedToType.CASH.value
        ])
        debited = _sum_amounts([
            row for row in expense_rows if row["payment_method"] == PaymentMethod.CASH.value
        ])
        return initial, initial + credited - debited

    def _card_usage(
        self, owner_id: int, end_of_month: datetime, expense_rows: list[dict]
    ) -> tuple[CardUsage, ...]:
        usage = []
        for card in self.db.list_credit_cards(owner_id):
            if parse_timestamp(card.created_at) > end_of_month:
                continue
            used = _sum_amounts([
                row for row in expense_rows
                if row["payment_method"] == PaymentMethod.CREDIT_CARD.value
                and row["payment_source_id"] == card.id
            ])
            usage.append(
                CardUsage(
                    card_id=card.id,
                    name=card.name,
                    credit_limit=card.credit_limit or ZERO,
                    used_limit=used,
                )
            )
        return tuple(usage)
