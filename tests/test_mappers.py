"""Tests for database mappers."""

from datetime import datetime
from decimal import Decimal

from fintrack.database.models import (
    User as ORMUser,
    Bank as ORMBank,
    CashBalance as ORMCashBalance,
    Expense as ORMExpense,
)
from fintrack.database.mappers import (
    bank_to_domain,
    bank_to_row,
    cash_balance_to_row,
    expense_to_row,
    user_to_domain,
)
from fintrack.domain.entities import Bank, TrackingOption, User
from fintrack.domain.record_adapter import bank_to_record, expense_to_record

CREATED = datetime(2025, 1, 5, 10, 0)


def test_user_to_domain():
    orm_user = ORMUser(id=1, username="asha", name="Asha", tracking_option="income", created_at=CREATED)

    user = user_to_domain(orm_user)

    assert isinstance(user, User)
    assert user.tracking_option == TrackingOption.INCOME
    assert user.created_at == CREATED


def test_bank_to_domain_and_row():
    orm_bank = ORMBank(
        id=2,
        user_id=1,
        name="HDFC",
        initial_balance=Decimal("100.00"),
        current_balance=Decimal("150.00"),
        created_at=CREATED,
    )

    bank = bank_to_domain(orm_bank)
    assert isinstance(bank, Bank)
    assert bank.owner_id == 1
    assert bank.current_balance == Decimal("150.00")

    row = bank_to_row(orm_bank)
    assert row == {
        "id": 2,
        "user_id": 1,
        "name": "HDFC",
        "initial_balance": Decimal("100.00"),
        "created_at": CREATED,
    }
    # Rows are the shape the record adapter consumes
    assert bank_to_record(row).description == "Added bank: HDFC"


def test_cash_balance_row_includes_updated_at():
    updated = datetime(2025, 2, 1)
    orm_cash = ORMCashBalance(
        id=1, user_id=1, balance=Decimal("5"), initial_balance=Decimal("5"),
        created_at=CREATED, updated_at=updated,
    )

    assert cash_balance_to_row(orm_cash)["updated_at"] == updated


def test_expense_to_row_with_names():
    orm_expense = ORMExpense(
        id=3,
        user_id=1,
        title="Flight",
        amount=Decimal("800.00"),
        payment_method="credit_card",
        payment_source_id=4,
        date=datetime(2025, 3, 3, 7, 0),
        created_at=CREATED,
    )

    row = expense_to_row(orm_expense, card_name="AMEX")

    assert row["card_name"] == "AMEX"
    assert row["bank_name"] is None
    assert expense_to_record(row).account_info == "AMEX"
