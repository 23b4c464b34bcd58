"""Tests for normalizing storage rows into activity records."""

import logging
from datetime import datetime, timezone, timedelta
from decimal import Decimal

import pytest

from fintrack.domain.entities import ActivityType, RecordSource, SetupSubtype
from fintrack.domain.errors import MalformedRecord
from fintrack.domain.record_adapter import (
    bank_to_record,
    cash_balance_to_record,
    credit_card_to_record,
    expense_to_record,
    income_to_record,
    normalize_rows,
)


CREATED = datetime(2025, 3, 1, 8, 30)


def income_row(**overrides):
    row = {
        "id": 7,
        "user_id": 1,
        "source": "Salary",
        "amount": Decimal("3000.00"),
        "credited_to_type": "bank",
        "credited_to_id": 2,
        "bank_name": "HDFC",
        "date": datetime(2025, 3, 5, 10, 0),
        "created_at": CREATED,
    }
    row.update(overrides)
    return row


def expense_row(**overrides):
    row = {
        "id": 9,
        "user_id": 1,
        "title": "Groceries",
        "amount": Decimal("100.00"),
        "payment_method": "cash",
        "payment_source_id": None,
        "bank_name": None,
        "card_name": None,
        "date": datetime(2025, 3, 6, 18, 0),
        "created_at": CREATED,
    }
    row.update(overrides)
    return row


class TestSetupRows:
    """Bank, credit card and cash rows become setup records."""

    def test_bank(self):
        record = bank_to_record(
            {"id": 2, "user_id": 1, "name": "HDFC", "initial_balance": Decimal("1000"), "created_at": CREATED}
        )
        assert record.activity_type == ActivityType.SETUP
        assert record.subtype == SetupSubtype.BANK_ADDED
        assert record.description == "Added bank: HDFC"
        assert record.account_info == "HDFC"
        assert record.amount == Decimal("1000")
        assert record.activity_date == CREATED
        assert record.id.source == RecordSource.BANK
        assert record.id.source_id == 2

    def test_bank_without_initial_balance(self):
        record = bank_to_record(
            {"id": 2, "user_id": 1, "name": "HDFC", "initial_balance": None, "created_at": CREATED}
        )
        assert record.amount is None

    def test_credit_card(self):
        record = credit_card_to_record(
            {"id": 3, "user_id": 1, "name": "AMEX", "credit_limit": "5000.00", "created_at": CREATED}
        )
        assert record.subtype == SetupSubtype.CREDIT_CARD_ADDED
        assert record.description == "Added credit card: AMEX"
        assert record.amount == Decimal("5000.00")
        assert record.account_info == "AMEX"

    def test_cash_balance_dated_at_update(self):
        updated = datetime(2025, 3, 4, 12, 0)
        record = cash_balance_to_record(
            {
                "id": 1,
                "user_id": 1,
                "balance": Decimal("800"),
                "initial_balance": Decimal("500"),
                "created_at": CREATED,
                "updated_at": updated,
            }
        )
        assert record.subtype == SetupSubtype.CASH_BALANCE_SET
        assert record.description == "Set cash balance"
        assert record.account_info == "Cash"
        assert record.amount == Decimal("500")
        assert record.activity_date == updated
        assert record.created_at == CREATED


class TestIncomeRows:
    def test_credited_to_bank(self):
        record = income_to_record(income_row())
        assert record.activity_type == ActivityType.INCOME
        assert record.subtype is None
        assert record.description == "Salary"
        assert record.account_info == "HDFC"
        assert record.activity_date == datetime(2025, 3, 5, 10, 0)
        assert record.created_at == CREATED

    def test_credited_to_cash(self):
        record = income_to_record(income_row(credited_to_type="cash", bank_name=None))
        assert record.account_info == "Cash"

    def test_deleted_bank_falls_back(self):
        record = income_to_record(income_row(bank_name=None))
        assert record.account_info == "Unknown Bank"

    def test_string_date_is_parsed(self):
        record = income_to_record(income_row(date="2025-03-05"))
        assert record.activity_date == datetime(2025, 3, 5)

    def test_aware_timestamp_normalized_to_utc(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        record = income_to_record(income_row(date=datetime(2025, 3, 5, 5, 30, tzinfo=ist)))
        assert record.activity_date == datetime(2025, 3, 5, 0, 0)
        assert record.activity_date.tzinfo is None

    def test_missing_date_uses_created_at(self):
        record = income_to_record(income_row(date=None))
        assert record.activity_date == CREATED

    def test_negative_amount_is_malformed(self):
        with pytest.raises(MalformedRecord) as exc_info:
            income_to_record(income_row(amount=Decimal("-5")))
        assert "income row 7" in str(exc_info.value)


class TestExpenseRows:
    def test_cash(self):
        record = expense_to_record(expense_row())
        assert record.activity_type == ActivityType.EXPENSE
        assert record.description == "Groceries"
        assert record.account_info == "Cash"

    def test_bank(self):
        record = expense_to_record(expense_row(payment_method="bank", payment_source_id=2, bank_name="SBI"))
        assert record.account_info == "SBI"

    def test_credit_card(self):
        record = expense_to_record(
            expense_row(payment_method="credit_card", payment_source_id=3, card_name="AMEX")
        )
        assert record.account_info == "AMEX"

    def test_deleted_card_falls_back(self):
        record = expense_to_record(expense_row(payment_method="credit_card", payment_source_id=3))
        assert record.account_info == "Unknown Card"

    def test_float_amount_is_coerced(self):
        record = expense_to_record(expense_row(amount=12.5))
        assert record.amount == Decimal("12.5")


class TestMalformedRows:
    def test_missing_id(self):
        with pytest.raises(MalformedRecord):
            expense_to_record(expense_row(id=None))

    def test_missing_owner(self):
        with pytest.raises(MalformedRecord):
            expense_to_record(expense_row(user_id=None))

    def test_missing_created_at(self):
        with pytest.raises(MalformedRecord):
            expense_to_record(expense_row(created_at=None))

    def test_unparseable_date(self):
        with pytest.raises(MalformedRecord):
            expense_to_record(expense_row(date="not a date"))

    def test_non_numeric_amount(self):
        with pytest.raises(MalformedRecord):
            expense_to_record(expense_row(amount="lots"))


def test_normalize_rows_skips_malformed(caplog):
    rows = [expense_row(id=1), expense_row(id=2, amount="lots"), expense_row(id=3)]

    with caplog.at_level(logging.WARNING, logger="fintrack.domain.record_adapter"):
        records = normalize_rows(RecordSource.EXPENSE, rows)

    assert [record.id.source_id for record in records] == [1, 3]
    assert "Malformed expense row 2" in caplog.text


def test_normalize_rows_empty():
    assert normalize_rows(RecordSource.INCOME, []) == []
