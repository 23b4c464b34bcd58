"""Tests for recording income and expenses."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from fintrack.cli.main import cli
from fintrack.domain.entities import ActivityType
from fintrack.domain.errors import NotFoundError, ValidationError


class TestAddIncome:
    def test_credit_bank(self, transaction_service, account_service, sample_user, sample_bank):
        transaction_service.add_income(
            sample_user.id, "Salary", Decimal("3000"), "bank", sample_bank.id, date(2025, 3, 1)
        )

        bank = account_service.list_banks(sample_user.id)[0]
        assert bank.current_balance == Decimal("4000.00")

    def test_credit_cash_creates_balance(self, transaction_service, account_service, sample_user):
        transaction_service.add_income(
            sample_user.id, "Gift", Decimal("50"), "cash", None, date(2025, 3, 1)
        )

        cash = account_service.get_cash_balance(sample_user.id)
        assert cash.balance == Decimal("50")
        assert cash.initial_balance == Decimal("0")

    def test_plain_date_keeps_the_day(self, transaction_service, sample_user):
        transaction_service.add_income(
            sample_user.id, "Gift", Decimal("50"), "cash", None, date(2025, 3, 1)
        )

        record = transaction_service.list_income(sample_user.id)[0]
        assert record.activity_date.date() == date(2025, 3, 1)
        assert record.activity_type == ActivityType.INCOME

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-10")])
    def test_amount_must_be_positive(self, transaction_service, sample_user, amount):
        with pytest.raises(ValidationError, match="greater than zero"):
            transaction_service.add_income(sample_user.id, "Gift", amount, "cash", None, date(2025, 3, 1))

    def test_unknown_credit_type(self, transaction_service, sample_user):
        with pytest.raises(ValidationError, match="Invalid credit type 'wallet'"):
            transaction_service.add_income(
                sample_user.id, "Gift", Decimal("5"), "wallet", None, date(2025, 3, 1)
            )

    def test_bank_of_other_user(self, transaction_service, other_user, sample_bank):
        with pytest.raises(NotFoundError):
            transaction_service.add_income(
                other_user.id, "Salary", Decimal("5"), "bank", sample_bank.id, date(2025, 3, 1)
            )


class TestAddExpense:
    def test_bank_debit(self, transaction_service, account_service, sample_user, sample_bank):
        transaction_service.add_expense(
            sample_user.id, "Rent", Decimal("400"), "bank", sample_bank.id, date(2025, 3, 1)
        )

        assert account_service.list_banks(sample_user.id)[0].current_balance == Decimal("600.00")

    def test_card_increases_used_limit(self, transaction_service, account_service, sample_user, sample_card):
        transaction_service.add_expense(
            sample_user.id, "Flight", Decimal("800"), "credit_card", sample_card.id, date(2025, 3, 1)
        )

        assert account_service.list_credit_cards(sample_user.id)[0].used_limit == Decimal("800.00")

    def test_cash_debit(self, transaction_service, account_service, sample_user):
        account_service.set_cash_balance(sample_user.id, Decimal("500"))
        transaction_service.add_expense(
            sample_user.id, "Groceries", Decimal("100"), "cash", None, date(2025, 3, 1)
        )

        assert account_service.get_cash_balance(sample_user.id).balance == Decimal("400.00")

    def test_missing_card(self, transaction_service, sample_user):
        with pytest.raises(NotFoundError, match="Credit card 42 not found"):
            transaction_service.add_expense(
                sample_user.id, "Flight", Decimal("1"), "credit_card", 42, date(2025, 3, 1)
            )

    def test_title_required(self, transaction_service, sample_user):
        with pytest.raises(ValidationError, match="Expense title is required"):
            transaction_service.add_expense(sample_user.id, " ", Decimal("1"), "cash", None, date(2025, 3, 1))

    def test_unknown_payment_method(self, transaction_service, sample_user):
        with pytest.raises(ValidationError, match="Invalid payment method"):
            transaction_service.add_expense(
                sample_user.id, "Tea", Decimal("1"), "cheque", None, date(2025, 3, 1)
            )


class TestEditIncome:
    @pytest.fixture
    def salary(self, transaction_service, sample_user, sample_bank):
        return transaction_service.add_income(
            sample_user.id, "Salary", Decimal("3000"), "bank", sample_bank.id, datetime(2025, 3, 1, 9, 0)
        )

    def test_change_amount(self, transaction_service, account_service, sample_user, salary):
        transaction_service.update_income(sample_user.id, salary, amount=Decimal("3500"))

        assert account_service.list_banks(sample_user.id)[0].current_balance == Decimal("4500.00")
        [record] = transaction_service.list_income(sample_user.id)
        assert record.amount == Decimal("3500")
        assert record.description == "Salary"
        assert record.activity_date == datetime(2025, 3, 1, 9, 0)

    def test_move_to_cash(self, transaction_service, account_service, sample_user, salary):
        transaction_service.update_income(sample_user.id, salary, source="Bonus", credited_to_type="cash")

        assert account_service.list_banks(sample_user.id)[0].current_balance == Decimal("1000.00")
        assert account_service.get_cash_balance(sample_user.id).balance == Decimal("3000")
        [record] = transaction_service.list_income(sample_user.id)
        assert record.description == "Bonus"
        assert record.account_info == "Cash"

    def test_invalid_edit_leaves_balances(self, transaction_service, account_service, sample_user, salary):
        with pytest.raises(ValidationError):
            transaction_service.update_income(sample_user.id, salary, amount=Decimal("0"))

        assert account_service.list_banks(sample_user.id)[0].current_balance == Decimal("4000.00")

    def test_delete_reverses_credit(self, transaction_service, account_service, sample_user, salary):
        transaction_service.delete_income(sample_user.id, salary)

        assert transaction_service.list_income(sample_user.id) == []
        assert account_service.list_banks(sample_user.id)[0].current_balance == Decimal("1000.00")

    def test_other_users_entry(self, transaction_service, other_user, salary):
        with pytest.raises(NotFoundError, match=f"Income transaction {salary} not found"):
            transaction_service.delete_income(other_user.id, salary)


class TestEditExpense:
    @pytest.fixture
    def groceries(self, transaction_service, sample_user):
        return transaction_service.add_expense(
            sample_user.id, "Groceries", Decimal("100"), "cash", None, datetime(2025, 3, 2, 18, 0)
        )

    def test_move_to_card(self, transaction_service, account_service, sample_user, sample_card, groceries):
        transaction_service.update_expense(
            sample_user.id,
            groceries,
            amount=Decimal("150"),
            payment_method="credit_card",
            payment_source_id=sample_card.id,
        )

        assert account_service.get_cash_balance(sample_user.id).balance == Decimal("0")
        assert account_service.list_credit_cards(sample_user.id)[0].used_limit == Decimal("150")
        [record] = transaction_service.list_expenses(sample_user.id)
        assert record.account_info == "AMEX"

    def test_change_date_and_title(self, transaction_service, sample_user, groceries):
        transaction_service.update_expense(
            sample_user.id, groceries, title="Vegetables", on_date=datetime(2025, 4, 1, 8, 0)
        )

        [record] = transaction_service.list_expenses(sample_user.id)
        assert record.description == "Vegetables"
        assert record.activity_date == datetime(2025, 4, 1, 8, 0)
        assert record.amount == Decimal("100")

    def test_unknown_card(self, transaction_service, account_service, sample_user, groceries):
        with pytest.raises(NotFoundError):
            transaction_service.update_expense(
                sample_user.id, groceries, payment_method="credit_card", payment_source_id=99
            )
        assert account_service.get_cash_balance(sample_user.id).balance == Decimal("-100")

    def test_delete_card_expense(self, transaction_service, account_service, sample_user, sample_card):
        expense_id = transaction_service.add_expense(
            sample_user.id, "Flight", Decimal("800"), "credit_card", sample_card.id, datetime(2025, 3, 3, 7, 0)
        )

        transaction_service.delete_expense(sample_user.id, expense_id)

        assert account_service.list_credit_cards(sample_user.id)[0].used_limit == Decimal("0")
        assert transaction_service.list_expenses(sample_user.id) == []

    def test_missing_expense(self, transaction_service, sample_user):
        with pytest.raises(NotFoundError, match="Expense transaction 42 not found"):
            transaction_service.update_expense(sample_user.id, 42, amount=Decimal("1"))


def test_list_expenses_newest_first_with_bounds(transaction_service, sample_user):
    for day, title in [(1, "First"), (15, "Middle"), (28, "Last")]:
        transaction_service.add_expense(
            sample_user.id, title, Decimal("1"), "cash", None, datetime(2025, 2, day, 12, 0)
        )

    records = transaction_service.list_expenses(sample_user.id)
    assert [r.description for r in records] == ["Last", "Middle", "First"]

    bounded = transaction_service.list_expenses(
        sample_user.id, start_date=date(2025, 2, 15), end_date=date(2025, 2, 15)
    )
    assert [r.description for r in bounded] == ["Middle"]


def test_income_and_expense_commands(cli_runner, temp_db, sample_user, sample_bank, sample_card):
    db_args = ["--db-path", temp_db.database_path]

    result = cli_runner.invoke(
        cli,
        db_args + ["income", "add", "--user", "asha", "--source", "Salary", "--amount", "3,000",
                   "--bank", "hdfc", "--date", "2025-03-01"],
    )
    assert result.exit_code == 0
    assert "Added income" in result.output

    result = cli_runner.invoke(
        cli,
        db_args + ["expense", "add", "--user", "asha", "--title", "Flight", "--amount", "800",
                   "--card", "AMEX", "--date", "2025-03-02"],
    )
    assert result.exit_code == 0
    assert "Added expense" in result.output

    result = cli_runner.invoke(cli, db_args + ["income", "list", "--user", "asha"])
    assert result.exit_code == 0
    assert "Salary" in result.output
    assert "+₹3000.00" in result.output
    assert "HDFC" in result.output

    result = cli_runner.invoke(cli, db_args + ["expense", "list", "--user", "asha"])
    assert "Flight" in result.output
    assert "-₹800.00" in result.output


def test_expense_bank_and_card_are_exclusive(cli_runner, temp_db, sample_user):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "expense", "add", "--user", "asha", "--title", "X",
         "--amount", "1", "--bank", "A", "--card", "B"],
    )

    assert result.exit_code == 1
    assert "Only one of --bank or --card" in result.output


def test_expense_unknown_bank(cli_runner, temp_db, sample_user):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "expense", "add", "--user", "asha", "--title", "X",
         "--amount", "1", "--bank", "Nowhere"],
    )

    assert result.exit_code == 1
    assert "Bank 'Nowhere' not found" in result.output


def test_edit_and_delete_commands(cli_runner, temp_db, sample_user, sample_bank):
    db_args = ["--db-path", temp_db.database_path]
    cli_runner.invoke(
        cli,
        db_args + ["income", "add", "--user", "asha", "--source", "Salary", "--amount", "3000",
                   "--bank", "HDFC", "--date", "2025-03-01"],
    )
    cli_runner.invoke(
        cli,
        db_args + ["expense", "add", "--user", "asha", "--title", "Rent", "--amount", "200",
                   "--bank", "HDFC", "--date", "2025-03-02"],
    )

    result = cli_runner.invoke(cli, db_args + ["income", "edit", "1", "--user", "asha", "--amount", "3,500"])
    assert result.exit_code == 0
    assert "Updated income (ID: 1)" in result.output

    result = cli_runner.invoke(cli, db_args + ["expense", "delete", "1", "--user", "asha"], input="y\n")
    assert result.exit_code == 0
    assert "Deleted expense (ID: 1)" in result.output

    result = cli_runner.invoke(cli, db_args + ["bank", "list", "--user", "asha"])
    assert "₹4500.00" in result.output

    result = cli_runner.invoke(cli, db_args + ["expense", "list", "--user", "asha"])
    assert "No expenses found." in result.output


def test_edit_missing_income_command(cli_runner, temp_db, sample_user):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "income", "edit", "9", "--user", "asha", "--source", "X"]
    )

    assert result.exit_code == 1
    assert "Income transaction 9 not found" in result.output


def test_expense_edit_payment_options_are_exclusive(cli_runner, temp_db, sample_user):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "expense", "edit", "1", "--user", "asha", "--bank", "A", "--cash"],
    )

    assert result.exit_code == 1
    assert "Only one of --bank, --card or --cash" in result.output
