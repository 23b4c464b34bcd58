"""Mapper functions to convert SQLAlchemy models.

Entities used by the account and transaction services are converted to
domain dataclasses. Activity sources are converted to plain row dicts, the
raw shape the record adapter normalizes.
"""

from typing import Any, Optional

from fintrack.domain import entities as domain
from fintrack.database.models import (
    User as ORMUser,
    Bank as ORMBank,
    CreditCard as ORMCreditCard,
    CashBalance as ORMCashBalance,
    IncomeEntry as ORMIncomeEntry,
    Expense as ORMExpense,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        username=orm_user.username,
        name=orm_user.name,
        tracking_option=domain.TrackingOption(orm_user.tracking_option),
        created_at=orm_user.created_at,
    )


def bank_to_domain(orm_bank: ORMBank) -> domain.Bank:
    """Convert SQLAlchemy Bank model to domain Bank entity."""
    return domain.Bank(
        id=orm_bank.id,
        owner_id=orm_bank.user_id,
        name=orm_bank.name,
        initial_balance=orm_bank.initial_balance,
        current_balance=orm_bank.current_balance,
        created_at=orm_bank.created_at,
    )


def credit_card_to_domain(orm_card: ORMCreditCard) -> domain.CreditCard:
    """Convert SQLAlchemy CreditCard model to domain CreditCard entity."""
    return domain.CreditCard(
        id=orm_card.id,
        owner_id=orm_card.user_id,
        name=orm_card.name,
        credit_limit=orm_card.credit_limit,
        used_limit=orm_card.used_limit,
        created_at=orm_card.created_at,
    )


def cash_balance_to_domain(orm_cash: ORMCashBalance) -> domain.CashBalance:
    """Convert SQLAlchemy CashBalance model to domain CashBalance entity."""
    return domain.CashBalance(
        id=orm_cash.id,
        owner_id=orm_cash.user_id,
        balance=orm_cash.balance,
        initial_balance=orm_cash.initial_balance,
        created_at=orm_cash.created_at,
        updated_at=orm_cash.updated_at,
    )


def bank_to_row(orm_bank: ORMBank) -> dict[str, Any]:
    """Convert SQLAlchemy Bank model to a bank creation row."""
    return {
        "id": orm_bank.id,
        "user_id": orm_bank.user_id,
        "name": orm_bank.name,
        "initial_balance": orm_bank.initial_balance,
        "created_at": orm_bank.created_at,
    }


def credit_card_to_row(orm_card: ORMCreditCard) -> dict[str, Any]:
    """Convert SQLAlchemy CreditCard model to a card creation row."""
    return {
        "id": orm_card.id,
        "user_id": orm_card.user_id,
        "name": orm_card.name,
        "credit_limit": orm_card.credit_limit,
        "created_at": orm_card.created_at,
    }


def cash_balance_to_row(orm_cash: ORMCashBalance) -> dict[str, Any]:
    """Convert SQLAlchemy CashBalance model to a cash balance row."""
    return {
        "id": orm_cash.id,
        "user_id": orm_cash.user_id,
        "balance": orm_cash.balance,
        "initial_balance": orm_cash.initial_balance,
        "created_at": orm_cash.created_at,
        "updated_at": orm_cash.updated_at,
    }


def income_to_row(
    orm_income: ORMIncomeEntry, bank_name: Optional[str] = None
) -> dict[str, Any]:
    """Convert SQLAlchemy IncomeEntry model to an income row."""
    return {
        "id": orm_income.id,
        "user_id": orm_income.user_id,
        "source": orm_income.source,
        "amount": orm_income.amount,
        "credited_to_type": orm_income.credited_to_type,
        "credited_to_id": orm_income.credited_to_id,
        "bank_name": bank_name,
        "date": orm_income.date,
        "created_at": orm_income.created_at,
    }


def expense_to_row(
    orm_expense: ORMExpense,
    bank_name: Optional[str] = None,
    card_name: Optional[str] = None,
) -> dict[str, Any]:
    """Convert SQLAlchemy Expense model to an expense row."""
    return {
        "id": orm_expense.id,
        "user_id": orm_expense.user_id,
        "title": orm_expense.title,
        "amount": orm_expense.amount,
        "payment_method": orm_expense.payment_method,
        "payment_source_id": orm_expense.payment_source_id,
        "bank_name": bank_name,
        "card_name": card_name,
        "date": orm_expense.date,
        "created_at": orm_expense.created_at,
    }
