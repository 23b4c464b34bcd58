"""Shared pytest fixtures for fintrack tests."""

import tempfile
import os
from datetime import datetime
from decimal import Decimal

import pytest

from fintrack.database.factories import create_sqlite_database
from fintrack.domain.account import AccountService
from fintrack.domain.activity import ActivityService
from fintrack.domain.entities import (
    ActivityId,
    ActivityRecord,
    ActivityType,
    RecordSource,
    SetupSubtype,
)
from fintrack.domain.transaction import TransactionService
from fintrack.domain.user import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def activity_service(temp_db):
    """Create an ActivityService with a temporary database."""
    return ActivityService(temp_db)


@pytest.fixture
def sample_user(user_service):
    """Register a sample user tracking income and expenses."""
    user_id = user_service.register(username="asha", name="Asha Rao")
    return user_service.get_user(user_id)


@pytest.fixture
def other_user(user_service):
    """Register a second user for isolation tests."""
    user_id = user_service.register(username="ravi", name="Ravi Kumar")
    return user_service.get_user(user_id)


@pytest.fixture
def sample_bank(account_service, sample_user):
    """Create a sample bank with an opening balance."""
    account_service.add_bank(sample_user.id, "HDFC", Decimal("1000.00"))
    return account_service.list_banks(sample_user.id)[0]


@pytest.fixture
def sample_card(account_service, sample_user):
    """Create a sample credit card."""
    account_service.add_credit_card(sample_user.id, "Amex", Decimal("5000.00"))
    return account_service.list_credit_cards(sample_user.id)[0]


@pytest.fixture
def make_record():
    """Build activity records with sensible defaults."""

    def _make(
        source_id=1,
        activity_type=ActivityType.INCOME,
        amount="100.00",
        activity_date=datetime(2025, 3, 10, 9, 0),
        created_at=None,
        source=None,
        subtype=None,
        description="",
        account_info="Cash",
        owner_id=1,
    ):
        if source is None:
            source = {
                ActivityType.INCOME: RecordSource.INCOME,
                ActivityType.EXPENSE: RecordSource.EXPENSE,
            }.get(activity_type, RecordSource.BANK)
        if activity_type == ActivityType.SETUP and subtype is None:
            subtype = SetupSubtype.BANK_ADDED
        return ActivityRecord(
            id=ActivityId(source=source, source_id=source_id),
            activity_type=activity_type,
            subtype=subtype,
            amount=Decimal(amount) if amount is not None else None,
            description=description,
            account_info=account_info,
            activity_date=activity_date,
            created_at=created_at or activity_date or datetime(2025, 1, 1),
            owner_id=owner_id,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
