"""Normalization of raw storage rows into activity records.

Each storage source has its own row shape. The functions here map one row of
one source into an ActivityRecord; there is no cross-source logic. Rows that
cannot be normalized are excluded with a logged warning rather than raising.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Optional

from fintrack.domain.entities import (
    ActivityId,
    ActivityRecord,
    ActivityType,
    CreditedToType,
    PaymentMethod,
    RecordSource,
    SetupSubtype,
)
from fintrack.domain.errors import MalformedRecord
from fintrack.utils.amount_parser import to_decimal
from fintrack.utils.date_parser import parse_timestamp

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]

CASH_LABEL = "Cash"
UNKNOWN_BANK = "Unknown Bank"
UNKNOWN_CARD = "Unknown Card"


def _require_int(source: RecordSource, row: Row, key: str) -> int:
    value = row.get(key)
    if value is None or isinstance(value, bool):
        raise MalformedRecord(source.value, row.get("id"), f"missing {key}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MalformedRecord(source.value, row.get("id"), f"invalid {key} {value!r}")


def _timestamp(source: RecordSource, row: Row, key: str) -> Optional[datetime]:
    try:
        return parse_timestamp(row.get(key))
    except ValueError as e:
        raise MalformedRecord(source.value, row.get("id"), f"invalid {key}: {e}")


def _created_at(source: RecordSource, row: Row) -> datetime:
    created_at = _timestamp(source, row, "created_at")
    if created_at is None:
        raise MalformedRecord(source.value, row.get("id"), "missing created_at")
    return created_at


def _amount(
    source: RecordSource, row: Row, key: str, non_negative: bool
) -> Optional[Decimal]:
    value = row.get(key)
    if value is None or value == "":
        return None
    try:
        amount = to_decimal(value)
    except ValueError as e:
        raise MalformedRecord(source.value, row.get("id"), str(e))
    if non_negative and amount < 0:
        raise MalformedRecord(source.value, row.get("id"), f"negative {key} {amount}")
    return amount


def _text(row: Row, key: str, default: str = "") -> str:
    value = row.get(key)
    if value is None:
        return default
    return str(value).strip() or default


def _record(
    source: RecordSource,
    row: Row,
    activity_type: ActivityType,
    subtype: Optional[SetupSubtype],
    amount: Optional[Decimal],
    description: str,
    account_info: str,
    business_date_key: Optional[str] = None,
) -> ActivityRecord:
    source_id = _require_int(source, row, "id")
    owner_id = _require_int(source, row, "user_id")
    created_at = _created_at(source, row)

    activity_date = None
    if business_date_key is not None:
        activity_date = _timestamp(source, row, business_date_key)

    return ActivityRecord(
        id=ActivityId(source=source, source_id=source_id),
        activity_type=activity_type,
        subtype=subtype,
        amount=amount,
        description=description,
        account_info=account_info,
        activity_date=activity_date or created_at,
        created_at=created_at,
        owner_id=owner_id,
    )


def bank_to_record(row: Row) -> ActivityRecord:
    """Map a bank row to a bank-added setup record dated at creation."""
    name = _text(row, "name", UNKNOWN_BANK)
    return _record(
        RecordSource.BANK,
        row,
        ActivityType.SETUP,
        SetupSubtype.BANK_ADDED,
        _amount(RecordSource.BANK, row, "initial_balance", non_negative=False),
        f"Added bank: {name}",
        name,
    )


def credit_card_to_record(row: Row) -> ActivityRecord:
    """Map a credit card row to a card-added setup record dated at creation."""
    name = _text(row, "name", UNKNOWN_CARD)
    return _record(
        RecordSource.CREDIT_CARD,
        row,
        ActivityType.SETUP,
        SetupSubtype.CREDIT_CARD_ADDED,
        _amount(RecordSource.CREDIT_CARD, row, "credit_limit", non_negative=False),
        f"Added credit card: {name}",
        name,
    )


def cash_balance_to_record(row: Row) -> ActivityRecord:
    """Map a cash balance row to a cash-balance-set setup record."""
    return _record(
        RecordSource.CASH_BALANCE,
        row,
        ActivityType.SETUP,
        SetupSubtype.CASH_BALANCE_SET,
        _amount(RecordSource.CASH_BALANCE, row, "initial_balance", non_negative=False),
        "Set cash balance",
        CASH_LABEL,
        business_date_key="updated_at",
    )


def income_to_record(row: Row) -> ActivityRecord:
    """Map an income row to an income record dated at its entry date."""
    credited_to_type = _text(row, "credited_to_type")
    if credited_to_type == CreditedToType.BANK.value:
        account_info = _text(row, "bank_name", UNKNOWN_BANK)
    elif credited_to_type == CreditedToType.CASH.value:
        account_info = CASH_LABEL
    else:
        account_info = credited_to_type

    return _record(
        RecordSource.INCOME,
        row,
        ActivityType.INCOME,
        None,
        _amount(RecordSource.INCOME, row, "amount", non_negative=True),
        _text(row, "source"),
        account_info,
        business_date_key="date",
    )


def expense_to_record(row: Row) -> ActivityRecord:
    """Map an expense row to an expense record dated at its entry date."""
    payment_method = _text(row, "payment_method")
    if payment_method == PaymentMethod.BANK.value:
        account_info = _text(row, "bank_name", UNKNOWN_BANK)
    elif payment_method == PaymentMethod.CREDIT_CARD.value:
        account_info = _text(row, "card_name", UNKNOWN_CARD)
    elif payment_method == PaymentMethod.CASH.value:
        account_info = CASH_LABEL
    else:
        account_info = payment_method

    return _record(
        RecordSource.EXPENSE,
        row,
        ActivityType.EXPENSE,
        None,
        _amount(RecordSource.EXPENSE, row, "amount", non_negative=True),
        _text(row, "title"),
        account_info,
        business_date_key="date",
    )


SOURCE_MAPPERS: dict[RecordSource, Callable[[Row], ActivityRecord]] = {
    RecordSource.BANK: bank_to_record,
    RecordSource.CREDIT_CARD: credit_card_to_record,
    RecordSource.CASH_BALANCE: cash_balance_to_record,
    RecordSource.INCOME: income_to_record,
    RecordSource.EXPENSE: expense_to_record,
}


def normalize_rows(source: RecordSource, rows: Iterable[Row]) -> list[ActivityRecord]:
    """Normalize all rows of one source.

    Malformed rows are logged and skipped; the remaining rows keep their
    input order.

    Args:
        source: Storage source the rows came from
        rows: Raw rows as returned by the database layer

    Returns:
        List of activity records
    """
    mapper = SOURCE_MAPPERS[source]
    records: list[ActivityRecord] = []
    for row in rows:
        try:
            records.append(mapper(row))
        except MalformedRecord as e:
            logger.warning("Excluding row from activity feed: %s", e)
    return records
