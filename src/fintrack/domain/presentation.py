"""Display projection of activity records."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from fintrack.domain.entities import ActivityRecord, ActivityType, DisplayRow, SetupSubtype

DEFAULT_CURRENCY = "₹"
PLACEHOLDER = "-"


@dataclass(frozen=True)
class Label:
    """Display labels for one (activity type, subtype) combination."""

    action: str
    type: str
    default_description: str
    details: Optional[str]
    sign: str


_SETUP = Label("Setup", "Setup", "Account Setup", "Account Configuration", "")

LABELS: dict[tuple[ActivityType, Optional[SetupSubtype]], Label] = {
    (ActivityType.INCOME, None): Label("Add Income", "Income", "Income Transaction", None, "+"),
    (ActivityType.EXPENSE, None): Label("Add Expense", "Expense", "Expense Transaction", None, "-"),
    (ActivityType.SETUP, SetupSubtype.BANK_ADDED): _SETUP,
    (ActivityType.SETUP, SetupSubtype.CREDIT_CARD_ADDED): _SETUP,
    (ActivityType.SETUP, SetupSubtype.CASH_BALANCE_SET): _SETUP,
}

OTHER = Label("Other", "System", "System Activity", "System Operation", "")


def lookup_label(activity_type, subtype) -> Label:
    """Return labels for a type/subtype pair, or the Other labels."""
    try:
        return LABELS.get((activity_type, subtype), OTHER)
    except TypeError:
        # unhashable values from a hand-built record
        return OTHER


def format_amount(amount: Optional[Decimal], sign: str = "", currency: str = DEFAULT_CURRENCY) -> str:
    """Format an amount as signed, currency-prefixed, two-decimal text."""
    if amount is None:
        return PLACEHOLDER
    return f"{sign}{currency}{amount:.2f}"


def format_date(record: ActivityRecord) -> str:
    if not record.is_dated:
        return PLACEHOLDER
    return record.activity_date.date().isoformat()


def project(record: ActivityRecord, currency: str = DEFAULT_CURRENCY) -> DisplayRow:
    """Map an activity record to its display row."""
    label = lookup_label(record.activity_type, record.subtype)

    # Zero-value events show the placeholder, like a missing amount
    if label is OTHER or not record.amount:
        amount = PLACEHOLDER
    else:
        amount = format_amount(record.amount, label.sign, currency)

    details = label.details
    if details is None:
        details = record.account_info or "Unknown Account"

    return DisplayRow(
        date=format_date(record),
        action=label.action,
        type=label.type,
        description=record.description or label.default_description,
        amount=amount,
        details=details,
    )
