"""Statistics derived from a view of activity records."""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from fintrack.domain.entities import ActivityRecord, ActivityType, Statistics, TypeTotal


def compute_statistics(records: Iterable[ActivityRecord]) -> Statistics:
    """Compute totals over exactly the records passed in.

    Setup records only count toward the number of transactions. A missing
    amount adds nothing to the sums but still counts as a transaction.
    """
    total_income = Decimal("0")
    total_expenses = Decimal("0")
    count = 0

    for record in records:
        count += 1
        if record.amount is None:
            continue
        if record.activity_type == ActivityType.INCOME:
            total_income += record.amount
        elif record.activity_type == ActivityType.EXPENSE:
            total_expenses += record.amount

    return Statistics(
        total_income=total_income,
        total_expenses=total_expenses,
        total_transactions=count,
    )


def summarize_by_type(records: Iterable[ActivityRecord]) -> list[TypeTotal]:
    """Group records into per-type total and count rows.

    Rows follow the ActivityType declaration order and only types present in
    the records are returned. As in compute_statistics, setup records only
    count; the setup total is always zero.
    """
    totals: dict[ActivityType, Decimal] = defaultdict(Decimal)
    counts: dict[ActivityType, int] = defaultdict(int)

    for record in records:
        counts[record.activity_type] += 1
        if record.amount is None or record.activity_type == ActivityType.SETUP:
            continue
        totals[record.activity_type] += record.amount

    return [
        TypeTotal(type=activity_type, total=totals[activity_type], count=counts[activity_type])
        for activity_type in ActivityType
        if counts[activity_type] > 0
    ]
