"""Pagination and flat export of ordered activity records."""

import csv
import io
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from fintrack.domain.entities import ActivityRecord, ExportRow, Page
from fintrack.domain.errors import InvalidFilter

DEFAULT_PAGE_SIZE = 20

# Column order of every export
EXPORT_COLUMNS = ("Date", "Type", "Description", "Amount", "Account")


def paginate(records: Sequence[ActivityRecord], page: int, page_size: int) -> Page:
    """Slice an ordered record set into one page.

    Pages are 1-indexed. A page past the end is empty but still reports the
    total count.

    Raises:
        InvalidFilter: If page or page_size is below 1
    """
    if page < 1:
        raise InvalidFilter(f"Page must be 1 or greater, got {page}")
    if page_size < 1:
        raise InvalidFilter(f"Page size must be 1 or greater, got {page_size}")

    offset = (page - 1) * page_size
    return Page(
        items=tuple(records[offset:offset + page_size]),
        total_count=len(records),
        page=page,
        page_size=page_size,
    )


def format_plain_amount(amount: Optional[Decimal]) -> str:
    """Two-decimal amount without currency, empty when absent."""
    if amount is None:
        return ""
    return f"{amount:.2f}"


def export_rows(records: Iterable[ActivityRecord]) -> list[ExportRow]:
    """Flatten every record into an export row, without pagination."""
    rows = []
    for record in records:
        rows.append(
            ExportRow(
                date=record.activity_date.date().isoformat() if record.is_dated else "",
                type=record.activity_type.value,
                description=record.description,
                amount=format_plain_amount(record.amount),
                account=record.account_info,
            )
        )
    return rows


def render_csv(rows: Iterable[ExportRow]) -> str:
    """Render export rows as CSV text with a header line."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for row in rows:
        writer.writerow(row.as_tuple())
    return output.getvalue()
