"""Activity feed domain service.

Builds the unified activity history of one user: storage rows from every
source are normalized, merged, filtered and ordered, and statistics, pages
and exports are derived from that single ordered view.
"""

import itertools
import logging
from datetime import date
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.aggregator import aggregate
from fintrack.domain.entities import (
    ActivityExport,
    ActivityFilter,
    ActivityPage,
    ActivityRecord,
    RecordSource,
    Statistics,
    TypeTotal,
)
from fintrack.domain.errors import InvalidFilter
from fintrack.domain.pagination import DEFAULT_PAGE_SIZE, export_rows, paginate
from fintrack.domain.presentation import DEFAULT_CURRENCY, project
from fintrack.domain.record_adapter import normalize_rows
from fintrack.domain.statistics import compute_statistics, summarize_by_type
from fintrack.utils.date_parser import month_range

logger = logging.getLogger(__name__)


def transaction_date_bounds(filters: Optional[ActivityFilter]) -> tuple[Optional[date], Optional[date]]:
    """Narrowest inclusive date range implied by a filter.

    Used to push date bounds down to the income and expense listings. The
    aggregator still applies the full filter afterwards.
    """
    if filters is None:
        return (None, None)

    start, end = filters.date_from, filters.date_to
    if filters.year is not None:
        if filters.month is not None:
            period_start, period_end = month_range(filters.month, filters.year)
        else:
            period_start, period_end = date(filters.year, 1, 1), date(filters.year, 12, 31)
        start = max(start, period_start) if start else period_start
        end = min(end, period_end) if end else period_end
    return (start, end)


class ActivityService:
    """Service for the activity feed and its derived views."""

    def __init__(self, db: Database, currency: str = DEFAULT_CURRENCY):
        """Initialize activity service.

        Args:
            db: Database instance
            currency: Currency symbol used in display amounts
        """
        self.db = db
        self.currency = currency

    def load_records(
        self, owner_id: int, filters: Optional[ActivityFilter] = None
    ) -> list[ActivityRecord]:
        """Load and normalize the records of every source for one owner.

        Any storage failure propagates; a partial merge is never returned.
        """
        start, end = transaction_date_bounds(filters)

        records: list[ActivityRecord] = []
        records.extend(
            normalize_rows(RecordSource.INCOME, self.db.list_income(owner_id, start, end))
        )
        records.extend(
            normalize_rows(RecordSource.EXPENSE, self.db.list_expenses(owner_id, start, end))
        )
        records.extend(
            normalize_rows(RecordSource.BANK, self.db.list_bank_creation_events(owner_id))
        )
        records.extend(
            normalize_rows(
                RecordSource.CREDIT_CARD, self.db.list_credit_card_creation_events(owner_id)
            )
        )
        records.extend(
            normalize_rows(RecordSource.CASH_BALANCE, self.db.list_cash_balance_events(owner_id))
        )
        return records

    def build_view(
        self, owner_id: int, filters: Optional[ActivityFilter] = None
    ) -> list[ActivityRecord]:
        """Return the filtered, ordered records of one owner."""
        records = self.load_records(owner_id, filters)
        return aggregate(records, filters, owner_id=owner_id)

    def get_activity(
        self,
        owner_id: int,
        filters: Optional[ActivityFilter] = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ActivityPage:
        """Get one page of the activity feed.

        Statistics and total count cover the whole filtered view, not only
        the returned page.

        Raises:
            InvalidFilter: If page or page_size is below 1
            ScopeViolation: If storage returned another owner's rows
            UpstreamUnavailable: If storage fails
        """
        if page < 1 or page_size < 1:
            raise InvalidFilter(f"Invalid page {page} with page size {page_size}")

        view = self.build_view(owner_id, filters)
        result = paginate(view, page, page_size)
        return ActivityPage(
            activities=tuple(project(record, self.currency) for record in result.items),
            statistics=compute_statistics(view),
            page=result.page,
            page_size=result.page_size,
            total_count=result.total_count,
        )

    def export_activity(
        self, owner_id: int, filters: Optional[ActivityFilter] = None
    ) -> ActivityExport:
        """Export every record matching the filter, without pagination."""
        view = self.build_view(owner_id, filters)
        return ActivityExport(rows=tuple(export_rows(view)), statistics=compute_statistics(view))

    def get_monthly_summary(self, owner_id: int, month: int, year: int) -> list[TypeTotal]:
        """Per-type totals for one calendar month.

        Raises:
            InvalidFilter: If month is outside 1-12
        """
        if not 1 <= month <= 12:
            raise InvalidFilter(f"Month must be between 1 and 12, got {month}")
        view = self.build_view(owner_id, ActivityFilter(month=month, year=year))
        return summarize_by_type(view)


class ActivityFeed:
    """The activity view currently displayed for one user.

    Each load takes a new request token. A result is applied only when its
    token is still the latest one issued, so a slow earlier request can
    never overwrite the result of a newer one. Statistics come from the
    service and are never recomputed here.
    """

    def __init__(self, service: ActivityService, owner_id: int, page_size: int = DEFAULT_PAGE_SIZE):
        self.service = service
        self.owner_id = owner_id
        self.page_size = page_size
        self.filters: Optional[ActivityFilter] = None
        self.page = 1
        self.current: Optional[ActivityPage] = None
        self._tokens = itertools.count(1)
        self._latest = 0

    def begin_request(self) -> int:
        """Issue a new request token, superseding all earlier ones."""
        self._latest = next(self._tokens)
        return self._latest

    def apply(
        self,
        token: int,
        result: ActivityPage,
        filters: Optional[ActivityFilter] = None,
        page: int = 1,
    ) -> bool:
        """Apply a result if it belongs to the latest request.

        Returns:
            True when the displayed view was replaced
        """
        if token != self._latest:
            logger.debug("Discarding stale activity result %d (latest %d)", token, self._latest)
            return False
        self.current = result
        self.filters = filters
        self.page = page
        return True

    def load(self, filters: Optional[ActivityFilter] = None, page: int = 1) -> Optional[ActivityPage]:
        """Load a page for the given filters and display it."""
        token = self.begin_request()
        result = self.service.get_activity(
            self.owner_id, filters, page=page, page_size=self.page_size
        )
        self.apply(token, result, filters, page)
        return self.current

    def refresh(self) -> Optional[ActivityPage]:
        """Reload the current filters and page, e.g. after a new transaction."""
        return self.load(self.filters, self.page)

    def clear_filters(self) -> Optional[ActivityPage]:
        return self.load(None, 1)

    @property
    def statistics(self) -> Statistics:
        if self.current is None:
            return Statistics()
        return self.current.statistics

    @property
    def is_empty(self) -> bool:
        """True when the displayed view loaded successfully with no activity."""
        return self.current is not None and self.current.total_count == 0
