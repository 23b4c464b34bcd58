"""Merging, filtering and ordering of activity records."""

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from fintrack.domain.entities import ActivityFilter, ActivityRecord, ActivityType
from fintrack.domain.errors import InvalidFilter, ScopeViolation, scope_violation
from fintrack.utils.date_parser import parse_date, parse_timestamp

logger = logging.getLogger(__name__)


def parse_filter(
    activity_type: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    month: Optional[str] = None,
    year: Optional[str] = None,
) -> ActivityFilter:
    """Build an activity filter from raw request values.

    Empty strings and None mean "no filter" for that field.

    Raises:
        InvalidFilter: If any value cannot be parsed or is out of range
    """
    parsed_type = None
    if activity_type:
        try:
            parsed_type = ActivityType(activity_type.strip().lower())
        except ValueError:
            allowed = ", ".join(t.value for t in ActivityType)
            raise InvalidFilter(
                f"Unknown activity type '{activity_type}'. Expected one of: {allowed}"
            )

    parsed_from = _parse_filter_date("from", date_from)
    parsed_to = _parse_filter_date("to", date_to)
    if parsed_from and parsed_to and parsed_from > parsed_to:
        raise InvalidFilter(
            f"From date {parsed_from.isoformat()} is after to date {parsed_to.isoformat()}"
        )

    parsed_month = _parse_filter_int("month", month)
    if parsed_month is not None and not 1 <= parsed_month <= 12:
        raise InvalidFilter(f"Month must be between 1 and 12, got {parsed_month}")

    parsed_year = _parse_filter_int("year", year)
    if parsed_year is not None and not 1 <= parsed_year <= 9999:
        raise InvalidFilter(f"Invalid year {parsed_year}")

    return ActivityFilter(
        activity_type=parsed_type,
        date_from=parsed_from,
        date_to=parsed_to,
        month=parsed_month,
        year=parsed_year,
    )


def _parse_filter_date(label: str, value: Optional[str]) -> Optional[date]:
    if value is None or not str(value).strip():
        return None
    try:
        return parse_date(str(value))
    except ValueError as e:
        raise InvalidFilter(f"Invalid {label} date: {e}")


def _parse_filter_int(label: str, value) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidFilter(f"Invalid {label} '{value}'")


def matches(record: ActivityRecord, filters: ActivityFilter) -> bool:
    """Check whether a record passes every filter that is set."""
    if filters.activity_type is not None and record.activity_type != filters.activity_type:
        return False

    has_date_filter = any(
        value is not None
        for value in (filters.date_from, filters.date_to, filters.month, filters.year)
    )
    if not has_date_filter:
        return True
    if not record.is_dated:
        return False

    # Calendar-day comparison makes date_to inclusive of the whole day
    day = _comparable(record.activity_date).date()
    if filters.date_from is not None and day < filters.date_from:
        return False
    if filters.date_to is not None and day > filters.date_to:
        return False
    if filters.month is not None and day.month != filters.month:
        return False
    if filters.year is not None and day.year != filters.year:
        return False
    return True


def _comparable(value) -> Optional[datetime]:
    # Aware and naive datetimes cannot be compared; bring both to naive UTC
    if not isinstance(value, datetime):
        return None
    return parse_timestamp(value)


def _sort_key(record: ActivityRecord) -> tuple:
    activity_date = _comparable(record.activity_date)
    if activity_date is not None:
        dated = (1, activity_date)
    else:
        dated = (0, datetime.min)
    created_at = _comparable(record.created_at) or datetime.min
    return (dated, created_at, record.id.source.value, record.id.source_id)


def order(records: Iterable[ActivityRecord]) -> list[ActivityRecord]:
    """Order records newest first.

    Sorted by activity date, then creation time, then identity, all
    descending. Undated records go last. Exact duplicates keep input order.
    """
    return sorted(records, key=_sort_key, reverse=True)


def find_undated(records: Iterable[ActivityRecord]) -> list[ActivityRecord]:
    """Return records whose activity date is not a usable timestamp."""
    return [record for record in records if not record.is_dated]


def check_scope(records: Iterable[ActivityRecord], owner_id: int) -> None:
    """Raise ScopeViolation if any record belongs to another owner."""
    for record in records:
        if record.owner_id != owner_id:
            raise ScopeViolation(scope_violation(record.id, record.owner_id, owner_id))


def aggregate(
    records: Iterable[ActivityRecord],
    filters: Optional[ActivityFilter] = None,
    *,
    owner_id: Optional[int] = None,
) -> list[ActivityRecord]:
    """Filter and order activity records into a new view.

    Args:
        records: Normalized records, possibly from several sources
        filters: Optional filters, AND-combined
        owner_id: When given, every record must belong to this owner

    Returns:
        New list of matching records, newest first

    Raises:
        ScopeViolation: If owner_id is given and a record belongs to someone else
    """
    records = list(records)
    if owner_id is not None:
        check_scope(records, owner_id)

    undated = find_undated(records)
    if undated:
        logger.warning(
            "Activity records without a valid date: %s",
            ", ".join(str(record.id) for record in undated),
        )

    if filters is not None and not filters.is_empty:
        records = [record for record in records if matches(record, filters)]

    result = order(records)
    logger.debug("Aggregated %d activity records", len(result))
    return result
