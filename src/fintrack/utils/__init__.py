"""Utility functions for fintrack."""

from fintrack.utils.date_parser import parse_date, parse_timestamp, month_range
from fintrack.utils.amount_parser import parse_amount, to_decimal

__all__ = ["parse_date", "parse_timestamp", "month_range", "parse_amount", "to_decimal"]
