"""Tests for CLI date filter helper."""

import click
import pytest

from fintrack.cli.date_filters import resolve_cli_date_range
from fintrack.utils.date_parser import get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_date_range_rejects_multiple_periods(capsys):
    period_flags = {"this-month": True, "last-month": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags=period_flags,
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Only one period option" in err


def test_resolve_cli_date_range_rejects_period_with_from_date(capsys):
    period_flags = {"this-month": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-01-01",
            end_date=None,
            period_flags=period_flags,
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "cannot be combined" in err


def test_resolve_cli_date_range_returns_period_as_iso_dates():
    period_flags = {"last-year": True, "this-month": False}

    expected_start, expected_end = get_date_range("last-year")
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags=period_flags,
    )

    assert start == expected_start.isoformat()
    assert end == expected_end.isoformat()


def test_resolve_cli_date_range_passes_explicit_dates_through():
    """Explicit dates are left for the activity filter parser to validate."""
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2024-01-02",
        end_date="not-a-date",
        period_flags={},
    )

    assert start == "2024-01-02"
    assert end == "not-a-date"


def test_resolve_cli_date_range_nothing_set():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"this-month": False},
    )

    assert start is None
    assert end is None
