"""Tests for CLI period helper."""

from datetime import date, datetime

import click
import pytest

from reportit.cli.date_filters import dates_to_period, resolve_cli_period
from reportit.domain.period import PeriodKind, PeriodUnit, TimePeriod


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def _resolve(**overrides):
    values = dict(
        month=None,
        year=None,
        start_date=None,
        end_date=None,
        last_days=None,
        all_time=False,
        period_flags={},
    )
    values.update(overrides)
    return resolve_cli_period(_ctx(), **values)


def test_dates_to_period_includes_end_day():
    period = dates_to_period(date(2024, 3, 1), date(2024, 3, 31))
    assert period.start == datetime(2024, 3, 1)
    assert period.end == datetime(2024, 4, 1)


def test_dates_to_period_last_representable_day_leaves_end_open():
    period = dates_to_period(date(2024, 3, 1), date.max)
    assert period.start == datetime(2024, 3, 1)
    assert period.end is None


def test_end_date_at_calendar_limit():
    period = _resolve(end_date="9999-12-31")
    assert period.kind == PeriodKind.RANGE
    assert period.end is None


def test_rejects_multiple_period_flags(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        _resolve(period_flags={"this-month": True, "last-month": True})

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_rejects_combined_methods(capsys):
    with pytest.raises(click.exceptions.Exit):
        _resolve(month=3, last_days=7)

    err = capsys.readouterr().err
    assert "cannot be combined" in err
    assert "--last-days" in err


def test_year_requires_month(capsys):
    with pytest.raises(click.exceptions.Exit):
        _resolve(year=2024)
    assert "--year requires --month" in capsys.readouterr().err


def test_month_and_year():
    assert _resolve(month=3, year=2024) == TimePeriod.for_month(3, 2024)


def test_start_and_end_dates():
    period = _resolve(start_date="2024-01-10", end_date="2024-01-20")
    assert period.kind == PeriodKind.RANGE
    assert period.start == datetime(2024, 1, 10)
    assert period.end == datetime(2024, 1, 21)


def test_open_ended_start_date():
    period = _resolve(start_date="2024-01-10")
    assert period.end is None


def test_invalid_date(capsys):
    with pytest.raises(click.exceptions.Exit):
        _resolve(start_date="garbage")
    assert "Invalid date" in capsys.readouterr().err


def test_last_days_and_all_time():
    assert _resolve(last_days=30) == TimePeriod.last_n(30, PeriodUnit.DAYS)
    assert _resolve(all_time=True) == TimePeriod.all_time()


def test_period_flag():
    period = _resolve(period_flags={"last-month": True, "this-month": False})
    assert period.kind == PeriodKind.RANGE
    assert period.start.day == 1


def test_default_when_nothing_given():
    default = TimePeriod.for_month(1, 2020)
    assert _resolve() is None
    assert resolve_cli_period(
        _ctx(),
        month=None,
        year=None,
        start_date=None,
        end_date=None,
        last_days=None,
        all_time=False,
        period_flags={},
        default=default,
    ) == default
