"""Tests for date parser with relative dates."""

import pytest
from datetime import date, datetime, timedelta
from dateutil.relativedelta import relativedelta

from reportit.domain.period import utc_now
from reportit.utils.date_parser import get_date_range, parse_date, parse_datetime


def _today():
    return utc_now().date()


def test_parse_absolute_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_relative_days():
    assert parse_date("today") == _today()
    assert parse_date("yesterday") == _today() - timedelta(days=1)
    assert parse_date("Tomorrow") == _today() + timedelta(days=1)


def test_parse_last_month():
    """'last month' is the first day of the previous month."""
    expected = _today().replace(day=1) - relativedelta(months=1)
    assert parse_date("last month") == expected


def test_parse_this_year():
    assert parse_date("this year") == date(_today().year, 1, 1)


def test_parse_last_weekday_is_before_today():
    result = parse_date("last friday")
    assert result.weekday() == 4
    assert 1 <= (_today() - result).days <= 7


def test_parse_invalid_date():
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_parse_datetime_plain_date_is_midnight():
    assert parse_datetime("2024-03-02") == datetime(2024, 3, 2)


def test_parse_datetime_converts_to_utc():
    assert parse_datetime("2024-03-02T10:00:00+02:00") == datetime(2024, 3, 2, 8, 0)
    assert parse_datetime("2024-03-02 10:15") == datetime(2024, 3, 2, 10, 15)


def test_get_date_range_last_month():
    start, end = get_date_range("last-month")
    this_month = _today().replace(day=1)
    assert start == this_month - relativedelta(months=1)
    assert end == this_month - timedelta(days=1)


def test_get_date_range_this_week_starts_monday():
    start, end = get_date_range("this-week")
    assert start.weekday() == 0
    assert end == _today()


def test_get_date_range_unknown_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")
