"""Tests for domain entities and filter validation."""

import dataclasses

import pytest

from reportit.domain.entities import ReportFilter, TransactionType
from reportit.domain.errors import DomainError, InvalidFilterError, ValidationError
from reportit.domain.period import TimePeriod

from helpers import make_account, make_trn

ALL_TYPES = frozenset(TransactionType)


def test_filter_without_types_is_invalid():
    report_filter = ReportFilter(period=TimePeriod.all_time())
    assert report_filter.validate() is False

    with pytest.raises(InvalidFilterError, match="transaction type"):
        report_filter.ensure_valid()


def test_filter_without_period_is_invalid():
    report_filter = ReportFilter(trn_types=ALL_TYPES)
    assert report_filter.validate() is False


def test_filter_with_unresolvable_period_is_invalid():
    report_filter = ReportFilter(trn_types=ALL_TYPES, period=TimePeriod.for_month(13))
    with pytest.raises(InvalidFilterError, match="period"):
        report_filter.ensure_valid()


def test_filter_with_out_of_range_year_is_invalid():
    for period in (TimePeriod.for_month(3, 0), TimePeriod.for_month(12, 9999)):
        report_filter = ReportFilter(trn_types=ALL_TYPES, period=period)
        assert report_filter.validate() is False
        with pytest.raises(InvalidFilterError, match="period"):
            report_filter.ensure_valid()


def test_filter_with_empty_accounts_and_categories_is_valid():
    report_filter = ReportFilter(trn_types=ALL_TYPES, period=TimePeriod.all_time())
    assert report_filter.validate() is True


def test_account_ids_keep_filter_order():
    report_filter = ReportFilter(accounts=(make_account(3), make_account(1)))
    assert report_filter.account_ids == (3, 1)


def test_invalid_filter_error_is_a_validation_error():
    assert issubclass(InvalidFilterError, ValidationError)
    assert issubclass(ValidationError, DomainError)
    assert issubclass(DomainError, ValueError)


def test_entities_are_immutable():
    trn = make_trn(1, TransactionType.INCOME, 10)
    with pytest.raises(dataclasses.FrozenInstanceError):
        trn.amount = 20
