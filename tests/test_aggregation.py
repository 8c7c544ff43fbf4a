"""Tests for income, expense and balance aggregation."""

from datetime import datetime
from decimal import Decimal

import pytest

from reportit.domain.aggregation import Aggregator
from reportit.domain.currency import CurrencyNormalizer, StaticRates
from reportit.domain.entities import TransactionType

from helpers import make_account, make_trn


@pytest.fixture
def ledger():
    return [
        make_trn(1, TransactionType.INCOME, 100, date_time=datetime(2024, 3, 1)),
        make_trn(2, TransactionType.EXPENSE, 40, date_time=datetime(2024, 3, 2)),
        make_trn(3, TransactionType.TRANSFER, 20, to_account_id=2, date_time=datetime(2024, 3, 3)),
    ]


@pytest.fixture
def aggregator(accounts, normalizer):
    return Aggregator(normalizer, "USD", accounts)


def test_income_and_expenses(aggregator, ledger):
    assert aggregator.calculate_income(ledger) == Decimal("100")
    assert aggregator.calculate_expenses(ledger) == Decimal("40")


def test_balance_with_both_transfer_sides_included(aggregator, ledger):
    income = aggregator.calculate_income(ledger)
    expenses = aggregator.calculate_expenses(ledger)
    assert aggregator.calculate_transfers_out(ledger, [1, 2]) == Decimal("20")
    assert aggregator.calculate_transfers_in(ledger, [1, 2]) == Decimal("20")
    assert aggregator.calculate_balance(ledger, [1, 2], income, expenses) == Decimal("60")


def test_balance_without_destination_account(aggregator, ledger):
    income = aggregator.calculate_income(ledger)
    expenses = aggregator.calculate_expenses(ledger)
    assert aggregator.calculate_transfers_in(ledger, [1]) == Decimal("0")
    assert aggregator.calculate_balance(ledger, [1], income, expenses) == Decimal("40")


def test_reconciliation_identity(aggregator, ledger):
    for account_ids in ([1], [2], [1, 2], []):
        income = aggregator.calculate_income(ledger)
        expenses = aggregator.calculate_expenses(ledger)
        transfers_in = aggregator.calculate_transfers_in(ledger, account_ids)
        transfers_out = aggregator.calculate_transfers_out(ledger, account_ids)
        assert aggregator.calculate_balance(ledger, account_ids, income, expenses) == (
            income - expenses + transfers_in - transfers_out
        )


def test_empty_list_sums_to_zero(aggregator):
    assert aggregator.calculate_income([]) == Decimal("0")
    assert aggregator.calculate_balance([], [1], Decimal("0"), Decimal("0")) == Decimal("0")


def test_amounts_are_normalized_to_base_currency():
    accounts = (make_account(1, "Euro", currency="EUR"), make_account(2, "Dollar"))
    aggregator = Aggregator(
        CurrencyNormalizer(StaticRates({("EUR", "USD"): Decimal("1.1")})), "USD", accounts
    )
    ledger = [
        make_trn(1, TransactionType.INCOME, 10, date_time=datetime(2024, 3, 1)),
        make_trn(2, TransactionType.INCOME, 5, account_id=2, date_time=datetime(2024, 3, 1)),
    ]
    assert aggregator.calculate_income(ledger) == Decimal("16.0")


def test_unconvertible_amounts_count_as_zero():
    accounts = (make_account(1, "Yen", currency="JPY"), make_account(2))
    aggregator = Aggregator(CurrencyNormalizer(StaticRates()), "USD", accounts)
    ledger = [
        make_trn(1, TransactionType.EXPENSE, 1000, date_time=datetime(2024, 3, 1)),
        make_trn(2, TransactionType.EXPENSE, 7, account_id=2, date_time=datetime(2024, 3, 1)),
    ]
    assert aggregator.calculate_expenses(ledger) == Decimal("7")
