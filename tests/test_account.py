"""Tests for account services and balances."""

from datetime import datetime
from decimal import Decimal

import pytest

from reportit.domain.entities import TransactionType
from reportit.domain.errors import ConflictError, NotFoundError, ValidationError
from reportit.domain.period import ClosedRange


def test_create_account(account_service):
    account_id = account_service.create_account("Checking")
    account = account_service.get_account(account_id)
    assert account.name == "Checking"
    assert account.currency is None


def test_create_account_normalizes_currency(account_service):
    account_id = account_service.create_account("Euro", currency="eur")
    assert account_service.get_account(account_id).currency == "EUR"


def test_create_account_rejects_bad_input(account_service):
    with pytest.raises(ValidationError):
        account_service.create_account("   ")
    with pytest.raises(ValidationError):
        account_service.create_account("Odd", currency="EURO")


def test_duplicate_account_name(account_service):
    account_service.create_account("Checking")
    with pytest.raises(ConflictError, match="already exists"):
        account_service.create_account("Checking")


def test_require_account_missing(account_service):
    assert account_service.get_account(99) is None
    with pytest.raises(NotFoundError):
        account_service.require_account(99)


def test_account_transactions_include_incoming_transfers(account_service, transaction_service):
    a = account_service.create_account("A")
    b = account_service.create_account("B")
    transaction_service.create_transaction(
        a, TransactionType.TRANSFER, Decimal("25"), to_account_id=b, date_time=datetime(2024, 3, 3)
    )
    transaction_service.create_transaction(
        b, TransactionType.EXPENSE, Decimal("5"), date_time=datetime(2024, 3, 4)
    )
    transaction_service.create_transaction(
        b, TransactionType.EXPENSE, Decimal("7"), date_time=datetime(2024, 4, 4)
    )

    march = ClosedRange(datetime(2024, 3, 1), datetime(2024, 4, 1))
    trns = account_service.account_transactions(b, march)
    assert sorted(t.amount for t in trns) == [Decimal("5"), Decimal("25")]


def test_account_balance(account_service, transaction_service, balance_service):
    a = account_service.create_account("A")
    b = account_service.create_account("B")
    transaction_service.create_transaction(
        a, TransactionType.INCOME, Decimal("100"), date_time=datetime(2024, 3, 1)
    )
    transaction_service.create_transaction(
        a, TransactionType.EXPENSE, Decimal("30"), date_time=datetime(2024, 3, 2)
    )
    transaction_service.create_transaction(
        a, TransactionType.TRANSFER, Decimal("20"), to_account_id=b, date_time=datetime(2024, 3, 3)
    )
    # Planned payments do not move money until they are settled.
    transaction_service.create_transaction(
        a, TransactionType.EXPENSE, Decimal("500"), due_date=datetime(2024, 4, 1)
    )

    assert balance_service.account_balance(account_service.get_account(a)) == Decimal("50")
    assert balance_service.account_balance(account_service.get_account(b)) == Decimal("20")


def test_transfer_credits_received_amount(
    account_service, transaction_service, balance_service, rate_service
):
    usd = account_service.create_account("Dollars")
    eur = account_service.create_account("Euros", currency="EUR")
    transaction_service.create_transaction(
        usd,
        TransactionType.TRANSFER,
        Decimal("100"),
        to_account_id=eur,
        to_amount=Decimal("50"),
        date_time=datetime(2024, 3, 3),
    )
    rate_service.set_rate("USD", "EUR", Decimal("0.5"))

    balances = {item.account.name: item for item in balance_service.list_with_balances()}
    assert balances["Euros"].balance == Decimal("50")
    assert balances["Euros"].balance_base_currency == Decimal("100")
    assert balances["Dollars"].balance == Decimal("-100")
    assert balances["Dollars"].balance_base_currency is None


def test_balance_without_rate_has_no_base_amount(account_service, balance_service):
    account_service.create_account("Yen", currency="JPY")
    (item,) = balance_service.list_with_balances()
    assert item.balance == Decimal("0")
    assert item.balance_base_currency is None
