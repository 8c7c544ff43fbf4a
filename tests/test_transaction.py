"""Tests for transaction service."""

from datetime import datetime
from decimal import Decimal

import pytest

from reportit.domain.entities import TransactionType
from reportit.domain.errors import NotFoundError, ValidationError


@pytest.fixture
def two_accounts(account_service):
    return account_service.create_account("A"), account_service.create_account("B")


def test_create_and_get_transaction(transaction_service, two_accounts, category_service):
    a, _ = two_accounts
    food = category_service.create_category("Food")
    txn_id = transaction_service.create_transaction(
        account_id=a,
        type=TransactionType.EXPENSE,
        amount=Decimal("12.50"),
        category_id=food,
        title="Lunch",
        description="Noodle bar",
        date_time=datetime(2024, 3, 2, 13, 0),
    )

    txn = transaction_service.get_transaction(txn_id)
    assert txn.type == TransactionType.EXPENSE
    assert txn.amount == Decimal("12.50")
    assert txn.category_id == food
    assert txn.title == "Lunch"
    assert txn.date_time == datetime(2024, 3, 2, 13, 0)
    assert txn.due_date is None


def test_transfer_keeps_received_amount(transaction_service, two_accounts):
    a, b = two_accounts
    txn_id = transaction_service.create_transaction(
        a,
        TransactionType.TRANSFER,
        Decimal("100"),
        to_account_id=b,
        to_amount=Decimal("92.10"),
        date_time=datetime(2024, 3, 3),
    )
    txn = transaction_service.get_transaction(txn_id)
    assert txn.to_account_id == b
    assert txn.to_amount == Decimal("92.10")


def test_negative_amount_rejected(transaction_service, two_accounts):
    a, _ = two_accounts
    with pytest.raises(ValidationError, match="negative"):
        transaction_service.create_transaction(
            a, TransactionType.EXPENSE, Decimal("-1"), date_time=datetime(2024, 3, 1)
        )


def test_date_or_due_date_required(transaction_service, two_accounts):
    a, _ = two_accounts
    with pytest.raises(ValidationError):
        transaction_service.create_transaction(a, TransactionType.EXPENSE, Decimal("1"))


def test_transfer_validation(transaction_service, two_accounts):
    a, b = two_accounts
    when = datetime(2024, 3, 1)
    with pytest.raises(ValidationError, match="destination"):
        transaction_service.create_transaction(a, TransactionType.TRANSFER, Decimal("1"), date_time=when)
    with pytest.raises(ValidationError, match="same account"):
        transaction_service.create_transaction(
            a, TransactionType.TRANSFER, Decimal("1"), to_account_id=a, date_time=when
        )
    with pytest.raises(NotFoundError):
        transaction_service.create_transaction(
            a, TransactionType.TRANSFER, Decimal("1"), to_account_id=99, date_time=when
        )
    with pytest.raises(ValidationError, match="Only transfers"):
        transaction_service.create_transaction(
            a, TransactionType.INCOME, Decimal("1"), to_account_id=b, date_time=when
        )


def test_unknown_account_or_category(transaction_service, two_accounts):
    a, _ = two_accounts
    when = datetime(2024, 3, 1)
    with pytest.raises(NotFoundError):
        transaction_service.create_transaction(99, TransactionType.INCOME, Decimal("1"), date_time=when)
    with pytest.raises(NotFoundError):
        transaction_service.create_transaction(
            a, TransactionType.INCOME, Decimal("1"), category_id=42, date_time=when
        )


def test_pay_planned_payment(transaction_service, two_accounts):
    a, _ = two_accounts
    txn_id = transaction_service.create_transaction(
        a, TransactionType.EXPENSE, Decimal("900"), title="Rent", due_date=datetime(2024, 4, 1)
    )

    paid = transaction_service.pay_or_get(txn_id, datetime(2024, 3, 30, 9, 0))
    assert paid.date_time == datetime(2024, 3, 30, 9, 0)
    assert paid.due_date is None


def test_pay_requires_planned_payment(transaction_service, two_accounts):
    a, _ = two_accounts
    txn_id = transaction_service.create_transaction(
        a, TransactionType.EXPENSE, Decimal("5"), date_time=datetime(2024, 3, 1)
    )
    with pytest.raises(ValidationError, match="not a planned payment"):
        transaction_service.pay_or_get(txn_id)
    with pytest.raises(NotFoundError):
        transaction_service.pay_or_get(999)


def test_list_transactions_in_creation_order(transaction_service, two_accounts):
    a, _ = two_accounts
    for day in (5, 1, 3):
        transaction_service.create_transaction(
            a, TransactionType.INCOME, Decimal(day), date_time=datetime(2024, 3, day)
        )
    assert [t.amount for t in transaction_service.list_transactions()] == [5, 1, 3]
