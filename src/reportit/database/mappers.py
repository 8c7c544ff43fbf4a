"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from reportit.domain import entities as domain
from reportit.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    ExchangeRate as ORMExchangeRate,
    Settings as ORMSettings,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        currency=orm_account.currency,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        type=domain.TransactionType(orm_transaction.type),
        amount=orm_transaction.amount,
        to_account_id=orm_transaction.to_account_id,
        to_amount=orm_transaction.to_amount,
        category_id=orm_transaction.category_id,
        title=orm_transaction.title,
        description=orm_transaction.description,
        date_time=orm_transaction.date_time,
        due_date=orm_transaction.due_date,
    )


def settings_to_domain(orm_settings: ORMSettings) -> domain.Settings:
    """Convert SQLAlchemy Settings model to domain Settings entity."""
    return domain.Settings(
        currency=orm_settings.currency,
        start_day_of_month=orm_settings.start_day_of_month,
    )


def exchange_rate_to_domain(orm_rate: ORMExchangeRate) -> domain.ExchangeRate:
    """Convert SQLAlchemy ExchangeRate model to domain ExchangeRate entity."""
    return domain.ExchangeRate(
        base_currency=orm_rate.base_currency,
        currency=orm_rate.currency,
        rate=orm_rate.rate,
    )
