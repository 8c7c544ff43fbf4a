"""Shared pytest fixtures for reportit tests."""

import tempfile
import os

import pytest

from reportit.database.factories import create_sqlite_database
from reportit.domain.account import AccountBalanceService, AccountService
from reportit.domain.category import CategoryService
from reportit.domain.currency import CurrencyNormalizer, StaticRates
from reportit.domain.exchange_rate import ExchangeRateService
from reportit.domain.report import ReportService
from reportit.domain.settings import SettingsService
from reportit.domain.transaction import TransactionService

from helpers import NOW, make_account


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def balance_service(temp_db):
    """Create an AccountBalanceService with a temporary database."""
    return AccountBalanceService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def rate_service(temp_db):
    """Create an ExchangeRateService with a temporary database."""
    return ExchangeRateService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService whose clock is pinned to NOW."""
    return ReportService(temp_db, clock=lambda: NOW)


@pytest.fixture
def accounts():
    """Two base-currency accounts, A (id 1) and B (id 2)."""
    return (make_account(1, "A"), make_account(2, "B"))


@pytest.fixture
def normalizer():
    """Normalizer with no rates; same-currency amounts convert as-is."""
    return CurrencyNormalizer(StaticRates())


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
