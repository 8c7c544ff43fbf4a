"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from reportit.domain.entities import (
    Account,
    Category,
    ExchangeRate,
    Settings,
    Transaction,
    TransactionType,
)
from reportit.domain.period import ClosedRange


class Database(ABC):
    """Abstract database interface for reportit."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    def release_thread_session(self) -> None:
        """Release per-thread resources held for the calling thread.

        Worker threads call this when they finish using the database.
        """
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, currency: Optional[str] = None) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories."""
        pass

    # Settings operations
    @abstractmethod
    def get_settings(self) -> Settings:
        """Get report settings, creating defaults on first use."""
        pass

    @abstractmethod
    def update_settings(
        self, currency: Optional[str] = None, start_day_of_month: Optional[int] = None
    ) -> None:
        """Update report settings; None leaves a field unchanged."""
        pass

    # Exchange rate operations
    @abstractmethod
    def set_exchange_rate(self, base_currency: str, currency: str, rate: Decimal) -> None:
        """Create or replace the rate for a currency pair."""
        pass

    @abstractmethod
    def get_exchange_rate(self, base_currency: str, currency: str) -> Optional[ExchangeRate]:
        """Get the stored rate for a currency pair."""
        pass

    @abstractmethod
    def list_exchange_rates(self) -> list[ExchangeRate]:
        """List all stored rates."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        type: TransactionType,
        amount: Decimal,
        to_account_id: Optional[int] = None,
        to_amount: Optional[Decimal] = None,
        category_id: Optional[int] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        date_time: Optional[datetime] = None,
        due_date: Optional[datetime] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def settle_transaction(self, transaction_id: int, date_time: datetime) -> None:
        """Mark a planned payment as happened at date_time and clear its due date."""
        pass

    @abstractmethod
    def find_all_transactions(self) -> list[Transaction]:
        """Return the whole ledger."""
        pass

    @abstractmethod
    def find_all_by_account_and_between(
        self, account_id: int, date_range: ClosedRange
    ) -> list[Transaction]:
        """Transactions of an account whose date_time lies in the range."""
        pass

    @abstractmethod
    def find_all_to_account_and_between(
        self, to_account_id: int, date_range: ClosedRange
    ) -> list[Transaction]:
        """Transfers into an account whose date_time lies in the range."""
        pass
