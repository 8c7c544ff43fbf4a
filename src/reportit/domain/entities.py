"""Domain model entities for reportit.

These are pure data classes representing business concepts, independent of
database schema. Report computation only ever builds new instances; nothing
here is mutated in place.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from reportit.domain.errors import InvalidFilterError
from reportit.domain.period import ClosedRange, TimePeriod

UNSPECIFIED_CATEGORY_NAME = "Unspecified"

DEFAULT_BASE_CURRENCY = "USD"


class TransactionType(Enum):
    """Kind of money movement."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


@dataclass(frozen=True)
class Account:
    """Account domain entity. ``currency`` None means the base currency."""

    id: int
    name: str
    currency: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``date_time`` is set once the transaction has happened; ``due_date`` marks
    a planned payment. Both may be set at once.
    """

    id: int
    account_id: int
    type: TransactionType
    amount: Decimal
    to_account_id: Optional[int] = None
    to_amount: Optional[Decimal] = None
    category_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date_time: Optional[datetime] = None
    due_date: Optional[datetime] = None


@dataclass(frozen=True)
class Settings:
    """Report settings."""

    currency: str = DEFAULT_BASE_CURRENCY
    start_day_of_month: int = 1


@dataclass(frozen=True)
class ExchangeRate:
    """``1 base_currency = rate * currency``."""

    base_currency: str
    currency: str
    rate: Decimal


@dataclass(frozen=True)
class ReportFilter:
    """User-specified report criteria.

    A None entry in ``category_ids`` selects transactions without a category.
    Empty ``accounts`` or ``category_ids`` are valid and match nothing.
    """

    trn_types: frozenset[TransactionType] = frozenset()
    period: Optional[TimePeriod] = None
    accounts: tuple[Account, ...] = ()
    category_ids: tuple[Optional[int], ...] = ()
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
    include_keywords: tuple[str, ...] = ()
    exclude_keywords: tuple[str, ...] = ()

    def resolve_range(
        self, start_day_of_month: int = 1, now: Optional[datetime] = None
    ) -> Optional[ClosedRange]:
        """Resolve the filter's period, or None if there is none."""
        if self.period is None:
            return None
        return self.period.to_range(start_day_of_month, now)

    def validate(self, start_day_of_month: int = 1) -> bool:
        """Return True if the filter can be applied."""
        try:
            self.ensure_valid(start_day_of_month)
        except InvalidFilterError:
            return False
        return True

    def ensure_valid(self, start_day_of_month: int = 1) -> None:
        """Raise InvalidFilterError if the filter cannot be applied."""
        if not self.trn_types:
            raise InvalidFilterError("Filter must include at least one transaction type")
        if self.resolve_range(start_day_of_month) is None:
            raise InvalidFilterError("Filter period is missing or cannot be resolved")

    @property
    def account_ids(self) -> tuple[int, ...]:
        """Ids of the filtered accounts, in filter order."""
        return tuple(acc.id for acc in self.accounts)


@dataclass(frozen=True)
class DateDivider:
    """Per-day header in a history listing."""

    date: date
    income: Decimal
    expenses: Decimal


HistoryItem = Union[DateDivider, Transaction]


@dataclass(frozen=True)
class ReportResult:
    """Computed report for one filter application, amounts in base currency."""

    base_currency: str
    filter: ReportFilter
    income: Decimal
    expenses: Decimal
    upcoming_income: Decimal
    upcoming_expenses: Decimal
    overdue_income: Decimal
    overdue_expenses: Decimal
    balance: Decimal
    history: tuple[Transaction, ...]
    upcoming_transactions: tuple[Transaction, ...]
    overdue_transactions: tuple[Transaction, ...]
    account_id_filters: tuple[int, ...]
    transactions: tuple[Transaction, ...] = ()
    history_with_dividers: tuple[HistoryItem, ...] = ()


@dataclass(frozen=True)
class AccountBalance:
    """Account with its balance in its own and the base currency."""

    account: Account
    balance: Decimal
    balance_base_currency: Optional[Decimal] = None


@dataclass(frozen=True)
class ReportContext:
    """Data a report screen starts from."""

    base_currency: str
    start_day_of_month: int
    accounts: tuple[Account, ...]
    categories: tuple[Category, ...]
    category_choices: tuple[Optional[int], ...] = ()
