"""Report domain service.

``apply_filter`` runs the report pipeline for one filter:

    ledger -> filter stages -> history / upcoming / overdue -> sums -> ReportResult

The sums are independent of each other and run as tasks on a thread pool;
balance is computed once income, expenses and transfers have joined, and the
result is assembled exactly once after that.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from reportit.database.base import Database
from reportit.domain.aggregation import Aggregator
from reportit.domain.currency import CurrencyNormalizer, ExchangeRateLookup
from reportit.domain.entities import (
    Account,
    Category,
    ReportContext,
    ReportFilter,
    ReportResult,
    Settings,
    Transaction,
)
from reportit.domain.errors import InvalidFilterError
from reportit.domain.exchange_rate import ExchangeRateService
from reportit.domain.export import CSVExportService, Destination
from reportit.domain.filters import filter_transactions
from reportit.domain.partition import history, overdue, upcoming, with_date_dividers
from reportit.domain.period import utc_now
from reportit.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LedgerSnapshot:
    """Everything a report reads, loaded up front so tasks never hit the database."""

    transactions: tuple[Transaction, ...]
    accounts: tuple[Account, ...]
    categories: tuple[Category, ...]
    settings: Settings
    rates: ExchangeRateLookup


class ReportService:
    """Service for computing and exporting filtered reports."""

    def __init__(
        self,
        db: Database,
        clock: Optional[Callable[[], datetime]] = None,
        max_workers: int = 4,
    ):
        """Initialize report service.

        Args:
            db: Database instance
            clock: Returns "now" (naive UTC); defaults to utc_now
            max_workers: Thread pool size for aggregate tasks
        """
        self.db = db
        self.clock = clock or utc_now
        self.max_workers = max_workers
        self.rate_service = ExchangeRateService(db)

    def start(self) -> ReportContext:
        """Load what a report screen offers for filtering.

        ``category_choices`` leads with None, the Unspecified category.
        """
        settings = self.db.get_settings()
        categories = tuple(self.db.list_categories())
        return ReportContext(
            base_currency=settings.currency,
            start_day_of_month=settings.start_day_of_month,
            accounts=tuple(self.db.list_accounts()),
            categories=categories,
            category_choices=(None,) + tuple(cat.id for cat in categories),
        )

    def load_snapshot(self) -> LedgerSnapshot:
        """Read the ledger, accounts, categories, settings and rates."""
        return LedgerSnapshot(
            transactions=tuple(self.db.find_all_transactions()),
            accounts=tuple(self.db.list_accounts()),
            categories=tuple(self.db.list_categories()),
            settings=self.db.get_settings(),
            rates=self.rate_service.snapshot(),
        )

    def filter_transactions(
        self,
        report_filter: ReportFilter,
        snapshot: Optional[LedgerSnapshot] = None,
        now: Optional[datetime] = None,
    ) -> list[Transaction]:
        """Ledger transactions matching the filter, in ledger order."""
        if snapshot is None:
            snapshot = self.load_snapshot()
        return filter_transactions(
            snapshot.transactions,
            snapshot.settings.currency,
            snapshot.accounts,
            report_filter,
            CurrencyNormalizer(snapshot.rates),
            start_day_of_month=snapshot.settings.start_day_of_month,
            now=now if now is not None else self.clock(),
        )

    def apply_filter(self, report_filter: Optional[ReportFilter]) -> Optional[ReportResult]:
        """Compute the report for a filter.

        Args:
            report_filter: Filter to apply; None clears the report

        Returns:
            ReportResult, or None when the filter is cleared

        Raises:
            InvalidFilterError: If the filter has no types or no usable period
        """
        if report_filter is None:
            return None
        snapshot = self.load_snapshot()
        self._ensure_valid(report_filter, snapshot.settings)
        return self.compute(report_filter, snapshot)

    def _ensure_valid(self, report_filter: ReportFilter, settings: Settings) -> None:
        try:
            report_filter.ensure_valid(settings.start_day_of_month)
        except InvalidFilterError as e:
            logger.info("filter_invalid", reason=str(e))
            raise

    def compute(
        self,
        report_filter: ReportFilter,
        snapshot: LedgerSnapshot,
        now: Optional[datetime] = None,
    ) -> ReportResult:
        """Run the pipeline over an already loaded snapshot."""
        if now is None:
            now = self.clock()
        base_currency = snapshot.settings.currency
        aggregator = Aggregator(
            CurrencyNormalizer(snapshot.rates), base_currency, snapshot.accounts
        )

        transactions = self.filter_transactions(report_filter, snapshot, now)
        history_trns = history(transactions)
        upcoming_trns = upcoming(transactions, now)
        overdue_trns = overdue(transactions, now)
        account_ids = report_filter.account_ids

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            income = pool.submit(aggregator.calculate_income, history_trns)
            expenses = pool.submit(aggregator.calculate_expenses, history_trns)
            transfers_in = pool.submit(
                aggregator.calculate_transfers_in, history_trns, account_ids
            )
            transfers_out = pool.submit(
                aggregator.calculate_transfers_out, history_trns, account_ids
            )
            upcoming_income = pool.submit(aggregator.calculate_income, upcoming_trns)
            upcoming_expenses = pool.submit(aggregator.calculate_expenses, upcoming_trns)
            overdue_income = pool.submit(aggregator.calculate_income, overdue_trns)
            overdue_expenses = pool.submit(aggregator.calculate_expenses, overdue_trns)
            dividers = pool.submit(with_date_dividers, history_trns, aggregator)
            account_id_filters = pool.submit(tuple, account_ids)

        balance = (
            income.result()
            - expenses.result()
            + transfers_in.result()
            - transfers_out.result()
        )

        result = ReportResult(
            base_currency=base_currency,
            filter=report_filter,
            income=income.result(),
            expenses=expenses.result(),
            upcoming_income=upcoming_income.result(),
            upcoming_expenses=upcoming_expenses.result(),
            overdue_income=overdue_income.result(),
            overdue_expenses=overdue_expenses.result(),
            balance=balance,
            history=tuple(history_trns),
            upcoming_transactions=tuple(upcoming_trns),
            overdue_transactions=tuple(overdue_trns),
            account_id_filters=account_id_filters.result(),
            transactions=tuple(transactions),
            history_with_dividers=tuple(dividers.result()),
        )
        logger.info(
            "filter_applied",
            matched=len(transactions),
            history=len(history_trns),
            upcoming=len(upcoming_trns),
            overdue=len(overdue_trns),
        )
        return result

    def export(self, report_filter: ReportFilter, destination: Destination) -> int:
        """Export the filter's transactions as CSV and return the rows written.

        Raises:
            InvalidFilterError: If the filter cannot be applied
            ExportError: If writing fails
        """
        snapshot = self.load_snapshot()
        self._ensure_valid(report_filter, snapshot.settings)
        exporter = CSVExportService(
            snapshot.accounts, snapshot.categories, snapshot.settings.currency
        )
        return exporter.export(
            lambda: self.filter_transactions(report_filter, snapshot), destination
        )


class ReportSession:
    """Last-request-wins wrapper around ReportService.

    Each ``submit`` supersedes earlier ones. Requests run one at a time on a
    single worker thread; a request that is already stale when its turn comes
    is skipped, and a result that is stale on completion is dropped instead
    of replacing ``current``. The worker reads through its own database
    session and releases it after every request.
    """

    def __init__(self, service: ReportService):
        self.service = service
        self.current: Optional[ReportResult] = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="report")
        self._lock = threading.Lock()
        self._generation = 0

    def submit(self, report_filter: Optional[ReportFilter]) -> Future:
        """Queue a filter. The future resolves to its result (None if skipped or cleared)."""
        with self._lock:
            self._generation += 1
            generation = self._generation
        return self._executor.submit(self._run, generation, report_filter)

    def clear(self) -> None:
        """Drop the current report and supersede anything in flight."""
        with self._lock:
            self._generation += 1
            self.current = None

    def _is_stale(self, generation: int) -> bool:
        with self._lock:
            return generation != self._generation

    def _run(
        self, generation: int, report_filter: Optional[ReportFilter]
    ) -> Optional[ReportResult]:
        if self._is_stale(generation):
            logger.info("stale_report_ignored", generation=generation, started=False)
            return None

        try:
            result = self.service.apply_filter(report_filter)
        finally:
            self.service.db.release_thread_session()

        with self._lock:
            if generation != self._generation:
                logger.info("stale_report_ignored", generation=generation, started=True)
                return result
            self.current = result
        return result

    def close(self) -> None:
        """Wait for queued requests and stop the worker thread."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "ReportSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
