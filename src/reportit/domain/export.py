"""CSV export of report transactions."""

import csv
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence, TextIO, Union

from reportit.domain.currency import find_account
from reportit.domain.entities import (
    Account,
    Category,
    Transaction,
    UNSPECIFIED_CATEGORY_NAME,
)
from reportit.domain.errors import ExportError
from reportit.logging_config import get_logger

logger = get_logger(__name__)

CSV_HEADER = [
    "ID",
    "Date",
    "Due Date",
    "Type",
    "Title",
    "Description",
    "Category",
    "Account",
    "Amount",
    "Currency",
    "To Account",
    "To Amount",
    "To Currency",
]

Destination = Union[str, Path, TextIO]


def default_export_filename(now: datetime) -> str:
    """File name for a report exported at ``now``."""
    return f"Report ({now.strftime('%Y-%m-%d %H-%M')}).csv"


def _format_datetime(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value is not None else ""


def _format_amount(value: Optional[Decimal]) -> str:
    return f"{value:.2f}" if value is not None else ""


class CSVExportService:
    """Writes transactions as CSV rows."""

    def __init__(
        self,
        accounts: Sequence[Account],
        categories: Sequence[Category],
        base_currency: str,
    ):
        """Initialize export service.

        Args:
            accounts: Accounts, for names and currencies
            categories: Categories, for names
            base_currency: Currency of accounts without their own
        """
        self.accounts = tuple(accounts)
        self.category_names = {cat.id: cat.name for cat in categories}
        self.base_currency = base_currency

    def _account_name(self, account_id: Optional[int]) -> str:
        if account_id is None:
            return ""
        account = find_account(self.accounts, account_id)
        return account.name if account is not None else f"#{account_id}"

    def _account_currency(self, account_id: Optional[int]) -> str:
        if account_id is None:
            return ""
        account = find_account(self.accounts, account_id)
        if account is None:
            return ""
        return account.currency or self.base_currency

    def to_row(self, trn: Transaction) -> list[str]:
        """CSV row for one transaction, in CSV_HEADER order."""
        if trn.category_id is None:
            category = UNSPECIFIED_CATEGORY_NAME
        else:
            category = self.category_names.get(trn.category_id, f"#{trn.category_id}")

        to_amount = trn.to_amount
        if to_amount is None and trn.to_account_id is not None:
            to_amount = trn.amount

        return [
            str(trn.id),
            _format_datetime(trn.date_time),
            _format_datetime(trn.due_date),
            trn.type.value,
            trn.title or "",
            trn.description or "",
            category,
            self._account_name(trn.account_id),
            _format_amount(trn.amount),
            self._account_currency(trn.account_id),
            self._account_name(trn.to_account_id),
            _format_amount(to_amount),
            self._account_currency(trn.to_account_id),
        ]

    def write(self, transactions: Iterable[Transaction], handle: TextIO) -> int:
        """Write header and rows to an open text handle. Returns the row count."""
        writer = csv.writer(handle)
        writer.writerow(CSV_HEADER)
        count = 0
        for trn in transactions:
            writer.writerow(self.to_row(trn))
            count += 1
        return count

    def export(
        self,
        export_scope: Callable[[], Iterable[Transaction]],
        destination: Destination,
    ) -> int:
        """Export the transactions produced by ``export_scope``.

        Args:
            export_scope: Callable returning the transactions to write
            destination: File path, or an open text handle

        Returns:
            Number of transaction rows written

        Raises:
            ExportError: If the destination cannot be written
        """
        transactions = list(export_scope())
        try:
            if isinstance(destination, (str, Path)):
                with open(destination, "w", newline="", encoding="utf-8") as handle:
                    count = self.write(transactions, handle)
            else:
                count = self.write(transactions, destination)
        except OSError as e:
            logger.error("export_failed", destination=str(destination), error=str(e))
            raise ExportError(f"Could not write export to {destination}: {e}")

        logger.info("report_exported", destination=str(destination), rows=count)
        return count
