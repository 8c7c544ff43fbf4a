"""Splitting transactions into history, upcoming and overdue."""

from datetime import datetime
from itertools import groupby
from typing import Sequence

from reportit.domain.aggregation import Aggregator
from reportit.domain.entities import DateDivider, HistoryItem, Transaction


def history(transactions: Sequence[Transaction]) -> list[Transaction]:
    """Transactions that have happened, newest first."""
    return sorted(
        (trn for trn in transactions if trn.date_time is not None),
        key=lambda trn: trn.date_time,
        reverse=True,
    )


def upcoming(transactions: Sequence[Transaction], now: datetime) -> list[Transaction]:
    """Planned payments due strictly after ``now``, soonest first."""
    return sorted(
        (trn for trn in transactions if trn.due_date is not None and trn.due_date > now),
        key=lambda trn: trn.due_date,
    )


def overdue(transactions: Sequence[Transaction], now: datetime) -> list[Transaction]:
    """Planned payments due at or before ``now``, most recent first."""
    return sorted(
        (trn for trn in transactions if trn.due_date is not None and trn.due_date <= now),
        key=lambda trn: trn.due_date,
        reverse=True,
    )


def with_date_dividers(
    history_transactions: Sequence[Transaction], aggregator: Aggregator
) -> list[HistoryItem]:
    """Interleave a per-day DateDivider before each day's transactions.

    Expects history order (newest first); days keep that order.
    """
    items: list[HistoryItem] = []
    for day, group in groupby(
        history_transactions, key=lambda trn: trn.date_time.date()
    ):
        day_transactions = list(group)
        items.append(
            DateDivider(
                date=day,
                income=aggregator.calculate_income(day_transactions),
                expenses=aggregator.calculate_expenses(day_transactions),
            )
        )
        items.extend(day_transactions)
    return items
