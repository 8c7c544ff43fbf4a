"""Report filter predicates.

Each stage is an independent ``Transaction -> bool`` check and a transaction
is kept only if every stage passes, so the stage order never changes the
result.
"""

from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from reportit.domain.currency import CurrencyNormalizer
from reportit.domain.entities import (
    Account,
    ReportFilter,
    Transaction,
    TransactionType,
)
from reportit.domain.period import ClosedRange

Predicate = Callable[[Transaction], bool]


def contains_keyword(text: Optional[str], keywords: Iterable[str]) -> bool:
    """Return True if any keyword is a case-insensitive substring of text."""
    if not text:
        return False
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def matches_any_keyword(transaction: Transaction, keywords: Sequence[str]) -> bool:
    """Return True if the title or description contains any keyword."""
    return contains_keyword(transaction.title, keywords) or contains_keyword(
        transaction.description, keywords
    )


def type_predicate(trn_types: Iterable[TransactionType]) -> Predicate:
    types = frozenset(trn_types)
    return lambda trn: trn.type in types


def period_predicate(filter_range: Optional[ClosedRange]) -> Predicate:
    """Pass if either date_time or due_date is inside the range."""

    def check(trn: Transaction) -> bool:
        if filter_range is None:
            return False
        return (trn.date_time is not None and filter_range.includes(trn.date_time)) or (
            trn.due_date is not None and filter_range.includes(trn.due_date)
        )

    return check


def account_predicate(account_ids: Iterable[int]) -> Predicate:
    """Pass outgoing transactions of, and transfers into, the given accounts."""
    ids = frozenset(account_ids)

    def check(trn: Transaction) -> bool:
        return trn.account_id in ids or (
            trn.to_account_id is not None and trn.to_account_id in ids
        )

    return check


def category_predicate(category_ids: Iterable[Optional[int]]) -> Predicate:
    """Pass matching categories; None selects uncategorized. Transfers always pass."""
    ids = frozenset(category_ids)

    def check(trn: Transaction) -> bool:
        return trn.category_id in ids or trn.type == TransactionType.TRANSFER

    return check


def amount_predicate(
    min_amount,
    max_amount,
    normalizer: CurrencyNormalizer,
    base_currency: str,
    accounts: Sequence[Account],
) -> Predicate:
    """Pass if the base-currency amount lies in ``[min_amount, max_amount]``."""

    def check(trn: Transaction) -> bool:
        if min_amount is None and max_amount is None:
            return True
        amount = normalizer.safe_amount_base_currency(trn, base_currency, accounts)
        return (min_amount is None or amount >= min_amount) and (
            max_amount is None or amount <= max_amount
        )

    return check


def include_keywords_predicate(keywords: Sequence[str]) -> Predicate:
    keywords = tuple(keywords)
    return lambda trn: not keywords or matches_any_keyword(trn, keywords)


def exclude_keywords_predicate(keywords: Sequence[str]) -> Predicate:
    keywords = tuple(keywords)
    return lambda trn: not keywords or not matches_any_keyword(trn, keywords)


def build_predicates(
    report_filter: ReportFilter,
    base_currency: str,
    accounts: Sequence[Account],
    normalizer: CurrencyNormalizer,
    start_day_of_month: int = 1,
    now: Optional[datetime] = None,
) -> list[Predicate]:
    """Build the filter stages in their canonical order.

    Args:
        report_filter: Filter criteria
        base_currency: Currency amounts are compared in
        accounts: All known accounts (for currency lookup)
        normalizer: Currency normalizer
        start_day_of_month: Day on which months begin
        now: Reference instant for relative periods

    Returns:
        List of predicates: type, period, account, category, amount,
        include keywords, exclude keywords
    """
    return [
        type_predicate(report_filter.trn_types),
        period_predicate(report_filter.resolve_range(start_day_of_month, now)),
        account_predicate(report_filter.account_ids),
        category_predicate(report_filter.category_ids),
        amount_predicate(
            report_filter.min_amount,
            report_filter.max_amount,
            normalizer,
            base_currency,
            accounts,
        ),
        include_keywords_predicate(report_filter.include_keywords),
        exclude_keywords_predicate(report_filter.exclude_keywords),
    ]


def filter_transactions(
    ledger: Iterable[Transaction],
    base_currency: str,
    accounts: Sequence[Account],
    report_filter: ReportFilter,
    normalizer: CurrencyNormalizer,
    start_day_of_month: int = 1,
    now: Optional[datetime] = None,
    predicates: Optional[Sequence[Predicate]] = None,
) -> list[Transaction]:
    """Return the ledger transactions that pass every filter stage.

    ``predicates`` overrides the stages built from the filter, e.g. to run
    them in a different order.
    """
    if predicates is None:
        predicates = build_predicates(
            report_filter,
            base_currency,
            accounts,
            normalizer,
            start_day_of_month=start_day_of_month,
            now=now,
        )
    return [trn for trn in ledger if all(check(trn) for check in predicates)]
