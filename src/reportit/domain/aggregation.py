"""Income, expense and balance aggregation in the base currency."""

from decimal import Decimal
from typing import Iterable, Sequence

from reportit.domain.currency import CurrencyNormalizer, ZERO
from reportit.domain.entities import Account, Transaction, TransactionType


class Aggregator:
    """Pure reductions over a transaction list.

    Conversion failures count as zero (see CurrencyNormalizer.safe_*).
    """

    def __init__(
        self,
        normalizer: CurrencyNormalizer,
        base_currency: str,
        accounts: Sequence[Account],
    ):
        self.normalizer = normalizer
        self.base_currency = base_currency
        self.accounts = tuple(accounts)

    def _sum_outgoing(self, transactions: Iterable[Transaction]) -> Decimal:
        return sum(
            (
                self.normalizer.safe_amount_base_currency(
                    trn, self.base_currency, self.accounts
                )
                for trn in transactions
            ),
            ZERO,
        )

    def calculate_income(self, transactions: Iterable[Transaction]) -> Decimal:
        """Sum of income transactions."""
        return self._sum_outgoing(
            trn for trn in transactions if trn.type == TransactionType.INCOME
        )

    def calculate_expenses(self, transactions: Iterable[Transaction]) -> Decimal:
        """Sum of expense transactions."""
        return self._sum_outgoing(
            trn for trn in transactions if trn.type == TransactionType.EXPENSE
        )

    def calculate_transfers_in(
        self, transactions: Iterable[Transaction], account_ids: Iterable[int]
    ) -> Decimal:
        """Received side of transfers into the included accounts."""
        ids = frozenset(account_ids)
        return sum(
            (
                self.normalizer.safe_to_amount_base_currency(
                    trn, self.base_currency, self.accounts
                )
                for trn in transactions
                if trn.type == TransactionType.TRANSFER
                and trn.to_account_id is not None
                and trn.to_account_id in ids
            ),
            ZERO,
        )

    def calculate_transfers_out(
        self, transactions: Iterable[Transaction], account_ids: Iterable[int]
    ) -> Decimal:
        """Sent side of transfers out of the included accounts."""
        ids = frozenset(account_ids)
        return self._sum_outgoing(
            trn
            for trn in transactions
            if trn.type == TransactionType.TRANSFER and trn.account_id in ids
        )

    def calculate_balance(
        self,
        transactions: Sequence[Transaction],
        account_ids: Iterable[int],
        income: Decimal,
        expenses: Decimal,
    ) -> Decimal:
        """``income - expenses + transfers in - transfers out``.

        Income and expenses are passed in so they can be computed separately
        (and concurrently) beforehand.
        """
        ids = frozenset(account_ids)
        transfers_in = self.calculate_transfers_in(transactions, ids)
        transfers_out = self.calculate_transfers_out(transactions, ids)
        return income - expenses + transfers_in - transfers_out
