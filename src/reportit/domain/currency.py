"""Base-currency normalization of transaction amounts."""

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from reportit.domain.entities import Account, Transaction
from reportit.domain.errors import (
    ConversionError,
    rate_unavailable,
    transaction_account_missing,
)
from reportit.logging_config import get_logger

logger = get_logger(__name__)

ZERO = Decimal("0")


class ExchangeRateLookup(Protocol):
    """Source of exchange rates."""

    def rate(self, from_currency: str, to_currency: str) -> Optional[Decimal]:
        """Return how many ``to_currency`` units one ``from_currency`` buys."""
        ...


class StaticRates:
    """Exchange-rate lookup over an in-memory table.

    Keys are ``(from_currency, to_currency)``; the inverse pair is derived
    when only one direction is present.
    """

    def __init__(self, rates: Optional[dict[tuple[str, str], Decimal]] = None):
        self.rates = dict(rates or {})

    def rate(self, from_currency: str, to_currency: str) -> Optional[Decimal]:
        direct = self.rates.get((from_currency, to_currency))
        if direct:
            return direct
        inverse = self.rates.get((to_currency, from_currency))
        if inverse:
            return Decimal("1") / inverse
        return None


def find_account(accounts: Sequence[Account], account_id: int) -> Optional[Account]:
    """Return the account with the given id, if present."""
    for account in accounts:
        if account.id == account_id:
            return account
    return None


class CurrencyNormalizer:
    """Converts transaction amounts into a base currency."""

    def __init__(self, rates: ExchangeRateLookup):
        """Initialize normalizer.

        Args:
            rates: Exchange-rate lookup
        """
        self.rates = rates

    def exchange(self, amount: Decimal, from_currency: str, to_currency: str) -> Decimal:
        """Convert an amount between currencies.

        Raises:
            ConversionError: If no rate is available for the pair
        """
        if from_currency == to_currency:
            return amount
        rate = self.rates.rate(from_currency, to_currency)
        if rate is None:
            raise ConversionError(rate_unavailable(from_currency, to_currency))
        return amount * rate

    def _account_currency(
        self,
        transaction: Transaction,
        account_id: int,
        base_currency: str,
        accounts: Sequence[Account],
    ) -> str:
        account = find_account(accounts, account_id)
        if account is None:
            raise ConversionError(transaction_account_missing(transaction.id, account_id))
        return account.currency or base_currency

    def amount_base_currency(
        self, transaction: Transaction, base_currency: str, accounts: Sequence[Account]
    ) -> Decimal:
        """Return the outgoing amount of a transaction in the base currency.

        Raises:
            ConversionError: If the account or the exchange rate is missing
        """
        currency = self._account_currency(
            transaction, transaction.account_id, base_currency, accounts
        )
        return self.exchange(transaction.amount, currency, base_currency)

    def to_amount_base_currency(
        self, transaction: Transaction, base_currency: str, accounts: Sequence[Account]
    ) -> Decimal:
        """Return the amount a transfer's destination receives, in the base currency.

        Raises:
            ConversionError: If the transaction has no destination account, or
                the account or the exchange rate is missing
        """
        if transaction.to_account_id is None:
            raise ConversionError(
                f"Transaction {transaction.id} has no destination account"
            )
        currency = self._account_currency(
            transaction, transaction.to_account_id, base_currency, accounts
        )
        amount = (
            transaction.to_amount
            if transaction.to_amount is not None
            else transaction.amount
        )
        return self.exchange(amount, currency, base_currency)

    def safe_amount_base_currency(
        self, transaction: Transaction, base_currency: str, accounts: Sequence[Account]
    ) -> Decimal:
        """Like amount_base_currency, but a failed conversion counts as zero."""
        try:
            return self.amount_base_currency(transaction, base_currency, accounts)
        except ConversionError as e:
            logger.warning(
                "conversion_failed",
                transaction_id=transaction.id,
                side="outgoing",
                base_currency=base_currency,
                error=str(e),
            )
            return ZERO

    def safe_to_amount_base_currency(
        self, transaction: Transaction, base_currency: str, accounts: Sequence[Account]
    ) -> Decimal:
        """Like to_amount_base_currency, but a failed conversion counts as zero."""
        try:
            return self.to_amount_base_currency(transaction, base_currency, accounts)
        except ConversionError as e:
            logger.warning(
                "conversion_failed",
                transaction_id=transaction.id,
                side="incoming",
                base_currency=base_currency,
                error=str(e),
            )
            return ZERO
