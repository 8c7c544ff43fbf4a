"""Account domain services."""

from decimal import Decimal
from typing import Optional

from reportit.database.base import Database
from reportit.domain.currency import CurrencyNormalizer, ZERO
from reportit.domain.entities import (
    Account as AccountEntity,
    AccountBalance,
    Transaction,
    TransactionType,
)
from reportit.domain.errors import (
    ConflictError,
    ConversionError,
    NotFoundError,
    ValidationError,
    account_not_found,
)
from reportit.domain.exchange_rate import ExchangeRateService
from reportit.domain.period import ClosedRange, TimePeriod
from reportit.logging_config import get_logger
from reportit.utils.amount_parser import parse_currency_code

logger = get_logger(__name__)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, currency: Optional[str] = None) -> int:
        """Create a new account.

        Args:
            name: Account name
            currency: ISO currency code; None means the base currency

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is empty or the currency code malformed
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name must not be empty")
        if currency is not None:
            try:
                currency = parse_currency_code(currency)
            except ValueError as e:
                raise ValidationError(str(e))

        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")

        return self.db.create_account(name=name, currency=currency)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID, or None if not found."""
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID.

        Raises:
            NotFoundError: If account doesn't exist
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()

    def account_transactions(
        self, account_id: int, date_range: ClosedRange
    ) -> list[Transaction]:
        """Outgoing and incoming transactions of one account within a range, deduplicated by id."""
        outgoing = self.db.find_all_by_account_and_between(account_id, date_range)
        incoming = self.db.find_all_to_account_and_between(account_id, date_range)
        seen = {trn.id for trn in outgoing}
        return outgoing + [trn for trn in incoming if trn.id not in seen]


class AccountBalanceService:
    """Per-account balances over settled transactions."""

    def __init__(self, db: Database):
        """Initialize account balance service.

        Args:
            db: Database instance
        """
        self.db = db
        self.account_service = AccountService(db)
        self.rate_service = ExchangeRateService(db)

    def account_balance(
        self, account: AccountEntity, date_range: Optional[ClosedRange] = None
    ) -> Decimal:
        """Balance of an account in its own currency.

        Income adds, expenses and outgoing transfers subtract, incoming
        transfers add their received amount.
        """
        if date_range is None:
            date_range = TimePeriod.all_time().to_range()

        balance = ZERO
        for trn in self.account_service.account_transactions(account.id, date_range):
            if trn.account_id == account.id:
                if trn.type == TransactionType.INCOME:
                    balance += trn.amount
                else:
                    balance -= trn.amount
            if trn.type == TransactionType.TRANSFER and trn.to_account_id == account.id:
                balance += trn.to_amount if trn.to_amount is not None else trn.amount
        return balance

    def list_with_balances(
        self, date_range: Optional[ClosedRange] = None
    ) -> list[AccountBalance]:
        """All accounts with their balances.

        ``balance_base_currency`` is set only for accounts held in a currency
        other than the base currency, and stays None if no rate is known.
        """
        base_currency = self.db.get_settings().currency
        normalizer = CurrencyNormalizer(self.rate_service.snapshot())

        results = []
        for account in self.account_service.list_accounts():
            balance = self.account_balance(account, date_range)
            currency = account.currency or base_currency
            balance_base = None
            if currency != base_currency:
                try:
                    balance_base = normalizer.exchange(balance, currency, base_currency)
                except ConversionError as e:
                    logger.warning(
                        "conversion_failed",
                        account_id=account.id,
                        currency=currency,
                        base_currency=base_currency,
                        error=str(e),
                    )
            results.append(
                AccountBalance(
                    account=account,
                    balance=balance,
                    balance_base_currency=balance_base,
                )
            )
        return results
