"""Transaction domain service."""

from typing import Optional
from datetime import datetime
from decimal import Decimal

from reportit.database.base import Database
from reportit.domain.entities import Transaction as TransactionEntity, TransactionType
from reportit.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    transaction_not_found,
)
from reportit.domain.period import utc_now


class TransactionService:
    """Service for recording transactions and settling planned payments."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

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
        """Create a transaction.

        Args:
            account_id: Account the money leaves (or, for income, enters)
            type: Income, expense or transfer
            amount: Non-negative amount in the account's currency
            to_account_id: Destination account, required for transfers only
            to_amount: Amount received by the destination, if it differs
            category_id: Optional category ID
            title: Optional title
            description: Optional description
            date_time: When the transaction happened
            due_date: When a planned payment is due

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the fields are inconsistent
            NotFoundError: If a referenced account or category doesn't exist
        """
        if amount < 0:
            raise ValidationError(f"Amount must not be negative, got {amount}")
        if to_amount is not None and to_amount < 0:
            raise ValidationError(f"Transfer amount must not be negative, got {to_amount}")
        if date_time is None and due_date is None:
            raise ValidationError("A transaction needs a date or a due date")

        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        if type == TransactionType.TRANSFER:
            if to_account_id is None:
                raise ValidationError("Transfers need a destination account")
            if to_account_id == account_id:
                raise ValidationError("Cannot transfer to the same account")
            if self.db.get_account(to_account_id) is None:
                raise NotFoundError(account_not_found(to_account_id))
        elif to_account_id is not None or to_amount is not None:
            raise ValidationError("Only transfers can have a destination account")

        if category_id is not None and self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        return self.db.create_transaction(
            account_id=account_id,
            type=type,
            amount=amount,
            to_account_id=to_account_id,
            to_amount=to_amount,
            category_id=category_id,
            title=title,
            description=description,
            date_time=date_time,
            due_date=due_date,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID, or None if not found."""
        return self.db.get_transaction(transaction_id)

    def list_transactions(self) -> list[TransactionEntity]:
        """Return the whole ledger."""
        return self.db.find_all_transactions()

    def pay_or_get(
        self, transaction_id: int, when: Optional[datetime] = None
    ) -> TransactionEntity:
        """Settle a planned payment: pay an expense or receive an income.

        Args:
            transaction_id: Planned payment to settle
            when: Settlement instant (defaults to now)

        Returns:
            The settled transaction

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If it is not a planned payment
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        if txn.due_date is None:
            raise ValidationError(f"Transaction {transaction_id} is not a planned payment")

        self.db.settle_transaction(transaction_id, when if when is not None else utc_now())
        return self.db.get_transaction(transaction_id)
