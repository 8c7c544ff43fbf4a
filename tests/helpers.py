"""Entity builders shared by tests that run without a database."""

from datetime import datetime
from decimal import Decimal

from reportit.domain.entities import Account, Transaction

NOW = datetime(2024, 3, 15, 12, 0)

CREATED = datetime(2024, 1, 1)


def make_account(account_id, name=None, currency=None):
    """Build an Account entity without a database."""
    return Account(
        id=account_id,
        name=name or f"Account {account_id}",
        currency=currency,
        created_at=CREATED,
    )


def make_trn(trn_id, trn_type, amount, account_id=1, **kwargs):
    """Build a Transaction entity without a database."""
    return Transaction(
        id=trn_id,
        account_id=account_id,
        type=trn_type,
        amount=Decimal(str(amount)),
        **kwargs,
    )
