"""Utilities for resolving account and category names to IDs."""

from typing import Optional

from reportit.domain.account import AccountService
from reportit.domain.category import CategoryService
from reportit.domain.entities import UNSPECIFIED_CATEGORY_NAME
from reportit.domain.errors import NotFoundError, account_not_found


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account name or ID to account ID.

    Args:
        account_service: AccountService instance
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
    """
    if isinstance(account, str) and not account.strip().isdigit():
        for acc in account_service.list_accounts():
            if acc.name == account:
                return acc.id
        raise NotFoundError(f"Account '{account}' not found")

    account_id = int(account)
    if account_service.get_account(account_id) is None:
        raise NotFoundError(account_not_found(account_id))
    return account_id


def resolve_category(category_service: CategoryService, category: str) -> Optional[int]:
    """Resolve a category name to its ID.

    The name "Unspecified" (any case) resolves to None, the id filters use for
    transactions without a category.

    Raises:
        NotFoundError: If the category does not exist
    """
    if category.strip().lower() == UNSPECIFIED_CATEGORY_NAME.lower():
        return None
    return category_service.require_category_by_name(category).id
