"""CLI helpers for account and category resolution."""

from __future__ import annotations

from typing import Optional

import click
from reportit.cli.error_handling import handle_domain_error
from reportit.domain.account import AccountService
from reportit.domain.category import CategoryService
from reportit.utils.account_resolver import resolve_account, resolve_category


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_category_or_exit(
    ctx: click.Context, category_service: CategoryService, category: str
) -> Optional[int]:
    """Resolve a category name ("Unspecified" gives None), or exit with a CLI error."""
    try:
        return resolve_category(category_service, category)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
