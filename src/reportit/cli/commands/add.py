"""Add transaction command."""

import click
from reportit.cli.account_resolution import resolve_account_or_exit, resolve_category_or_exit
from reportit.cli.error_handling import fail, handle_domain_error
from reportit.cli.formatting import format_money, format_when
from reportit.domain.account import AccountService
from reportit.domain.category import CategoryService
from reportit.domain.entities import TransactionType
from reportit.domain.errors import DomainError
from reportit.domain.period import utc_now
from reportit.domain.transaction import TransactionService
from reportit.utils.amount_parser import parse_positive_amount
from reportit.utils.date_parser import parse_datetime

TYPE_CHOICES = [t.value for t in TransactionType]


@click.command("add")
@click.option(
    "--type",
    "trn_type",
    type=click.Choice(TYPE_CHOICES, case_sensitive=False),
    required=True,
    help="Transaction type",
)
@click.option("--account", required=True, help="Account name or ID")
@click.option("--amount", required=True, help="Amount, non-negative (e.g., 123.45)")
@click.option("--to-account", help="Destination account name or ID (transfers only)")
@click.option("--to-amount", help="Amount received by the destination, if different")
@click.option("--category", help="Category name")
@click.option("--title", help="Transaction title")
@click.option("--description", help="Transaction description")
@click.option(
    "--date",
    "date_str",
    help="When it happened (YYYY-MM-DD [HH:MM] or relative like 'today')",
)
@click.option("--due-date", help="When a planned payment is due")
@click.pass_context
def add_transaction(
    ctx,
    trn_type: str,
    account: str,
    amount: str,
    to_account: str | None,
    to_amount: str | None,
    category: str | None,
    title: str | None,
    description: str | None,
    date_str: str | None,
    due_date: str | None,
):
    """Add a transaction or a planned payment.

    Without --date or --due-date the transaction is dated now.

    Examples:
        reportit add --type income --account Checking --amount 2500 --title Salary
        reportit add --type expense --account Checking --amount 42.10 --title "Grocery run" --category Food
        reportit add --type transfer --account Checking --to-account Savings --amount 100
        reportit add --type expense --account Checking --amount 900 --title Rent --due-date 2024-02-01
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    to_account_id = None
    if to_account is not None:
        to_account_id = resolve_account_or_exit(ctx, account_service, to_account)

    category_id = None
    if category:
        category_id = resolve_category_or_exit(ctx, category_service, category)

    try:
        txn_amount = parse_positive_amount(amount)
        txn_to_amount = parse_positive_amount(to_amount) if to_amount is not None else None
    except ValueError as e:
        fail(ctx, f"Invalid amount format: {e}")

    try:
        txn_date = parse_datetime(date_str) if date_str else None
        txn_due = parse_datetime(due_date) if due_date else None
    except ValueError as e:
        fail(ctx, f"Invalid date format: {e}")

    if txn_date is None and txn_due is None:
        txn_date = utc_now()

    try:
        transaction_id = transaction_service.create_transaction(
            account_id=account_id,
            type=TransactionType(trn_type.lower()),
            amount=txn_amount,
            to_account_id=to_account_id,
            to_amount=txn_to_amount,
            category_id=category_id,
            title=title,
            description=description,
            date_time=txn_date,
            due_date=txn_due,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    account_obj = account_service.get_account(account_id)
    currency = account_obj.currency or db.get_settings().currency
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Type: {trn_type.lower()}")
    click.echo(f"  Account: {account_obj.name}")
    click.echo(f"  Amount: {format_money(txn_amount, currency)}")
    if txn_date is not None:
        click.echo(f"  Date: {format_when(txn_date)}")
    if txn_due is not None:
        click.echo(f"  Due: {format_when(txn_due)}")
    if title:
        click.echo(f"  Title: {title}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
