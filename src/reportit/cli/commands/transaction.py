"""Transaction commands: listing and settling planned payments."""

import click
from reportit.cli.error_handling import fail, handle_domain_error
from reportit.cli.formatting import format_money, format_when
from reportit.domain.errors import DomainError
from reportit.domain.transaction import TransactionService
from reportit.utils.date_parser import parse_datetime


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.pass_context
def list_transactions(ctx):
    """List every transaction in the ledger."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    transactions = service.list_transactions()
    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc for acc in db.list_accounts()}
    base_currency = db.get_settings().currency

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<17} {'Due':<17} {'Type':<9} {'Amount':>16}  {'Account':<14} {'Title':<20}"
    )
    click.echo("-" * 100)
    for txn in transactions:
        account = accounts.get(txn.account_id)
        account_name = account.name if account else "Unknown"
        currency = (account.currency if account else None) or base_currency
        click.echo(
            f"{txn.id:<6} {format_when(txn.date_time):<17} {format_when(txn.due_date):<17} "
            f"{txn.type.value:<9} {format_money(txn.amount, currency):>16}  "
            f"{account_name:<14} {(txn.title or '')[:20]:<20}"
        )


@click.command("pay")
@click.argument("transaction_id", type=int)
@click.option("--date", "date_str", help="Settlement date (defaults to now)")
@click.pass_context
def pay_transaction(ctx, transaction_id: int, date_str: str | None):
    """Settle a planned payment (pay an expense or receive an income).

    Examples:
        reportit pay 12
        reportit pay 12 --date yesterday
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    when = None
    if date_str:
        try:
            when = parse_datetime(date_str)
        except ValueError as e:
            fail(ctx, f"Invalid date format: {e}")

    try:
        txn = service.pay_or_get(transaction_id, when)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Settled transaction {txn.id} on {format_when(txn.date_time)}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
    cli.add_command(pay_transaction)
