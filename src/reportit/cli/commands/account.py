"""Account management commands."""

import click
from reportit.cli.error_handling import handle_domain_error
from reportit.cli.formatting import format_money
from reportit.domain.account import AccountBalanceService, AccountService
from reportit.domain.errors import DomainError


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--currency", help="ISO currency code (defaults to the base currency)")
@click.pass_context
def create_account(ctx, name: str, currency: str | None):
    """Create a new account.

    Examples:
        reportit account create "Checking"
        reportit account create "Euro Savings" --currency EUR
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        account_id = service.create_account(name=name, currency=currency)
    except DomainError as e:
        handle_domain_error(ctx, e)
    account = service.get_account(account_id)
    currency_str = account.currency or "base currency"
    click.echo(f"Created account '{account.name}' (ID: {account_id}, {currency_str})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their balances."""
    db = ctx.obj["db"]
    service = AccountBalanceService(db)
    base_currency = db.get_settings().currency

    balances = service.list_with_balances()
    if not balances:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for item in balances:
        acc = item.account
        currency = acc.currency or base_currency
        line = f"ID: {acc.id:3d} | {acc.name:20s} | {format_money(item.balance, currency):>18s}"
        if item.balance_base_currency is not None:
            line += f" (~ {format_money(item.balance_base_currency, base_currency)})"
        click.echo(line)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
