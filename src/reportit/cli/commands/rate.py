"""Exchange rate commands."""

import click
from reportit.cli.error_handling import handle_domain_error
from reportit.domain.exchange_rate import ExchangeRateService
from reportit.utils.amount_parser import parse_amount


@click.group()
def rate_group():
    """Manage exchange rates."""
    pass


@rate_group.command("set")
@click.argument("base_currency")
@click.argument("currency")
@click.argument("rate")
@click.pass_context
def set_rate(ctx, base_currency: str, currency: str, rate: str):
    """Record that 1 BASE_CURRENCY buys RATE units of CURRENCY.

    Examples:
        reportit rate set USD EUR 0.92
    """
    db = ctx.obj["db"]
    service = ExchangeRateService(db)

    try:
        service.set_rate(base_currency, currency, parse_amount(rate))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"1 {base_currency.upper()} = {rate} {currency.upper()}")


@rate_group.command("list")
@click.pass_context
def list_rates(ctx):
    """List stored exchange rates."""
    db = ctx.obj["db"]
    service = ExchangeRateService(db)

    rates = service.list_rates()
    if not rates:
        click.echo("No exchange rates found.")
        return
    for r in rates:
        click.echo(f"1 {r.base_currency} = {r.rate.normalize()} {r.currency}")


def register_commands(cli):
    """Register rate commands with main CLI."""
    cli.add_command(rate_group, name="rate")
