"""Settings commands."""

import click
from reportit.cli.error_handling import handle_domain_error
from reportit.domain.errors import DomainError
from reportit.domain.settings import SettingsService


@click.group()
def settings_group():
    """Show or change report settings."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show the base currency and start day of month."""
    settings = SettingsService(ctx.obj["db"]).get_settings()
    click.echo(f"Base currency: {settings.currency}")
    click.echo(f"Start day of month: {settings.start_day_of_month}")


@settings_group.command("set")
@click.option("--currency", help="Base currency (ISO code)")
@click.option("--start-day", type=int, help="Day of month on which months begin (1-31)")
@click.pass_context
def set_settings(ctx, currency: str | None, start_day: int | None):
    """Change report settings."""
    service = SettingsService(ctx.obj["db"])
    try:
        settings = service.update_settings(currency=currency, start_day_of_month=start_day)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Base currency: {settings.currency}")
    click.echo(f"Start day of month: {settings.start_day_of_month}")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
