"""Main CLI entry point."""

import click
from reportit.database.factories import create_sqlite_database
from reportit.logging_config import DEFAULT_LOG_LEVEL, configure_logging

# Import and register all commands at module level
from reportit.cli.commands import (
    account,
    add,
    category,
    rate,
    report,
    settings,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides REPORTIT_DB_PATH environment variable)",
    envvar="REPORTIT_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=DEFAULT_LOG_LEVEL,
    envvar="REPORTIT_LOG_LEVEL",
    show_default=True,
    help="Log level for diagnostics written to stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Reportit - ledger and transaction reports.

    Record income, expenses and transfers across accounts in several
    currencies, then filter, total and export them as reports.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
rate.register_commands(cli)
settings.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
