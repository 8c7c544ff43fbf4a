"""Report command."""

from typing import Optional

import click
from reportit.cli.account_resolution import resolve_account_or_exit, resolve_category_or_exit
from reportit.cli.date_filters import resolve_cli_period
from reportit.cli.error_handling import fail, handle_domain_error
from reportit.cli.formatting import format_money, format_when
from reportit.domain.account import AccountService
from reportit.domain.category import CategoryService
from reportit.domain.entities import (
    DateDivider,
    ReportFilter,
    ReportResult,
    Transaction,
    TransactionType,
)
from reportit.domain.errors import DomainError
from reportit.domain.export import default_export_filename
from reportit.domain.period import TimePeriod
from reportit.domain.report import ReportService
from reportit.utils.amount_parser import parse_amount

TYPE_CHOICES = [t.value for t in TransactionType]


def _echo_transactions(
    transactions: tuple[Transaction, ...],
    category_service: CategoryService,
    accounts: dict,
    date_field: str,
) -> None:
    for txn in transactions:
        account = accounts.get(txn.account_id)
        account_name = account.name if account else "Unknown"
        when = format_when(getattr(txn, date_field))
        target = ""
        if txn.to_account_id is not None:
            to_account = accounts.get(txn.to_account_id)
            target = f" -> {to_account.name if to_account else 'Unknown'}"
        click.echo(
            f"  {when:<17} {txn.type.value:<9} {txn.amount:>12,.2f}  "
            f"{account_name}{target:<16} {category_service.category_name(txn.category_id):<14} "
            f"{txn.title or ''}"
        )


def _echo_report(result: ReportResult, db) -> None:
    currency = result.base_currency
    category_service = CategoryService(db)
    accounts = {acc.id: acc for acc in db.list_accounts()}

    click.echo(f"\nReport: {result.filter.period.label()}")
    click.echo("-" * 60)
    click.echo(f"{'Balance':<20} {format_money(result.balance, currency):>24}")
    click.echo(f"{'Income':<20} {format_money(result.income, currency):>24}")
    click.echo(f"{'Expenses':<20} {format_money(result.expenses, currency):>24}")
    click.echo(f"{'Transactions':<20} {len(result.transactions):>24}")

    if result.overdue_transactions:
        click.echo(
            f"\nOverdue ({len(result.overdue_transactions)}): "
            f"income {format_money(result.overdue_income, currency)}, "
            f"expenses {format_money(result.overdue_expenses, currency)}"
        )
        _echo_transactions(result.overdue_transactions, category_service, accounts, "due_date")

    if result.upcoming_transactions:
        click.echo(
            f"\nUpcoming ({len(result.upcoming_transactions)}): "
            f"income {format_money(result.upcoming_income, currency)}, "
            f"expenses {format_money(result.upcoming_expenses, currency)}"
        )
        _echo_transactions(result.upcoming_transactions, category_service, accounts, "due_date")

    if result.history_with_dividers:
        click.echo("\nHistory")
        for item in result.history_with_dividers:
            if isinstance(item, DateDivider):
                click.echo(
                    f"{item.date.isoformat()}  +{format_money(item.income, currency)}"
                    f"  -{format_money(item.expenses, currency)}"
                )
            else:
                _echo_transactions((item,), category_service, accounts, "date_time")

    if not result.transactions:
        click.echo("\nNo transactions found.")


@click.command("report")
@click.option(
    "--type",
    "trn_types",
    multiple=True,
    type=click.Choice(TYPE_CHOICES, case_sensitive=False),
    help="Transaction type to include (repeatable; default all)",
)
@click.option("--month", type=click.IntRange(1, 12), help="Month number (1-12)")
@click.option("--year", type=int, help="Year for --month (defaults to current year)")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date, inclusive (YYYY-MM-DD or relative like 'today')")
@click.option("--last-days", type=click.IntRange(min=1), help="The last N days")
@click.option("--all-time", is_flag=True, help="No time restriction")
@click.option("--this-month", is_flag=True, help="Filter to current month")
@click.option("--this-year", is_flag=True, help="Filter to current year")
@click.option("--this-week", is_flag=True, help="Filter to current week")
@click.option("--last-month", is_flag=True, help="Filter to previous month")
@click.option("--last-year", is_flag=True, help="Filter to previous year")
@click.option("--last-week", is_flag=True, help="Filter to previous week")
@click.option("--account", "accounts", multiple=True, help="Account name or ID (repeatable; default all)")
@click.option(
    "--category",
    "categories",
    multiple=True,
    help="Category name, or 'Unspecified' (repeatable; default all)",
)
@click.option("--min-amount", help="Minimum amount in base currency")
@click.option("--max-amount", help="Maximum amount in base currency")
@click.option("--include", "include_keywords", multiple=True, help="Keyword the title or description must contain")
@click.option("--exclude", "exclude_keywords", multiple=True, help="Keyword that excludes a transaction")
@click.option(
    "--export",
    "export_path",
    type=click.Path(dir_okay=False, writable=True),
    help="Write matching transactions to this CSV file",
)
@click.option("--export-default", is_flag=True, help="Export to 'Report (<timestamp>).csv'")
@click.pass_context
def report(
    ctx,
    trn_types: tuple[str, ...],
    month: Optional[int],
    year: Optional[int],
    start_date: str | None,
    end_date: str | None,
    last_days: Optional[int],
    all_time: bool,
    this_month: bool,
    this_year: bool,
    this_week: bool,
    last_month: bool,
    last_year: bool,
    last_week: bool,
    accounts: tuple[str, ...],
    categories: tuple[str, ...],
    min_amount: str | None,
    max_amount: str | None,
    include_keywords: tuple[str, ...],
    exclude_keywords: tuple[str, ...],
    export_path: str | None,
    export_default: bool,
):
    """Filter, total and optionally export transactions.

    Without a period option the report covers the current month.

    Examples:
        reportit report --this-month
        reportit report --month 3 --year 2024 --type expense --category Food
        reportit report --all-time --include grocery --exclude refund --export groceries.csv
    """
    db = ctx.obj["db"]
    service = ReportService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)
    context = service.start()
    today = service.clock()

    period = resolve_cli_period(
        ctx,
        month=month,
        year=year,
        start_date=start_date,
        end_date=end_date,
        last_days=last_days,
        all_time=all_time,
        period_flags={
            "this-month": this_month,
            "this-year": this_year,
            "this-week": this_week,
            "last-month": last_month,
            "last-year": last_year,
            "last-week": last_week,
        },
        default=TimePeriod.for_month(today.month, today.year),
    )

    if accounts:
        account_ids = [resolve_account_or_exit(ctx, account_service, acc) for acc in accounts]
        selected_accounts = tuple(account_service.get_account(i) for i in dict.fromkeys(account_ids))
    else:
        selected_accounts = context.accounts

    if categories:
        category_ids = tuple(
            dict.fromkeys(resolve_category_or_exit(ctx, category_service, c) for c in categories)
        )
    else:
        category_ids = context.category_choices

    try:
        min_value = parse_amount(min_amount) if min_amount is not None else None
        max_value = parse_amount(max_amount) if max_amount is not None else None
    except ValueError as e:
        fail(ctx, f"Invalid amount format: {e}")

    selected_types = trn_types or TYPE_CHOICES
    report_filter = ReportFilter(
        trn_types=frozenset(TransactionType(t.lower()) for t in selected_types),
        period=period,
        accounts=selected_accounts,
        category_ids=category_ids,
        min_amount=min_value,
        max_amount=max_value,
        include_keywords=tuple(include_keywords),
        exclude_keywords=tuple(exclude_keywords),
    )

    try:
        result = service.apply_filter(report_filter)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _echo_report(result, db)

    if export_default and export_path is None:
        export_path = default_export_filename(service.clock())
    if export_path is not None:
        try:
            exported = service.export(report_filter, export_path)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"\nExported {exported} transaction(s) to {export_path}")


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
