"""CLI helpers for report period resolution."""

from datetime import date, datetime, timedelta
from typing import Optional

from reportit.cli.error_handling import fail
from reportit.domain.period import PeriodUnit, TimePeriod
from reportit.utils.date_parser import get_date_range, parse_date


def _day_start(day: date) -> datetime:
    return datetime.combine(day, datetime.min.time())


def _day_after(day: date) -> Optional[datetime]:
    # The last representable date has no following day; leave the end open.
    if day == date.max:
        return None
    return _day_start(day + timedelta(days=1))


def dates_to_period(start: Optional[date], end: Optional[date]) -> TimePeriod:
    """Period covering whole days from ``start`` through ``end`` (inclusive)."""
    return TimePeriod.between(
        _day_start(start) if start is not None else None,
        _day_after(end) if end is not None else None,
    )


def resolve_cli_period(
    ctx,
    *,
    month: Optional[int],
    year: Optional[int],
    start_date: str | None,
    end_date: str | None,
    last_days: Optional[int],
    all_time: bool,
    period_flags: dict[str, bool],
    default: Optional[TimePeriod] = None,
) -> Optional[TimePeriod]:
    """Resolve the report period from CLI options.

    Exactly one way of choosing a period may be used: a period flag
    (--this-month, ...), --month/--year, --start-date/--end-date,
    --last-days, or --all-time. With none given, ``default`` is returned.
    """
    flags_set = [period for period, is_set in period_flags.items() if is_set]
    if len(flags_set) > 1:
        fail(
            ctx,
            "Only one period option (--this-month, --this-year, --this-week, --last-month, --last-year, --last-week) can be specified at a time.",
        )

    choices = {
        "period flag": bool(flags_set),
        "--month/--year": month is not None or year is not None,
        "--start-date/--end-date": bool(start_date or end_date),
        "--last-days": last_days is not None,
        "--all-time": all_time,
    }
    used = [name for name, is_used in choices.items() if is_used]
    if len(used) > 1:
        fail(ctx, f"Period options cannot be combined: {', '.join(used)}.")

    if flags_set:
        start, end = get_date_range(flags_set[0])
        return dates_to_period(start, end)

    if month is not None or year is not None:
        if month is None:
            fail(ctx, "--year requires --month.")
        return TimePeriod.for_month(month, year)

    if start_date or end_date:
        start = end = None
        try:
            if start_date:
                start = parse_date(start_date)
            if end_date:
                end = parse_date(end_date)
        except ValueError as e:
            fail(ctx, f"Invalid date: {e}")
        return dates_to_period(start, end)

    if last_days is not None:
        return TimePeriod.last_n(last_days, PeriodUnit.DAYS)

    if all_time:
        return TimePeriod.all_time()

    return default
