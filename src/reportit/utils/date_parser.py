"""Date parsing utilities.

Relative words resolve against the current UTC date, matching the domain's
naive-UTC convention.
"""

from datetime import date, datetime, timedelta, UTC
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from reportit.domain.period import utc_now

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIOD_NAMES = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def _start_of(unit: str, today: date) -> date:
    if unit == "month":
        return today.replace(day=1)
    if unit == "year":
        return today.replace(month=1, day=1)
    if unit == "week":
        return today - timedelta(days=today.weekday())
    raise ValueError(f"Unknown unit: '{unit}'")


def _step(unit: str, count: int) -> relativedelta:
    if unit == "week":
        return relativedelta(weeks=count)
    return relativedelta(**{f"{unit}s": count})


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - "today", "yesterday", "tomorrow"
    - "last/this/next" + "week"/"month"/"year": first day of that period
      (weeks start on Monday)
    - "last <weekday>": most recent such day before today

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = utc_now().date()

    offsets = {"today": 0, "yesterday": -1, "tomorrow": 1}
    if date_str in offsets:
        return today + timedelta(days=offsets[date_str])

    parts = date_str.split()
    if len(parts) == 2 and parts[0] in ("last", "this", "next"):
        which, unit = parts
        if unit in ("week", "month", "year"):
            shift = {"last": -1, "this": 0, "next": 1}[which]
            return _start_of(unit, today) + _step(unit, shift)
        if which == "last" and unit in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(unit)) % 7 or 7
            return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str) -> datetime:
    """Parse a date or date-time string into a naive UTC datetime.

    Plain dates (including relative words) resolve to midnight. Time-zone
    aware inputs are converted to UTC.

    Raises:
        ValueError: If the string cannot be parsed
    """
    if ":" not in value:
        return datetime.combine(parse_date(value), datetime.min.time())
    try:
        parsed = date_parser.parse(value.strip())
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date-time '{value}': {e}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def get_date_range(period: str) -> tuple[date, date]:
    """Get first and last day (inclusive) for a named period.

    Args:
        period: One of this-month, this-year, this-week, last-month,
            last-year, last-week. "this-*" periods end today.

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = utc_now().date()

    which, _, unit = period.partition("-")
    if period not in PERIOD_NAMES:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: {', '.join(PERIOD_NAMES)}"
        )

    current_start = _start_of(unit, today)
    if which == "this":
        return (current_start, today)

    start = current_start - _step(unit, 1)
    return (start, current_start - timedelta(days=1))
