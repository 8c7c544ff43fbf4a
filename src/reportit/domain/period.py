"""Time periods and the half-open ranges they resolve to.

All instants are naive datetimes in UTC. ``utc_now`` is the single source of
"now" for the domain layer.
"""

import calendar
from dataclasses import dataclass
from datetime import datetime, UTC
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta

BEGINNING_OF_TIME = datetime.min
END_OF_TIME = datetime.max


def utc_now() -> datetime:
    """Return the current instant as a naive UTC datetime."""
    return datetime.now(UTC).replace(tzinfo=None)


@dataclass(frozen=True)
class ClosedRange:
    """Time interval with ``[start, end)`` semantics."""

    start: datetime
    end: datetime

    def includes(self, instant: datetime) -> bool:
        """Return True if the instant falls inside the range."""
        return self.start <= instant < self.end


class PeriodKind(Enum):
    """How a TimePeriod describes its range."""

    MONTH = "month"
    RANGE = "range"
    LAST_N = "last_n"


class PeriodUnit(Enum):
    """Unit for "last N" periods."""

    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


def month_start(year: int, month: int, start_day_of_month: int) -> datetime:
    """Return the instant a month begins when months start on a given day.

    Days past the end of a short month clamp to its last day, so a start day
    of 31 begins February on the 28th (or 29th).
    """
    last_day = calendar.monthrange(year, month)[1]
    return datetime(year, month, min(start_day_of_month, last_day))


@dataclass(frozen=True)
class TimePeriod:
    """User-facing period descriptor, resolved to a ClosedRange on demand."""

    kind: Optional[PeriodKind] = None
    month: Optional[int] = None
    year: Optional[int] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    n: Optional[int] = None
    unit: Optional[PeriodUnit] = None

    @classmethod
    def for_month(cls, month: int, year: Optional[int] = None) -> "TimePeriod":
        """Period covering one month (of the current year if not given)."""
        return cls(kind=PeriodKind.MONTH, month=month, year=year)

    @classmethod
    def between(
        cls, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> "TimePeriod":
        """Explicit range; a missing side is open."""
        return cls(kind=PeriodKind.RANGE, start=start, end=end)

    @classmethod
    def last_n(cls, n: int, unit: PeriodUnit = PeriodUnit.DAYS) -> "TimePeriod":
        """The last ``n`` units, ending now."""
        return cls(kind=PeriodKind.LAST_N, n=n, unit=unit)

    @classmethod
    def all_time(cls) -> "TimePeriod":
        """Range open on both sides."""
        return cls.between(None, None)

    def to_range(
        self, start_day_of_month: int = 1, now: Optional[datetime] = None
    ) -> Optional[ClosedRange]:
        """Resolve the period to a concrete range.

        Args:
            start_day_of_month: Day on which months begin (1-31)
            now: Reference instant for relative periods (defaults to utc_now())

        Returns:
            ClosedRange, or None if the period cannot be resolved (including
            dates outside the representable range)
        """
        if now is None:
            now = utc_now()
        try:
            return self._resolve(start_day_of_month, now)
        except (ValueError, OverflowError):
            return None

    def _resolve(self, start_day_of_month: int, now: datetime) -> Optional[ClosedRange]:
        if self.kind == PeriodKind.MONTH:
            if self.month is None or not 1 <= self.month <= 12:
                return None
            year = self.year if self.year is not None else now.year
            first = datetime(year, self.month, 1)
            following = first + relativedelta(months=1)
            return ClosedRange(
                start=month_start(year, self.month, start_day_of_month),
                end=month_start(following.year, following.month, start_day_of_month),
            )

        if self.kind == PeriodKind.RANGE:
            start = self.start if self.start is not None else BEGINNING_OF_TIME
            end = self.end if self.end is not None else END_OF_TIME
            if start > end:
                return None
            return ClosedRange(start=start, end=end)

        if self.kind == PeriodKind.LAST_N:
            if self.n is None or self.n < 1 or self.unit is None:
                return None
            delta = relativedelta(**{self.unit.value: self.n})
            return ClosedRange(start=now - delta, end=now)

        return None

    def label(self) -> str:
        """Short human-readable description."""
        if self.kind == PeriodKind.MONTH:
            name = calendar.month_name[self.month] if self.month and 1 <= self.month <= 12 else "?"
            return f"{name} {self.year}" if self.year is not None else name
        if self.kind == PeriodKind.RANGE:
            if self.start is None and self.end is None:
                return "All time"
            start = self.start.date().isoformat() if self.start else "..."
            end = self.end.date().isoformat() if self.end else "..."
            return f"{start} to {end}"
        if self.kind == PeriodKind.LAST_N and self.unit is not None:
            return f"Last {self.n} {self.unit.value}"
        return "No period"
