"""
Year-month periods ("YYYY-MM") used by the seller statistics and sale history.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Optional

from market.core.errors import InvalidPeriodError

YEAR_MONTH_PATTERN = r"^[1-9]\d{3}-(0[1-9]|1[0-2])$"


@dataclass(frozen=True, order=True)
class YearMonth:
    year: int
    month: int

    @classmethod
    def parse(cls, value: str) -> "YearMonth":
        year, month = value.split("-")
        return cls(int(year), int(month))

    @classmethod
    def now(cls) -> "YearMonth":
        today = datetime.now(timezone.utc)
        return cls(today.year, today.month)

    def next(self) -> "YearMonth":
        if self.month == 12:
            return YearMonth(self.year + 1, 1)
        return YearMonth(self.year, self.month + 1)

    def first_moment(self) -> datetime:
        """2022-11 -> 2022-11-01 00:00:00 UTC"""
        return datetime(self.year, self.month, 1, tzinfo=timezone.utc)

    def last_moment(self) -> datetime:
        """2022-11 -> 2022-11-30 23:59:59.999999 UTC"""
        last_day = calendar.monthrange(self.year, self.month)[1]
        return datetime.combine(date(self.year, self.month, last_day), time.max, tzinfo=timezone.utc)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class YearMonthPeriod:
    start: YearMonth
    end: YearMonth

    @property
    def start_datetime(self) -> datetime:
        return self.start.first_moment()

    @property
    def end_datetime(self) -> datetime:
        return self.end.last_moment()


EARLIEST_YEAR_MONTH = YearMonth(1970, 1)


def is_right_period(start: YearMonth, end: YearMonth, current: Optional[YearMonth] = None) -> bool:
    """Start not before 1970-01 nor after end, and end not after the current month."""
    current = current or YearMonth.now()
    return EARLIEST_YEAR_MONTH <= start <= end <= current


def check_period(start: YearMonth, end: YearMonth, current: Optional[YearMonth] = None) -> YearMonthPeriod:
    if not is_right_period(start, end, current):
        raise InvalidPeriodError(f"Invalid period: {start} ~ {end}")
    return YearMonthPeriod(start, end)


def one_month_before_midnight(moment: datetime) -> datetime:
    """Same day one month earlier (clamped to month end), at 00:00."""
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day, hour=0, minute=0, second=0, microsecond=0)


def months_between(period: YearMonthPeriod) -> list[str]:
    """Every "YYYY-MM" label from start to end, inclusive."""
    labels = []
    current = period.start
    while current <= period.end:
        labels.append(str(current))
        current = current.next()
    return labels
