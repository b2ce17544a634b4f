from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Tuple, Union

# Index with date.isoweekday() % 7 (Sunday == 0).
DAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]

# Index with date.month - 1 (January == 0).
MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

MS_PER_DAY = 1000 * 60 * 60 * 24

WEEKEND_DAYS = (0, 6)  # Sunday, Saturday


@dataclass(frozen=True)
class Month:
    """A run of consecutive days sharing the same calendar month."""

    year: int
    month: int  # 0-based, January == 0
    days: Tuple[date, ...] = field(default_factory=tuple)


def earliest_of(d0: date, d1: date) -> date:
    return d0 if d0 < d1 else d1


def latest_of(d0: date, d1: date) -> date:
    return d0 if d0 > d1 else d1


def next_day(d: date) -> date:
    """One calendar day later (not 24 hours later)."""
    return d + timedelta(days=1)


def to_days(duration: Union[timedelta, float, int]) -> int:
    """
    Whole days in a duration, rounded down.
    Accepts a timedelta or a number of milliseconds.
    """
    if isinstance(duration, timedelta):
        return duration // timedelta(days=1)
    return int(duration // MS_PER_DAY)


def weekday_index(d: date) -> int:
    """Sunday-based weekday index (Sunday == 0, Saturday == 6)."""
    return d.isoweekday() % 7


def day_name(d: date) -> str:
    return DAY_NAMES[weekday_index(d)]


def is_weekend(d: date) -> bool:
    return weekday_index(d) in WEEKEND_DAYS


def month_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month]}, {year}"


def span_contains(start: date, end: date, d: date) -> bool:
    """Inclusive on both ends."""
    return start <= d <= end


def date_range(start: date, end: date) -> List[date]:
    """
    Consecutive dates from start to end, both included.
    Reversed bounds give an empty list.
    """
    out: List[date] = []
    if end < start:
        return out
    cur = start
    while cur <= end:
        out.append(cur)
        cur = next_day(cur)
    return out


def month_range(start: date, end: date) -> List[Month]:
    """Group date_range(start, end) into months, in the order they are first seen."""
    buckets: Dict[Tuple[int, int], List[date]] = {}
    for d in date_range(start, end):
        buckets.setdefault((d.year, d.month - 1), []).append(d)
    return [Month(year=y, month=m, days=tuple(days)) for (y, m), days in buckets.items()]
