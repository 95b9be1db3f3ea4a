"""Calendar arithmetic: weekends, working days, and weekday positions.

Working days are Monday to Friday; no holiday calendar is consulted.
Months are 1-12. Invalid values raise ValueError from datetime.
"""
from __future__ import annotations

import calendar
import datetime as _dt
from typing import List, Optional

from .model import ShiftPolicy

ONE_DAY = _dt.timedelta(days=1)
SATURDAY = 5


def is_weekend(d: _dt.date) -> bool:
    return d.weekday() >= SATURDAY


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_start(year: int, month: int) -> _dt.date:
    return _dt.date(year, month, 1)


def month_end(year: int, month: int) -> _dt.date:
    return _dt.date(year, month, days_in_month(year, month))


def first_working_day(year: int, month: int) -> _dt.date:
    d = month_start(year, month)
    while is_weekend(d):
        d += ONE_DAY
    return d


def last_working_day(year: int, month: int) -> _dt.date:
    d = month_end(year, month)
    while is_weekend(d):
        d -= ONE_DAY
    return d


def previous_friday(d: _dt.date) -> _dt.date:
    """Friday before a weekend date; weekdays come back unchanged."""
    if d.weekday() == 6:
        return d - _dt.timedelta(days=2)
    if d.weekday() == SATURDAY:
        return d - ONE_DAY
    return d


def next_monday(d: _dt.date) -> _dt.date:
    """Monday after a weekend date; weekdays come back unchanged."""
    if d.weekday() == 6:
        return d + ONE_DAY
    if d.weekday() == SATURDAY:
        return d + _dt.timedelta(days=2)
    return d


def next_working_day(d: _dt.date) -> _dt.date:
    """First working day strictly after ``d``."""
    nxt = d + ONE_DAY
    while is_weekend(nxt):
        nxt += ONE_DAY
    return nxt


def apply_shift(d: _dt.date, policy: ShiftPolicy) -> _dt.date:
    """Move a weekend date according to ``policy``; working days are kept."""
    if not is_weekend(d) or policy is ShiftPolicy.NO_SHIFT:
        return d
    if policy is ShiftPolicy.PREVIOUS_FRIDAY:
        return previous_friday(d)
    if policy is ShiftPolicy.NEXT_MONDAY:
        return next_monday(d)
    # Without a holiday list this lands on the same Monday as NEXT_MONDAY
    return next_working_day(d)


def weekdays_in_month(year: int, month: int, weekday: int, step: int = 7) -> List[_dt.date]:
    """Dates from the first ``weekday`` of the month, stepping ``step`` days."""
    first = month_start(year, month)
    d = first + _dt.timedelta(days=(weekday - first.weekday()) % 7)
    end = month_end(year, month)
    out: List[_dt.date] = []
    while d <= end:
        out.append(d)
        d += _dt.timedelta(days=step)
    return out


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> Optional[_dt.date]:
    """0-indexed ``n``-th ``weekday`` of the month, or None if it does not exist."""
    hits = weekdays_in_month(year, month, weekday)
    if 0 <= n < len(hits):
        return hits[n]
    return None


def last_weekday_of_month(year: int, month: int, weekday: int) -> _dt.date:
    return weekdays_in_month(year, month, weekday)[-1]


def working_days(year: int, month: int) -> List[_dt.date]:
    start = month_start(year, month)
    return [
        start + _dt.timedelta(days=i)
        for i in range(days_in_month(year, month))
        if not is_weekend(start + _dt.timedelta(days=i))
    ]


def nth_working_day(year: int, month: int, n: int) -> Optional[_dt.date]:
    """0-indexed ``n``-th working day of the month, or None past the end."""
    days = working_days(year, month)
    if 0 <= n < len(days):
        return days[n]
    return None
