"""Turn a RuleClassification into concrete dates for one (year, month).

Strategies are looked up per family. Once-per-month families share a single
anchor resolver; recurring families walk the month directly.
"""
from __future__ import annotations

import datetime as _dt
from typing import Callable, Dict, List, Optional

from . import workdays as W
from .model import Anchor, RuleClassification, RuleFamily

Strategy = Callable[[RuleClassification, int, int], List[_dt.date]]


def _expand_daily(c: RuleClassification, year: int, month: int) -> List[_dt.date]:
    """Every day of the month, optionally skipping weekends."""
    out: List[_dt.date] = []
    d = W.month_start(year, month)
    end = W.month_end(year, month)
    while d <= end:
        if not (c.exclude_weekends and W.is_weekend(d)):
            out.append(d)
        d = d + W.ONE_DAY
    return out


def _expand_weekly(c: RuleClassification, year: int, month: int) -> List[_dt.date]:
    return W.weekdays_in_month(year, month, c.weekday or 0)


def _expand_biweekly(c: RuleClassification, year: int, month: int) -> List[_dt.date]:
    return W.weekdays_in_month(year, month, c.weekday or 0, step=14)


def _day_in_month(year: int, month: int, day: Optional[int]) -> Optional[_dt.date]:
    if day is None or not 1 <= day <= W.days_in_month(year, month):
        return None
    return _dt.date(year, month, day)


def resolve_anchor(c: RuleClassification, year: int, month: int) -> List[_dt.date]:
    """Dates an anchored classification lands on in one month."""
    anchor = c.anchor or Anchor.DAY
    if anchor is Anchor.EVERY_WORKING_DAY:
        return W.working_days(year, month)
    if anchor is Anchor.FIRST_WORKING_DAY:
        return [W.first_working_day(year, month)]
    if anchor is Anchor.LAST_WORKING_DAY:
        return [W.last_working_day(year, month)]
    if anchor is Anchor.LAST_DAY:
        return [W.month_end(year, month)]
    if anchor is Anchor.NTH_WORKING_DAY:
        hit = W.nth_working_day(year, month, c.ordinal or 0)
    elif anchor is Anchor.ORDINAL_WEEKDAY:
        weekday = c.weekday or 0
        if c.ordinal == -1:
            hit = W.last_weekday_of_month(year, month, weekday)
        else:
            hit = W.nth_weekday_of_month(year, month, weekday, c.ordinal or 0)
    else:
        hit = _day_in_month(year, month, c.day)
        if hit is not None:
            hit = W.apply_shift(hit, c.shift)
    return [hit] if hit is not None else []


def _expand_anchored(c: RuleClassification, year: int, month: int) -> List[_dt.date]:
    if not c.applies_to(month):
        return []
    if c.year is not None and c.year != year:
        return []
    return resolve_anchor(c, year, month)


def _expand_nothing(c: RuleClassification, year: int, month: int) -> List[_dt.date]:
    return []


STRATEGIES: Dict[RuleFamily, Strategy] = {
    RuleFamily.DAILY: _expand_daily,
    RuleFamily.WEEKLY: _expand_weekly,
    RuleFamily.WEEKDAY: _expand_weekly,
    RuleFamily.BIWEEKLY: _expand_biweekly,
    RuleFamily.MONTHLY: _expand_anchored,
    RuleFamily.QUARTERLY: _expand_anchored,
    RuleFamily.SEMIANNUAL: _expand_anchored,
    RuleFamily.ANNUAL: _expand_anchored,
    RuleFamily.END_OF_MONTH: _expand_anchored,
    RuleFamily.ORDINAL_WEEKDAY: _expand_anchored,
    RuleFamily.BUSINESS_DAY: _expand_anchored,
    RuleFamily.SINGLE_DATE: _expand_anchored,
    RuleFamily.UNRECOGNIZED: _expand_nothing,
}


def expand(classification: RuleClassification, year: int, month: int) -> List[_dt.date]:
    """Dates for ``classification`` in ``month`` (1-12) of ``year``, ascending.

    A weekend shift may move a date across the month boundary; the caller
    keys events on the returned date, not on ``month``.
    """
    return STRATEGIES[classification.family](classification, year, month)
