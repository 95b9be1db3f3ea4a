"""Shared date name utilities.

Weekday and month name lookups used by the rule classifier, the exporters
and the CLI. Only full names are recognized so that ordinary words in rule
text ("sat", "mar") are not read as dates.
"""
from __future__ import annotations

import calendar as _calendar
import datetime as _dt

from .constants import FMT_DAY_START

__all__ = [
    "DAY_MAP",
    "DAY_NAMES",
    "MONTH_MAP",
    "MONTH_NAMES",
    "weekday_name",
    "month_name",
    "to_iso_str",
]

# Full weekday names, lowercase, indexed by weekday()
DAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

# Full month names, lowercase, indexed 1-12 (index 0 is empty)
MONTH_NAMES = [""] + [m.lower() for m in _calendar.month_name[1:]]

DAY_MAP = {name: i for i, name in enumerate(DAY_NAMES)}
MONTH_MAP = {name: i for i, name in enumerate(MONTH_NAMES) if name}


def weekday_name(d: _dt.date) -> str:
    """Capitalized weekday name for a date ('Thursday')."""
    return DAY_NAMES[d.weekday()].capitalize()


def month_name(month: int) -> str:
    """Capitalized month name for a 1-12 month number ('December')."""
    return MONTH_NAMES[month].capitalize()


def to_iso_str(v: _dt.date) -> str:
    """Format a date as YYYY-MM-DD."""
    return v.strftime(FMT_DAY_START)
