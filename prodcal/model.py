"""Data model for rule lines, classifications, and generated events."""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class RawLine:
    """One "Name - rule description" input line."""

    name: str
    rule_text: str = ""
    notes: str = ""


class RuleFamily(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    WEEKDAY = "weekday"            # every occurrence of one named weekday
    BIWEEKLY = "biweekly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    ANNUAL = "annual"
    END_OF_MONTH = "end_of_month"
    ORDINAL_WEEKDAY = "ordinal_weekday"
    BUSINESS_DAY = "business_day"
    SINGLE_DATE = "single_date"
    UNRECOGNIZED = "unrecognized"

    @property
    def multi(self) -> bool:
        """True for families that can yield more than one date per month."""
        return self in _MULTI_FAMILIES


_MULTI_FAMILIES = frozenset({
    RuleFamily.DAILY,
    RuleFamily.WEEKLY,
    RuleFamily.WEEKDAY,
    RuleFamily.BIWEEKLY,
})


class ShiftPolicy(str, Enum):
    """What to do when a computed date lands on a weekend."""

    NO_SHIFT = "no_shift"
    NEXT_MONDAY = "next_monday"
    NEXT_WORKING_DAY = "next_working_day"
    PREVIOUS_FRIDAY = "previous_friday"


class Anchor(str, Enum):
    """How a once-per-month date is located inside its month."""

    DAY = "day"
    LAST_DAY = "last_day"
    FIRST_WORKING_DAY = "first_working_day"
    LAST_WORKING_DAY = "last_working_day"
    NTH_WORKING_DAY = "nth_working_day"
    EVERY_WORKING_DAY = "every_working_day"
    ORDINAL_WEEKDAY = "ordinal_weekday"


@dataclass(frozen=True)
class RuleClassification:
    """Recognized rule family plus the parameters pulled from the text.

    Only the fields relevant to ``family`` are set; the rest keep defaults.
    ``ordinal`` is 0-based with -1 meaning "last". ``months`` limits the
    months (1-12) a rule applies to; empty means every month.
    """

    family: RuleFamily
    pattern: str = ""
    anchor: Optional[Anchor] = None
    weekday: Optional[int] = None
    day: Optional[int] = None
    ordinal: Optional[int] = None
    month: Optional[int] = None
    year: Optional[int] = None
    months: Tuple[int, ...] = ()
    shift: ShiftPolicy = ShiftPolicy.NO_SHIFT
    exclude_weekends: bool = False

    @property
    def recognized(self) -> bool:
        return self.family is not RuleFamily.UNRECOGNIZED

    def applies_to(self, month: int) -> bool:
        return not self.months or month in self.months

    @property
    def multi(self) -> bool:
        """True when one month can hold several dates for this rule."""
        return self.family.multi or self.anchor is Anchor.EVERY_WORKING_DAY

    def describe(self) -> dict:
        """Non-default fields as a plain dict, for CLI display."""
        out: dict = {"family": self.family.value}
        if self.pattern:
            out["pattern"] = self.pattern
        if self.anchor is not None:
            out["anchor"] = self.anchor.value
        for key in ("weekday", "day", "ordinal", "month", "year"):
            val = getattr(self, key)
            if val is not None:
                out[key] = val
        if self.months:
            out["months"] = list(self.months)
        if self.shift is not ShiftPolicy.NO_SHIFT:
            out["shift"] = self.shift.value
        if self.exclude_weekends:
            out["exclude_weekends"] = True
        return out


UNRECOGNIZED = RuleClassification(RuleFamily.UNRECOGNIZED)


@dataclass(frozen=True)
class CalendarEvent:
    """One dated occurrence of a rule line."""

    id: str
    rule_name: str
    date: _dt.date
    month: int
    year: int
    notes: str = ""

    def __post_init__(self) -> None:
        if self.month != self.date.month or self.year != self.date.year:
            raise ValueError(f"event {self.id}: month/year do not match {self.date.isoformat()}")

    def as_row(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "name": self.rule_name,
            "notes": self.notes,
        }
