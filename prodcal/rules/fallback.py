"""Single-date fallback: the last rule-table entry.

Each matcher returns a classification or None; the first non-None wins.
Everything produced here belongs to ``RuleFamily.SINGLE_DATE`` with a day
anchor, optionally gated by month and year.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

from ..model import UNRECOGNIZED, Anchor, RuleClassification, RuleFamily, ShiftPolicy
from . import extractors as X
from . import patterns as P

Matcher = Callable[[str], Optional[RuleClassification]]


def _single(pattern: str, day: int, **kw) -> RuleClassification:
    return RuleClassification(RuleFamily.SINGLE_DATE, pattern=pattern, anchor=Anchor.DAY, day=day, **kw)


def _month_gate(month: int) -> Tuple[int, ...]:
    return (month,) if 1 <= month <= 12 else ()


def match_iso_date(text: str) -> Optional[RuleClassification]:
    m = P.RE_ISO_DATE.search(text)
    if not m:
        return None
    year, month, day = (int(g) for g in m.groups())
    if not 1 <= month <= 12:
        return None
    # day validity is checked at expansion; Feb 30 simply yields nothing
    return _single("iso_date", day, month=month, months=(month,), year=year)


def match_slash_date(text: str) -> Optional[RuleClassification]:
    m = P.RE_SLASH_DATE.search(text)
    if not m:
        return None
    month, day, year = (int(g) for g in m.groups())
    if not 1 <= month <= 12:
        return None
    return _single("slash_date", day, month=month, months=(month,), year=year)


def match_named_month(text: str) -> Optional[RuleClassification]:
    month = X.find_month(text)
    if month is None:
        return None
    return _single(
        "named_month",
        X.find_month_day(text) or 1,
        month=month,
        months=(month,),
        shift=X.detect_shift(text),
    )


def match_holiday(text: str) -> Optional[RuleClassification]:
    for keyword, month, day in P.FIXED_HOLIDAYS:
        if keyword in text:
            return _single("holiday", day, month=month, months=_month_gate(month))
    return None


def match_day_keyword(text: str) -> Optional[RuleClassification]:
    for phrase, day in P.DAY_KEYWORDS:
        if phrase in text:
            return _single("day_keyword", day, shift=X.detect_shift(text))
    return None


def match_shift_combo(text: str) -> Optional[RuleClassification]:
    for token, phrase, day, policy in P.SHIFT_COMBOS:
        if token in text and phrase in text:
            return _single("shift_combo", day, shift=ShiftPolicy(policy))
    return None


def match_january_only(text: str) -> Optional[RuleClassification]:
    if not P.RE_JANUARY_ONLY.search(text):
        return None
    return _single("january_only", X.find_day(text) or 1, month=1, months=(1,))


def match_nth_of_every_month(text: str) -> Optional[RuleClassification]:
    m = P.RE_NTH_OF_EVERY_MONTH.search(text)
    if not m:
        return None
    day = int(m.group(1) or m.group(2))
    if not 1 <= day <= 31:
        return None
    return _single("nth_of_every_month", day, shift=X.detect_shift(text))


def match_runs_every(text: str) -> Optional[RuleClassification]:
    m = P.RE_RUNS_EVERY.search(text)
    if not m or not 1 <= int(m.group(1)) <= 31:
        return None
    shift = ShiftPolicy.PREVIOUS_FRIDAY if "previous friday" in text else ShiftPolicy.NO_SHIFT
    return _single("runs_every", int(m.group(1)), shift=shift)


def match_bare_day(text: str) -> Optional[RuleClassification]:
    day = X.scan_day_number(text)
    if day is None:
        return None
    return _single("bare_day", day, shift=X.detect_shift(text))


FALLBACK_TABLE: Tuple[Tuple[str, Matcher], ...] = (
    ("iso_date", match_iso_date),
    ("slash_date", match_slash_date),
    ("named_month", match_named_month),
    ("holiday", match_holiday),
    ("day_keyword", match_day_keyword),
    ("bare_day", match_bare_day),
    ("shift_combo", match_shift_combo),
    ("january_only", match_january_only),
    ("nth_of_every_month", match_nth_of_every_month),
    ("runs_every", match_runs_every),
)


def classify_single_date(text: str) -> RuleClassification:
    for _name, matcher in FALLBACK_TABLE:
        result = matcher(text)
        if result is not None:
            return result
    return UNRECOGNIZED
