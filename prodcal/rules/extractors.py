"""Parameter extractors shared by the rule table and the fallback table.

Each extractor reads normalized rule text and returns plain values; none of
them decide which family a rule belongs to.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Dict, Optional, Tuple

from core.date_utils import DAY_MAP, MONTH_MAP

from ..model import Anchor, ShiftPolicy
from . import patterns as P

DayFinder = Callable[[str], Optional[int]]


def _valid_day(value: str) -> Optional[int]:
    n = int(value)
    return n if 1 <= n <= 31 else None


def find_weekday(text: str) -> Optional[int]:
    m = P.RE_WEEKDAY.search(text)
    return DAY_MAP[m.group(1)] if m else None


def find_month(text: str) -> Optional[int]:
    m = P.RE_MONTH.search(text)
    return MONTH_MAP[m.group(1)] if m else None


def find_day(text: str) -> Optional[int]:
    """Day-of-month named in the text ("15th", "first of", "day 3")."""
    m = P.RE_DAY_SUFFIXED.search(text)
    if m and _valid_day(m.group(1)):
        return _valid_day(m.group(1))
    for phrase, day in P.DAY_KEYWORDS:
        if phrase in text:
            return day
    m = P.RE_DAY_LEADIN.search(text)
    if m and _valid_day(m.group(1)):
        return _valid_day(m.group(1))
    return None


def find_month_day(text: str) -> Optional[int]:
    """Day attached to a month name ("december 31", "31st of december")."""
    for rx in (P.RE_MONTH_THEN_DAY, P.RE_DAY_THEN_MONTH):
        m = rx.search(text)
        if m and _valid_day(m.group(1)):
            return _valid_day(m.group(1))
    return find_day(text)


def scan_day_number(text: str) -> Optional[int]:
    """Lowest integer 1-31 standing as its own word.

    Suffixed forms ("9th") are not bare numbers; they are left to the
    shift-combination and "every N" entries further down the fallback.
    """
    for n in range(1, 32):
        if re.search(rf"\b{n}\b", text):
            return n
    return None


def detect_shift(text: str) -> ShiftPolicy:
    for rx, policy in P.SHIFT_PHRASES:
        if rx.search(text):
            return ShiftPolicy(policy)
    return ShiftPolicy.NO_SHIFT


def excludes_weekends(text: str) -> bool:
    return bool(P.RE_EXCLUDE_WEEKENDS.search(text))


def ordinal_weekday(text: str) -> Optional[Tuple[int, int]]:
    """(ordinal, weekday) for "first monday", "last friday"; ordinal -1 is last."""
    m = P.RE_ORDINAL_WEEKDAY.search(text)
    if not m:
        return None
    return P.ORDINAL_WORDS[m.group(1)], DAY_MAP[m.group(2)]


def working_day_anchor(text: str) -> Optional[Dict[str, Any]]:
    """Business-day position: first, last, nth or every working day."""
    if P.RE_FIRST_WORKING.search(text):
        return {"anchor": Anchor.FIRST_WORKING_DAY}
    if P.RE_LAST_WORKING.search(text):
        return {"anchor": Anchor.LAST_WORKING_DAY}
    m = P.RE_NTH_WORKING.search(text)
    if m and int(m.group(1)) >= 1:
        return {"anchor": Anchor.NTH_WORKING_DAY, "ordinal": int(m.group(1)) - 1}
    m = P.RE_NTH_WORKING_WORD.search(text)
    if m:
        return {"anchor": Anchor.NTH_WORKING_DAY, "ordinal": P.ORDINAL_WORDS[m.group(1)]}
    if P.RE_EVERY_WORKING.search(text):
        return {"anchor": Anchor.EVERY_WORKING_DAY}
    return None


def extract_anchor(text: str, day_finder: DayFinder = find_day) -> Dict[str, Any]:
    """Locate the once-per-month date a rule describes.

    Order: working-day positions, ordinal weekday, month end, then a day
    number (default 1) with its weekend shift.
    """
    found = working_day_anchor(text)
    if found and found["anchor"] is not Anchor.EVERY_WORKING_DAY:
        return found
    pair = ordinal_weekday(text)
    if pair:
        return {"anchor": Anchor.ORDINAL_WEEKDAY, "ordinal": pair[0], "weekday": pair[1]}
    if P.RE_LAST_DAY.search(text):
        return {"anchor": Anchor.LAST_DAY}
    return {
        "anchor": Anchor.DAY,
        "day": day_finder(text) or 1,
        "shift": detect_shift(text),
    }
