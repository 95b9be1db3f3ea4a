"""Regex patterns and phrase tables for rule classification.

All patterns run against lower-cased, unicode-normalized rule text.
"""
from __future__ import annotations

import re

from core.date_utils import DAY_NAMES, MONTH_NAMES

# Full names only; "sat" or "mar" inside free text is not a date
_WD_ALT = "|".join(DAY_NAMES)
_MONTH_ALT = "|".join(m for m in MONTH_NAMES if m)

RE_WEEKDAY = re.compile(rf"\b({_WD_ALT})s?\b")
RE_MONTH = re.compile(rf"\b({_MONTH_ALT})\b")

# Family keywords
RE_DAILY = re.compile(r"\bevery day\b|\bdaily\b")
RE_EXCLUDE_WEEKENDS = re.compile(r"\b(?:except|excluding|not on|no) weekends?\b|\bweekdays only\b")
RE_WEEKLY = re.compile(r"\bevery week\b|(?<![-\w])weekly\b")
RE_MONTHLY = re.compile(r"\bevery month\b|\bmonthly\b")
RE_EVERY_WEEKDAY = re.compile(rf"\b(?:every|all) ({_WD_ALT})s?\b")
RE_BIWEEKLY = re.compile(r"\bbi-?weekly\b|\bevery (?:two|2|other) weeks?\b|\bfortnightly\b")
RE_QUARTERLY = re.compile(r"\bquarterly\b|\bevery quarter\b")
RE_SEMIANNUAL = re.compile(r"\bsemi-?annual(?:ly)?\b|\btwice a year\b|\bevery (?:6|six) months\b")
RE_ANNUAL = re.compile(r"\bannually\b|\byearly\b|\bonce a year\b")
RE_END_OF_MONTH = re.compile(r"\blast day of\b|\bend of (?:the )?month\b")
RE_BUSINESS_DAY = re.compile(r"\bbusiness days?\b|\bweekdays?\b|\bworking days?\b")

# Positions inside a month
ORDINAL_WORDS = {
    "first": 0, "1st": 0,
    "second": 1, "2nd": 1,
    "third": 2, "3rd": 2,
    "fourth": 3, "4th": 3,
    "fifth": 4, "5th": 4,
    "last": -1,
}
_ORD_ALT = "|".join(sorted(ORDINAL_WORDS, key=len, reverse=True))
RE_ORDINAL_WEEKDAY = re.compile(rf"\b({_ORD_ALT}) ({_WD_ALT})\b")

RE_FIRST_WORKING = re.compile(r"\bfirst (?:business|working) day\b")
RE_LAST_WORKING = re.compile(r"\blast (?:business|working) day\b")
RE_NTH_WORKING = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th) (?:business|working) day\b")
RE_NTH_WORKING_WORD = re.compile(rf"\b({_ORD_ALT}) (?:business|working) day\b")
RE_EVERY_WORKING = re.compile(r"\b(?:every|all|each) (?:business|working) days?\b|\b(?:every|all) weekdays?\b")
RE_LAST_DAY = re.compile(r"\blast day\b|\bend of\b")

# Day-of-month numbers. Bare numbers are only trusted with a suffix or a
# "day"/"the" lead-in, so "every 6 months" does not read as the 6th.
RE_DAY_SUFFIXED = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\b")
RE_DAY_LEADIN = re.compile(r"\b(?:day|the|on) (\d{1,2})\b")
RE_MONTH_THEN_DAY = re.compile(rf"\b(?:{_MONTH_ALT}) (\d{{1,2}})(?:st|nd|rd|th)?\b")
RE_DAY_THEN_MONTH = re.compile(rf"\b(\d{{1,2}})(?:st|nd|rd|th)? (?:of )?(?:{_MONTH_ALT})\b")

DAY_KEYWORDS = (
    ("first of", 1), ("1st of", 1),
    ("second of", 2), ("2nd of", 2),
    ("third of", 3), ("3rd of", 3),
)

# Weekend shift phrases, checked in order
SHIFT_PHRASES = (
    (re.compile(r"\b(?:previous|prior|preceding) friday\b|\bfriday before\b"), "previous_friday"),
    (re.compile(r"\b(?:next|following) monday\b|\bmonday after\b"), "next_monday"),
    (re.compile(r"\bnext (?:working|business) day\b"), "next_working_day"),
)

# Fallback single-date forms
RE_ISO_DATE = re.compile(r"\b(\d{4})-(\d{1,2})-(\d{1,2})\b")
RE_SLASH_DATE = re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b")
RE_JANUARY_ONLY = re.compile(r"\bonly in january\b|\bjanuary only\b")
RE_NTH_OF_EVERY_MONTH = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)? of every month\b|(?<!runs )\bevery (\d{1,2})(?:st|nd|rd|th)?\b(?! (?:days?|weeks?|months?|years?)\b)")
RE_RUNS_EVERY = re.compile(r"\bruns every (\d{1,2})(?:st|nd|rd|th)?\b")

# (keyword, month, day)
FIXED_HOLIDAYS = (
    ("christmas", 12, 25),
    ("new year", 1, 1),
    ("valentine", 2, 14),
    ("halloween", 10, 31),
    ("independence day", 7, 4),
)

# Specific day+shift combinations recognized ahead of the generic forms
SHIFT_COMBOS = (
    ("9th", "previous friday", 9, "previous_friday"),
    ("12th", "next monday", 12, "next_monday"),
    ("13th", "next working day", 13, "next_working_day"),
)
