"""Ordered rule table: free-text rule -> RuleClassification.

The table is evaluated top to bottom and the first entry whose predicate
matches wins, so earlier families shadow later ones ("quarterly on mondays"
stays quarterly). Do not reorder entries.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Pattern, Tuple, Union

from core.date_utils import DAY_MAP
from core.text_utils import collapse_ws, normalize_unicode

from ..model import UNRECOGNIZED, Anchor, RuleClassification, RuleFamily
from . import extractors as X
from . import patterns as P
from .fallback import classify_single_date

LOG = logging.getLogger(__name__)

QUARTER_MONTHS = (1, 4, 7, 10)
HALF_YEAR_MONTHS = (1, 7)

Handler = Callable[[str], RuleClassification]


@dataclass(frozen=True)
class RuleEntry:
    name: str
    predicate: Union[Pattern[str], Callable[[str], bool]]
    handler: Handler

    def matches(self, text: str) -> bool:
        if hasattr(self.predicate, "search"):
            return self.predicate.search(text) is not None  # type: ignore[union-attr]
        return bool(self.predicate(text))  # type: ignore[operator]


def normalize_rule(text: str) -> str:
    """Lower-case, unicode-normalize and collapse whitespace."""
    return collapse_ws(normalize_unicode(text)).lower()


def _daily(text: str) -> RuleClassification:
    return RuleClassification(
        RuleFamily.DAILY, pattern="daily", exclude_weekends=X.excludes_weekends(text)
    )


def _weekly(text: str) -> RuleClassification:
    wd = X.find_weekday(text)
    return RuleClassification(RuleFamily.WEEKLY, pattern="weekly", weekday=0 if wd is None else wd)


def _monthly(text: str) -> RuleClassification:
    return RuleClassification(RuleFamily.MONTHLY, pattern="monthly", **X.extract_anchor(text))


def _every_weekday(text: str) -> RuleClassification:
    m = P.RE_EVERY_WEEKDAY.search(text)
    return RuleClassification(RuleFamily.WEEKDAY, pattern="every_weekday", weekday=DAY_MAP[m.group(1)])


def _biweekly(text: str) -> RuleClassification:
    wd = X.find_weekday(text)
    return RuleClassification(RuleFamily.BIWEEKLY, pattern="biweekly", weekday=0 if wd is None else wd)


def _quarterly(text: str) -> RuleClassification:
    return RuleClassification(
        RuleFamily.QUARTERLY, pattern="quarterly", months=QUARTER_MONTHS, **X.extract_anchor(text)
    )


def _semiannual(text: str) -> RuleClassification:
    return RuleClassification(
        RuleFamily.SEMIANNUAL, pattern="semiannual", months=HALF_YEAR_MONTHS, **X.extract_anchor(text)
    )


def _annual(text: str) -> RuleClassification:
    month = X.find_month(text) or 1
    return RuleClassification(
        RuleFamily.ANNUAL,
        pattern="annual",
        month=month,
        months=(month,),
        **X.extract_anchor(text, day_finder=X.find_month_day),
    )


def _end_of_month(text: str) -> RuleClassification:
    return RuleClassification(RuleFamily.END_OF_MONTH, pattern="end_of_month", anchor=Anchor.LAST_DAY)


def _ordinal_weekday(text: str) -> RuleClassification:
    ordinal, weekday = X.ordinal_weekday(text)  # type: ignore[misc]
    return RuleClassification(
        RuleFamily.ORDINAL_WEEKDAY,
        pattern="ordinal_weekday",
        anchor=Anchor.ORDINAL_WEEKDAY,
        ordinal=ordinal,
        weekday=weekday,
    )


def _business_day(text: str) -> RuleClassification:
    found = X.working_day_anchor(text) or {"anchor": Anchor.EVERY_WORKING_DAY}
    return RuleClassification(RuleFamily.BUSINESS_DAY, pattern="business_day", **found)


RULE_TABLE: Tuple[RuleEntry, ...] = (
    RuleEntry("daily", P.RE_DAILY, _daily),
    RuleEntry("weekly", P.RE_WEEKLY, _weekly),
    RuleEntry("monthly", P.RE_MONTHLY, _monthly),
    RuleEntry("every_weekday", P.RE_EVERY_WEEKDAY, _every_weekday),
    RuleEntry("biweekly", P.RE_BIWEEKLY, _biweekly),
    RuleEntry("quarterly", P.RE_QUARTERLY, _quarterly),
    RuleEntry("semiannual", P.RE_SEMIANNUAL, _semiannual),
    RuleEntry("annual", P.RE_ANNUAL, _annual),
    RuleEntry("end_of_month", P.RE_END_OF_MONTH, _end_of_month),
    RuleEntry("ordinal_weekday", P.RE_ORDINAL_WEEKDAY, _ordinal_weekday),
    RuleEntry("business_day", P.RE_BUSINESS_DAY, _business_day),
    RuleEntry("single_date", lambda text: bool(text), classify_single_date),
)


def classify(rule_text: str) -> RuleClassification:
    """Classify a rule description; unknown text yields UNRECOGNIZED."""
    text = normalize_rule(rule_text)
    if not text:
        return UNRECOGNIZED
    for entry in RULE_TABLE:
        if entry.matches(text):
            result = entry.handler(text)
            LOG.debug("rule %r matched %s", text, result.pattern or entry.name)
            return result
    return UNRECOGNIZED
