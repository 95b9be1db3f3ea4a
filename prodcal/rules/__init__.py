"""Rule classification: free text to a structured recurrence."""

from .classifier import RULE_TABLE, RuleEntry, classify, normalize_rule
from .fallback import FALLBACK_TABLE, classify_single_date

__all__ = [
    "FALLBACK_TABLE",
    "RULE_TABLE",
    "RuleEntry",
    "classify",
    "classify_single_date",
    "normalize_rule",
]
