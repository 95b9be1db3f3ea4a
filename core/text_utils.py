"""Text cleanup applied to rule lines before parsing and matching."""
from __future__ import annotations

import re

__all__ = ["normalize_unicode", "collapse_ws"]

# Typographic characters pasted from documents, mapped to ASCII
_ASCII_FOLD = str.maketrans({
    "\u2011": "-",  # non-breaking hyphen
    "\u2013": "-",  # en dash
    "\u2014": "-",  # em dash
    "\u00a0": " ",  # no-break space
    "\u2019": "'",  # right single quote
})


def normalize_unicode(text: str) -> str:
    """Fold dashes, no-break spaces and curly apostrophes to ASCII."""
    return (text or "").translate(_ASCII_FOLD)


def collapse_ws(text: str) -> str:
    """Collapse runs of whitespace to single spaces and strip the ends."""
    return re.sub(r"\s+", " ", text or "").strip()
