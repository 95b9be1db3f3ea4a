"""Split pasted rule text into RawLine records."""
from __future__ import annotations

from typing import List

from core.text_utils import normalize_unicode

from .model import RawLine

SEPARATOR = " - "


def parse_line(line: str) -> RawLine:
    """``"Name - rule"`` -> RawLine; later separators stay in the rule."""
    name, _, rest = line.partition(SEPARATOR)
    rule = rest.strip()
    return RawLine(name=name.strip(), rule_text=rule, notes=rule)


def parse_lines(text: str) -> List[RawLine]:
    out: List[RawLine] = []
    for raw in normalize_unicode(text or "").splitlines():
        if not raw.strip():
            continue
        out.append(parse_line(raw.strip()))
    return out
