"""Drive parser, classifier and expander across a whole year."""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Set

from .expander import expand
from .model import CalendarEvent, RawLine
from .parser import parse_lines
from .rules import classify

LOG = logging.getLogger(__name__)

MONTHS = range(1, 13)


def _event_id(index: int, month: int, day: int, multi: bool) -> str:
    return f"{index}-{month}-{day}" if multi else f"{index}-{month}"


def generate_from_lines(lines: Iterable[RawLine], year: int) -> List[CalendarEvent]:
    """Events for already-parsed lines, sorted by date.

    Months run in the outer loop and lines in the inner one; the sort is
    stable, so same-day events keep that discovery order.
    """
    lines = list(lines)
    warned: Set[int] = set()
    events: List[CalendarEvent] = []
    for month in MONTHS:
        for index, line in enumerate(lines):
            classification = classify(line.rule_text)
            if not classification.recognized:
                if index not in warned:
                    warned.add(index)
                    LOG.warning("unrecognized rule for %r: %r", line.name, line.rule_text)
                continue
            for d in expand(classification, year, month):
                events.append(
                    CalendarEvent(
                        id=_event_id(index, month, d.day, classification.multi),
                        rule_name=line.name,
                        date=d,
                        month=d.month,
                        year=d.year,
                        notes=line.notes,
                    )
                )
    events.sort(key=lambda e: e.date)
    LOG.info("generated %d events from %d lines for %d", len(events), len(lines), year)
    return events


def generate_events(raw_text: str, year: int) -> List[CalendarEvent]:
    """Parse ``raw_text`` ("Name - rule" per line) and expand it over ``year``."""
    return generate_from_lines(parse_lines(raw_text), year)


def events_by_month(events: Iterable[CalendarEvent]) -> Dict[int, List[CalendarEvent]]:
    out: Dict[int, List[CalendarEvent]] = defaultdict(list)
    for ev in events:
        out[ev.month].append(ev)
    return dict(out)
