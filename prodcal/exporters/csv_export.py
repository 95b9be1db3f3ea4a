"""Spreadsheet-friendly CSV export."""
from __future__ import annotations

import csv
import io
from typing import Iterable

from core.date_utils import month_name, to_iso_str, weekday_name

from ..model import CalendarEvent

HEADER = ("Month", "Date", "Day", "Event Name", "Notes")


def to_csv(events: Iterable[CalendarEvent]) -> str:
    """Header row plus one fully quoted row per event, ordered by date."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buf.write(",".join(HEADER) + "\n")
    for ev in sorted(events, key=lambda e: e.date):
        writer.writerow([
            month_name(ev.date.month),
            to_iso_str(ev.date),
            weekday_name(ev.date),
            ev.rule_name,
            ev.notes or "",
        ])
    return buf.getvalue().rstrip("\n")
