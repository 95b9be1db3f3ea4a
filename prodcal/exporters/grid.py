"""Plain-text month grids, Sunday first, marking days that hold events."""
from __future__ import annotations

import calendar
import datetime as _dt
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from core.date_utils import month_name

from ..model import CalendarEvent

HEADER = "Sun Mon Tue Wed Thu Fri Sat"
CELL = 4


def group_by_day(events: Iterable[CalendarEvent]) -> Dict[int, Dict[int, List[CalendarEvent]]]:
    """{month: {day: [events]}} keeping event order within a day."""
    out: Dict[int, Dict[int, List[CalendarEvent]]] = defaultdict(lambda: defaultdict(list))
    for ev in events:
        out[ev.date.month][ev.date.day].append(ev)
    return {m: dict(days) for m, days in out.items()}


def _cell(d: _dt.date, has_events: bool, today: Optional[_dt.date]) -> str:
    if d == today:
        text = f"[{d.day}]"
    else:
        text = f"{d.day}{'*' if has_events else ''}"
    return text.rjust(CELL - 1)


def render_month(
    year: int,
    month: int,
    events: Iterable[CalendarEvent],
    today: Optional[_dt.date] = None,
    *,
    legend: bool = True,
) -> str:
    """Text grid for one month; ``*`` marks event days, ``[d]`` marks today.

    With ``legend`` the events of the month follow the grid, one per line.
    """
    month_events = [e for e in events if e.date.year == year and e.date.month == month]
    days = {e.date.day for e in month_events}
    cal = calendar.Calendar(firstweekday=6)
    title = f"{month_name(month)} {year}"
    lines = [title.center(len(HEADER)).rstrip(), HEADER]
    for week in cal.monthdatescalendar(year, month):
        cells = [
            _cell(d, d.day in days, today) if d.month == month else " " * (CELL - 1)
            for d in week
        ]
        lines.append(" ".join(cells).rstrip())
    if legend and month_events:
        lines.append("")
        for ev in sorted(month_events, key=lambda e: e.date):
            lines.append(f"{ev.date.day:>2}  {ev.rule_name}")
    return "\n".join(lines)


def render_year(
    year: int,
    events: Iterable[CalendarEvent],
    today: Optional[_dt.date] = None,
) -> str:
    events = list(events)
    return "\n\n".join(render_month(year, m, events, today) for m in range(1, 13))
