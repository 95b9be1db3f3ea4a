"""iCalendar (RFC 5545) export of all-day events with a reminder alarm."""
from __future__ import annotations

import datetime as _dt
from typing import Iterable, List, Optional

from core.constants import FMT_ICS_DATE, FMT_ICS_STAMP

from ..model import CalendarEvent

DEFAULT_PRODID = "-//Business Calendar Generator//EN"
DEFAULT_UID_DOMAIN = "business-calendar.com"
CATEGORIES = "Business,Deadline"
MAX_OCTETS = 75


def escape_text(text: str) -> str:
    """Escape backslash, semicolon, comma and newlines for TEXT values."""
    if text is None:
        return ""
    text = text.replace("\\", "\\\\")
    text = text.replace(";", "\\;")
    text = text.replace(",", "\\,")
    text = text.replace("\r\n", "\\n").replace("\n", "\\n").replace("\r", "")
    return text


def fold_line(line: str) -> str:
    """Fold a content line at 75 octets; continuations start with a space."""
    if len(line.encode("utf-8")) <= MAX_OCTETS:
        return line
    parts: List[str] = []
    current = ""
    for char in line:
        limit = MAX_OCTETS if not parts else MAX_OCTETS - 1
        if len((current + char).encode("utf-8")) > limit:
            parts.append(current)
            current = char
        else:
            current += char
    parts.append(current)
    return "\r\n ".join(parts)


def _event_lines(ev: CalendarEvent, stamp: str, uid_domain: str, reminder_days: int) -> List[str]:
    day = ev.date.strftime(FMT_ICS_DATE)
    end = (ev.date + _dt.timedelta(days=1)).strftime(FMT_ICS_DATE)
    lines = [
        "BEGIN:VEVENT",
        f"UID:{ev.id}-{day}@{uid_domain}",
        f"DTSTAMP:{stamp}",
        f"DTSTART;VALUE=DATE:{day}",
        f"DTEND;VALUE=DATE:{end}",
        f"SUMMARY:{escape_text(ev.rule_name)}",
    ]
    if ev.notes:
        lines.append(f"DESCRIPTION:{escape_text(ev.notes)}")
    lines += [
        "STATUS:CONFIRMED",
        "TRANSP:TRANSPARENT",
        f"CATEGORIES:{CATEGORIES}",
    ]
    if reminder_days > 0:
        when = "tomorrow" if reminder_days == 1 else f"in {reminder_days} days"
        lines += [
            "BEGIN:VALARM",
            f"TRIGGER:-P{reminder_days}D",
            "ACTION:DISPLAY",
            f"DESCRIPTION:Reminder: {escape_text(ev.rule_name)} is {when}",
            "END:VALARM",
        ]
    lines.append("END:VEVENT")
    return lines


def to_ics(
    events: Iterable[CalendarEvent],
    year: int,
    *,
    stamp: Optional[_dt.datetime] = None,
    calendar_name: Optional[str] = None,
    reminder_days: int = 1,
    uid_domain: str = DEFAULT_UID_DOMAIN,
    prodid: str = DEFAULT_PRODID,
) -> str:
    """Render ``events`` as a VCALENDAR document with CRLF line endings.

    ``stamp`` is the DTSTAMP for every event (UTC); it defaults to now so
    callers wanting reproducible output should pass it. ``reminder_days`` of
    0 omits the alarm.
    """
    if stamp is None:
        stamp = _dt.datetime.now(_dt.timezone.utc)
    stamp_str = stamp.strftime(FMT_ICS_STAMP)
    name = calendar_name or f"Business Calendar {year}"
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{prodid}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        f"X-WR-CALNAME:{escape_text(name)}",
        f"X-WR-CALDESC:Business events and important dates for {year}",
    ]
    for ev in events:
        lines += _event_lines(ev, stamp_str, uid_domain, reminder_days)
    lines.append("END:VCALENDAR")
    return "\r\n".join(fold_line(line) for line in lines) + "\r\n"
