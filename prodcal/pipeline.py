"""Consumer/processor/producer pipelines behind the CLI commands."""
from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.cli_errors import NotFoundError, UsageError
from core.cli_output import OutputFormat, OutputWriter
from core.constants import MAX_YEAR, MIN_YEAR
from core.date_utils import to_iso_str, weekday_name
from core.pipeline import BaseProducer, SafeProcessor

from .assembler import generate_from_lines
from .config import Settings
from .defaults import DEFAULT_RULES_TEXT
from .exporters import render_month, render_year, to_csv, to_ics
from .model import CalendarEvent, RawLine
from .parser import parse_lines
from .rules import classify

LOG = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "ics")


def validate_year(year: Any) -> int:
    try:
        value = int(year)
    except (TypeError, ValueError):
        raise UsageError(f"Invalid year: {year!r}") from None
    if not MIN_YEAR <= value <= MAX_YEAR:
        raise UsageError(
            f"Year {value} out of range",
            hint=f"Use a year between {MIN_YEAR} and {MAX_YEAR}.",
        )
    return value


def validate_month(month: Any) -> int:
    try:
        value = int(month)
    except (TypeError, ValueError):
        raise UsageError(f"Invalid month: {month!r}") from None
    if not 1 <= value <= 12:
        raise UsageError(f"Month {value} out of range", hint="Use 1-12.")
    return value


def resolve_rules_text(
    *,
    text: Optional[str] = None,
    rules_path: Optional[str] = None,
    use_defaults: bool = False,
    settings: Optional[Settings] = None,
) -> str:
    """Pick the rules source: inline text, file, config file, then defaults."""
    if text is not None and (rules_path or use_defaults):
        raise UsageError("Use only one of --text, --rules, --defaults")
    if text is not None:
        return text
    if use_defaults:
        return DEFAULT_RULES_TEXT
    path = rules_path or (settings.rules_file if settings else None)
    if not path:
        return DEFAULT_RULES_TEXT
    p = Path(path).expanduser()
    if not p.exists():
        raise NotFoundError(f"Rules file not found: {p}", hint="Pass --rules PATH or --defaults.")
    LOG.info("reading rules from %s", p)
    return p.read_text(encoding="utf-8")


def unrecognized_lines(lines: List[RawLine]) -> List[str]:
    return [line.name for line in lines if not classify(line.rule_text).recognized]


def event_rows(events: List[CalendarEvent]) -> List[Dict[str, str]]:
    return [
        {
            "id": ev.id,
            "date": to_iso_str(ev.date),
            "day": weekday_name(ev.date),
            "name": ev.rule_name,
            "notes": ev.notes,
        }
        for ev in events
    ]


# -----------------------------------------------------------------------------
# Generate
# -----------------------------------------------------------------------------


@dataclass
class GenerateRequest:
    rules_text: str
    year: int


@dataclass
class GenerateResult:
    year: int
    events: List[CalendarEvent]
    line_count: int = 0
    unrecognized: List[str] = field(default_factory=list)


class GenerateProcessor(SafeProcessor[GenerateRequest, GenerateResult]):
    """Parse the rules and expand them over the requested year."""

    def _process_safe(self, payload: GenerateRequest) -> GenerateResult:
        year = validate_year(payload.year)
        lines = parse_lines(payload.rules_text)
        return GenerateResult(
            year=year,
            events=generate_from_lines(lines, year),
            line_count=len(lines),
            unrecognized=unrecognized_lines(lines),
        )


class GenerateProducer(BaseProducer):
    def __init__(self, writer: Optional[OutputWriter] = None) -> None:
        self.writer = writer or OutputWriter()

    def _produce_success(self, payload: GenerateResult, diagnostics: Dict[str, Any]) -> None:
        rows = event_rows(payload.events)
        if self.writer.config.format == OutputFormat.TEXT:
            for row in rows:
                self.writer.print(f"{row['date']}  {row['day'][:3]}  {row['name']}")
        else:
            self.writer.print_data(rows, headers=["id", "date", "day", "name", "notes"])
        summary = f"{len(payload.events)} events from {payload.line_count} rules for {payload.year}"
        if payload.unrecognized:
            summary += f", not understood: {', '.join(payload.unrecognized)}"
        self.writer.print_verbose(summary)


# -----------------------------------------------------------------------------
# Export
# -----------------------------------------------------------------------------


@dataclass
class ExportRequest:
    rules_text: str
    year: int
    fmt: str
    out_path: Path
    settings: Settings = field(default_factory=Settings)
    stamp: Optional[_dt.datetime] = None


@dataclass
class ExportResult:
    out_path: Path
    fmt: str
    event_count: int


def render_export(events: List[CalendarEvent], request: ExportRequest, year: int) -> str:
    if request.fmt == "csv":
        return to_csv(events)
    s = request.settings
    return to_ics(
        events,
        year,
        stamp=request.stamp,
        calendar_name=s.calendar_name,
        reminder_days=s.reminder_days,
        uid_domain=s.uid_domain,
        prodid=s.prodid,
    )


class ExportProcessor(SafeProcessor[ExportRequest, ExportResult]):
    """Generate events and write them to a CSV or iCalendar file."""

    def _process_safe(self, payload: ExportRequest) -> ExportResult:
        if payload.fmt not in EXPORT_FORMATS:
            raise UsageError(f"Unknown export format: {payload.fmt}")
        year = validate_year(payload.year)
        events = generate_from_lines(parse_lines(payload.rules_text), year)
        content = render_export(events, payload, year)
        out = Path(payload.out_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps CRLF in .ics output intact on every platform
        with out.open("w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        LOG.info("wrote %s export to %s", payload.fmt, out)
        return ExportResult(out_path=out, fmt=payload.fmt, event_count=len(events))


class ExportProducer(BaseProducer):
    def __init__(self, writer: Optional[OutputWriter] = None) -> None:
        self.writer = writer or OutputWriter()

    def _produce_success(self, payload: ExportResult, diagnostics: Dict[str, Any]) -> None:
        self.writer.print(f"Wrote {payload.event_count} events to {payload.out_path}")


def default_export_path(fmt: str, year: int) -> Path:
    if fmt == "ics":
        return Path(f"business-calendar-{year}.ics")
    return Path(f"calendar-{year}.csv")


# -----------------------------------------------------------------------------
# Grid
# -----------------------------------------------------------------------------


@dataclass
class GridRequest:
    rules_text: str
    year: int
    month: Optional[int] = None
    today: Optional[_dt.date] = None


@dataclass
class GridResult:
    text: str


class GridProcessor(SafeProcessor[GridRequest, GridResult]):
    def _process_safe(self, payload: GridRequest) -> GridResult:
        year = validate_year(payload.year)
        events = generate_from_lines(parse_lines(payload.rules_text), year)
        if payload.month is not None:
            text = render_month(year, validate_month(payload.month), events, payload.today)
        else:
            text = render_year(year, events, payload.today)
        return GridResult(text=text)


class GridProducer(BaseProducer):
    def __init__(self, writer: Optional[OutputWriter] = None) -> None:
        self.writer = writer or OutputWriter()

    def _produce_success(self, payload: GridResult, diagnostics: Dict[str, Any]) -> None:
        self.writer.print(payload.text)
