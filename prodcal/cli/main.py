"""prodcal CLI.

Generate a year of dated events from "Name - rule" lines, inspect how a
single rule is read, and export to CSV or iCalendar.
"""
from __future__ import annotations

import argparse
import datetime as _dt
import sys
from pathlib import Path
from typing import List, Optional

from core.cli_framework import CLIApp
from core.pipeline import run_pipeline

from .. import APP_ID, PURPOSE, __version__
from ..defaults import DEFAULT_RULES_TEXT
from ..pipeline import (
    ExportProcessor,
    ExportProducer,
    ExportRequest,
    GenerateProcessor,
    GenerateProducer,
    GenerateRequest,
    GridProcessor,
    GridProducer,
    GridRequest,
    default_export_path,
)
from ..rules import classify
from .args import rules_from_args, settings_from_args, year_from_args

app = CLIApp(
    APP_ID,
    PURPOSE,
    version=__version__,
    epilog="Rules are read from --text, --rules FILE, config rules_file, or the built-in samples.",
)


def _rules_arguments(func):
    """Attach the shared rules-source flags to a command."""
    func = app.argument("--defaults", action="store_true", help="Use the built-in sample rules")(func)
    func = app.argument("--text", help="Rules as inline text, one 'Name - rule' per line")(func)
    func = app.argument("--rules", help="Path to a rules file, one 'Name - rule' per line")(func)
    func = app.argument("--year", type=int, help="Calendar year (default: config year or current year)")(func)
    return func


# ============================================================================
# Generate
# ============================================================================


@app.command("generate", help="List the dated events for a year")
@_rules_arguments
def cmd_generate(args: argparse.Namespace) -> int:
    request = GenerateRequest(rules_text=rules_from_args(args), year=year_from_args(args))
    return run_pipeline(request, GenerateProcessor(), GenerateProducer(args._output))


@app.command("classify", help="Show how a single rule is interpreted")
@app.argument("rule", help="Rule text, e.g. 'first working day of every month'")
def cmd_classify(args: argparse.Namespace) -> int:
    result = classify(args.rule)
    if not result.recognized:
        args._output.print_warning(f"rule not understood: {args.rule}")
    args._output.print_dict(result.describe())
    return 0


@app.command("defaults", help="Print the built-in sample rules")
def cmd_defaults(args: argparse.Namespace) -> int:
    args._output.print(DEFAULT_RULES_TEXT, end="")
    return 0


@app.command("grid", help="Print text month grids with event days marked")
@app.argument("--month", type=int, help="Only this month (1-12)")
@_rules_arguments
def cmd_grid(args: argparse.Namespace) -> int:
    request = GridRequest(
        rules_text=rules_from_args(args),
        year=year_from_args(args),
        month=args.month,
        today=_dt.date.today(),
    )
    return run_pipeline(request, GridProcessor(), GridProducer(args._output))


# ============================================================================
# Export
# ============================================================================

export_group = app.group("export", help="Write events to a file")


def _export(args: argparse.Namespace, fmt: str) -> int:
    year = year_from_args(args)
    out = Path(args.out) if args.out else default_export_path(fmt, year)
    request = ExportRequest(
        rules_text=rules_from_args(args),
        year=year,
        fmt=fmt,
        out_path=out,
        settings=settings_from_args(args),
    )
    return run_pipeline(request, ExportProcessor(), ExportProducer(args._output))


@export_group.command("csv", help="Export events as CSV")
@app.argument("--out", help="Output path (default calendar-<year>.csv)")
@_rules_arguments
def cmd_export_csv(args: argparse.Namespace) -> int:
    return _export(args, "csv")


@export_group.command("ics", help="Export events as an iCalendar file")
@app.argument("--out", help="Output path (default business-calendar-<year>.ics)")
@_rules_arguments
def cmd_export_ics(args: argparse.Namespace) -> int:
    return _export(args, "ics")


# ============================================================================
# Main
# ============================================================================


def main(argv: Optional[List[str]] = None) -> int:
    return app.run(argv)


if __name__ == "__main__":
    sys.exit(main())
