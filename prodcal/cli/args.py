"""Shared argument helpers for prodcal commands."""
from __future__ import annotations

import argparse
import datetime as _dt
from typing import Optional

from ..config import Settings, load_settings
from ..pipeline import resolve_rules_text, validate_year


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Load settings once per invocation and cache them on ``args``."""
    cached = getattr(args, "_settings", None)
    if cached is None:
        cached = load_settings(getattr(args, "config", None))
        args._settings = cached
    return cached


def year_from_args(args: argparse.Namespace, today: Optional[_dt.date] = None) -> int:
    """--year, else config ``year``, else the current year."""
    year = getattr(args, "year", None)
    if year is None:
        year = settings_from_args(args).year
    if year is None:
        year = (today or _dt.date.today()).year
    return validate_year(year)


def rules_from_args(args: argparse.Namespace) -> str:
    return resolve_rules_text(
        text=getattr(args, "text", None),
        rules_path=getattr(args, "rules", None),
        use_defaults=bool(getattr(args, "defaults", False)),
        settings=settings_from_args(args),
    )
