"""Rendering of command results as text, JSON, YAML or an aligned table.

Dates and enums are converted to plain strings for the structured formats.
"""
from __future__ import annotations

import datetime as _dt
import json
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, TextIO

import yaml


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"
    TABLE = "table"


@dataclass
class OutputConfig:
    format: OutputFormat = OutputFormat.TEXT
    verbose: bool = False
    quiet: bool = False
    file: Optional[TextIO] = None

    @property
    def stream(self) -> TextIO:
        return self.file or sys.stdout


def to_plain(data: Any) -> Any:
    """Recursively turn dates into ISO strings and enums into their values."""
    if isinstance(data, dict):
        return {k: to_plain(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_plain(v) for v in data]
    if isinstance(data, Enum):
        return data.value
    if isinstance(data, _dt.date):
        return data.isoformat()
    return data


def format_table(rows: Sequence[Dict[str, Any]], headers: Sequence[str]) -> List[str]:
    """Pipe-separated columns padded to the widest cell, under a rule line."""
    cells = [[str(row.get(h, "")) for h in headers] for row in rows]
    widths = [max([len(h)] + [len(r[i]) for r in cells]) for i, h in enumerate(headers)]
    head = " | ".join(h.ljust(w) for h, w in zip(headers, widths))
    lines = [head, "-" * len(head)]
    lines += [" | ".join(c.ljust(w) for c, w in zip(r, widths)).rstrip() for r in cells]
    return lines


class OutputWriter:
    """Writes command output in the format chosen with ``--output``."""

    def __init__(self, config: Optional[OutputConfig] = None):
        self.config = config or OutputConfig()

    @property
    def format(self) -> OutputFormat:
        return self.config.format

    def print(self, *args, **kwargs) -> None:
        if self.config.quiet:
            return
        kwargs.setdefault("file", self.config.stream)
        print(*args, **kwargs)

    def print_warning(self, message: str) -> None:
        print(f"Warning: {message}", file=sys.stderr)

    def print_verbose(self, message: str) -> None:
        if self.config.verbose:
            self.print(message)

    def print_data(self, data: Any, headers: Optional[List[str]] = None) -> None:
        """Print a dict or a list of row dicts in the configured format."""
        if self.format == OutputFormat.JSON:
            self.print(json.dumps(to_plain(data), indent=2))
        elif self.format == OutputFormat.YAML:
            self.print(yaml.safe_dump(to_plain(data), default_flow_style=False, sort_keys=False), end="")
        elif isinstance(data, dict):
            self.print_dict(data)
        elif self.format == OutputFormat.TABLE:
            rows = to_plain(list(data))
            if rows:
                for line in format_table(rows, headers or list(rows[0])):
                    self.print(line)
        else:
            for item in data:
                self.print(item)

    def print_dict(self, data: Dict[str, Any]) -> None:
        """``key: value`` lines in text and table modes."""
        if self.format in (OutputFormat.JSON, OutputFormat.YAML):
            self.print_data(data)
            return
        for key, value in data.items():
            self.print(f"{key}: {value}")
