"""YAML config reading for the prodcal CLI."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml

__all__ = ["YAMLError", "load_config"]

YAMLError = yaml.YAMLError


def load_config(path: Optional[str]) -> Any:
    """Parsed YAML document at ``path``; {} when unset, missing or blank.

    The root is returned unchecked, callers validate its shape.
    """
    if not path:
        return {}
    p = Path(path)
    if not p.is_file():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    return {} if data is None else data
