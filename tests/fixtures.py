"""Shared test fixtures and utilities.

Helpers for building rule text, temporary config/rules files, and capturing
CLI output across the prodcal test suite.
"""

from __future__ import annotations

import datetime as _dt
import importlib.util
import io
import os
import tempfile
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from pathlib import Path
from types import SimpleNamespace
from typing import Iterable, List, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]


# -----------------------------------------------------------------------------
# Path helpers
# -----------------------------------------------------------------------------


def repo_root() -> Path:
    return REPO_ROOT


def has_pyyaml() -> bool:
    try:
        return importlib.util.find_spec("yaml") is not None
    except Exception:
        return False


# -----------------------------------------------------------------------------
# YAML config helpers
# -----------------------------------------------------------------------------


def write_yaml(data: dict, dir: Optional[str] = None, filename: str = "config.yaml") -> str:
    """Write a dict to a temporary YAML file, return the path."""
    import yaml

    td = dir or tempfile.mkdtemp()
    p = os.path.join(td, filename)
    with open(p, "w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False)
    return p


@contextmanager
def temp_yaml_file(data: dict, suffix: str = ".yaml"):
    """Context manager that yields a path to a temporary YAML file."""
    import yaml

    with tempfile.NamedTemporaryFile("w+", delete=False, suffix=suffix) as tf:
        yaml.safe_dump(data, tf)
        tf.flush()
        yield tf.name
    os.unlink(tf.name)


@contextmanager
def temp_text_file(text: str, suffix: str = ".txt"):
    """Context manager that yields a path to a temporary text file."""
    with tempfile.NamedTemporaryFile("w+", delete=False, suffix=suffix, encoding="utf-8") as tf:
        tf.write(text)
        tf.flush()
        yield tf.name
    os.unlink(tf.name)


@contextmanager
def env_var(name: str, value: Optional[str]):
    """Temporarily set (or unset, with None) an environment variable."""
    old = os.environ.get(name)
    if value is None:
        os.environ.pop(name, None)
    else:
        os.environ[name] = value
    try:
        yield
    finally:
        if old is None:
            os.environ.pop(name, None)
        else:
            os.environ[name] = old


# -----------------------------------------------------------------------------
# Output capture helpers
# -----------------------------------------------------------------------------


@contextmanager
def capture_output():
    """Capture stdout and stderr; yields (out, err) buffers."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        yield out, err


def make_args(**kwargs) -> SimpleNamespace:
    """Create a SimpleNamespace with common CLI arg defaults merged with kwargs."""
    defaults = {
        "config": None,
        "year": None,
        "rules": None,
        "text": None,
        "defaults": False,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


# -----------------------------------------------------------------------------
# Rule and event helpers
# -----------------------------------------------------------------------------


def rules_text(*lines: str) -> str:
    """Join "Name - rule" lines into pasted rules text."""
    return "\n".join(lines) + "\n"


def dates_of(events: Iterable) -> List[_dt.date]:
    return [e.date for e in events]


def d(year: int, month: int, day: int) -> _dt.date:
    return _dt.date(year, month, day)
