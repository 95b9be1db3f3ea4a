"""User settings loaded from YAML.

Search order: explicit path, ``$PRODCAL_CONFIG``, then
``$XDG_CONFIG_HOME/prodcal/config.yaml`` and ``~/.config/prodcal/config.yaml``.
Missing files give defaults; malformed files raise ConfigError.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from core.cli_errors import ConfigError
from core.constants import config_file_paths
from core.yamlio import YAMLError, load_config

from .exporters.ics_export import DEFAULT_PRODID, DEFAULT_UID_DOMAIN

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    year: Optional[int] = None
    rules_file: Optional[str] = None
    calendar_name: Optional[str] = None
    reminder_days: int = 1
    uid_domain: str = DEFAULT_UID_DOMAIN
    prodid: str = DEFAULT_PRODID
    source: Optional[str] = None


_TYPES: Dict[str, type] = {
    "year": int,
    "rules_file": str,
    "calendar_name": str,
    "reminder_days": int,
    "uid_domain": str,
    "prodid": str,
}


def find_config(path: Optional[str] = None) -> Optional[str]:
    """First existing config file, or ``path`` itself when given."""
    if path:
        return os.path.expanduser(path)
    for candidate in config_file_paths():
        if os.path.exists(candidate):
            return candidate
    return None


def _coerce(key: str, value: Any, source: str) -> Any:
    want = _TYPES[key]
    # bool is an int subclass; reject it for numeric keys
    if isinstance(value, bool) or not isinstance(value, want):
        raise ConfigError(
            f"{source}: '{key}' must be {want.__name__}, got {type(value).__name__}",
            hint="Fix the value or remove the key to use the default.",
        )
    if key == "reminder_days" and value < 0:
        raise ConfigError(f"{source}: 'reminder_days' must be >= 0")
    if key == "rules_file":
        return os.path.expanduser(value)
    return value


def settings_from_dict(data: Dict[str, Any], source: str = "<config>") -> Settings:
    values = {}
    for key, value in data.items():
        if key not in _TYPES:
            LOG.info("ignoring unknown config key %r in %s", key, source)
            continue
        if value is None:
            continue
        values[key] = _coerce(key, value, source)
    return replace(Settings(), source=source, **values)


def load_settings(path: Optional[str] = None) -> Settings:
    """Resolve and load settings; an explicit ``path`` must exist."""
    target = find_config(path)
    if target is None:
        return Settings()
    if path and not os.path.exists(target):
        raise ConfigError(f"Config file not found: {target}")
    try:
        data = load_config(target)
    except OSError as exc:
        raise ConfigError(f"Cannot read config {target}: {exc}") from exc
    except YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {target}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{target}: top level must be a mapping")
    LOG.debug("loaded settings from %s", target)
    return settings_from_dict(data, source=target)
