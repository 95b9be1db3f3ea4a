"""Config locations, date formats and CLI bounds for prodcal."""

from __future__ import annotations

import os

CONFIG_ENV_VAR = "PRODCAL_CONFIG"
CONFIG_DIR_NAME = "prodcal"
CONFIG_FILE_NAME = "config.yaml"


def config_file_paths() -> list[str]:
    """Config files to try, most specific first.

    ``$PRODCAL_CONFIG`` wins outright. Otherwise ``$XDG_CONFIG_HOME`` and
    ``~/.config`` are searched, each path listed once.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return [os.path.expanduser(override)]
    paths: list[str] = []
    for root in (os.environ.get("XDG_CONFIG_HOME"), "~/.config"):
        if not root:
            continue
        path = os.path.join(os.path.expanduser(root), CONFIG_DIR_NAME, CONFIG_FILE_NAME)
        if path not in paths:
            paths.append(path)
    return paths


# Date formats
FMT_DAY_START = "%Y-%m-%d"
FMT_ICS_DATE = "%Y%m%d"
FMT_ICS_STAMP = "%Y%m%dT%H%M%SZ"

# Years the CLI accepts
MIN_YEAR = 2020
MAX_YEAR = 2050
