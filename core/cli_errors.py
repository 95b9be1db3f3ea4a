"""Exit codes and the exceptions that carry them out of CLI commands."""
from __future__ import annotations

import sys
import traceback
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    USAGE = 2
    CONFIG_ERROR = 3
    NOT_FOUND = 6
    INTERRUPTED = 130


class CLIError(Exception):
    """Error meant for the user: a message, an optional hint, an exit code."""

    code = ExitCode.ERROR

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class ConfigError(CLIError):
    """Config file unreadable or holding invalid values."""

    code = ExitCode.CONFIG_ERROR


class NotFoundError(CLIError):
    code = ExitCode.NOT_FOUND


class UsageError(CLIError):
    """Bad argument value or conflicting flags."""

    code = ExitCode.USAGE


def handle_error(error: BaseException, verbose: bool = False) -> int:
    """Report ``error`` on stderr and return the exit code for it."""
    if not isinstance(error, CLIError):
        print(f"Error: {error}", file=sys.stderr)
        if verbose:
            traceback.print_exception(type(error), error, error.__traceback__)
        return ExitCode.ERROR
    print(f"Error: {error.message}", file=sys.stderr)
    if error.hint:
        print(f"Hint: {error.hint}", file=sys.stderr)
    return error.code
