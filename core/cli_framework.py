"""Decorator-based argparse front end for the prodcal CLI.

Commands are plain functions taking the parsed namespace and returning an
exit code. ``@app.argument`` decorators sit below ``@app.command`` and are
collected in source order. Every invocation gets ``--config``,
``--verbose``, ``--quiet`` and ``--output``; the chosen output settings
arrive on ``args._output`` as an ``OutputWriter``.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .cli_errors import CLIError, ExitCode, handle_error
from .cli_output import OutputConfig, OutputFormat, OutputWriter

CommandFunc = Callable[[argparse.Namespace], int]

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass
class CommandDef:
    name: str
    func: CommandFunc
    help: str = ""
    arguments: List[Tuple[tuple, Dict[str, Any]]] = field(default_factory=list)

    def add_to(self, subparsers: Any) -> None:
        parser = subparsers.add_parser(self.name, help=self.help, description=self.help)
        for flags, kwargs in self.arguments:
            parser.add_argument(*flags, **kwargs)
        parser.set_defaults(_cmd_func=self.func)


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """WARNING by default, INFO with --verbose, ERROR with --quiet."""
    level = logging.INFO if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


class CommandGroup:
    """Second-level commands such as ``export csv``."""

    def __init__(self, app: "CLIApp", name: str, help: str = ""):
        self.app = app
        self.name = name
        self.help = help
        self.commands: Dict[str, CommandDef] = {}

    def command(self, name: str, *, help: str = "") -> Callable[[CommandFunc], CommandFunc]:
        def decorator(func: CommandFunc) -> CommandFunc:
            self.commands[name] = CommandDef(name, func, help, self.app._take_pending())
            return func
        return decorator

    def add_to(self, subparsers: Any) -> None:
        parser = subparsers.add_parser(self.name, help=self.help, description=self.help)
        inner = parser.add_subparsers(dest=f"{self.name}_cmd", metavar="<subcommand>")
        for cmd in self.commands.values():
            cmd.add_to(inner)


class CLIApp:
    """Collects commands and groups, builds the parser, runs one command.

    Example:
        app = CLIApp("prodcal", "Production calendar generator")

        @app.command("classify", help="Show how a rule is interpreted")
        @app.argument("rule")
        def cmd_classify(args):
            return 0
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        version: Optional[str] = None,
        epilog: Optional[str] = None,
    ):
        self.name = name
        self.description = description
        self.version = version
        self.epilog = epilog
        self.commands: Dict[str, CommandDef] = {}
        self.groups: Dict[str, CommandGroup] = {}
        self._pending: List[Tuple[tuple, Dict[str, Any]]] = []

    def _take_pending(self) -> List[Tuple[tuple, Dict[str, Any]]]:
        # decorators apply bottom-up, so reverse to get source order
        taken = list(reversed(self._pending))
        self._pending.clear()
        return taken

    def command(self, name: str, *, help: str = "") -> Callable[[CommandFunc], CommandFunc]:
        def decorator(func: CommandFunc) -> CommandFunc:
            self.commands[name] = CommandDef(name, func, help, self._take_pending())
            return func
        return decorator

    def argument(self, *flags: str, **kwargs: Any) -> Callable[[CommandFunc], CommandFunc]:
        def decorator(func: CommandFunc) -> CommandFunc:
            self._pending.append((flags, kwargs))
            return func
        return decorator

    def group(self, name: str, *, help: str = "") -> CommandGroup:
        group = CommandGroup(self, name, help)
        self.groups[name] = group
        return group

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=self.name,
            description=self.description,
            epilog=self.epilog,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        if self.version:
            parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {self.version}")
        parser.add_argument(
            "--config", "-c",
            help="Path to config.yaml (default: $PRODCAL_CONFIG or ~/.config/prodcal/config.yaml)",
        )
        parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")
        parser.add_argument("--quiet", "-q", action="store_true", help="Only print errors")
        parser.add_argument(
            "--output", "-o",
            choices=[f.value for f in OutputFormat],
            default=OutputFormat.TEXT.value,
            help="Output format (default: text)",
        )
        subparsers = parser.add_subparsers(dest="command", metavar="<command>")
        for group in self.groups.values():
            group.add_to(subparsers)
        for cmd in self.commands.values():
            cmd.add_to(subparsers)
        return parser

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Parse ``argv``, run the selected command and return its exit code."""
        parser = self.build_parser()
        args = parser.parse_args(argv)
        configure_logging(verbose=args.verbose, quiet=args.quiet)
        args._output = OutputWriter(
            OutputConfig(format=OutputFormat(args.output), verbose=args.verbose, quiet=args.quiet)
        )

        func = getattr(args, "_cmd_func", None)
        if func is None:
            parser.print_help()
            return ExitCode.USAGE
        try:
            return int(func(args))
        except CLIError as exc:
            return handle_error(exc, verbose=args.verbose)
        except KeyboardInterrupt:
            print("\nInterrupted.", file=sys.stderr)
            return ExitCode.INTERRUPTED
        except Exception as exc:
            return handle_error(exc, verbose=args.verbose)
