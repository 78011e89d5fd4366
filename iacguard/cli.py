"""Command line entry point."""

from __future__ import annotations

import argparse
import sys
import uuid
from typing import NoReturn

from iacguard.constants import ENGINE_ERROR_CODE, FULLNAME, get_version
from iacguard.exit_handler import ExitPolicy
from iacguard.metrics import initialize_metrics
from iacguard.printer import LOG_FORMAT_JSON, LOG_FORMAT_PRETTY, OutputSettings

_INIT_ERROR = "initialization error - "


class CommandError(Exception):
    """Raised when the command line cannot be parsed or run."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise CommandError(message)


def _global_flags(suppress: bool) -> _Parser:
    def default(value):
        return argparse.SUPPRESS if suppress else value

    flags = _Parser(add_help=False)
    flags.add_argument("-l", "--log-file", action="store_true", default=default(False),
                       help="writes log messages to log file (deprecated, use --log-path)")
    flags.add_argument("--log-path", default=default(None),
                       help="path to generate log file (info.log)")
    flags.add_argument("--log-level", default=default("INFO"),
                       help="determines log level (TRACE,DEBUG,INFO,WARN,ERROR,FATAL)")
    flags.add_argument("-f", "--log-format", default=default(LOG_FORMAT_PRETTY),
                       help=f"determines log format ({LOG_FORMAT_PRETTY},{LOG_FORMAT_JSON})")
    flags.add_argument("-v", "--verbose", action="store_true", default=default(False),
                       help="write logs to stdout too (mutually exclusive with silent)")
    flags.add_argument("-s", "--silent", action="store_true", default=default(False),
                       help="silence stdout messages (mutually exclusive with verbose and ci)")
    flags.add_argument("--no-color", action="store_true", default=default(False),
                       help="disable CLI color output")
    flags.add_argument("--ci", action="store_true", default=default(False),
                       help="display only log messages to CLI output (mutually exclusive with silent)")
    flags.add_argument("--profiling", default=default(""),
                       help="enables performance profiler that prints resource consumption "
                            "metrics in the logs during the execution (CPU, MEM)")
    return flags


def _echo(settings: OutputSettings, text: str) -> None:
    stream = settings.stdout
    if stream is not None:
        print(text, file=stream)


def _run_version(settings: OutputSettings) -> None:
    _echo(settings, get_version())


def _run_generate_id(settings: OutputSettings) -> None:
    _echo(settings, str(uuid.uuid4()))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its global flags and commands."""
    parser = _Parser(prog="kics", description=FULLNAME, parents=[_global_flags(False)])
    commands = parser.add_subparsers(dest="command", metavar="command")

    version = commands.add_parser("version", help="Displays the current version",
                                  parents=[_global_flags(True)])
    version.set_defaults(handler=_run_version)

    generate_id = commands.add_parser("generate-id", help="Generates uuid for query",
                                      parents=[_global_flags(True)])
    generate_id.set_defaults(handler=_run_generate_id)
    return parser


def execute(argv: list[str] | None = None) -> None:
    """Parse ``argv`` and run the selected command; raise CommandError on failure."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code in (0, None):
            return
        raise CommandError(f"exited with status {exc.code}") from exc

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return

    options = vars(args)
    if options.get("log_file"):
        print("Flag --log-file has been deprecated, please use --log-path instead", file=sys.stderr)

    settings = OutputSettings()
    try:
        settings.setup(options)
        initialize_metrics(str(options.get("profiling", "")), bool(options.get("ci")))
    except (ValueError, OSError) as err:
        raise CommandError(f"{_INIT_ERROR}{err}") from err
    handler(settings)


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the process exit code."""
    try:
        execute(argv)
    except CommandError as err:
        print(f"Error: {err}", file=sys.stderr)
        if ExitPolicy().show_error("errors"):
            return ENGINE_ERROR_CODE
    return 0


if __name__ == "__main__":
    sys.exit(main())