"""Console and log file output settings driven by the global command flags."""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, TextIO

from iacguard.constants import DEFAULT_LOG_FILE

LOG_FORMAT_JSON = "json"
LOG_FORMAT_PRETTY = "pretty"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVELS: dict[str, int] = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": logging.CRITICAL,
}

_LEVEL_NAMES = {
    TRACE: "trace",
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}

_SHORT_NAMES = {
    TRACE: ("TRC", "35"),
    logging.DEBUG: ("DBG", "33"),
    logging.INFO: ("INF", "32"),
    logging.WARNING: ("WRN", "31"),
    logging.ERROR: ("ERR", "1;31"),
    logging.CRITICAL: ("FTL", "1;31"),
}


def _level_name(levelno: int) -> str:
    return _LEVEL_NAMES.get(levelno, logging.getLevelName(levelno).lower())


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": _level_name(record.levelno),
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .astimezone()
            .isoformat(timespec="seconds"),
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"))


class _PrettyFormatter(logging.Formatter):
    def __init__(self, color: bool) -> None:
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        short, code = _SHORT_NAMES.get(record.levelno, (record.levelname[:3].upper(), "0"))
        if self.color:
            short = f"\x1b[{code}m{short}\x1b[0m"
        line = f"{self.formatTime(record, '%H:%M:%S')} {short} {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class _FileFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        level = f"| {_level_name(record.levelno).upper():<6}|"
        line = f"{self.formatTime(record, '%Y-%m-%dT%H:%M:%S')} {level} {record.getMessage()}"
        if record.exc_info:
            line += f" ERROR: {self.formatException(record.exc_info)}"
        return line


class _OwnedStreamHandler(logging.StreamHandler):
    """Stream handler installed by OutputSettings."""


class _OwnedNullHandler(logging.NullHandler):
    """Keeps the logger from falling back to the last-resort handler."""


def _flag(options: Mapping[str, Any], name: str) -> bool:
    value = options.get(name, False)
    if isinstance(value, str):
        return value.strip().lower() in {"1", "t", "true"}
    return bool(value)


def validate_flags(options: Mapping[str, Any]) -> None:
    """Raise ValueError when mutually exclusive output options are combined."""
    verbose = _flag(options, "verbose")
    silent = _flag(options, "silent")
    ci = _flag(options, "ci")
    if verbose and silent:
        raise ValueError("can't provide 'silent' and 'verbose' flags simultaneously")
    if verbose and ci:
        raise ValueError("can't provide 'verbose' and 'ci' flags simultaneously")
    if ci and silent:
        raise ValueError("can't provide 'silent' and 'ci' flags simultaneously")


def _default_log_path() -> str:
    return os.path.join(os.getcwd(), DEFAULT_LOG_FILE)


class OutputSettings:
    """Configures where log messages and regular output go."""

    def __init__(self, logger_name: str = "iacguard") -> None:
        self.logger = logging.getLogger(logger_name)
        self.level = logging.INFO
        self.output_format = LOG_FORMAT_PRETTY
        self.color = True
        self.log_file_path: str | None = None
        self._log_handle: TextIO | None = None
        self._verbose = False
        self._silent = False
        self._ci = False
        self._initialized = False

    @property
    def stdout(self) -> TextIO | None:
        """Stream for regular output, or None when it is suppressed."""
        if self._silent or self._ci:
            return None
        return sys.stdout

    def log_level(self, level: str) -> None:
        """Set the log level (TRACE, DEBUG, INFO, WARN, ERROR, FATAL)."""
        value = LEVELS.get(str(level).upper())
        if value is None:
            raise ValueError("invalid log level")
        self.level = value
        self.logger.setLevel(value)

    def log_path(self, path: str, changed: bool) -> None:
        """Write logs to ``path``; an empty path means the default log file."""
        if not changed:
            return
        if not path:
            path = _default_log_path()
        else:
            directory = os.path.dirname(path)
            if directory and directory != ".":
                os.makedirs(directory, exist_ok=True)
        self._open_log(path)

    def log_file(self, enabled: bool) -> None:
        """Write logs to the default log file in the working directory."""
        if enabled:
            self._open_log(os.path.normpath(_default_log_path()))

    def log_format(self, fmt: str) -> None:
        """Select the log format, 'json' or 'pretty'."""
        if fmt not in (LOG_FORMAT_JSON, LOG_FORMAT_PRETTY):
            raise ValueError("invalid log format")
        self.output_format = fmt
        self._apply()

    def verbose(self, enabled: bool) -> None:
        """Send log messages to stdout as well."""
        if enabled:
            self._verbose = True
            self._apply()

    def silent(self, enabled: bool) -> None:
        """Suppress all stdout output; log files are still written."""
        if enabled:
            self._silent = True
            self._apply()

    def ci(self, enabled: bool) -> None:
        """Show only log messages on stdout."""
        if enabled:
            self._ci = True
            self._apply()

    def no_color(self, enabled: bool) -> None:
        """Disable colour codes in console output."""
        if enabled:
            self.color = False
            self._apply()

    def setup(self, options: Mapping[str, Any]) -> None:
        """Apply all output options in their fixed order."""
        validate_flags(options)
        self.log_file(_flag(options, "log_file"))
        self.log_level(str(options.get("log_level", "INFO")))
        log_path = options.get("log_path")
        self.log_path(log_path or "", log_path is not None)
        self.verbose(_flag(options, "verbose"))
        self.no_color(_flag(options, "no_color"))
        # The format has to be applied after the destinations are known.
        self.log_format(str(options.get("log_format", LOG_FORMAT_PRETTY)).lower())
        self.silent(_flag(options, "silent"))
        self.ci(_flag(options, "ci"))
        self._initialized = True

    def is_initialized(self) -> bool:
        return self._initialized

    def _open_log(self, path: str) -> None:
        handle = open(path, "a", encoding="utf-8")  # noqa: SIM115 - kept open for logging
        if self._log_handle is not None:
            self._log_handle.close()
        self._log_handle = handle
        self.log_file_path = path
        self._apply()

    def _apply(self) -> None:
        for handler in list(self.logger.handlers):
            if isinstance(handler, (_OwnedStreamHandler, _OwnedNullHandler)):
                self.logger.removeHandler(handler)
        self.logger.setLevel(self.level)
        self.logger.addHandler(_OwnedNullHandler())

        json_format = self.output_format == LOG_FORMAT_JSON
        if (self._verbose or self._ci) and not self._silent:
            console = _OwnedStreamHandler(sys.stdout)
            console.setFormatter(
                _JsonFormatter() if json_format else _PrettyFormatter(self.color and not self._ci)
            )
            self.logger.addHandler(console)
        if self._log_handle is not None:
            file_handler = _OwnedStreamHandler(self._log_handle)
            file_handler.setFormatter(_JsonFormatter() if json_format else _FileFormatter())
            self.logger.addHandler(file_handler)