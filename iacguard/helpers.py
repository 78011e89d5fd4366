"""Console helpers: progress bar, coloured output, config detection and paths."""

from __future__ import annotations

import json
import logging
import math
import os
import re
import sys
import tomllib
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TextIO

import yaml

logger = logging.getLogger(__name__)

REPORT_FORMATS = ("json", "sarif", "html", "glsast", "pdf")

_HUNDRED_PERCENT = 100


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class ProgressBar:
    """A textual progress bar redrawn in place on a writer.

    ``writer`` set to None discards the bar.
    """

    def __init__(
        self,
        label: str,
        space: int,
        total: float,
        writer: TextIO | None = sys.stdout,
    ) -> None:
        self.label = label
        self.space = space
        self.total = total
        self.writer = writer
        self.current_progress = 0.0

    def _line(self, first: str, percentage: float, second: str) -> str:
        return f"\r{self.label}[{first} {percentage:4.1f}% {second}]"

    def start(self, progress: Iterable[float]) -> None:
        """Consume progress increments and redraw the bar until the total is reached."""
        if self.writer is not None:
            increments = iter(progress)
            full = "=" * self.space
            while True:
                step = next(increments, None)
                self.current_progress += step or 0.0
                if step is None or self.current_progress >= self.total:
                    self.writer.write(self._line(full, 100.0, full))
                    break
                percentage = self.current_progress / self.total * _HUNDRED_PERCENT
                converted = _round_half_away(
                    (2 * self.space) / _HUNDRED_PERCENT * _round_half_away(percentage)
                )
                if percentage >= _HUNDRED_PERCENT / 2:
                    first = full
                    second = "=" * (converted - self.space) + " " * (2 * self.space - converted)
                else:
                    second = " " * self.space
                    first = "=" * converted + " " * (self.space - converted)
                self.writer.write(self._line(first, percentage, second))
            self.writer.flush()
        print()


def _hex_to_rgb(value: str) -> tuple[int, int, int]:
    digits = value.lstrip("#")
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


@dataclass
class Printer:
    """Colours console output by result severity."""

    minimal: bool = False
    color: bool = True
    medium: str = "#ff7213"
    high: str = "#bb2124"
    low: str = "#edd57e"
    info: str = "#5bc0de"
    success: str = "#22bb33"
    line: str = "#f0ad4e"

    def _paint(self, content: str, hex_color: str) -> str:
        if not self.color:
            return content
        red, green, blue = _hex_to_rgb(hex_color)
        return f"\x1b[38;2;{red};{green};{blue}m{content}\x1b[0m"

    def print_by_sev(self, content: str, sev: str) -> str:
        """Return ``content`` coloured for the severity ``sev``; unknown severities stay plain."""
        colours = {
            "HIGH": self.high,
            "MEDIUM": self.medium,
            "LOW": self.low,
            "INFO": self.info,
        }
        hex_color = colours.get(sev.upper())
        if hex_color is None:
            return content
        return self._paint(content, hex_color)


def word_wrap(text: str, indentation: str, limit: int) -> str:
    """Wrap ``text`` every ``limit`` words, prefixing each line with ``indentation``."""
    if not text.strip():
        return text
    if limit < 1:
        raise ValueError("word limit must be at least 1")
    words = text.split()
    return "".join(
        f"{indentation}{' '.join(words[start:start + limit])}\r\n"
        for start in range(0, len(words), limit)
    )


# --- minimal HCL reader, used only to recognise HCL configuration files ---

_HCL_LEXEME = re.compile(
    r"""
     (?P<ws>\s+)
    |(?P<comment>\#[^\n]*|//[^\n]*|/\*.*?\*/)
    |(?P<heredoc><<-?(?P<tag>[A-Za-z_][A-Za-z0-9_]*)[ \t]*\n)
    |(?P<string>"(?:[^"\\\n]|\\.)*")
    |(?P<number>-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)
    |(?P<ident>[A-Za-z_][A-Za-z0-9_\-.]*)
    |(?P<punct>[=\[\]{},])
    """,
    re.VERBOSE | re.DOTALL,
)


def _hcl_lex(text: str) -> list[tuple[str, Any]]:
    lexemes: list[tuple[str, Any]] = []
    pos = 0
    while pos < len(text):
        match = _HCL_LEXEME.match(text, pos)
        if match is None:
            raise ValueError(f"unexpected character at offset {pos}")
        kind = match.lastgroup
        pos = match.end()
        if kind == "tag":
            kind = "heredoc"
        if kind in ("ws", "comment"):
            continue
        if kind == "heredoc":
            tag = match.group("tag")
            closing = re.compile(rf"^[ \t]*{re.escape(tag)}[ \t]*$", re.MULTILINE).search(text, pos)
            if closing is None:
                raise ValueError(f"unterminated heredoc {tag}")
            lexemes.append(("string", text[pos:closing.start()]))
            pos = closing.end()
        elif kind == "string":
            try:
                lexemes.append(("string", json.loads(match.group())))
            except json.JSONDecodeError as err:
                raise ValueError(f"invalid string literal: {err}") from err
        elif kind == "number":
            raw = match.group()
            lexemes.append(("number", float(raw) if any(c in raw for c in ".eE") else int(raw)))
        else:
            lexemes.append((kind, match.group()))
    return lexemes


class _HclParser:
    def __init__(self, text: str) -> None:
        self._lexemes = _hcl_lex(text)
        self._pos = 0

    def _peek(self) -> tuple[str, Any] | None:
        return self._lexemes[self._pos] if self._pos < len(self._lexemes) else None

    def _take(self) -> tuple[str, Any]:
        item = self._peek()
        if item is None:
            raise ValueError("unexpected end of input")
        self._pos += 1
        return item

    def _expect(self, punct: str) -> None:
        kind, value = self._take()
        if kind != "punct" or value != punct:
            raise ValueError(f"expected {punct!r}, got {value!r}")

    def parse(self) -> dict[str, Any]:
        body = self._body(closing=None)
        if self._peek() is not None:
            raise ValueError("unexpected trailing input")
        return body

    def _at(self, punct: str) -> bool:
        item = self._peek()
        return item is not None and item == ("punct", punct)

    def _body(self, closing: str | None) -> dict[str, Any]:
        result: dict[str, Any] = {}
        while self._peek() is not None and not (closing and self._at(closing)):
            keys = []
            while (item := self._peek()) is not None and item[0] in ("ident", "string"):
                keys.append(str(self._take()[1]))
            if not keys:
                raise ValueError(f"expected key, got {self._peek()!r}")
            if self._at("="):
                if len(keys) != 1:
                    raise ValueError("nested object expected before '='")
                self._take()
                value = self._value()
            elif self._at("{"):
                value = self._object()
            else:
                raise ValueError(f"expected '=' or '{{' after {keys[-1]!r}")
            for key in reversed(keys[1:]):
                value = {key: value}
            result[keys[0]] = value
            if self._at(","):
                self._take()
        return result

    def _object(self) -> dict[str, Any]:
        self._expect("{")
        body = self._body(closing="}")
        self._expect("}")
        return body

    def _list(self) -> list[Any]:
        self._expect("[")
        items: list[Any] = []
        while not self._at("]"):
            items.append(self._value())
            if self._at(","):
                self._take()
            elif not self._at("]"):
                raise ValueError("expected ',' or ']' in list")
        self._expect("]")
        return items

    def _value(self) -> Any:
        item = self._peek()
        if item is None:
            raise ValueError("unexpected end of input")
        kind, value = item
        if kind in ("string", "number"):
            self._take()
            return value
        if kind == "ident" and value in ("true", "false"):
            self._take()
            return value == "true"
        if item == ("punct", "["):
            return self._list()
        if item == ("punct", "{"):
            return self._object()
        raise ValueError(f"unexpected value {value!r}")


def _is_json(text: str) -> bool:
    try:
        data = json.loads(text)
    except ValueError:
        return False
    return data is None or isinstance(data, dict)


def _is_yaml(text: str) -> bool:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return False
    return data is None or isinstance(data, dict)


def _is_toml(text: str) -> bool:
    try:
        tomllib.loads(text)
    except tomllib.TOMLDecodeError:
        return False
    return True


def _is_hcl(text: str) -> bool:
    try:
        _HclParser(text).parse()
    except ValueError:
        return False
    return True


def file_analyzer(path: str) -> str:
    """Return the format of a configuration file ('json', 'yaml', 'toml' or 'hcl') from its content."""
    with open(os.path.normpath(path), "rb") as handle:
        text = handle.read().decode("utf-8", errors="replace")
    for name, check in (("json", _is_json), ("yaml", _is_yaml), ("toml", _is_toml), ("hcl", _is_hcl)):
        if check(text):
            return name
    raise ValueError("invalid configuration file format")


def get_executable_directory() -> str:
    """Return the directory that holds the running program."""
    logger.debug("helpers.get_executable_directory()")
    program = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    return os.path.dirname(os.path.abspath(program))


def _join(base: str, relative: str) -> str:
    return os.path.normpath(f"{base}{os.sep}{relative}")


def get_default_query_path(queries_path: str) -> str:
    """Find ``queries_path`` next to the program, else under the working directory."""
    logger.debug("helpers.get_default_query_path()")
    directory = _join(get_executable_directory(), queries_path)
    if not os.path.exists(directory):
        directory = _join(os.getcwd(), queries_path)
        if not os.path.exists(directory):
            raise FileNotFoundError(f"no such file or directory: {directory}")
    logger.debug("Queries found in %s", directory)
    return directory


def list_report_formats() -> list[str]:
    """Return every supported report format."""
    return list(REPORT_FORMATS)


def validate_report_formats(formats: Iterable[str]) -> None:
    """Raise ValueError if any of ``formats`` is not a supported report format."""
    logger.debug("helpers.validate_report_formats()")
    for fmt in formats:
        if fmt not in REPORT_FORMATS:
            supported = "\n".join(REPORT_FORMATS)
            raise ValueError(
                f"Report format not supported: {fmt}\nSupportted formats:\n  {supported}\n"
                "also you can use 'all' to export in all supported formats"
            )