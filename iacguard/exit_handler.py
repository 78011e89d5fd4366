"""Exit code policy derived from scan results and user options."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

IGNORE_CHOICES = ("none", "all", "results", "errors")
SEVERITY_LEVELS = ("high", "medium", "low", "info")

# Checked in this order, so the most severe result decides the exit code.
_SEVERITY_EXIT_CODES = (("HIGH", 50), ("MEDIUM", 40), ("LOW", 30), ("INFO", 20))


def _all_severities() -> frozenset[str]:
    return frozenset(SEVERITY_LEVELS)


@dataclass
class ExitPolicy:
    """Decides which results and errors change the exit code."""

    ignore: str = "none"
    fail_on: frozenset[str] = field(default_factory=_all_severities)

    def set_ignore(self, arg: str) -> None:
        """Set which kind of non-zero exit is ignored; raise ValueError if unknown."""
        lowered = arg.lower()
        if lowered not in IGNORE_CHOICES:
            choices = "\n  ".join(IGNORE_CHOICES)
            raise ValueError(
                f"unknown argument for --ignore-on-exit: {arg}\nvalid arguments:\n  {choices}"
            )
        self.ignore = lowered

    def set_fail_on(self, args: Iterable[str]) -> None:
        """Set which severities make the exit code non-zero; empty means all."""
        args = list(args)
        if not args:
            self.fail_on = _all_severities()
            return
        selected = set()
        for arg in args:
            lowered = arg.lower()
            if lowered not in SEVERITY_LEVELS:
                choices = "\n  ".join(SEVERITY_LEVELS)
                raise ValueError(
                    f"unknown argument for --fail-on: {arg}\nvalid arguments:\n  {choices}"
                )
            selected.add(lowered)
        self.fail_on = frozenset(selected)

    def results_exit_code(self, severity_counters: Mapping[str, int]) -> int:
        """Return the exit code for the given per-severity result counts, 0 if none apply."""
        for severity, code in _SEVERITY_EXIT_CODES:
            if severity.lower() not in self.fail_on:
                continue
            if severity_counters.get(severity, 0) > 0:
                return code
        return 0

    def show_error(self, kind: str) -> bool:
        """Return True if exits of the given kind should not be ignored."""
        ignore = self.ignore.lower()
        return ignore == "none" or (ignore != "all" and ignore != kind.lower())