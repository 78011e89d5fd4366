"""CPU and memory profiling of named stages of a run."""

from __future__ import annotations

import logging
import math
import time
import tracemalloc

logger = logging.getLogger(__name__)

CPU_UNITS: dict[str, float] = {
    "ns": 1.0,
    "us": 1e3,
    "ms": 1e6,
    "s": 1e9,
    "hrs": 3.6e12,
}

MEMORY_UNITS: dict[str, float] = {
    "B": float(1),
    "kB": float(1 << 10),
    "MB": float(1 << 20),
    "GB": float(1 << 30),
    "TB": float(1 << 40),
    "PB": float(1 << 50),
}

_TRUE_STRINGS = {"1", "t", "T", "TRUE", "true", "True"}


class _CpuMetric:
    """Measures CPU time of the process, in nanoseconds."""

    type_map = CPU_UNITS
    default_unit = "ms"

    def __init__(self) -> None:
        self._started = 0

    def start(self) -> None:
        self._started = time.process_time_ns()

    def stop(self) -> int:
        return abs(time.process_time_ns() - self._started)


class _MemoryMetric:
    """Measures memory in use by traced allocations, in bytes."""

    type_map = MEMORY_UNITS
    default_unit = "B"

    def __init__(self) -> None:
        self._owns_tracing = False

    def start(self) -> None:
        self._owns_tracing = not tracemalloc.is_tracing()
        if self._owns_tracing:
            tracemalloc.start()

    def stop(self) -> int:
        current, _peak = tracemalloc.get_traced_memory()
        if self._owns_tracing:
            tracemalloc.stop()
            self._owns_tracing = False
        return abs(current)


_METRIC_KINDS = {"cpu": _CpuMetric, "mem": _MemoryMetric}


def _parse_bool(value: bool | str) -> bool:
    if isinstance(value, bool):
        return value
    return str(value) in _TRUE_STRINGS


def _ratio(value: float, divisor: float) -> float:
    if divisor == 0:
        return 0.0 if value == 0 else math.copysign(math.inf, value)
    result = value / divisor
    return 0.0 if math.isnan(result) else result


class Metrics:
    """Profiles stages between start() and stop() when enabled."""

    def __init__(self, disable: bool = True) -> None:
        self.disable = disable
        self.metrics_id = ""
        self.location = ""
        self.total = 0
        self.ci = False
        self._metric: _CpuMetric | _MemoryMetric | None = None

    def initialize(self, metric: str, ci: bool | str) -> None:
        """Select the metric ('cpu', 'mem' or '' to disable); raise ValueError if unknown."""
        self.total = 0
        kind = _METRIC_KINDS.get(metric.lower())
        if kind is None:
            self.disable = True
            if metric:
                raise ValueError(f"unknown metric: {metric} (available metrics: CPU, MEM)")
            return
        self._metric = kind()
        self.disable = False
        self.metrics_id = metric
        self.ci = _parse_bool(ci)

    def start(self, location: str) -> None:
        if self.disable or self._metric is None:
            return
        logger.debug("Started %s profiling for %s", self.metrics_id, location)
        self.location = location
        self._metric.start()

    def stop(self) -> None:
        if self.disable or self._metric is None:
            return
        logger.debug("Stopped %s profiling for %s", self.metrics_id, self.location)
        total = self._metric.stop()
        logger.info(
            "Total %s usage for %s: %s",
            self.metrics_id.upper(),
            self.location,
            self.format_total(total, self._metric.type_map, self._metric.default_unit),
        )
        self.total = total

    def format_total(self, total: int, type_map: dict[str, float], default_metric: str) -> str:
        """Render ``total`` in the largest fitting unit, or in the default unit in CI mode."""
        value = float(total)
        if self.ci:
            metric = _ratio(value, type_map.get(default_metric, 0.0))
            return f"{metric:.0f}{default_metric}"

        best_size, best_unit = 0.0, ""
        for unit, size in type_map.items():
            if size >= best_size and value / size >= 1.0:
                best_size, best_unit = size, unit
        return f"{_ratio(value, best_size):.2f}{best_unit}"


METRIC = Metrics(disable=True)


def initialize_metrics(metric: str, ci: bool | str) -> None:
    """Configure the shared METRIC instance."""
    METRIC.initialize(metric, ci)