"""Constant-space streaming statistics for one benchmark metric."""
from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, TextIO

from benchstats.errors import EmptyStatGroupError, ReportWriteError

logger = logging.getLogger(__name__)

SUMMARY_FORMAT = (
    "min: {min:8.2f}ms ({min_rate:7.2f}/sec), "
    "mean: {mean:8.2f}ms ({mean_rate:7.2f}/sec), "
    "max: {max:7.2f}ms ({max_rate:6.2f}/sec), "
    "stddev: {std_dev:8.2f}, "
    "sum: {sum_sec:5.1f}sec"
)


def _rate(value_ms: float) -> float:
    """Operations per second for a duration in milliseconds."""
    if value_ms == 0:
        return math.copysign(math.inf, value_ms)
    return 1e3 / value_ms


class StatGroup:
    """Running min/max/mean/sum/stddev over an unbounded stream of values.

    Memory use is constant: only the running fields are kept.  The variance
    uses Welford's recurrence on the private accumulators ``_m`` and ``_s``;
    ``std_dev`` is the sample (n - 1) standard deviation and is 0 until a
    second value arrives.

    A StatGroup is not synchronized.  Concurrent pushes to one instance are
    a data race; shard per worker and :meth:`merge` afterwards instead.
    """

    def __init__(self) -> None:
        self.min = 0.0
        self.max = 0.0
        self.mean = 0.0
        self.sum = 0.0
        self.count = 0
        self.std_dev = 0.0
        self._m = 0.0
        self._s = 0.0

    def push(self, value: float) -> None:
        value = float(value)
        if self.count == 0:
            self.min = value
            self.max = value
            self.mean = value
            self.sum = value
            self.count = 1

            self._m = value
            self._s = 0.0
            self.std_dev = 0.0
            return

        if value < self.min:
            self.min = value
        if value > self.max:
            self.max = value

        self.sum += value

        # mean from the count before this value
        self.mean = (self.mean * self.count + value) / (self.count + 1)

        self.count += 1

        old_m = self._m
        self._m += (value - old_m) / self.count
        self._s += (value - old_m) * (value - self._m)
        self.std_dev = math.sqrt(self._s / (self.count - 1))

    def push_many(self, values: Iterable[float]) -> None:
        for value in values:
            self.push(value)

    def merge(self, other: "StatGroup") -> None:
        """Fold *other* into self as if its values had been pushed here."""
        if other.count == 0:
            return
        if self.count == 0:
            self._copy_from(other)
            return

        total = self.count + other.count
        delta = other._m - self._m

        self.min = min(self.min, other.min)
        self.max = max(self.max, other.max)
        self.sum += other.sum
        self.mean = (self.mean * self.count + other.mean * other.count) / total
        self._m += delta * other.count / total
        self._s += other._s + delta * delta * self.count * other.count / total
        self.count = total
        self.std_dev = math.sqrt(self._s / (self.count - 1))

    def _copy_from(self, other: "StatGroup") -> None:
        self.min = other.min
        self.max = other.max
        self.mean = other.mean
        self.sum = other.sum
        self.count = other.count
        self.std_dev = other.std_dev
        self._m = other._m
        self._s = other._s

    def to_dict(self) -> Dict[str, float]:
        return {
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "sum": self.sum,
            "count": self.count,
            "std_dev": self.std_dev,
        }

    def render(self) -> str:
        """Human-readable summary line, treating values as milliseconds."""
        if self.count == 0:
            raise EmptyStatGroupError("cannot summarize a StatGroup before any value is pushed")
        return SUMMARY_FORMAT.format(
            min=self.min,
            min_rate=_rate(self.min),
            mean=self.mean,
            mean_rate=_rate(self.mean),
            max=self.max,
            max_rate=_rate(self.max),
            std_dev=self.std_dev,
            sum_sec=self.sum / 1e3,
        )

    def write(self, stream: TextIO) -> None:
        line = self.render()
        try:
            stream.write(line + "\n")
        except OSError as exc:
            logger.warning("Failed to write stat summary: %s", exc)
            raise ReportWriteError(f"failed to write stat summary: {exc}") from exc

    def __str__(self) -> str:
        return (
            f"min: {self.min:f}, max: {self.max:f}, mean: {self.mean:f}, "
            f"count: {self.count:d}, sum: {self.sum:f}, stddev: {self.std_dev:f}"
        )

    def __repr__(self) -> str:
        return f"StatGroup(count={self.count}, mean={self.mean!r}, std_dev={self.std_dev!r})"
