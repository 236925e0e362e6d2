"""Speedup, efficiency and cost of parallel solvers, and their report table."""

from __future__ import annotations

import math
from collections.abc import Sequence

_ESP = "   "
_MENU = "Solver\t\t\t   Time\t\t\t   Speedup\t\t   Efficiency\t\t   Cost\n"
_RULE = "   -----------------------------------------------------------------------------------------------------------------\n"


def _divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0:
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def speedup(seq_time: float, parallel_time: float) -> float:
    """Sequential time divided by parallel time."""
    return _divide(seq_time, parallel_time)


def efficiency(seq_time: float, parallel_time: float, num_threads: int) -> float:
    """Speedup per thread."""
    return _divide(seq_time, parallel_time * num_threads)


def cost(parallel_time: float, num_threads: int) -> float:
    """Parallel time multiplied by the number of threads."""
    return num_threads * parallel_time


def format_metrics(labels: Sequence[str], rows: Sequence[Sequence[float]]) -> str:
    """Render the metrics table: one line per solver label."""
    if len(labels) != len(rows):
        raise ValueError("one row of metrics is needed per label")
    parts = [f"\n{_ESP} {_MENU}", _RULE]
    for label, row in zip(labels, rows):
        cells = "".join(f"{_ESP}{value:f}\t\t" for value in row)
        parts.append(f"{_ESP} {label}\t\t{cells}\n")
    parts.append("\n")
    return "".join(parts)


def print_metrics(labels: Sequence[str], rows: Sequence[Sequence[float]]) -> None:
    """Write the metrics table to standard output."""
    print(format_metrics(labels, rows), end="")