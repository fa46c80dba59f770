"""The measurement loop that repeats a benchmark until its mean is known well enough."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Callable, Sequence, TextIO

from gf2bench.options import BenchOptions
from gf2bench.stats import Normal, bench_precision, format_double, normal_from_samples, t_table
from gf2bench.timing import walltime

_MAX_COUNTERS = 32


class BenchmarkError(RuntimeError):
    """Raised when a benchmark cannot be run or returns unusable measurements."""


@dataclass(frozen=True)
class BenchResult:
    """Averaged counters and statistics of a completed benchmark run."""

    data: tuple[int, ...]
    stats: Normal
    elapsed: int
    samples: tuple[float, ...]


def _multiplier(options: BenchOptions) -> float:
    if options.stats == 0:
        return 0.000001
    return 1.0 / (options.count or 1)


def _critical_value(options: BenchOptions, stats: Normal) -> float:
    if stats.size < 2:
        return 0.0
    return t_table(options.confidence, stats.size - 1)


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def _measure(func: Callable[[], Sequence[int]], options: BenchOptions) -> list[int]:
    data = [int(value) for value in func()][:_MAX_COUNTERS]
    if not 0 <= options.stats < len(data):
        raise BenchmarkError(
            f"counter {options.stats} requested for statistics, "
            f"but the benchmark returned {len(data)} counters"
        )
    return data


def _dump_line(data: Sequence[int], options: BenchOptions) -> str:
    if 0 <= options.dump_counter < len(data):
        return str(data[options.dump_counter])
    return " ".join(str(value) for value in data)


def run_bench(
    func: Callable[[], Sequence[int]],
    options: BenchOptions,
    out: TextIO | None = None,
) -> BenchResult:
    """Call ``func`` repeatedly and average the counters it returns.

    Each call returns a sequence of counters (counter 0 is wall time in
    microseconds, counter 1 CPU cycles). Measuring stops once the mean of
    counter ``options.stats`` is known to within ``options.accuracy`` at the
    chosen confidence, when ``options.maxtime`` microseconds have passed, or
    after ``options.maximum`` measurements.
    """
    if out is None:
        out = sys.stdout
    if options.maximum < 1:
        raise BenchmarkError("the maximum number of measurements must be at least 1")

    multiplier = _multiplier(options)
    sums = [0] * _MAX_COUNTERS
    samples: list[float] = []
    data_len = 0
    start = walltime(0)

    for n in range(1, options.maximum + 1):
        if not options.quiet and not options.dump:
            out.write(".")
            out.flush()

        data = _measure(func, options)
        data_len = len(data)

        if options.dump:
            out.write(_dump_line(data, options) + "\n")
            out.flush()

        samples.append(float(data[options.stats]))
        for index, value in enumerate(data):
            sums[index] += value

        if n >= options.minimum:
            stats = normal_from_samples(samples, multiplier)
            spread = stats.standard_error() * _critical_value(options, stats)
            if _ratio(spread, stats.mean) <= options.accuracy or walltime(start) > options.maxtime:
                break

    stats = normal_from_samples(samples, multiplier)
    size = stats.size
    averaged = tuple((total + size // 2) // size for total in sums[:data_len])
    result = BenchResult(
        data=averaged,
        stats=stats,
        elapsed=walltime(start),
        samples=tuple(samples),
    )

    if not options.quiet:
        if not options.dump:
            out.write("\n")
        out.write(format_report(result, options))
        out.flush()
    return result


def format_report(result: BenchResult, options: BenchOptions) -> str:
    """Summary lines: running time, sample statistics and confidence interval."""
    stats = result.stats
    precision = bench_precision(stats.sigma)
    accuracy = stats.standard_error() * _critical_value(options, stats)
    percent = _ratio(accuracy, stats.mean) * 100
    lines = [
        f"Total running time: {result.elapsed / 1000000.0:6.3f} seconds.",
        f"Sample size: {stats.size}; mean: {format_double(stats.mean, precision)}; "
        f"standard deviation: {format_double(stats.sigma, precision)}",
        f"{options.confidence.level * 100:2.0f}% confidence interval: +/- "
        f"{format_double(accuracy, precision)} ({percent:.1f}%): "
        f"[{format_double(stats.mean - accuracy, precision)}.."
        f"{format_double(stats.mean + accuracy, precision)}]",
    ]
    return "\n".join(lines) + "\n"