"""Cost model of benchmarked functions and the report line of a measurement."""

from __future__ import annotations

import math
from itertools import groupby
from typing import Sequence

from gf2bench.signature import FunctionSpec, TestParams
from gf2bench.timing import format_wall_time

_RADIX = 64
_SIZE_ORDER = ("m", "n", "k", "l")
_HUMAN = {
    "k": "k",
    "l": "l",
    "m": "m",
    "n": "n",
    "W": "cols",
    "D": "rows",
    "E": "cols",
    "C": "cols",
}


def _first(values: Sequence[int], name: str, needed: int = 1) -> Sequence[int]:
    if len(values) < needed:
        raise ValueError(f"the cost model needs {needed} {name} value(s)")
    return values


def _factor(params: TestParams, code: str) -> float:
    """Size that the work of one operation grows linearly with."""
    if code in ("k", "l", "m", "n"):
        return float(getattr(params, code))
    if code == "W":
        words = _first(params.words, "word index")
        if not params.n > _RADIX * words[0]:
            raise ValueError("word index must lie inside the row")
        return float(params.n - _RADIX * words[0])
    if code == "D":
        rows = _first(params.rows, "row index", 2)
        if not rows[0] < rows[1]:
            raise ValueError("start row must be below stop row")
        return float(rows[1] - rows[0])
    if code == "E":
        cols = _first(params.cols, "column index", 2)
        if not cols[0] < cols[1]:
            raise ValueError("start column must be below stop column")
        return float(cols[1] - cols[0])
    if code == "C":
        cols = _first(params.cols, "column index")
        if not cols[0] < params.n:
            raise ValueError("column index must lie inside the matrix")
        return float(params.n - cols[0])
    return 0.0


def complexity(params: TestParams, code: str) -> float:
    """A number proportional to the ideal operation count described by ``code``."""
    return math.prod((_factor(params, letter) for letter in code), start=1.0)


def complexity_human(code: str) -> str:
    """Readable form of a complexity code, with repeated letters as powers."""
    parts = []
    for letter, run in groupby(code):
        power = sum(1 for _ in run)
        name = _HUMAN.get(letter, "UNKNOWN")
        parts.append(f"{name}^{power}" if power > 1 else name)
    return "".join(parts)


def loop_count(spec: FunctionSpec, params: TestParams, requested: int = 0) -> int:
    """Calls per measurement: ``requested`` if given, else the default scaled by cost."""
    if requested:
        count = requested
    else:
        cost = complexity(params, spec.complexity_code)
        if cost <= 0:
            raise ValueError("the cost of the function must be positive")
        count = int(spec.count / cost)
    return max(count, 1)


def _divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0:
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def format_result(
    spec: FunctionSpec, params: TestParams, data: Sequence[int], cost: float
) -> str:
    """The one-line report for a measured function, ending in a newline.

    ``data`` holds the averaged wall time in microseconds and CPU cycles of
    ``params.count`` calls; ``cost`` is the function's complexity.
    """
    if len(data) < 2:
        raise ValueError("wall time and cpu cycles are required")
    count = params.count
    if count < 1:
        raise ValueError("the loop count must be at least 1")

    fields = [f"function: {params.funcname}", f"count: {count}"]
    fields.extend(
        f"{var}: {getattr(params, var)}" for var in _SIZE_ORDER if var in params.seen_sizes
    )
    for position, suffix in enumerate("abc"):
        if position < len(params.rows):
            fields.append(f"row{suffix}: {params.rows[position]}")
        if position < len(params.cols):
            fields.append(f"col{suffix}: {params.cols[position]}")
        if position < len(params.words):
            fields.append(f"word{suffix}: {params.words[position]}")
    if params.cutoff != -1:
        fields.append(f"cutoff: {params.cutoff}")
    fields.append(format_wall_time(data[0] / 1000000.0 / count))
    fields.append(f"cpu cycles: {(data[1] + count // 2) // count}")
    per_op = _divide(float(data[1]), count * cost)
    fields.append(f"cc/{complexity_human(spec.complexity_code)}: {per_op:f}")
    return ", ".join(fields) + "\n"