"""Wall-clock measurement and human-readable time formatting."""

from __future__ import annotations

import time
from functools import lru_cache


@lru_cache(maxsize=None)
def _base_second() -> int:
    return time.time_ns() // 1_000_000_000


def walltime(t0: int = 0) -> int:
    """Microseconds since the first call's whole second, minus ``t0``."""
    now = time.time_ns()
    seconds, remainder = divmod(now, 1_000_000_000)
    base = _base_second()
    return (seconds - base) * 1_000_000 + remainder // 1000 - t0


def _format_time(label: str, seconds: float) -> str:
    if seconds >= 0.01:
        return f"{label}: {seconds:10.5f} s"
    if seconds >= 0.00001:
        return f"{label}: {1000.0 * seconds:10.5f} ms"
    return f"{label}: {1000000.0 * seconds:10.5f} us"


def format_wall_time(seconds: float) -> str:
    """Describe a wall-clock duration in s, ms or us."""
    return _format_time("wall time", seconds)


def format_cpu_time(seconds: float) -> str:
    """Describe a CPU duration in s, ms or us."""
    return _format_time("cpu time", seconds)