"""Sample statistics used to decide when a benchmark has converged."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class Confidence(Enum):
    """Two-tailed confidence levels supported by the Student t table."""

    C80 = 80
    C90 = 90
    C95 = 95
    C98 = 98
    C99 = 99

    @property
    def percent(self) -> int:
        return self.value

    @property
    def certainty(self) -> float:
        """The two-tailed probability that the mean lies outside the interval."""
        return (100 - self.value) / 100

    @property
    def level(self) -> float:
        """The confidence as a fraction, e.g. 0.99."""
        return 1.0 - self.certainty


_STUDENT_T: dict[Confidence, tuple[float, ...]] = {
    Confidence.C80: (
        3.078, 1.886, 1.638, 1.533, 1.476, 1.440, 1.415, 1.397, 1.383, 1.372, 1.363, 1.356,
        1.350, 1.345, 1.341, 1.337, 1.333, 1.330, 1.328, 1.325, 1.323, 1.321, 1.319, 1.318,
        1.316, 1.315, 1.314, 1.313, 1.311, 1.310, 1.303, 1.296, 1.289, 1.282,
    ),
    Confidence.C90: (
        6.314, 2.920, 2.353, 2.132, 2.015, 1.943, 1.895, 1.860, 1.833, 1.812, 1.796, 1.782,
        1.771, 1.761, 1.753, 1.746, 1.740, 1.734, 1.729, 1.725, 1.721, 1.717, 1.714, 1.711,
        1.708, 1.706, 1.703, 1.701, 1.699, 1.697, 1.684, 1.671, 1.658, 1.645,
    ),
    Confidence.C95: (
        12.706, 4.303, 3.182, 2.776, 2.571, 2.447, 2.365, 2.306, 2.262, 2.228, 2.201, 2.179,
        2.160, 2.145, 2.131, 2.120, 2.110, 2.101, 2.093, 2.086, 2.080, 2.074, 2.069, 2.064,
        2.060, 2.056, 2.052, 2.048, 2.045, 2.042, 2.021, 2.000, 1.980, 1.960,
    ),
    Confidence.C98: (
        31.821, 6.965, 4.541, 3.747, 3.365, 3.143, 2.998, 2.896, 2.821, 2.764, 2.718, 2.681,
        2.650, 2.624, 2.602, 2.583, 2.567, 2.552, 2.539, 2.528, 2.518, 2.508, 2.500, 2.492,
        2.485, 2.479, 2.473, 2.467, 2.462, 2.457, 2.423, 2.390, 2.358, 2.326,
    ),
    Confidence.C99: (
        63.657, 9.925, 5.841, 4.604, 4.032, 3.707, 3.499, 3.355, 3.250, 3.169, 3.106, 3.055,
        3.012, 2.977, 2.947, 2.921, 2.898, 2.878, 2.861, 2.845, 2.831, 2.819, 2.807, 2.797,
        2.787, 2.779, 2.771, 2.763, 2.756, 2.750, 2.704, 2.660, 2.617, 2.576,
    ),
}


@dataclass(frozen=True)
class Normal:
    """Size, mean and sample standard deviation of a set of measurements."""

    size: int
    mean: float
    sigma: float

    def standard_error(self) -> float:
        return self.sigma / math.sqrt(self.size)


def normal_from_samples(samples: Sequence[float], multiplier: float = 1.0) -> Normal:
    """Compute the mean and standard deviation of ``samples`` scaled by ``multiplier``."""
    if not samples:
        raise ValueError("at least one sample is required")
    scaled = [value * multiplier for value in samples]
    size = len(scaled)
    if size < 2:
        return Normal(size=size, mean=scaled[0], sigma=0.0)
    mean = sum(scaled) / size
    squares = sum((value - mean) ** 2 for value in scaled)
    return Normal(size=size, mean=mean, sigma=math.sqrt(squares / (size - 1)))


def t_table(confidence: Confidence, freedoms: int) -> float:
    """Critical value of Student's t for ``freedoms`` degrees of freedom.

    Beyond 30 degrees of freedom the tabulated values at 30, 40, 60 and 120
    are interpolated quadratically; past 120 an exponential decay towards the
    normal-distribution limit is used.
    """
    if freedoms < 1:
        raise ValueError("degrees of freedom must be at least 1")
    row = _STUDENT_T[confidence]
    if freedoms <= 30:
        return row[freedoms - 1]
    if freedoms <= 60:
        i, x1, x2, x3 = 29, 30, 40, 60
    elif freedoms <= 120:
        i, x1, x2, x3 = 30, 40, 60, 120
    else:
        i, x1, x2, x3 = 31, 60, 120, 0
    y1, y2, y3 = row[i], row[i + 1], row[i + 2]
    if freedoms <= 120:
        d = x1 * x1 * (x3 - x2) + x2 * x2 * (x1 - x3) + x3 * x3 * (x2 - x1)
        a = -(x1 * (y3 - y2) + x2 * (y1 - y3) + x3 * (y2 - y1)) / d
        b = (x1 * x1 * (y3 - y2) + x2 * x2 * (y1 - y3) + x3 * x3 * (y2 - y1)) / d
        c = y2 - a * x2 * x2 - b * x2
        return a * freedoms * freedoms + b * freedoms + c
    ln1 = math.log(y2 - y3)
    ln2 = math.log(y1 - y3)
    a = -(ln1 - ln2) / (x1 - x2)
    b = (x1 * ln1 - x2 * ln2) / (x1 - x2)
    return y3 + math.exp(a * freedoms + b)


def bench_precision(sigma: float) -> int:
    """Number of decimals worth printing for a value with spread ``sigma``."""
    if sigma < 1e-10:
        return 12
    log_sigma = int(math.log10(sigma))
    if log_sigma >= 2:
        return 0
    return 2 - log_sigma


def format_double(value: float, precision: int) -> str:
    """Format ``value`` with 0 to 12 decimals; other precisions give an empty string."""
    if not 0 <= precision <= 12:
        return ""
    return f"{value:.{precision}f}"