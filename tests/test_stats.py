import math
import statistics

import pytest

from gf2bench.stats import (
    Confidence,
    Normal,
    bench_precision,
    format_double,
    normal_from_samples,
    t_table,
)


@pytest.mark.parametrize(
    "percent,certainty",
    [(80, 0.2), (90, 0.1), (95, 0.05), (98, 0.02), (99, 0.01)],
)
def test_confidence_certainty_matches_percent(percent, certainty):
    level = Confidence(percent)
    assert level.certainty == pytest.approx(certainty)
    assert level.certainty + level.level == pytest.approx(1.0)
    assert level.level * 100 == pytest.approx(level.percent)
    assert level.percent == pytest.approx(percent)


def test_confidence_from_percent_rejects_unknown():
    assert Confidence(95) is Confidence.C95
    with pytest.raises(ValueError):
        Confidence(50)


def test_single_sample_has_zero_sigma():
    result = normal_from_samples([4.0], 0.5)
    assert result.size == 1
    assert result.mean == 2.0
    assert result.sigma == 0.0


def test_normal_matches_statistics_module():
    samples = [3.0, 7.0, 1.0, 9.0, 4.0]
    result = normal_from_samples(samples, 1.0)
    assert result.size == 5
    assert result.mean == pytest.approx(statistics.mean(samples))
    assert result.sigma == pytest.approx(statistics.stdev(samples))


def test_multiplier_scales_mean_and_sigma():
    samples = [10.0, 20.0, 30.0]
    base = normal_from_samples(samples, 1.0)
    scaled = normal_from_samples(samples, 1e-6)
    assert scaled.mean == pytest.approx(base.mean * 1e-6)
    assert scaled.sigma == pytest.approx(base.sigma * 1e-6)


def test_empty_samples_rejected():
    with pytest.raises(ValueError):
        normal_from_samples([], 1.0)


def test_standard_error():
    dist = Normal(size=4, mean=1.0, sigma=2.0)
    assert dist.standard_error() == pytest.approx(2.0 / math.sqrt(4))


def test_t_table_reads_table_directly():
    assert t_table(Confidence.C99, 1) == pytest.approx(63.657)
    assert t_table(Confidence.C80, 30) == pytest.approx(1.310)


@pytest.mark.parametrize(
    "freedoms,expected",
    [(40, 2.704), (60, 2.660), (120, 2.617)],
)
def test_t_table_interpolation_hits_tabulated_points(freedoms, expected):
    assert t_table(Confidence.C99, freedoms) == pytest.approx(expected)


def test_t_table_rejects_zero_freedoms():
    with pytest.raises(ValueError):
        t_table(Confidence.C90, 0)


def test_bench_precision_limits():
    assert bench_precision(0.0) == 12
    assert bench_precision(100.0) == 0


def test_bench_precision_non_increasing():
    sigmas = [1e-9, 1e-6, 1e-3, 0.05, 0.5, 5.0, 50.0, 5000.0]
    precisions = [bench_precision(s) for s in sigmas]
    assert all(a >= b for a, b in zip(precisions, precisions[1:]))
    assert all(0 <= p <= 12 for p in precisions)


def test_format_double_decimals():
    for precision in range(13):
        text = format_double(3.25, precision)
        decimals = text.split(".")[1] if "." in text else ""
        assert len(decimals) == precision
        assert float(text) == pytest.approx(3.25, abs=10 ** -precision)


def test_format_double_out_of_range_is_empty():
    assert format_double(1.0, 13) == ""
    assert format_double(1.0, -1) == ""