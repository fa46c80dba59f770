import time

from gf2bench.timing import format_cpu_time, format_wall_time, walltime


def test_walltime_is_monotone_enough():
    first = walltime(0)
    time.sleep(0.01)
    second = walltime(0)
    assert first >= 0
    assert second - first >= 5000


def test_walltime_relative_to_start():
    start = walltime(0)
    time.sleep(0.005)
    elapsed = walltime(start)
    assert elapsed >= 2000
    assert elapsed < 10_000_000


def test_wall_time_seconds_format():
    assert format_wall_time(1.0) == "wall time:    1.00000 s"


def test_wall_time_unit_selection():
    assert format_wall_time(0.01).endswith(" s")
    assert format_wall_time(0.001).endswith(" ms")
    assert format_wall_time(0.00001).endswith(" ms")
    assert format_wall_time(0.000001).endswith(" us")


def test_millisecond_value_scaled():
    text = format_wall_time(0.002)
    assert float(text.split(":")[1].split()[0]) == 2.0


def test_cpu_time_uses_same_layout():
    for seconds in (3.0, 0.004, 0.0000002):
        wall = format_wall_time(seconds)
        cpu = format_cpu_time(seconds)
        assert cpu.startswith("cpu time: ")
        assert cpu[len("cpu time"):] == wall[len("wall time"):]