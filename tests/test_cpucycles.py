import pytest

from gf2bench.cpucycles import (
    CycleCounter,
    detect_frequency,
    main,
    parse_clock_mhz,
    parse_cpu_mhz,
    parse_psrinfo_mhz,
    self_test,
)

X86_CPUINFO = (
    "processor\t: 0\n"
    "vendor_id\t: GenuineIntel\n"
    "model name\t: Example CPU\n"
    "cpu MHz\t\t: 2400.000\n"
    "cache size\t: 4096 KB\n"
)

PPC_CPUINFO = "processor\t: 0\ncpu\t\t: 7447A\nclock\t\t: 1000.000000MHz\nrevision\t: 1.2\n"

PSRINFO = (
    "Status of virtual processor 0 as of: 01/01/2000 00:00:00\n"
    "  on-line since 01/01/2000 00:00:00.\n"
    "  The sparcv9 processor operates at 1062 MHz,\n"
    "        and has a sparcv9 floating point processor.\n"
)


def test_parse_cpu_mhz():
    assert parse_cpu_mhz(X86_CPUINFO) == 2400.0


def test_parse_cpu_mhz_missing():
    assert parse_cpu_mhz(PPC_CPUINFO) is None


def test_parse_clock_mhz():
    assert parse_clock_mhz(PPC_CPUINFO) == 1000.0


def test_parse_psrinfo_mhz():
    assert parse_psrinfo_mhz(PSRINFO) == 1062.0


def test_parse_psrinfo_missing():
    assert parse_psrinfo_mhz(X86_CPUINFO) is None


def test_detect_frequency_from_cpu_mhz(tmp_path):
    path = tmp_path / "cpuinfo"
    path.write_text(X86_CPUINFO)
    assert detect_frequency(path) == pytest.approx(2400.0 * 1000000.0)


def test_detect_frequency_from_clock(tmp_path):
    path = tmp_path / "cpuinfo"
    path.write_text(PPC_CPUINFO)
    assert detect_frequency(path) == pytest.approx(1000.0 * 1000000.0)


def test_detect_frequency_without_match(tmp_path):
    path = tmp_path / "cpuinfo"
    path.write_text("processor\t: 0\n")
    assert detect_frequency(path) == 0.0


def test_per_second_reports_frequency():
    assert CycleCounter(2_000_000_000).per_second() == 2_000_000_000


def test_cycles_never_decrease():
    counter = CycleCounter(3_000_000_000)
    readings = [counter.cycles() for _ in range(200)]
    assert readings == sorted(readings)


def test_negative_frequency_rejected():
    with pytest.raises(ValueError):
        CycleCounter(-1.0)


def test_self_test_fails_for_stopped_counter():
    with pytest.raises(RuntimeError):
        self_test(CycleCounter(0), 10)


def test_self_test_report():
    report = self_test(CycleCounter(1_000_000_000), 100).split()
    assert report[0] == "monotonic"
    assert report[1] == "1000000000"
    assert len(report) == 3 + 64
    assert all(int(value) >= 0 for value in report[3:])


def test_main_fails_without_frequency(capsys):
    assert main(["--frequency", "0"]) == 100
    assert "t[0]" in capsys.readouterr().err