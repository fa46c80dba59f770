"""CPU cycle counting derived from a monotonic clock and the processor frequency."""

from __future__ import annotations

import argparse
import re
import shutil
import subprocess
import sys
import time
from pathlib import Path
from typing import Sequence

_NUMBER = r"([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
_CPU_MHZ = re.compile(r"\s*cpu\s*MHz\s*:\s*" + _NUMBER)
_CLOCK_MHZ = re.compile(r"\s*clock\s*:\s*" + _NUMBER)
_PSRINFO_MHZ = re.compile(r"\s*The\s*\S+\s*processor\s*operates\s*at\s*" + _NUMBER)

_PSRINFO = "/usr/sbin/psrinfo"
_IMPLEMENTATION = "monotonic"


def _first_match(pattern: re.Pattern[str], text: str) -> float | None:
    for line in text.splitlines():
        match = pattern.match(line)
        if match:
            return float(match.group(1))
    return None


def parse_cpu_mhz(text: str) -> float | None:
    """The value of the first ``cpu MHz : <value>`` line, or None."""
    return _first_match(_CPU_MHZ, text)


def parse_clock_mhz(text: str) -> float | None:
    """The value of the first ``clock : <value>MHz`` line, or None."""
    return _first_match(_CLOCK_MHZ, text)


def parse_psrinfo_mhz(text: str) -> float | None:
    """The value of the first ``The <kind> processor operates at <value> MHz`` line, or None."""
    return _first_match(_PSRINFO_MHZ, text)


def _psrinfo_text() -> str | None:
    if shutil.which(_PSRINFO) is None:
        return None
    try:
        completed = subprocess.run(
            [_PSRINFO, "-v"], capture_output=True, text=True, check=False, timeout=10
        )
    except (OSError, subprocess.SubprocessError):
        return None
    return completed.stdout


def detect_frequency(cpuinfo_path: str | Path = "/proc/cpuinfo") -> float:
    """Processor frequency in Hz, or 0.0 when it cannot be determined."""
    try:
        text = Path(cpuinfo_path).read_text(errors="replace")
    except OSError:
        text = None
    if text is not None:
        for parse in (parse_cpu_mhz, parse_clock_mhz):
            mhz = parse(text)
            if mhz is not None:
                return 1000000.0 * mhz
        return 0.0
    report = _psrinfo_text()
    if report is not None:
        mhz = parse_psrinfo_mhz(report)
        if mhz is not None:
            return 1000000.0 * mhz
    return 0.0


class CycleCounter:
    """Counts processor cycles as elapsed monotonic time times the clock frequency."""

    def __init__(self, frequency: float | None = None) -> None:
        if frequency is None:
            frequency = detect_frequency()
        if frequency < 0:
            raise ValueError("frequency must not be negative")
        self._frequency = float(frequency)
        self._milli_hz = round(self._frequency * 1000)

    def cycles(self) -> int:
        """Cycles elapsed since an arbitrary fixed point."""
        return time.perf_counter_ns() * self._milli_hz // 10**12

    def per_second(self) -> int:
        """Cycles per second."""
        return int(self._frequency)


def self_test(counter: CycleCounter, samples: int = 1000) -> str:
    """Check that ``counter`` ticks forward and report its measured rate.

    Raises RuntimeError when the counter goes backwards, does not advance, or
    reports no frequency. Otherwise sleeps one second and returns a line with
    the implementation name, the claimed rate, the measured rate and the first
    successive differences between readings.
    """
    if samples < 1:
        raise ValueError("at least one sample is required")
    readings = [counter.cycles() for _ in range(samples + 1)]
    for index, (before, after) in enumerate(zip(readings, readings[1:])):
        if before > after:
            raise RuntimeError(
                f"t[{index}] = {before}, t[{index + 1}] = {after}, "
                f"cpucycles_persecond() = {counter.per_second()}"
            )
    if readings[0] == readings[-1]:
        raise RuntimeError(
            f"t[0] = {readings[0]}, t[{samples}] = {readings[-1]}, "
            f"cpucycles_persecond() = {counter.per_second()}"
        )
    if counter.per_second() <= 0:
        raise RuntimeError(f"cpucycles_persecond() = {counter.per_second()}")

    tod_start = time.time_ns() // 1000
    cpu_start = counter.cycles()
    time.sleep(1)
    tod_elapsed = time.time_ns() // 1000 - tod_start
    cpu_elapsed = counter.cycles() - cpu_start
    measured = int(cpu_elapsed * 1000000.0 / tod_elapsed) if tod_elapsed else 0

    readings = [counter.cycles() for _ in range(samples + 1)]
    differences = [after - before for before, after in zip(readings, readings[1:])][:64]
    fields = [_IMPLEMENTATION, str(counter.per_second()), str(measured)]
    fields.extend(str(value) for value in differences)
    return " ".join(fields)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the cycle counter self test and print its report."""
    parser = argparse.ArgumentParser(description="Check the CPU cycle counter.")
    parser.add_argument("--cpuinfo", default="/proc/cpuinfo", help="processor information file")
    parser.add_argument("--frequency", type=float, help="clock frequency in Hz")
    args = parser.parse_args(argv)

    frequency = args.frequency if args.frequency is not None else detect_frequency(args.cpuinfo)
    try:
        counter = CycleCounter(frequency)
        report = self_test(counter, 1000)
    except (RuntimeError, ValueError) as error:
        print(error, file=sys.stderr)
        return 100
    print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())