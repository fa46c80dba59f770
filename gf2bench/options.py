"""Command-line options shared by all benchmark programs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from gf2bench.stats import Confidence

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_UINT64_MASK = (1 << 64) - 1


class OptionError(ValueError):
    """Raised for an unknown or malformed global option."""


@dataclass
class BenchOptions:
    """Settings that control how measurements are repeated and reported."""

    quiet: bool = False
    dump: bool = False
    minimum: int = 2
    maximum: int = 1000
    maxtime: int = 60_000_000
    accuracy: float = 0.01
    confidence: Confidence = Confidence.C99
    stats: int = 1
    dump_counter: int = -1
    count: int = 0
    progname: str = ""
    option_count: int = 0


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _strtod(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def parse_global_options(argv: Sequence[str]) -> tuple[BenchOptions, list[str]]:
    """Parse leading single-letter options from ``argv``.

    ``argv[0]`` is the program name. Parsing stops at the first argument that
    is not a dash followed by exactly one character. Returns the options and
    the remaining arguments, without the program name.
    """
    if not argv:
        raise OptionError("missing program name")
    options = BenchOptions(progname=argv[0])
    args = list(argv[1:])

    def take_value(flag: str) -> str:
        if not args:
            raise OptionError(f"option -{flag} requires a value")
        return args.pop(0)

    while args:
        token = args[0]
        if len(token) != 2 or token[0] != "-":
            break
        flag = token[1]
        args.pop(0)
        if flag == "d":
            options.dump = True
            if args and args[0][:1].isdigit():
                options.dump_counter = _atoi(args.pop(0))
        elif flag == "q":
            options.quiet = True
        elif flag == "m":
            options.minimum = _atoi(take_value(flag))
        elif flag == "n":
            options.maximum = _atoi(take_value(flag))
            if options.maximum < options.minimum:
                options.minimum = options.maximum
        elif flag == "t":
            options.maxtime = int(1_000_000 * _strtod(take_value(flag)))
        elif flag == "a":
            options.accuracy = _strtod(take_value(flag))
        elif flag == "c":
            percent = _atoi(take_value(flag))
            try:
                options.confidence = Confidence(percent)
            except ValueError:
                raise OptionError(
                    "The only possible confidence percentages are 80, 90, 95, 98 and 99%"
                ) from None
        elif flag == "x":
            options.count = _atoi(take_value(flag)) & _UINT64_MASK
        elif flag == "s":
            options.stats = _atoi(take_value(flag))
        else:
            raise OptionError(f"unknown option -{flag}")
        options.option_count += 1
    return options, args


def global_options_help() -> str:
    """Text describing the global options."""
    lines = [
        "OPTIONS",
        "  -m <minimum>      Do at least <minimum> number of measurements. Default 2.",
        "  -n <maximum>      Do at most <maximum> number of measurements. Default 1000.",
        "  -t <max-time>     Stop after <max-time> seconds. Default 60.0 seconds.",
        "  -a <accuracy>     Stop after <accuracy> has been reached. Default 0.01 (= 1%).",
        "  -c <confidence>   Stop when accuracy has been reached with this confidence. "
        "Default 99 (%).",
        "  -s <counter>      Counter to perform statistic over (0: realtime, 1: cpuclocks. "
        "Default: 1).",
        "  -x <loop-count>   Call function <loop-count> times in the inner most loop (calls "
        "per measurement).",
        "  -d [<counter>]    Dump measurements. Dump all or only <counter> when given.",
        "  -q                Quiet. Suppress printing of statistics.",
    ]
    return "\n".join(lines) + "\n"