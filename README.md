# gf2bench

A small benchmark engine. It calls a measurement function again and again
until the mean of one of its counters is known to a chosen accuracy at a
chosen confidence, or until a time or count limit is reached, and then
reports a Student-t confidence interval. Around that engine sit a CPU cycle
counter, a seedable random source for reproducible inputs, and a table of
benchmark signatures and cost models for dense GF(2) matrix routines.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `gf2bench.stats`: `Normal` (size, mean and sample standard deviation,
  with `standard_error()`), `normal_from_samples(samples, multiplier)`,
  `t_table(confidence, freedoms)` giving Student-t critical values for the
  levels in the `Confidence` enum (80, 90, 95, 98, 99; interpolated beyond
  30 degrees of freedom), and `bench_precision` / `format_double` for
  printing a value with as many decimals as its spread deserves.
- `gf2bench.options`: `parse_global_options(argv)` reads the leading
  single-letter options into a `BenchOptions` and returns it with the
  remaining arguments; it raises `OptionError` for an unknown option, a
  missing value or an unsupported confidence. `global_options_help()`
  returns the option summary.
- `gf2bench.timing`: `walltime(t0)` in microseconds, and
  `format_wall_time` / `format_cpu_time`, which choose seconds,
  milliseconds or microseconds.
- `gf2bench.randomness`: `BenchRandom(seed)`, which produces the same
  31-bit sequence as a classic `srandom`/`random` pair, 64-bit words built
  from three of those values (`random_word`, optionally bit-reversed), and
  uniform values below a modulus (`set_modulo`, `bounded`); plus
  `reverse_bits64`.
- `gf2bench.runner`: `run_bench(func, options, out)` drives a measurement
  function until the stopping rule is met and returns a `BenchResult`
  (averaged counters, statistics, elapsed time, samples);
  `format_report(result, options)` builds the summary lines. A benchmark
  that returns too few counters, or a maximum below one, raises
  `BenchmarkError`.
- `gf2bench.cpucycles`: `CycleCounter`, which counts cycles as monotonic
  time multiplied by the clock frequency, `detect_frequency`, which reads
  `/proc/cpuinfo` (or the output of `/usr/sbin/psrinfo -v` when that file
  cannot be read), the line parsers `parse_cpu_mhz`, `parse_clock_mhz` and
  `parse_psrinfo_mhz`, and `self_test`.
- `gf2bench.signature`: the `FunctionSpec` table of benchmarkable matrix
  functions, `function_names`, `find_function`, `split_input_codes` and
  `decode_arguments`, which turns command-line arguments into `TestParams`
  or raises `UsageError` carrying the argument synopsis.
- `gf2bench.complexity`: `complexity` and `complexity_human` for the
  operation-count codes, `loop_count` for the number of calls that go into
  one measurement, and `format_result` for the final report line.

## Benchmark options

```
  -m <minimum>      Do at least <minimum> number of measurements. Default 2.
  -n <maximum>      Do at most <maximum> number of measurements. Default 1000.
  -t <max-time>     Stop after <max-time> seconds. Default 60.0 seconds.
  -a <accuracy>     Stop after <accuracy> has been reached. Default 0.01 (= 1%).
  -c <confidence>   Stop when accuracy has been reached with this confidence. Default 99 (%).
  -s <counter>      Counter to perform statistic over (0: realtime, 1: cpuclocks. Default: 1).
  -x <loop-count>   Call function <loop-count> times in the inner most loop (calls per measurement).
  -d [<counter>]    Dump measurements. Dump all or only <counter> when given.
  -q                Quiet. Suppress printing of statistics.
```

## Examples

Measuring a function. The measurement function returns its counters:
counter 0 is wall time in microseconds, counter 1 CPU cycles.

```python
from gf2bench.cpucycles import CycleCounter
from gf2bench.options import parse_global_options
from gf2bench.runner import run_bench
from gf2bench.timing import walltime

counter = CycleCounter(frequency=2.0e9)

def measure():
    t0, c0 = walltime(0), counter.cycles()
    sum(range(10_000))
    return [walltime(t0), counter.cycles() - c0]

options, rest = parse_global_options(["bench", "-n", "50", "-c", "95"])
result = run_bench(measure, options)
print(result.data, result.stats.mean)
```

Decoding the arguments of a matrix benchmark signature:

```python
from gf2bench.signature import find_function, decode_arguments
from gf2bench.complexity import loop_count

spec = find_function("mzd_row_swap")          # input codes "Rmn,ri,ri"
params = decode_arguments(spec, ["100", "200", "3", "4"])
print(params.m, params.n, params.rows)        # 100 200 [3, 4]
print(loop_count(spec, params))               # default count divided by the cost n
```

Small helpers:

```python
from gf2bench.timing import format_wall_time
from gf2bench.randomness import reverse_bits64

print(format_wall_time(0.5))         # wall time:    0.50000 s
print(reverse_bits64(1) == 1 << 63)  # True
```

## Checking the cycle counter

```
gf2bench-cpucycles [--cpuinfo PATH] [--frequency HZ]
```

reads the counter many times in a row, checks that it never goes backwards,
that it advances and that it has a frequency, then sleeps one second and
prints the counter's name, its claimed frequency, the frequency measured
over that second, and the differences between consecutive readings. It
exits with status 100 when a check fails.

## What it does not do

The package holds the signatures, argument decoding and cost models of the
GF(2) matrix functions, but not the matrix routines themselves, and it has
no command that benchmarks a matrix function by name. To measure something,
write a measurement function and hand it to `run_bench`. The cycle counter
is derived from elapsed time and the reported clock frequency; it does not
read hardware cycle or performance counters.