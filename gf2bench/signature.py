"""Registry of benchmarked functions and decoding of their command-line arguments."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Sequence

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

# Matrix sizes are asked for in this order whenever new ones appear.
_SIZE_ORDER = ("m", "n", "k", "l")
_INDEX_KINDS = {"r": "row", "c": "column", "w": "word"}
_MAX_INDICES = 3


class UsageError(ValueError):
    """Raised when a function name or its arguments do not fit its signature.

    ``usage`` holds the argument synopsis (or the list of known functions)
    that should be shown to the user.
    """

    def __init__(self, message: str, usage: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.usage = usage


@dataclass(frozen=True)
class FunctionSpec:
    """A benchmarkable function, its argument codes, cost model and default loop count.

    ``input_codes`` is a comma separated list. An upper-case code stands for a
    matrix whose following letters name its dimensions (``k``, ``l``, ``m``,
    ``n``, or ``1``). ``ri``, ``ci`` and ``wi`` are row, column and word
    indices; ``b`` is a boolean, ``n`` an integer and ``w`` a word.
    """

    name: str
    input_codes: str
    complexity_code: str
    count: int


@dataclass
class TestParams:
    """Parameter values decoded from the command line for one function."""

    __test__ = False

    funcname: str
    m: int = 0
    n: int = 0
    k: int = 0
    l: int = 0
    rows: list[int] = field(default_factory=list)
    cols: list[int] = field(default_factory=list)
    words: list[int] = field(default_factory=list)
    boolean: int = 0
    integer: int = 0
    count: int = 0
    cutoff: int = -1
    seen_sizes: list[str] = field(default_factory=list)


_FUNCTIONS: tuple[FunctionSpec, ...] = (
    FunctionSpec("_mzd_row_swap", "Rmn,ri,ri,wi", "W", 1000000000),
    FunctionSpec("mzd_row_swap", "Rmn,ri,ri", "n", 1000000000),
    FunctionSpec("mzd_copy_row", "Omn,ri,R,ri", "n", 1000000000),
    FunctionSpec("mzd_col_swap", "Rmn,ci,ci", "m", 10000000),
    FunctionSpec("mzd_col_swap_in_rows", "Rmn,ci,ci,ri,ri", "D", 10000000),
    FunctionSpec("mzd_read_bit", "Rmn,ri,ci", "", 100000000),
    FunctionSpec("mzd_write_bit", "Omn,ri,ci", "", 100000000),
    FunctionSpec("mzd_row_add_offset", "Rmn,ri,ri,ci", "C", 100000000),
    FunctionSpec("mzd_row_add", "Rmn,ri,ri", "n", 100000000),
    FunctionSpec("mzd_transpose", "Onm,Rmn", "mn", 10000000),
    FunctionSpec("mzd_mul_naive", "Omn,Rml,Rln", "mnl", 10000000),
    FunctionSpec("mzd_addmul_naive", "Omn,Rml,Rln", "mnl", 10000000),
    FunctionSpec("_mzd_mul_naive", "Omn,Rml,Rnl,b", "mnl", 10000000),
    FunctionSpec("_mzd_mul_va", "O1n,V1m,Amn,b", "mn", 1000000000),
    FunctionSpec("mzd_gauss_delayed", "Rmn,ci,b", "mC", 10000000),
    FunctionSpec("mzd_echelonize_naive", "Rmn,b", "mn", 10000000),
    FunctionSpec("mzd_equal", "Rmn,Rmn", "mn", 1000000000),
    FunctionSpec("mzd_cmp", "Rmn,Rmn", "mn", 1000000000),
    FunctionSpec("mzd_copy", "Omn,Rmn", "mn", 1000000000),
    FunctionSpec("mzd_concat", "Omn,Rmk,Rml", "mn", 10000000),
    FunctionSpec("mzd_stack", "Omn,Rkn,Rln", "mn", 1000000000),
    FunctionSpec("mzd_submatrix", "O,Rmn,ri,ci,ri,ci", "DE", 10000000),
    FunctionSpec("mzd_invert_naive", "Omm,Rmm,Imm", "mmm", 10000000),
    FunctionSpec("mzd_add", "Omn,Rmn,Rmn", "mn", 10000000),
    FunctionSpec("_mzd_add", "Omn,Rmn,Rmn", "mn", 10000000),
    FunctionSpec("mzd_combine", "Omn,ri,wi,R,ri,R,ri", "W", 10000000),
    FunctionSpec("mzd_read_bits", "Rmn,ri,ci,n", "", 10000000),
    FunctionSpec("mzd_read_bits_int", "Rmn,ri,ci,n", "", 10000000),
    FunctionSpec("mzd_xor_bits", "Rmn,ri,ci,n,w", "", 10000000),
    FunctionSpec("mzd_and_bits", "Rmn,ri,ci,n,w", "", 10000000),
    FunctionSpec("mzd_clear_bits", "Rmn,ri,ci,n", "", 10000000),
    FunctionSpec("mzd_is_zero", "Rmn", "mn", 10000000),
    FunctionSpec("mzd_find_pivot", "Rmn,ri,ci", "", 1000000),
    FunctionSpec("mzd_density", "Rmn,wi", "", 10000000),
    FunctionSpec("_mzd_density", "Rmn,wi,ri,ci", "", 10000000),
    FunctionSpec("mzd_first_zero_row", "Rmm", "m", 10000000000),
    FunctionSpec("nothing", "", "", 1),
)

_BY_NAME = {spec.name: spec for spec in _FUNCTIONS}


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def function_names() -> tuple[str, ...]:
    """Names of all benchmarkable functions, in table order."""
    return tuple(spec.name for spec in _FUNCTIONS)


def _function_listing() -> str:
    names = function_names()
    lines = [
        "".join(f"{name:<22}" for name in names[start:start + 4])
        for start in range(0, len(names), 4)
    ]
    return "Possible values for <funcname>:\n" + "\n".join(lines) + "\n"


def find_function(name: str) -> FunctionSpec:
    """The specification of function ``name``; raises UsageError if unknown."""
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UsageError(
            f'function name "{name}" not found.', _function_listing()
        ) from None


def split_input_codes(codes: str) -> list[str]:
    """Split a comma separated list of input codes."""
    return codes.split(",") if codes else []


class _Decoder:
    """Consumes command-line arguments according to a function's input codes."""

    def __init__(self, spec: FunctionSpec, args: Sequence[str]) -> None:
        self.params = TestParams(funcname=spec.name)
        self.args = list(args)
        self.usage: list[str] = []
        self.error: str | None = None
        self.index_counts = {"r": 0, "c": 0, "w": 0}

    def _fail(self, message: str) -> None:
        if self.error is None:
            self.error = message

    def _next(self) -> str | None:
        return self.args.pop(0) if self.args else None

    def size(self, var: str) -> None:
        self.usage.append(var)
        if self.error is not None:
            return
        value = self._next()
        if value is None:
            self._fail(f"Not enough arguments. Expected matrix size: {var}")
            return
        setattr(self.params, var, _atoi(value))

    def index(self, kind: str) -> None:
        position = self.index_counts[kind] + 1
        self.index_counts[kind] = position
        self.usage.append(f"{kind}{position}")
        if self.error is not None:
            return
        value = self._next()
        if value is None:
            self._fail(
                f"Not enough arguments. Expected {_INDEX_KINDS[kind]} index : {kind}{position}"
            )
            return
        if position > _MAX_INDICES:
            self._fail(f"Too many {_INDEX_KINDS[kind]} indices.")
            return
        target = {"r": self.params.rows, "c": self.params.cols, "w": self.params.words}[kind]
        target.append(_atoi(value))

    def scalar(self, code: str) -> None:
        self.usage.append(code)
        if self.error is not None:
            return
        value = self._next()
        if value is None:
            expected = {"b": "boolean", "n": "integer"}.get(code, code)
            self._fail(f"Not enough arguments. Expected {expected}.")
            return
        if code == "b":
            flag = _atoi(value)
            if flag not in (0, 1):
                self._fail(f"Expected boolean: {value}")
                return
            self.params.boolean = flag
        elif code == "n":
            self.params.integer = _atoi(value)


def decode_arguments(spec: FunctionSpec, args: Sequence[str]) -> TestParams:
    """Decode ``args`` according to the input codes of ``spec``.

    Matrix sizes are requested when first met, in the order m, n, k, l, just
    before the next non-matrix code. Raises UsageError, carrying the full
    argument synopsis, when arguments are missing, invalid or left over.
    """
    decoder = _Decoder(spec, args)
    pending: set[str] = set()
    seen: list[str] = []

    def flush_sizes() -> None:
        for var in _SIZE_ORDER:
            if var in pending and var not in seen:
                seen.append(var)
                decoder.size(var)
        pending.clear()

    for code in split_input_codes(spec.input_codes):
        if code[:1].isupper():
            pending.update(ch for ch in code[1:] if ch != "1")
            continue
        flush_sizes()
        if code[1:2] == "i":
            decoder.index(code[0])
        else:
            decoder.scalar(code[0])
    flush_sizes()

    decoder.params.seen_sizes = seen
    usage = "".join(f" {part}" for part in decoder.usage)
    if decoder.args:
        raise UsageError(f"{spec.name}: too many parameters.", usage)
    if decoder.error is not None:
        raise UsageError(decoder.error, usage)
    return decoder.params