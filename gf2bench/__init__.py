"""Benchmark engine with statistical stopping rules, cycle counting and GF(2) matrix benchmark signatures."""

__version__ = "0.1.0"

__all__ = [
    "complexity",
    "cpucycles",
    "options",
    "randomness",
    "runner",
    "signature",
    "stats",
    "timing",
]