"""Reproducible random numbers matching the classic additive-feedback ``random()``."""

from __future__ import annotations

from collections import deque

_MASK32 = 0xFFFFFFFF
_MASK64 = (1 << 64) - 1
_DEGREE = 31
_SEPARATION = 3
_DISCARD = 310


def reverse_bits64(value: int) -> int:
    """Reverse the order of the 64 bits of ``value``."""
    return int(f"{value & _MASK64:064b}"[::-1], 2)


class BenchRandom:
    """Random source seeded like ``srandom`` and producing ``random()`` values."""

    def __init__(self, seed: int = 1) -> None:
        seed &= _MASK32
        if seed == 0:
            seed = 1
        state = [seed]
        word = seed
        for _ in range(1, _DEGREE):
            hi, lo = divmod(word, 127773)
            word = 16807 * lo - 2836 * hi
            if word < 0:
                word += 2147483647
            state.append(word)
        state.extend(state[:_SEPARATION])
        self._state: deque[int] = deque(state, maxlen=_DEGREE + _SEPARATION)
        for _ in range(_DISCARD):
            self._advance()
        self._modulo = 0
        self._limit = _MASK64
        self.set_modulo(0)

    def _advance(self) -> int:
        value = (self._state[-_DEGREE] + self._state[-_SEPARATION]) & _MASK32
        self._state.append(value)
        return value

    def random(self) -> int:
        """Next 31-bit value."""
        return self._advance() >> 1

    def random_word(self, reverse: bool = False) -> int:
        """A 64-bit word built from three 31-bit values, optionally bit-reversed."""
        a0 = self.random()
        a1 = self.random()
        a2 = self.random()
        value = (a0 ^ (a1 << 24) ^ (a2 << 48)) & _MASK64
        return reverse_bits64(value) if reverse else value

    def set_modulo(self, modulo: int) -> None:
        """Set the range of :meth:`bounded`; a modulo of zero means 2**64."""
        modulo &= _MASK64
        if modulo:
            self._limit = ((1 << 64) // modulo) * modulo - 1
        else:
            self._limit = _MASK64
        self._modulo = modulo

    def bounded(self) -> int:
        """A uniformly distributed value in ``[0, modulo)``."""
        while True:
            value = self.random_word()
            if value <= self._limit:
                return value % self._modulo if self._modulo else value