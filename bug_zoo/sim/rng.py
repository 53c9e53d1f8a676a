# bug_zoo/sim/rng.py
from __future__ import annotations
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")

MASK32 = 0xFFFFFFFF
_TWO_32 = 4294967296.0


class EmptySequenceError(ValueError):
    """Raised by pick() when there is nothing to pick from."""


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK32


def utf16_code_units(text: str) -> List[int]:
    """UTF-16 code units of text (astral characters become surrogate pairs)."""
    raw = text.encode("utf-16-le", "surrogatepass")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def hash_string_to_seed(text: str) -> int:
    """
    djb2 variant: h = h*33 + unit, truncated to 32 bits every step.
    Walks UTF-16 code units so seeds match the browser build byte for byte.
    """
    h = 5381
    for unit in utf16_code_units(text):
        h = (h * 33 + unit) & MASK32
    return h


class SeededRNG:
    """
    mulberry32-style stream over unsigned 32-bit state.
    next() is in [0, 1); rand(lo, hi) maps it onto [lo, hi).
    """
    def __init__(self, seed: int):
        self.seed = seed & MASK32
        self._state = self.seed

    def next(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & MASK32
        s = self._state
        t = _imul(s ^ (s >> 15), s | 1)
        t = t ^ _imul(t ^ (t >> 7), t | 61)
        return ((t ^ (t >> 14)) & MASK32) / _TWO_32

    # lets a seeded stream stand in for random.Random in the engine
    def random(self) -> float:
        return self.next()

    def rand(self, lo: Optional[float] = None, hi: Optional[float] = None) -> float:
        value = self.next()
        if lo is not None and hi is not None:
            return lo + value * (hi - lo)
        return value

    def pick(self, seq: Sequence[T]) -> T:
        if len(seq) == 0:
            raise EmptySequenceError("cannot pick from empty input")
        return seq[int(self.rand(0, len(seq)))]
