"""
Deterministic seeded pseudo-random number generator.

A string seed is folded into a 32-bit signed hash, and the hash drives a
linear congruential generator.  The same seed yields the same float
sequence on every platform, which is what makes a layout reproducible
from its seed alone.
"""

import math
from typing import List

# LCG constants
_MULTIPLIER = 9301
_INCREMENT = 49297
_MODULUS = 233280


def _utf16_code_units(text: str) -> List[int]:
    """Code units of *text* as UTF-16 (astral characters become two units)."""
    data = text.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2)]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def hash_seed(seed: str) -> int:
    """
    Fold *seed* into a non-negative integer state.

    Each code unit is mixed in with ``hash = hash * 31 + code`` (written
    as ``(hash << 5) - hash``), truncated to a signed 32-bit integer after
    every step.  The absolute value of the final hash is the state.
    """
    h = 0
    for code in _utf16_code_units(seed):
        h = _to_int32((h << 5) - h + code)
    return abs(h)


class SeedRandom:
    """Reproducible float stream in ``[0, 1)`` derived from a string seed."""

    __slots__ = ("seed", "state")

    def __init__(self, seed: str):
        self.seed = seed
        self.state = hash_seed(seed)

    def next(self) -> float:
        """Advance the generator and return the next value in ``[0, 1)``."""
        self.state = (self.state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self.state / _MODULUS

    def next_int(self, low: int, high: int) -> int:
        """Integer in ``[low, high)``."""
        return math.floor(self.next() * (high - low)) + low

    def next_float(self, low: float, high: float) -> float:
        """Float in ``[low, high)``."""
        return self.next() * (high - low) + low

    def __repr__(self) -> str:
        return f"SeedRandom(seed={self.seed!r}, state={self.state})"
