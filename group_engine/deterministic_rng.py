"""
Seeded Stream — deterministic random source for the group search.

All randomness in the genetic search passes through a single
SeededStream instance. Identical (seed) → identical call sequence →
identical results, on every platform and interpreter version.

The seed string is hashed to a 32-bit state which drives a linear
congruential generator (Numerical Recipes constants).
"""

from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")

_MODULUS = 2 ** 32
_MULTIPLIER = 1664525
_INCREMENT = 1013904223


def hash_seed(seed: str) -> int:
    """
    31-multiplier string hash, wrapped to signed 32-bit, absolute value.
    Same seed string → same state.
    """
    h = 0
    for ch in seed:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    if h >= 2 ** 31:
        h -= 2 ** 32
    return abs(h)


class SeededStream:
    """Local seeded RNG. No global random state touched."""

    def __init__(self, seed: str) -> None:
        if not isinstance(seed, str) or not seed:
            raise ValueError(f"Seed must be a non-empty string, got {seed!r}")
        self.seed = seed
        self._state = hash_seed(seed) % _MODULUS

    def random(self) -> float:
        """Next float in [0, 1)."""
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self._state / _MODULUS

    def rand_index(self, n: int) -> int:
        """Uniform index in [0, n). n must be positive."""
        if n <= 0:
            raise ValueError(f"rand_index needs n > 0, got {n}")
        return int(self.random() * n)

    def rand_int(self, low: int, high: int) -> int:
        """Return random integer in [low, high] inclusive."""
        return low + self.rand_index(high - low + 1)

    def rand_choice(self, seq: Sequence[T]) -> T:
        """Pick one element from a non-empty sequence."""
        return seq[self.rand_index(len(seq))]

    def coin(self, probability: float = 0.5) -> bool:
        """True with the given probability."""
        return self.random() < probability

    def shuffle(self, seq: List[T]) -> None:
        """In-place deterministic Fisher–Yates shuffle."""
        for i in range(len(seq) - 1, 0, -1):
            j = self.rand_index(i + 1)
            seq[i], seq[j] = seq[j], seq[i]
