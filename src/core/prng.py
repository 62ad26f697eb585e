# src/core/prng.py — v1
"""Deterministic pseudo-random source for node-order shuffling.

A 32-bit linear congruential generator (Numerical Recipes constants). Each
instance is seeded explicitly, so two runs with the same seed visit nodes in
the same order regardless of the interpreter's global random state.
"""

from __future__ import annotations

from typing import MutableSequence, TypeVar

T = TypeVar("T")

_MULTIPLIER = 1664525
_INCREMENT = 1013904223
_MODULUS = 2**32


class SeededRandom:
    """LCG yielding floats in [0, 1)."""

    def __init__(self, seed: int) -> None:
        # Seed 0 maps to state 1.
        self._state = (int(seed) % _MODULUS) or 1

    def random(self) -> float:
        self._state = (_MULTIPLIER * self._state + _INCREMENT) % _MODULUS
        return self._state / _MODULUS

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle in place."""
        for i in range(len(items) - 1, 0, -1):
            j = int(self.random() * (i + 1))
            items[i], items[j] = items[j], items[i]
