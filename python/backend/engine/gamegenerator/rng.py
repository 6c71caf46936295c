"""Seeded random source shared by every generation step.

Generation takes the RNG as an explicit ``() -> float`` argument, never a
module global, so a seed fully determines the puzzle.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")

Rng = Callable[[], float]


def create_rng(seed: str) -> Rng:
    """Return a float source in ``[0, 1)`` seeded from *seed*.

    String seeds are hashed with SHA-512 by ``random.Random``, so the stream
    is identical across processes and platforms.
    """
    return random.Random(seed).random


def rand_int(rng: Rng, low: int, high: int) -> int:
    """Uniform integer in ``[low, high]``."""
    return low + int(rng() * (high - low + 1))


def choice(rng: Rng, items: Sequence[T]) -> T:
    return items[int(rng() * len(items))]


def shuffled(items: Sequence[T], rng: Rng) -> list[T]:
    """Fisher-Yates shuffle into a new list."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(rng() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result
