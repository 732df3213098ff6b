"""
Seedable, splittable random number generator.

Every simulated round draws its own child stream with next_rng(), so rounds
played in parallel stay reproducible and decorrelated.
"""

from __future__ import annotations
from typing import Union
import numpy as np

SeedLike = Union[None, int, np.random.Generator, "RNG"]


class RNG:
    def __init__(self, seed: SeedLike = None):
        """
        Args:
            seed: int seed, a numpy Generator to wrap, another RNG (its stream is shared),
                  or None for OS entropy
        """
        if isinstance(seed, RNG):
            self._gen = seed._gen
        elif isinstance(seed, np.random.Generator):
            self._gen = seed
        else:
            self._gen = np.random.default_rng(seed)

    def random(self, n: int) -> int:
        """Uniform integer in [0, n)"""
        if n <= 0:
            raise ValueError(f"random() needs a positive range, got {n}")
        return int(self._gen.integers(n))

    def next_rng(self) -> RNG:
        """Independent child stream; each call returns a different child"""
        return RNG(self._gen.spawn(1)[0])

    def shuffle(self, items: list) -> None:
        """Shuffle a list in place"""
        self._gen.shuffle(items)


# Parent of the streams used by games created without an explicit generator
global_rng = RNG()


def as_rng(seed: SeedLike) -> RNG:
    """Use an existing RNG as-is, otherwise build one (None draws a child of global_rng)"""
    if isinstance(seed, RNG):
        return seed
    if seed is None:
        return global_rng.next_rng()
    return RNG(seed)
