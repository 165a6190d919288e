"""Seeded pseudo-random generator for tests and reproducible measurement.

Backed by numpy's ``default_rng``. Not a source of real entropy: use it to
make conversions deterministic, never as a substitute for the system
generator in production.
"""

from __future__ import annotations

import numpy as np

from entropy_converter.generators.base import UniformGenerator
from entropy_converter.generators.registry import register_generator

_UINT64_MAX = (1 << 64) - 1


@register_generator("seeded")
class SeededGenerator(UniformGenerator):
    """Reproducible uniform integers over ``[min_value, max_value]``.

    By default the bounds are ``[0, 2**bits - 1]``. Explicit bounds allow
    non-power-of-two generators, e.g. ``SeededGenerator(min_value=1,
    max_value=6)`` for a die.

    Values are drawn from numpy in blocks of ``block_size`` and served one
    at a time.

    Args:
        seed: Optional RNG seed for reproducible output.
        bits: Word width when *max_value* is not given (1..64).
        min_value: Inclusive lower bound (>= 0).
        max_value: Inclusive upper bound (<= 2**64 - 1).
        block_size: Number of values drawn from numpy per refill.
    """

    def __init__(
        self,
        seed: int | None = None,
        bits: int = 32,
        *,
        min_value: int = 0,
        max_value: int | None = None,
        block_size: int = 1024,
    ) -> None:
        if max_value is None:
            if not 1 <= bits <= 64:
                raise ValueError(f"bits must be in [1, 64], got {bits}")
            max_value = (1 << bits) - 1
        if not 0 <= min_value < max_value <= _UINT64_MAX:
            raise ValueError(
                f"bounds must satisfy 0 <= min < max <= 2**64 - 1, got [{min_value}, {max_value}]"
            )
        self._seed = seed
        self._min = min_value
        self._max = max_value
        self._block_size = block_size
        self._rng = np.random.default_rng(seed)
        self._block = np.empty(0, dtype=np.uint64)
        self._index = 0

    @property
    def name(self) -> str:
        return "seeded"

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def min_value(self) -> int:
        return self._min

    @property
    def max_value(self) -> int:
        return self._max

    def __call__(self) -> int:
        if self._index >= len(self._block):
            self._block = self._rng.integers(
                self._min,
                self._max,
                size=self._block_size,
                dtype=np.uint64,
                endpoint=True,
            )
            self._index = 0
        value = int(self._block[self._index])
        self._index += 1
        return value
