"""Composition wrappers around generators.

``CallableGenerator`` gives a bare zero-argument callable the declared
bounds the converter needs. ``MeasuringGenerator`` counts how much entropy
a wrapped generator has produced, for efficiency measurements. Neither
catches anything: exceptions from the wrapped callable propagate unchanged.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from entropy_converter.generators.base import UniformGenerator

if TYPE_CHECKING:
    from collections.abc import Callable

    from entropy_converter.generators.base import BoundedGenerator


class CallableGenerator(UniformGenerator):
    """Adapt ``func`` to the generator interface with explicit bounds.

    Args:
        func: Zero-argument callable returning integers in
            ``[min_value, max_value]``.
        min_value: Declared inclusive minimum.
        max_value: Declared inclusive maximum.
        name: Identifier reported by :attr:`name`.
    """

    def __init__(
        self,
        func: Callable[[], int],
        min_value: int,
        max_value: int,
        name: str = "callable",
    ) -> None:
        self._func = func
        self._min = min_value
        self._max = max_value
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def min_value(self) -> int:
        return self._min

    @property
    def max_value(self) -> int:
        return self._max

    def __call__(self) -> int:
        return self._func()


class MeasuringGenerator(UniformGenerator):
    """Count the reads made from *inner* and the entropy they carried.

    Each read of a generator with cardinality ``n`` carries ``log2(n)``
    bits, so for a 32-bit word generator :attr:`entropy_bits` is
    ``32 * reads``.

    Args:
        inner: Any bounded generator.
    """

    def __init__(self, inner: BoundedGenerator) -> None:
        self._inner = inner
        self._bits_per_read = math.log2(inner.max_value - inner.min_value + 1)
        self.reads = 0

    @property
    def name(self) -> str:
        inner_name = getattr(self._inner, "name", type(self._inner).__name__)
        return f"measuring({inner_name})"

    @property
    def min_value(self) -> int:
        return self._inner.min_value

    @property
    def max_value(self) -> int:
        return self._inner.max_value

    @property
    def entropy_bits(self) -> float:
        """Total entropy produced so far, in bits."""
        return self.reads * self._bits_per_read

    def __call__(self) -> int:
        value = self._inner()
        self.reads += 1
        return value

    def close(self) -> None:
        close = getattr(self._inner, "close", None)
        if close is not None:
            close()

    def health_check(self) -> dict[str, Any]:
        health = super().health_check()
        health["reads"] = self.reads
        health["entropy_bits"] = self.entropy_bits
        return health
