"""Buffered entropy: the interval state and the bit buffer.

``IntervalState`` holds a value uniformly distributed over ``[0, range)``.
``BitBuffer`` holds the unread bits of the last raw sample taken from a
power-of-two generator, so a 32-bit word can serve 32 single-bit draws
instead of being thrown away after one.

Both are plain mutable holders. Only the narrowing engine mutates them.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from entropy_converter.exceptions import SourceOutOfRangeError

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(slots=True)
class IntervalState:
    """Uniform integer ``value`` over the sample space ``[0, range)``.

    Invariant: ``0 <= value < range``. The initial ``(0, 1)`` is a
    single-point distribution, i.e. zero bits of entropy.
    """

    value: int = 0
    range: int = 1

    def reset(self) -> None:
        """Discard all buffered entropy."""
        self.value = 0
        self.range = 1

    def snapshot(self) -> tuple[int, int]:
        return self.value, self.range

    def restore(self, snapshot: tuple[int, int]) -> None:
        self.value, self.range = snapshot


@dataclass(slots=True)
class BitBuffer:
    """Residual bits of the last raw sample from a power-of-two generator.

    ``buffer`` is uniform over ``[0, buffer_max]`` and ``buffer_max`` is
    always ``2**k - 1``, where ``k`` is the number of bits left.
    """

    buffer: int = 0
    buffer_max: int = 0

    def reset(self) -> None:
        self.buffer = 0
        self.buffer_max = 0

    def snapshot(self) -> tuple[int, int]:
        return self.buffer, self.buffer_max

    def restore(self, snapshot: tuple[int, int]) -> None:
        self.buffer, self.buffer_max = snapshot

    def draw(self, gen: Callable[[], int], in_min: int, in_max: int) -> int:
        """Return one uniform bit, refilling from *gen* when empty.

        Args:
            gen: Zero-argument callable returning an integer in
                ``[in_min, in_max]``.
            in_min: Declared minimum of *gen*.
            in_max: Declared maximum of *gen*. ``in_max - in_min`` must be
                of the form ``2**k - 1``.

        Returns:
            0 or 1.

        Raises:
            SourceOutOfRangeError: If *gen* returns a value outside
                ``[in_min, in_max]``. The buffer is left untouched.
        """
        if self.buffer_max == 0:
            sample = operator.index(gen())
            if sample < in_min:
                raise SourceOutOfRangeError(
                    f"Input value too small: {sample} < {in_min}"
                )
            if sample > in_max:
                raise SourceOutOfRangeError(
                    f"Input value too large: {sample} > {in_max}"
                )
            self.buffer = sample - in_min
            self.buffer_max = in_max - in_min

        bit = self.buffer & 1
        self.buffer >>= 1
        self.buffer_max >>= 1
        return bit
