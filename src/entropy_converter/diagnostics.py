"""Entropy accounting for measuring conversion efficiency.

Every conversion to ``[0, target)`` is one binary decision (accept the
buffered value or recycle the remainder) made with failure probability at
most ``p = target * source_range / limit``. The information lost is then
bounded by the binary entropy ``H(p)`` per attempt, or ``H(p) / q`` per
conversion with ``q = 1 - p``. These bounds are diagnostic only; nothing
in the conversion path calls them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from entropy_converter.converter import EntropyConverter

_LN2 = math.log(2.0)


def _loss_for(p: float) -> float:
    if p <= 0.0:
        return 0.0
    if p >= 1.0:
        raise ValueError(f"failure probability must be below 1, got {p}")
    q = 1.0 - p
    # log1p keeps q*log2(q) accurate when p is far below machine epsilon.
    h = -p * math.log2(p) - q * math.log1p(-p) / _LN2
    return h / q


def max_entropy_loss(out: int, in_range: int = 2, result_bits: int = 64) -> float:
    """Upper bound on the average bits lost converting to ``[0, out)``.

    Args:
        out: Output cardinality.
        in_range: Cardinality of each sample fed to the engine (2 for
            power-of-two generators).
        result_bits: Width of the converter's buffered range.

    Raises:
        ValueError: If ``out * in_range`` reaches ``2**result_bits - 1``.
    """
    result_max = (1 << result_bits) - 1
    return _loss_for(out * in_range / result_max)


def expected_entropy_loss(out: int, in_range: int = 2, result_bits: int = 64) -> float:
    """A tighter estimate of the loss, assuming the buffered range is random."""
    result_max = (1 << result_bits) - 1
    return _loss_for((out - 2) * in_range / (3.0 * result_max))


def min_efficiency(out: int, result_bits: int = 64) -> float:
    """Worst-case ratio of output entropy to consumed entropy for ``[0, out)``."""
    bits = math.log2(out)
    return bits / (max_entropy_loss(out, result_bits=result_bits) + bits)


def shuffle_output_entropy(n: int) -> float:
    """Bits needed to pick one of the ``n!`` permutations of a deck."""
    return math.fsum(math.log2(i) for i in range(2, n + 1))


def max_shuffle_loss(n: int, result_bits: int = 64) -> float:
    """Upper bound on the bits lost by a Fisher-Yates shuffle of size *n*."""
    return math.fsum(max_entropy_loss(i, result_bits=result_bits) for i in range(2, n + 1))


def shuffle_efficiency(n: int, result_bits: int = 64) -> float:
    """Worst-case efficiency of shuffling a deck of size *n* (a loose bound)."""
    needed = shuffle_output_entropy(n)
    return needed / (needed + max_shuffle_loss(n, result_bits))


def buffered_entropy(converter: EntropyConverter) -> float:
    """Bits currently held inside *converter*."""
    return math.log2(converter.buffered_range())


@dataclass
class EntropyAccount:
    """Running totals of output entropy and its theoretical loss bound.

    Call :meth:`record` after each conversion, then compare
    :meth:`measured_loss` with :attr:`loss_bound`.

    Attributes:
        result_bits: Width of the converter being measured.
        conversions: Number of conversions recorded.
        output_bits: Entropy delivered to the caller, in bits.
        loss_bound: Sum of :func:`max_entropy_loss` over all conversions.
    """

    result_bits: int = 64
    conversions: int = 0
    output_bits: float = 0.0
    loss_bound: float = 0.0

    def record(self, target: int, source_range: int = 2) -> None:
        self.conversions += 1
        self.output_bits += math.log2(target)
        self.loss_bound += max_entropy_loss(target, source_range, self.result_bits)

    def measured_loss(self, input_bits: float, converter: EntropyConverter) -> float:
        """Bits consumed but neither delivered nor still buffered.

        Args:
            input_bits: Entropy read from the generator, e.g.
                ``MeasuringGenerator.entropy_bits``.
            converter: The converter whose buffered entropy is still owed.
        """
        return input_bits - buffered_entropy(converter) - self.output_bits
