"""The narrowing engine: unbiased conversion between uniform ranges.

The engine keeps a uniform ``value`` over ``[0, range)`` between calls.
To produce a number in ``[0, target)`` it first grows ``range`` as far as
``limit`` allows by multiplying in fresh source samples, then splits the
largest multiple of ``target`` that fits into ``target`` equal parts.

Algorithm (per call):
    1. Refill: while ``range < limit // source_range``, read a sample ``s``
       and set ``value = value * source_range + s``,
       ``range = range * source_range``.
    2. ``cut = range - range % target``.
    3. If ``value < cut``: return ``value % target`` and keep
       ``value // target`` over ``cut // target`` for the next call.
    4. Otherwise relabel the remainder: ``value -= cut``, ``range -= cut``,
       and go back to step 1. This reuses the same entropy and does not
       read the source.

Refilling before every decision keeps ``range`` large relative to
``target``, which makes step 4 rare and the entropy lost per call close
to the binary-entropy bound ``H(p) / q`` with ``p = target * source_range
/ limit``.
"""

from __future__ import annotations

import logging
import operator
from typing import TYPE_CHECKING

from entropy_converter.exceptions import RangeTooLargeError, SourceOutOfRangeError
from entropy_converter.state import BitBuffer, IntervalState

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("entropy_converter")


class NarrowingEngine:
    """Owns the buffered entropy and runs the rejection/recycling loop.

    Not thread-safe: use one engine per thread.

    Attributes:
        interval: Buffered uniform value and its range.
        bits: Residual bits for the power-of-two input path.
        last_reads: Source samples consumed by the most recent ``narrow()``.
        last_recycles: Recycle iterations in the most recent ``narrow()``.
    """

    __slots__ = ("bits", "interval", "last_reads", "last_recycles")

    def __init__(self) -> None:
        self.interval = IntervalState()
        self.bits = BitBuffer()
        self.last_reads = 0
        self.last_recycles = 0

    def reset(self) -> None:
        """Discard all buffered entropy in both the interval and the bit buffer."""
        self.interval.reset()
        self.bits.reset()

    def buffered_range(self) -> int:
        """Size of the combined sample space held in both buffers."""
        return self.interval.range * (self.bits.buffer_max + 1)

    def transfer_to(self, other: NarrowingEngine) -> None:
        """Move all buffered entropy into *other*, leaving this engine empty."""
        other.interval.restore(self.interval.snapshot())
        other.bits.restore(self.bits.snapshot())
        self.reset()

    def narrow(
        self,
        target: int,
        source_range: int,
        limit: int,
        source: Callable[[], int],
    ) -> int:
        """Return a uniform integer in ``[0, target)``.

        Args:
            target: Output cardinality, at least 1.
            source_range: Cardinality of each sample returned by *source*.
            limit: Ceiling on ``range`` before narrowing.
            source: Zero-argument callable returning a uniform integer in
                ``[0, source_range)``.

        Returns:
            An integer in ``[0, target)``.

        Raises:
            RangeTooLargeError: If ``target > limit // source_range``. Raised
                before any read.
            SourceOutOfRangeError: If *source* returns a value outside
                ``[0, source_range)``.

        Any exception, including one raised by *source* itself and
        ``KeyboardInterrupt`` during a blocking read, leaves the buffered
        state exactly as it was on entry.
        """
        if target > limit // source_range:
            raise RangeTooLargeError(
                f"The output range is too large: {target} > {limit} // {source_range}"
            )

        interval_before = self.interval.snapshot()
        bits_before = self.bits.snapshot()
        self.last_reads = 0
        self.last_recycles = 0
        try:
            return self._narrow(target, source_range, limit, source)
        except BaseException:
            self.interval.restore(interval_before)
            self.bits.restore(bits_before)
            logger.warning(
                "Conversion failed after %d source reads; buffered entropy restored",
                self.last_reads,
            )
            raise

    def _narrow(
        self,
        target: int,
        source_range: int,
        limit: int,
        source: Callable[[], int],
    ) -> int:
        state = self.interval
        ceiling = limit // source_range
        while True:
            # Read as much entropy as possible up-front.
            while state.range < ceiling:
                sample = operator.index(source())
                self.last_reads += 1
                if sample < 0:
                    raise SourceOutOfRangeError(f"Input is too small: {sample} < 0")
                if sample >= source_range:
                    raise SourceOutOfRangeError(
                        f"Input is too large: {sample} >= {source_range}"
                    )
                state.value = state.value * source_range + sample
                state.range *= source_range

            # Largest multiple of target not exceeding range.
            cut = state.range - state.range % target

            if state.value < cut:
                result = state.value % target
                state.value //= target
                state.range = cut // target
                return result

            # Relabel the remainder [cut, range) as [0, range - cut).
            state.value -= cut
            state.range -= cut
            self.last_recycles += 1
            logger.debug(
                "Recycled remainder: target=%d range=%d", target, state.range
            )
