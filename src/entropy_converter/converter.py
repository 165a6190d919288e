"""Public conversion API.

:class:`EntropyConverter` reads raw integers from a generator and returns
unbiased integers in any requested range, keeping leftover entropy
buffered between calls so that almost none of it is thrown away::

    converter = EntropyConverter()
    device = SystemRandomDevice()
    roll = converter.convert(1, 6, device)

The converter validates the requested ranges, picks the input path and
hands the work to the :class:`~entropy_converter.engine.NarrowingEngine`:

- **bits**: when the generator span ``in_max - in_min`` is ``2**k - 1``,
  each raw sample is split into ``k`` single-bit draws through the bit
  buffer, so unused high bits are kept for later calls.
- **direct**: otherwise ``gen() - in_min`` is fed to the engine as one
  sample of cardinality ``in_max - in_min + 1``.

A converter holds literal entropy and must never be duplicated. Copying
or pickling raises :class:`StateDuplicationError`; use :meth:`take` or
:meth:`move_from` to relocate the buffered state. Converters are not
thread-safe.
"""

from __future__ import annotations

import logging
import math
import operator
import time
from typing import TYPE_CHECKING, Any, overload

from entropy_converter import adapters
from entropy_converter.config import MIN_WIDTH_BITS
from entropy_converter.engine import NarrowingEngine
from entropy_converter.exceptions import (
    BufferTooSmallError,
    ConfigValidationError,
    InvalidInputRangeError,
    InvalidOutputRangeError,
    StateDuplicationError,
)
from entropy_converter.logging.types import ConversionRecord

if TYPE_CHECKING:
    from collections.abc import Callable, MutableSequence

    from entropy_converter.generators.base import BoundedGenerator
    from entropy_converter.logging.logger import ConversionLogger

logger = logging.getLogger("entropy_converter")


def _check_width(name: str, bits: int) -> int:
    if not isinstance(bits, int) or isinstance(bits, bool) or bits < MIN_WIDTH_BITS:
        raise ConfigValidationError(
            f"{name} must be an integer of at least {MIN_WIDTH_BITS}, got {bits!r}"
        )
    return bits


class EntropyConverter:
    """Converts entropy between uniform random integer ranges.

    Args:
        result_bits: Width of the integers holding buffered entropy. The
            default ``limit`` is ``2**result_bits - 1``; wider means less
            entropy lost per conversion.
        buffer_bits: Width of the bit buffer. Power-of-two generators with
            a span above ``2**buffer_bits - 1`` are rejected.
        logger: Optional per-conversion diagnostic logger.

    Raises:
        ConfigValidationError: If a width is not an integer >= 2.
    """

    def __init__(
        self,
        result_bits: int = 64,
        buffer_bits: int = 32,
        *,
        logger: ConversionLogger | None = None,
    ) -> None:
        self._result_bits = _check_width("result_bits", result_bits)
        self._buffer_bits = _check_width("buffer_bits", buffer_bits)
        self._result_max = (1 << result_bits) - 1
        self._buffer_capacity = (1 << buffer_bits) - 1
        self._engine = NarrowingEngine()
        self._logger = logger

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def result_bits(self) -> int:
        return self._result_bits

    @property
    def buffer_bits(self) -> int:
        return self._buffer_bits

    @property
    def result_max(self) -> int:
        """Largest value the buffered range may reach; the default ``limit``."""
        return self._result_max

    @property
    def buffer_capacity(self) -> int:
        """Largest power-of-two input span the bit buffer accepts."""
        return self._buffer_capacity

    @property
    def conversion_logger(self) -> ConversionLogger | None:
        return self._logger

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    @overload
    def convert(self, target: int, gen: BoundedGenerator, /) -> int: ...

    @overload
    def convert(self, out_min: int, out_max: int, gen: BoundedGenerator, /) -> int: ...

    @overload
    def convert(
        self,
        out_min: int,
        out_max: int,
        in_min: int,
        in_max: int,
        gen: Callable[[], int],
        /,
        *,
        limit: int | None = None,
    ) -> int: ...

    def convert(self, *args: Any, limit: int | None = None) -> int:
        """Read entropy from a generator and return a uniform integer.

        Three call shapes are accepted::

            convert(target, gen)                           # [0, target)
            convert(out_min, out_max, gen)                 # [out_min, out_max]
            convert(out_min, out_max, in_min, in_max, gen, limit=None)

        The first two use ``gen.min_value``/``gen.max_value`` as the input
        range. See :meth:`convert_explicit` for validation and errors.

        Raises:
            TypeError: For any other number of positional arguments, or a
                ``limit`` outside the explicit form.
        """
        if len(args) == 5:
            return self.convert_explicit(*args, limit=limit)
        if limit is not None:
            raise TypeError("limit is only accepted with explicit input bounds")
        if len(args) == 2:
            return self.convert_below(*args)
        if len(args) == 3:
            return self.convert_range(*args)
        raise TypeError(f"convert() takes 2, 3 or 5 positional arguments ({len(args)} given)")

    def convert_below(self, target: int, gen: BoundedGenerator) -> int:
        """Return a uniform integer in ``[0, target)``.

        Raises:
            InvalidOutputRangeError: If ``target <= 0``.
        """
        target = operator.index(target)
        if target <= 0:
            raise InvalidOutputRangeError(f"Output range is invalid: target={target}")
        return self.convert_range(0, target - 1, gen)

    def convert_range(self, out_min: int, out_max: int, gen: BoundedGenerator) -> int:
        """Return a uniform integer in ``[out_min, out_max]``.

        The input range is taken from ``gen.min_value`` and ``gen.max_value``.
        """
        try:
            in_min, in_max = gen.min_value, gen.max_value
        except AttributeError:
            raise TypeError(
                f"{type(gen).__name__} does not declare min_value/max_value; "
                "pass explicit input bounds"
            ) from None
        return self.convert_explicit(out_min, out_max, in_min, in_max, gen)

    def convert_explicit(
        self,
        out_min: int,
        out_max: int,
        in_min: int,
        in_max: int,
        gen: Callable[[], int],
        limit: int | None = None,
    ) -> int:
        """Return a uniform integer in ``[out_min, out_max]``.

        Args:
            out_min: Inclusive lower bound of the result.
            out_max: Inclusive upper bound of the result.
            in_min: Declared inclusive minimum of *gen*.
            in_max: Declared inclusive maximum of *gen*.
            gen: Zero-argument callable returning uniform integers in
                ``[in_min, in_max]``.
            limit: Ceiling on the buffered range. ``None`` buffers as much
                as the result width allows.

        Returns:
            An integer in ``[out_min, out_max]``. When ``out_min == out_max``
            it is returned without reading *gen*.

        Raises:
            InvalidOutputRangeError: If ``out_min > out_max``.
            InvalidInputRangeError: If ``in_min >= in_max``.
            BufferTooSmallError: If the input span does not fit the
                configured widths.
            RangeTooLargeError: If the output cardinality exceeds what
                *limit* supports.
            SourceOutOfRangeError: If *gen* returns a value outside
                ``[in_min, in_max]``.
            ConfigValidationError: If *limit* is below 2 or above
                :attr:`result_max`.

        All validation errors are raised before *gen* is read. Any failure,
        including exceptions raised by *gen* itself (which propagate
        unchanged), leaves the buffered entropy exactly as it was.
        """
        out_min = operator.index(out_min)
        out_max = operator.index(out_max)
        in_min = operator.index(in_min)
        in_max = operator.index(in_max)

        if out_min == out_max:
            return out_max
        if out_min > out_max:
            raise InvalidOutputRangeError(f"Invalid output range: [{out_min}, {out_max}]")
        if in_min >= in_max:
            raise InvalidInputRangeError(f"Invalid input range: [{in_min}, {in_max}]")

        limit = self._resolve_limit(limit)
        target = out_max - out_min + 1
        in_span = in_max - in_min

        if in_span & (in_span + 1) == 0:
            # The generator produces whole bits: buffer them.
            if in_span > self._buffer_capacity:
                raise BufferTooSmallError(
                    f"Input span {in_span} exceeds the {self._buffer_bits}-bit buffer"
                )
            bits = self._engine.bits

            def bit_source() -> int:
                return bits.draw(gen, in_min, in_max)

            return self._narrow(out_min, target, 2, limit, bit_source, "bits")

        if in_span >= self._result_max or target > self._result_max // (in_span + 1):
            raise BufferTooSmallError(
                f"Input cardinality {in_span + 1} times output cardinality {target} "
                f"overflows {self._result_bits} bits"
            )

        def raw_source() -> int:
            return operator.index(gen()) - in_min

        return self._narrow(out_min, target, in_span + 1, limit, raw_source, "direct")

    def _resolve_limit(self, limit: int | None) -> int:
        if limit is None:
            return self._result_max
        limit = operator.index(limit)
        if not 2 <= limit <= self._result_max:
            raise ConfigValidationError(
                f"limit must be in [2, {self._result_max}], got {limit}"
            )
        return limit

    def _narrow(
        self,
        out_min: int,
        target: int,
        source_range: int,
        limit: int,
        source: Callable[[], int],
        path: str,
    ) -> int:
        if self._logger is None or not self._logger.enabled:
            return out_min + self._engine.narrow(target, source_range, limit, source)

        start = time.perf_counter()
        result = out_min + self._engine.narrow(target, source_range, limit, source)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        self._logger.log_conversion(
            ConversionRecord(
                target=target,
                result=result,
                source_range=source_range,
                path=path,
                source_reads=self._engine.last_reads,
                recycles=self._engine.last_recycles,
                buffered_bits=self.buffered_entropy(),
                elapsed_ms=elapsed_ms,
            )
        )
        return result

    # ------------------------------------------------------------------
    # Adapters
    # ------------------------------------------------------------------

    def with_generator(self, gen: BoundedGenerator) -> Callable[[int], int]:
        """Return ``f(count)`` giving a uniform integer in ``[0, count)``."""
        return adapters.with_generator(self, gen)

    def make_uniform(
        self,
        a: int,
        b: int,
        gen: BoundedGenerator | None = None,
    ) -> Callable[..., int]:
        """Return a distribution over ``[a, b]``.

        Without *gen* the result is ``f(gen)``; with *gen* it is ``f()``.
        """
        return adapters.make_uniform(self, a, b, gen)

    def shuffle(self, sequence: MutableSequence[Any], gen: BoundedGenerator) -> None:
        """Shuffle *sequence* in place with entropy read from *gen*."""
        adapters.shuffle(sequence, self.with_generator(gen))

    # ------------------------------------------------------------------
    # Buffered state
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Discard all buffered entropy."""
        self._engine.reset()

    def buffered_range(self) -> int:
        """Size of the sample space currently buffered (exact integer).

        ``log2`` of this is the buffered entropy in bits; a fresh converter
        reports 1.
        """
        return self._engine.buffered_range()

    def buffered_entropy(self) -> float:
        """Buffered entropy in bits."""
        return math.log2(self.buffered_range())

    def inspect_state(self) -> tuple[int, int, int, int]:
        """Return ``(value, range, buffer, buffer_max)`` for diagnostics."""
        return self._engine.interval.snapshot() + self._engine.bits.snapshot()

    def take(self) -> EntropyConverter:
        """Move the buffered entropy into a new converter and reset this one.

        The new converter has the same widths and no logger.
        """
        moved = EntropyConverter(self._result_bits, self._buffer_bits)
        self._engine.transfer_to(moved._engine)
        logger.debug("Moved %.3f bits of buffered entropy", moved.buffered_entropy())
        return moved

    def move_from(self, other: EntropyConverter) -> None:
        """Replace this converter's entropy with *other*'s and reset *other*.

        Raises:
            ConfigValidationError: If the widths of the two converters differ.
        """
        if other is self:
            return
        if (other._result_bits, other._buffer_bits) != (self._result_bits, self._buffer_bits):
            raise ConfigValidationError(
                "Cannot move entropy between converters of different widths"
            )
        other._engine.transfer_to(self._engine)
        logger.debug("Moved %.3f bits of buffered entropy", self.buffered_entropy())

    def __copy__(self) -> EntropyConverter:
        raise StateDuplicationError(
            "EntropyConverter cannot be copied; use take() or move_from()"
        )

    def __deepcopy__(self, memo: dict[int, Any]) -> EntropyConverter:
        raise StateDuplicationError(
            "EntropyConverter cannot be copied; use take() or move_from()"
        )

    def __reduce_ex__(self, protocol: Any) -> Any:
        raise StateDuplicationError("EntropyConverter cannot be pickled")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(result_bits={self._result_bits}, "
            f"buffer_bits={self._buffer_bits}, buffered_bits={self.buffered_entropy():.3f})"
        )
