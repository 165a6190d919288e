"""Adapters presenting a converter as plain callables.

These hold no state of their own: every call goes straight to the
converter, so they add no failure modes beyond ``convert``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, MutableSequence

    from entropy_converter.converter import EntropyConverter
    from entropy_converter.generators.base import BoundedGenerator


def with_generator(converter: EntropyConverter, gen: BoundedGenerator) -> Callable[[int], int]:
    """Bind *gen* and return ``randbelow(count) -> [0, count)``.

    Suitable for driving :func:`shuffle` or any Fisher-Yates implementation.
    """

    def randbelow(count: int) -> int:
        return converter.convert_below(count, gen)

    return randbelow


def make_uniform(
    converter: EntropyConverter,
    a: int,
    b: int,
    gen: BoundedGenerator | None = None,
) -> Callable[..., int]:
    """Return a uniform distribution over ``[a, b]``.

    Args:
        converter: Converter supplying the entropy bookkeeping.
        a: Inclusive lower bound.
        b: Inclusive upper bound.
        gen: Optional generator to bind.

    Returns:
        ``f(gen)`` when *gen* is ``None``, otherwise the bound ``f()``.
    """
    if gen is None:

        def distribution(source: BoundedGenerator) -> int:
            return converter.convert_range(a, b, source)

        return distribution

    def bound() -> int:
        return converter.convert_range(a, b, gen)

    return bound


def shuffle(sequence: MutableSequence[Any], randbelow: Callable[[int], int]) -> None:
    """Shuffle *sequence* in place (Fisher-Yates).

    Args:
        sequence: Mutable sequence to permute.
        randbelow: Callable returning a uniform integer in ``[0, count)``.
    """
    for i in range(1, len(sequence)):
        j = randbelow(i + 1)
        sequence[i], sequence[j] = sequence[j], sequence[i]
