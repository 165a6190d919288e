"""System generator using ``os.urandom()``.

The default generator: fixed-width words from the OS CSPRNG, the Python
analogue of a hardware ``random_device``.
"""

from __future__ import annotations

import os

from entropy_converter.generators.base import UniformGenerator
from entropy_converter.generators.registry import register_generator


@register_generator("system")
class SystemRandomDevice(UniformGenerator):
    """``os.urandom()`` wrapper returning ``bits``-wide unsigned words.

    *bits* must be a positive multiple of 8; the default 32 matches the
    usual ``unsigned`` word of a hardware random device.

    Args:
        bits: Word width in bits.
    """

    def __init__(self, bits: int = 32) -> None:
        if bits <= 0 or bits % 8:
            raise ValueError(f"bits must be a positive multiple of 8, got {bits}")
        self._nbytes = bits // 8
        self._max = (1 << bits) - 1

    @property
    def name(self) -> str:
        return "system"

    @property
    def min_value(self) -> int:
        return 0

    @property
    def max_value(self) -> int:
        return self._max

    def __call__(self) -> int:
        return int.from_bytes(os.urandom(self._nbytes), "little")
