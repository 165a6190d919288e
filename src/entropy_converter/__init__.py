"""entropy-converter: unbiased conversion between uniform random integer ranges.

Reads integers from a costly or rate-limited randomness source (a hardware
generator, ``os.urandom``) and produces uniform integers in any range, or
uniform permutations, while discarding almost none of the input entropy.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("entropy-converter")
except PackageNotFoundError:
    __version__ = "0.0.0"

from entropy_converter.adapters import make_uniform, shuffle, with_generator
from entropy_converter.config import ConverterConfig, resolve_config
from entropy_converter.converter import EntropyConverter
from entropy_converter.exceptions import (
    BufferTooSmallError,
    ConfigValidationError,
    ConversionError,
    EntropyConverterError,
    InvalidInputRangeError,
    InvalidOutputRangeError,
    RangeTooLargeError,
    SourceOutOfRangeError,
    StateDuplicationError,
)
from entropy_converter.factory import build_converter, build_generator
from entropy_converter.generators import (
    CallableGenerator,
    MeasuringGenerator,
    SeededGenerator,
    SystemRandomDevice,
)

__all__ = [
    "BufferTooSmallError",
    "CallableGenerator",
    "ConfigValidationError",
    "ConversionError",
    "ConverterConfig",
    "EntropyConverter",
    "EntropyConverterError",
    "InvalidInputRangeError",
    "InvalidOutputRangeError",
    "MeasuringGenerator",
    "RangeTooLargeError",
    "SeededGenerator",
    "SourceOutOfRangeError",
    "StateDuplicationError",
    "SystemRandomDevice",
    "__version__",
    "build_converter",
    "build_generator",
    "make_uniform",
    "resolve_config",
    "shuffle",
    "with_generator",
]
