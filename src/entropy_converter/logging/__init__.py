"""Diagnostic logging subsystem for entropy-converter.

Provides immutable per-conversion records and a configurable logger
that supports none/summary/full verbosity and in-memory diagnostic mode.
"""

from entropy_converter.logging.logger import ConversionLogger
from entropy_converter.logging.types import ConversionRecord

__all__ = [
    "ConversionLogger",
    "ConversionRecord",
]
