"""Data types for the diagnostic logging subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ConversionRecord:
    """Immutable record of a single conversion.

    Attributes:
        target: Output cardinality requested (``out_max - out_min + 1``).
        result: Value returned to the caller, ``out_min`` included.
        source_range: Cardinality of each sample fed to the engine
            (2 on the bit-buffer path).
        path: ``"bits"`` for power-of-two inputs, ``"direct"`` otherwise.
        source_reads: Samples the engine consumed during this call.
        recycles: Times the remainder was relabelled and retried.
        buffered_bits: ``log2`` of the buffered range after the call.
        elapsed_ms: Wall-clock time of the call (milliseconds).
    """

    target: int
    result: int
    source_range: int
    path: str
    source_reads: int
    recycles: int
    buffered_bits: float
    elapsed_ms: float
