"""Diagnostic logger for per-conversion events.

Uses the standard ``logging`` module with the ``"entropy_converter"``
logger. No ``print()`` statements. Supports three verbosity levels and an
in-memory diagnostic mode for post-hoc analysis.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from entropy_converter.config import ConverterConfig
    from entropy_converter.logging.types import ConversionRecord

logger = logging.getLogger("entropy_converter")


class ConversionLogger:
    """Per-conversion diagnostic logger.

    Log levels:
        ``"none"``: No logging output. Records are still stored if
        ``diagnostic_mode=True``.

        ``"summary"``: One line per conversion with the key metrics.

        ``"full"``: Full JSON dump of all record fields.

    In diagnostic mode every record is kept until
    :meth:`clear_diagnostic_data` is called, so long-running processes
    should drain the store periodically.
    """

    def __init__(self, config: ConverterConfig) -> None:
        self._log_level = config.log_level
        self._diagnostic_mode = config.diagnostic_mode
        self._records: list[ConversionRecord] = []

    @property
    def enabled(self) -> bool:
        """Whether logging a record has any effect."""
        return self._diagnostic_mode or self._log_level != "none"

    def log_conversion(self, record: ConversionRecord) -> None:
        """Log a single conversion.

        Args:
            record: Immutable record of the conversion.
        """
        if self._diagnostic_mode:
            self._records.append(record)

        if self._log_level == "none":
            return

        if self._log_level == "summary":
            logger.info(
                "target=%d result=%d path=%s reads=%d recycles=%d buffered=%.3fbits time=%.3fms",
                record.target,
                record.result,
                record.path,
                record.source_reads,
                record.recycles,
                record.buffered_bits,
                record.elapsed_ms,
            )
        elif self._log_level == "full":
            logger.info("conversion_record: %s", json.dumps(asdict(record), default=str))

    def get_diagnostic_data(self) -> list[ConversionRecord]:
        """Return all stored records (empty unless ``diagnostic_mode=True``)."""
        return list(self._records)

    def clear_diagnostic_data(self) -> list[ConversionRecord]:
        """Remove and return all stored records."""
        records, self._records = self._records, []
        return records

    def get_summary_stats(self) -> dict[str, Any]:
        """Compute summary statistics over all stored records.

        Returns:
            Dictionary with aggregate stats, or empty dict if no records.
        """
        if not self._records:
            return {}

        n = len(self._records)
        reads = [r.source_reads for r in self._records]
        recycles = [r.recycles for r in self._records]
        elapsed = [r.elapsed_ms for r in self._records]
        recycled_count = sum(1 for r in recycles if r)
        return {
            "total_conversions": n,
            "total_reads": sum(reads),
            "mean_reads": sum(reads) / n,
            "total_recycles": sum(recycles),
            "recycle_rate": recycled_count / n,
            "mean_elapsed_ms": sum(elapsed) / n,
            "max_elapsed_ms": max(elapsed),
            "final_buffered_bits": self._records[-1].buffered_bits,
        }
