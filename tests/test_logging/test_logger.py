"""Tests for ConversionLogger and ConversionRecord."""

from __future__ import annotations

import logging

import pytest

from entropy_converter.config import ConverterConfig
from entropy_converter.converter import EntropyConverter
from entropy_converter.generators import CallableGenerator, SeededGenerator
from entropy_converter.logging.logger import ConversionLogger
from entropy_converter.logging.types import ConversionRecord


def _make_record(**overrides: object) -> ConversionRecord:
    """Create a ConversionRecord with sensible defaults, overridable."""
    defaults: dict[str, object] = {
        "target": 6,
        "result": 4,
        "source_range": 2,
        "path": "bits",
        "source_reads": 1,
        "recycles": 0,
        "buffered_bits": 29.415,
        "elapsed_ms": 0.25,
    }
    defaults.update(overrides)
    return ConversionRecord(**defaults)  # type: ignore[arg-type]


def _make_logger(log_level: str, diagnostic_mode: bool) -> ConversionLogger:
    config = ConverterConfig(
        _env_file=None,
        log_level=log_level,
        diagnostic_mode=diagnostic_mode,  # type: ignore[call-arg]
    )
    return ConversionLogger(config)


class TestConversionRecord:
    """Tests for ConversionRecord immutability."""

    def test_frozen(self) -> None:
        record = _make_record()
        with pytest.raises(AttributeError):
            record.result = 5  # type: ignore[misc]

    def test_slots(self) -> None:
        assert hasattr(_make_record(), "__slots__")

    def test_all_fields_accessible(self) -> None:
        record = _make_record()
        assert record.target == 6
        assert record.result == 4
        assert record.source_range == 2
        assert record.path == "bits"
        assert record.source_reads == 1
        assert record.recycles == 0
        assert record.buffered_bits == 29.415
        assert record.elapsed_ms == 0.25


class TestConversionLogger:
    """Tests for ConversionLogger."""

    def test_enabled(self) -> None:
        assert not _make_logger("none", False).enabled
        assert _make_logger("none", True).enabled
        assert _make_logger("summary", False).enabled

    def test_log_level_none_no_output(self, caplog: pytest.LogCaptureFixture) -> None:
        log = _make_logger("none", False)
        with caplog.at_level(logging.DEBUG, logger="entropy_converter"):
            log.log_conversion(_make_record())
        assert len(caplog.records) == 0

    def test_log_level_summary_output(self, caplog: pytest.LogCaptureFixture) -> None:
        log = _make_logger("summary", False)
        with caplog.at_level(logging.DEBUG, logger="entropy_converter"):
            log.log_conversion(_make_record(recycles=2))
        assert len(caplog.records) == 1
        msg = caplog.records[0].message
        assert "target=6" in msg
        assert "result=4" in msg
        assert "path=bits" in msg
        assert "recycles=2" in msg
        assert "buffered=29.415bits" in msg

    def test_log_level_full_json(self, caplog: pytest.LogCaptureFixture) -> None:
        log = _make_logger("full", False)
        with caplog.at_level(logging.DEBUG, logger="entropy_converter"):
            log.log_conversion(_make_record())
        assert len(caplog.records) == 1
        msg = caplog.records[0].message
        assert "conversion_record:" in msg
        assert '"path": "bits"' in msg
        assert '"source_reads": 1' in msg

    def test_diagnostic_mode_stores_records(self) -> None:
        log = _make_logger("none", True)
        for result in (1, 2, 3):
            log.log_conversion(_make_record(result=result))

        data = log.get_diagnostic_data()
        assert [r.result for r in data] == [1, 2, 3]

    def test_diagnostic_mode_false_no_storage(self) -> None:
        log = _make_logger("summary", False)
        log.log_conversion(_make_record())
        assert log.get_diagnostic_data() == []

    def test_get_diagnostic_data_returns_copy(self) -> None:
        log = _make_logger("none", True)
        log.log_conversion(_make_record())
        log.get_diagnostic_data().clear()
        assert len(log.get_diagnostic_data()) == 1

    def test_clear_diagnostic_data_drains_store(self) -> None:
        log = _make_logger("none", True)
        log.log_conversion(_make_record(result=1))
        log.log_conversion(_make_record(result=2))

        drained = log.clear_diagnostic_data()
        assert [r.result for r in drained] == [1, 2]
        assert log.get_diagnostic_data() == []
        log.log_conversion(_make_record(result=3))
        assert len(log.get_diagnostic_data()) == 1

    def test_summary_stats_empty(self) -> None:
        assert _make_logger("none", True).get_summary_stats() == {}

    def test_summary_stats_computed(self) -> None:
        log = _make_logger("none", True)
        log.log_conversion(_make_record(source_reads=1, recycles=0, elapsed_ms=1.0))
        log.log_conversion(
            _make_record(source_reads=3, recycles=2, elapsed_ms=3.0, buffered_bits=12.5)
        )

        stats = log.get_summary_stats()
        assert stats["total_conversions"] == 2
        assert stats["total_reads"] == 4
        assert stats["mean_reads"] == pytest.approx(2.0)
        assert stats["total_recycles"] == 2
        assert stats["recycle_rate"] == pytest.approx(0.5)
        assert stats["mean_elapsed_ms"] == pytest.approx(2.0)
        assert stats["max_elapsed_ms"] == pytest.approx(3.0)
        assert stats["final_buffered_bits"] == 12.5


class TestConverterIntegration:
    """Records produced by a converter carrying a logger."""

    def test_records_match_conversions(self) -> None:
        log = _make_logger("none", True)
        converter = EntropyConverter(logger=log)
        gen = SeededGenerator(seed=3)
        results = [converter.convert(10, gen) for _ in range(20)]

        data = log.get_diagnostic_data()
        assert [r.result for r in data] == results
        assert all(r.target == 10 for r in data)
        assert all(r.path == "bits" and r.source_range == 2 for r in data)
        assert data[-1].buffered_bits == pytest.approx(converter.buffered_entropy())

    def test_direct_path_recorded(self) -> None:
        log = _make_logger("none", True)
        converter = EntropyConverter(logger=log)
        die = CallableGenerator(lambda: 3, 1, 6)
        assert converter.convert(0, 2, 1, 6, die, limit=18) == 2

        (record,) = log.get_diagnostic_data()
        assert record.path == "direct"
        assert record.source_range == 6
        assert record.source_reads == 1
        assert record.recycles == 0

    def test_result_includes_output_offset(self) -> None:
        log = _make_logger("none", True)
        converter = EntropyConverter(logger=log)
        gen = SeededGenerator(seed=5)
        results = [converter.convert(10, 20, gen) for _ in range(20)]

        recorded = [r.result for r in log.get_diagnostic_data()]
        assert recorded == results
        assert all(10 <= r <= 20 for r in recorded)

    def test_degenerate_range_not_recorded(self) -> None:
        log = _make_logger("none", True)
        converter = EntropyConverter(logger=log)
        assert converter.convert(5, 5, SeededGenerator(seed=0)) == 5
        assert log.get_diagnostic_data() == []

    def test_summary_lines_emitted(self, caplog: pytest.LogCaptureFixture) -> None:
        converter = EntropyConverter(logger=_make_logger("summary", False))
        with caplog.at_level(logging.INFO, logger="entropy_converter"):
            converter.convert(1, 6, SeededGenerator(seed=0))
        assert any("path=bits" in r.message for r in caplog.records)
