"""Tests for entropy_converter.config.

Covers:
- Default values
- Environment variable loading (monkeypatch)
- Field validators for widths and log level
- resolve_config merge logic and unknown-key rejection
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from entropy_converter.config import ConverterConfig, make_config, resolve_config
from entropy_converter.exceptions import ConfigValidationError


class TestConverterConfigDefaults:
    def test_width_defaults(self, default_config: ConverterConfig) -> None:
        assert default_config.result_bits == 64
        assert default_config.buffer_bits == 32

    def test_generator_defaults(self, default_config: ConverterConfig) -> None:
        assert default_config.generator_type == "system"
        assert default_config.generator_seed is None
        assert default_config.generator_bits == 32

    def test_logging_defaults(self, default_config: ConverterConfig) -> None:
        assert default_config.log_level == "none"
        assert default_config.diagnostic_mode is False


class TestEnvironment:
    def test_env_vars_are_read(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EC_RESULT_BITS", "16")
        monkeypatch.setenv("EC_GENERATOR_TYPE", "seeded")
        monkeypatch.setenv("EC_GENERATOR_SEED", "1234")
        cfg = ConverterConfig()
        assert cfg.result_bits == 16
        assert cfg.generator_type == "seeded"
        assert cfg.generator_seed == 1234

    def test_init_kwargs_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EC_RESULT_BITS", "16")
        assert ConverterConfig(result_bits=32).result_bits == 32


class TestValidation:
    @pytest.mark.parametrize("field", ["result_bits", "buffer_bits"])
    def test_width_too_small(self, field: str) -> None:
        with pytest.raises(ValidationError):
            ConverterConfig(**{field: 1})

    def test_generator_bits_positive(self) -> None:
        with pytest.raises(ValidationError):
            ConverterConfig(generator_bits=0)

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ValidationError):
            ConverterConfig(log_level="verbose")

    def test_make_config_wraps_errors(self) -> None:
        with pytest.raises(ConfigValidationError):
            make_config(result_bits=0)

    def test_make_config(self) -> None:
        assert make_config(log_level="summary").log_level == "summary"


class TestResolveConfig:
    def test_no_overrides_returns_defaults(self, default_config: ConverterConfig) -> None:
        assert resolve_config(default_config, None) is default_config
        assert resolve_config(default_config, {}) is default_config

    def test_overrides_applied(self, default_config: ConverterConfig) -> None:
        cfg = resolve_config(default_config, {"result_bits": 16, "diagnostic_mode": True})
        assert cfg.result_bits == 16
        assert cfg.diagnostic_mode is True
        assert cfg.buffer_bits == default_config.buffer_bits

    def test_defaults_not_mutated(self, default_config: ConverterConfig) -> None:
        resolve_config(default_config, {"result_bits": 16})
        assert default_config.result_bits == 64

    def test_values_are_coerced(self, default_config: ConverterConfig) -> None:
        assert resolve_config(default_config, {"result_bits": "32"}).result_bits == 32

    def test_unknown_key_rejected(self, default_config: ConverterConfig) -> None:
        with pytest.raises(ConfigValidationError, match="no_such_field"):
            resolve_config(default_config, {"no_such_field": 1})

    def test_invalid_value_rejected(self, default_config: ConverterConfig) -> None:
        with pytest.raises(ConfigValidationError):
            resolve_config(default_config, {"log_level": "loud"})
