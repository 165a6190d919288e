"""Shared pytest fixtures for entropy-converter tests.

Provides converters of each supported width, seeded generators for
reproducible runs, and measuring wrappers for entropy accounting.
"""

from __future__ import annotations

import pytest

from entropy_converter.config import ConverterConfig
from entropy_converter.converter import EntropyConverter
from entropy_converter.generators import MeasuringGenerator, SeededGenerator


@pytest.fixture
def default_config() -> ConverterConfig:
    """Return a ConverterConfig with all default values."""
    return ConverterConfig()


@pytest.fixture
def diagnostic_config() -> ConverterConfig:
    """Return a config with diagnostic mode and full logging enabled."""
    return ConverterConfig(log_level="full", diagnostic_mode=True)


@pytest.fixture
def converter() -> EntropyConverter:
    """Return a fresh 64-bit converter with a 32-bit bit buffer."""
    return EntropyConverter()


@pytest.fixture(params=[16, 32, 64], ids=lambda bits: f"{bits}bit")
def sized_converter(request: pytest.FixtureRequest) -> EntropyConverter:
    """Return a fresh converter for each of the 16/32/64-bit widths."""
    return EntropyConverter(result_bits=request.param)


@pytest.fixture
def word_generator() -> SeededGenerator:
    """Return a seeded 32-bit word generator (power-of-two input path)."""
    return SeededGenerator(seed=42, bits=32)


@pytest.fixture
def die_generator() -> SeededGenerator:
    """Return a seeded generator over [1, 6] (direct input path)."""
    return SeededGenerator(seed=7, min_value=1, max_value=6)


@pytest.fixture
def measuring_generator(word_generator: SeededGenerator) -> MeasuringGenerator:
    """Return a read-counting wrapper around the seeded word generator."""
    return MeasuringGenerator(word_generator)
