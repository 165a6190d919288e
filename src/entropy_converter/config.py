"""Configuration system for entropy-converter.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (EC_*) -> .env file -> field defaults.

Overrides are applied via resolve_config() which creates a new config
instance without mutating the defaults.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from entropy_converter.exceptions import ConfigValidationError

_LOG_LEVELS: frozenset[str] = frozenset({"none", "summary", "full"})

# Smallest width that can hold a two-valued range plus its maximum.
MIN_WIDTH_BITS = 2


class ConverterConfig(BaseSettings):
    """Configuration for entropy-converter.

    Resolution order: init kwargs -> env vars (EC_*) -> .env file -> defaults.

    Fields are divided into three groups:
    - **Widths**: sizes of the integers holding buffered entropy.
    - **Generator**: which built-in generator the factory constructs.
    - **Logging**: per-conversion diagnostics.
    """

    model_config = SettingsConfigDict(
        env_prefix="EC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Widths ---

    result_bits: int = Field(
        default=64,
        description="Width of the buffered value/range; 2**bits - 1 is the default limit",
    )
    buffer_bits: int = Field(
        default=32,
        description="Width of the bit buffer used for power-of-two input spans",
    )

    # --- Generator ---

    generator_type: str = Field(
        default="system",
        description="Registered generator identifier: 'system', 'seeded', ...",
    )
    generator_seed: int | None = Field(
        default=None,
        description="Seed for reproducible generators (ignored by 'system')",
    )
    generator_bits: int = Field(
        default=32,
        description="Word width of built-in generators",
    )

    # --- Logging ---

    log_level: str = Field(
        default="none",
        description="Logging verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description=(
            "Store all conversion records in memory for analysis. The store is "
            "unbounded: one record per conversion until clear_diagnostic_data()"
        ),
    )

    @field_validator("result_bits", "buffer_bits")
    @classmethod
    def _check_width(cls, value: int) -> int:
        if value < MIN_WIDTH_BITS:
            raise ValueError(f"width must be at least {MIN_WIDTH_BITS} bits, got {value}")
        return value

    @field_validator("generator_bits")
    @classmethod
    def _check_generator_bits(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"generator_bits must be positive, got {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if value not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
        return value


_ALL_FIELDS: frozenset[str] = frozenset(ConverterConfig.model_fields.keys())


def make_config(**kwargs: Any) -> ConverterConfig:
    """Construct a config, converting pydantic errors to ConfigValidationError.

    Args:
        **kwargs: Field values overriding env vars and defaults.

    Returns:
        A validated ConverterConfig.

    Raises:
        ConfigValidationError: If any field fails validation.
    """
    try:
        return ConverterConfig(**kwargs)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def resolve_config(
    defaults: ConverterConfig,
    overrides: dict[str, Any] | None,
) -> ConverterConfig:
    """Create a new config instance merging defaults with overrides.

    Args:
        defaults: The base configuration loaded from environment.
        overrides: Field values to replace, keyed by field name.

    Returns:
        A new ConverterConfig with overrides applied, or *defaults* itself
        when there is nothing to override.

    Raises:
        ConfigValidationError: If a key is unknown or a value is invalid.
    """
    if not overrides:
        return defaults

    for key in overrides:
        if key not in _ALL_FIELDS:
            raise ConfigValidationError(f"Unknown config field: '{key}'")

    # model_copy(update=...) skips validation; model_validate runs it.
    merged = defaults.model_dump()
    merged.update(overrides)
    try:
        return ConverterConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc
