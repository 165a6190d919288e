"""Registry-based factory for constructing converters and generators from config.

This module is the central wiring point: it maps the string identifiers in
:class:`~entropy_converter.config.ConverterConfig` to concrete classes.
Adding a new generator requires only registering it with
``@register_generator`` (or an entry point); nothing here changes.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any

from entropy_converter.config import ConverterConfig
from entropy_converter.converter import EntropyConverter
from entropy_converter.exceptions import ConfigValidationError
from entropy_converter.generators.registry import GeneratorRegistry
from entropy_converter.logging.logger import ConversionLogger

if TYPE_CHECKING:
    from entropy_converter.generators.base import UniformGenerator

logger = logging.getLogger("entropy_converter")


def _accepted_kwargs(cls: type, candidates: dict[str, Any]) -> dict[str, Any]:
    """Keep only the candidates that *cls*'s constructor accepts.

    Args:
        cls: The class to inspect.
        candidates: Keyword arguments we would like to pass.

    Returns:
        The subset of *candidates* named in the constructor signature.
    """
    try:
        params = inspect.signature(cls).parameters
    except (ValueError, TypeError):
        return {}
    if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params.values()):
        return dict(candidates)
    return {k: v for k, v in candidates.items() if k in params}


def build_generator(config: ConverterConfig | None = None) -> UniformGenerator:
    """Instantiate the generator named by ``config.generator_type``.

    ``generator_seed`` and ``generator_bits`` are passed as ``seed`` and
    ``bits`` to constructors that accept them.

    Raises:
        ConfigValidationError: If the generator name is unknown or the
            generator rejects its arguments.
    """
    config = config or ConverterConfig()
    try:
        generator_cls = GeneratorRegistry.get(config.generator_type)
    except KeyError as exc:
        raise ConfigValidationError(str(exc)) from exc

    kwargs = _accepted_kwargs(
        generator_cls,
        {"seed": config.generator_seed, "bits": config.generator_bits},
    )
    try:
        generator = generator_cls(**kwargs)
    except ValueError as exc:
        raise ConfigValidationError(
            f"Cannot construct generator {config.generator_type!r}: {exc}"
        ) from exc
    logger.debug(
        "Built generator %r with bounds [%d, %d]",
        generator.name,
        generator.min_value,
        generator.max_value,
    )
    return generator


def build_converter(config: ConverterConfig | None = None) -> EntropyConverter:
    """Construct an :class:`EntropyConverter` with the configured widths.

    A :class:`ConversionLogger` is attached unless logging is off and
    diagnostic mode is disabled.
    """
    config = config or ConverterConfig()
    conversion_logger = ConversionLogger(config)
    return EntropyConverter(
        config.result_bits,
        config.buffer_bits,
        logger=conversion_logger if conversion_logger.enabled else None,
    )
