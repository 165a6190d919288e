"""Generator subsystem for entropy-converter.

Re-exports the ABC, protocol, registry, and all built-in generators for
convenient access::

    from entropy_converter.generators import SystemRandomDevice, SeededGenerator
"""

from entropy_converter.generators.base import BoundedGenerator, UniformGenerator
from entropy_converter.generators.registry import GeneratorRegistry, register_generator
from entropy_converter.generators.seeded import SeededGenerator
from entropy_converter.generators.system import SystemRandomDevice
from entropy_converter.generators.wrappers import CallableGenerator, MeasuringGenerator

__all__ = [
    "BoundedGenerator",
    "CallableGenerator",
    "GeneratorRegistry",
    "MeasuringGenerator",
    "SeededGenerator",
    "SystemRandomDevice",
    "UniformGenerator",
    "register_generator",
]
