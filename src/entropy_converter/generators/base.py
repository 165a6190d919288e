"""Abstract base class and structural protocol for uniform generators.

A generator is anything the converter can read raw entropy from: a
zero-argument call returning an integer, plus the inclusive bounds
``min_value``/``max_value`` of what it returns. The converter only
relies on the structural :class:`BoundedGenerator` protocol, so plain
objects work too. :class:`UniformGenerator` adds the lifecycle members
the built-in generators share.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class BoundedGenerator(Protocol):
    """Structural type accepted by ``EntropyConverter.convert``."""

    @property
    def min_value(self) -> int: ...

    @property
    def max_value(self) -> int: ...

    def __call__(self) -> int: ...


class UniformGenerator(ABC):
    """Abstract base for all built-in generators.

    Every call must return an integer uniformly distributed over
    ``[min_value, max_value]``. Failures (device errors, exhausted
    streams) are raised as-is; the converter never wraps them.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable generator identifier (e.g., ``'system'``)."""

    @property
    @abstractmethod
    def min_value(self) -> int:
        """Smallest value a call can return."""

    @property
    @abstractmethod
    def max_value(self) -> int:
        """Largest value a call can return."""

    @abstractmethod
    def __call__(self) -> int:
        """Return one uniform integer in ``[min_value, max_value]``."""

    @property
    def is_available(self) -> bool:
        """Whether the generator can currently produce values."""
        return True

    @property
    def cardinality(self) -> int:
        """Number of distinct values a call can return."""
        return self.max_value - self.min_value + 1

    def close(self) -> None:
        """Release resources. The default implementation does nothing."""

    def health_check(self) -> dict[str, Any]:
        """Return a status dictionary for this generator.

        Returns:
            Dictionary with at least ``'generator'`` and ``'healthy'`` keys.
        """
        return {
            "generator": self.name,
            "healthy": self.is_available,
            "min_value": self.min_value,
            "max_value": self.max_value,
        }
