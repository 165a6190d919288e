"""Name lookup for generator classes, used by ``build_generator``.

``config.generator_type`` is resolved here. The built-in ``system`` and
``seeded`` generators register themselves when their modules are
imported. Generators shipped by other distributions are declared under
the ``entropy_converter.generators`` entry-point group::

    [project.entry-points."entropy_converter.generators"]
    hwrng = "my_package.hwrng:HardwareGenerator"

Plugins are imported only when a name is not found among the registered
classes, so a broken plugin cannot affect the built-ins.
"""

from __future__ import annotations

import importlib.metadata
import inspect
import logging
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Callable

    from entropy_converter.generators.base import UniformGenerator

logger = logging.getLogger("entropy_converter")

_PLUGIN_GROUP = "entropy_converter.generators"

# Members the converter reads from every generator instance.
_REQUIRED_MEMBERS = ("min_value", "max_value", "__call__")


def _check_generator_class(name: str, generator_cls: object) -> None:
    """Reject anything ``build_generator`` could not instantiate and use.

    Raises:
        TypeError: If *generator_cls* is not a concrete class declaring
            ``min_value``, ``max_value`` and ``__call__``.
    """
    if not isinstance(generator_cls, type):
        raise TypeError(f"Generator {name!r} must be a class, got {generator_cls!r}")
    # dir() of a class skips metaclass members, so type.__call__ is not counted.
    missing = [m for m in _REQUIRED_MEMBERS if m not in dir(generator_cls)]
    if missing:
        raise TypeError(
            f"Generator {name!r} ({generator_cls.__qualname__}) does not declare "
            f"{', '.join(missing)}"
        )
    if inspect.isabstract(generator_cls):
        raise TypeError(f"Generator {name!r} ({generator_cls.__qualname__}) is abstract")


class GeneratorRegistry:
    """Maps generator names to classes.

    Names are unique: registering a second class under a taken name is an
    error, and a plugin that reuses a built-in name is ignored.
    """

    _registry: ClassVar[dict[str, type[UniformGenerator]]] = {}
    _plugins_loaded: ClassVar[bool] = False

    @classmethod
    def add(cls, name: str, generator_cls: type[UniformGenerator]) -> None:
        """Register *generator_cls* under *name*.

        Re-registering the same class is allowed (module reloads).

        Raises:
            TypeError: If *generator_cls* is not a usable generator class.
            ValueError: If *name* already belongs to another class.
        """
        _check_generator_class(name, generator_cls)
        existing = cls._registry.get(name)
        if existing is not None and existing is not generator_cls:
            raise ValueError(
                f"Generator name {name!r} is already used by {existing.__qualname__}"
            )
        cls._registry[name] = generator_cls

    @classmethod
    def register(cls, name: str) -> Callable[[type[UniformGenerator]], type[UniformGenerator]]:
        """Class decorator form of :meth:`add`."""

        def decorator(generator_cls: type[UniformGenerator]) -> type[UniformGenerator]:
            cls.add(name, generator_cls)
            return generator_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type[UniformGenerator]:
        """Return the class registered under *name*.

        Raises:
            KeyError: If neither a registered class nor a plugin has *name*.
        """
        if name not in cls._registry:
            cls._load_plugins()
        try:
            return cls._registry[name]
        except KeyError:
            known = ", ".join(sorted(cls._registry)) or "(none)"
            raise KeyError(f"Unknown generator {name!r}; known generators: {known}") from None

    @classmethod
    def names(cls) -> list[str]:
        """Sorted names of all generators, plugins included."""
        cls._load_plugins()
        return sorted(cls._registry)

    @classmethod
    def _load_plugins(cls) -> None:
        if cls._plugins_loaded:
            return
        cls._plugins_loaded = True
        for entry_point in importlib.metadata.entry_points(group=_PLUGIN_GROUP):
            if entry_point.name in cls._registry:
                logger.warning(
                    "Ignoring generator plugin %r (%s): name already registered",
                    entry_point.name,
                    entry_point.value,
                )
                continue
            try:
                cls.add(entry_point.name, entry_point.load())
            except (ImportError, AttributeError, TypeError, ValueError) as exc:
                logger.warning(
                    "Skipping generator plugin %r (%s): %s",
                    entry_point.name,
                    entry_point.value,
                    exc,
                )
            else:
                logger.debug("Registered generator plugin %r", entry_point.name)


register_generator = GeneratorRegistry.register
