"""Exception hierarchy for entropy-converter.

All exceptions derive from EntropyConverterError, enabling broad catch
patterns at the application boundary while allowing fine-grained handling
internally. The conversion errors additionally derive from the matching
builtin (``ValueError``, ``OverflowError``) so callers that only know the
builtins still catch them.

Exceptions raised by a caller-supplied generator are never wrapped.
"""


class EntropyConverterError(Exception):
    """Base exception for all entropy-converter errors."""


class ConversionError(EntropyConverterError):
    """A conversion call was rejected.

    The converter instance stays usable: buffered entropy is unchanged.
    """


class InvalidOutputRangeError(ConversionError, ValueError):
    """The requested output range is empty or inverted."""


class InvalidInputRangeError(ConversionError, ValueError):
    """The declared input range of the generator is empty or inverted."""


class BufferTooSmallError(ConversionError, OverflowError):
    """The input span does not fit the configured integer widths.

    Raised when a power-of-two span exceeds the bit buffer, or when the
    product of input and output cardinalities would overflow the result
    width.
    """


class RangeTooLargeError(ConversionError, OverflowError):
    """The output cardinality exceeds what ``limit`` and the source support."""


class SourceOutOfRangeError(ConversionError, ValueError):
    """The generator returned a value outside its declared bounds."""


class StateDuplicationError(EntropyConverterError, TypeError):
    """Attempted to copy or pickle a converter.

    Buffered entropy must never be duplicated; use ``take()`` or
    ``move_from()`` to relocate it.
    """


class ConfigValidationError(EntropyConverterError):
    """Configuration field validation failed.

    Raised for unknown override keys, unsupported integer widths, or an
    invalid ``limit``.
    """
