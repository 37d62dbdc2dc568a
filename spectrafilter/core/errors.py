"""
Filter Errors

Every error raised by spectrafilter derives from FilterError, so callers can
catch the whole family in one place. The concrete kinds also derive from the
matching builtin (ValueError, RuntimeError, ArithmeticError) so generic
handlers keep working.

Usage:
    from spectrafilter.core.errors import UnconfiguredError

    try:
        glsw.transform(X)
    except UnconfiguredError as e:
        print(f"Configure first: {e}")
"""

from typing import Optional, Sequence, Tuple


class FilterError(Exception):
    """Base class for all filter errors."""


class ShapeMismatchError(FilterError, ValueError):
    """Raised when matrix shapes are incompatible with an algorithm."""

    def __init__(self, message: str, shapes: Optional[Sequence[Tuple[int, ...]]] = None):
        self.shapes = list(shapes) if shapes else []

        if self.shapes:
            shape_str = ", ".join(f"{s[0]}x{s[1]}" if len(s) == 2 else str(s) for s in self.shapes)
            message = f"Invalid shapes {shape_str}: {message}"

        super().__init__(message)


class UnconfiguredError(FilterError, RuntimeError):
    """Raised when an algorithm is used before it has been configured."""

    def __init__(self, algorithm: type):
        self.algorithm = algorithm
        super().__init__(f"Algorithm {algorithm.__name__} requires configuration")


class ParameterRangeError(FilterError, ValueError):
    """Raised when a hyperparameter is outside its valid range."""

    def __init__(self, parameter: str, value, expected: str):
        self.parameter = parameter
        self.value = value
        super().__init__(f"Parameter '{parameter}' must be {expected} but was {value!r}")


class InverseTransformError(FilterError):
    """Raised when an inverse transformation fails."""


class NonInvertibleCapabilityError(InverseTransformError):
    """Raised on inverse transformation of an algorithm that declares itself non-invertible."""

    def __init__(self, algorithm: type):
        self.algorithm = algorithm
        super().__init__(f"Algorithm {algorithm.__name__} is not invertible")


class DecompositionError(FilterError, ArithmeticError):
    """Raised when an eigen- or singular value decomposition fails."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        super().__init__(f"Decomposition '{operation}' failed: {reason}")


class ConfigError(FilterError, ValueError):
    """Raised when a filter configuration entry is malformed."""


class ParameterWarning(UserWarning):
    """Emitted when an invalid hyperparameter is ignored and the previous value kept."""
