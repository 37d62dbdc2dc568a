"""
spectrafilter: stateful matrix preprocessing filters.

Public API:
    from spectrafilter import GLSW
    glsw = GLSW(alpha=1e-3).configure(X1, X2)
    X_filtered = glsw.transform(X)

Layers:
    spectrafilter.core      Lifecycle base classes, filter contracts, errors,
                            matrix helpers, YAML config and registry
    spectrafilter.filters   Centering and covariance-weighted projection
                            filters (GLSW, EPO, Y-gradient variants)
    spectrafilter.ica       Negative-entropy approximation functions and FastICA
"""

from spectrafilter.core import (
    AlgorithmState,
    DecompositionError,
    Filter,
    FilterError,
    NonInvertibleCapabilityError,
    ParameterRangeError,
    ParameterWarning,
    ResponseFilter,
    ShapeMismatchError,
    SupervisedFilter,
    UnconfiguredError,
    get_registry,
)
from spectrafilter.filters import EPO, GLSW, Center, ResponseCenter, YGradientEPO, YGradientGLSW
from spectrafilter.ica import Cube, Exponential, FastICA, ICAAlgorithm, LogCosH, NegEntropyApproximation

__version__ = "0.1.0"

__all__ = [
    # Filters
    "Center",
    "ResponseCenter",
    "GLSW",
    "EPO",
    "YGradientGLSW",
    "YGradientEPO",
    # ICA
    "FastICA",
    "ICAAlgorithm",
    "NegEntropyApproximation",
    "Cube",
    "Exponential",
    "LogCosH",
    # Contracts and lifecycle
    "Filter",
    "SupervisedFilter",
    "ResponseFilter",
    "AlgorithmState",
    "get_registry",
    # Errors
    "FilterError",
    "ShapeMismatchError",
    "UnconfiguredError",
    "ParameterRangeError",
    "NonInvertibleCapabilityError",
    "DecompositionError",
    "ParameterWarning",
]
