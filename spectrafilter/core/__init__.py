"""
Core building blocks.

Structure:
    errors.py    - FilterError hierarchy and ParameterWarning
    matrix.py    - Input validation and decompositions over numpy
    base.py      - Lifecycle base classes (UNCONFIGURED / CONFIGURED)
    api.py       - Filter, SupervisedFilter, ResponseFilter contracts
    config.py    - YAML configuration of registered names
    registry.py  - FilterRegistry for lookup and construction
"""

from spectrafilter.core.errors import (
    ConfigError,
    DecompositionError,
    FilterError,
    InverseTransformError,
    NonInvertibleCapabilityError,
    ParameterRangeError,
    ParameterWarning,
    ShapeMismatchError,
    UnconfiguredError,
)
from spectrafilter.core.base import (
    AlgorithmState,
    ConfiguredAlgorithm,
    MatrixAlgorithm,
    SupervisedAlgorithm,
    SupervisedAlgorithmWithResponseTransform,
    UnsupervisedAlgorithm,
)
from spectrafilter.core.api import Filter, ResponseFilter, SupervisedFilter, initialize_with_message
from spectrafilter.core.config import FilterConfig, RegistryConfig, load_config
from spectrafilter.core.registry import FilterRegistry, get_registry, reset_registry

__all__ = [
    'ConfigError',
    'DecompositionError',
    'FilterError',
    'InverseTransformError',
    'NonInvertibleCapabilityError',
    'ParameterRangeError',
    'ParameterWarning',
    'ShapeMismatchError',
    'UnconfiguredError',
    'AlgorithmState',
    'ConfiguredAlgorithm',
    'MatrixAlgorithm',
    'SupervisedAlgorithm',
    'SupervisedAlgorithmWithResponseTransform',
    'UnsupervisedAlgorithm',
    'Filter',
    'ResponseFilter',
    'SupervisedFilter',
    'initialize_with_message',
    'FilterConfig',
    'RegistryConfig',
    'load_config',
    'FilterRegistry',
    'get_registry',
    'reset_registry',
]
