"""
Base algorithm classes with an explicit configuration lifecycle.

Algorithms follow "configure once, transform many times, reset to retrain".
Every configured algorithm is a two-state machine:

    UNCONFIGURED --configure()--> CONFIGURED
    CONFIGURED   --reset()------> UNCONFIGURED

Hyperparameter updates go through _update_parameter(), which calls reset().
That is the only way a parameter change touches derived state.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, Tuple

import numpy as np

from spectrafilter.core.errors import NonInvertibleCapabilityError, UnconfiguredError
from spectrafilter.core.matrix import as_matrix, as_response


logger = logging.getLogger(__name__)


class AlgorithmState(str, Enum):
    """Lifecycle states of a configured algorithm."""
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"


class MatrixAlgorithm(ABC):
    """
    Base class for all matrix algorithms.

    Subclasses must implement _do_transform(). Invertible algorithms also
    override _do_inverse_transform().
    """

    # Names of hyperparameters exposed through get_params/set_params.
    # Each name needs a read property and a set_<name>() method.
    _parameters: Tuple[str, ...] = ()

    def transform(self, X) -> np.ndarray:
        """
        Apply the transformation this algorithm represents.

        Args:
            X: Matrix (rows=samples, cols=features)

        Returns:
            New matrix with the same number of rows as X
        """
        X = as_matrix(X)
        return self._do_transform(X)

    @abstractmethod
    def _do_transform(self, X: np.ndarray) -> np.ndarray:
        pass

    def inverse_transform(self, X) -> np.ndarray:
        """
        Apply the inverse transformation.

        Raises:
            NonInvertibleCapabilityError: If is_non_invertible is True
        """
        if self.is_non_invertible:
            raise NonInvertibleCapabilityError(type(self))

        X = as_matrix(X)
        return self._do_inverse_transform(X)

    def _do_inverse_transform(self, X: np.ndarray) -> np.ndarray:
        raise NonInvertibleCapabilityError(type(self))

    @property
    def is_non_invertible(self) -> bool:
        """
        Whether an inverse transform is known to be impossible.

        False does not guarantee success, it only means the algorithm
        cannot tell in advance.
        """
        return False

    def get_params(self) -> Dict[str, Any]:
        """Return the current hyperparameters."""
        return {name: getattr(self, name) for name in self._parameters}

    def set_params(self, **params) -> "MatrixAlgorithm":
        """Update hyperparameters through their set_<name>() methods."""
        for name, value in params.items():
            if name not in self._parameters:
                raise ValueError(
                    f"Unknown parameter '{name}' for {type(self).__name__}. "
                    f"Available: {', '.join(self._parameters) or 'none'}"
                )
            getattr(self, f"set_{name}")(value)
        return self

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.get_params().items())
        return f"{type(self).__name__}({params})"


class ConfiguredAlgorithm(MatrixAlgorithm):
    """
    Base class for algorithms that need configuration data before transforming.

    Not meant to be subclassed by algorithms directly; use
    UnsupervisedAlgorithm or SupervisedAlgorithm, which expose configure().
    """

    def __init__(self):
        self._state = AlgorithmState.UNCONFIGURED

    @property
    def state(self) -> AlgorithmState:
        return self._state

    @property
    def is_configured(self) -> bool:
        return self._state is AlgorithmState.CONFIGURED

    def ensure_configured(self):
        """Raise UnconfiguredError unless the algorithm is configured."""
        if not self.is_configured:
            raise UnconfiguredError(type(self))

    def reset(self):
        """Discard derived state and return to UNCONFIGURED."""
        self._do_reset()
        if self._state is AlgorithmState.CONFIGURED:
            logger.debug(f"{type(self).__name__}: configured -> unconfigured")
        self._state = AlgorithmState.UNCONFIGURED

    @abstractmethod
    def _do_reset(self):
        """Drop all derived state."""
        pass

    def _update_parameter(self, name: str, value: Any):
        """Assign a validated hyperparameter and invalidate derived state."""
        setattr(self, f"_{name}", value)
        self.reset()

    def _run_configure(self, configure: Callable, *matrices: np.ndarray):
        # Derived state is all-or-nothing: a failing configure leaves the
        # instance unconfigured.
        self.reset()
        try:
            configure(*matrices)
        except Exception:
            self._do_reset()
            raise

        self._state = AlgorithmState.CONFIGURED
        logger.debug(f"{type(self).__name__}: unconfigured -> configured")

    def transform(self, X) -> np.ndarray:
        self.ensure_configured()
        return super().transform(X)

    def inverse_transform(self, X) -> np.ndarray:
        self.ensure_configured()
        return super().inverse_transform(X)

    @property
    def is_non_invertible(self) -> bool:
        # Unconfigured algorithms are never invertible
        return not self.is_configured


class UnsupervisedAlgorithm(ConfiguredAlgorithm):
    """Algorithm configured on a single feature matrix."""

    def configure(self, X) -> "UnsupervisedAlgorithm":
        """Configure on the given matrix."""
        X = as_matrix(X)
        self._run_configure(self._do_configure, X)
        return self

    @abstractmethod
    def _do_configure(self, X: np.ndarray):
        pass

    def configure_and_transform(self, X) -> np.ndarray:
        """Transform X, configuring on it first if not configured yet."""
        if not self.is_configured:
            self.configure(X)
        return self.transform(X)


class SupervisedAlgorithm(ConfiguredAlgorithm):
    """Algorithm configured on a feature matrix and a target matrix."""

    def configure(self, X, y) -> "SupervisedAlgorithm":
        """
        Configure on the given feature and target matrices.

        Raises:
            ShapeMismatchError: If either matrix is missing or the shapes
                are incompatible with the algorithm
        """
        X = as_matrix(X, name="X")
        y = as_response(y, name="y")
        self._run_configure(self._do_configure, X, y)
        return self

    @abstractmethod
    def _do_configure(self, X: np.ndarray, y: np.ndarray):
        pass

    def configure_and_transform(self, X, y) -> np.ndarray:
        """Transform X, configuring on (X, y) first if not configured yet."""
        if not self.is_configured:
            self.configure(X, y)
        return self.transform(X)


class SupervisedAlgorithmWithResponseTransform(SupervisedAlgorithm):
    """Supervised algorithm that can also transform target matrices."""

    def transform_response(self, y) -> np.ndarray:
        """Apply the response-side transformation to y."""
        self.ensure_configured()
        y = as_response(y, name="y")
        return self._do_transform_response(y)

    @abstractmethod
    def _do_transform_response(self, y: np.ndarray) -> np.ndarray:
        pass

    def inverse_transform_response(self, y) -> np.ndarray:
        """Map transformed responses (e.g. predictions) back to the original scale."""
        self.ensure_configured()
        y = as_response(y, name="y")
        return self._do_inverse_transform_response(y)

    def _do_inverse_transform_response(self, y: np.ndarray) -> np.ndarray:
        raise NonInvertibleCapabilityError(type(self))

    def configure_and_transform_response(self, X, y) -> np.ndarray:
        """Transform y, configuring on (X, y) first if not configured yet."""
        if not self.is_configured:
            self.configure(X, y)
        return self.transform_response(y)
