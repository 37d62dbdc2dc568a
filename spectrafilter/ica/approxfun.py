"""
Negative-entropy approximation functions for FastICA.

Each strategy maps a samples x features matrix X to the pair
(G(X), G'(X)): G is applied elementwise, G' is the elementwise derivative
averaged over the columns of each row, giving a (rows, 1) column vector.

    cube         G(x) = x^3               G'(x) = 3 x^2
    exp          G(x) = x exp(-x^2/2)     G'(x) = (1 - x^2) exp(-x^2/2)
    logcosh      G(x) = tanh(a x)         G'(x) = a (1 - tanh(a x)^2)
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, NamedTuple

import numpy as np

from spectrafilter.core.matrix import as_matrix


class ApproximationResult(NamedTuple):
    """Function value and per-row mean derivative."""
    value: np.ndarray
    derivative: np.ndarray


class NegEntropyApproximation(ABC):
    """Nonlinearity used by the FastICA fixed-point iteration."""

    name: str = ""

    def apply(self, X) -> ApproximationResult:
        """
        Apply the approximation function to X.

        Args:
            X: Matrix (rows=samples, cols=features)

        Returns:
            ApproximationResult(value, derivative), value with the shape of X,
            derivative with shape (rows, 1)
        """
        return self._apply(as_matrix(X))

    @abstractmethod
    def _apply(self, X: np.ndarray) -> ApproximationResult:
        pass

    def get_params(self) -> Dict[str, Any]:
        return {}

    def set_params(self, **params) -> "NegEntropyApproximation":
        for key, value in params.items():
            setter = getattr(self, f"set_{key}", None)
            if setter is None:
                raise ValueError(f"Unknown parameter '{key}' for {type(self).__name__}")
            setter(value)
        return self

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.get_params().items())
        return f"{type(self).__name__}({params})"


class Cube(NegEntropyApproximation):

    name = "cube"

    def _apply(self, X: np.ndarray) -> ApproximationResult:
        gx = X ** 3
        g_x = (3.0 * X ** 2).mean(axis=1, keepdims=True)
        return ApproximationResult(gx, g_x)


class Exponential(NegEntropyApproximation):

    name = "exp"

    def _apply(self, X: np.ndarray) -> ApproximationResult:
        x_squared = X ** 2
        exp = np.exp(-x_squared / 2.0)

        gx = X * exp
        g_x = ((1.0 - x_squared) * exp).mean(axis=1, keepdims=True)
        return ApproximationResult(gx, g_x)


class LogCosH(NegEntropyApproximation):
    """
    LogCosH approximation.

    Args:
        alpha: Scaling of the input. Values near zero flatten the
            derivative but are not rejected.
    """

    name = "logcosh"

    def __init__(self, alpha: float = 1.0):
        self._alpha = float(alpha)

    @property
    def alpha(self) -> float:
        return self._alpha

    def set_alpha(self, alpha: float):
        self._alpha = float(alpha)

    def get_params(self) -> Dict[str, Any]:
        return {'alpha': self._alpha}

    def _apply(self, X: np.ndarray) -> ApproximationResult:
        gx = np.tanh(self._alpha * X)
        g_x = (self._alpha * (1.0 - gx ** 2)).mean(axis=1, keepdims=True)
        return ApproximationResult(gx, g_x)
