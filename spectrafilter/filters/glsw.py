"""
Generalized Least Squares Weighting (GLSW) and External Parameter
Orthogonalization (EPO).

GLSW builds a symmetric projection matrix G that downweights directions of
high interference variance, estimated from the difference between two
replicate measurements of the same samples:

    Xd = center(X2) - center(X1)
    C  = Xd^T Xd
    V  = eigenvectors(C)            (descending eigenvalue order)
    D  = sqrt(S^2 / alpha + I)      (S = singular values of C)
    G  = V D^-1 V^T

transform(X) = X G. alpha controls filter strength: larger values filter
less, smaller values filter more.

EPO restricts the downweighting to the N strongest interference directions;
the remaining directions pass through unchanged.

Reference:
    http://wiki.eigenvector.com/index.php?title=Advanced_Preprocessing:_Multivariate_Filtering
"""

import logging
import numbers
import warnings

import numpy as np

from spectrafilter.core.api import SupervisedFilter
from spectrafilter.core.base import SupervisedAlgorithm
from spectrafilter.core.errors import ParameterRangeError, ParameterWarning
from spectrafilter.core.matrix import check_columns, check_same_shape, singular_values, symmetric_eigh
from spectrafilter.filters.center import Center


logger = logging.getLogger(__name__)


DEFAULT_ALPHA = 1e-3
DEFAULT_N = 5


class GLSW(SupervisedAlgorithm, SupervisedFilter):
    """
    Generalized Least Squares Weighting.

    Configured on two replicate matrices X1, X2 of identical shape.

    Args:
        alpha: Defines how strongly GLSW downweights interferences (> 0)
    """

    _parameters = ('alpha',)

    def __init__(self, alpha: float = DEFAULT_ALPHA):
        super().__init__()
        self._alpha = DEFAULT_ALPHA
        self._G = None
        self.set_alpha(alpha)

    @property
    def alpha(self) -> float:
        return self._alpha

    def set_alpha(self, alpha: float) -> bool:
        """
        Set alpha. Larger values (> 0.001) decrease the filtering effect,
        smaller values increase it.

        A non-positive alpha is ignored with a ParameterWarning and does not
        reset the algorithm.

        Returns:
            True if the value was accepted
        """
        if not alpha > 0:
            warnings.warn(
                f"Alpha must be > 0 but was {alpha}. Keeping {self._alpha}.",
                ParameterWarning,
                stacklevel=2,
            )
            return False

        self._update_parameter('alpha', float(alpha))
        return True

    @property
    def projection_matrix(self) -> np.ndarray:
        """The projection matrix G (columns x columns)."""
        self.ensure_configured()
        return self._G.copy()

    def initialize(self, predictors, response) -> None:
        self.configure(predictors, response)

    def _do_reset(self):
        self._G = None

    def _check(self, X: np.ndarray, y: np.ndarray):
        check_same_shape(X, y, "Matrices X and y must have the same shape")

    def _do_configure(self, X: np.ndarray, y: np.ndarray):
        self._check(X, y)

        C = self._covariance_matrix(X, y)

        V = self._eigenvector_matrix(C)
        d = self._weights(C)

        # V diag(1/d) V^T
        self._G = (V / d) @ V.T

        logger.debug(f"{type(self).__name__}: projection matrix {self._G.shape}, alpha={self._alpha}")

    def _covariance_matrix(self, x1: np.ndarray, x2: np.ndarray) -> np.ndarray:
        x1_centered = Center().configure_and_transform(x1)
        x2_centered = Center().configure_and_transform(x2)

        Xd = x2_centered - x1_centered

        return Xd.T @ Xd

    def _eigenvector_matrix(self, C: np.ndarray) -> np.ndarray:
        _, V = symmetric_eigh(C)
        return V

    def _weights(self, C: np.ndarray) -> np.ndarray:
        """Diagonal of the weight matrix D."""
        s_squared = singular_values(C) ** 2
        return np.sqrt(s_squared / self._alpha + 1.0)

    def _do_transform(self, X: np.ndarray) -> np.ndarray:
        check_columns(X, self._G.shape[0])
        return X @ self._G

    @property
    def is_non_invertible(self) -> bool:
        return True

    def __str__(self) -> str:
        if not self.is_configured:
            return f"{type(self).__name__} (unconfigured, alpha={self._alpha})"
        return (
            f"Generalized Least Squares Weighting. "
            f"Projection Matrix shape: {self._G.shape[0]}x{self._G.shape[1]}"
        )


class EPO(GLSW):
    """
    External Parameter Orthogonalization.

    Like GLSW, but only the N dominant interference directions are
    downweighted; the weights of all other directions are 1.

    Args:
        n: Number of interference directions to downweight
           (1 <= n <= number of columns)
        alpha: Damping term of the downweighting (> 0)
    """

    _parameters = ('n', 'alpha')

    def __init__(self, n: int = DEFAULT_N, alpha: float = DEFAULT_ALPHA):
        self._n = DEFAULT_N
        super().__init__(alpha=alpha)
        self.set_n(n)

    @property
    def n(self) -> int:
        return self._n

    def set_n(self, n: int):
        """
        Set the number of interference directions to downweight.

        Raises:
            ParameterRangeError: If n is not a positive integer
        """
        if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n <= 0:
            raise ParameterRangeError('n', n, "a positive integer")

        self._update_parameter('n', int(n))

    def _check(self, X: np.ndarray, y: np.ndarray):
        super()._check(X, y)
        self._check_n(X)

    def _check_n(self, X: np.ndarray):
        if self._n > X.shape[1]:
            raise ParameterRangeError('n', self._n, f"<= the number of columns ({X.shape[1]})")

    def _weights(self, C: np.ndarray) -> np.ndarray:
        d = super()._weights(C)
        d[self._n:] = 1.0
        return d

    def __str__(self) -> str:
        if not self.is_configured:
            return f"{type(self).__name__} (unconfigured, n={self._n}, alpha={self._alpha})"
        return (
            f"External Parameter Orthogonalization (n={self._n}). "
            f"Projection Matrix shape: {self._G.shape[0]}x{self._G.shape[1]}"
        )
