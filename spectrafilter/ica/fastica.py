"""
FastICA: fixed-point independent component analysis.

Extracts statistically independent sources from a linear mixture by
maximizing non-Gaussianity, measured through a negative-entropy
approximation function (see approxfun.py).

Two extraction schemes:
- deflation: components one at a time, each decorrelated from the previous
- parallel:  all components at once with symmetric decorrelation

Reference:
    Hyvarinen, A. and Oja, E. (2000). Independent component analysis:
    algorithms and applications. Neural Networks 13(4-5), 411-430.
"""

import logging
import numbers
import warnings
from enum import Enum
from typing import Tuple, Union

import numpy as np
from sklearn.exceptions import ConvergenceWarning
from sklearn.utils import check_random_state

from spectrafilter.core.api import Filter
from spectrafilter.core.base import UnsupervisedAlgorithm
from spectrafilter.core.errors import DecompositionError, ParameterRangeError, ParameterWarning
from spectrafilter.core.matrix import check_columns, symmetric_eigh, thin_svd
from spectrafilter.ica.approxfun import LogCosH, NegEntropyApproximation


logger = logging.getLogger(__name__)


class ICAAlgorithm(str, Enum):
    """Extraction scheme."""
    DEFLATION = "deflation"
    PARALLEL = "parallel"


def symmetric_decorrelation(W: np.ndarray) -> np.ndarray:
    """(W W^T)^(-1/2) W"""
    s, u = symmetric_eigh(W @ W.T)
    s = np.clip(s, a_min=np.finfo(W.dtype).tiny, a_max=None)
    return (u * (1.0 / np.sqrt(s))) @ u.T @ W


def _gram_schmidt(w: np.ndarray, W: np.ndarray, j: int) -> np.ndarray:
    """Remove from w its projection onto the first j rows of W."""
    if j == 0:
        return w
    Wp = W[:j]
    return w - (w @ Wp.T) @ Wp


class FastICA(UnsupervisedAlgorithm, Filter):
    """
    FastICA.

    configure(X) learns the unmixing from X (rows=samples, cols=mixed
    signals); transform(X) returns the estimated sources of new data.

    Args:
        n_components: Number of sources to extract (ignored when whiten=False)
        whiten: Center and whiten the data before the iteration
        fun: Approximation function instance or registry name
        max_iter: Maximum iterations per fixed-point run
        tol: Convergence tolerance
        algorithm: 'deflation' or 'parallel'
        random_state: Seed or RandomState for the initial unmixing matrix
    """

    _parameters = ('n_components', 'whiten', 'fun', 'max_iter', 'tol', 'algorithm', 'random_state')

    def __init__(
        self,
        n_components: int = 5,
        whiten: bool = True,
        fun: Union[NegEntropyApproximation, str, None] = None,
        max_iter: int = 500,
        tol: float = 1e-4,
        algorithm: Union[ICAAlgorithm, str] = ICAAlgorithm.DEFLATION,
        random_state=None,
    ):
        super().__init__()
        self._n_components = 5
        self._whiten = True
        self._fun = LogCosH()
        self._max_iter = 500
        self._tol = 1e-4
        self._algorithm = ICAAlgorithm.DEFLATION
        self._random_state = None
        self._do_reset()

        self.set_n_components(n_components)
        self.set_whiten(whiten)
        if fun is not None:
            self.set_fun(fun)
        self.set_max_iter(max_iter)
        self.set_tol(tol)
        self.set_algorithm(algorithm)
        self.set_random_state(random_state)

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    @property
    def n_components(self) -> int:
        return self._n_components

    def set_n_components(self, n_components: int) -> bool:
        if not isinstance(n_components, numbers.Integral) or n_components < 1:
            warnings.warn(
                f"Number of components must be > 0 but was {n_components}. "
                f"Keeping {self._n_components}.",
                ParameterWarning,
                stacklevel=2,
            )
            return False
        self._update_parameter('n_components', int(n_components))
        return True

    @property
    def whiten(self) -> bool:
        return self._whiten

    def set_whiten(self, whiten: bool):
        self._update_parameter('whiten', bool(whiten))

    @property
    def fun(self) -> NegEntropyApproximation:
        return self._fun

    def set_fun(self, fun: Union[NegEntropyApproximation, str]):
        """
        Select the approximation function by instance or registry name.

        Names are looked up in the global registry. FilterRegistry.build_filter
        resolves names against its own configuration before calling this.
        """
        if isinstance(fun, str):
            from spectrafilter.core.registry import get_registry
            fun = get_registry().build_approximation(fun)
        if not isinstance(fun, NegEntropyApproximation):
            raise ParameterRangeError('fun', fun, "a NegEntropyApproximation or a registered name")
        self._update_parameter('fun', fun)

    @property
    def max_iter(self) -> int:
        return self._max_iter

    def set_max_iter(self, max_iter: int) -> bool:
        if max_iter < 0:
            warnings.warn(
                f"Maximum iterations parameter must be positive but was {max_iter}.",
                ParameterWarning,
                stacklevel=2,
            )
            return False
        self._update_parameter('max_iter', int(max_iter))
        return True

    @property
    def tol(self) -> float:
        return self._tol

    def set_tol(self, tol: float) -> bool:
        if tol < 0:
            warnings.warn(
                f"Tolerance parameter must be positive but was {tol}.",
                ParameterWarning,
                stacklevel=2,
            )
            return False
        self._update_parameter('tol', float(tol))
        return True

    @property
    def algorithm(self) -> ICAAlgorithm:
        return self._algorithm

    def set_algorithm(self, algorithm: Union[ICAAlgorithm, str]):
        try:
            algorithm = ICAAlgorithm(algorithm)
        except ValueError:
            raise ParameterRangeError(
                'algorithm', algorithm, f"one of {[a.value for a in ICAAlgorithm]}"
            ) from None
        self._update_parameter('algorithm', algorithm)

    @property
    def random_state(self):
        return self._random_state

    def set_random_state(self, random_state):
        self._update_parameter('random_state', random_state)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def components(self) -> np.ndarray:
        """Unmixing matrix (n_components x n_features), applied to centered data."""
        self.ensure_configured()
        return self._components.copy()

    @property
    def mixing(self) -> np.ndarray:
        """Mixing matrix (n_features x n_components), pseudo-inverse of components."""
        self.ensure_configured()
        return self._mixing.copy()

    @property
    def sources(self) -> np.ndarray:
        """Sources estimated from the configuration data (n_samples x n_components)."""
        self.ensure_configured()
        return self._sources.copy()

    @property
    def whitening(self) -> np.ndarray:
        """Whitening matrix, or None when whiten=False."""
        self.ensure_configured()
        return None if self._whitening is None else self._whitening.copy()

    @property
    def n_iter(self) -> int:
        """Iterations used (maximum over components for deflation)."""
        self.ensure_configured()
        return self._n_iter

    def _do_reset(self):
        self._components = None
        self._mixing = None
        self._sources = None
        self._whitening = None
        self._mean = None
        self._n_iter = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def _do_configure(self, X: np.ndarray):
        n_samples, n_features = X.shape

        if self._whiten:
            k = min(n_samples, n_features)
            if self._n_components > k:
                logger.warning(f"n_components is too large and will be set to {k}")
            k = min(self._n_components, k)

            self._mean = X.mean(axis=0)
            Xc = (X - self._mean).T

            u, d = thin_svd(Xc)
            d = d[:k]
            # Same rank tolerance as numpy.linalg.matrix_rank
            if d[-1] <= d[0] * max(Xc.shape) * np.finfo(np.float64).eps:
                raise DecompositionError("whitening", "data is rank deficient")

            K = (u[:, :k] / d).T
            X1 = (K @ Xc) * np.sqrt(n_samples)
            self._whitening = K
        else:
            k = min(n_samples, n_features)
            if self._n_components != k:
                logger.warning("Ignoring n_components when whiten=False")
            self._mean = np.zeros(n_features)
            Xc = X.T
            # Wide data: only the first k signals enter the iteration
            X1 = Xc[:k]
            self._whitening = None

        w_init = check_random_state(self._random_state).normal(size=(k, k))

        if self._algorithm is ICAAlgorithm.DEFLATION:
            W, n_iter = self._deflation(X1, w_init)
        else:
            W, n_iter = self._parallel(X1, w_init)

        if self._whiten:
            self._components = W @ self._whitening
        else:
            self._components = W @ np.eye(k, n_features)

        self._sources = (self._components @ Xc).T
        try:
            self._mixing = np.linalg.pinv(self._components)
        except np.linalg.LinAlgError as e:
            raise DecompositionError("pinv", str(e)) from e
        self._n_iter = n_iter

        logger.info(
            f"FastICA ({self._algorithm.value}, {self._fun.name}): "
            f"{k} components, {n_iter} iterations"
        )

    def _deflation(self, X: np.ndarray, w_init: np.ndarray) -> Tuple[np.ndarray, int]:
        k = w_init.shape[0]
        W = np.zeros((k, k))
        n_iter_max = 0

        for j in range(k):
            w = w_init[j] / np.linalg.norm(w_init[j])
            lim = np.inf
            n_iter = 0

            for n_iter in range(1, self._max_iter + 1):
                # One row of projections, so the per-row derivative mean
                # averages over samples
                gwtx, g_wtx = self._fun.apply((w @ X)[np.newaxis, :])

                w1 = (X * gwtx).mean(axis=1) - g_wtx.mean() * w
                w1 = _gram_schmidt(w1, W, j)
                w1 /= np.linalg.norm(w1)

                lim = abs(abs(w1 @ w) - 1.0)
                w = w1
                if lim < self._tol:
                    break

            if lim >= self._tol:
                self._warn_not_converged()

            n_iter_max = max(n_iter_max, n_iter)
            W[j] = w

        return W, n_iter_max

    def _parallel(self, X: np.ndarray, w_init: np.ndarray) -> Tuple[np.ndarray, int]:
        W = symmetric_decorrelation(w_init)
        p = X.shape[1]
        lim = np.inf
        n_iter = 0

        for n_iter in range(1, self._max_iter + 1):
            gwtx, g_wtx = self._fun.apply(W @ X)

            W1 = symmetric_decorrelation(gwtx @ X.T / p - g_wtx * W)
            lim = np.max(np.abs(np.abs(np.einsum('ij,ij->i', W1, W)) - 1.0))
            W = W1
            if lim < self._tol:
                break

        if lim >= self._tol:
            self._warn_not_converged()

        return W, n_iter

    def _warn_not_converged(self):
        warnings.warn(
            "FastICA did not converge. Consider increasing tolerance "
            "or the maximum number of iterations.",
            ConvergenceWarning,
            stacklevel=3,
        )

    # ------------------------------------------------------------------
    # Transformation
    # ------------------------------------------------------------------

    def _do_transform(self, X: np.ndarray) -> np.ndarray:
        check_columns(X, self._components.shape[1])
        return (X - self._mean) @ self._components.T

    def _do_inverse_transform(self, X: np.ndarray) -> np.ndarray:
        check_columns(X, self._components.shape[0], name="sources")
        return X @ self._mixing.T + self._mean

    def reconstruct(self) -> np.ndarray:
        """Reconstruct the configuration data from its sources."""
        self.ensure_configured()
        return self._sources @ self._mixing.T + self._mean
