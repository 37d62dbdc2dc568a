"""
Y-Gradient GLSW and EPO.

Same projection as GLSW/EPO, but the interference covariance comes from the
response block instead of a second set of predictor samples:

1. Sort samples by increasing response value.
2. Apply the five-point filter with coefficients (2, 1, 0, -1, -2) / 10 to the
   sorted predictors (Xd) and response (yd) along the sample axis. This is
   the negated Savitzky-Golay first derivative.
3. Weight each sample by w = 2^(-yd / std(yd)). yd is negative where the
   response rises, so samples where it rises quickly weigh more.
4. C = Xd^T W^2 Xd, W = diag(w).
"""

import logging

import numpy as np
from scipy.signal import savgol_filter

from spectrafilter.core.errors import ShapeMismatchError
from spectrafilter.core.matrix import check_same_rows
from spectrafilter.filters.glsw import EPO, GLSW


logger = logging.getLogger(__name__)


# Five-point window, first derivative
SAVGOL_WINDOW = 5
SAVGOL_POLYORDER = 2


def first_derivative(X: np.ndarray) -> np.ndarray:
    """
    Five-point Savitzky-Golay first derivative along rows.

    Edge rows are replicated beyond the matrix bounds, so the output has the
    same shape as the input.
    """
    return savgol_filter(
        X,
        window_length=SAVGOL_WINDOW,
        polyorder=SAVGOL_POLYORDER,
        deriv=1,
        axis=0,
        mode='nearest',
    )


def descending_difference(X: np.ndarray) -> np.ndarray:
    """Five-point filter with coefficients (2, 1, 0, -1, -2) / 10 along rows."""
    return -first_derivative(X)


def gradient_weights(yd: np.ndarray) -> np.ndarray:
    """
    Sample weights 2^(-yd / s), s = sample std of yd.

    A constant gradient carries no weighting information, so all weights are 1.
    """
    syd = np.std(yd, ddof=1)
    if not np.isfinite(syd) or syd < 1e-15:
        logger.debug("Response gradient has zero spread; using unit weights")
        return np.ones_like(yd)
    return np.power(2.0, -yd / syd)


class YGradientGLSW(GLSW):
    """
    Y-Gradient Generalized Least Squares Weighting.

    Configured on predictors X and a single-column response y with the same
    number of rows. X and y may have different column counts.
    """

    def _check(self, X: np.ndarray, y: np.ndarray):
        check_same_rows(X, y, "Predictors and response must have the same number of rows")
        if y.shape[1] != 1:
            raise ShapeMismatchError("Response must have a single column", shapes=[y.shape])
        if X.shape[0] < 2:
            raise ShapeMismatchError("At least two samples are required", shapes=[X.shape])

    def _covariance_matrix(self, X: np.ndarray, y: np.ndarray) -> np.ndarray:
        order = np.argsort(y[:, 0], kind='stable')
        X_sorted = X[order]
        y_sorted = y[order]

        Xd = descending_difference(X_sorted)
        yd = descending_difference(y_sorted)[:, 0]

        w = gradient_weights(yd)

        # Xd^T W^2 Xd without building the diagonal matrix
        return (Xd * (w ** 2)[:, np.newaxis]).T @ Xd


class YGradientEPO(YGradientGLSW, EPO):
    """
    Y-Gradient External Parameter Orthogonalization.

    Y-gradient covariance with EPO weighting: only the n dominant directions
    are downweighted.
    """

    def _check(self, X: np.ndarray, y: np.ndarray):
        YGradientGLSW._check(self, X, y)
        self._check_n(X)
