"""
Centering filters.

Center subtracts the configured column means. ResponseCenter does the same
for predictors and response independently, and maps centered predictions
back to the response scale.
"""

import logging

import numpy as np

from spectrafilter.core.api import Filter, ResponseFilter, SupervisedFilter
from spectrafilter.core.base import SupervisedAlgorithmWithResponseTransform, UnsupervisedAlgorithm
from spectrafilter.core.matrix import check_columns, check_same_rows


logger = logging.getLogger(__name__)


class Center(UnsupervisedAlgorithm, Filter):
    """Subtracts column means learned during configuration."""

    def __init__(self):
        super().__init__()
        self._means = None

    @property
    def means(self) -> np.ndarray:
        self.ensure_configured()
        return self._means.copy()

    def _do_reset(self):
        self._means = None

    def _do_configure(self, X: np.ndarray):
        self._means = X.mean(axis=0)
        logger.debug(f"Center means: {self._means}")

    def _do_transform(self, X: np.ndarray) -> np.ndarray:
        check_columns(X, self._means.shape[0])
        return X - self._means

    def _do_inverse_transform(self, X: np.ndarray) -> np.ndarray:
        check_columns(X, self._means.shape[0])
        return X + self._means


class ResponseCenter(SupervisedAlgorithmWithResponseTransform, SupervisedFilter, ResponseFilter):
    """
    Centers predictors and response with their own column means.

    inverse_transform_response() restores predictions made in the centered
    space to the original response scale.
    """

    def __init__(self):
        super().__init__()
        self._x_center = None
        self._y_center = None

    def initialize(self, predictors, response) -> None:
        self.configure(predictors, response)

    def _do_reset(self):
        self._x_center = None
        self._y_center = None

    def _do_configure(self, X: np.ndarray, y: np.ndarray):
        check_same_rows(X, y, "Predictors and response must have the same number of rows")
        self._x_center = Center().configure(X)
        self._y_center = Center().configure(y)

    def _do_transform(self, X: np.ndarray) -> np.ndarray:
        return self._x_center.transform(X)

    def _do_inverse_transform(self, X: np.ndarray) -> np.ndarray:
        return self._x_center.inverse_transform(X)

    def _do_transform_response(self, y: np.ndarray) -> np.ndarray:
        return self._y_center.transform(y)

    def _do_inverse_transform_response(self, y: np.ndarray) -> np.ndarray:
        return self._y_center.inverse_transform(y)
