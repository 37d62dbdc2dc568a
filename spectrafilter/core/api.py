"""
Filter contracts.

The externally visible interfaces implemented by the algorithms:
    Filter          predictors -> predictors
    SupervisedFilter    adds initialize(predictors, response)
    ResponseFilter  transforms response/target matrices

All three report failures by raising FilterError subclasses.
initialize_with_message() adapts a SupervisedFilter to the older
"error message or None" convention.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from spectrafilter.core.errors import FilterError


class Filter(ABC):

    @abstractmethod
    def transform(self, predictors) -> np.ndarray:
        """
        Transform a matrix into another matrix.

        Raises:
            FilterError: Transformation was not successful
        """
        pass


class SupervisedFilter(Filter):

    @abstractmethod
    def initialize(self, predictors, response) -> None:
        """
        Initialize using the predictors and the dependent variable(s).

        Raises:
            FilterError: If initialization fails
        """
        pass


class ResponseFilter(ABC):

    @abstractmethod
    def transform_response(self, response) -> np.ndarray:
        """Transform a response matrix."""
        pass


def initialize_with_message(
    supervised_filter: SupervisedFilter,
    predictors,
    response,
) -> Optional[str]:
    """
    Initialize a filter, returning None on success or the error message.

    Only FilterError is converted; anything else propagates.
    """
    try:
        supervised_filter.initialize(predictors, response)
    except FilterError as e:
        return str(e)
    return None
