"""Shared fixtures for spectrafilter tests."""

import numpy as np
import pytest

from spectrafilter.core.registry import reset_registry


@pytest.fixture
def replicates():
    """Two replicate measurements: X2 = X1 + small measurement noise."""
    np.random.seed(42)
    X1 = np.random.randn(30, 6)
    X2 = X1 + np.random.randn(30, 6) * 0.1
    return X1, X2


@pytest.fixture
def orthonormal_directions():
    """Two orthonormal vectors in R^6."""
    np.random.seed(7)
    q, _ = np.linalg.qr(np.random.randn(6, 2))
    return q[:, 0], q[:, 1]


@pytest.fixture
def interference_replicates(orthonormal_directions):
    """
    Replicates whose difference lies in span(v1, v2), strong along v1.

    The sample coefficients are zero-mean and orthogonal, so
    C = 100 n v1 v1^T + n v2 v2^T exactly.
    """
    v1, v2 = orthonormal_directions
    n = 20
    a = 10.0 * np.tile([1.0, -1.0, 1.0, -1.0], n // 4)
    b = 1.0 * np.tile([1.0, 1.0, -1.0, -1.0], n // 4)

    np.random.seed(42)
    X1 = np.random.randn(n, 6)
    X2 = X1 + np.outer(a, v1) + np.outer(b, v2)
    return X1, X2


@pytest.fixture
def spectra_with_response():
    """Predictors (40 x 8) and a response driven by the first two columns."""
    np.random.seed(42)
    X = np.random.randn(40, 8)
    y = 2.0 * X[:, 0] - X[:, 1] + np.random.randn(40) * 0.05
    return X, y


@pytest.fixture(autouse=True)
def fresh_registry():
    """Each test sees a freshly loaded global registry."""
    reset_registry()
    yield
    reset_registry()
