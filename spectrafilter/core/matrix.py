"""
Matrix kernel helpers.

numpy is the dense matrix kernel. This module only adds the checks the
algorithms rely on:
- inputs are finite 2-D float64 arrays (a 1-D response becomes one column)
- shape preconditions raise ShapeMismatchError
- decomposition failures raise DecompositionError, never a degenerate result
"""

from typing import Tuple

import numpy as np
from sklearn.utils import check_array

from spectrafilter.core.errors import DecompositionError, ShapeMismatchError


def as_matrix(data, name: str = "X") -> np.ndarray:
    """
    Validate and convert input to a finite 2-D float64 matrix.

    Args:
        data: Array-like input (rows=samples, cols=features)
        name: Name used in error messages

    Returns:
        2-D float64 ndarray. The input is not copied when it already
        qualifies, so callers must not modify the result in place.
    """
    if data is None:
        raise ShapeMismatchError(f"No {name} matrix provided")

    try:
        return check_array(data, dtype=np.float64)
    except ValueError as e:
        raise ShapeMismatchError(f"{name}: {e}") from e


def as_response(data, name: str = "y") -> np.ndarray:
    """Like as_matrix, but a 1-D response vector is reshaped to a single column."""
    if data is not None and np.ndim(data) == 1:
        data = np.reshape(data, (-1, 1))
    return as_matrix(data, name=name)


def check_same_shape(a: np.ndarray, b: np.ndarray, message: str = "Matrices must have the same shape"):
    if a.shape != b.shape:
        raise ShapeMismatchError(message, shapes=[a.shape, b.shape])


def check_same_rows(a: np.ndarray, b: np.ndarray, message: str = "Matrices must have the same number of rows"):
    if a.shape[0] != b.shape[0]:
        raise ShapeMismatchError(message, shapes=[a.shape, b.shape])


def check_columns(X: np.ndarray, n_columns: int, name: str = "X"):
    if X.shape[1] != n_columns:
        raise ShapeMismatchError(
            f"{name} must have {n_columns} columns to match the configured algorithm",
            shapes=[X.shape],
        )


def symmetric_eigh(C: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Eigendecomposition of a symmetric matrix, sorted by descending eigenvalue.

    Returns:
        (eigenvalues, eigenvectors) with eigenvectors as columns
    """
    try:
        eigenvalues, eigenvectors = np.linalg.eigh(C)
    except np.linalg.LinAlgError as e:
        raise DecompositionError("eigh", str(e)) from e

    if not (np.all(np.isfinite(eigenvalues)) and np.all(np.isfinite(eigenvectors))):
        raise DecompositionError("eigh", "non-finite eigenvalues or eigenvectors")

    idx = np.argsort(eigenvalues)[::-1]
    return eigenvalues[idx], eigenvectors[:, idx]


def singular_values(C: np.ndarray) -> np.ndarray:
    """Singular values of C in descending order."""
    try:
        s = np.linalg.svd(C, compute_uv=False)
    except np.linalg.LinAlgError as e:
        raise DecompositionError("svd", str(e)) from e

    if not np.all(np.isfinite(s)):
        raise DecompositionError("svd", "non-finite singular values")

    return s


def thin_svd(X: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Left singular vectors and singular values of X (economy size)."""
    try:
        u, s, _ = np.linalg.svd(X, full_matrices=False)
    except np.linalg.LinAlgError as e:
        raise DecompositionError("svd", str(e)) from e

    if not (np.all(np.isfinite(u)) and np.all(np.isfinite(s))):
        raise DecompositionError("svd", "non-finite singular vectors or values")

    return u, s
