"""
Tests for GLSW and EPO.

Validates:
    1. Projection matrix is symmetric for any alpha > 0
    2. Identical replicates give the identity transform
    3. Interference directions are downweighted (all for GLSW, top-n for EPO)
    4. Parameter handling (soft alpha warning, hard n range errors)
    5. Decomposition failures surface as DecompositionError
"""

import warnings

import numpy as np
import pytest

from spectrafilter.core.api import initialize_with_message
from spectrafilter.core.errors import (
    DecompositionError,
    NonInvertibleCapabilityError,
    ParameterRangeError,
    ParameterWarning,
    ShapeMismatchError,
    UnconfiguredError,
)
from spectrafilter.filters.glsw import EPO, GLSW


class TestGLSWProjection:

    @pytest.mark.parametrize("alpha", [1e-3, 1.0, 100.0])
    def test_projection_is_symmetric(self, replicates, alpha):
        X1, X2 = replicates
        G = GLSW(alpha=alpha).configure(X1, X2).projection_matrix
        np.testing.assert_allclose(G, G.T, atol=1e-10)

    def test_projection_shape(self, replicates):
        X1, X2 = replicates
        G = GLSW().configure(X1, X2).projection_matrix
        assert G.shape == (6, 6)

    def test_transform_is_matrix_product(self, replicates):
        X1, X2 = replicates
        glsw = GLSW().configure(X1, X2)

        np.random.seed(0)
        X = np.random.randn(4, 6)

        np.testing.assert_allclose(glsw.transform(X), X @ glsw.projection_matrix)

    def test_transform_keeps_row_count(self, replicates):
        X1, X2 = replicates
        glsw = GLSW().configure(X1, X2)
        assert glsw.transform(np.ones((3, 6))).shape == (3, 6)

    def test_transform_column_mismatch(self, replicates):
        X1, X2 = replicates
        glsw = GLSW().configure(X1, X2)
        with pytest.raises(ShapeMismatchError):
            glsw.transform(np.ones((3, 5)))

    def test_identical_replicates_give_identity(self, replicates):
        X1, _ = replicates
        glsw = GLSW().configure(X1, X1.copy())

        np.testing.assert_allclose(glsw.projection_matrix, np.eye(6), atol=1e-10)
        np.testing.assert_allclose(glsw.transform(X1), X1, atol=1e-10)

    def test_interference_directions_downweighted(self, interference_replicates, orthonormal_directions):
        X1, X2 = interference_replicates
        v1, v2 = orthonormal_directions
        glsw = GLSW(alpha=1e-3).configure(X1, X2)
        G = glsw.projection_matrix

        # C = 2000 v1 v1^T + 20 v2 v2^T
        np.testing.assert_allclose(v1 @ G, v1 / np.sqrt(2000.0 ** 2 / 1e-3 + 1), atol=1e-8)
        np.testing.assert_allclose(v2 @ G, v2 / np.sqrt(20.0 ** 2 / 1e-3 + 1), atol=1e-8)

    def test_orthogonal_directions_pass_through(self, interference_replicates, orthonormal_directions):
        X1, X2 = interference_replicates
        v1, v2 = orthonormal_directions
        G = GLSW().configure(X1, X2).projection_matrix

        u = np.random.RandomState(3).randn(6)
        u -= (u @ v1) * v1 + (u @ v2) * v2

        np.testing.assert_allclose(u @ G, u, atol=1e-8)

    def test_larger_alpha_filters_less(self, replicates):
        X1, X2 = replicates
        distances = [
            np.linalg.norm(GLSW(alpha=a).configure(X1, X2).projection_matrix - np.eye(6))
            for a in (1e-4, 1e-2, 1.0)
        ]
        assert distances[0] > distances[1] > distances[2]

    def test_projection_matrix_is_a_copy(self, replicates):
        X1, X2 = replicates
        glsw = GLSW().configure(X1, X2)
        G = glsw.projection_matrix
        G[:] = 0.0
        assert not np.allclose(glsw.projection_matrix, 0.0)

    def test_shape_mismatch_rows(self):
        glsw = GLSW()
        with pytest.raises(ShapeMismatchError):
            glsw.configure(np.ones((5, 3)), np.ones((6, 3)))
        assert not glsw.is_configured

    def test_shape_mismatch_columns(self):
        with pytest.raises(ShapeMismatchError, match="same shape"):
            GLSW().configure(np.ones((5, 3)), np.ones((5, 4)))


class TestGLSWAlpha:

    def test_default_alpha(self):
        assert GLSW().alpha == 1e-3

    @pytest.mark.parametrize("bad_alpha", [0.0, -1.0, float('nan')])
    def test_non_positive_alpha_warns_and_keeps_value(self, bad_alpha):
        glsw = GLSW(alpha=0.5)
        with pytest.warns(ParameterWarning):
            accepted = glsw.set_alpha(bad_alpha)
        assert not accepted
        assert glsw.alpha == 0.5

    def test_rejected_alpha_does_not_reset(self, replicates):
        X1, X2 = replicates
        glsw = GLSW().configure(X1, X2)

        with pytest.warns(ParameterWarning):
            glsw.set_alpha(-1.0)

        assert glsw.is_configured
        assert glsw.transform(X1).shape == X1.shape

    def test_constructor_with_bad_alpha_keeps_default(self):
        with pytest.warns(ParameterWarning):
            glsw = GLSW(alpha=0.0)
        assert glsw.alpha == 1e-3

    def test_valid_alpha_no_warning(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            GLSW().set_alpha(1.0)


class TestGLSWContracts:

    def test_is_non_invertible(self, replicates):
        X1, X2 = replicates
        glsw = GLSW()
        assert glsw.is_non_invertible
        glsw.configure(X1, X2)
        assert glsw.is_non_invertible

    def test_inverse_transform_raises(self, replicates):
        X1, X2 = replicates
        glsw = GLSW().configure(X1, X2)
        with pytest.raises(NonInvertibleCapabilityError):
            glsw.inverse_transform(X1)

    def test_initialize_configures(self, replicates):
        X1, X2 = replicates
        glsw = GLSW()
        glsw.initialize(X1, X2)
        assert glsw.is_configured

    def test_initialize_with_message_success(self, replicates):
        X1, X2 = replicates
        assert initialize_with_message(GLSW(), X1, X2) is None

    def test_initialize_with_message_failure(self):
        message = initialize_with_message(GLSW(), np.ones((5, 3)), np.ones((4, 3)))
        assert "same shape" in message

    def test_str(self, replicates):
        X1, X2 = replicates
        glsw = GLSW()
        assert "unconfigured" in str(glsw)
        glsw.configure(X1, X2)
        assert "6x6" in str(glsw)

    def test_repr(self):
        assert repr(GLSW(alpha=0.5)) == "GLSW(alpha=0.5)"


class TestDecompositionFailure:

    def test_eigh_failure(self, replicates, monkeypatch):
        X1, X2 = replicates

        def failing_eigh(C):
            raise np.linalg.LinAlgError("Eigenvalues did not converge")

        monkeypatch.setattr(np.linalg, "eigh", failing_eigh)

        glsw = GLSW()
        with pytest.raises(DecompositionError, match="eigh"):
            glsw.configure(X1, X2)
        assert not glsw.is_configured

    def test_non_finite_singular_values(self, replicates, monkeypatch):
        X1, X2 = replicates
        monkeypatch.setattr(np.linalg, "svd", lambda C, compute_uv=False: np.full(C.shape[0], np.nan))

        with pytest.raises(DecompositionError, match="svd"):
            GLSW().configure(X1, X2)


class TestEPO:

    def test_defaults(self):
        epo = EPO()
        assert epo.n == 5
        assert epo.alpha == 1e-3
        assert epo.get_params() == {'n': 5, 'alpha': 1e-3}

    @pytest.mark.parametrize("bad_n", [0, -3, 2.5, True])
    def test_invalid_n(self, bad_n):
        with pytest.raises(ParameterRangeError):
            EPO().set_n(bad_n)

    def test_invalid_n_keeps_configuration(self, replicates):
        X1, X2 = replicates
        epo = EPO(n=2).configure(X1, X2)
        with pytest.raises(ParameterRangeError):
            epo.set_n(0)
        assert epo.n == 2
        assert epo.is_configured

    def test_n_larger_than_columns(self, replicates):
        X1, X2 = replicates
        epo = EPO(n=7)
        with pytest.raises(ParameterRangeError, match="columns"):
            epo.configure(X1, X2)
        assert not epo.is_configured

    def test_n_equal_to_columns(self, replicates):
        X1, X2 = replicates
        epo = EPO(n=6).configure(X1, X2)
        glsw = GLSW().configure(X1, X2)
        np.testing.assert_allclose(epo.projection_matrix, glsw.projection_matrix, atol=1e-10)

    def test_set_n_resets(self, replicates):
        X1, X2 = replicates
        epo = EPO(n=2).configure(X1, X2)
        epo.set_n(3)
        assert not epo.is_configured
        with pytest.raises(UnconfiguredError):
            epo.transform(X1)

    def test_projection_is_symmetric(self, replicates):
        X1, X2 = replicates
        G = EPO(n=3).configure(X1, X2).projection_matrix
        np.testing.assert_allclose(G, G.T, atol=1e-10)

    def test_identical_replicates_give_identity(self, replicates):
        X1, _ = replicates
        G = EPO(n=3).configure(X1, X1).projection_matrix
        np.testing.assert_allclose(G, np.eye(6), atol=1e-10)

    def test_only_top_n_downweighted(self, interference_replicates, orthonormal_directions):
        X1, X2 = interference_replicates
        v1, v2 = orthonormal_directions
        G = EPO(n=1, alpha=1e-3).configure(X1, X2).projection_matrix

        np.testing.assert_allclose(v1 @ G, v1 / np.sqrt(2000.0 ** 2 / 1e-3 + 1), atol=1e-8)
        np.testing.assert_allclose(v2 @ G, v2, atol=1e-8)

    def test_is_non_invertible(self, replicates):
        X1, X2 = replicates
        epo = EPO(n=2).configure(X1, X2)
        with pytest.raises(NonInvertibleCapabilityError):
            epo.inverse_transform(X1)
