"""Tests for DoubleMatrix: products, normalization, thresholding, interop."""

import math

import numpy as np
import pytest
import scipy.sparse as sp

from kaliningraph.algebra import DOUBLE_FIELD
from kaliningraph.tensor import ACT_TANH, NORM_AVG, BooleanMatrix, DoubleMatrix


# ============================================================
# Arithmetic
# ============================================================


def test_concrete_product():
    a = DoubleMatrix.from_rows([[1, 2], [3, 4]])
    b = DoubleMatrix.from_rows([[5, 6], [7, 8]])
    assert a * b == DoubleMatrix.from_rows([[19, 22], [43, 50]])


def test_elements_are_floats_and_algebra_defaults():
    m = DoubleMatrix(1, 2, [1, 2])
    assert m.algebra is DOUBLE_FIELD
    assert all(isinstance(e, float) for e in m.data)


def test_scalar_and_subtraction():
    m = DoubleMatrix.from_rows([[1, 2], [3, 4]])
    assert 2.0 * m == DoubleMatrix.from_rows([[2, 4], [6, 8]])
    assert m * 0.5 == DoubleMatrix.from_rows([[0.5, 1], [1.5, 2]])
    assert m - m == DoubleMatrix.zeros(2)


def test_identity_and_zero_laws():
    m = DoubleMatrix.from_rows([[1.5, -2], [0.25, 4]])
    assert m * DoubleMatrix.identity(2) == m
    assert m + DoubleMatrix.zeros(2) == m


# ============================================================
# Normalization
# ============================================================


def test_min_max_norm_rescales_to_unit_interval():
    m = DoubleMatrix.from_rows([[2, 4], [6, 10]])
    normed = m.min_max_norm()
    assert normed.data == pytest.approx((0.0, 0.25, 0.5, 1.0))
    assert isinstance(normed, DoubleMatrix)


def test_min_max_norm_is_idempotent():
    m = DoubleMatrix.from_rows([[0, 0.3], [0.7, 1]])
    assert m.min_max_norm().data == pytest.approx(m.data)

    once = DoubleMatrix.random(3, rng=np.random.default_rng(0)).min_max_norm()
    assert once.min_max_norm().data == pytest.approx(once.data)


def test_constant_matrix_normalizes_to_zeros_with_warning():
    m = DoubleMatrix.from_rows([[3, 3], [3, 3]])
    with pytest.warns(RuntimeWarning, match="max == min"):
        normed = m.min_max_norm()
    assert normed == DoubleMatrix.zeros(2)

    with pytest.warns(RuntimeWarning):
        assert m.mean_norm() == DoubleMatrix.zeros(2)


def test_mean_norm():
    m = DoubleMatrix.from_rows([[1, 2], [3, 4]])
    assert m.mean_norm().data == pytest.approx((-0.5, -1 / 6, 1 / 6, 0.5))
    assert NORM_AVG(m) == m.mean_norm()


def test_tanh_activation():
    m = DoubleMatrix.from_rows([[0, 1], [-1, 2]])
    assert ACT_TANH(m).data == pytest.approx(tuple(math.tanh(e) for e in m.data))


# ============================================================
# Thresholding
# ============================================================


def test_to_bmat_default_threshold_is_midpoint():
    m = DoubleMatrix.from_rows([[1, 2], [3, 4]])
    b = m.to_bmat()
    assert isinstance(b, BooleanMatrix)
    assert b == BooleanMatrix(2, 2, [False, False, True, True])


def test_to_bmat_custom_threshold_and_predicate():
    m = DoubleMatrix.from_rows([[1, 2], [3, 4]])
    assert m.to_bmat(threshold=1.5).data == (False, True, True, True)
    assert m.to_bmat(partition_fn=lambda e: e % 2 == 0).data == (False, True, False, True)


# ============================================================
# Fixpoints
# ============================================================


def test_seek_fixpoint_on_doubles():
    start = DoubleMatrix.zeros(2)
    result = start.seek_fixpoint(lambda m: m.elwise(lambda e: min(e + 1.0, 3.0)))
    assert result == DoubleMatrix.from_rows([[3, 3], [3, 3]])


def test_stochastic_matrix_power_converges():
    # Rows of P sum to one and P is idempotent, so P * P == P immediately
    p = DoubleMatrix.from_rows([[0.5, 0.5], [0.5, 0.5]])
    assert p.seek_fixpoint(lambda m: m * p) == p


# ============================================================
# Interop
# ============================================================


def test_numpy_round_trip():
    array = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    m = DoubleMatrix.from_numpy(array)
    assert m.shape == (2, 3)
    np.testing.assert_allclose(m.to_numpy(), array)


def test_to_sparse_keeps_nonzeros():
    m = DoubleMatrix.from_rows([[0, 1.5], [0, 0]])
    s = m.to_sparse()
    assert sp.issparse(s)
    assert s.nnz == 1
    np.testing.assert_allclose(s.toarray(), m.to_numpy())


def test_random_reproducible():
    a = DoubleMatrix.random(2, 3, rng=np.random.default_rng(42))
    b = DoubleMatrix.random(2, 3, rng=np.random.default_rng(42))
    assert a == b
    assert all(0.0 <= e < 1.0 for e in a.data)
