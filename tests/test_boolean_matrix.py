"""Tests for BooleanMatrix construction, rendering and mixed arithmetic."""

import numpy as np
import pytest

from kaliningraph.algebra import BOOLEAN_ALGEBRA, XOR_ALGEBRA
from kaliningraph.exceptions import ConstructionError, DimensionError, IndexOutOfBounds
from kaliningraph.tensor import BooleanMatrix, DoubleMatrix

T, F = True, False


# ============================================================
# Constructors
# ============================================================


def test_default_algebra_is_or_and():
    m = BooleanMatrix(2, 2, [T, F, F, T])
    assert m.algebra is BOOLEAN_ALGEBRA


def test_elements_are_coerced_to_bool():
    m = BooleanMatrix(1, 3, [1, 0, 2])
    assert m.data == (T, F, T)


def test_string_constructor_identity():
    assert BooleanMatrix.from_string("10\n01") == BooleanMatrix(2, 2, [T, F, F, T])
    assert BooleanMatrix.from_string("10\n01") == BooleanMatrix.identity(2)


def test_string_constructor_ignores_whitespace_and_infers_square():
    m = BooleanMatrix.from_string("1 0 0 1")
    assert m == BooleanMatrix.identity(2)


def test_string_constructor_larger_symbol_is_true():
    m = BooleanMatrix.from_string("xo\nox")
    assert m == BooleanMatrix.identity(2)
    assert BooleanMatrix.from_string("ab ba").data == (F, T, T, F)


def test_string_constructor_rectangular_lines():
    m = BooleanMatrix.from_string("101\n010\n")
    assert m.shape == (2, 3)
    assert m.data == (T, F, T, F, T, F)


def test_string_constructor_single_symbol_is_full():
    assert BooleanMatrix.from_string("11\n11").is_full


def test_string_constructor_rejects_three_symbols():
    with pytest.raises(ConstructionError, match="two"):
        BooleanMatrix.from_string("10\n2 1")
    with pytest.raises(ValueError):
        BooleanMatrix.from_string("abc\ncab\nbca")


def test_string_constructor_rejects_bad_shapes():
    with pytest.raises(DimensionError):
        BooleanMatrix.from_string("101")
    with pytest.raises(DimensionError):
        BooleanMatrix.from_string("10\n1")
    with pytest.raises(DimensionError):
        BooleanMatrix.from_string("   ")


def test_sparse_constructor_defaults_to_false():
    m = BooleanMatrix.from_sparse(2, 3, [((0, 2), T), ((1, 0), T)])
    assert m.rows == ((F, F, T), (T, F, F))

    with pytest.raises(IndexOutOfBounds):
        BooleanMatrix.from_sparse(2, 2, [((2, 0), T)])


def test_named_constructors():
    assert BooleanMatrix.ones(2).data == (T, T, T, T)
    assert BooleanMatrix.ones(2).is_full
    assert BooleanMatrix.zeros(2).data == (F, F, F, F)
    assert BooleanMatrix.identity(3).get_elements(lambda r, c: r == c) == [T, T, T]
    assert not BooleanMatrix.identity(3).is_full


def test_random_is_square_and_reproducible():
    a = BooleanMatrix.random(4, rng=np.random.default_rng(7))
    b = BooleanMatrix.random(4, rng=np.random.default_rng(7))
    assert a.shape == (4, 4)
    assert a == b
    assert all(isinstance(e, bool) for e in a.data)


# ============================================================
# Semiring arithmetic
# ============================================================


def test_boolean_product_composes_reachability():
    a = BooleanMatrix.from_string(
        """
        010
        001
        000
        """
    )
    two_steps = a * a
    assert two_steps[0, 2]
    assert not two_steps[0, 1]
    assert a * BooleanMatrix.identity(3) == a


def test_boolean_addition_is_or():
    a = BooleanMatrix.from_string("10\n00")
    b = BooleanMatrix.from_string("00\n01")
    assert a + b == BooleanMatrix.identity(2)


def test_xor_algebra_counts_walk_parity():
    # Two distinct 2-step walks 0 -> 3: through 1 and through 2
    a = BooleanMatrix.from_sparse(
        4, 4, [((0, 1), T), ((0, 2), T), ((1, 3), T), ((2, 3), T)]
    )
    xor_a = BooleanMatrix(4, 4, a.data, XOR_ALGEBRA)
    assert (a * a)[0, 3]
    assert not (xor_a * xor_a)[0, 3]


def test_transpose_reverses_edges():
    a = BooleanMatrix.from_sparse(3, 3, [((0, 1), T)])
    assert a.transpose[1, 0]
    assert not a.transpose[0, 1]
    assert isinstance(a.transpose, BooleanMatrix)


# ============================================================
# Widening to doubles
# ============================================================


def test_to_double_matrix():
    d = BooleanMatrix.identity(2).to_double_matrix()
    assert isinstance(d, DoubleMatrix)
    assert d.data == (1.0, 0.0, 0.0, 1.0)


def test_mixed_arithmetic_widens_booleans():
    b = BooleanMatrix.identity(2)
    d = DoubleMatrix.from_rows([[1, 2], [3, 4]])

    assert b + d == DoubleMatrix.from_rows([[2, 2], [3, 5]])
    assert d + b == DoubleMatrix.from_rows([[2, 2], [3, 5]])
    assert b * d == d
    assert d * b == d
    assert d - b == DoubleMatrix.from_rows([[0, 2], [3, 3]])
    assert b - d == DoubleMatrix.from_rows([[0, -2], [-3, -3]])


def test_str_renders_bits():
    assert str(BooleanMatrix.from_string("10\n01")) == "1 0\n0 1"
