"""Tests for kaliningraph.utils helpers."""

import numpy as np
import pytest

from kaliningraph.tensor import DoubleMatrix
from kaliningraph.utils import (
    DEFAULT_FEATURE_LEN,
    all_pairs,
    cdf,
    closure,
    kronecker_delta,
    random_matrix,
    random_vector,
    sample_cdf,
    vectorize,
)


def test_all_pairs_row_major():
    assert all_pairs(2, 2) == [(0, 0), (0, 1), (1, 0), (1, 1)]
    assert len(all_pairs(3, 5)) == 15


def test_kronecker_delta():
    assert kronecker_delta(2, 2) == 1.0
    assert kronecker_delta(2, 3) == 0.0


def test_random_vector_and_matrix_shapes():
    v = random_vector(5, np.random.default_rng(1))
    assert v.shape == (5,)

    m = random_matrix(2, 4, np.random.default_rng(1))
    assert isinstance(m, DoubleMatrix)
    assert m.shape == (2, 4)
    assert random_matrix(3).shape == (3, 3)


def test_vectorize_is_deterministic_per_string():
    a = vectorize("node")
    assert a.shape == (DEFAULT_FEATURE_LEN,)
    np.testing.assert_array_equal(a, vectorize("node"))
    assert not np.array_equal(a, vectorize("edge"))
    assert vectorize("node", length=4).shape == (4,)


def test_closure_over_successors():
    edges = {0: {1}, 1: {2}, 2: {0}, 3: {4}, 4: set()}

    def successors(frontier):
        return {t for s in frontier for t in edges[s]}

    assert closure({0}, successors) == {0, 1, 2}
    assert closure({3}, successors) == {3, 4}
    assert closure(set(), successors) == set()


def test_cdf_and_sampling():
    distribution = cdf([1, 1, 2])
    np.testing.assert_allclose(distribution, [0.25, 0.5, 1.0])

    rng = np.random.default_rng(3)
    draws = [sample_cdf(distribution, rng) for _ in range(2000)]
    assert set(draws) <= {0, 1, 2}
    assert draws.count(2) > draws.count(0)

    with pytest.raises(ValueError):
        cdf([0, 0])
