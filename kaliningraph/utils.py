"""Small helpers shared by the matrix layer and its callers.

Index enumeration, random features and sampling. Randomness always goes
through an optional numpy Generator so results can be reproduced.
"""

from typing import Callable, Iterable, List, Optional, Sequence, Set, Tuple, TypeVar
import hashlib
import itertools
import numpy as np

T = TypeVar("T")

DEFAULT_FEATURE_LEN = 20


def all_pairs(num_rows: int, num_cols: int) -> List[Tuple[int, int]]:
    """Every (row, col) pair of a num_rows x num_cols grid in row-major order."""
    return list(itertools.product(range(num_rows), range(num_cols)))


def kronecker_delta(i: int, j: int) -> float:
    return 1.0 if i == j else 0.0


def random_vector(size: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Uniform [0, 1) vector of the given size."""
    rng = rng if rng is not None else np.random.default_rng()
    return rng.random(size)


def random_matrix(
    num_rows: int,
    num_cols: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
):
    """Uniform [0, 1) DoubleMatrix."""
    from kaliningraph.tensor.double import DoubleMatrix

    num_cols = num_rows if num_cols is None else num_cols
    rng = rng if rng is not None else np.random.default_rng()
    return DoubleMatrix.from_rows(rng.random((num_rows, num_cols)))


def vectorize(text: str, length: int = DEFAULT_FEATURE_LEN) -> np.ndarray:
    """Deterministic pseudo-random feature vector for a string.

    Seeded from a SHA-1 of the text (Python's str hash is salted per process).
    """
    seed = int.from_bytes(hashlib.sha1(text.encode("utf-8")).digest()[:8], "big")
    return random_vector(length, np.random.default_rng(seed))


def closure(
    to_visit: Iterable[T], successors: Callable[[Set[T]], Set[T]]
) -> Set[T]:
    """Smallest superset of to_visit closed under successors.

    Parameters:
        to_visit: Initial frontier
        successors: Maps a frontier to the set of its successors

    Returns:
        Every element reachable from the initial frontier (inclusive)
    """
    frontier = set(to_visit)
    visited: Set[T] = set()
    while frontier:
        visited |= frontier
        frontier = set(successors(frontier)) - visited
    return visited


def cdf(weights: Sequence[float]) -> np.ndarray:
    """Cumulative distribution of unnormalized non-negative weights."""
    w = np.asarray(weights, dtype=float)
    total = w.sum()
    if total <= 0:
        raise ValueError(f"Weights must have a positive sum, got {total}")
    return np.cumsum(w / total)


def sample_cdf(
    distribution: np.ndarray, rng: Optional[np.random.Generator] = None
) -> int:
    """Draw one index from a CDF by inverse transform (binary search)."""
    rng = rng if rng is not None else np.random.default_rng()
    index = int(np.searchsorted(distribution, rng.random(), side="right"))
    # Last bin may sum to slightly under 1.0
    return min(index, len(distribution) - 1)
