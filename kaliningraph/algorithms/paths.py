"""Path problems solved as matrix fixpoints over semirings.

Each classic algorithm is one matrix recurrence under a different algebra:

1. **Transitive closure** (Boolean OR/AND):
       R <- R + R * R   until R stops changing
   R[i, j] is True iff j is reachable from i by a non-empty path.

2. **Shortest paths** (min-plus):
       D_k = W ** k
   with W[i, i] = 0 gives shortest distances using at most k edges.
   Without negative cycles D_{n-1} is exact (any simple path has at most
   n - 1 edges), which is what Floyd-Warshall computes directly.

3. **Longest paths** (max-plus): same recurrence, meaningful on DAGs.

Edge cases:
    - Unreachable pairs stay at the algebra's nil (+inf for min-plus)
    - Negative cycles never converge; shortest_paths caps the iteration
"""

from typing import List, Optional

from kaliningraph.exceptions import DimensionError, FixpointNotReached, IndexOutOfBounds
from kaliningraph.tensor.boolean import BooleanMatrix
from kaliningraph.tensor.matrix import Matrix


def _require_square(m: Matrix) -> None:
    if m.num_rows != m.num_cols:
        raise DimensionError(
            f"Path algorithms need a square matrix, got {m.num_rows},{m.num_cols}"
        )


def transitive_closure(adjacency: BooleanMatrix) -> BooleanMatrix:
    """Reachability by non-empty paths.

    The step R -> R + R * R is monotone on a finite lattice, so the fixpoint
    is always reached (after at most log2(n) + 1 squarings).
    """
    _require_square(adjacency)
    return adjacency.seek_fixpoint(lambda r: r + r * r)


def reflexive_transitive_closure(adjacency: BooleanMatrix) -> BooleanMatrix:
    """Reachability including the empty path (every node reaches itself)."""
    _require_square(adjacency)
    return transitive_closure(adjacency + BooleanMatrix.identity(adjacency.num_rows))


def reachable(adjacency: BooleanMatrix, source: int) -> List[int]:
    """Indices reachable from source (source included), ascending."""
    _require_square(adjacency)
    if not 0 <= source < adjacency.num_rows:
        raise IndexOutOfBounds(f"Source {source} out of range for {adjacency.num_rows} nodes")
    row = reflexive_transitive_closure(adjacency)[source]
    return [j for j, hit in enumerate(row) if hit]


def tropical_power(weights: Matrix, k: int) -> Matrix:
    """Best path weights using at most k edges (diagonal of weights = one).

    k = 0 gives the algebra's identity: every node reaches only itself.
    """
    _require_square(weights)
    if k < 0:
        raise ValueError(f"Number of hops must be non-negative, got {k}")
    return weights ** k


def shortest_paths(weights: Matrix, max_hops: Optional[int] = None) -> Matrix:
    """All-pairs shortest path weights by repeated min-plus multiplication.

    Parameters:
        weights: Weight matrix over MINPLUS_ALGEBRA with zero diagonal
        max_hops: Restrict to paths of at most this many edges; None means
            iterate D -> D * W until it stops changing

    Raises:
        FixpointNotReached: If relaxation still improves after n steps
            (a negative cycle is reachable)
    """
    _require_square(weights)
    if max_hops is not None:
        return tropical_power(weights, max_hops)
    return weights.seek_fixpoint(lambda d: d * weights, max_iterations=weights.num_rows)
