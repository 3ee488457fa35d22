"""Matrix representations of graphs over algebraic structures.

The same edge list becomes a different matrix depending on the question:

1. Reachability      -> BooleanMatrix (OR/AND)
2. Shortest paths    -> weight matrix over MINPLUS_ALGEBRA
3. Longest paths     -> weight matrix over MAXPLUS_ALGEBRA

Nodes are indexed by their position in the node list; that order is the row
and column order of every matrix built here.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from kaliningraph.algebra.instances import MINPLUS_ALGEBRA
from kaliningraph.algebra.rings import Ring
from kaliningraph.tensor.boolean import BooleanMatrix
from kaliningraph.tensor.matrix import Matrix


@dataclass
class GraphMatrices:
    """Container for the matrix views of one graph.

    Attributes:
        nodes: Node order shared by rows and columns
        adjacency: Boolean adjacency matrix A
        weights: Tropical weight matrix W (diagonal = one, no edge = nil)
        out_degrees: Row sums of A
    """

    nodes: List[Any]
    adjacency: BooleanMatrix
    weights: Matrix
    out_degrees: Tuple[int, ...]


def _index(nodes: Sequence[Any]) -> Dict[Any, int]:
    if not nodes:
        raise ValueError("Graph must have at least one node")
    return {v: i for i, v in enumerate(nodes)}


def _lookup(node_to_idx: Dict[Any, int], u: Any, v: Any) -> Tuple[int, int]:
    if u not in node_to_idx:
        raise ValueError(f"Edge source {u} not in node set")
    if v not in node_to_idx:
        raise ValueError(f"Edge target {v} not in node set")
    return node_to_idx[u], node_to_idx[v]


def adjacency_matrix(
    nodes: Sequence[Any],
    edges: Sequence[Tuple[Any, Any]],
    directed: bool = True,
) -> BooleanMatrix:
    """Boolean adjacency matrix: A[i, j] iff edge (nodes[i], nodes[j]) exists.

    Parameters:
        nodes: Node list (defines row/column order)
        edges: (source, target) pairs
        directed: If False, symmetrize

    Information lost:
        - Edge weights and multiplicities (parallel edges collapse)

    Raises:
        ValueError: If an edge endpoint is not in nodes
    """
    node_to_idx = _index(nodes)
    cells = set()
    for u, v in edges:
        i, j = _lookup(node_to_idx, u, v)
        cells.add((i, j))
        if not directed:
            cells.add((j, i))

    n = len(nodes)
    return BooleanMatrix.from_function(lambda r, c: (r, c) in cells, n, n)


def weight_matrix(
    nodes: Sequence[Any],
    edges: Sequence[Tuple[Any, Any, float]],
    algebra: Ring = MINPLUS_ALGEBRA,
    directed: bool = True,
) -> Matrix:
    """Weight matrix over a tropical semiring.

    W[i, i] = one (staying put costs nothing), W[i, j] = weight of the edge,
    nil where there is no edge. Parallel edges are combined with plus, so
    min-plus keeps the lightest and max-plus the heaviest. Self-loops are
    combined with the diagonal the same way; a negative loop under min-plus
    is a negative cycle.

    With this diagonal, (W ** k)[i, j] is the best path weight from i to j
    using at most k edges.
    """
    node_to_idx = _index(nodes)
    n = len(nodes)
    data = [algebra.one if i == j else algebra.nil for i in range(n) for j in range(n)]

    for u, v, w in edges:
        i, j = _lookup(node_to_idx, u, v)
        data[i * n + j] = algebra.plus(data[i * n + j], w)
        if not directed and i != j:
            data[j * n + i] = algebra.plus(data[j * n + i], w)

    return Matrix(n, n, data, algebra)


def degree_vector(adjacency: BooleanMatrix, out_degree: bool = True) -> Tuple[int, ...]:
    """Out-degrees (row counts) or in-degrees (column counts) of A."""
    lines = adjacency.rows if out_degree else adjacency.cols
    return tuple(sum(line) for line in lines)


def build_graph_matrices(
    nodes: Sequence[Any],
    edges: Sequence[Tuple[Any, Any, float]],
    directed: bool = True,
    algebra: Optional[Ring] = None,
) -> GraphMatrices:
    """Adjacency, weights and degrees for a weighted edge list.

    Usage:
        gm = build_graph_matrices(["a", "b"], [("a", "b", 2.0)])
        gm.weights[0, 1]  # 2.0
    """
    adjacency = adjacency_matrix(nodes, [(u, v) for u, v, _ in edges], directed)
    weights = weight_matrix(nodes, edges, algebra or MINPLUS_ALGEBRA, directed)
    return GraphMatrices(
        nodes=list(nodes),
        adjacency=adjacency,
        weights=weights,
        out_degrees=degree_vector(adjacency),
    )
