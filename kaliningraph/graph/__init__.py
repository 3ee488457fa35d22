"""graph package: adjacency and tropical weight matrices built from edge lists."""

from kaliningraph.graph.matrices import (
    GraphMatrices,
    adjacency_matrix,
    build_graph_matrices,
    degree_vector,
    weight_matrix,
)

__all__ = [
    "GraphMatrices",
    "adjacency_matrix",
    "weight_matrix",
    "degree_vector",
    "build_graph_matrices",
]
