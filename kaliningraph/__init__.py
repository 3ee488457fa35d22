"""kaliningraph: matrices over pluggable algebras.

Expose concise subpackages:
- algebra: Ring, Field and the named instances (Boolean, tropical, GF(2), reals)
- tensor: Matrix, FreeMatrix, BooleanMatrix, DoubleMatrix
- graph: adjacency/weight matrices from edge lists
- algorithms: transitive closure and shortest paths by fixpoint
"""

from kaliningraph.algebra import (
    BOOLEAN_ALGEBRA,
    DOUBLE_FIELD,
    GF2_ALGEBRA,
    INTEGER_FIELD,
    MAXPLUS_ALGEBRA,
    MINPLUS_ALGEBRA,
    XOR_ALGEBRA,
    Field,
    Ring,
)
from kaliningraph.exceptions import (
    ConstructionError,
    DimensionError,
    FixpointNotReached,
    IndexOutOfBounds,
    MatrixError,
    UnsupportedOperation,
)
from kaliningraph.tensor import BooleanMatrix, DoubleMatrix, FreeMatrix, Matrix

__all__ = [
    "Ring",
    "Field",
    "BOOLEAN_ALGEBRA",
    "XOR_ALGEBRA",
    "INTEGER_FIELD",
    "DOUBLE_FIELD",
    "MINPLUS_ALGEBRA",
    "MAXPLUS_ALGEBRA",
    "GF2_ALGEBRA",
    "Matrix",
    "FreeMatrix",
    "BooleanMatrix",
    "DoubleMatrix",
    "MatrixError",
    "DimensionError",
    "IndexOutOfBounds",
    "UnsupportedOperation",
    "ConstructionError",
    "FixpointNotReached",
]
