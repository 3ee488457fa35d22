"""tensor package: generic Matrix over an algebra and its concrete flavors."""

from kaliningraph.tensor.matrix import FreeMatrix, Matrix, SparseTensor, dot, vector_dot
from kaliningraph.tensor.boolean import BooleanMatrix
from kaliningraph.tensor.double import ACT_TANH, NORM_AVG, DoubleMatrix

__all__ = [
    "Matrix",
    "FreeMatrix",
    "SparseTensor",
    "BooleanMatrix",
    "DoubleMatrix",
    "dot",
    "vector_dot",
    "ACT_TANH",
    "NORM_AVG",
]
