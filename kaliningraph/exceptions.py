"""Error taxonomy for matrix and algebra operations.

Every error derives from MatrixError and from the builtin exception that
describes the same failure, so code that catches ValueError or IndexError
keeps working.
"""

from typing import Tuple


class MatrixError(Exception):
    """Base class for all errors raised by kaliningraph."""


class DimensionError(MatrixError, ValueError):
    """Shape precondition violated (add, multiply, construction)."""


class IndexOutOfBounds(MatrixError, IndexError):
    """Row or column index outside the matrix."""


class UnsupportedOperation(MatrixError, NotImplementedError):
    """Operation needs an algebra (or operator) that is not available."""


class ConstructionError(MatrixError, ValueError):
    """Input cannot be interpreted as a matrix of the requested flavor."""


class FixpointNotReached(MatrixError, RuntimeError):
    """Iteration cap exceeded before two consecutive iterates agreed."""


def format_shapes(left: Tuple[int, int], right: Tuple[int, int]) -> str:
    """Render two shapes as 'r1,c1 . r2,c2' for error messages."""
    return f"{left[0]},{left[1]} . {right[0]},{right[1]}"
