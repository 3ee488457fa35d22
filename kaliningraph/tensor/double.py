"""Double-precision matrices over the real field.

Adds what only makes sense for real numbers:
- global normalizations (min-max, mean)
- thresholding into a BooleanMatrix
- numpy/scipy interop
- mixed arithmetic with BooleanMatrix (booleans widen to 0.0/1.0)
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple
import math
import warnings
import numpy as np
import scipy.sparse as sp

from kaliningraph.algebra.instances import DOUBLE_FIELD
from kaliningraph.tensor.boolean import BooleanMatrix
from kaliningraph.tensor.matrix import Matrix


@dataclass(frozen=True, eq=False, repr=False)
class DoubleMatrix(Matrix[float]):
    """Matrix of floats, DOUBLE_FIELD by default.

    Example:
        >>> a = DoubleMatrix.from_rows([[1, 2], [3, 4]])
        >>> b = DoubleMatrix.from_rows([[5, 6], [7, 8]])
        >>> (a * b).rows
        ((19.0, 22.0), (43.0, 50.0))
    """

    _default_algebra = DOUBLE_FIELD
    _element_type = float

    @classmethod
    def random(
        cls,
        num_rows: int,
        num_cols: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "DoubleMatrix":
        """Uniform [0, 1) entries."""
        num_cols = num_rows if num_cols is None else num_cols
        rng = rng if rng is not None else np.random.default_rng()
        return cls.from_rows(rng.random((num_rows, num_cols)))

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "DoubleMatrix":
        return cls.from_rows(np.asarray(array, dtype=float))

    def _promote(self, other: Matrix) -> Tuple[Matrix, Matrix]:
        if isinstance(other, BooleanMatrix):
            return self, other.to_double_matrix()
        return self, other

    def _degenerate(self, name: str) -> "DoubleMatrix":
        warnings.warn(
            f"{name}: all elements are equal (max == min); returning zeros",
            RuntimeWarning,
        )
        return self._new(self.num_rows, self.num_cols, [0.0] * len(self.data))

    def min_max_norm(self) -> "DoubleMatrix":
        """Rescale to [0, 1]: (e - min) / (max - min) over the whole matrix.

        A constant matrix has no range; it maps to all zeros with a
        RuntimeWarning instead of producing NaN.
        """
        lo, hi = min(self.data), max(self.data)
        if hi == lo:
            return self._degenerate("min_max_norm")
        span = hi - lo
        return self.elwise(lambda e: (e - lo) / span)

    def mean_norm(self) -> "DoubleMatrix":
        """Center on the global mean and divide by the global range."""
        lo, hi = min(self.data), max(self.data)
        if hi == lo:
            return self._degenerate("mean_norm")
        mean = math.fsum(self.data) / len(self.data)
        span = hi - lo
        return self.elwise(lambda e: (e - mean) / span)

    def to_bmat(
        self,
        threshold: Optional[float] = None,
        partition_fn: Optional[Callable[[float], bool]] = None,
    ) -> BooleanMatrix:
        """Threshold into a BooleanMatrix.

        Parameters:
            threshold: Cut-off; defaults to the midpoint of global min and max
            partition_fn: Predicate per element; defaults to e > threshold
        """
        if threshold is None:
            threshold = (max(self.data) + min(self.data)) / 2
        predicate = partition_fn if partition_fn is not None else (lambda e: e > threshold)
        return BooleanMatrix(
            self.num_rows, self.num_cols, [predicate(e) for e in self.data]
        )

    def to_sparse(self) -> sp.coo_matrix:
        """scipy COO copy; zeros are not stored."""
        return sp.coo_matrix(self.to_numpy(dtype=float))


def ACT_TANH(m: DoubleMatrix) -> DoubleMatrix:
    """Element-wise tanh activation."""
    return m.elwise(math.tanh)


def NORM_AVG(m: DoubleMatrix) -> DoubleMatrix:
    return m.mean_norm()
